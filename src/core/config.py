"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Permite que adaptadores (HTTP) lean config de forma consistente.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Annotated

from pydantic import AliasChoices, Field, StringConstraints
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.errors import MissingTokenError

DEFAULT_MODELS: tuple[str, ...] = (
    "cardiffnlp/twitter-roberta-base-sentiment-latest",
    "distilbert-base-uncased-finetuned-sst-2-english",
    "cardiffnlp/twitter-roberta-base-sentiment",
    "nlptown/bert-base-multilingual-uncased-sentiment",
)

TOKEN_ENV_VAR = "HUGGINGFACE_TOKEN"

ModelId = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "hf-sentiment"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "hf-sentiment"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "hf-sentiment"
    return Path.home() / ".config" / "hf-sentiment"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _parse_env_lines(text: str) -> dict[str, str]:
    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key:
            data[key] = value
    return data


def write_user_env_vars(values: dict[str, str], *, env_path: Path | None = None) -> Path:
    """Escribe/actualiza variables en el .env global del usuario."""

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# hf-sentiment user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Configuración central de la aplicación.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar el Core con lógica.
    - Un único contrato de configuración para CLI/adapters.
    """

    model_config = SettingsConfigDict(
        env_prefix="HF_SENTIMENT_",
        extra="ignore",
        case_sensitive=False,
        populate_by_name=True,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    huggingface_token: str | None = Field(
        default=None,
        validation_alias=AliasChoices(TOKEN_ENV_VAR, "HF_SENTIMENT_TOKEN"),
        description="Token Bearer de Hugging Face.",
    )
    models: list[ModelId] = Field(
        default_factory=lambda: list(DEFAULT_MODELS),
        min_length=1,
        description="Modelos candidatos, en orden de preferencia.",
    )

    inference_base_url: str = Field(
        default="https://api-inference.huggingface.co/models",
        min_length=8,
        description="Base URL de la Inference API (se añade /<model_id>).",
    )
    whoami_url: str = Field(
        default="https://huggingface.co/api/whoami",
        min_length=8,
        description="Endpoint de identidad usado en el preflight del token.",
    )

    http_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Timeout por request (segundos).",
    )
    cold_start_wait_seconds: float = Field(
        default=10.0,
        ge=0,
        description="Espera antes del único reintento cuando el modelo responde 503.",
    )
    user_agent: str = Field(
        default="hf-sentiment/0.1",
        min_length=1,
        description="User-Agent para las peticiones HTTP.",
    )

    warmup_text: str = Field(
        default="I love this!",
        description="Frase de prueba analizada al arrancar el modo interactivo (vacía = desactivado).",
    )
    log_level: str = Field(
        default="WARNING",
        description="Nivel de logging (DEBUG, INFO, WARNING, ERROR, CRITICAL).",
    )

    def require_token(self) -> str:
        """Devuelve el token o lanza `MissingTokenError` si falta o está en blanco."""

        token = (self.huggingface_token or "").strip()
        if not token:
            raise MissingTokenError(f"{TOKEN_ENV_VAR} not found in environment or .env file")
        return token

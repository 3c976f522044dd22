"""Adaptador para la Hugging Face Inference API.

Responsabilidad:
- Una llamada HTTP por método (`query`, `whoami`); sin reintentos aquí.
- Convertir cualquier fallo (status no-2xx, cuerpo no JSON, error de red) en
  un valor del dominio. Nada se propaga como excepción.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from adapters.http_client import build_client, describe_response_body, describe_transport_error
from core.config import AppSettings
from core.domain.models import AttemptFailure, AttemptResult, AttemptSuccess, IdentityCheck
from core.interfaces.inference import InferenceBackend

log = logging.getLogger(__name__)


class HuggingFaceInference(InferenceBackend):
    """Backend HTTP sobre un `httpx.Client` propio (una sesión de CLI)."""

    def __init__(
        self,
        *,
        token: str,
        settings: AppSettings | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._client = client or build_client(self._settings, token=token)

    def __enter__(self) -> "HuggingFaceInference":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def model_url(self, model: str) -> str:
        return f"{self._settings.inference_base_url.rstrip('/')}/{model}"

    def query(self, *, model: str, text: str) -> AttemptResult:
        url = self.model_url(model)
        try:
            response = self._client.post(url, json={"inputs": text})
        except httpx.HTTPError as exc:
            log.debug("Transport error for %s: %r", model, exc)
            return AttemptFailure(model=model, error=describe_transport_error(exc))

        status = response.status_code
        if not response.is_success:
            return AttemptFailure(
                model=model,
                status_code=status,
                error=f"{status}: {describe_response_body(response)}",
            )

        try:
            payload: Any = response.json()
        except ValueError:
            return AttemptFailure(
                model=model,
                status_code=status,
                error=f"{status}: response body is not valid JSON",
            )
        return AttemptSuccess(model=model, payload=payload)

    def whoami(self) -> IdentityCheck:
        try:
            response = self._client.get(self._settings.whoami_url)
        except httpx.HTTPError as exc:
            return IdentityCheck(ok=False, error=describe_transport_error(exc))

        status = response.status_code
        if not response.is_success:
            return IdentityCheck(ok=False, status_code=status, error=describe_response_body(response))

        try:
            data = response.json()
        except ValueError:
            return IdentityCheck(ok=False, status_code=status, error="response body is not valid JSON")

        name = data.get("name") if isinstance(data, dict) else None
        if not isinstance(name, str) or not name:
            return IdentityCheck(ok=False, status_code=status, error="response has no 'name' field")
        return IdentityCheck(ok=True, name=name, status_code=status)

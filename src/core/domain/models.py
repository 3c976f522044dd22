"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Nos da validación estricta y documentación autocontenida (Field) sin acoplar
  el Core a librerías de I/O.
- El resultado de cada intento HTTP se normaliza aquí como una unión etiquetada,
  así el prober y la CLI nunca inspeccionan excepciones ni respuestas crudas.

Nota:
- Estos modelos describen *qué* es la información, no *cómo* se obtiene.
"""

from __future__ import annotations

from typing import Any, Literal, Union

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

COLD_START_STATUS = 503

EXHAUSTED_MESSAGE = "All models failed. Please check your internet connection and API token."


class AttemptSuccess(BaseModel):
    """Respuesta 2xx con cuerpo JSON de un modelo candidato."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["success"] = "success"
    model: str = Field(..., min_length=1, description="Identificador del modelo que respondió.")
    payload: Any = Field(default=None, description="Cuerpo JSON decodificado (forma libre).")
    retried: bool = Field(
        default=False,
        description="True si el éxito llegó en el reintento tras un 503.",
    )


class AttemptFailure(BaseModel):
    """Fallo de un intento: status no-2xx, cuerpo inválido o error de transporte."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["failure"] = "failure"
    model: str = Field(..., min_length=1)
    error: str = Field(..., description="'<status>: <body>' o el mensaje del error de transporte.")
    status_code: int | None = Field(
        default=None,
        description="Status HTTP si hubo respuesta; None en errores de transporte.",
    )

    @property
    def is_cold_start(self) -> bool:
        return self.status_code == COLD_START_STATUS


AttemptResult = Union[AttemptSuccess, AttemptFailure]


class ProbeExhausted(BaseModel):
    """Ningún candidato respondió con éxito.

    Lleva los fallos de cada intento (diagnóstico), nunca un payload parcial.
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["exhausted"] = "exhausted"
    failures: tuple[AttemptFailure, ...] = Field(default_factory=tuple)

    @property
    def message(self) -> str:
        return EXHAUSTED_MESSAGE


ProbeOutcome = Union[AttemptSuccess, ProbeExhausted]


class LabeledScore(BaseModel):
    """Un par label/score de un clasificador de texto."""

    label: str
    score: float = Field(..., ge=0.0, le=1.0)


class LabeledScoreList(BaseModel):
    """Forma estándar de clasificación: `[[{label, score}, ...]]`."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["labeled_scores"] = "labeled_scores"
    scores: tuple[LabeledScore, ...]


class SingleObject(BaseModel):
    """Lista no vacía cuyo primer elemento no es una lista de label/score."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["single_object"] = "single_object"
    value: Any = None


class OpaquePayload(BaseModel):
    """Cualquier otra forma; se muestra tal cual."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["opaque"] = "opaque"
    value: Any = None


PayloadShape = Union[LabeledScoreList, SingleObject, OpaquePayload]


class IdentityCheck(BaseModel):
    """Resultado de la consulta `whoami` usada en el preflight del token."""

    ok: bool
    name: str | None = None
    status_code: int | None = None
    error: str | None = None

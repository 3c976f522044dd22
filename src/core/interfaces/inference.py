"""Contrato del backend de inferencia.

Por qué Protocol:
- Define un contrato estructural (duck typing) sin herencia rígida.
- Permite que el prober y el preflight se prueben con backends en memoria
  sin acoplar el Core al adaptador HTTP concreto.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from core.domain.models import AttemptResult, IdentityCheck


@runtime_checkable
class InferenceBackend(Protocol):
    """Contrato mínimo para hablar con la API remota.

    Reglas de diseño:
    - Ningún método lanza por errores remotos o de red: todo fallo se devuelve
      como valor (`AttemptFailure` / `IdentityCheck(ok=False)`).
    - Una llamada = una petición HTTP; los reintentos son cosa del prober.
    """

    def query(self, *, model: str, text: str) -> AttemptResult:
        """Envía `text` al modelo `model` y devuelve el resultado normalizado."""

        ...

    def whoami(self) -> IdentityCheck:
        """Consulta la identidad asociada al token."""

        ...

"""Wrapper de httpx.

Por qué un wrapper:
- Estandariza timeouts, headers (User-Agent, Bearer) y logging.
- Facilita testeo: se puede inyectar un `httpx.MockTransport`.
"""

from __future__ import annotations

import json
import logging

import httpx

from core.config import AppSettings

log = logging.getLogger(__name__)


def build_client(
    settings: AppSettings | None = None,
    *,
    token: str | None = None,
    transport: httpx.BaseTransport | None = None,
) -> httpx.Client:
    """Crea un `httpx.Client` síncrono con defaults seguros.

    Por qué síncrono:
    - La CLI hace una sola petición a la vez (probing secuencial), no hay nada
      que solapar.
    """

    settings = settings or AppSettings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": "application/json",
        "Content-Type": "application/json",
    }
    if token:
        headers["Authorization"] = f"Bearer {token}"
    log.debug("Building HTTP client (timeout=%.1fs)", settings.http_timeout_seconds)
    return httpx.Client(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=True,
        headers=headers,
        transport=transport,
    )


def describe_response_body(response: httpx.Response) -> str:
    """Texto compacto del cuerpo: JSON re-serializado si se puede, si no el texto."""

    try:
        return json.dumps(response.json(), ensure_ascii=False)
    except ValueError:
        return response.text.strip()


def describe_transport_error(exc: httpx.HTTPError) -> str:
    message = str(exc).strip()
    return message or exc.__class__.__name__

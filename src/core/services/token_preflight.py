"""Non-blocking token preflight.

The identity lookup is informational only: whatever it returns, the caller
proceeds to the real inference calls, which are the actual validation.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

from core.domain.models import IdentityCheck
from core.interfaces.inference import InferenceBackend

log = logging.getLogger(__name__)


@dataclass
class PreflightHooks:
    """Optional callbacks for UI layers."""

    valid: Callable[[str], None] | None = None
    invalid: Callable[[IdentityCheck], None] | None = None


def check_token(backend: InferenceBackend, *, hooks: PreflightHooks | None = None) -> bool:
    """Look up the token identity once and report it. Always returns True."""

    hooks = hooks or PreflightHooks()
    identity = backend.whoami()

    if identity.ok:
        name = identity.name or "<unknown>"
        log.info("Token valid for user %s", name)
        if hooks.valid:
            hooks.valid(name)
    else:
        log.info(
            "Token validation failed (status=%s): %s; proceeding anyway",
            identity.status_code,
            identity.error,
        )
        if hooks.invalid:
            hooks.invalid(identity)
    return True

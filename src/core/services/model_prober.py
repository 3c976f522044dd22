"""Sequential model probing with a single cold-start retry.

Candidates are tried strictly in order, one request at a time. The first 2xx
wins; a 503 (model still loading) earns exactly one delayed retry against the
same model; any other failure moves straight on to the next candidate. UI
concerns (printing, spinners) stay out of here and are reached through
`ProbeHooks`.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, Sequence

from core.domain.models import AttemptFailure, AttemptSuccess, ProbeExhausted, ProbeOutcome
from core.interfaces.inference import InferenceBackend

log = logging.getLogger(__name__)


@dataclass
class ProbeHooks:
    """Optional callbacks for UI layers (progress per attempt)."""

    attempt_started: Callable[[str, bool], None] | None = None
    attempt_failed: Callable[[AttemptFailure], None] | None = None
    cold_start_wait: Callable[[str, float], None] | None = None
    succeeded: Callable[[AttemptSuccess], None] | None = None


def probe(
    text: str,
    *,
    backend: InferenceBackend,
    models: Sequence[str],
    cold_start_wait_seconds: float = 10.0,
    hooks: ProbeHooks | None = None,
    sleep: Callable[[float], None] = time.sleep,
) -> ProbeOutcome:
    """Return the first successful attempt, or `ProbeExhausted` if none succeeds."""

    hooks = hooks or ProbeHooks()
    failures: list[AttemptFailure] = []

    for index, model in enumerate(models):
        retried = False
        while True:
            log.debug("Probing candidate %d/%d: %s (retry=%s)", index + 1, len(models), model, retried)
            if hooks.attempt_started:
                hooks.attempt_started(model, retried)

            result = backend.query(model=model, text=text)

            if isinstance(result, AttemptSuccess):
                if retried and not result.retried:
                    result = result.model_copy(update={"retried": True})
                log.info("Model %s answered%s", model, " after retry" if retried else "")
                if hooks.succeeded:
                    hooks.succeeded(result)
                return result

            failures.append(result)
            log.info("Model %s failed: %s", model, result.error)
            if hooks.attempt_failed:
                hooks.attempt_failed(result)

            if result.is_cold_start and not retried:
                log.info("Model %s is loading; waiting %.1fs before one retry", model, cold_start_wait_seconds)
                if hooks.cold_start_wait:
                    hooks.cold_start_wait(model, cold_start_wait_seconds)
                sleep(cold_start_wait_seconds)
                retried = True
                continue
            break

    log.info("All %d candidate models failed", len(models))
    return ProbeExhausted(failures=tuple(failures))

from __future__ import annotations

from typing import Any, Callable

import httpx
import pytest

from core.config import DEFAULT_MODELS, AppSettings
from core.domain.models import AttemptFailure, AttemptResult, AttemptSuccess, IdentityCheck


class FakeBackend:
    """In-memory InferenceBackend driven by a per-model script of results."""

    def __init__(
        self,
        script: dict[str, list[AttemptResult]] | None = None,
        identity: IdentityCheck | None = None,
    ) -> None:
        self.script = {model: list(results) for model, results in (script or {}).items()}
        self.identity = identity or IdentityCheck(ok=True, name="tester", status_code=200)
        self.calls: list[tuple[str, str]] = []
        self.whoami_calls = 0
        self.closed = False

    def query(self, *, model: str, text: str) -> AttemptResult:
        self.calls.append((model, text))
        queue = self.script.get(model)
        if not queue:
            return AttemptFailure(model=model, status_code=404, error='404: {"error": "not scripted"}')
        return queue.pop(0)

    def whoami(self) -> IdentityCheck:
        self.whoami_calls += 1
        return self.identity

    def close(self) -> None:
        self.closed = True


def ok(model: str, payload: Any = None) -> AttemptSuccess:
    if payload is None:
        payload = [[{"label": "LABEL_POSITIVE", "score": 0.987}]]
    return AttemptSuccess(model=model, payload=payload)


def fail(model: str, status: int | None = 500, body: str = '{"error": "boom"}') -> AttemptFailure:
    if status is None:
        return AttemptFailure(model=model, error="connection refused")
    return AttemptFailure(model=model, status_code=status, error=f"{status}: {body}")


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch, tmp_path):
    # Keep real tokens and project .env files out of the tests.
    for name in ("HUGGINGFACE_TOKEN", "HF_SENTIMENT_TOKEN", "HF_SENTIMENT_MODELS", "HF_SENTIMENT_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def models() -> list[str]:
    return list(DEFAULT_MODELS)


@pytest.fixture
def make_settings() -> Callable[..., AppSettings]:
    def _make(**overrides: Any) -> AppSettings:
        values: dict[str, Any] = {
            "huggingface_token": "hf_test_token",
            "cold_start_wait_seconds": 10.0,
        }
        values.update(overrides)
        return AppSettings(_env_file=None, **values)

    return _make


@pytest.fixture
def settings(make_settings) -> AppSettings:
    return make_settings()


@pytest.fixture
def fake_backend() -> Callable[..., FakeBackend]:
    return FakeBackend


@pytest.fixture
def success() -> Callable[..., AttemptSuccess]:
    return ok


@pytest.fixture
def failure() -> Callable[..., AttemptFailure]:
    return fail


@pytest.fixture
def mock_client() -> Callable[..., httpx.Client]:
    """Build an httpx.Client whose requests are answered by `handler`."""

    def _make(handler: Callable[[httpx.Request], httpx.Response], settings: AppSettings | None = None) -> httpx.Client:
        from adapters.http_client import build_client

        return build_client(
            settings or AppSettings(_env_file=None),
            token="hf_test_token",
            transport=httpx.MockTransport(handler),
        )

    return _make

import pytest
from typer.testing import CliRunner

import cli.main as cli_main
from core.config import AppSettings

runner = CliRunner()


@pytest.fixture
def wire(monkeypatch, fake_backend):
    """Point the CLI at the given settings and a FakeBackend; returns (backend, built tokens)."""

    built = []

    def _wire(settings, backend=None):
        backend = backend or fake_backend()
        monkeypatch.setattr(cli_main, "load_settings", lambda: settings)

        def _build(_settings, token):
            built.append(token)
            return backend

        monkeypatch.setattr(cli_main, "build_backend", _build)
        return backend, built

    return _wire


def test_missing_token_makes_no_http_call(wire):
    backend, built = wire(AppSettings(_env_file=None))

    result = runner.invoke(cli_main.app, ["chat"], input="hello\nquit\n")

    assert result.exit_code == 1
    assert "HUGGINGFACE_TOKEN" in result.output
    assert built == []
    assert backend.calls == []
    assert backend.whoami_calls == 0


def test_missing_token_blocks_one_shot_analysis(wire):
    backend, built = wire(AppSettings(_env_file=None, huggingface_token="  "))

    result = runner.invoke(cli_main.app, ["analyze", "hello"])

    assert result.exit_code == 1
    assert built == []


@pytest.mark.parametrize("command", ["quit", "QUIT", "Exit"])
def test_chat_quits_case_insensitively(wire, settings, command):
    backend, built = wire(settings)

    result = runner.invoke(cli_main.app, ["chat", "--no-warmup"], input=f"{command}\n")

    assert result.exit_code == 0
    assert "Goodbye" in result.output
    assert built == ["hf_test_token"]
    assert backend.whoami_calls == 1
    assert backend.calls == []
    assert backend.closed


def test_chat_blank_lines_never_reach_the_network(wire, settings):
    backend, _ = wire(settings)

    result = runner.invoke(cli_main.app, ["chat", "--no-warmup"], input="\n   \nexit\n")

    assert result.exit_code == 0
    assert result.output.count("Please enter a valid sentence.") == 2
    assert backend.calls == []


def test_default_invocation_runs_warmup_then_loop(wire, settings, fake_backend, success):
    models = settings.models
    backend, _ = wire(settings, fake_backend({models[0]: [success(models[0]), success(models[0])]}))

    result = runner.invoke(cli_main.app, [], input="So good\nquit\n")

    assert result.exit_code == 0, result.output
    assert backend.calls == [(models[0], "I love this!"), (models[0], "So good")]
    assert "Token valid for user: tester" in result.output
    assert "POSITIVE: 98.70%" in result.output


def test_failed_identity_check_does_not_block_chat(wire, settings, fake_backend, success):
    from core.domain.models import IdentityCheck

    models = settings.models
    backend = fake_backend(
        {models[0]: [success(models[0])]},
        identity=IdentityCheck(ok=False, status_code=401, error='{"error": "Invalid credentials"}'),
    )
    wire(settings, backend)

    result = runner.invoke(cli_main.app, ["chat", "--no-warmup"], input="nice\nquit\n")

    assert result.exit_code == 0
    assert "Token validation failed" in result.output
    assert "Proceeding anyway" in result.output
    assert backend.calls == [(models[0], "nice")]


def test_chat_keeps_prompting_after_exhaustion(wire, make_settings):
    settings = make_settings(models=["org/a"])
    backend, _ = wire(settings)

    result = runner.invoke(cli_main.app, ["chat", "--no-warmup"], input="first\nsecond\nquit\n")

    assert result.exit_code == 0
    assert result.output.count("All models failed") == 2
    assert backend.calls == [("org/a", "first"), ("org/a", "second")]


def test_analyze_prints_formatted_result(wire, settings, fake_backend, success):
    models = settings.models
    backend, _ = wire(settings, fake_backend({models[0]: [success(models[0])]}))

    result = runner.invoke(cli_main.app, ["analyze", "I", "love", "this!"])

    assert result.exit_code == 0, result.output
    assert backend.calls == [(models[0], "I love this!")]
    assert f"Success with model: {models[0]}" in result.output
    assert 'Sentiment Result for: "I love this!"' in result.output
    assert "POSITIVE: 98.70%" in result.output


def test_analyze_reports_success_after_cold_start_retry(wire, make_settings, fake_backend, failure, success):
    settings = make_settings(cold_start_wait_seconds=0)
    model = settings.models[0]
    backend, _ = wire(settings, fake_backend({model: [failure(model, 503), success(model)]}))

    result = runner.invoke(cli_main.app, ["analyze", "hello"])

    assert result.exit_code == 0, result.output
    assert backend.calls == [(model, "hello")] * 2
    assert "Model is loading" in result.output
    assert f"Success with model after retry: {model}" in result.output
    assert "POSITIVE: 98.70%" in result.output
    assert "All models failed" not in result.output


def test_analyze_json_prints_raw_payload(wire, settings, fake_backend, success):
    models = settings.models
    wire(settings, fake_backend({models[0]: [success(models[0], {"unexpected": "shape"})]}))

    result = runner.invoke(cli_main.app, ["analyze", "--json", "hello"])

    assert result.exit_code == 0
    assert '"unexpected": "shape"' in result.output


def test_analyze_exits_non_zero_when_every_model_fails(wire, make_settings, fake_backend, failure):
    settings = make_settings(models=["org/a", "org/b"])
    backend, _ = wire(settings, fake_backend({"org/a": [failure("org/a", 500)], "org/b": [failure("org/b", None)]}))

    result = runner.invoke(cli_main.app, ["analyze", "hello"])

    assert result.exit_code == 1
    assert "All models failed" in result.output
    assert "Failed with org/b: connection refused" in result.output
    assert len(backend.calls) == 2


def test_models_lists_candidates_in_order(wire, make_settings):
    wire(make_settings(models=["org/first", "org/second"]))

    result = runner.invoke(cli_main.app, ["models"])

    assert result.exit_code == 0
    assert result.output.index("org/first") < result.output.index("org/second")


def test_doctor_reports_missing_token_without_http(wire, monkeypatch):
    import cli.doctor as doctor

    wire(AppSettings(_env_file=None))
    monkeypatch.setattr(doctor, "_check_identity", lambda *_a: pytest.fail("no HTTP expected"))

    result = runner.invoke(cli_main.app, ["doctor", "run"])

    assert result.exit_code == 0
    assert "MISSING" in result.output
    assert "SKIPPED" in result.output


def test_doctor_shows_identity(wire, settings, monkeypatch):
    import cli.doctor as doctor
    from core.domain.models import IdentityCheck

    wire(settings)
    monkeypatch.setattr(doctor, "_check_identity", lambda *_a: IdentityCheck(ok=True, name="alice", status_code=200))

    result = runner.invoke(cli_main.app, ["doctor", "run"])

    assert result.exit_code == 0
    assert "user: alice" in result.output
    assert "hf_test_token" not in result.output


def test_doctor_setup_token_writes_user_env(wire, settings, monkeypatch, tmp_path):
    import cli.doctor as doctor
    from core.config import write_user_env_vars

    wire(settings)
    env_path = tmp_path / "user" / ".env"
    monkeypatch.setattr(doctor, "write_user_env_vars", lambda values: write_user_env_vars(values, env_path=env_path))

    result = runner.invoke(cli_main.app, ["doctor", "setup-token"], input="hf_saved\n")

    assert result.exit_code == 0
    assert "HUGGINGFACE_TOKEN=hf_saved" in env_path.read_text(encoding="utf-8")


def test_models_renders_bracketed_ids_literally(wire, make_settings):
    wire(make_settings(models=["org/[/x]", "org/[bold]b"]))

    result = runner.invoke(cli_main.app, ["models"])

    assert result.exit_code == 0, result.output
    assert "org/[/x]" in result.output
    assert "org/[bold]b" in result.output


def test_doctor_renders_identity_error_literally(wire, settings, monkeypatch):
    import cli.doctor as doctor
    from core.domain.models import IdentityCheck

    wire(settings)
    failed = IdentityCheck(ok=False, status_code=401, error="[/x] bad")
    monkeypatch.setattr(doctor, "_check_identity", lambda *_a: failed)

    result = runner.invoke(cli_main.app, ["doctor", "run"])

    assert result.exit_code == 0, result.output
    assert "FAIL" in result.output
    assert "[/x] bad" in result.output


@pytest.mark.parametrize("raw", ["org/a,org/b", '["", "org/b"]'])
def test_invalid_models_env_is_a_configuration_error(monkeypatch, raw):
    monkeypatch.setenv("HF_SENTIMENT_MODELS", raw)

    result = runner.invoke(cli_main.app, ["models"])

    assert result.exit_code == 1
    assert isinstance(result.exception, SystemExit)

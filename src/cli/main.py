"""Typer application: `hf-sentiment`.

Commands:
- (no command) / `chat`: token preflight, warm-up analysis, interactive loop.
- `analyze TEXT...`: one-shot analysis.
- `models`: list candidate models in probe order.
- `doctor`: diagnostics and token setup (see `cli.doctor`).
"""

from __future__ import annotations

import logging
from typing import Optional

import typer
from pydantic import ValidationError
from pydantic_settings import SettingsError
from rich.console import Console

from adapters.hf_inference import HuggingFaceInference
from cli import doctor
from cli.interactive import run_interactive
from cli.ui_components import (
    build_models_table,
    build_preflight_hooks,
    build_probe_hooks,
    print_banner,
    say,
)
from core.config import TOKEN_ENV_VAR, AppSettings
from core.domain.models import AttemptSuccess, ProbeOutcome
from core.errors import MissingTokenError
from core.interfaces.inference import InferenceBackend
from core.logging_setup import configure_logging
from core.services.model_prober import probe
from core.services.result_formatter import format_payload, to_pretty_json
from core.services.token_preflight import check_token

log = logging.getLogger(__name__)

app = typer.Typer(
    help="Sentiment analysis through the Hugging Face Inference API, with model fallback.",
    invoke_without_command=True,
    add_completion=False,
)
app.add_typer(doctor.app, name="doctor")

_console = Console()


def load_settings() -> AppSettings:
    try:
        return AppSettings()
    except (ValidationError, SettingsError) as exc:
        say(_console, f"❌ Invalid configuration:\n{exc}", style="red", err=True)
        raise typer.Exit(code=1) from exc


def build_backend(settings: AppSettings, token: str) -> InferenceBackend:
    return HuggingFaceInference(token=token, settings=settings)


def _require_token(settings: AppSettings) -> str:
    try:
        return settings.require_token()
    except MissingTokenError as exc:
        log.debug("%s", exc)
        say(_console, f"❌ Error: {exc}", style="bold red", err=True)
        say(_console, "Please add your Hugging Face token to the .env file:")
        say(_console, f"{TOKEN_ENV_VAR}=your_token_here")
        say(_console, "or run: hf-sentiment doctor setup-token", style="dim")
        raise typer.Exit(code=1) from exc


def _close(backend: InferenceBackend) -> None:
    close = getattr(backend, "close", None)
    if callable(close):
        close()


def analyze_and_print(
    text: str,
    *,
    backend: InferenceBackend,
    settings: AppSettings,
    console: Console,
    as_json: bool = False,
) -> ProbeOutcome:
    """Probe the candidates for `text` and print the outcome."""

    say(console, "🔄 Analyzing sentiment...")
    outcome = probe(
        text,
        backend=backend,
        models=settings.models,
        cold_start_wait_seconds=settings.cold_start_wait_seconds,
        hooks=build_probe_hooks(console),
    )

    if isinstance(outcome, AttemptSuccess):
        if as_json:
            say(console, to_pretty_json(outcome.payload))
        else:
            say(console, f'\n📊 Sentiment Result for: "{text}"', style="bold")
            say(console, format_payload(outcome.payload))
    else:
        say(console, f"❌ {outcome.message}", style="bold red")
    return outcome


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    settings = load_settings()
    configure_logging("DEBUG" if verbose else settings.log_level)
    ctx.obj = settings
    if ctx.invoked_subcommand is None:
        chat(ctx, warmup=True)


@app.command()
def chat(
    ctx: typer.Context,
    warmup: bool = typer.Option(True, "--warmup/--no-warmup", help="Analyze a test sentence before prompting."),
) -> None:
    """Interactive mode: type sentences, get sentiment back."""

    settings: AppSettings = ctx.obj or load_settings()
    print_banner(_console)
    token = _require_token(settings)

    backend = build_backend(settings, token)
    try:
        say(_console, "🔐 Validating API token...")
        check_token(backend, hooks=build_preflight_hooks(_console))

        if warmup and settings.warmup_text.strip():
            say(_console, "🧪 Testing API with a simple sentence...")
            analyze_and_print(settings.warmup_text, backend=backend, settings=settings, console=_console)

        run_interactive(
            read_line=_console.input,
            analyze=lambda text: analyze_and_print(text, backend=backend, settings=settings, console=_console),
            console=_console,
        )
    finally:
        _close(backend)


@app.command()
def analyze(
    ctx: typer.Context,
    text: list[str] = typer.Argument(..., help="Sentence to analyze (words are joined with spaces)."),
    as_json: bool = typer.Option(False, "--json", help="Print the raw model payload as JSON."),
) -> None:
    """Analyze a single sentence and exit (exit code 1 if every model fails)."""

    settings: AppSettings = ctx.obj or load_settings()
    sentence = " ".join(text).strip()
    if not sentence:
        raise typer.BadParameter("text must not be empty")
    token = _require_token(settings)

    backend = build_backend(settings, token)
    try:
        outcome = analyze_and_print(sentence, backend=backend, settings=settings, console=_console, as_json=as_json)
    finally:
        _close(backend)

    if not isinstance(outcome, AttemptSuccess):
        raise typer.Exit(code=1)


@app.command()
def models(ctx: typer.Context) -> None:
    """List candidate models in the order they are tried."""

    settings: AppSettings = ctx.obj or load_settings()
    _console.print(build_models_table(settings.models))


def run(argv: Optional[list[str]] = None) -> None:
    app(args=argv)

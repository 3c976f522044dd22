"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en múltiples comandos.
"""

from __future__ import annotations

from typing import Sequence

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import AttemptFailure, AttemptSuccess, IdentityCheck
from core.services.model_prober import ProbeHooks
from core.services.token_preflight import PreflightHooks


def say(console: Console, message: str, *, style: str | None = None, err: bool = False) -> None:
    """Imprime texto literal (sin markup) para que JSON o ids con `[...]` no se interpreten."""

    target = Console(stderr=True) if err else console
    target.print(Text(message, style=style or ""), soft_wrap=True)


def print_banner(console: Console) -> None:
    """Imprime el banner de bienvenida."""

    title = Text("🤖 AI Sentiment Analysis Tool", style="bold cyan")
    subtitle = Text("Hugging Face Inference API • model fallback", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_models_table(models: Sequence[str]) -> Table:
    """Tabla de modelos candidatos en orden de prueba."""

    table = Table(title="Candidate models")
    table.add_column("#", style="cyan", no_wrap=True, justify="right")
    table.add_column("Model", style="white")
    for position, model in enumerate(models, start=1):
        table.add_row(str(position), Text(model))
    return table


def build_probe_hooks(console: Console) -> ProbeHooks:
    """Hooks del prober que narran cada intento en consola."""

    def attempt_started(model: str, is_retry: bool) -> None:
        if not is_retry:
            say(console, f"🔍 Trying model: {model}")

    def attempt_failed(failure: AttemptFailure) -> None:
        say(console, f"❌ Failed with {failure.model}: {failure.error}", style="red")

    def cold_start_wait(model: str, seconds: float) -> None:
        say(console, f"⏳ Model is loading, waiting {seconds:g} seconds...", style="yellow")

    def succeeded(success: AttemptSuccess) -> None:
        suffix = " after retry" if success.retried else ""
        say(console, f"✅ Success with model{suffix}: {success.model}", style="green")

    return ProbeHooks(
        attempt_started=attempt_started,
        attempt_failed=attempt_failed,
        cold_start_wait=cold_start_wait,
        succeeded=succeeded,
    )


def build_preflight_hooks(console: Console) -> PreflightHooks:
    def valid(name: str) -> None:
        say(console, f"✅ Token valid for user: {name}", style="green")

    def invalid(identity: IdentityCheck) -> None:
        say(console, "❌ Token validation failed:", style="red")
        if identity.status_code is not None:
            say(console, f"Status: {identity.status_code}", style="red")
            say(console, f"Data: {identity.error}", style="red")
        else:
            say(console, f"Error: {identity.error}", style="red")
        say(console, "⚠️ Proceeding anyway to test the inference API directly...", style="yellow")

    return PreflightHooks(valid=valid, invalid=invalid)

"""Doctor command for environment diagnostics."""

from __future__ import annotations

import typer
from rich.console import Console
from rich.table import Table
from rich.text import Text

from adapters.hf_inference import HuggingFaceInference
from core.config import TOKEN_ENV_VAR, AppSettings, get_user_env_file, write_user_env_vars
from core.domain.models import IdentityCheck
from core.errors import MissingTokenError

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


def _check_identity(settings: AppSettings, token: str) -> IdentityCheck:
    with HuggingFaceInference(token=token, settings=settings) as backend:
        return backend.whoami()


def _mask(token: str) -> str:
    if len(token) <= 8:
        return "*" * len(token)
    return f"{token[:4]}…{token[-4:]}"


@app.command()
def run(ctx: typer.Context) -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings: AppSettings = ctx.obj or AppSettings()

    table = Table(title="hf-sentiment Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white", no_wrap=True)
    table.add_column("Details", style="dim")

    token: str | None
    try:
        token = settings.require_token()
        table.add_row("Token", "OK", Text(_mask(token)))
    except MissingTokenError as exc:
        token = None
        table.add_row("Token", "MISSING", Text(str(exc)))

    # Identity (best-effort, never blocks analysis)
    if token:
        identity = _check_identity(settings, token)
        if identity.ok:
            table.add_row("whoami", "OK", Text(f"user: {identity.name}"))
        else:
            status = f"HTTP {identity.status_code}: " if identity.status_code else ""
            table.add_row("whoami", "FAIL", Text(f"{status}{identity.error}"))
    else:
        table.add_row("whoami", "SKIPPED", "No token set")

    table.add_row("Inference URL", "OK", Text(settings.inference_base_url))
    table.add_row("Timeout", "OK", f"{settings.http_timeout_seconds:g}s")
    table.add_row("Cold-start wait", "OK", f"{settings.cold_start_wait_seconds:g}s")
    table.add_row("Candidate models", "OK", str(len(settings.models)))
    user_env = get_user_env_file()
    table.add_row("User config", "OK" if user_env.exists() else "ABSENT", Text(str(user_env)))

    _console.print(table)

    if not token:
        _console.print(
            f"\n[yellow]Note:[/yellow] set {TOKEN_ENV_VAR} in .env or run `hf-sentiment doctor setup-token`."
        )


@app.command(name="setup-token")
def setup_token() -> None:
    """Interactive token setup (stores it in the user config .env)."""

    token = typer.prompt("Hugging Face token", hide_input=True, confirmation_prompt=False).strip()
    if not token:
        raise typer.BadParameter("token is required")

    env_path = write_user_env_vars({TOKEN_ENV_VAR: token})
    _console.print(f"[green]Saved token to:[/green] {env_path}")

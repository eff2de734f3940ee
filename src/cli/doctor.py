"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import httpx
import typer
from rich.console import Console
from rich.table import Table

from adapters.rest import RestClient
from core.config import AppSettings, get_user_env_file

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_server(
    settings: AppSettings,
    transport: httpx.AsyncBaseTransport | None = None,
) -> tuple[tuple[bool, str], tuple[bool, str]]:
    """Probe `/version` (reachability) and `/v1/user/self` (token validity)."""

    async with RestClient(settings, transport=transport) as api:
        version = await api.get_version()
        principal = await api.get_principal_self()

    if version.ok:
        detail = version.payload.get("version") if isinstance(version.payload, dict) else None
        reach = (True, f"HTTP {version.status_code}, version {detail or '?'}")
    elif version.status_code is None:
        reach = (False, str(version.error.__cause__ if version.error else "no response"))
    else:
        reach = (False, f"HTTP {version.status_code}")

    if principal.ok:
        who = principal.payload.get("username") if isinstance(principal.payload, dict) else None
        auth = (True, f"authenticated as {who or '?'}")
    elif principal.status_code is None:
        auth = (False, "server unreachable")
    else:
        auth = (False, f"HTTP {principal.status_code}")
    return reach, auth


@app.command()
def run(ctx: typer.Context) -> None:
    """Run baseline diagnostics and show recommended fixes."""

    state = ctx.find_root().obj
    settings = getattr(state, "settings", None) or AppSettings()
    transport = getattr(state, "transport", None)

    table = Table(title="dtrack-console Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    # Config
    table.add_row("API root", "OK", settings.api_root)
    table.add_row("User config", "OK", str(get_user_env_file()))
    if settings.api_token:
        table.add_row("Token", "OK", "Bearer token configured")
    else:
        table.add_row("Token", "MISSING", "Run `dtrack-console login`")
    if not settings.verify_tls:
        table.add_row("TLS", "WARN", "Certificate verification disabled")

    # Connectivity
    (ok_http, detail_http), (ok_auth, detail_auth) = asyncio.run(_check_server(settings, transport))
    table.add_row("Server", "OK" if ok_http else "FAIL", detail_http)
    table.add_row("Session", "OK" if ok_auth else "FAIL", detail_auth)

    _console.print(table)

    if not ok_http:
        _console.print(
            "\n[yellow]Note:[/yellow] check DTRACK_CONSOLE_BASE_URL and DTRACK_CONSOLE_API_PATH."
        )
        raise typer.Exit(code=1)

"""dtrack-console command line.

Every command maps to exactly one REST operation: it wires the operation's
success/failure callbacks to Rich output and turns a failure into exit code 1.
"""

from __future__ import annotations

import asyncio
import json
import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable

import httpx
import typer
from rich.console import Console
from rich.logging import RichHandler

from adapters.rest import ApiOutcome, RestClient
from cli import doctor
from cli.ui_components import (
    build_components_table,
    build_detail_panel,
    build_licenses_table,
    build_projects_table,
    build_teams_table,
    build_users_table,
    build_version_panel,
)
from core.config import TOKEN_ENV_VAR, AppSettings, remove_user_env_vars, write_user_env_vars
from core.domain.models import parse_tags
from core.domain.view import ConsoleView, ViewState
from core.errors import ApiError, TransportError

app = typer.Typer(no_args_is_help=True, help="Admin console for a Dependency-Track server.")
projects_app = typer.Typer(no_args_is_help=True, help="Create, inspect, update and delete projects.")
components_app = typer.Typer(no_args_is_help=True, help="Create and inspect components.")
app.add_typer(projects_app, name="projects")
app.add_typer(components_app, name="components")
app.add_typer(doctor.app, name="doctor")

_console = Console()
_err_console = Console(stderr=True)

Operation = Callable[[RestClient, Callable[[Any], object], Callable[[Any], object]], Awaitable[ApiOutcome]]


@dataclass
class CliState:
    """Per-invocation options shared by every command."""

    settings: AppSettings | None = None
    transport: httpx.AsyncBaseTransport | None = None
    json_output: bool = False
    view: ConsoleView = field(default_factory=ConsoleView)

    def __post_init__(self) -> None:
        self.view.subscribe(_login_hint)

    def make_client(self) -> RestClient:
        return RestClient(self.settings or AppSettings(), view=self.view, transport=self.transport)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=_err_console, rich_tracebacks=True, show_path=False)],
        force=True,
    )
    # httpx logs every request at INFO; ours are enough.
    logging.getLogger("httpx").setLevel(logging.DEBUG if verbose else logging.WARNING)


def _login_hint(view: ConsoleView) -> None:
    if view.state is ViewState.LOGIN:
        _err_console.print("[yellow]Not logged in (HTTP 401).[/yellow] Run `dtrack-console login` first.")


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging (requests/responses)."),
    json_output: bool = typer.Option(False, "--json", help="Print the raw payload as JSON."),
) -> None:
    if ctx.obj is None:
        ctx.obj = CliState()
    state: CliState = ctx.obj
    state.json_output = json_output
    _configure_logging(verbose)


def _state(ctx: typer.Context) -> CliState:
    return ctx.obj if isinstance(ctx.obj, CliState) else CliState()


def _describe(error: ApiError) -> str:
    if isinstance(error, TransportError):
        return f"Cannot reach server: {error.__cause__ or error}"
    payload = error.payload
    detail = f": {payload}" if isinstance(payload, str) and payload.strip() else ""
    return f"HTTP {error.status_code}{detail}"


def _execute(ctx: typer.Context, operation: Operation) -> tuple[Any, ApiOutcome]:
    """Run one REST operation and return its payload, or exit 1 on failure."""

    state = _state(ctx)
    successes: list[Any] = []
    failures: list[Any] = []

    async def _go() -> ApiOutcome:
        async with state.make_client() as api:
            return await operation(api, successes.append, failures.append)

    outcome = asyncio.run(_go())

    if failures:
        error = failures[0]
        message = _describe(error) if isinstance(error, ApiError) else str(error)
        _err_console.print(f"[red]{outcome.endpoint} failed:[/red] {message}")
        raise typer.Exit(code=1)
    if not successes:
        _err_console.print(f"[red]{outcome.endpoint}: unexpected HTTP {outcome.status_code}[/red]")
        raise typer.Exit(code=1)
    return successes[0], outcome


def _emit(ctx: typer.Context, payload: Any, render: Callable[[Any], Any]) -> None:
    if _state(ctx).json_output:
        _console.print_json(json.dumps(payload))
        return
    _console.print(render(payload))


@app.command()
def version(ctx: typer.Context) -> None:
    """Show server version information."""

    payload, _ = _execute(ctx, lambda api, ok, fail: api.get_version(on_success=ok, on_failure=fail))
    _emit(ctx, payload, build_version_panel)


@app.command()
def login(
    ctx: typer.Context,
    username: str = typer.Option(..., prompt=True),
    password: str = typer.Option(..., prompt=True, hide_input=True),
    save: bool = typer.Option(True, "--save/--no-save", help="Store the token in the user config .env."),
) -> None:
    """Log in and keep the bearer token for later commands."""

    token, _ = _execute(
        ctx,
        lambda api, ok, fail: api.login(username, password, on_success=ok, on_failure=fail),
    )
    token = str(token or "").strip()
    if not token:
        _err_console.print("[red]login failed:[/red] server returned an empty token")
        raise typer.Exit(code=1)

    if save:
        env_path = write_user_env_vars({TOKEN_ENV_VAR: token})
        _console.print(f"[green]Logged in as {username}.[/green] Token saved to: {env_path}")
    else:
        _console.print(f"[green]Logged in as {username}.[/green]")
        _console.print(f"export {TOKEN_ENV_VAR}={token}")


@app.command()
def logout() -> None:
    """Forget the stored bearer token."""

    env_path = remove_user_env_vars(TOKEN_ENV_VAR)
    _console.print(f"[green]Token removed from:[/green] {env_path}")


@app.command()
def whoami(ctx: typer.Context) -> None:
    """Show the logged-in user."""

    payload, _ = _execute(ctx, lambda api, ok, fail: api.get_principal_self(on_success=ok, on_failure=fail))
    _emit(ctx, payload, lambda data: build_detail_panel(data, title="Current user"))


@projects_app.command("list")
def projects_list(ctx: typer.Context) -> None:
    payload, outcome = _execute(ctx, lambda api, ok, fail: api.get_projects(on_success=ok, on_failure=fail))
    _emit(ctx, payload, lambda data: build_projects_table(data, total=outcome.total_count))


@projects_app.command("show")
def projects_show(ctx: typer.Context, uuid: str = typer.Argument(..., help="Project UUID.")) -> None:
    payload, _ = _execute(ctx, lambda api, ok, fail: api.get_project(uuid, on_success=ok, on_failure=fail))
    _emit(ctx, payload, lambda data: build_detail_panel(data, title=f"Project {uuid}"))


@projects_app.command("create")
def projects_create(
    ctx: typer.Context,
    name: str = typer.Option(..., "--name", help="Project name."),
    version_: str | None = typer.Option(None, "--version", help="Project version."),
    description: str | None = typer.Option(None, "--description"),
    tags: str | None = typer.Option(None, "--tags", help="Comma separated tag names."),
) -> None:
    payload, _ = _execute(
        ctx,
        lambda api, ok, fail: api.create_project(
            name, version_, description, parse_tags(tags), on_success=ok, on_failure=fail
        ),
    )
    _emit(ctx, payload, lambda data: build_detail_panel(data, title="Project created"))


@projects_app.command("update")
def projects_update(
    ctx: typer.Context,
    uuid: str = typer.Argument(..., help="Project UUID."),
    name: str = typer.Option(..., "--name", help="Project name."),
    version_: str | None = typer.Option(None, "--version", help="Project version."),
    description: str | None = typer.Option(None, "--description"),
    tags: str | None = typer.Option(None, "--tags", help="Comma separated tag names."),
) -> None:
    payload, _ = _execute(
        ctx,
        lambda api, ok, fail: api.update_project(
            uuid, name, version_, description, parse_tags(tags), on_success=ok, on_failure=fail
        ),
    )
    _emit(ctx, payload, lambda data: build_detail_panel(data, title="Project updated"))


@projects_app.command("delete")
def projects_delete(
    ctx: typer.Context,
    uuid: str = typer.Argument(..., help="Project UUID."),
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation."),
) -> None:
    if not yes:
        typer.confirm(f"Delete project {uuid}?", abort=True)
    _execute(ctx, lambda api, ok, fail: api.delete_project(uuid, on_success=ok, on_failure=fail))
    _console.print(f"[green]Project {uuid} deleted.[/green]")


@components_app.command("list")
def components_list(ctx: typer.Context) -> None:
    payload, outcome = _execute(ctx, lambda api, ok, fail: api.get_components(on_success=ok, on_failure=fail))
    _emit(ctx, payload, lambda data: build_components_table(data, total=outcome.total_count))


@components_app.command("show")
def components_show(ctx: typer.Context, uuid: str = typer.Argument(..., help="Component UUID.")) -> None:
    payload, _ = _execute(ctx, lambda api, ok, fail: api.get_component(uuid, on_success=ok, on_failure=fail))
    _emit(ctx, payload, lambda data: build_detail_panel(data, title=f"Component {uuid}"))


@components_app.command("create")
def components_create(
    ctx: typer.Context,
    name: str = typer.Option(..., "--name"),
    version_: str | None = typer.Option(None, "--version"),
    group: str | None = typer.Option(None, "--group"),
    description: str | None = typer.Option(None, "--description"),
    license_: str | None = typer.Option(None, "--license", help="License identifier (e.g. Apache-2.0)."),
) -> None:
    payload, _ = _execute(
        ctx,
        lambda api, ok, fail: api.create_component(
            name, version_, group, description, license_, on_success=ok, on_failure=fail
        ),
    )
    _emit(ctx, payload, lambda data: build_detail_panel(data, title="Component created"))


@app.command()
def licenses(ctx: typer.Context) -> None:
    """List known licenses."""

    payload, outcome = _execute(ctx, lambda api, ok, fail: api.get_licenses(on_success=ok, on_failure=fail))
    _emit(ctx, payload, lambda data: build_licenses_table(data, total=outcome.total_count))


@app.command()
def teams(ctx: typer.Context) -> None:
    """List teams."""

    payload, outcome = _execute(ctx, lambda api, ok, fail: api.get_teams(on_success=ok, on_failure=fail))
    _emit(ctx, payload, lambda data: build_teams_table(data, total=outcome.total_count))


@app.command()
def users(
    ctx: typer.Context,
    ldap: bool = typer.Option(False, "--ldap", help="List LDAP users instead of managed users."),
) -> None:
    """List managed (or LDAP) users."""

    if ldap:
        payload, outcome = _execute(ctx, lambda api, ok, fail: api.get_ldap_users(on_success=ok, on_failure=fail))
        title = "LDAP users"
    else:
        payload, outcome = _execute(
            ctx, lambda api, ok, fail: api.get_managed_users(on_success=ok, on_failure=fail)
        )
        title = "Managed users"
    _emit(ctx, payload, lambda data: build_users_table(data, title=title, total=outcome.total_count))


def run() -> None:
    app()

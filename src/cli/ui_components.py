"""CLI UI components (Rich).

Why separate components:
- Keeps command logic apart from presentation details.
- Lets several commands reuse the same tables/panels.
"""

from __future__ import annotations

from typing import Any, Iterable, TypeVar

from pydantic import BaseModel, ValidationError
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import Component, License, Project, Team, User, VersionInfo

_EMPTY = "-"
_M = TypeVar("_M", bound=BaseModel)


def _cell(value: object) -> str:
    if value is None or value == "":
        return _EMPTY
    return str(value)


def _items(payload: Any) -> list[dict[str, Any]]:
    if isinstance(payload, list):
        return [item for item in payload if isinstance(item, dict)]
    if isinstance(payload, dict):
        return [payload]
    return []


def _tag_names(project: Project) -> str:
    if not project.tags:
        return _EMPTY
    return ", ".join(tag.name for tag in project.tags if tag.name) or _EMPTY


def _validated(model: type[_M], payload: Any) -> Iterable[_M]:
    for item in _items(payload):
        try:
            yield model.model_validate(item)
        except ValidationError as exc:
            # Fields the server shapes differently; show the row without them.
            bad = {error["loc"][0] for error in exc.errors() if error["loc"]}
            yield model.model_validate({k: v for k, v in item.items() if k not in bad})


def build_projects_table(payload: Any, *, total: int | None = None) -> Table:
    title = "Projects" if total is None else f"Projects ({total})"
    table = Table(title=title)
    table.add_column("UUID", style="dim", no_wrap=True)
    table.add_column("Name", style="cyan")
    table.add_column("Version", style="white")
    table.add_column("Tags", style="magenta")
    table.add_column("Description", style="white")
    for project in _validated(Project, payload):
        table.add_row(
            _cell(project.uuid),
            _cell(project.name),
            _cell(project.version),
            _tag_names(project),
            _cell(project.description),
        )
    return table


def build_components_table(payload: Any, *, total: int | None = None) -> Table:
    title = "Components" if total is None else f"Components ({total})"
    table = Table(title=title)
    table.add_column("UUID", style="dim", no_wrap=True)
    table.add_column("Group", style="white")
    table.add_column("Name", style="cyan")
    table.add_column("Version", style="white")
    table.add_column("License", style="green")
    for component in _validated(Component, payload):
        table.add_row(
            _cell(component.uuid),
            _cell(component.group),
            _cell(component.name),
            _cell(component.version),
            _cell(component.license),
        )
    return table


def build_licenses_table(payload: Any, *, total: int | None = None) -> Table:
    title = "Licenses" if total is None else f"Licenses ({total})"
    table = Table(title=title)
    table.add_column("License ID", style="green", no_wrap=True)
    table.add_column("Name", style="white")
    for license_ in _validated(License, payload):
        table.add_row(_cell(license_.license_id), _cell(license_.name))
    return table


def build_teams_table(payload: Any, *, total: int | None = None) -> Table:
    title = "Teams" if total is None else f"Teams ({total})"
    table = Table(title=title)
    table.add_column("UUID", style="dim", no_wrap=True)
    table.add_column("Name", style="cyan")
    for team in _validated(Team, payload):
        table.add_row(_cell(team.uuid), _cell(team.name))
    return table


def build_users_table(payload: Any, *, title: str = "Users", total: int | None = None) -> Table:
    table = Table(title=title if total is None else f"{title} ({total})")
    table.add_column("Username", style="cyan", no_wrap=True)
    table.add_column("Full name", style="white")
    table.add_column("Email", style="magenta")
    for user in _validated(User, payload):
        table.add_row(_cell(user.username), _cell(user.fullname), _cell(user.email))
    return table


def build_version_panel(payload: Any) -> Panel:
    info = VersionInfo.model_validate(payload if isinstance(payload, dict) else {})
    body = Text()
    body.append(f"{_cell(info.application)} {_cell(info.version)}\n", style="bold")
    body.append(f"Built: {_cell(info.timestamp)}\n", style="dim")
    body.append(f"UUID: {_cell(info.uuid)}", style="dim")
    return Panel(body, title="Server", border_style="cyan")


def build_detail_panel(payload: Any, *, title: str) -> Panel:
    """Key/value panel for a single resource (project, component, principal)."""

    table = Table.grid(padding=(0, 2))
    table.add_column(style="bold cyan", no_wrap=True)
    table.add_column(style="white")
    if isinstance(payload, dict):
        for key in sorted(payload):
            value = payload[key]
            if isinstance(value, (dict, list)):
                value = f"<{type(value).__name__}: {len(value)}>"
            table.add_row(key, _cell(value))
    else:
        table.add_row("value", _cell(payload))
    return Panel(table, title=title, border_style="yellow")

"""Domain models (Pydantic v2).

Why Pydantic here:
- Shapes request bodies so every documented key is always sent.
- Gives the CLI something typed to render without enforcing server rules.

Note:
- Payloads are pass-through: unknown keys are kept, and nothing here
  validates what the server accepts or returns.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class _Payload(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    def to_body(self) -> dict[str, Any]:
        """JSON body with every declared key present (`None` -> `null`)."""

        return self.model_dump(mode="json", by_alias=True)


class Tag(_Payload):
    name: str | None = None


class ProjectDraft(_Payload):
    """Body of a project create request."""

    name: str | None = Field(default=None, description="Project name.")
    version: str | None = Field(default=None, description="Project version.")
    description: str | None = Field(default=None, description="Free-text description.")
    tags: list[Tag] | None = Field(default=None, description="Tags attached to the project.")


class ProjectUpdate(ProjectDraft):
    """Body of a project update request; `uuid` selects the project."""

    uuid: str | None = Field(default=None, description="UUID of the project to update.")

    def to_body(self) -> dict[str, Any]:
        body = super().to_body()
        # uuid first, like the server's own examples
        return {"uuid": body.pop("uuid"), **body}


class ComponentDraft(_Payload):
    """Body of a component create request."""

    name: str | None = None
    version: str | None = None
    group: str | None = None
    description: str | None = None
    license: str | None = None


class Project(_Payload):
    uuid: str | None = None
    name: str | None = None
    version: str | None = None
    description: str | None = None
    tags: list[Tag] | None = None


class Component(_Payload):
    uuid: str | None = None
    name: str | None = None
    version: str | None = None
    group: str | None = None
    description: str | None = None
    license: str | None = None


class License(_Payload):
    uuid: str | None = None
    license_id: str | None = Field(default=None, alias="licenseId")
    name: str | None = None


class Team(_Payload):
    uuid: str | None = None
    name: str | None = None


class User(_Payload):
    username: str | None = None
    fullname: str | None = None
    email: str | None = None


class VersionInfo(_Payload):
    application: str | None = None
    version: str | None = None
    timestamp: str | None = None
    uuid: str | None = None


def parse_tags(raw: str | None) -> list[Tag] | None:
    """Turn `"a, b"` into tag objects; `None` leaves the tags unset."""

    if raw is None:
        return None
    names = [part.strip() for part in raw.split(",")]
    return [Tag(name=name) for name in names if name]

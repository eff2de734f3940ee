"""Core configuration.

Why here:
- Centralizes environment variables (pydantic-settings) away from the CLI.
- Lets adapters (HTTP client, token store) read config consistently.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_PREFIX = "DTRACK_CONSOLE_"
TOKEN_ENV_VAR = f"{ENV_PREFIX}API_TOKEN"


def get_user_config_dir() -> Path:
    """Per-user configuration directory (cross-platform, no dependencies).

    Lets the CLI persist the session token without editing a project `.env`.
    """

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "dtrack-console"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "dtrack-console"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "dtrack-console"
    return Path.home() / ".config" / "dtrack-console"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _parse_env_lines(text: str) -> dict[str, str]:
    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key:
            data[key] = value
    return data


def _read_user_env() -> dict[str, str]:
    env_path = get_user_env_file()
    if not env_path.exists():
        return {}
    return _parse_env_lines(env_path.read_text(encoding="utf-8"))


def _write_user_env(values: dict[str, str]) -> Path:
    env_path = get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    lines = ["# dtrack-console user config (.env)"]
    for key in sorted(values.keys()):
        lines.append(f"{key}={values[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


def write_user_env_vars(values: dict[str, str | None]) -> Path:
    """Write/update variables in the user's global .env."""

    existing = _read_user_env()
    existing.update({k: v for k, v in values.items() if v is not None})
    return _write_user_env(existing)


def remove_user_env_vars(*keys: str) -> Path:
    """Drop variables from the user's global .env (missing keys are ignored)."""

    existing = _read_user_env()
    for key in keys:
        existing.pop(key, None)
    return _write_user_env(existing)


class AppSettings(BaseSettings):
    """Central application settings.

    Why pydantic-settings:
    - Typing + validation at the edge (env vars) without leaking into the client.
    - One configuration contract shared by the CLI and the adapters.
    """

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        extra="ignore",
        case_sensitive=False,
        # Order: project first (dev), then the user's global config.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    base_url: str = Field(
        default="http://localhost:8080",
        min_length=1,
        description="Server origin (scheme + host + port).",
    )
    api_path: str = Field(
        default="/api",
        description="Context path under which the server mounts its REST API.",
    )
    api_token: str | None = Field(
        default=None,
        description="Bearer token used to seed the session store.",
    )
    http_timeout_seconds: float = Field(
        default=20.0,
        gt=0,
        description="Per-request timeout (seconds).",
    )
    user_agent: str = Field(
        default="dtrack-console/0.1",
        min_length=1,
        description="User-Agent sent with every request.",
    )
    verify_tls: bool = Field(
        default=True,
        description="Verify the server TLS certificate.",
    )

    @field_validator("base_url")
    @classmethod
    def _strip_base_url(cls, value: str) -> str:
        return value.rstrip("/")

    @field_validator("api_path")
    @classmethod
    def _normalize_api_path(cls, value: str) -> str:
        value = value.strip().strip("/")
        return f"/{value}" if value else ""

    @field_validator("api_token")
    @classmethod
    def _blank_token_is_none(cls, value: str | None) -> str | None:
        if value is None or not value.strip():
            return None
        return value.strip()

    @property
    def api_root(self) -> str:
        """`base_url` joined with `api_path`; every endpoint path hangs off it."""

        return f"{self.base_url}{self.api_path}"

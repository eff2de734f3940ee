"""Pytest configuration for dtrack-console."""

from __future__ import annotations

import json
from typing import Any
from urllib.parse import parse_qs

import httpx
import pytest

from adapters.rest import RestClient
from adapters.session_store import MemoryTokenStore
from core.config import AppSettings
from core.domain.view import ConsoleView

BASE_URL = "http://dtrack.test"


class FakeServer:
    """`httpx.MockTransport` handler that records requests and replays canned responses."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self._routes: dict[tuple[str, str], tuple[int, dict[str, Any]]] = {}

    def respond(self, method: str, path: str, status: int, **kwargs: Any) -> None:
        self._routes[(method, path)] = (status, kwargs)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        status, kwargs = self._routes.get((request.method, request.url.path), (404, {}))
        return httpx.Response(status, **kwargs)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self) -> Any:
        return json.loads(self.last.content)

    def last_form(self) -> dict[str, list[str]]:
        return parse_qs(self.last.content.decode("utf-8"))


class Calls:
    """Records callback invocations."""

    def __init__(self) -> None:
        self.args: list[Any] = []

    def __call__(self, value: Any) -> None:
        self.args.append(value)

    @property
    def count(self) -> int:
        return len(self.args)


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture(autouse=True)
def _isolated_user_config(tmp_path, monkeypatch):
    # Keep the per-user .env out of the real home directory.
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    monkeypatch.setenv("APPDATA", str(tmp_path / "appdata"))
    for name in ("DTRACK_CONSOLE_API_TOKEN", "DTRACK_CONSOLE_BASE_URL", "DTRACK_CONSOLE_API_PATH"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(_env_file=None, base_url=BASE_URL, api_path="/api", api_token=None)


@pytest.fixture
def server() -> FakeServer:
    return FakeServer()


@pytest.fixture
def view() -> ConsoleView:
    return ConsoleView()


@pytest.fixture
def make_client(settings, server, view):
    def _make(token: str | None = None) -> RestClient:
        return RestClient(
            settings,
            token_store=MemoryTokenStore(token),
            view=view,
            transport=server.transport,
        )

    return _make

import httpx
import pytest

from adapters.http_client import build_async_client
from adapters.interceptors import BearerAuthHook, SessionViewHook
from adapters.session_store import MemoryTokenStore
from core.domain.view import LOGIN_MODAL, USERNAME_FIELD, ConsoleView, Region, ViewState
from tests.conftest import Calls

pytestmark = pytest.mark.anyio


async def test_bearer_header_attached_when_token_present(make_client, server):
    async with make_client(token="jwt-123") as api:
        await api.get_projects()

    assert server.last.headers["Authorization"] == "Bearer jwt-123"


async def test_bearer_header_omitted_without_token(make_client, server):
    async with make_client() as api:
        await api.get_projects()

    assert "Authorization" not in server.last.headers


async def test_token_is_read_before_each_request(make_client, server):
    async with make_client() as api:
        await api.get_projects()
        api.token_store.set("later")
        await api.get_projects()
        api.token_store.clear()
        await api.get_projects()

    headers = [request.headers.get("Authorization") for request in server.requests]
    assert headers == [None, "Bearer later", None]


async def test_bearer_hook_replaces_stale_header():
    request = httpx.Request("GET", "http://dtrack.test/api/v1/project", headers={"Authorization": "Bearer old"})
    await BearerAuthHook(MemoryTokenStore())(request)
    assert "Authorization" not in request.headers


async def test_200_shows_console_regions_and_hides_login(make_client, server, view):
    server.respond("GET", "/api/v1/project", 200, json=[])

    async with make_client() as api:
        await api.get_projects()

    assert all(view.is_visible(region) for region in Region)
    assert view.login_modal_shown is False
    assert view.state is ViewState.CONSOLE


async def test_401_hides_regions_shows_login_and_focuses_username(make_client, server, view):
    view.show_console()
    server.respond("GET", "/api/v1/project", 401)

    async with make_client() as api:
        await api.get_projects()

    assert not any(view.is_visible(region) for region in Region)
    assert view.login_modal_shown is True
    assert view.focused_field == USERNAME_FIELD
    assert view.state is ViewState.LOGIN


@pytest.mark.parametrize("status", [201, 204, 403, 404, 500])
async def test_other_statuses_leave_view_untouched(status):
    view = ConsoleView()
    changes = Calls()
    view.subscribe(changes)
    response = httpx.Response(status, request=httpx.Request("GET", "http://dtrack.test/api/version"))

    await SessionViewHook(view)(response)

    assert changes.count == 0
    assert view.state is ViewState.UNKNOWN
    assert view.regions == {region: False for region in Region}
    assert view.login_modal_shown is False
    assert view.focused_field is None


async def test_view_hook_runs_for_any_operation(make_client, server, view):
    server.respond("POST", "/api/v1/user/login", 401)

    async with make_client() as api:
        await api.login("a", "b")

    assert view.state is ViewState.LOGIN


def test_documented_region_ids():
    assert [region.value for region in Region] == ["navbar-container", "sidebar", "main"]
    assert LOGIN_MODAL == "modal-login"


def test_build_async_client_installs_hooks_only_when_given(settings):
    bare = build_async_client(settings)
    assert bare.event_hooks == {"request": [], "response": []}

    wired = build_async_client(settings, token_store=MemoryTokenStore("t"), view=ConsoleView())
    assert isinstance(wired.event_hooks["request"][0], BearerAuthHook)
    assert isinstance(wired.event_hooks["response"][0], SessionViewHook)
    assert str(wired.base_url) == "http://dtrack.test/api/"
    assert wired.headers["User-Agent"] == settings.user_agent

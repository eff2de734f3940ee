"""Admin REST API client.

One coroutine per operation. Each builds the URL, sends exactly one request
and hands the response to `dispatch`, which fires at most one of the two
optional callbacks. Every coroutine also returns the `ApiOutcome`.

Usage:

    async with RestClient(settings) as api:
        await api.get_projects(on_success=render, on_failure=report)
"""

from __future__ import annotations

from typing import Any

import httpx

from adapters.http_client import CONTENT_TYPE_JSON, build_async_client
from adapters.rest import endpoints as ep
from adapters.rest.dispatch import ApiOutcome, Callback, dispatch, dispatch_transport_error
from adapters.session_store import MemoryTokenStore
from core.config import AppSettings
from core.domain.models import ComponentDraft, ProjectDraft, ProjectUpdate, Tag
from core.domain.view import ConsoleView
from core.interfaces.session import TokenStore


class RestClient:
    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        token_store: TokenStore | None = None,
        view: ConsoleView | None = None,
        client: httpx.AsyncClient | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self.token_store = token_store if token_store is not None else MemoryTokenStore.from_settings(self._settings)
        self.view = view if view is not None else ConsoleView()
        self._owns_client = client is None
        self._client = client or build_async_client(
            self._settings,
            token_store=self.token_store,
            view=self.view,
            transport=transport,
        )

    async def __aenter__(self) -> "RestClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def _call(
        self,
        endpoint: ep.Endpoint,
        *,
        url: str | None = None,
        json_body: dict[str, Any] | None = None,
        form: dict[str, str] | None = None,
        on_success: Callback = None,
        on_failure: Callback = None,
    ) -> ApiOutcome:
        headers: dict[str, str] = {}
        if form is None:
            headers["Content-Type"] = CONTENT_TYPE_JSON

        try:
            response = await self._client.request(
                endpoint.method,
                url or endpoint.path,
                json=json_body,
                data=form,
                headers=headers,
            )
        except httpx.TransportError as exc:
            return dispatch_transport_error(endpoint, exc, on_failure=on_failure)

        return dispatch(endpoint, response, on_success=on_success, on_failure=on_failure)

    # -- session ---------------------------------------------------------

    async def get_version(self, *, on_success: Callback = None, on_failure: Callback = None) -> ApiOutcome:
        """Retrieve version information from the server."""

        return await self._call(ep.VERSION, on_success=on_success, on_failure=on_failure)

    async def login(
        self,
        username: str,
        password: str,
        *,
        on_success: Callback = None,
        on_failure: Callback = None,
    ) -> ApiOutcome:
        """Log in with a username and password.

        The server answers 200 with the bearer token as plain text. Storing it
        is left to the caller (see `remember_token`).
        """

        return await self._call(
            ep.LOGIN,
            form={"username": username, "password": password},
            on_success=on_success,
            on_failure=on_failure,
        )

    def remember_token(self, token: str) -> None:
        self.token_store.set(token.strip())

    async def get_principal_self(self, *, on_success: Callback = None, on_failure: Callback = None) -> ApiOutcome:
        """Retrieve the logged-in user, if any."""

        return await self._call(ep.CURRENT_USER, on_success=on_success, on_failure=on_failure)

    # -- projects --------------------------------------------------------

    async def create_project(
        self,
        name: str | None,
        version: str | None,
        description: str | None,
        tags: list[Tag] | None,
        *,
        on_success: Callback = None,
        on_failure: Callback = None,
    ) -> ApiOutcome:
        body = ProjectDraft(name=name, version=version, description=description, tags=tags).to_body()
        return await self._call(ep.CREATE_PROJECT, json_body=body, on_success=on_success, on_failure=on_failure)

    async def get_projects(self, *, on_success: Callback = None, on_failure: Callback = None) -> ApiOutcome:
        return await self._call(ep.LIST_PROJECTS, on_success=on_success, on_failure=on_failure)

    async def get_project(
        self,
        uuid: str,
        *,
        on_success: Callback = None,
        on_failure: Callback = None,
    ) -> ApiOutcome:
        return await self._call(
            ep.GET_PROJECT,
            url=ep.GET_PROJECT.url(uuid=uuid),
            on_success=on_success,
            on_failure=on_failure,
        )

    async def update_project(
        self,
        uuid: str,
        name: str | None,
        version: str | None,
        description: str | None,
        tags: list[Tag] | None,
        *,
        on_success: Callback = None,
        on_failure: Callback = None,
    ) -> ApiOutcome:
        body = ProjectUpdate(uuid=uuid, name=name, version=version, description=description, tags=tags).to_body()
        return await self._call(ep.UPDATE_PROJECT, json_body=body, on_success=on_success, on_failure=on_failure)

    async def delete_project(
        self,
        uuid: str,
        *,
        on_success: Callback = None,
        on_failure: Callback = None,
    ) -> ApiOutcome:
        # The project to delete travels in the body, not the path.
        return await self._call(
            ep.DELETE_PROJECT,
            json_body={"uuid": uuid},
            on_success=on_success,
            on_failure=on_failure,
        )

    # -- components ------------------------------------------------------

    async def create_component(
        self,
        name: str | None,
        version: str | None,
        group: str | None,
        description: str | None,
        license: str | None,
        *,
        on_success: Callback = None,
        on_failure: Callback = None,
    ) -> ApiOutcome:
        body = ComponentDraft(
            name=name,
            version=version,
            group=group,
            description=description,
            license=license,
        ).to_body()
        return await self._call(ep.CREATE_COMPONENT, json_body=body, on_success=on_success, on_failure=on_failure)

    async def get_components(self, *, on_success: Callback = None, on_failure: Callback = None) -> ApiOutcome:
        return await self._call(ep.LIST_COMPONENTS, on_success=on_success, on_failure=on_failure)

    async def get_component(
        self,
        uuid: str,
        *,
        on_success: Callback = None,
        on_failure: Callback = None,
    ) -> ApiOutcome:
        return await self._call(
            ep.GET_COMPONENT,
            url=ep.GET_COMPONENT.url(uuid=uuid),
            on_success=on_success,
            on_failure=on_failure,
        )

    # -- reference data --------------------------------------------------

    async def get_licenses(self, *, on_success: Callback = None, on_failure: Callback = None) -> ApiOutcome:
        return await self._call(ep.LIST_LICENSES, on_success=on_success, on_failure=on_failure)

    async def get_teams(self, *, on_success: Callback = None, on_failure: Callback = None) -> ApiOutcome:
        return await self._call(ep.LIST_TEAMS, on_success=on_success, on_failure=on_failure)

    async def get_managed_users(self, *, on_success: Callback = None, on_failure: Callback = None) -> ApiOutcome:
        return await self._call(ep.LIST_MANAGED_USERS, on_success=on_success, on_failure=on_failure)

    async def get_ldap_users(self, *, on_success: Callback = None, on_failure: Callback = None) -> ApiOutcome:
        return await self._call(ep.LIST_LDAP_USERS, on_success=on_success, on_failure=on_failure)

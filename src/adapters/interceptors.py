"""Global request/response interceptors (httpx event hooks).

Every request leaving the client goes through `BearerAuthHook`; every
response coming back goes through `SessionViewHook`. Both are installed once
by `adapters.http_client.build_async_client`.
"""

from __future__ import annotations

import logging

import httpx

from core.domain.view import ConsoleView
from core.interfaces.session import TokenStore

logger = logging.getLogger(__name__)

AUTHORIZATION_HEADER = "Authorization"


class BearerAuthHook:
    """Attach `Authorization: Bearer <token>` when the store holds a token."""

    def __init__(self, store: TokenStore) -> None:
        self._store = store

    async def __call__(self, request: httpx.Request) -> None:
        token = self._store.get()
        if token:
            request.headers[AUTHORIZATION_HEADER] = f"Bearer {token}"
        else:
            request.headers.pop(AUTHORIZATION_HEADER, None)
        logger.debug("-> %s %s (auth=%s)", request.method, request.url, bool(token))


class SessionViewHook:
    """Toggle the console view on 200 (session valid) and 401 (login required)."""

    def __init__(self, view: ConsoleView) -> None:
        self._view = view

    async def __call__(self, response: httpx.Response) -> None:
        request = response.request
        logger.debug("<- %s %s %s", response.status_code, request.method, request.url)

        if response.status_code == httpx.codes.OK:
            self._view.show_console()
        elif response.status_code == httpx.codes.UNAUTHORIZED:
            self._view.show_login()

"""httpx wrapper.

Why a wrapper:
- Standardizes timeouts, headers, TLS policy and the global interceptors.
- Eases testing: a `transport` (e.g. `httpx.MockTransport`) can be injected.
"""

from __future__ import annotations

import httpx

from adapters.interceptors import BearerAuthHook, SessionViewHook
from core.config import AppSettings
from core.domain.view import ConsoleView
from core.interfaces.session import TokenStore

CONTENT_TYPE_JSON = "application/json"
CONTENT_TYPE_TEXT = "text/plain"


def build_async_client(
    settings: AppSettings | None = None,
    *,
    token_store: TokenStore | None = None,
    view: ConsoleView | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Create an `httpx.AsyncClient` pointed at the API root.

    Why a builder:
    - Every operation shares one base URL, one timeout and the same hooks.
    - The bearer hook is only installed when a token store is given, and the
      view hook only when a view is given.
    """

    settings = settings or AppSettings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": f"{CONTENT_TYPE_JSON}, {CONTENT_TYPE_TEXT};q=0.9, */*;q=0.8",
    }

    request_hooks = []
    response_hooks = []
    if token_store is not None:
        request_hooks.append(BearerAuthHook(token_store))
    if view is not None:
        response_hooks.append(SessionViewHook(view))

    return httpx.AsyncClient(
        base_url=settings.api_root,
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=True,
        headers=headers,
        verify=settings.verify_tls,
        transport=transport,
        event_hooks={"request": request_hooks, "response": response_hooks},
    )

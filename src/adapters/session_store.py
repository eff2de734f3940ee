"""In-memory token store.

Plays the role the browser's session storage played for the web console:
the token lives for the lifetime of the process unless it is cleared.
"""

from __future__ import annotations

from core.config import AppSettings
from core.interfaces.session import TokenStore


class MemoryTokenStore(TokenStore):
    def __init__(self, token: str | None = None) -> None:
        self._token = token or None

    @classmethod
    def from_settings(cls, settings: AppSettings | None = None) -> "MemoryTokenStore":
        settings = settings or AppSettings()
        return cls(settings.api_token)

    def get(self) -> str | None:
        return self._token

    def set(self, token: str) -> None:
        self._token = token or None

    def clear(self) -> None:
        self._token = None

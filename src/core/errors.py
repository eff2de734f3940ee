"""Errors handed to failure callbacks.

The client never raises these for HTTP or transport failures; it passes them
to the caller's failure callback and records them on the returned outcome.
"""

from __future__ import annotations

from typing import Any


class ApiError(Exception):
    """A request ended in a failure bucket (or a generic HTTP error)."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        payload: Any = None,
        endpoint: str | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.payload = payload
        self.endpoint = endpoint

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.args[0]!r}, status_code={self.status_code!r})"


class TransportError(ApiError):
    """No HTTP response at all (connection refused, timeout, TLS...).

    The underlying httpx exception is chained as `__cause__`.
    """

"""Session token contract.

Why Protocol:
- A structural contract (duck typing) without rigid inheritance.
- The request interceptor only needs `get`; the CLI swaps in whatever
  storage it likes (memory, user .env) without touching the client.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class TokenStore(Protocol):
    """Holds the bearer token for the current session.

    Design rules:
    - `get` is synchronous: it is read right before every request.
    - An empty or missing token means "send no Authorization header".
    """

    def get(self) -> str | None:
        ...

    def set(self, token: str) -> None:
        ...

    def clear(self) -> None:
        ...

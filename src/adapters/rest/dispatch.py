"""Status-keyed callback dispatch.

Rules:
- success bucket -> `on_success(payload)`
- failure bucket -> `on_failure(ApiError)`
- any other error status on an endpoint with the generic handler -> `on_failure(ApiError)`
- anything else -> nothing

At most one callback fires per response, at most once. Exceptions raised by
the callbacks themselves propagate to the caller.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional

import httpx

from adapters.rest.endpoints import TOTAL_COUNT_HEADER, Endpoint
from core.errors import ApiError, TransportError

logger = logging.getLogger(__name__)

Callback = Optional[Callable[[Any], object]]


def _noop(*_args: Any, **_kwargs: Any) -> None:
    return None


def callback_validator(callback: object) -> Callable[..., object]:
    """Return `callback` if it can be called, a no-op otherwise."""

    if callback is not None and callable(callback):
        return callback
    return _noop


@dataclass
class ApiOutcome:
    """What happened to one request, for callers that prefer return values."""

    endpoint: str
    status_code: int | None = None
    payload: Any = None
    error: ApiError | None = None
    total_count: int | None = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.status_code is not None and 200 <= self.status_code < 300


def decode_payload(response: httpx.Response) -> Any:
    """JSON when the body is JSON, text otherwise, `None` when empty."""

    if not response.content:
        return None
    content_type = response.headers.get("content-type", "")
    if "json" in content_type:
        try:
            return response.json()
        except ValueError:
            # invalid JSON or a body that is not UTF-8
            return response.text
    return response.text


def _total_count(response: httpx.Response) -> int | None:
    raw = response.headers.get(TOTAL_COUNT_HEADER)
    if raw is None:
        return None
    try:
        return int(raw)
    except ValueError:
        return None


def dispatch(
    endpoint: Endpoint,
    response: httpx.Response,
    *,
    on_success: Callback = None,
    on_failure: Callback = None,
) -> ApiOutcome:
    status = response.status_code
    payload = decode_payload(response)
    outcome = ApiOutcome(
        endpoint=endpoint.name,
        status_code=status,
        payload=payload,
        total_count=_total_count(response),
    )

    if status in endpoint.success:
        callback_validator(on_success)(payload)
        return outcome

    if status in endpoint.failure or (endpoint.generic_errors and status >= 400):
        error = ApiError(
            f"{endpoint.method} {endpoint.name} failed with HTTP {status}",
            status_code=status,
            payload=payload,
            endpoint=endpoint.name,
        )
        outcome.error = error
        callback_validator(on_failure)(error)
        return outcome

    if status >= 400:
        outcome.error = ApiError(
            f"{endpoint.method} {endpoint.name} returned unhandled HTTP {status}",
            status_code=status,
            payload=payload,
            endpoint=endpoint.name,
        )
        logger.debug("%s: HTTP %s has no handler; no callback invoked", endpoint.name, status)
    return outcome


def dispatch_transport_error(
    endpoint: Endpoint,
    exc: httpx.TransportError,
    *,
    on_failure: Callback = None,
) -> ApiOutcome:
    """Forward a transport failure to `on_failure` when the endpoint handles generic errors."""

    error = TransportError(f"{endpoint.method} {endpoint.name}: {exc}", endpoint=endpoint.name)
    error.__cause__ = exc
    outcome = ApiOutcome(endpoint=endpoint.name, error=error)

    if endpoint.generic_errors:
        callback_validator(on_failure)(error)
    else:
        logger.warning("%s: transport error discarded: %s", endpoint.name, exc)
    return outcome

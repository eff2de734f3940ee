"""Admin REST API bindings.

Why a package:
- Keeps the endpoint table, the dispatch rules and the client apart, so the
  contract (method, path, status buckets) can be read in one place.
"""

from adapters.rest.client import RestClient
from adapters.rest.dispatch import ApiOutcome, callback_validator
from adapters.rest.endpoints import ALL_ENDPOINTS, Endpoint

__all__ = [
    "ALL_ENDPOINTS",
    "ApiOutcome",
    "Endpoint",
    "RestClient",
    "callback_validator",
]

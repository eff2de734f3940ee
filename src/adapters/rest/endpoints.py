"""Endpoint table of the admin REST API.

Each operation is a fixed (method, path template, status buckets) triple.
`success` and `failure` are the status codes with a dedicated callback;
`generic_errors` says whether any other error status (or a transport
failure) is still forwarded to the failure callback.
"""

from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import quote

METHOD_GET = "GET"
METHOD_POST = "POST"
METHOD_PUT = "PUT"
METHOD_DELETE = "DELETE"

URL_ABOUT = "/version"
URL_LOGIN = "/v1/user/login"
URL_TEAM = "/v1/team"
URL_USER_LDAP = "/v1/user/ldap"
URL_USER_MANAGED = "/v1/user/managed"
URL_USER_SELF = "/v1/user/self"
URL_PROJECT = "/v1/project"
URL_LICENSE = "/v1/license"
URL_COMPONENT = "/v1/component"

TOTAL_COUNT_HEADER = "X-Total-Count"

# Stand-in for "any 2xx" in a success bucket.
ANY_SUCCESS: frozenset[int] = frozenset(range(200, 300))


@dataclass(frozen=True)
class Endpoint:
    name: str
    method: str
    path: str
    success: frozenset[int]
    failure: frozenset[int] = frozenset()
    generic_errors: bool = False

    def url(self, **params: str) -> str:
        """Fill the path template; each parameter becomes exactly one path segment."""

        return self.path.format(**{key: _segment(value) for key, value in params.items()})


def _segment(value: str) -> str:
    encoded = quote(str(value), safe="")
    # "." and ".." would be collapsed by URL normalization
    if encoded in (".", ".."):
        return encoded.replace(".", "%2E")
    return encoded


def _codes(*codes: int) -> frozenset[int]:
    return frozenset(codes)


VERSION = Endpoint("version", METHOD_GET, URL_ABOUT, ANY_SUCCESS, generic_errors=True)
LOGIN = Endpoint("login", METHOD_POST, URL_LOGIN, _codes(200), _codes(401))
CURRENT_USER = Endpoint("current_user", METHOD_GET, URL_USER_SELF, ANY_SUCCESS, generic_errors=True)

CREATE_PROJECT = Endpoint("create_project", METHOD_PUT, URL_PROJECT, _codes(201), generic_errors=True)
LIST_PROJECTS = Endpoint("list_projects", METHOD_GET, URL_PROJECT, _codes(200), _codes(404))
GET_PROJECT = Endpoint(
    "get_project", METHOD_GET, URL_PROJECT + "/{uuid}", _codes(200), _codes(404), generic_errors=True
)
UPDATE_PROJECT = Endpoint(
    "update_project", METHOD_POST, URL_PROJECT, _codes(200), _codes(404), generic_errors=True
)
DELETE_PROJECT = Endpoint(
    "delete_project", METHOD_DELETE, URL_PROJECT, _codes(204), _codes(404), generic_errors=True
)

CREATE_COMPONENT = Endpoint("create_component", METHOD_PUT, URL_COMPONENT, _codes(201), generic_errors=True)
LIST_COMPONENTS = Endpoint("list_components", METHOD_GET, URL_COMPONENT, _codes(200), _codes(404))
GET_COMPONENT = Endpoint(
    "get_component", METHOD_GET, URL_COMPONENT + "/{uuid}", _codes(200), _codes(404), generic_errors=True
)

LIST_LICENSES = Endpoint("list_licenses", METHOD_GET, URL_LICENSE, _codes(200), _codes(404))
LIST_TEAMS = Endpoint("list_teams", METHOD_GET, URL_TEAM, _codes(200), _codes(404))
LIST_MANAGED_USERS = Endpoint("list_managed_users", METHOD_GET, URL_USER_MANAGED, _codes(200), _codes(404))
LIST_LDAP_USERS = Endpoint("list_ldap_users", METHOD_GET, URL_USER_LDAP, _codes(200), _codes(404))

ALL_ENDPOINTS: tuple[Endpoint, ...] = (
    VERSION,
    LOGIN,
    CURRENT_USER,
    CREATE_PROJECT,
    LIST_PROJECTS,
    GET_PROJECT,
    UPDATE_PROJECT,
    DELETE_PROJECT,
    CREATE_COMPONENT,
    LIST_COMPONENTS,
    GET_COMPONENT,
    LIST_LICENSES,
    LIST_TEAMS,
    LIST_MANAGED_USERS,
    LIST_LDAP_USERS,
)

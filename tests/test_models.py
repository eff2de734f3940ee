from adapters.rest import ALL_ENDPOINTS
from adapters.rest import endpoints as ep
from core.domain.models import ComponentDraft, License, Project, ProjectUpdate, Tag, parse_tags


def test_parse_tags():
    assert parse_tags(None) is None
    assert parse_tags("") == []
    assert parse_tags(" web, prod ,,") == [Tag(name="web"), Tag(name="prod")]


def test_project_update_body_leads_with_uuid():
    body = ProjectUpdate(uuid="u", name="n").to_body()
    assert list(body) == ["uuid", "name", "version", "description", "tags"]


def test_component_draft_body_keys():
    assert set(ComponentDraft(name="c").to_body()) == {"name", "version", "group", "description", "license"}


def test_payload_models_keep_unknown_keys():
    project = Project.model_validate({"uuid": "u", "name": "n", "active": True})
    assert project.model_extra == {"active": True}

    license_ = License.model_validate({"licenseId": "MIT", "name": "MIT License"})
    assert license_.license_id == "MIT"


def test_endpoint_table():
    table = {endpoint.name: (endpoint.method, endpoint.path) for endpoint in ALL_ENDPOINTS}
    assert table == {
        "version": ("GET", "/version"),
        "login": ("POST", "/v1/user/login"),
        "current_user": ("GET", "/v1/user/self"),
        "create_project": ("PUT", "/v1/project"),
        "list_projects": ("GET", "/v1/project"),
        "get_project": ("GET", "/v1/project/{uuid}"),
        "update_project": ("POST", "/v1/project"),
        "delete_project": ("DELETE", "/v1/project"),
        "create_component": ("PUT", "/v1/component"),
        "list_components": ("GET", "/v1/component"),
        "get_component": ("GET", "/v1/component/{uuid}"),
        "list_licenses": ("GET", "/v1/license"),
        "list_teams": ("GET", "/v1/team"),
        "list_managed_users": ("GET", "/v1/user/managed"),
        "list_ldap_users": ("GET", "/v1/user/ldap"),
    }


def test_status_buckets():
    assert ep.LOGIN.success == {200} and ep.LOGIN.failure == {401}
    assert ep.CREATE_PROJECT.success == {201} and not ep.CREATE_PROJECT.failure
    assert ep.DELETE_PROJECT.success == {204} and ep.DELETE_PROJECT.failure == {404}
    assert ep.GET_PROJECT.url(uuid="abc") == "/v1/project/abc"


def test_endpoint_url_keeps_each_parameter_in_one_segment():
    assert ep.GET_PROJECT.url(uuid="../user/self") == "/v1/project/..%2Fuser%2Fself"
    assert ep.GET_COMPONENT.url(uuid="a?b=1#x") == "/v1/component/a%3Fb%3D1%23x"
    assert ep.GET_PROJECT.url(uuid="..") == "/v1/project/%2E%2E"
    assert ep.GET_PROJECT.url(uuid=".") == "/v1/project/%2E"

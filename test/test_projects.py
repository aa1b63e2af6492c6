import pytest

from client.gitlab_manager import GitLabClient
from core.envelope import result_text
from tools.projects import PROJECT_TOOLS, call_tool

from conftest import TOKEN, FakeGitLab


@pytest.mark.asyncio
async def test_get_projects_scenario(client, gitlab):
    gitlab.body = [{"id": 1}]

    result = await call_tool(client, "get-projects", {})

    request = gitlab.last
    assert request.method == "GET"
    assert request.url.path == "/api/v4/projects"
    assert request.url.query == b""
    assert request.headers["PRIVATE-TOKEN"] == TOKEN
    assert request.content == b""
    assert not result.isError
    assert result.content[0].type == "text"
    assert result.content[0].text == '[\n  {\n    "id": 1\n  }\n]'


@pytest.mark.asyncio
async def test_get_projects_forwards_filters(client, gitlab):
    await call_tool(client, "get-projects", {"search": "api", "per_page": 5})

    assert dict(gitlab.last.url.params) == {"search": "api", "per_page": "5"}


@pytest.mark.asyncio
async def test_post_projects_sends_body(client, gitlab):
    gitlab.body = {"id": 10, "name": "demo"}

    result = await call_tool(client, "post-projects", {"name": "demo", "visibility": "private"})

    assert gitlab.last.method == "POST"
    assert gitlab.last.url.path == "/api/v4/projects"
    assert gitlab.last_json() == {"name": "demo", "visibility": "private"}
    assert not result.isError


@pytest.mark.asyncio
async def test_get_project_by_id_substitutes_path(client, gitlab):
    gitlab.body = {"id": 42}

    result = await call_tool(client, "get-projects-by-id", {"id": 42})

    assert gitlab.last.method == "GET"
    assert gitlab.last.url.path == "/api/v4/projects/42"
    assert "id" not in gitlab.last.url.params
    assert result_text(result) == '{\n  "id": 42\n}'


@pytest.mark.asyncio
async def test_get_project_by_path_keeps_other_params(client, gitlab):
    await call_tool(client, "get-projects-by-id", {"id": "group/app", "license": True})

    assert gitlab.last.url.raw_path == b"/api/v4/projects/group%2Fapp?license=true"


@pytest.mark.asyncio
async def test_put_project_performs_update(client, gitlab):
    gitlab.body = {"id": 42, "description": "new"}

    result = await call_tool(client, "put-projects-by-id", {"id": 42, "description": "new"})

    assert gitlab.last.method == "PUT"
    assert gitlab.last.url.path == "/api/v4/projects/42"
    assert gitlab.last_json() == {"description": "new"}
    assert not result.isError


@pytest.mark.asyncio
async def test_delete_project(settings):
    gitlab = FakeGitLab(status_code=202, body={"message": "202 Accepted"})
    client = GitLabClient.from_settings(settings, transport=gitlab.transport)

    result = await call_tool(client, "delete-projects-by-id", {"id": 42})

    assert gitlab.last.method == "DELETE"
    assert gitlab.last.url.path == "/api/v4/projects/42"
    assert not result.isError
    assert "202 Accepted" in result_text(result)


@pytest.mark.asyncio
@pytest.mark.parametrize("name", sorted(PROJECT_TOOLS))
async def test_every_tool_reports_network_failure(offline_client, name):
    result = await call_tool(offline_client, name, {"id": 1, "name": "demo"})

    assert result.isError
    assert result_text(result) == "API Error: Network is unreachable"


@pytest.mark.asyncio
@pytest.mark.parametrize("name", ["get-projects-by-id", "put-projects-by-id", "delete-projects-by-id"])
async def test_missing_id_is_an_error(client, gitlab, name):
    result = await call_tool(client, name, {})

    assert result.isError
    assert "Missing path parameter: id" in result_text(result)
    assert gitlab.requests == []


@pytest.mark.asyncio
async def test_api_error_description(settings):
    gitlab = FakeGitLab(status_code=400, body={"description": "has already been taken"})
    client = GitLabClient.from_settings(settings, transport=gitlab.transport)

    result = await call_tool(client, "post-projects", {"name": "demo"})

    assert result.isError
    assert result_text(result) == "API Error: has already been taken"


@pytest.mark.asyncio
async def test_unknown_tool(client, gitlab):
    result = await call_tool(client, "get-issues", {})

    assert result.isError
    assert result_text(result) == "Error: Unknown tool: get-issues"
    assert gitlab.requests == []


def test_catalog_names():
    assert set(PROJECT_TOOLS) == {
        "get-projects",
        "post-projects",
        "get-projects-by-id",
        "put-projects-by-id",
        "delete-projects-by-id",
    }

"""GitLab project operations exposed as MCP tools.

Each handler performs exactly one request and never raises: failures come
back as error results from core.envelope.handle_error.
"""

from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Optional

from mcp.types import CallToolResult

from client.gitlab_manager import GitLabClient, expand_path
from core.envelope import handle_error, handle_result

PROJECTS_PATH = "/api/v4/projects"
PROJECT_PATH = "/api/v4/projects/{id}"

Handler = Callable[[GitLabClient, Dict[str, Any]], Awaitable[CallToolResult]]


async def get_projects(client: GitLabClient, arguments: Optional[Dict[str, Any]] = None) -> CallToolResult:
    """Get a list of visible projects for authenticated user"""
    try:
        data = await client.get(PROJECTS_PATH, params=dict(arguments or {}))
        return handle_result(data)
    except Exception as e:
        return handle_error(e)


async def post_projects(client: GitLabClient, arguments: Optional[Dict[str, Any]] = None) -> CallToolResult:
    """Create new project"""
    try:
        data = await client.post(PROJECTS_PATH, json=dict(arguments or {}))
        return handle_result(data)
    except Exception as e:
        return handle_error(e)


async def get_projects_by_id(client: GitLabClient, arguments: Optional[Dict[str, Any]] = None) -> CallToolResult:
    """Get a single project"""
    try:
        path, query = expand_path(PROJECT_PATH, arguments or {})
        data = await client.get(path, params=query)
        return handle_result(data)
    except Exception as e:
        return handle_error(e)


async def put_projects_by_id(client: GitLabClient, arguments: Optional[Dict[str, Any]] = None) -> CallToolResult:
    """Update an existing project"""
    try:
        path, body = expand_path(PROJECT_PATH, arguments or {})
        data = await client.put(path, json=body)
        return handle_result(data)
    except Exception as e:
        return handle_error(e)


async def delete_projects_by_id(client: GitLabClient, arguments: Optional[Dict[str, Any]] = None) -> CallToolResult:
    """Delete a project"""
    try:
        path, query = expand_path(PROJECT_PATH, arguments or {})
        data = await client.delete(path, params=query)
        return handle_result(data)
    except Exception as e:
        return handle_error(e)


@dataclass(frozen=True)
class ProjectTool:
    name: str
    description: str
    handler: Handler


PROJECT_TOOLS: Dict[str, ProjectTool] = {
    tool.name: tool
    for tool in (
        ProjectTool("get-projects", "Get a list of visible projects for authenticated user", get_projects),
        ProjectTool("post-projects", "Create new project", post_projects),
        ProjectTool("get-projects-by-id", "Get a single project", get_projects_by_id),
        ProjectTool("put-projects-by-id", "Update an existing project", put_projects_by_id),
        ProjectTool("delete-projects-by-id", "Delete a project", delete_projects_by_id),
    )
}


async def call_tool(client: GitLabClient, name: str, arguments: Optional[Dict[str, Any]] = None) -> CallToolResult:
    tool = PROJECT_TOOLS.get(name)
    if tool is None:
        return handle_error(LookupError(f"Unknown tool: {name}"))
    return await tool.handler(client, arguments or {})

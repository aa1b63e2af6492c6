
import logging
import sys
from pathlib import Path
from typing import Annotated, List, Literal, Optional, Union

# Add parent directory to sys.path for modular imports
parent_dir = Path(__file__).resolve().parent.parent
if str(parent_dir) not in sys.path:
    sys.path.insert(0, str(parent_dir))

import httpx
from fastmcp import Context, FastMCP
from fastmcp.exceptions import ToolError
from fastmcp.tools.tool import ToolResult
from mcp.types import CallToolResult
from pydantic import Field

from client.gitlab_manager import GitLabClient
from config.settings import Settings
from core.envelope import result_text
from core.server_manager import ServerManager
from tools.projects import PROJECT_TOOLS

logger = logging.getLogger(__name__)

INSTRUCTIONS = "MCP Server for GitLab API - repository management and DevOps automation"

ProjectId = Annotated[Union[int, str], Field(description="The ID or URL-encoded path of the project")]
Visibility = Literal["private", "internal", "public"]


# wrapper locals that are not tool arguments
_NOT_ARGUMENTS = frozenset({"ctx", "call"})


def _present(arguments: dict) -> dict:
    return {key: value for key, value in arguments.items() if value is not None and key not in _NOT_ARGUMENTS}


async def _respond(ctx: Context, result: CallToolResult) -> ToolResult:
    if result.isError:
        message = result_text(result)
        await ctx.error(message)
        raise ToolError(message)
    return ToolResult(content=result.content)


def register_project_tools(mcp: FastMCP, client: GitLabClient) -> None:
    """Register the project tools on `mcp`, bound to `client`."""

    async def call(ctx: Context, name: str, arguments: dict) -> ToolResult:
        result = await PROJECT_TOOLS[name].handler(client, _present(arguments))
        return await _respond(ctx, result)

    def tool(name: str):
        return mcp.tool(name=name, description=PROJECT_TOOLS[name].description)

    @tool("get-projects")
    async def get_projects(
        ctx: Context,
        order_by: Optional[Literal["id", "name", "path", "created_at", "updated_at", "last_activity_at", "similarity", "star_count"]] = None,
        sort: Optional[Literal["asc", "desc"]] = None,
        archived: Optional[bool] = None,
        visibility: Optional[Visibility] = None,
        search: Annotated[Optional[str], Field(description="Return projects matching the search criteria")] = None,
        search_namespaces: Optional[bool] = None,
        owned: Annotated[Optional[bool], Field(description="Limit by projects explicitly owned by the current user")] = None,
        starred: Optional[bool] = None,
        imported: Optional[bool] = None,
        membership: Annotated[Optional[bool], Field(description="Limit by projects that the current user is a member of")] = None,
        with_issues_enabled: Optional[bool] = None,
        with_merge_requests_enabled: Optional[bool] = None,
        with_programming_language: Optional[str] = None,
        min_access_level: Optional[int] = None,
        id_after: Optional[int] = None,
        id_before: Optional[int] = None,
        last_activity_after: Optional[str] = None,
        last_activity_before: Optional[str] = None,
        repository_storage: Optional[str] = None,
        topic: Optional[str] = None,
        topic_id: Optional[int] = None,
        updated_before: Optional[str] = None,
        updated_after: Optional[str] = None,
        include_pending_delete: Optional[bool] = None,
        marked_for_deletion_on: Optional[str] = None,
        active: Optional[bool] = None,
        wiki_checksum_failed: Optional[bool] = None,
        repository_checksum_failed: Optional[bool] = None,
        include_hidden: Optional[bool] = None,
        page: Annotated[Optional[int], Field(ge=1)] = None,
        per_page: Annotated[Optional[int], Field(ge=1, le=100)] = None,
        simple: Annotated[Optional[bool], Field(description="Return only limited fields for each project")] = None,
        statistics: Optional[bool] = None,
        with_custom_attributes: Optional[bool] = None,
    ) -> ToolResult:
        return await call(ctx, "get-projects", locals())

    @tool("post-projects")
    async def post_projects(
        ctx: Context,
        name: Annotated[Optional[str], Field(description="Project name; required if path is not given")] = None,
        path: Annotated[Optional[str], Field(description="Repository path; required if name is not given")] = None,
        namespace_id: Annotated[Optional[int], Field(description="Namespace for the new project, defaults to the user's namespace")] = None,
        description: Optional[str] = None,
        visibility: Optional[Visibility] = None,
        default_branch: Optional[str] = None,
        initialize_with_readme: Optional[bool] = None,
        issues_enabled: Optional[bool] = None,
        merge_requests_enabled: Optional[bool] = None,
        wiki_enabled: Optional[bool] = None,
        topics: Optional[List[str]] = None,
        import_url: Optional[str] = None,
    ) -> ToolResult:
        return await call(ctx, "post-projects", locals())

    @tool("get-projects-by-id")
    async def get_projects_by_id(
        ctx: Context,
        id: ProjectId,
        statistics: Optional[bool] = None,
        with_custom_attributes: Optional[bool] = None,
        license: Optional[bool] = None,
    ) -> ToolResult:
        return await call(ctx, "get-projects-by-id", locals())

    @tool("put-projects-by-id")
    async def put_projects_by_id(
        ctx: Context,
        id: ProjectId,
        name: Optional[str] = None,
        path: Optional[str] = None,
        description: Optional[str] = None,
        visibility: Optional[Visibility] = None,
        default_branch: Optional[str] = None,
        issues_enabled: Optional[bool] = None,
        merge_requests_enabled: Optional[bool] = None,
        wiki_enabled: Optional[bool] = None,
        topics: Optional[List[str]] = None,
    ) -> ToolResult:
        return await call(ctx, "put-projects-by-id", locals())

    @tool("delete-projects-by-id")
    async def delete_projects_by_id(
        ctx: Context,
        id: ProjectId,
        full_path: Annotated[Optional[str], Field(description="Full path of the project, used with permanently_remove")] = None,
        permanently_remove: Optional[bool] = None,
    ) -> ToolResult:
        return await call(ctx, "delete-projects-by-id", locals())


def create_server(settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None) -> FastMCP:
    manager = ServerManager(settings, transport=transport)
    manager.server_implementation(instructions=INSTRUCTIONS)
    register_project_tools(manager.server, manager.client)
    return manager.server


def main() -> None:
    settings = Settings()
    logging.basicConfig(
        stream=sys.stderr,
        level=(settings.LOG_LEVEL or "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        settings.validate()
    except ValueError as e:
        logger.error("Server error: %s", e)
        sys.exit(1)

    mcp = create_server(settings)
    logger.info("GitLab MCP Server started")
    mcp.run(transport="stdio")


if __name__ == '__main__':
    main()

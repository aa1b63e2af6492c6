from fastmcp import FastMCP
from typing import Optional

import httpx

from client.gitlab_manager import GitLabClient
from config.settings import Settings

class ServerManager:
    def __init__(self, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.settings: Settings = settings
        self.server_name: str = settings.GITLAB_SERVER_NAME
        self.client: GitLabClient = GitLabClient.from_settings(settings, transport=transport)
        self._server: Optional[FastMCP] = None

    @property
    def server(self) -> FastMCP:
        if not self._server:
            raise RuntimeError("Server not initialized. Call server_implementation first.")
        return self._server

    def server_implementation(self, instructions: str = "") -> FastMCP:
        """Initializes the FastMCP server instance."""
        self._server = FastMCP(
            name=self.server_name,
            instructions=instructions
        )
        return self._server

import re
from typing import Any, Dict, Optional, Tuple
from urllib.parse import quote

import httpx

from config.settings import Settings

_PLACEHOLDER = re.compile(r"\{(\w+)\}")


def expand_path(template: str, arguments: Dict[str, Any]) -> Tuple[str, Dict[str, Any]]:
    """
    Substitute `{name}` placeholders in a path template.

    Values are URL-encoded including '/', so a project id may be given as
    'group/project'. Consumed keys are removed from the returned mapping.

    Raises:
        KeyError: a placeholder has no matching argument
    """
    remaining = dict(arguments)

    def substitute(match: re.Match) -> str:
        name = match.group(1)
        if name not in remaining:
            raise KeyError(f"Missing path parameter: {name}")
        return quote(str(remaining.pop(name)), safe="")

    path = _PLACEHOLDER.sub(substitute, template)
    return path, remaining


class GitLabClient:
    def __init__(self,
                 base_url: str,
                 token: str,
                 timeout: float = 30.0,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self.base_url: str = base_url.rstrip("/")
        self.timeout: float = timeout
        self._transport = transport
        self._headers: Dict[str, str] = {
            "Accept": "application/json",
            "PRIVATE-TOKEN": token,
        }

    @classmethod
    def from_settings(cls, settings: Settings,
                      transport: Optional[httpx.AsyncBaseTransport] = None) -> "GitLabClient":
        return cls(
            base_url=settings.GITLAB_API_URL,
            token=settings.GITLAB_TOKEN,
            timeout=settings.request_timeout,
            transport=transport,
        )

    async def request(self,
                      method: str,
                      path: str,
                      params: Optional[Dict[str, Any]] = None,
                      json: Optional[Dict[str, Any]] = None) -> Any:
        """
        Send one request and return the decoded body.

        Returns parsed JSON, the raw text when the body is not JSON, or None
        for an empty body. Non-2xx responses raise httpx.HTTPStatusError.
        """
        async with httpx.AsyncClient(
            base_url=self.base_url,
            headers=self._headers,
            timeout=self.timeout,
            transport=self._transport,
        ) as client:
            response = await client.request(method, path, params=params, json=json)
            response.raise_for_status()

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            return response.text

    async def get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        return await self.request("GET", path, params=params)

    async def post(self, path: str, json: Optional[Dict[str, Any]] = None) -> Any:
        return await self.request("POST", path, json=json)

    async def put(self, path: str, json: Optional[Dict[str, Any]] = None) -> Any:
        return await self.request("PUT", path, json=json)

    async def delete(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        return await self.request("DELETE", path, params=params)

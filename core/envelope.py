"""Uniform success/error results for every tool call."""

import json
import logging
from typing import Any, Optional

import httpx
from mcp.types import CallToolResult, TextContent

logger = logging.getLogger(__name__)


def _text_result(text: str, is_error: bool = False) -> CallToolResult:
    return CallToolResult(
        content=[TextContent(type="text", text=text)],
        isError=is_error,
    )


def result_text(result: CallToolResult) -> str:
    return "".join(block.text for block in result.content if isinstance(block, TextContent))


def handle_result(data: Any) -> CallToolResult:
    """Wrap a response payload as pretty-printed JSON text."""
    return _text_result(json.dumps(data, indent=2, ensure_ascii=False))


def _response_description(error: httpx.HTTPError) -> Optional[str]:
    # only HTTPStatusError carries a response; RequestError raises on access
    if not isinstance(error, httpx.HTTPStatusError):
        return None
    try:
        body = error.response.json()
    except ValueError:
        return None
    if isinstance(body, dict) and body.get("description"):
        return str(body["description"])
    return None


def handle_error(error: BaseException) -> CallToolResult:
    """
    Convert any failure into an error result. Never raises.

    httpx errors are reported as 'API Error: ...', preferring the
    'description' field of the response body when there is one. Anything
    else is reported as 'Error: ...'.
    """
    logger.error("Error occurred: %r", error)

    if isinstance(error, httpx.HTTPError):
        message = _response_description(error) or str(error) or type(error).__name__
        return _text_result(f"API Error: {message}", is_error=True)

    return _text_result(f"Error: {error}", is_error=True)

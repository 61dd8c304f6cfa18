"""
Common utilities for MCP tool handlers.

to_envelope() is the only way a handler outcome becomes a tool result.
"""

import json
from typing import Any

from mcp.types import CallToolResult, TextContent

from ..github_client import Failure, Success, UpstreamResult

API_ERROR_PREFIX = "GitHub API error: "


def format_body(body: Any) -> str:
    """Pretty-print an upstream JSON body (2-space indent, unicode kept)."""
    return json.dumps(body, indent=2, ensure_ascii=False)


def text_result(text: str, is_error: bool = False) -> CallToolResult:
    return CallToolResult(
        content=[TextContent(type="text", text=text)],
        isError=is_error,
    )


def to_envelope(result: UpstreamResult) -> CallToolResult:
    """
    Convert a handler outcome into the MCP tool result.

    Success -> pretty JSON of the raw body, isError=False
    Failure -> "GitHub API error: <message>", isError=True
    """
    if isinstance(result, Success):
        return text_result(format_body(result.body))
    if isinstance(result, Failure):
        return text_result(f"{API_ERROR_PREFIX}{result.message}", is_error=True)
    raise TypeError(f"Expected Success or Failure, got {type(result).__name__}")

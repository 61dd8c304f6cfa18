"""
Protocol-level error builders.

These errors reject the request itself and reach the client as JSON-RPC
errors. Failures reported by GitHub are not raised; they are returned as
tool results with isError set (see utils.to_envelope).
"""

from typing import Any, Optional

from mcp.shared.exceptions import McpError
from mcp.types import (
    INVALID_PARAMS,
    INVALID_REQUEST,
    METHOD_NOT_FOUND,
    ErrorData,
)

from .validators import MissingField


def protocol_error(code: int, message: str, data: Optional[Any] = None) -> McpError:
    return McpError(ErrorData(code=code, message=message, data=data))


def tool_not_found_error(tool_name: str) -> McpError:
    """Standard error for a tool name that is not registered"""
    return protocol_error(METHOD_NOT_FOUND, f"Unknown tool: {tool_name}")


def missing_argument_error(missing: MissingField) -> McpError:
    """Standard error for a required argument that is absent or empty"""
    return protocol_error(
        INVALID_PARAMS,
        f"Missing required argument '{missing.field_name}' for tool '{missing.tool_name}'",
        data={"tool": missing.tool_name, "field": missing.field_name},
    )


def invalid_resource_error(uri: Any) -> McpError:
    """This server exposes no resources, so every read is rejected."""
    return protocol_error(INVALID_REQUEST, f"Invalid URI format: {uri}")


def invalid_path_argument_error(tool_name: str, field_name: str, value: Any) -> McpError:
    """Standard error for an argument that would leave its URL path segment"""
    return protocol_error(
        INVALID_PARAMS,
        f"Invalid value for '{field_name}' in tool '{tool_name}': "
        f"'.' and '..' path segments are not allowed ({value!r})",
        data={"tool": tool_name, "field": field_name},
    )

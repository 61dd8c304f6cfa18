"""
MCP Tool Handlers

Handler registry pattern for tool dispatch. Each tool handler is a separate
function registered with @mcp_tool; dispatch_tool() routes by name.

Two result channels:
- McpError is raised for requests that are rejected (unknown tool, missing
  argument). No upstream call is made.
- CallToolResult is returned for every attempted operation, with isError set
  when GitHub reported a failure.
"""

from typing import Any, Dict, Optional

from mcp.shared.exceptions import McpError
from mcp.types import CallToolResult

# Import all handlers so their decorators register them
from .github import (
    handle_get_user,
    handle_create_repo,
    handle_push_to_repo,
)

from .decorators import get_tool_registry
from .error_helpers import tool_not_found_error, missing_argument_error
from .utils import to_envelope
from ..github_client import GitHubClient
from ..logging_utils import get_logger

# Populated from decorator registrations
TOOL_HANDLERS: Dict[str, Any] = dict(get_tool_registry())

_logger = get_logger(__name__)


async def dispatch_tool(
    name: str,
    arguments: Optional[Dict[str, Any]],
    client: GitHubClient,
) -> CallToolResult:
    """
    Dispatch a tool call to its handler.

    Args:
        name: Tool name
        arguments: Raw tool arguments (None is treated as no arguments)
        client: Shared GitHub client

    Returns:
        CallToolResult for the attempted operation

    Raises:
        McpError: Unknown tool or missing required argument
    """
    # tool_schemas imports the schema models from this package
    from ..tool_schemas import TOOL_PARAM_MODELS, get_tool_spec
    from .validators import build_params, validate_required_params

    if arguments is None:
        arguments = {}

    spec = get_tool_spec(name)
    handler = TOOL_HANDLERS.get(name)
    if spec is None or handler is None:
        _logger.warning(f"Rejected call to unknown tool '{name}'")
        raise tool_not_found_error(name)

    missing = validate_required_params(spec, arguments)
    if missing is not None:
        _logger.warning(f"Rejected call to '{name}': missing '{missing.field_name}'")
        raise missing_argument_error(missing)

    params = build_params(TOOL_PARAM_MODELS[name], arguments)

    try:
        result = await handler(client, params)
    except McpError:
        raise
    except Exception as e:
        _logger.error(f"Tool '{name}' error: {e}", exc_info=True)
        raise

    return to_envelope(result)


__all__ = [
    "TOOL_HANDLERS",
    "dispatch_tool",
    "handle_get_user",
    "handle_create_repo",
    "handle_push_to_repo",
]

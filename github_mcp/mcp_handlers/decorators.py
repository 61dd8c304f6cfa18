"""
MCP Tool Decorators - Auto-registration

Handlers register themselves by name; the dispatcher looks them up in the
registry built here.
"""

from dataclasses import dataclass
from typing import Awaitable, Callable, Dict, Optional
from functools import wraps
import time

from ..logging_utils import get_logger

logger = get_logger(__name__)

ToolHandler = Callable[..., Awaitable]


@dataclass
class ToolDefinition:
    """A registered tool handler."""
    name: str
    handler: ToolHandler


_TOOL_DEFINITIONS: Dict[str, ToolDefinition] = {}


def mcp_tool(name: Optional[str] = None):
    """
    Decorator for MCP tool handlers with auto-registration.

    The wrapped handler keeps its signature, handler(client, params), and logs
    its duration at debug level. Exceptions are not caught here.

    Usage:
        @mcp_tool("get_user")
        async def handle_get_user(client, params): ...

    Args:
        name: Tool name (defaults to function name without 'handle_' prefix)
    """
    def decorator(func: ToolHandler) -> ToolHandler:
        tool_name = name or func.__name__.replace('handle_', '')

        @wraps(func)
        async def wrapper(client, params):
            start_time = time.monotonic()
            try:
                return await func(client, params)
            finally:
                elapsed = time.monotonic() - start_time
                logger.debug(f"Tool '{tool_name}' finished in {elapsed:.3f}s")

        wrapper._mcp_tool_name = tool_name

        if tool_name in _TOOL_DEFINITIONS:
            raise ValueError(f"Tool '{tool_name}' is already registered")
        _TOOL_DEFINITIONS[tool_name] = ToolDefinition(
            name=tool_name,
            handler=wrapper,
        )
        return wrapper
    return decorator


def get_tool_registry() -> Dict[str, ToolHandler]:
    """Get the registered tool handlers."""
    return {name: td.handler for name, td in _TOOL_DEFINITIONS.items()}


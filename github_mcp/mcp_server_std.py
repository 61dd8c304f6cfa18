#!/usr/bin/env python3
"""
GitHub MCP Server - Standard MCP Protocol Implementation (stdio)

Usage:
    GITHUB_TOKEN=... github-mcp
    GITHUB_TOKEN=... python -m github_mcp.mcp_server_std --log-level DEBUG

Configuration:
    Add to the MCP client config with GITHUB_TOKEN in the server's env.
"""

import argparse
import asyncio
import signal
import sys
from typing import Optional, Sequence

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp import types
from pydantic import AnyUrl

from . import SERVER_NAME, SERVER_VERSION
from .github_client import GitHubClient
from .logging_utils import configure_logging, get_logger
from .mcp_handlers import dispatch_tool
from .mcp_handlers.error_helpers import invalid_resource_error
from .runtime_config import ConfigurationError, Settings, load_settings
from .tool_schemas import get_tool_definitions

logger = get_logger(__name__)


def create_server(client: GitHubClient) -> Server:
    """
    Build the MCP server bound to one GitHub client.

    tools/call is registered as a raw request handler so McpError raised by
    dispatch_tool reaches the client as a JSON-RPC error instead of being
    folded into an isError tool result.
    """
    server = Server(SERVER_NAME, version=SERVER_VERSION)

    @server.list_tools()
    async def list_tools() -> list[types.Tool]:
        """List all available MCP tools"""
        return get_tool_definitions()

    @server.list_resources()
    async def list_resources() -> list[types.Resource]:
        return []

    @server.list_resource_templates()
    async def list_resource_templates() -> list[types.ResourceTemplate]:
        return []

    @server.read_resource()
    async def read_resource(uri: AnyUrl) -> str:
        raise invalid_resource_error(uri)

    async def call_tool(req: types.CallToolRequest) -> types.ServerResult:
        """Handle tool calls from MCP client"""
        result = await dispatch_tool(req.params.name, req.params.arguments, client)
        return types.ServerResult(result)

    server.request_handlers[types.CallToolRequest] = call_tool
    return server


async def main(settings: Settings) -> None:
    """Serve MCP over stdio until the input stream closes."""
    async with GitHubClient(settings) as client:
        server = create_server(client)
        async with stdio_server() as (read_stream, write_stream):
            logger.info(f"GitHub MCP server running on stdio (API: {client.base_url})")
            await server.run(
                read_stream,
                write_stream,
                server.create_initialization_options(),
            )


def _install_signal_handlers(task: asyncio.Task) -> None:
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, task.cancel)
        except NotImplementedError:
            # Windows event loop: SIGINT still arrives as KeyboardInterrupt
            break


async def serve(settings: Settings) -> None:
    """Run main() and turn SIGINT/SIGTERM into a clean shutdown."""
    _install_signal_handlers(asyncio.current_task())
    try:
        await main(settings)
    except asyncio.CancelledError:
        logger.info("Received shutdown signal, server stopped")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="github-mcp",
        description="GitHub MCP server (stdio transport)",
    )
    parser.add_argument("--api-url", help="GitHub API base URL (overrides GITHUB_API_URL)")
    parser.add_argument("--timeout", type=float, help="HTTP timeout in seconds (overrides GITHUB_MCP_TIMEOUT)")
    parser.add_argument("--log-level", help="Log level (overrides GITHUB_MCP_LOG_LEVEL)")
    return parser


def load_cli_settings(argv: Optional[Sequence[str]] = None) -> Settings:
    """Environment settings with command-line overrides applied."""
    args = build_parser().parse_args(argv)
    return load_settings().with_overrides(
        api_url=args.api_url,
        timeout=args.timeout,
        log_level=args.log_level,
    )


def run(argv: Optional[Sequence[str]] = None) -> None:
    """Console entry point."""
    try:
        settings = load_cli_settings(argv)
    except ConfigurationError as e:
        print(f"[GitHub MCP] Error: {e}", file=sys.stderr)
        sys.exit(1)

    configure_logging(settings.log_level)
    try:
        asyncio.run(serve(settings))
    except KeyboardInterrupt:
        logger.info("Interrupted, server stopped")


if __name__ == "__main__":
    run()

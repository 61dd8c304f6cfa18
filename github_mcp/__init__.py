"""
GitHub MCP Server

Exposes a small set of GitHub REST operations as Model Context Protocol tools.
"""

SERVER_NAME = "github-mcp"
SERVER_VERSION = "1.0.0"

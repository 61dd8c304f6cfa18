"""
Tests for github_mcp/mcp_handlers/__init__.py - dispatch_tool.

Covers the two result channels: McpError for rejected requests (no upstream
call made) and CallToolResult for attempted operations.
"""

import base64
import json

import pytest
from mcp.shared.exceptions import McpError
from mcp.types import INVALID_PARAMS, METHOD_NOT_FOUND, CallToolResult

from github_mcp.github_client import Failure, Success
from github_mcp.mcp_handlers import TOOL_HANDLERS, dispatch_tool


VALID_ARGUMENTS = {
    "get_user": {"username": "octocat"},
    "create_repo": {"repo_name": "x"},
    "push_to_repo": {"repo_name": "hello", "file_path": "a.txt", "content": "hi"},
}

REQUIRED_FIELDS = [
    ("get_user", "username"),
    ("create_repo", "repo_name"),
    ("push_to_repo", "repo_name"),
    ("push_to_repo", "file_path"),
    ("push_to_repo", "content"),
]


def assert_no_upstream_calls(client):
    client.get.assert_not_awaited()
    client.post.assert_not_awaited()
    client.put.assert_not_awaited()


def test_all_tools_registered():
    assert set(TOOL_HANDLERS) == {"get_user", "create_repo", "push_to_repo"}


class TestProtocolErrors:

    @pytest.mark.asyncio
    @pytest.mark.parametrize("name", ["delete_repo", "", "GET_USER", "list_tools"])
    async def test_unknown_tool(self, mock_client, name):
        with pytest.raises(McpError) as exc_info:
            await dispatch_tool(name, {"username": "octocat"}, mock_client)

        assert exc_info.value.error.code == METHOD_NOT_FOUND
        assert exc_info.value.error.message == f"Unknown tool: {name}"
        assert_no_upstream_calls(mock_client)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("tool, field", REQUIRED_FIELDS)
    async def test_omitted_required_field(self, mock_client, tool, field):
        arguments = dict(VALID_ARGUMENTS[tool])
        del arguments[field]

        with pytest.raises(McpError) as exc_info:
            await dispatch_tool(tool, arguments, mock_client)

        error = exc_info.value.error
        assert error.code == INVALID_PARAMS
        assert f"'{field}'" in error.message
        assert error.data == {"tool": tool, "field": field}
        assert_no_upstream_calls(mock_client)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("tool, field", REQUIRED_FIELDS)
    async def test_empty_required_field(self, mock_client, tool, field):
        arguments = dict(VALID_ARGUMENTS[tool], **{field: ""})

        with pytest.raises(McpError):
            await dispatch_tool(tool, arguments, mock_client)
        assert_no_upstream_calls(mock_client)

    @pytest.mark.asyncio
    async def test_null_arguments(self, mock_client):
        with pytest.raises(McpError) as exc_info:
            await dispatch_tool("get_user", None, mock_client)
        assert exc_info.value.error.code == INVALID_PARAMS
        assert_no_upstream_calls(mock_client)

    @pytest.mark.asyncio
    async def test_handler_exception_propagates(self, mock_client):
        # /user answered without a login: an internal error, not an API error
        mock_client.get.return_value = Success(body={"id": 1})

        with pytest.raises(KeyError):
            await dispatch_tool("push_to_repo", VALID_ARGUMENTS["push_to_repo"], mock_client)


class TestEnvelopes:

    @pytest.mark.asyncio
    async def test_success_is_pretty_printed_body(self, mock_client):
        body = {"login": "octocat", "id": 583231, "name": "The Octocat"}
        mock_client.get.return_value = Success(body=body)

        result = await dispatch_tool("get_user", {"username": "octocat"}, mock_client)

        assert isinstance(result, CallToolResult)
        assert result.isError is False
        assert len(result.content) == 1
        assert result.content[0].type == "text"
        assert result.content[0].text == json.dumps(body, indent=2)
        assert json.loads(result.content[0].text) == body

    @pytest.mark.asyncio
    @pytest.mark.parametrize("tool", ["get_user", "create_repo", "push_to_repo"])
    async def test_not_found_is_in_band_error(self, mock_client, tool):
        mock_client.get.return_value = Failure("Not Found", 404)
        mock_client.post.return_value = Failure("Not Found", 404)

        result = await dispatch_tool(tool, VALID_ARGUMENTS[tool], mock_client)

        assert result.isError is True
        assert result.content[0].text == "GitHub API error: Not Found"

    @pytest.mark.asyncio
    async def test_network_error_message_kept_verbatim(self, mock_client):
        mock_client.post.return_value = Failure("[Errno 111] Connection refused")

        result = await dispatch_tool("create_repo", {"repo_name": "x"}, mock_client)

        assert result.isError is True
        assert result.content[0].text == "GitHub API error: [Errno 111] Connection refused"

    @pytest.mark.asyncio
    async def test_create_repo_body_with_only_name(self, mock_client):
        mock_client.post.return_value = Success(body={"name": "x"})

        await dispatch_tool("create_repo", {"repo_name": "x"}, mock_client)

        mock_client.post.assert_awaited_once_with("/user/repos", json={"name": "x", "private": False})

    @pytest.mark.asyncio
    async def test_create_repo_null_private_defaults_false(self, mock_client):
        mock_client.post.return_value = Success(body={})

        await dispatch_tool("create_repo", {"repo_name": "x", "private": None}, mock_client)

        assert mock_client.post.await_args.kwargs["json"]["private"] is False

    @pytest.mark.asyncio
    async def test_push_to_repo_end_to_end(self, mock_client):
        mock_client.get.side_effect = [
            Success(body={"login": "octocat"}),
            Success(body={"sha": "abc123"}),
        ]
        put_body = {"content": {"path": "a.txt"}, "commit": {"message": "Update via GitHub MCP"}}
        mock_client.put.return_value = Success(body=put_body)

        result = await dispatch_tool("push_to_repo", VALID_ARGUMENTS["push_to_repo"], mock_client)

        assert result.isError is False
        assert json.loads(result.content[0].text) == put_body
        sent = mock_client.put.await_args.kwargs["json"]
        assert sent["sha"] == "abc123"
        assert base64.b64decode(sent["content"]).decode("utf-8") == "hi"

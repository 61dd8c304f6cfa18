"""
GitHub tool handlers.

Each handler receives the shared GitHubClient and its argument record, and
returns the UpstreamResult to report. Handlers never build tool results
themselves; the dispatcher normalizes whatever they return.
"""

import base64
import json
from typing import Any, Optional
from urllib.parse import quote

from ..github_client import Failure, GitHubClient, Success, UpstreamResult
from ..logging_utils import get_logger
from .decorators import mcp_tool
from .error_helpers import invalid_path_argument_error
from .schemas.github import CreateRepoParams, GetUserParams, PushToRepoParams

logger = get_logger(__name__)

# URL normalization collapses these, which would move the request to another endpoint
DOT_SEGMENTS = frozenset({".", ".."})


def has_dot_segment(value: Any, allow_slashes: bool = False) -> bool:
    text = str(value)
    segments = text.split("/") if allow_slashes else [text]
    return any(segment in DOT_SEGMENTS for segment in segments)


def check_path_argument(tool_name: str, field_name: str, value: Any, allow_slashes: bool = False) -> None:
    """Raise INVALID_PARAMS before any upstream call if value contains a dot segment."""
    if has_dot_segment(value, allow_slashes=allow_slashes):
        raise invalid_path_argument_error(tool_name, field_name, value)


def path_segment(value: Any) -> str:
    """Encode one path segment (slashes included)."""
    if has_dot_segment(value):
        raise ValueError(f"Dot segment not allowed in URL path: {value!r}")
    return quote(str(value), safe="")


def contents_path(owner: str, repo: str, file_path: str) -> str:
    """/repos/{owner}/{repo}/contents/{file_path}; file_path keeps its slashes."""
    file_path = str(file_path).lstrip("/")
    if has_dot_segment(file_path, allow_slashes=True):
        raise ValueError(f"Dot segment not allowed in URL path: {file_path!r}")
    return (
        f"/repos/{path_segment(owner)}/{path_segment(repo)}"
        f"/contents/{quote(file_path, safe='/')}"
    )


def encode_content(content: Any) -> str:
    """
    Base64 of the UTF-8 bytes of the content, as GitHub's contents API expects.

    Non-string values (a JSON object or array sent by the client) are written
    as their JSON text.
    """
    if not isinstance(content, str):
        content = json.dumps(content, indent=2, ensure_ascii=False)
    return base64.b64encode(content.encode("utf-8")).decode("ascii")


@mcp_tool("get_user")
async def handle_get_user(client: GitHubClient, params: GetUserParams) -> UpstreamResult:
    """Get GitHub user information"""
    check_path_argument("get_user", "username", params.username)
    return await client.get(f"/users/{path_segment(params.username)}")


@mcp_tool("create_repo")
async def handle_create_repo(client: GitHubClient, params: CreateRepoParams) -> UpstreamResult:
    """Create a new GitHub repository"""
    body = {"name": params.repo_name}
    if params.description is not None:
        body["description"] = params.description
    body["private"] = params.private
    return await client.post("/user/repos", json=body)


async def find_existing_sha(client: GitHubClient, path: str) -> tuple[Optional[str], Optional[Failure]]:
    """
    Look up the blob SHA of a file that may not exist yet.

    Returns:
        (sha, None) when the file exists, (None, None) when GitHub answers
        404, and (None, failure) for any other failure.
    """
    result = await client.get(path)
    if isinstance(result, Success):
        # A directory path yields a list, which has no single sha.
        if isinstance(result.body, dict):
            return result.body.get("sha"), None
        return None, None
    if result.is_not_found:
        return None, None
    return None, result


@mcp_tool("push_to_repo")
async def handle_push_to_repo(client: GitHubClient, params: PushToRepoParams) -> UpstreamResult:
    """
    Push content to a GitHub repository

    Three calls, in order:
      1. GET /user for the authenticated login (contents are addressed by owner/repo)
      2. GET the current file to obtain its sha; 404 means a new file
      3. PUT the base64 content, with the sha when the file already exists
    """
    check_path_argument("push_to_repo", "repo_name", params.repo_name)
    check_path_argument("push_to_repo", "file_path", str(params.file_path).lstrip("/"), allow_slashes=True)

    identity = await client.get("/user")
    if isinstance(identity, Failure):
        return identity
    owner = identity.body["login"]

    path = contents_path(owner, params.repo_name, params.file_path)

    sha, lookup_failure = await find_existing_sha(client, path)
    if lookup_failure is not None:
        return lookup_failure

    body = {
        "message": params.message,
        "content": encode_content(params.content),
    }
    if sha:
        body["sha"] = sha
    logger.info(f"Writing {path} ({'update' if sha else 'create'})")
    return await client.put(path, json=body)

"""
GitHub REST client used by the tool handlers.

Wraps a single httpx.AsyncClient bound to one base URL and one credential.
Every call is one attempt: the outcome is returned as an UpstreamResult
(Success or Failure) instead of raising, so handlers can decide which
failures to surface.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

import httpx

from .runtime_config import Settings
from .logging_utils import get_logger

logger = get_logger(__name__)

GITHUB_MEDIA_TYPE = "application/vnd.github+json"


@dataclass(frozen=True)
class Success:
    """2xx response with its decoded JSON body (None for an empty body)."""
    body: Any


@dataclass(frozen=True)
class Failure:
    """
    Upstream call that did not succeed.

    status_code is None when no HTTP response was received (DNS, connect,
    timeout and other transport errors).
    """
    message: str
    status_code: Optional[int] = None

    @property
    def is_not_found(self) -> bool:
        return self.status_code == 404


UpstreamResult = Union[Success, Failure]


def build_headers(settings: Settings) -> Dict[str, str]:
    """Headers attached to every upstream request."""
    return {
        "Authorization": f"Bearer {settings.token.get_secret_value()}",
        "Accept": GITHUB_MEDIA_TYPE,
        "X-GitHub-Api-Version": settings.api_version,
    }


def _error_message(response: httpx.Response) -> str:
    # GitHub error bodies look like {"message": "...", "documentation_url": "..."}
    try:
        data = response.json()
    except ValueError:
        data = None
    if isinstance(data, dict) and data.get("message") is not None:
        return str(data["message"])
    return f"Request failed with status code {response.status_code}"


class GitHubClient:
    """
    Pre-authenticated GitHub API client.

    Usage:
        async with GitHubClient(settings) as client:
            result = await client.get("/user")
    """

    def __init__(self, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        self._settings = settings
        self._http = httpx.AsyncClient(
            base_url=settings.api_url,
            headers=build_headers(settings),
            timeout=settings.timeout,
            transport=transport,
        )

    @property
    def base_url(self) -> str:
        return str(self._http.base_url)

    async def __aenter__(self) -> "GitHubClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    async def get(self, path: str) -> UpstreamResult:
        return await self.request("GET", path)

    async def post(self, path: str, json: Optional[Dict[str, Any]] = None) -> UpstreamResult:
        return await self.request("POST", path, json=json)

    async def put(self, path: str, json: Optional[Dict[str, Any]] = None) -> UpstreamResult:
        return await self.request("PUT", path, json=json)

    async def request(self, method: str, path: str, json: Optional[Dict[str, Any]] = None) -> UpstreamResult:
        """
        Perform a single request against the bound base URL.

        Args:
            method: HTTP verb
            path: Path relative to the base URL (e.g. "/users/octocat")
            json: Optional JSON body

        Returns:
            Success with the decoded body, or Failure with a readable message
        """
        try:
            response = await self._http.request(method, path, json=json)
        except httpx.RequestError as e:
            message = str(e) or type(e).__name__
            logger.warning(f"{method} {path} failed: {message}")
            return Failure(message=message)

        logger.debug(f"{method} {path} -> {response.status_code}")

        if not response.is_success:
            message = _error_message(response)
            logger.warning(f"{method} {path} returned {response.status_code}: {message}")
            return Failure(message=message, status_code=response.status_code)

        if not response.content:
            return Success(body=None)
        try:
            return Success(body=response.json())
        except ValueError as e:
            logger.warning(f"{method} {path} returned a non-JSON body: {e}")
            return Failure(
                message=f"Invalid JSON in response: {e}",
                status_code=response.status_code,
            )

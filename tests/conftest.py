"""
Pytest configuration and fixtures for github-mcp tests.
"""
import json
import sys
from pathlib import Path
from unittest.mock import AsyncMock

import httpx
import pytest
from pydantic import SecretStr

project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from github_mcp.github_client import GitHubClient
from github_mcp.runtime_config import Settings

TEST_API_URL = "https://api.github.test"
TEST_TOKEN = "ghp_test_token"


@pytest.fixture
def settings():
    return Settings(token=SecretStr(TEST_TOKEN), api_url=TEST_API_URL)


@pytest.fixture
def mock_client():
    """GitHubClient double; configure get/post/put return values per test."""
    return AsyncMock(spec=GitHubClient)


class RecordingTransport:
    """
    httpx.MockTransport wrapper that records every request.

    `responder` maps a request to an httpx.Response (or raises).
    """

    def __init__(self, responder):
        self.requests: list[httpx.Request] = []
        self._responder = responder
        self.transport = httpx.MockTransport(self._handle)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._responder(request)

    def json_bodies(self):
        return [json.loads(r.content) if r.content else None for r in self.requests]


@pytest.fixture
def make_http_client(settings):
    """Factory: build a real GitHubClient over a RecordingTransport."""
    def _make(responder):
        recorder = RecordingTransport(responder)
        return GitHubClient(settings, transport=recorder.transport), recorder
    return _make

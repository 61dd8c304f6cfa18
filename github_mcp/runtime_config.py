"""
Runtime Configuration

Settings are read once from the process environment at startup and are
immutable afterwards. The GitHub token is the only required value.
"""

import os
from dataclasses import dataclass, replace
from typing import Mapping, Optional

from pydantic import SecretStr

from .logging_utils import LOG_LEVELS

DEFAULT_API_URL = "https://api.github.com"
DEFAULT_API_VERSION = "2022-11-28"
DEFAULT_TIMEOUT = 30.0
DEFAULT_LOG_LEVEL = "INFO"


class ConfigurationError(Exception):
    """Raised when the environment cannot produce a usable configuration."""


@dataclass(frozen=True)
class Settings:
    """Process-wide server settings."""
    token: SecretStr
    api_url: str = DEFAULT_API_URL
    api_version: str = DEFAULT_API_VERSION
    timeout: float = DEFAULT_TIMEOUT
    log_level: str = DEFAULT_LOG_LEVEL

    def with_overrides(
        self,
        api_url: Optional[str] = None,
        timeout: Optional[float] = None,
        log_level: Optional[str] = None,
    ) -> "Settings":
        """Return a copy with command-line overrides applied."""
        changes = {}
        if api_url:
            changes["api_url"] = api_url.rstrip("/")
        if timeout is not None:
            changes["timeout"] = _check_timeout(timeout)
        if log_level:
            changes["log_level"] = _check_log_level(log_level)
        return replace(self, **changes)


def _check_timeout(value: float) -> float:
    if value <= 0:
        raise ConfigurationError(f"Timeout must be positive, got {value}")
    return value


def _check_log_level(value: str) -> str:
    level = value.strip().upper()
    if level not in LOG_LEVELS:
        raise ConfigurationError(
            f"Log level must be one of {', '.join(LOG_LEVELS)}, got {value!r}"
        )
    return level


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """
    Build Settings from environment variables.

    Args:
        environ: Mapping to read from (defaults to os.environ)

    Raises:
        ConfigurationError: GITHUB_TOKEN missing or blank, or a malformed value
    """
    if environ is None:
        environ = os.environ

    token = environ.get("GITHUB_TOKEN", "").strip()
    if not token:
        raise ConfigurationError("GITHUB_TOKEN environment variable is required")

    raw_timeout = environ.get("GITHUB_MCP_TIMEOUT", "").strip()
    if raw_timeout:
        try:
            timeout = float(raw_timeout)
        except ValueError:
            raise ConfigurationError(
                f"GITHUB_MCP_TIMEOUT must be a number of seconds, got {raw_timeout!r}"
            ) from None
        _check_timeout(timeout)
    else:
        timeout = DEFAULT_TIMEOUT

    return Settings(
        token=SecretStr(token),
        api_url=(environ.get("GITHUB_API_URL", "").strip() or DEFAULT_API_URL).rstrip("/"),
        api_version=environ.get("GITHUB_API_VERSION", "").strip() or DEFAULT_API_VERSION,
        timeout=timeout,
        log_level=_check_log_level(environ.get("GITHUB_MCP_LOG_LEVEL", "").strip() or DEFAULT_LOG_LEVEL),
    )

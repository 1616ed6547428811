"""Connection and retry domain configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Mapping
from urllib.parse import urlparse

from SimpleElastic.config.common import Section


@dataclass(frozen=True, slots=True)
class ConnectionConfig:
    """Store validated backend connection settings.

    Attributes:
        host: Backend base URL, after the `host_env` override.
        host_env: Environment variable overriding `host` when set.
        timeout: Per-request timeout in seconds.
    """

    host: str
    host_env: str
    timeout: float


@dataclass(frozen=True, slots=True)
class RetryConfig:
    """Fixed-delay retry settings for the initial search request."""

    count: int
    delay: float


def load_connection(raw: Mapping[str, Any]) -> ConnectionConfig:
    """Load connection domain config from raw mapping.

    Args:
        raw: Root configuration mapping.

    Returns:
        Parsed connection configuration.

    Raises:
        TypeError: If config types are invalid.
        ValueError: If required keys are missing.
    """
    section = Section.of(raw, "connection", required=True)
    host_env = section.text("host_env", "")
    return ConnectionConfig(
        host=_host_from_env(host_env) or section.text("host"),
        host_env=host_env,
        timeout=section.seconds("timeout"),
    )


def load_retry(raw: Mapping[str, Any]) -> RetryConfig:
    section = Section.of(raw, "retry", required=False)
    return RetryConfig(count=section.integer("count", 0), delay=section.seconds("delay", 0.0))


def check_connection(config: ConnectionConfig) -> None:
    """Validate connection domain constraints.

    Raises:
        ValueError: If the host is not an http(s) URL or the timeout is zero.
    """
    parsed = urlparse(config.host.strip())
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ValueError(f"connection.host must be an http(s) URL, got {config.host!r}")
    if config.timeout <= 0:
        raise ValueError("connection.timeout must be positive")


def check_retry(config: RetryConfig) -> None:
    if config.count < 0:
        raise ValueError("retry.count must not be negative")


def _host_from_env(env_name: str) -> str:
    if not env_name.strip():
        return ""
    return os.getenv(env_name.strip(), "").strip()

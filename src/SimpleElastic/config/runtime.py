"""Runtime domain configuration (logging and traffic tracing)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from SimpleElastic.config.common import Section

_ALLOWED_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


@dataclass(frozen=True, slots=True)
class RuntimeConfig:
    """Store validated logging and tracing settings.

    The trace flags mirror outbound requests, inbound responses and error
    text to stderr through the connection's diagnostic sinks.
    """

    level: str
    to_file: bool
    dir: str
    trace_requests: bool = False
    trace_responses: bool = False
    trace_errors: bool = False


def load_runtime(raw: Mapping[str, Any]) -> RuntimeConfig:
    """Load runtime configuration from raw mapping.

    Args:
        raw: Root configuration mapping.

    Returns:
        Parsed runtime configuration.

    Raises:
        TypeError: If config types are invalid.
        ValueError: If required keys are missing.
    """
    log_section = Section.of(raw, "log", required=True)
    trace = Section.of(raw, "trace", required=False)
    return RuntimeConfig(
        level=log_section.text("level").upper(),
        to_file=log_section.flag("to_file"),
        dir=log_section.text("dir"),
        trace_requests=trace.flag("requests", False),
        trace_responses=trace.flag("responses", False),
        trace_errors=trace.flag("errors", False),
    )


def check_runtime(config: RuntimeConfig) -> None:
    """Validate runtime domain constraints.

    Raises:
        ValueError: If values violate runtime constraints.
    """
    if config.level not in _ALLOWED_LOG_LEVELS:
        raise ValueError(f"log.level must be one of {sorted(_ALLOWED_LOG_LEVELS)}")
    if config.to_file and not config.dir.strip():
        raise ValueError("log.dir must not be empty when log.to_file=true")

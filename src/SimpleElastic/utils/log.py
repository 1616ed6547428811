"""SimpleElastic logging utilities.

Provides a simple logger with a timestamp + abbreviated level prefix,
centralizes logger initialization, and holds the optional diagnostic sinks a
connection can mirror its traffic to.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Final, TextIO


_LEVEL_ABBREV: Final[dict[int, str]] = {
    logging.DEBUG: "DEBG",
    logging.INFO: "INFO",
    logging.WARNING: "WARN",
    logging.ERROR: "ERRO",
    logging.CRITICAL: "ERRO",
}


class _AbbrevLevelFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:  # noqa: A003 - record is stdlib name
        """Format one log record with an abbreviated level.

        Args:
            record: Logging record.

        Returns:
            Formatted message string.
        """
        record.levelabbr = _LEVEL_ABBREV.get(record.levelno, record.levelname[:4])
        return super().format(record)


log = logging.getLogger("SimpleElastic")


def configure_logging(
    *,
    level: str = "INFO",
    action: str | None = None,
    log_to_file: bool = False,
    log_dir: str = "log",
) -> None:
    """Configure the SimpleElastic logger.

    Uses format: mm-dd HH:MM:SS [<LVL>] <message>
    where LVL is one of: DEBG/INFO/WARN/ERRO.

    Args:
        level: Logging level (e.g., INFO, DEBUG).
        action: CLI action name used to create the log file path.
        log_to_file: Whether to mirror logs to a file.
        log_dir: Base directory for log files.
    """
    resolved_level = getattr(logging, (level or "INFO").upper(), logging.INFO)

    formatter = _AbbrevLevelFormatter(
        fmt="%(asctime)s [%(levelabbr)s] %(message)s",
        datefmt="%m-%d %H:%M:%S",
    )

    handlers: list[logging.Handler] = []

    # stderr; stdout is reserved for command output.
    stream_handler = logging.StreamHandler()
    stream_handler.setLevel(resolved_level)
    stream_handler.setFormatter(formatter)
    handlers.append(stream_handler)

    if log_to_file and action:
        timestamp = datetime.now().strftime("%m%d%H%M%S")
        action_dir = Path(log_dir or "log") / action
        action_dir.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(action_dir / f"{action}_{timestamp}.log", encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    log.handlers.clear()
    for handler in handlers:
        log.addHandler(handler)
    log.setLevel(min(logging.DEBUG, resolved_level))
    log.propagate = False


@dataclass(slots=True)
class DiagnosticSinks:
    """Optional text streams mirroring a connection's traffic.

    Attributes:
        outbound: Receives the request line, the body and the round-trip time.
        inbound: Receives pretty-printed response bodies.
        errors: Receives error text.
    """

    outbound: TextIO | None = None
    inbound: TextIO | None = None
    errors: TextIO | None = None

    def request(self, method: str, url: str, body: str | None) -> None:
        log.debug("-> %s %s body=%s", method, url, body or "")
        _write(self.outbound, f"{method} {url}", body or "")

    def timing(self, seconds: float) -> None:
        log.debug("query time: %.3fs", seconds)
        _write(self.outbound, f"query time: {seconds:.3f}s")

    def response(self, payload: Any) -> None:
        if self.inbound is not None:
            _write(self.inbound, json.dumps(payload, indent=2, ensure_ascii=False))

    def error(self, text: str) -> None:
        log.debug("request error: %s", text)
        _write(self.errors, text)


def _write(stream: TextIO | None, *lines: str) -> None:
    """Print `lines` to `stream`; a broken sink never fails the request."""
    if stream is None:
        return
    try:
        for line in lines:
            print(line, file=stream)
    except (OSError, ValueError) as e:
        log.debug("Diagnostic sink write failed: %s", e)

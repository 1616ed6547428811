"""Factory functions for CLI component creation.

Centralizes connection setup so commands receive a ready connection and
tests can substitute their own.
"""

from __future__ import annotations

import sys

from SimpleElastic.client.connection import Connection
from SimpleElastic.config import AppConfig
from SimpleElastic.utils.log import log


def create_connection(config: AppConfig) -> Connection:
    """Create a connection with trace sinks wired to stderr as configured.

    Args:
        config: Application configuration.

    Returns:
        Connection to the configured host.
    """
    runtime = config.runtime
    connection = Connection(
        config.connection.host,
        timeout=config.connection.timeout,
        out_log=sys.stderr if runtime.trace_requests else None,
        in_log=sys.stderr if runtime.trace_responses else None,
        err_log=sys.stderr if runtime.trace_errors else None,
    )
    log.debug("Connection created: host=%s timeout=%.1fs", connection.host, connection.timeout)
    return connection

"""Command runner for coordinating CLI execution.

Manages logging configuration, connection lifecycle and error handling for
command execution.
"""

from __future__ import annotations

from collections.abc import Callable

import click

from SimpleElastic.cli.factories import create_connection
from SimpleElastic.client.connection import Connection
from SimpleElastic.config import AppConfig
from SimpleElastic.utils.log import configure_logging, log


class CommandRunner:
    """Orchestrates command execution with proper resource management."""

    def __init__(
        self,
        config: AppConfig,
        connection_factory: Callable[[AppConfig], Connection] = create_connection,
    ) -> None:
        """Initialize command runner.

        Args:
            config: Application configuration.
            connection_factory: Builds the connection commands run against.
        """
        self.config = config
        self.connection_factory = connection_factory

    def run(self, action: str, command_factory: Callable[[Connection], object]) -> None:
        """Execute one command with logging and connection cleanup.

        Args:
            action: The CLI command name (e.g., 'search').
            command_factory: Builds the command object from a connection;
                the object must provide `execute()`.

        Raises:
            click.Abort: When the command fails.
        """
        configure_logging(
            level=self.config.runtime.level,
            action=action,
            log_to_file=self.config.runtime.to_file,
            log_dir=self.config.runtime.dir,
        )
        try:
            with self.connection_factory(self.config) as connection:
                command_factory(connection).execute()
        except Exception as e:  # noqa: BLE001 - cli boundary
            log.error("%s failed: %s", action, e)
            raise click.Abort from e

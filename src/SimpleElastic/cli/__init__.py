"""CLI package for SimpleElastic command orchestration.

This package contains the click interface, the command runner and the
command implementations.
"""

from __future__ import annotations

__all__ = ["CommandRunner", "main"]

from SimpleElastic.cli.runner import CommandRunner
from SimpleElastic.cli.ui import cli


def main() -> None:
    """Run SimpleElastic CLI.

    Entry point referenced by console script in pyproject.toml.
    """
    cli()

"""Click CLI interface definitions.

Defines the command-line interface structure and routes commands
to their respective runners.
"""

from __future__ import annotations

from pathlib import Path

import click
from dotenv import load_dotenv

from SimpleElastic.cli.commands import IndexCommand, SearchCommand
from SimpleElastic.cli.runner import CommandRunner
from SimpleElastic.config import load_config


@click.group(help="SimpleElastic: query a search backend from the terminal.")
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=Path("config/default.yml"),
    show_default=True,
    help="Path to YAML config file.",
)
@click.pass_context
def cli(ctx: click.Context, config_path: Path) -> None:
    """CLI entry group.

    Loads environment variables from .env file before processing config.

    Args:
        ctx: Click context.
        config_path: Path to YAML config file.
    """
    load_dotenv()
    ctx.obj = load_config(config_path)


@cli.command("search")
@click.option("--index", "indices", multiple=True, help="Index to search; repeatable.")
@click.option("--term", "terms", multiple=True, metavar="FIELD=VALUE", help="Exact match; repeat a field for terms.")
@click.option("--exists", "exists", multiple=True, metavar="FIELD", help="Require the field to exist.")
@click.option("--sort", "sorts", multiple=True, metavar="FIELD[:ORDER]", help="Sort field, order asc or desc.")
@click.option("--source", "sources", multiple=True, metavar="FIELD", help="Return only these source fields.")
@click.option("--size", type=click.IntRange(min=1), default=None, help="Page size.")
@click.option("--limit", type=click.IntRange(min=0), default=None, help="Maximum hits, 0 for all.")
@click.pass_context
def search_cmd(
    ctx: click.Context,
    indices: tuple[str, ...],
    terms: tuple[str, ...],
    exists: tuple[str, ...],
    sorts: tuple[str, ...],
    sources: tuple[str, ...],
    size: int | None,
    limit: int | None,
) -> None:
    """Search and print one JSON line per hit source.

    Raises:
        click.Abort: When the search fails.
    """
    cfg = ctx.obj
    runner = CommandRunner(cfg)
    runner.run(
        ctx.command.name,
        lambda connection: SearchCommand(
            config=cfg,
            connection=connection,
            indices=indices,
            terms=terms,
            exists=exists,
            sorts=sorts,
            sources=sources,
            size=size,
            limit=limit,
            emit=click.echo,
        ),
    )


@cli.command("index")
@click.argument("action", type=click.Choice(["open", "close", "check"]))
@click.argument("names", nargs=-1, required=True)
@click.pass_context
def index_cmd(ctx: click.Context, action: str, names: tuple[str, ...]) -> None:
    """Open, close or check the state of indices.

    Raises:
        click.Abort: When the backend call fails.
    """
    runner = CommandRunner(ctx.obj)
    runner.run(
        f"index-{action}",
        lambda connection: IndexCommand(connection=connection, action=action, names=names, emit=click.echo),
    )

"""CLI entry point for the groups.io archive search tool."""

import logging

import click
from dotenv import load_dotenv

from src.groupsio.client import ClientConfig

logger = logging.getLogger(__name__)


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Log page-by-page progress.")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """Search a groups.io message archive and export the results."""
    load_dotenv()
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)-8s %(name)s — %(message)s",
    )
    try:
        ctx.obj = ClientConfig.from_env()
    except ValueError as exc:
        raise click.UsageError(f"Invalid configuration: {exc}") from exc


# Import and register commands after cli is defined to avoid circular imports.
from src.cli.commands import search  # noqa: E402

cli.add_command(search)

"""CLI command implementations — all commands delegate to run_search."""

from __future__ import annotations

import asyncio
from pathlib import Path

import click
from rich.console import Console

from src.cli.output import ConsoleSink, FileSink
from src.groupsio.client import ClientConfig, groupsio_client
from src.groupsio.types import Credentials, SearchTarget
from src.search.paginator import ArchivePaginator
from src.search.projector import OutputMode
from src.search.runner import ResultSink, run_search

console = Console(width=200)


@click.command()
@click.argument("query")
@click.option("--group-id", type=int, default=None, help="Numeric ID of the group to search.")
@click.option("--group-name", default=None, help="Name of the group to search.")
@click.option(
    "--mode",
    type=click.Choice([m.value for m in OutputMode]),
    default=OutputMode.BODY.value,
    show_default=True,
    help="full: raw records, body: message bodies, summary: subject/from/date/snippet.",
)
@click.option(
    "--output",
    "output_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write results as JSON to this file instead of the terminal.",
)
@click.option("--email", envvar="GROUPS_IO_EMAIL", default=None, help="groups.io login email.")
@click.option(
    "--password", envvar="GROUPS_IO_PASSWORD", default=None, help="groups.io login password."
)
@click.pass_obj
def search(
    config: ClientConfig,
    query: str,
    group_id: int | None,
    group_name: str | None,
    mode: str,
    output_path: Path | None,
    email: str | None,
    password: str | None,
) -> None:
    """Search a group's message archive for QUERY."""
    if (group_id is None) == (group_name is None):
        raise click.UsageError("Specify exactly one of --group-id or --group-name.")
    if not email or not password:
        raise click.UsageError(
            "Credentials required: pass --email/--password "
            "or set GROUPS_IO_EMAIL and GROUPS_IO_PASSWORD."
        )

    target = SearchTarget(query=query, group_id=group_id, group_name=group_name)
    sink: ResultSink = FileSink(output_path, console) if output_path else ConsoleSink(console)
    exit_code = asyncio.run(
        _search_async(config, Credentials(email, password), target, OutputMode(mode), sink)
    )
    if exit_code:
        console.print("[red]Login failed. Cannot continue.[/red]")
        click.get_current_context().exit(exit_code)


async def _search_async(
    config: ClientConfig,
    credentials: Credentials,
    target: SearchTarget,
    mode: OutputMode,
    sink: ResultSink,
) -> int:
    console.print("Logging in to groups.io...")
    async with groupsio_client(config) as client:
        paginator = ArchivePaginator(client, page_delay=config.page_delay_seconds)
        return await run_search(client, credentials, target, sink, mode, paginator)

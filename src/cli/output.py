"""Result sinks — where projected search results end up."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from rich.console import Console
from rich.json import JSON
from rich.markup import escape
from rich.panel import Panel

from src.groupsio.types import SearchTarget
from src.search.projector import OutputMode, Projected

logger = logging.getLogger(__name__)


def _no_results(console: Console, target: SearchTarget) -> None:
    query = escape(repr(target.query))
    console.print(f"[yellow]No results for {query} in group {target.group_label}.[/yellow]")


class FileSink:
    """Writes projected results to a file as indented JSON."""

    def __init__(self, path: Path, console: Console) -> None:
        self._path = path
        self._console = console

    def emit(self, projected: Projected, mode: OutputMode) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(
            json.dumps(projected, indent=2, ensure_ascii=False), encoding="utf-8"
        )
        logger.info("Wrote %d %s result(s) to %s", len(projected), mode.value, self._path)
        self._console.print(
            f"[green]Search complete![/green] {len(projected)} result(s) saved to {self._path}"
        )

    def no_results(self, target: SearchTarget) -> None:
        _no_results(self._console, target)


class ConsoleSink:
    """Renders projected results on the terminal.

    Full and body-only results print as indented JSON; summaries print as a
    numbered listing, one panel per message.
    """

    def __init__(self, console: Console) -> None:
        self._console = console

    def emit(self, projected: Projected, mode: OutputMode) -> None:
        if mode is OutputMode.SUMMARY:
            self._print_summary(projected)
        else:
            self._console.print(
                JSON.from_data(projected, indent=2, ensure_ascii=False), soft_wrap=True
            )

    def no_results(self, target: SearchTarget) -> None:
        _no_results(self._console, target)

    def _print_summary(self, projected: Projected) -> None:
        self._console.print(f"\nFound [bold]{len(projected)}[/bold] message(s)\n")
        for i, item in enumerate(projected, start=1):
            self._console.print(
                Panel(
                    escape(item.get("snippet") or "") or "[dim](no body)[/dim]",
                    title=f"[bold]{i}. {escape(item.get('subject') or '(no subject)')}[/bold]",
                    subtitle=escape(f"{item.get('from', '')}  {item.get('date', '')}".strip()),
                    title_align="left",
                    border_style="blue",
                )
            )

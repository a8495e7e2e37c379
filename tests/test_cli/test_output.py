"""Tests for FileSink and ConsoleSink."""

import io
import json
from pathlib import Path

from rich.console import Console

from src.cli.output import ConsoleSink, FileSink
from src.groupsio.types import SearchTarget
from src.search.projector import OutputMode


def _console() -> tuple[Console, io.StringIO]:
    buf = io.StringIO()
    return Console(file=buf, width=120), buf


class TestFileSink:
    def test_writes_indented_json(self, tmp_path: Path) -> None:
        console, _ = _console()
        path = tmp_path / "out.json"
        FileSink(path, console).emit(["first", "second"], OutputMode.BODY)
        text = path.read_text(encoding="utf-8")
        assert json.loads(text) == ["first", "second"]
        assert text.startswith("[\n  ")

    def test_keeps_non_ascii(self, tmp_path: Path) -> None:
        console, _ = _console()
        path = tmp_path / "out.json"
        FileSink(path, console).emit(["Zażółć"], OutputMode.BODY)
        assert "Zażółć" in path.read_text(encoding="utf-8")

    def test_summary_written_as_json(self, tmp_path: Path) -> None:
        console, buf = _console()
        path = tmp_path / "out.json"
        item = {"subject": "s", "from": "f", "date": "d", "snippet": "x"}
        FileSink(path, console).emit([item], OutputMode.SUMMARY)
        assert json.loads(path.read_text(encoding="utf-8")) == [item]
        assert "1 result(s) saved" in buf.getvalue()

    def test_no_results_does_not_create_file(self, tmp_path: Path) -> None:
        console, buf = _console()
        path = tmp_path / "out.json"
        FileSink(path, console).no_results(SearchTarget(query="oil", group_id=7))
        assert not path.exists()
        assert "No results for 'oil' in group 7" in buf.getvalue()


class TestConsoleSink:
    def test_body_mode_prints_json(self) -> None:
        console, buf = _console()
        ConsoleSink(console).emit(["hello world"], OutputMode.BODY)
        assert json.loads(buf.getvalue()) == ["hello world"]

    def test_summary_mode_prints_listing(self) -> None:
        console, buf = _console()
        ConsoleSink(console).emit(
            [
                {"subject": "Pump", "from": "bob", "date": "2023-01-02", "snippet": "It broke"},
                {"subject": "", "from": "", "date": "", "snippet": ""},
            ],
            OutputMode.SUMMARY,
        )
        out = buf.getvalue()
        assert "Found 2 message(s)" in out
        assert "1. Pump" in out
        assert "It broke" in out
        assert "bob" in out
        assert "2. (no subject)" in out
        assert "(no body)" in out

    def test_no_results(self) -> None:
        console, buf = _console()
        ConsoleSink(console).no_results(SearchTarget(query="oil", group_name="boats"))
        assert "No results for 'oil' in group boats" in buf.getvalue()

from __future__ import annotations

import logging
import os
from pathlib import Path

import pytest

from logstream.config import SortPattern
from logstream.locator import DEFAULT_STREAM, locate_logstreams, order_logfiles
from logstream.models import LogFile, index_of

DATED = SortPattern(
    file_match=r"(?P<Year>\d{4})/(?P<MonthName>\w+)/(?P<Day>\d+)/\w+-(?P<Seq>\d+)\.log$",
    priority=("Year", "MonthName", "Day", "^Seq"),
)

HOSTS = SortPattern(
    file_match=r"(?P<Host>[a-z]+)-(?P<Seq>\d+)\.log$",
    priority=("^Seq",),
    differentiator=("Host", "-access"),
)


def touch(root: Path, *relative: str) -> None:
    for name in relative:
        path = root / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("", encoding="utf-8")


def relative_paths(root: Path, paths: list[str]) -> list[str]:
    return [Path(os.path.relpath(path, root)).as_posix() for path in paths]


class TestLocateLogstreams:
    """End-to-end tests for locate_logstreams."""

    def test_orders_by_calendar_then_descending_sequence(self, tmp_path: Path) -> None:
        """Test date ordering with rotated sequence numbers inside a day."""
        touch(
            tmp_path,
            "2013/August/08/xyz-2.log",
            "2013/August/08/xyz-11.log",
            "2013/Jul/31/xyz-1.log",
            "2012/December/01/xyz-1.log",
            "2013/August/10/xyz-1.log",
        )
        result = locate_logstreams(tmp_path, DATED)

        assert result.errors is None
        assert list(result.streams) == [DEFAULT_STREAM]
        ordered = relative_paths(tmp_path, result.ordered_paths()[DEFAULT_STREAM])
        assert ordered == [
            "2012/December/01/xyz-1.log",
            "2013/Jul/31/xyz-1.log",
            "2013/August/08/xyz-11.log",
            "2013/August/08/xyz-2.log",
            "2013/August/10/xyz-1.log",
        ]
        # ascending calendar keys put the most recent day last
        assert ordered[-1].startswith("2013/August/10")

    def test_interleaved_streams_are_separated(self, tmp_path: Path) -> None:
        """Test that files of different hosts sort independently."""
        touch(tmp_path, "web-1.log", "db-3.log", "web-3.log", "db-1.log", "web-2.log")
        result = locate_logstreams(tmp_path, HOSTS)

        paths = result.ordered_paths()
        assert sorted(paths) == ["db-access", "web-access"]
        assert relative_paths(tmp_path, paths["web-access"]) == ["web-3.log", "web-2.log", "web-1.log"]
        assert relative_paths(tmp_path, paths["db-access"]) == ["db-3.log", "db-1.log"]

    def test_parse_failures_do_not_hide_good_files(self, tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
        """Test that good files are ordered and bad ones reported together."""
        touch(
            tmp_path,
            "2013/August/08/xyz-1.log",
            "2013/Smarch/08/xyz-1.log",
            "2013/Octember/01/xyz-1.log",
            "2013/May/01/xyz-1.log",
        )
        with caplog.at_level(logging.WARNING, logger="logstream.locator"):
            result = locate_logstreams(tmp_path, DATED)

        assert result.scanned == 4
        assert result.parsed == 2
        assert result.failed == 2
        assert result.errors is not None
        assert len(result.errors.messages) == 2
        assert relative_paths(tmp_path, result.ordered_paths()[DEFAULT_STREAM]) == [
            "2013/May/01/xyz-1.log",
            "2013/August/08/xyz-1.log",
        ]
        assert "Logfile Parse Errors" in caplog.text

    def test_repeated_runs_are_identical(self, tmp_path: Path) -> None:
        """Test that an unchanged tree always yields the same ordering."""
        touch(tmp_path, "b-1.log", "a-2.log", "a-1.log", "b-2.log", "c-1.log")
        first = locate_logstreams(tmp_path, HOSTS).ordered_paths()
        second = locate_logstreams(tmp_path, HOSTS).ordered_paths()
        assert first == second

    def test_empty_directory(self, tmp_path: Path) -> None:
        """Test that an empty tree yields a single empty stream."""
        result = locate_logstreams(tmp_path, DATED)
        assert result.scanned == 0
        assert result.errors is None
        assert result.ordered_paths() == {DEFAULT_STREAM: []}

    def test_resume_position(self, tmp_path: Path) -> None:
        """Test locating a previously read file within its ordered stream."""
        touch(tmp_path, "web-1.log", "web-2.log", "web-3.log")
        result = locate_logstreams(tmp_path, HOSTS)
        stream = result.streams["web-access"]
        assert index_of(stream, str(tmp_path / "web-2.log")) == 1


class TestOrderLogfiles:
    """Tests for order_logfiles on in-memory records."""

    def test_custom_translation(self) -> None:
        """Test ordering by a caller-supplied translation table."""
        pattern = SortPattern(
            file_match=r"app\.(?P<Level>[a-z]+)\.log$",
            translation={"Level": {"old": 0, "older": 1, "oldest": 2}},
            priority=("^Level",),
        )
        files = [LogFile("app.older.log"), LogFile("app.oldest.log"), LogFile("app.old.log")]
        result = order_logfiles(files, pattern)
        assert result.ordered_paths()[DEFAULT_STREAM] == ["app.oldest.log", "app.older.log", "app.old.log"]

    def test_only_parsed_files_are_grouped(self) -> None:
        """Test that failed files never appear in a stream."""
        pattern = SortPattern(file_match=r"(?P<DayName>[A-Za-z]+)-(?P<Host>[a-z]+)\.log$", differentiator=("Host",))
        files = [LogFile("Mon-web.log"), LogFile("Funday-web.log"), LogFile("tue-db.log")]
        result = order_logfiles(files, pattern)
        assert result.ordered_paths() == {"web": ["Mon-web.log"], "db": ["tue-db.log"]}
        assert result.errors is not None
        assert result.errors.failed == [files[1]]

from __future__ import annotations

import logging
import os
import re
from pathlib import Path

import pytest

from logstream.scanner import scan_directory_for_logfiles

LOG_PATTERN = re.compile(r"-(?P<Seq>\d+)\.log$")


def touch(root: Path, *relative: str) -> None:
    for name in relative:
        path = root / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("", encoding="utf-8")


class TestScanDirectoryForLogfiles:
    """Tests for scan_directory_for_logfiles."""

    def test_finds_matching_files_recursively(self, tmp_path: Path) -> None:
        """Test that matching files in nested directories are found."""
        touch(tmp_path, "app-1.log", "2013/August/app-2.log", "2013/August/08/app-3.log")
        files = scan_directory_for_logfiles(tmp_path, LOG_PATTERN)
        assert sorted(f.path for f in files) == sorted(
            [
                os.path.join(str(tmp_path), "app-1.log"),
                os.path.join(str(tmp_path), "2013", "August", "app-2.log"),
                os.path.join(str(tmp_path), "2013", "August", "08", "app-3.log"),
            ]
        )

    def test_non_matching_files_are_excluded(self, tmp_path: Path) -> None:
        """Test that files whose path does not match are skipped."""
        touch(tmp_path, "app-1.log", "app.log", "notes.txt", "app-2.log.gz")
        files = scan_directory_for_logfiles(tmp_path, LOG_PATTERN)
        assert [Path(f.path).name for f in files] == ["app-1.log"]

    def test_directories_are_never_matched(self, tmp_path: Path) -> None:
        """Test that a directory whose name matches is traversed but not returned."""
        (tmp_path / "old-1.log").mkdir()
        touch(tmp_path, "old-1.log/app-2.log")
        files = scan_directory_for_logfiles(tmp_path, LOG_PATTERN)
        assert [Path(f.path).name for f in files] == ["app-2.log"]

    def test_pattern_sees_the_full_path(self, tmp_path: Path) -> None:
        """Test that directory components can be matched by the pattern."""
        touch(tmp_path, "2013/app-1.log", "misc/app-2.log")
        files = scan_directory_for_logfiles(tmp_path, r"(?P<Year>\d{4})/app-\d+\.log$")
        assert [Path(f.path).name for f in files] == ["app-1.log"]

    def test_results_are_unparsed(self, tmp_path: Path) -> None:
        """Test that scanned records carry only their path."""
        touch(tmp_path, "app-1.log")
        (logfile,) = scan_directory_for_logfiles(tmp_path, LOG_PATTERN)
        assert not logfile.parsed
        assert logfile.raw_parts == {}
        assert logfile.score_parts == {}

    def test_scan_is_repeatable(self, tmp_path: Path) -> None:
        """Test that scanning an unchanged tree twice gives identical output."""
        touch(tmp_path, "b/app-1.log", "a/app-2.log", "c/d/app-3.log", "app-4.log")
        first = scan_directory_for_logfiles(tmp_path, LOG_PATTERN)
        second = scan_directory_for_logfiles(tmp_path, LOG_PATTERN)
        assert [f.path for f in first] == [f.path for f in second]

    def test_missing_directory_returns_empty(self, tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
        """Test that a missing root yields nothing and logs a warning."""
        with caplog.at_level(logging.WARNING, logger="logstream.scanner"):
            files = scan_directory_for_logfiles(tmp_path / "absent", LOG_PATTERN)
        assert files == []
        assert "Log Directory Missing" in caplog.text

    def test_root_file_is_tested_directly(self, tmp_path: Path) -> None:
        """Test that a file passed as the root is matched on its own path."""
        touch(tmp_path, "app-1.log")
        files = scan_directory_for_logfiles(tmp_path / "app-1.log", LOG_PATTERN)
        assert [f.path for f in files] == [str(tmp_path / "app-1.log")]

    @pytest.mark.skipif(os.name == "nt" or os.geteuid() == 0, reason="requires POSIX permissions as non-root")
    def test_unreadable_directory_is_skipped(self, tmp_path: Path) -> None:
        """Test that a permission error does not abort the scan."""
        touch(tmp_path, "ok/app-1.log", "locked/app-2.log")
        locked = tmp_path / "locked"
        locked.chmod(0)
        try:
            files = scan_directory_for_logfiles(tmp_path, LOG_PATTERN)
        finally:
            locked.chmod(0o755)
        assert [Path(f.path).name for f in files] == ["app-1.log"]

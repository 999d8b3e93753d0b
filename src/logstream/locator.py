"""End-to-end ordering of the logfiles of one sort pattern.

Scans a directory, parses every matching path, splits the files into logical
streams when a differentiator is configured, and sorts each stream by
priority. Parse failures are collected and reported alongside the streams
built from the files that did parse.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Union

from .config import SortPattern
from .differentiator import filter_multiple_stream_files
from .errors import MultipleError
from .logging_utils import render_fields_block, render_items_block
from .models import LogFile, StreamGroup
from .parser import populate_match_parts
from .scanner import scan_directory_for_logfiles
from .sorting import sort_by_priority

LOGGER = logging.getLogger(__name__)

# Stream name used when no differentiator is configured
DEFAULT_STREAM = ""


@dataclass
class LocateResult:
    streams: StreamGroup = field(default_factory=dict)
    errors: Optional[MultipleError] = None
    scanned: int = 0

    @property
    def parsed(self) -> int:
        return sum(len(files) for files in self.streams.values())

    @property
    def failed(self) -> int:
        return len(self.errors) if self.errors else 0

    def ordered_paths(self) -> Dict[str, List[str]]:
        return {name: [logfile.path for logfile in files] for name, files in self.streams.items()}


def order_logfiles(files: List[LogFile], sort_pattern: SortPattern) -> LocateResult:
    """Parse, group and sort already-discovered logfiles."""
    result = LocateResult(scanned=len(files))
    try:
        parsed = populate_match_parts(files, sort_pattern.compiled_regex(), sort_pattern.translation)
    except MultipleError as exc:
        parsed = exc.parsed
        result.errors = exc
        LOGGER.warning(
            render_items_block(
                "Logfile Parse Errors",
                {"Failed": len(exc), "Parsed": len(parsed)},
                "Errors",
                exc.messages,
            )
        )

    if sort_pattern.differentiator:
        groups = filter_multiple_stream_files(parsed, sort_pattern.differentiator)
    else:
        groups = {DEFAULT_STREAM: list(parsed)}

    result.streams = {name: sort_by_priority(members, sort_pattern.priority) for name, members in groups.items()}
    return result


def locate_logstreams(directory: Union[str, os.PathLike[str]], sort_pattern: SortPattern) -> LocateResult:
    """Return the ordered logfiles of every stream under ``directory``."""
    files = scan_directory_for_logfiles(directory, sort_pattern.compiled_regex())
    result = order_logfiles(files, sort_pattern)
    LOGGER.info(
        render_fields_block(
            "Logstreams Located",
            {
                "Directory": os.fspath(directory),
                "Scanned": result.scanned,
                "Parsed": result.parsed,
                "Failed": result.failed,
                "Streams": len(result.streams),
            },
        )
    )
    return result

"""Splitting interleaved logfiles into logical streams.

A differentiator is a list of tokens. Each token that names a capture group
is replaced by the file's raw captured text; any other token is used
literally. The concatenation identifies the stream a file belongs to, so a
differentiator made only of literals puts every file in one stream.
"""

from __future__ import annotations

from typing import Iterable, Sequence

from .models import LogFile, StreamGroup


def resolve_differentiated_name(logfile: LogFile, differentiator: Sequence[str]) -> str:
    parts = []
    for token in differentiator:
        parts.append(logfile.raw_parts.get(token, token))
    return "".join(parts)


def filter_multiple_stream_files(files: Iterable[LogFile], differentiator: Sequence[str]) -> StreamGroup:
    """Group logfiles by their resolved differentiator name, keeping input order."""
    streams: StreamGroup = {}
    for logfile in files:
        name = resolve_differentiated_name(logfile, differentiator)
        streams.setdefault(name, []).append(logfile)
    return streams

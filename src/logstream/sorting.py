"""Priority ordering of parsed logfiles.

A priority is a list of capture group names, most significant first. Keys are
ascending (oldest first) unless prefixed with ``^``, which sorts that key
descending, e.g. a rotation sequence where a higher number means older::

    ["Year", "MonthName", "Day", "^Seq"]

A key missing from a file's scores compares as ``0``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, List, Sequence, Tuple

if TYPE_CHECKING:  # pragma: no cover
    from .models import LogFile

DESCENDING_MARKER = "^"
MISSING_SCORE = 0


def split_priority_key(key: str) -> Tuple[str, bool]:
    """Return ``(group_name, descending)`` for one priority entry."""
    if key.startswith(DESCENDING_MARKER):
        return key[len(DESCENDING_MARKER):], True
    return key, False


def less(first: "LogFile", second: "LogFile", priority: Sequence[str]) -> bool:
    """Return True if ``first`` sorts before ``second``.

    The first key whose scores differ decides; files equal on every key are
    tied and ``first`` is not less than ``second``.
    """
    for key in priority:
        name, descending = split_priority_key(key)
        a = first.score_parts.get(name, MISSING_SCORE)
        b = second.score_parts.get(name, MISSING_SCORE)
        if a != b:
            return (a > b) if descending else (a < b)
    return False


def priority_key(logfile: "LogFile", priority: Sequence[str]) -> Tuple[int, ...]:
    """Sort key equivalent to :func:`less` for integer scores."""
    key: List[int] = []
    for entry in priority:
        name, descending = split_priority_key(entry)
        score = logfile.score_parts.get(name, MISSING_SCORE)
        key.append(-score if descending else score)
    return tuple(key)


def sort_by_priority(files: Iterable["LogFile"], priority: Sequence[str]) -> List["LogFile"]:
    """Return a new list of ``files`` ordered by ``priority``; ties keep input order."""
    keys = list(priority)
    return sorted(files, key=lambda logfile: priority_key(logfile, keys))

"""Filename parsing and capture scoring.

A sort pattern's named capture groups pull ordering fields out of each
logfile path. Every captured value is translated to an integer score:

- ``MonthName`` and ``DayName`` captures use the built-in calendar tables
- captures with a custom translation table use an exact lookup
- all-digit captures use their numeric value
- anything else scores ``-1`` (no ordering information)
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING, Dict, Iterable, List, Optional, Sequence, Tuple, Union

from .errors import (
    FileParseError,
    MultipleError,
    UnresolvedCalendarTokenError,
    UnresolvedTokenError,
    UnresolvedTranslationTokenError,
)
from .translation import DAY_GROUP, MONTH_GROUP, TranslationTable, lookup_day, lookup_month

if TYPE_CHECKING:  # pragma: no cover
    from .models import LogFile

LOGGER = logging.getLogger(__name__)

UNMATCHED_SCORE = -1

# ASCII only; str.isdigit() would also accept other unicode digits
DIGITS_PATTERN = re.compile(r"[0-9]+")


def capture_names(regex: re.Pattern[str]) -> List[str]:
    """Return the name of every capture group in order, ``""`` for unnamed ones."""
    names = [""] * regex.groups
    for name, index in regex.groupindex.items():
        names[index - 1] = name
    return names


def score_capture(name: str, value: str, translation: Optional[TranslationTable] = None) -> int:
    """Translate one captured value to its sort score.

    Raises:
        UnresolvedCalendarTokenError: for an unknown month or day name
        UnresolvedTranslationTokenError: for a value missing from its custom table
    """
    if name == MONTH_GROUP:
        score = lookup_month(value)
        if score is None:
            raise UnresolvedCalendarTokenError(name, value)
        return score
    if name == DAY_GROUP:
        score = lookup_day(value)
        if score is None:
            raise UnresolvedCalendarTokenError(name, value)
        return score
    if translation and name in translation:
        submap = translation[name]
        if value not in submap:
            raise UnresolvedTranslationTokenError(name, value)
        return submap[value]
    if DIGITS_PATTERN.fullmatch(value):
        return int(value)
    return UNMATCHED_SCORE


def parse_captures(
    names: Sequence[str],
    values: Sequence[Optional[str]],
    translation: Optional[TranslationTable] = None,
    *,
    path: str = "",
) -> Tuple[Dict[str, str], Dict[str, int]]:
    """Build the raw and scored capture mappings for one file.

    Unnamed groups are ignored. Every slot is attempted even after a failure
    so the raised error lists all unresolved values of the file.

    Raises:
        FileParseError: if any named capture could not be scored
    """
    raw_parts: Dict[str, str] = {}
    score_parts: Dict[str, int] = {}
    problems: List[str] = []

    for name, value in zip(names, values):
        if not name:
            continue
        text = value if value is not None else ""
        raw_parts[name] = text
        try:
            score_parts[name] = score_capture(name, text, translation)
        except UnresolvedTokenError as exc:
            problems.append(str(exc))

    if problems:
        raise FileParseError(path, problems)
    return raw_parts, score_parts


def _compile(file_match: Union[str, re.Pattern[str]]) -> re.Pattern[str]:
    if isinstance(file_match, re.Pattern):
        return file_match
    return re.compile(file_match)


def populate_match_parts(
    files: Iterable["LogFile"],
    file_match: Union[str, re.Pattern[str]],
    translation: Optional[TranslationTable] = None,
) -> List["LogFile"]:
    """Parse every logfile path against ``file_match``.

    All files are attempted. Files that parse are updated in place and
    returned; if any failed, a :class:`MultipleError` with one message per
    failed file is raised once every file has been tried. The error's
    ``parsed`` list still holds the files that succeeded.

    Raises:
        MultipleError: if one or more files failed to parse
    """
    regex = _compile(file_match)
    names = capture_names(regex)
    errors = MultipleError()
    parsed: List["LogFile"] = []

    for logfile in files:
        match = regex.search(logfile.path)
        if match is None:
            error = FileParseError(logfile.path, [f"does not match pattern {regex.pattern!r}"])
        else:
            try:
                logfile.populate_match_parts(names, match.groups(), translation)
            except FileParseError as exc:
                error = exc
            else:
                parsed.append(logfile)
                continue
        LOGGER.debug("Unable to parse %s: %s", logfile.path, "; ".join(error.messages))
        errors.add_message(str(error))
        errors.failed.append(logfile)

    if errors.is_error:
        errors.parsed = parsed
        raise errors
    return parsed

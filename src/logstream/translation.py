"""Token translation tables.

Month and day names embedded in filenames are converted to integers so they
can be compared. The built-in tables are case-insensitive; caller-supplied
tables are matched against the exact raw token.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

MONTH_LOOKUP: Mapping[str, int] = MappingProxyType(
    {
        "january": 1,
        "jan": 1,
        "february": 2,
        "feb": 2,
        "march": 3,
        "mar": 3,
        "april": 4,
        "apr": 4,
        "may": 5,
        "june": 6,
        "jun": 6,
        "july": 7,
        "jul": 7,
        "august": 8,
        "aug": 8,
        "september": 9,
        "sep": 9,
        "october": 10,
        "oct": 10,
        "november": 11,
        "nov": 11,
        "december": 12,
        "dec": 12,
    }
)

# Monday is 0, matching datetime.date.weekday()
DAY_LOOKUP: Mapping[str, int] = MappingProxyType(
    {
        "monday": 0,
        "mon": 0,
        "tuesday": 1,
        "tue": 1,
        "wednesday": 2,
        "wed": 2,
        "thursday": 3,
        "thu": 3,
        "friday": 4,
        "fri": 4,
        "saturday": 5,
        "sat": 5,
        "sunday": 6,
        "sun": 6,
    }
)

MONTH_GROUP = "MonthName"
DAY_GROUP = "DayName"

# group name -> raw token -> score
TranslationTable = Mapping[str, Mapping[str, int]]


def lookup_month(token: str) -> int | None:
    return MONTH_LOOKUP.get(token.lower())


def lookup_day(token: str) -> int | None:
    return DAY_LOOKUP.get(token.lower())


def freeze_translation(data: Mapping[str, Mapping[str, object]] | None) -> TranslationTable:
    """Return a read-only copy of a translation table with integer scores.

    Raises:
        ValueError: if a score cannot be converted to an integer
    """
    if not data:
        return MappingProxyType({})
    frozen: dict[str, Mapping[str, int]] = {}
    for group, submap in data.items():
        scores: dict[str, int] = {}
        for token, score in (submap or {}).items():
            try:
                scores[str(token)] = int(score)  # type: ignore[call-overload]
            except (TypeError, ValueError) as exc:
                raise ValueError(f"Translation score for '{group}.{token}' must be an integer, got: {score!r}") from exc
        frozen[str(group)] = MappingProxyType(scores)
    return MappingProxyType(frozen)

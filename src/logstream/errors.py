"""Exceptions raised while parsing and ordering logfiles."""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, List, Optional

if TYPE_CHECKING:  # pragma: no cover
    from .models import LogFile

MESSAGE_SEPARATOR = " :: "


class LogstreamError(Exception):
    """Base class for all logstream errors."""


class ConfigError(LogstreamError, ValueError):
    """Raised when a sort configuration cannot be built."""


class UnresolvedTokenError(LogstreamError, ValueError):
    """A captured token has no entry in the table used to score it."""

    def __init__(self, group: str, value: str, message: str) -> None:
        super().__init__(message)
        self.group = group
        self.value = value


class UnresolvedCalendarTokenError(UnresolvedTokenError):
    def __init__(self, group: str, value: str) -> None:
        kind = "month name" if group == "MonthName" else "day name"
        super().__init__(group, value, f"Unable to locate {kind}: {value}")


class UnresolvedTranslationTokenError(UnresolvedTokenError):
    def __init__(self, group: str, value: str) -> None:
        super().__init__(group, value, f"Unable to locate value: ({value}) in translation map: {group}")


class FileParseError(LogstreamError):
    """One file could not be scored. Holds every slot failure for that file."""

    def __init__(self, path: str, messages: Iterable[str]) -> None:
        self.path = path
        self.messages = list(messages)
        super().__init__(f"{path}: {'; '.join(self.messages)}")


class MultipleError(LogstreamError):
    """Collects independent failures into a single reportable error.

    Messages are accumulated with :meth:`add_message`; ``str()`` joins them
    with ``" :: "``. When raised by the parser, ``parsed`` and ``failed`` hold
    the logfiles that did and did not parse.
    """

    def __init__(self, messages: Optional[Iterable[str]] = None) -> None:
        super().__init__()
        self.messages: List[str] = list(messages or [])
        self.parsed: List["LogFile"] = []
        self.failed: List["LogFile"] = []

    def add_message(self, message: str) -> None:
        self.messages.append(message)

    @property
    def is_error(self) -> bool:
        return len(self.messages) > 0

    def __len__(self) -> int:
        return len(self.messages)

    def __str__(self) -> str:
        return MESSAGE_SEPARATOR.join(self.messages)

from __future__ import annotations

import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

from .errors import ConfigError
from .translation import TranslationTable, freeze_translation
from .utils import load_yaml_file

_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


@dataclass(frozen=True)
class SortPattern:
    r"""One logical sorting task.

    Example, for logfiles named ``2013/August/08/xyz-11.log`` where a higher
    sequence number means an older file::

        SortPattern(
            file_match=r"(?P<Year>\d{4})/(?P<MonthName>\w+)/(?P<Day>\d+)/\w+-(?P<Seq>\d+)\.log",
            priority=("Year", "MonthName", "Day", "^Seq"),
        )

    Attributes:
        file_match: Regex searched in each path. Groups to sort on must be
            named; ``MonthName`` and ``DayName`` are translated from English
            month and day names.
        translation: Custom group -> raw value -> score lookups for values
            that are neither numbers nor calendar names.
        priority: Group names, most significant first. Ascending means
            oldest first; prefix a name with ``^`` to sort it descending.
        differentiator: Capture names and literal strings whose concatenation
            identifies the logical stream of a file.
    """

    file_match: str
    translation: TranslationTable = field(default_factory=dict, hash=False)
    priority: tuple[str, ...] = ()
    differentiator: tuple[str, ...] = ()
    _regex: re.Pattern[str] = field(init=False, repr=False, compare=False, hash=False)

    def __post_init__(self) -> None:
        try:
            regex = re.compile(self.file_match)
        except re.error as exc:
            raise ConfigError(f"file_match {self.file_match!r} is not a valid regular expression: {exc}") from exc
        object.__setattr__(self, "_regex", regex)
        object.__setattr__(self, "translation", freeze_translation(self.translation))
        object.__setattr__(self, "priority", tuple(self.priority))
        object.__setattr__(self, "differentiator", tuple(self.differentiator))

    def compiled_regex(self) -> re.Pattern[str]:
        return self._regex

    def group_names(self) -> list[str]:
        return list(self.compiled_regex().groupindex)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any], *, field_name: str = "sort_pattern") -> "SortPattern":
        if not isinstance(data, Mapping):
            raise ConfigError(f"'{field_name}' must be provided as a mapping")
        file_match = data.get("file_match")
        if not isinstance(file_match, str) or not file_match:
            raise ConfigError(f"'{field_name}.file_match' must be a non-empty string")

        translation_raw = data.get("translation") or {}
        if not isinstance(translation_raw, Mapping) or not all(
            isinstance(submap, Mapping) for submap in translation_raw.values()
        ):
            raise ConfigError(f"'{field_name}.translation' must map group names to value -> score mappings")

        try:
            return cls(
                file_match=file_match,
                translation=translation_raw,
                priority=tuple(_ensure_string_list(data.get("priority"), field_name=f"{field_name}.priority")),
                differentiator=tuple(
                    _ensure_string_list(data.get("differentiator"), field_name=f"{field_name}.differentiator")
                ),
            )
        except ValueError as exc:
            raise ConfigError(str(exc)) from exc


@dataclass
class Settings:
    log_level: str = "INFO"
    log_file: Path | None = None


@dataclass
class StreamConfig:
    id: str
    directory: Path
    sort_pattern: SortPattern


@dataclass
class AppConfig:
    settings: Settings
    streams: list[StreamConfig] = field(default_factory=list)

    def get_stream(self, stream_id: str) -> StreamConfig:
        for stream in self.streams:
            if stream.id == stream_id:
                return stream
        raise ConfigError(f"Unknown stream '{stream_id}'")


def _ensure_string_list(value: Any, *, field_name: str) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, list):
        raise ConfigError(f"'{field_name}' must be provided as a list of strings")
    result: list[str] = []
    for index, entry in enumerate(value):
        if not isinstance(entry, str):
            raise ConfigError(f"'{field_name}[{index}]' must be a string")
        result.append(entry)
    return result


def _build_settings(data: Any) -> Settings:
    if not data:
        return Settings()
    if not isinstance(data, dict):
        raise ConfigError("'settings' must be provided as a mapping when specified")

    log_level = str(data.get("log_level", "INFO")).upper()
    if log_level not in _LOG_LEVELS:
        raise ConfigError(f"'settings.log_level' must be one of {sorted(_LOG_LEVELS)}, got: {log_level}")

    log_file_raw = data.get("log_file")
    log_file = Path(os.path.expandvars(str(log_file_raw))).expanduser() if log_file_raw else None
    return Settings(log_level=log_level, log_file=log_file)


def _build_stream_config(data: Any, index: int) -> StreamConfig:
    if not isinstance(data, dict):
        raise ConfigError(f"'streams[{index}]' must be a mapping")
    stream_id = data.get("id")
    if not stream_id:
        raise ConfigError(f"'streams[{index}]' is missing required 'id' field")
    directory = data.get("directory")
    if not directory:
        raise ConfigError(f"Stream '{stream_id}' is missing required 'directory' field")

    return StreamConfig(
        id=str(stream_id),
        directory=Path(os.path.expandvars(str(directory))).expanduser(),
        sort_pattern=SortPattern.from_mapping(data, field_name=f"streams[{stream_id}]"),
    )


def build_app_config(data: dict[str, Any]) -> AppConfig:
    settings = _build_settings(data.get("settings"))

    streams_raw = data.get("streams", []) or []
    if not isinstance(streams_raw, list):
        raise ConfigError("'streams' must be provided as a list")

    streams: list[StreamConfig] = []
    seen: set[str] = set()
    for index, stream_data in enumerate(streams_raw):
        stream = _build_stream_config(stream_data, index)
        if stream.id in seen:
            raise ConfigError(f"Duplicate stream id '{stream.id}'")
        seen.add(stream.id)
        streams.append(stream)

    return AppConfig(settings=settings, streams=streams)


def load_config(path: Path) -> AppConfig:
    # Regexes may contain '$', so only directories get env-var expansion
    try:
        data = load_yaml_file(path, expand=False)
    except ValueError as exc:
        raise ConfigError(f"{path}: {exc}") from exc
    return build_app_config(data)

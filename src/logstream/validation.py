from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Sequence

from jsonschema import Draft7Validator

from .sorting import DESCENDING_MARKER, split_priority_key
from .translation import DAY_GROUP, MONTH_GROUP


@dataclass(slots=True)
class ValidationIssue:
    """Represents a single validation problem."""

    severity: str
    path: str
    message: str
    code: str
    fix_suggestion: Optional[str] = None


@dataclass(slots=True)
class ValidationReport:
    """Aggregates validation warnings and errors."""

    errors: List[ValidationIssue] = field(default_factory=list)
    warnings: List[ValidationIssue] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def add_error(self, path: str, message: str, code: str) -> None:
        self.errors.append(_build_issue("error", path, message, code))

    def add_warning(self, path: str, message: str, code: str) -> None:
        self.warnings.append(_build_issue("warning", path, message, code))


_STRING_LIST = {
    "oneOf": [
        {"type": "array", "items": {"type": "string"}},
        {"type": "string"},
    ]
}

CONFIG_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "settings": {
            "type": "object",
            "properties": {
                "log_level": {
                    "type": "string",
                    "enum": ["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG", "critical", "error", "warning", "info", "debug"],
                },
                "log_file": {"type": "string"},
            },
            "additionalProperties": False,
        },
        "streams": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["id", "directory", "file_match"],
                "properties": {
                    "id": {"type": "string", "minLength": 1},
                    "directory": {"type": "string", "minLength": 1},
                    "file_match": {"type": "string", "minLength": 1},
                    "translation": {
                        "type": "object",
                        "additionalProperties": {
                            "type": "object",
                            "additionalProperties": {"type": "integer"},
                        },
                    },
                    "priority": _STRING_LIST,
                    "differentiator": _STRING_LIST,
                },
                "additionalProperties": False,
            },
        },
    },
    "required": ["streams"],
}


FixSuggestionGenerator = Callable[[str, str], Optional[str]]


def _suggest_schema_fix(path: str, message: str) -> Optional[str]:
    if "is a required property" in message:
        return "Add the required field to this entry"
    if "Additional properties are not allowed" in message:
        return "Remove the unexpected key or check it for typos"
    if "is not of type" in message or "is not valid under any of the given schemas" in message:
        return "Check the expected type of this field"
    return None


def _suggest_regex_fix(path: str, message: str) -> Optional[str]:
    return "Quote the pattern with single quotes in YAML so backslashes are kept as written"


def _suggest_priority_fix(path: str, message: str) -> Optional[str]:
    return "Priority entries must name a (?P<Name>...) group of file_match, optionally prefixed with '^'"


def _suggest_duplicate_id_fix(path: str, message: str) -> Optional[str]:
    return "Give every stream a unique 'id'"


FIX_SUGGESTION_REGISTRY: Dict[str, FixSuggestionGenerator] = {
    "schema": _suggest_schema_fix,
    "regex": _suggest_regex_fix,
    "priority": _suggest_priority_fix,
    "priority-unknown": _suggest_priority_fix,
    "duplicate-id": _suggest_duplicate_id_fix,
}


def _build_issue(severity: str, path: str, message: str, code: str) -> ValidationIssue:
    generator = FIX_SUGGESTION_REGISTRY.get(code)
    return ValidationIssue(
        severity=severity,
        path=path,
        message=message,
        code=code,
        fix_suggestion=generator(path, message) if generator else None,
    )


def _format_jsonschema_path(path: Sequence[Any]) -> str:
    if not path:
        return "<root>"
    tokens: List[str] = []
    for part in path:
        if isinstance(part, int):
            if tokens:
                tokens[-1] = f"{tokens[-1]}[{part}]"
            else:
                tokens.append(f"[{part}]")
        else:
            tokens.append(str(part))
    return ".".join(tokens) if tokens else "<root>"


def _as_list(value: Any) -> List[str]:
    if isinstance(value, str):
        return [value]
    if isinstance(value, list):
        return [item for item in value if isinstance(item, str)]
    return []


def _validate_stream(stream: Dict[str, Any], path: str, report: ValidationReport) -> None:
    file_match = stream.get("file_match")
    if not isinstance(file_match, str) or not file_match:
        return
    try:
        regex = re.compile(file_match)
    except re.error as exc:
        report.add_error(f"{path}.file_match", f"Pattern does not compile: {exc}", "regex")
        return

    group_names = set(regex.groupindex)
    translation = stream.get("translation") or {}
    if isinstance(translation, dict):
        for group in translation:
            if group in (MONTH_GROUP, DAY_GROUP):
                report.add_warning(
                    f"{path}.translation.{group}",
                    f"'{group}' always uses the built-in calendar table; this translation is never used",
                    "translation-shadowed",
                )
            elif group not in group_names:
                report.add_warning(
                    f"{path}.translation.{group}",
                    f"'{group}' is not a named group of file_match",
                    "translation-unknown",
                )

    for index, key in enumerate(_as_list(stream.get("priority"))):
        name, _ = split_priority_key(key)
        key_path = f"{path}.priority[{index}]"
        if not name:
            report.add_error(key_path, f"Priority entry '{key}' does not name a group", "priority")
        elif name.startswith(DESCENDING_MARKER):
            report.add_error(key_path, f"Priority entry '{key}' has more than one '^' marker", "priority")
        elif name not in group_names:
            report.add_warning(
                key_path,
                f"'{name}' is not a named group of file_match; every file will score 0 for it",
                "priority-unknown",
            )

    differentiator = _as_list(stream.get("differentiator"))
    if differentiator and not any(token in group_names for token in differentiator):
        report.add_warning(
            f"{path}.differentiator",
            "No differentiator token names a group; all files will form a single stream",
            "differentiator-literal",
        )


def validate_config_data(data: Dict[str, Any]) -> ValidationReport:
    """Validate configuration data against the schema and semantic rules.

    Args:
        data: The configuration mapping loaded from YAML

    Returns:
        ValidationReport containing any errors or warnings found
    """
    report = ValidationReport()
    validator = Draft7Validator(CONFIG_SCHEMA)

    for error in sorted(validator.iter_errors(data), key=lambda exc: _format_jsonschema_path(exc.absolute_path)):
        report.add_error(_format_jsonschema_path(error.absolute_path), error.message, "schema")

    streams = data.get("streams") if isinstance(data, dict) else None
    if not isinstance(streams, list):
        return report

    seen: Dict[str, int] = {}
    for index, stream in enumerate(streams):
        if not isinstance(stream, dict):
            continue
        path = f"streams[{index}]"
        stream_id = stream.get("id")
        if isinstance(stream_id, str):
            if stream_id in seen:
                report.add_error(
                    f"{path}.id",
                    f"Duplicate stream id '{stream_id}' (first defined at streams[{seen[stream_id]}])",
                    "duplicate-id",
                )
            else:
                seen[stream_id] = index
        _validate_stream(stream, path, report)

    return report


def group_validation_issues(issues: List[ValidationIssue]) -> Dict[str, List[ValidationIssue]]:
    """Group issues by the top-level entry they belong to, e.g. ``streams[0]`` or ``settings``."""
    grouped: Dict[str, List[ValidationIssue]] = {}
    for issue in issues:
        match = re.match(r"^([A-Za-z_][A-Za-z0-9_-]*(?:\[[0-9]+\])?)", issue.path)
        section = match.group(1) if match else "<root>"
        grouped.setdefault(section, []).append(issue)
    return grouped


__all__ = [
    "CONFIG_SCHEMA",
    "FIX_SUGGESTION_REGISTRY",
    "ValidationIssue",
    "ValidationReport",
    "group_validation_issues",
    "validate_config_data",
]

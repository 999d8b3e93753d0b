from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from textwrap import wrap
from typing import Union

DEFAULT_WRAP_WIDTH = 110
DEFAULT_LABEL_WIDTH = 20
DEFAULT_INDENT = "    "

FieldMapping = Union[Mapping[str, object], Sequence[tuple[str, object]]]


def _stringify(value: object) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, (list, tuple, set)):
        return ", ".join(_stringify(item) for item in value)
    return str(value)


class LogBlock:
    """Multi-line log message: a title underlined with dashes, then aligned fields."""

    def __init__(self, title: str, *, wrap_width: int = DEFAULT_WRAP_WIDTH, pad_top: bool = True) -> None:
        self.wrap_width = wrap_width
        self.lines: list[str] = [""] if pad_top else []
        self.lines.extend([title, "-" * len(title)])

    def add_fields(self, fields: FieldMapping | None) -> None:
        if not fields:
            return
        items = list(fields.items()) if isinstance(fields, Mapping) else list(fields)
        label_width = max(min(max(len(str(key)) for key, _ in items), DEFAULT_LABEL_WIDTH), 8)
        value_width = max(self.wrap_width - len(DEFAULT_INDENT) - label_width - 2, 32)

        for key, value in items:
            wrapped = wrap(_stringify(value), width=value_width) or [""]
            self.lines.append(f"{DEFAULT_INDENT}{str(key):<{label_width}}: {wrapped[0]}")
            for continuation in wrapped[1:]:
                self.lines.append(f"{DEFAULT_INDENT}{'':<{label_width}}  {continuation}")

    def add_items(self, heading: str, items: Iterable[object], *, empty_label: str = "(none)") -> None:
        self.lines.append("")
        self.lines.append(f"{heading}:")
        materialized = [_stringify(item) for item in items if item is not None]
        if not materialized:
            self.lines.append(f"{DEFAULT_INDENT}{empty_label}")
            return
        for text in materialized:
            self.lines.append(f"{DEFAULT_INDENT}- {text}")

    def render(self) -> str:
        return "\n".join(self.lines).rstrip()


def render_fields_block(title: str, fields: FieldMapping, *, pad_top: bool = True) -> str:
    block = LogBlock(title, pad_top=pad_top)
    block.add_fields(fields)
    return block.render()


def render_items_block(
    title: str,
    fields: FieldMapping | None,
    heading: str,
    items: Iterable[object],
    *,
    pad_top: bool = True,
) -> str:
    block = LogBlock(title, pad_top=pad_top)
    block.add_fields(fields)
    block.add_items(heading, items)
    return block.render()

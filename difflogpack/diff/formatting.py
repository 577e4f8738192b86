"""Text rendering for value diffs."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import tzinfo
from decimal import Decimal
import json
import math
from typing import Any

import typer

from difflogpack.core.timestamps import format_duration, format_instant
from difflogpack.core.values import canonical_dump
from difflogpack.diff.models import (
    Added,
    BooleanChange,
    Composite,
    FieldChange,
    GenericChange,
    Header,
    Modified,
    NumericChange,
    TemporalChange,
    TextualChange,
    ValueChange,
)

HEADER_OPEN = "◖"
HEADER_CLOSE = "◗"
INDENT = "  "


@dataclass(frozen=True, slots=True)
class RenderOptions:
    """Presentation settings; ``local_tz=None`` uses the process' local zone."""

    color: bool = True
    local_tz: tzinfo | None = None


def render_change(change: ValueChange | None, *, options: RenderOptions = RenderOptions()) -> str:
    """Render a change tree; ``None`` renders as the empty string."""
    if change is None:
        return ""
    return _render_value_change(change, options)


def render_field_change(field_change: FieldChange, *, options: RenderOptions = RenderOptions()) -> str:
    content = field_change.content
    if isinstance(content, Modified):
        marker = _style(f"~ {field_change.name}", options, fg=typer.colors.YELLOW)
        value = _render_value_change(content.change, options)
        breaks_line = isinstance(content.change, Composite) and bool(content.change.fields)
    elif isinstance(content, Added):
        marker = _style(f"+ {field_change.name}", options, fg=typer.colors.GREEN)
        value = canonical_dump(content.value)
        breaks_line = False
    else:
        marker = _style(f"- {field_change.name}", options, fg=typer.colors.RED)
        value = canonical_dump(content.value)
        breaks_line = False

    headers = _render_headers(field_change.headers, options)
    if not value:
        return f"{marker}{headers}"
    separator = "\n" if breaks_line else " "
    return f"{marker}{headers}:{separator}{value}"


def _render_value_change(change: ValueChange, options: RenderOptions) -> str:
    if isinstance(change, Composite):
        return "\n".join(
            _indent(render_field_change(field_change, options=options))
            for field_change in change.fields
        )
    if isinstance(change, NumericChange):
        before, after = change.change.before, change.change.after
        return _with_delta(
            f"{_format_number(before)} -> {_format_number(after)}",
            _format_number(change.delta),
            increased=after > before,
            options=options,
        )
    if isinstance(change, TemporalChange):
        before, after = change.change.before, change.change.after
        return _with_delta(
            f"{format_instant(before, options.local_tz)} -> "
            f"{format_instant(after, options.local_tz)}",
            format_duration(after - before),
            increased=after > before,
            options=options,
        )
    if isinstance(change, TextualChange):
        return f"{_quote(change.change.before)} -> {_quote(change.change.after)}"
    if isinstance(change, BooleanChange):
        return f"{_format_bool(change.change.before)} -> {_format_bool(change.change.after)}"
    if isinstance(change, GenericChange):
        return f"{canonical_dump(change.change.before)} -> {canonical_dump(change.change.after)}"
    raise TypeError(f"Unsupported value change: {change!r}")


def _render_headers(headers: tuple[Header, ...], options: RenderOptions) -> str:
    if not headers:
        return ""
    contents = ", ".join(_render_value_change(header.content, options) for header in headers)
    return (
        _style(HEADER_OPEN, options, fg=typer.colors.BRIGHT_BLACK)
        + _style(contents, options, bg=typer.colors.BRIGHT_BLACK)
        + _style(HEADER_CLOSE, options, fg=typer.colors.BRIGHT_BLACK)
    )


def _with_delta(text: str, delta: str, *, increased: bool, options: RenderOptions) -> str:
    color = typer.colors.GREEN if increased else typer.colors.RED
    return f"{text} | {_style(delta, options, fg=color)}"


def _indent(text: str) -> str:
    return text.replace("\n", "\n" + INDENT)


def _format_number(value: float) -> str:
    """Shortest round-trip digits in positional notation, without a trailing ``.0``."""
    value = float(value)
    if not math.isfinite(value):
        return repr(value)
    text = format(Decimal(repr(value)), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def _format_bool(value: bool) -> str:
    return "true" if value else "false"


def _quote(value: str) -> str:
    return json.dumps(value, ensure_ascii=False)


def _style(text: str, options: RenderOptions, **styles: Any) -> str:
    if not options.color or not text:
        return text
    return typer.style(text, **styles)

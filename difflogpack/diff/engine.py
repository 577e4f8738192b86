"""Recursive structural diff over JSON-like values."""

from __future__ import annotations

from typing import Any, Mapping, Sequence

from difflogpack.config import DEFAULT_HEADER_CONFIG, HeaderConfig
from difflogpack.core.timestamps import parse_rfc3339
from difflogpack.core.values import to_float, value_kind, values_equal
from difflogpack.diff.models import (
    Added,
    BooleanChange,
    Change,
    Composite,
    FieldChange,
    GenericChange,
    Header,
    Modified,
    NumericChange,
    Removed,
    TemporalChange,
    TextualChange,
    ValueChange,
)

_MISSING = object()


def diff_values(
    previous: Any,
    next: Any,
    config: HeaderConfig = DEFAULT_HEADER_CONFIG,
) -> ValueChange | None:
    """Diff two tree values.

    Returns ``None`` when the values are structurally equal. Arrays are
    compared by position, so an insertion shows up as a run of index-wise
    modifications plus a trailing addition.
    """
    if values_equal(previous, next):
        return None

    previous_kind = value_kind(previous)
    next_kind = value_kind(next)

    if previous_kind == "object" and next_kind == "object":
        return _diff_fields(previous, next, config)

    if previous_kind == "array" and next_kind == "array":
        return _diff_fields(_index_map(previous), _index_map(next), config)

    if previous_kind == next_kind:
        leaf = _diff_leaf(previous, next, kind=previous_kind)
        if leaf is not None:
            return leaf

    return GenericChange(Change(before=previous, after=next))


def _diff_fields(
    previous: Mapping[Any, Any],
    next: Mapping[Any, Any],
    config: HeaderConfig,
) -> Composite:
    keys = sorted(set(previous.keys()) | set(next.keys()), key=str)

    fields: list[FieldChange] = []
    for key in keys:
        previous_value = previous.get(key, _MISSING)
        next_value = next.get(key, _MISSING)

        if previous_value is _MISSING:
            content: Added | Removed | Modified = Added(next_value)
        elif next_value is _MISSING:
            content = Removed(previous_value)
        else:
            change = diff_values(previous_value, next_value, config)
            if change is None:
                continue
            content = Modified(change)

        fields.append(
            FieldChange(
                name=str(key),
                content=content,
                headers=_diff_headers(previous_value, next_value, config),
            )
        )

    return Composite(
        fields=tuple(field for field in fields if config.is_visible(field.name))
    )


def _diff_headers(previous: Any, next: Any, config: HeaderConfig) -> tuple[Header, ...]:
    headers: list[Header] = []
    for name in config.header_names:
        change = diff_values(_lookup(previous, name), _lookup(next, name), config)
        if change is not None:
            headers.append(Header(name=name, content=change))
    return tuple(headers)


def _lookup(value: Any, name: str) -> Any:
    if isinstance(value, dict):
        return value.get(name)
    return None


def _index_map(items: Sequence[Any]) -> dict[str, Any]:
    return {str(index): item for index, item in enumerate(items)}


def _diff_leaf(previous: Any, next: Any, *, kind: str) -> ValueChange | None:
    if kind == "number":
        return NumericChange(Change(before=to_float(previous), after=to_float(next)))

    if kind == "string":
        before = parse_rfc3339(previous)
        after = parse_rfc3339(next) if before is not None else None
        if before is not None and after is not None:
            return TemporalChange(Change(before=before, after=after))
        return TextualChange(Change(before=previous, after=next))

    if kind == "bool":
        return BooleanChange(Change(before=previous, after=next))

    return None

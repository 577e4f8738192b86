"""Data models for structural value diffs."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Generic, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Change(Generic[T]):
    """A before/after pair of same-typed values."""

    before: T
    after: T

    def to_dict(self) -> dict[str, Any]:
        return {
            "before": _payload(self.before),
            "after": _payload(self.after),
        }


@dataclass(frozen=True, slots=True)
class Composite:
    """Per-key outcomes of diffing two objects or two arrays.

    May hold zero fields when every changed key is hidden.
    """

    fields: tuple[FieldChange, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": "composite",
            "fields": [field_change.to_dict() for field_change in self.fields],
        }


@dataclass(frozen=True, slots=True)
class GenericChange:
    """Two raw values that cannot be decomposed, e.g. of different kinds."""

    change: Change[Any]

    def to_dict(self) -> dict[str, Any]:
        return {"kind": "generic", **self.change.to_dict()}


@dataclass(frozen=True, slots=True)
class NumericChange:
    change: Change[float]

    @property
    def delta(self) -> float:
        return self.change.after - self.change.before

    def to_dict(self) -> dict[str, Any]:
        return {"kind": "numeric", **self.change.to_dict(), "delta": self.delta}


@dataclass(frozen=True, slots=True)
class TemporalChange:
    change: Change[datetime]

    @property
    def delta_seconds(self) -> float:
        return (self.change.after - self.change.before).total_seconds()

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": "temporal",
            **self.change.to_dict(),
            "delta_seconds": self.delta_seconds,
        }


@dataclass(frozen=True, slots=True)
class TextualChange:
    change: Change[str]

    def to_dict(self) -> dict[str, Any]:
        return {"kind": "textual", **self.change.to_dict()}


@dataclass(frozen=True, slots=True)
class BooleanChange:
    change: Change[bool]

    def to_dict(self) -> dict[str, Any]:
        return {"kind": "boolean", **self.change.to_dict()}


LeafChange = Union[GenericChange, NumericChange, TemporalChange, TextualChange, BooleanChange]
ValueChange = Union[Composite, LeafChange]


@dataclass(frozen=True, slots=True)
class Header:
    """Diff of a side-channel field shown next to another field's change."""

    name: str
    content: ValueChange

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "content": self.content.to_dict()}


@dataclass(frozen=True, slots=True)
class Added:
    value: Any

    def to_dict(self) -> dict[str, Any]:
        return {"status": "added", "value": self.value}


@dataclass(frozen=True, slots=True)
class Removed:
    value: Any

    def to_dict(self) -> dict[str, Any]:
        return {"status": "removed", "value": self.value}


@dataclass(frozen=True, slots=True)
class Modified:
    change: ValueChange

    def to_dict(self) -> dict[str, Any]:
        return {"status": "modified", "change": self.change.to_dict()}


FieldContent = Union[Added, Removed, Modified]


@dataclass(frozen=True, slots=True)
class FieldChange:
    """Outcome for one key of a composite diff."""

    name: str
    content: FieldContent
    headers: tuple[Header, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            **self.content.to_dict(),
            "headers": [header.to_dict() for header in self.headers],
        }


def _payload(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    return value

"""Tree value model and timestamp primitives for DiffLog."""

from difflogpack.core.timestamps import format_duration, format_instant, parse_rfc3339
from difflogpack.core.values import (
    ValueKind,
    canonical_dump,
    to_float,
    value_kind,
    values_equal,
)

__all__ = [
    "ValueKind",
    "value_kind",
    "values_equal",
    "canonical_dump",
    "to_float",
    "parse_rfc3339",
    "format_instant",
    "format_duration",
]

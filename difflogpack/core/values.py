"""Adapter over Python's native JSON value model.

Tree values are the objects produced by ``json.loads``: ``None``, ``bool``,
``int``/``float``, ``str``, ``list`` (``tuple`` is accepted as an array) and
``dict``. This module classifies them, compares them structurally and dumps
them to a flat deterministic text form.
"""

from __future__ import annotations

import json
import math
from typing import Any, Literal

ValueKind = Literal["null", "bool", "number", "string", "array", "object", "other"]


def value_kind(value: Any) -> ValueKind:
    """Classify a tree value. ``bool`` is checked before ``int`` on purpose."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "bool"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, (list, tuple)):
        return "array"
    if isinstance(value, dict):
        return "object"
    return "other"


def values_equal(left: Any, right: Any) -> bool:
    """Deep structural equality over tree values.

    Booleans never equal numbers, ``1`` equals ``1.0``, object key order is
    irrelevant and NaN equals NaN so that a value always equals itself.
    """
    if left is right:
        return True

    kind = value_kind(left)
    if kind != value_kind(right):
        return False

    if kind == "object":
        if len(left) != len(right):
            return False
        for key, left_value in left.items():
            if key not in right:
                return False
            if not values_equal(left_value, right[key]):
                return False
        return True

    if kind == "array":
        if len(left) != len(right):
            return False
        return all(values_equal(a, b) for a, b in zip(left, right))

    if kind == "number":
        if left == right:
            return True
        return _is_nan(left) and _is_nan(right)

    return bool(left == right)


def to_float(value: int | float) -> float:
    """Widen a number to float; integers beyond float range clamp to infinity."""
    try:
        return float(value)
    except OverflowError:
        return math.inf if value > 0 else -math.inf


def canonical_dump(value: Any) -> str:
    """Serialize a raw tree value to its flat, key-sorted JSON text."""
    return json.dumps(
        _normalize_keys(value),
        ensure_ascii=False,
        separators=(",", ":"),
        sort_keys=True,
        default=str,
    )


def _normalize_keys(value: Any) -> Any:
    if isinstance(value, dict):
        return {str(key): _normalize_keys(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_normalize_keys(item) for item in value]
    return value


def _is_nan(value: int | float) -> bool:
    return isinstance(value, float) and math.isnan(value)

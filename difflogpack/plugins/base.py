"""Versioned plugin interfaces and diff lifecycle event payloads."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Literal

PLUGIN_API_VERSION = "1.0"
PLUGIN_CONFIG_VERSION = 1
PLUGIN_CONFIG_ENV_VAR = "DIFFLOG_PLUGIN_CONFIG"

LifecycleStatus = Literal["ok", "error"]


@dataclass(frozen=True, slots=True)
class DiffStartEvent:
    """Emitted before a diff; ``diff_id`` pairs it with its end event."""

    diff_id: int
    header_names: tuple[str, ...]
    previous_kind: str
    next_kind: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True, slots=True)
class DiffEndEvent:
    diff_id: int
    status: LifecycleStatus
    changed: bool | None = None
    field_count: int | None = None
    error_type: str | None = None
    error_message: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


class LifecyclePlugin:
    """Base no-op lifecycle plugin interface (API v1.x)."""

    api_version = PLUGIN_API_VERSION
    name = "lifecycle-plugin"

    def on_diff_start(self, event: DiffStartEvent) -> None:
        return None

    def on_diff_end(self, event: DiffEndEvent) -> None:
        return None

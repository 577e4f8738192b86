"""Diff run bookkeeping and fault-isolated plugin hook dispatch."""

from __future__ import annotations

from dataclasses import dataclass, field
import itertools
from typing import Iterator
import warnings

from difflogpack.plugins.base import DiffEndEvent, DiffStartEvent


@dataclass(frozen=True, slots=True)
class PluginDiagnostic:
    diff_id: int
    plugin_name: str
    hook: str
    error_type: str
    message: str

    def to_dict(self) -> dict[str, str | int]:
        return {
            "diff_id": self.diff_id,
            "plugin_name": self.plugin_name,
            "hook": self.hook,
            "error_type": self.error_type,
            "message": self.message,
        }


@dataclass(slots=True)
class PluginManager:
    """Numbers diff runs, notifies plugins about them and records hook failures.

    A plugin that raises never aborts the diff: the failure is kept as a
    ``PluginDiagnostic`` tagged with the diff it happened in and reported as a
    ``RuntimeWarning``.
    """

    plugins: tuple[object, ...] = ()
    diagnostics: list[PluginDiagnostic] = field(default_factory=list)
    _diff_ids: Iterator[int] = field(
        default_factory=lambda: itertools.count(1),
        init=False,
        repr=False,
        compare=False,
    )

    def begin_diff(
        self,
        *,
        header_names: tuple[str, ...],
        previous_kind: str,
        next_kind: str,
    ) -> int:
        """Allocate the next diff id and emit its start event."""
        diff_id = next(self._diff_ids)
        self._dispatch(
            "on_diff_start",
            DiffStartEvent(
                diff_id=diff_id,
                header_names=header_names,
                previous_kind=previous_kind,
                next_kind=next_kind,
            ),
        )
        return diff_id

    def finish_diff(self, diff_id: int, *, changed: bool, field_count: int | None) -> None:
        self._dispatch(
            "on_diff_end",
            DiffEndEvent(
                diff_id=diff_id,
                status="ok",
                changed=changed,
                field_count=field_count,
            ),
        )

    def fail_diff(self, diff_id: int, error: BaseException) -> None:
        self._dispatch(
            "on_diff_end",
            DiffEndEvent(
                diff_id=diff_id,
                status="error",
                error_type=error.__class__.__name__,
                error_message=str(error),
            ),
        )

    def diagnostics_for(self, diff_id: int) -> list[PluginDiagnostic]:
        return [diagnostic for diagnostic in self.diagnostics if diagnostic.diff_id == diff_id]

    def clear_diagnostics(self) -> None:
        self.diagnostics.clear()

    def _dispatch(self, hook: str, event: DiffStartEvent | DiffEndEvent) -> None:
        for plugin in self.plugins:
            callback = getattr(plugin, hook, None)
            if callback is None:
                continue
            try:
                callback(event)
            except Exception as error:
                diagnostic = PluginDiagnostic(
                    diff_id=event.diff_id,
                    plugin_name=_plugin_name(plugin),
                    hook=hook,
                    error_type=error.__class__.__name__,
                    message=str(error),
                )
                self.diagnostics.append(diagnostic)
                warnings.warn(
                    (
                        f"DiffLog plugin failure in diff #{diagnostic.diff_id}: "
                        f"plugin={diagnostic.plugin_name} hook={diagnostic.hook} "
                        f"error={diagnostic.error_type}: {diagnostic.message}"
                    ),
                    RuntimeWarning,
                    stacklevel=3,
                )


def _plugin_name(plugin: object) -> str:
    return str(getattr(plugin, "name", plugin.__class__.__name__))

"""Configurable diff logger combining headers, diffing and rendering."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import tzinfo
from typing import Any

import typer

from difflogpack.config import DEFAULT_HEADER_CONFIG, HeaderConfig
from difflogpack.core.values import value_kind
from difflogpack.diff.engine import diff_values
from difflogpack.diff.formatting import RenderOptions, render_change
from difflogpack.diff.models import Composite, ValueChange
from difflogpack.plugins import get_active_plugin_manager


@dataclass(frozen=True, slots=True)
class DiffLogger:
    """Immutable logger; every ``set_*`` call returns a new instance.

    Example:
        logger = DiffLogger().set_header("timestamp", False)
        logger.log_diff(previous, next)
    """

    config: HeaderConfig = DEFAULT_HEADER_CONFIG
    render_options: RenderOptions = field(default_factory=RenderOptions)

    def set_header(self, name: str, visible: bool = True) -> DiffLogger:
        """Register ``name`` as a header; ``visible`` keeps it as an ordinary field too."""
        return replace(self, config=self.config.with_header(name, visible))

    def set_color(self, enabled: bool) -> DiffLogger:
        return replace(self, render_options=replace(self.render_options, color=enabled))

    def set_local_timezone(self, local_tz: tzinfo | None) -> DiffLogger:
        return replace(self, render_options=replace(self.render_options, local_tz=local_tz))

    def diff_value(self, previous: Any, next: Any) -> ValueChange | None:
        """Compute the change tree, emitting diff lifecycle events."""
        plugin_manager = get_active_plugin_manager()
        diff_id = plugin_manager.begin_diff(
            header_names=self.config.header_names,
            previous_kind=value_kind(previous),
            next_kind=value_kind(next),
        )

        try:
            change = diff_values(previous, next, self.config)
        except Exception as error:
            plugin_manager.fail_diff(diff_id, error)
            raise

        plugin_manager.finish_diff(
            diff_id,
            changed=change is not None,
            field_count=len(change.fields) if isinstance(change, Composite) else None,
        )
        return change

    def render(self, change: ValueChange | None) -> str:
        return render_change(change, options=self.render_options)

    def diff(self, previous: Any, next: Any) -> str:
        """Render the diff between two values; equal values render as ``""``."""
        return self.render(self.diff_value(previous, next))

    def log_diff(self, previous: Any, next: Any, *, err: bool = False) -> None:
        """Print the rendered diff to stdout (or stderr)."""
        typer.echo(self.diff(previous, next), err=err, color=self.render_options.color)

"""Stable public API surface for DiffLog.

This module is the supported import path for library users.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from difflogpack import __version__
from difflogpack.config import (
    HeaderConfig,
    HeaderConfigError,
    load_header_config_from_file,
)
from difflogpack.diff import (
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
    RenderOptions,
    TemporalChange,
    TextualChange,
    ValueChange,
    diff_values,
    render_change,
)
from difflogpack.logger import DiffLogger


def diff(
    previous: Any,
    next: Any,
    *,
    config: HeaderConfig | None = None,
) -> ValueChange | None:
    """Diff two JSON-like values.

    Args:
        previous: Earlier snapshot.
        next: Later snapshot.
        config: Header registrations; defaults to no headers.

    Returns:
        Change tree, or ``None`` when the values are structurally equal.
    """
    return diff_values(previous, next, config if config is not None else HeaderConfig())


def render(
    change: ValueChange | None,
    *,
    color: bool = True,
    local_tz: Any = None,
) -> str:
    """Render a change tree as indented text.

    Args:
        change: Result of ``diff``; ``None`` renders as an empty string.
        color: Emit ANSI styles.
        local_tz: ``tzinfo`` used for timestamps; ``None`` uses the local zone.
    """
    return render_change(change, options=RenderOptions(color=color, local_tz=local_tz))


def log_diff(
    previous: Any,
    next: Any,
    *,
    config: HeaderConfig | None = None,
    header_config_path: str | Path | None = None,
    color: bool = True,
) -> None:
    """Print the diff between two values to stdout.

    Args:
        config: Header registrations. Mutually exclusive with ``header_config_path``.
        header_config_path: JSON header config file to load.
        color: Emit ANSI styles.

    Raises:
        ValueError: If both ``config`` and ``header_config_path`` are given.
    """
    if config is not None and header_config_path is not None:
        raise ValueError("log_diff(...) accepts config or header_config_path, not both")
    if header_config_path is not None:
        config = load_header_config_from_file(header_config_path)
    logger = DiffLogger(config=config or HeaderConfig()).set_color(color)
    logger.log_diff(previous, next)


__all__ = [
    "__version__",
    "DiffLogger",
    "HeaderConfig",
    "HeaderConfigError",
    "RenderOptions",
    "Change",
    "Composite",
    "GenericChange",
    "NumericChange",
    "TemporalChange",
    "TextualChange",
    "BooleanChange",
    "ValueChange",
    "Header",
    "Added",
    "Removed",
    "Modified",
    "FieldChange",
    "diff",
    "render",
    "log_diff",
]

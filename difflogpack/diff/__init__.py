"""Diff subsystem for DiffLog."""

from difflogpack.diff.engine import diff_values
from difflogpack.diff.formatting import (
    RenderOptions,
    render_change,
    render_field_change,
)
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

__all__ = [
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
    "diff_values",
    "RenderOptions",
    "render_change",
    "render_field_change",
]

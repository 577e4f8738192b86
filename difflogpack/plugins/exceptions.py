"""Errors raised while configuring or loading DiffLog plugins."""

from __future__ import annotations


class PluginError(Exception):
    """Base class for plugin subsystem errors."""


class PluginConfigError(PluginError, ValueError):
    """Plugin config is malformed; ``source`` names the file it was read from."""

    def __init__(self, message: str, *, source: str | None = None) -> None:
        super().__init__(f"{message} ({source})" if source else message)
        self.source = source


class PluginLoadError(PluginError):
    """A configured plugin entry could not be imported, built or accepted."""

    def __init__(self, message: str, *, entry_index: int, entrypoint: str | None = None) -> None:
        prefix = f"Plugin entry #{entry_index}"
        if entrypoint:
            prefix = f"{prefix} '{entrypoint}'"
        super().__init__(f"{prefix} {message}")
        self.entry_index = entry_index
        self.entrypoint = entrypoint

"""Versioned plugin configuration loader."""

from __future__ import annotations

import importlib
import json
from pathlib import Path
from typing import Any

from difflogpack.plugins.base import PLUGIN_API_VERSION, PLUGIN_CONFIG_VERSION
from difflogpack.plugins.exceptions import PluginConfigError, PluginLoadError
from difflogpack.plugins.manager import PluginManager

_ENTRY_KEYS = frozenset({"entrypoint", "options", "enabled"})


def load_plugin_manager_from_file(path: str | Path) -> PluginManager:
    """Load a plugin manager from JSON config."""
    config_path = Path(path)
    source = str(config_path)
    try:
        raw = json.loads(config_path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        raise
    except json.JSONDecodeError as error:
        raise PluginConfigError(f"Invalid plugin config JSON: {error}", source=source) from error

    if not isinstance(raw, dict):
        raise PluginConfigError("Plugin config must be a JSON object.", source=source)
    return plugin_manager_from_config(raw, source=source)


def plugin_manager_from_config(config: dict[str, Any], *, source: str | None = None) -> PluginManager:
    """Build a plugin manager from a parsed config mapping."""
    version = config.get("config_version")
    if version != PLUGIN_CONFIG_VERSION:
        raise PluginConfigError(
            f"Unsupported plugin config version {version!r}; expected {PLUGIN_CONFIG_VERSION}.",
            source=source,
        )

    entries = config.get("plugins")
    if not isinstance(entries, list):
        raise PluginConfigError("Plugin config key 'plugins' must be a JSON array.", source=source)

    plugins = [
        plugin
        for index, entry in enumerate(entries, start=1)
        if (plugin := _load_entry(entry, index=index, source=source)) is not None
    ]
    return PluginManager(plugins=tuple(plugins))


def _load_entry(entry: Any, *, index: int, source: str | None) -> object | None:
    if not isinstance(entry, dict):
        raise PluginConfigError(f"Plugin entry #{index} must be a JSON object.", source=source)

    unknown = sorted(set(entry.keys()) - _ENTRY_KEYS)
    if unknown:
        raise PluginConfigError(
            f"Plugin entry #{index} contains unsupported keys: {', '.join(unknown)}",
            source=source,
        )

    enabled = entry.get("enabled", True)
    if not isinstance(enabled, bool):
        raise PluginConfigError(
            f"Plugin entry #{index} key 'enabled' must be boolean.", source=source
        )
    if not enabled:
        return None

    entrypoint = entry.get("entrypoint")
    if not isinstance(entrypoint, str) or ":" not in entrypoint:
        raise PluginConfigError(
            f"Plugin entry #{index} key 'entrypoint' must be 'module:attribute'.",
            source=source,
        )

    options = entry.get("options", {})
    if not isinstance(options, dict):
        raise PluginConfigError(
            f"Plugin entry #{index} key 'options' must be a JSON object.", source=source
        )

    plugin = _instantiate(_resolve(entrypoint, index=index), options, entrypoint, index=index)
    _check_api_version(plugin, entrypoint=entrypoint, index=index)
    return plugin


def _resolve(entrypoint: str, *, index: int) -> object:
    module_name, _, attribute = entrypoint.partition(":")
    try:
        module = importlib.import_module(module_name)
    except Exception as error:
        raise PluginLoadError(
            f"failed to import module '{module_name}': {error}",
            entry_index=index,
            entrypoint=entrypoint,
        ) from error

    target = getattr(module, attribute, None)
    if target is None:
        raise PluginLoadError(
            f"could not find attribute '{attribute}' in '{module_name}'.",
            entry_index=index,
            entrypoint=entrypoint,
        )
    return target


def _instantiate(target: object, options: dict[str, Any], entrypoint: str, *, index: int) -> object:
    if not callable(target):
        if options:
            raise PluginLoadError(
                "is not callable and cannot accept options.",
                entry_index=index,
                entrypoint=entrypoint,
            )
        return target

    try:
        return target(**options)
    except Exception as error:
        raise PluginLoadError(
            f"failed to instantiate with options {sorted(options.keys())}: {error}",
            entry_index=index,
            entrypoint=entrypoint,
        ) from error


def _check_api_version(plugin: object, *, entrypoint: str, index: int) -> None:
    version = str(getattr(plugin, "api_version", PLUGIN_API_VERSION))
    expected_major = PLUGIN_API_VERSION.split(".", 1)[0]
    if version.split(".", 1)[0] != expected_major:
        raise PluginLoadError(
            f"declares unsupported api_version {version!r}; "
            f"supported major version is {expected_major}.",
            entry_index=index,
            entrypoint=entrypoint,
        )

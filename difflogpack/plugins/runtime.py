"""Selects the plugin manager a ``DiffLogger`` reports to."""

from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar
from functools import lru_cache
import os
from pathlib import Path
from typing import Iterator

from difflogpack.plugins.base import PLUGIN_CONFIG_ENV_VAR
from difflogpack.plugins.exceptions import PluginConfigError
from difflogpack.plugins.loader import load_plugin_manager_from_file
from difflogpack.plugins.manager import PluginManager

_ACTIVE_PLUGIN_MANAGER: ContextVar[PluginManager | None] = ContextVar(
    "difflog_plugin_manager",
    default=None,
)
_NO_PLUGINS = PluginManager()


def get_active_plugin_manager() -> PluginManager:
    """Context override first, then the file named by ``DIFFLOG_PLUGIN_CONFIG``.

    The env config is reloaded when the file is edited, so a long-lived
    process picks up plugin changes without a restart.
    """
    manager = _ACTIVE_PLUGIN_MANAGER.get()
    if manager is not None:
        return manager

    config_path = os.getenv(PLUGIN_CONFIG_ENV_VAR, "").strip()
    if not config_path:
        return _NO_PLUGINS

    resolved = Path(config_path).resolve()
    try:
        modified_ns = resolved.stat().st_mtime_ns
    except FileNotFoundError as error:
        raise PluginConfigError(
            f"{PLUGIN_CONFIG_ENV_VAR} points at a missing file",
            source=str(resolved),
        ) from error
    return _load_env_plugin_manager(resolved, modified_ns)


@lru_cache(maxsize=8)
def _load_env_plugin_manager(path: Path, modified_ns: int) -> PluginManager:
    return load_plugin_manager_from_file(path)


@contextmanager
def use_plugin_manager(manager: PluginManager) -> Iterator[PluginManager]:
    """Route diffs in the current context to ``manager``."""
    token = _ACTIVE_PLUGIN_MANAGER.set(manager)
    try:
        yield manager
    finally:
        _ACTIVE_PLUGIN_MANAGER.reset(token)


@contextmanager
def use_plugins_from_config(path: str | Path) -> Iterator[PluginManager]:
    with use_plugin_manager(load_plugin_manager_from_file(path)) as manager:
        yield manager


def reset_plugin_runtime_cache() -> None:
    """Forget env-loaded managers (for tests)."""
    _load_env_plugin_manager.cache_clear()

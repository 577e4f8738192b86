"""Plugin subsystem for DiffLog lifecycle extensions."""

from difflogpack.plugins.base import (
    PLUGIN_API_VERSION,
    PLUGIN_CONFIG_ENV_VAR,
    PLUGIN_CONFIG_VERSION,
    DiffEndEvent,
    DiffStartEvent,
    LifecyclePlugin,
)
from difflogpack.plugins.exceptions import PluginConfigError, PluginError, PluginLoadError
from difflogpack.plugins.loader import load_plugin_manager_from_file, plugin_manager_from_config
from difflogpack.plugins.manager import PluginDiagnostic, PluginManager
from difflogpack.plugins.reference import LifecycleTracePlugin
from difflogpack.plugins.runtime import (
    get_active_plugin_manager,
    reset_plugin_runtime_cache,
    use_plugin_manager,
    use_plugins_from_config,
)

__all__ = [
    "PLUGIN_API_VERSION",
    "PLUGIN_CONFIG_VERSION",
    "PLUGIN_CONFIG_ENV_VAR",
    "PluginError",
    "PluginConfigError",
    "PluginLoadError",
    "DiffStartEvent",
    "DiffEndEvent",
    "LifecyclePlugin",
    "PluginDiagnostic",
    "PluginManager",
    "LifecycleTracePlugin",
    "load_plugin_manager_from_file",
    "plugin_manager_from_config",
    "get_active_plugin_manager",
    "use_plugin_manager",
    "use_plugins_from_config",
    "reset_plugin_runtime_cache",
]

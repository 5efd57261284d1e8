"""Plugin system (explicit registry).

Plugins extend the engine at runtime with:
- component schemas (registered into the host system registry)
- renderers (registered into the host renderer registry)
- optional initialize/destroy lifecycle hooks
"""

from __future__ import annotations

from collections.abc import Callable

from parametric.plugins.contracts import Plugin, PluginContext, PluginMetadata, PluginState
from parametric.plugins.core import CORE_PLUGIN_ID, build_core_plugin
from parametric.plugins.factories import create_component_plugin, create_renderer_plugin
from parametric.plugins.loader import PluginLoader

BUILTIN_PLUGINS: dict[str, Callable[[], tuple[Plugin, PluginMetadata]]] = {
    CORE_PLUGIN_ID: build_core_plugin,
}

__all__ = [
    "BUILTIN_PLUGINS",
    "Plugin",
    "PluginContext",
    "PluginLoader",
    "PluginMetadata",
    "PluginState",
    "create_component_plugin",
    "create_renderer_plugin",
]

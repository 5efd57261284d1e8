"""
Plugin Loader

Tracks plugin metadata, enforces "dependencies register first", keeps an
ascending load-order list, and drives initialize/destroy hooks one plugin at
a time.
"""

from __future__ import annotations

import inspect
from typing import Any

import structlog

from parametric.events import EventType, Listener, NotificationBus
from parametric.kernel.errors import ConfigurationError, ParametricError
from parametric.plugins.contracts import LifecycleHook, Plugin, PluginContext, PluginMetadata, PluginState

logger = structlog.get_logger()


async def _run_hook(hook: LifecycleHook | None) -> None:
    if hook is None:
        return
    result = hook()
    if inspect.isawaitable(result):
        await result


class PluginLoader:
    def __init__(self, context: PluginContext, bus: NotificationBus | None = None) -> None:
        self._context = context
        self._bus = bus or NotificationBus()
        self._plugins: dict[str, Plugin] = {}
        self._metadata: dict[str, PluginMetadata] = {}
        self._states: dict[str, PluginState] = {}
        self._load_order: list[str] = []

    # =========================================================================
    # Registration
    # =========================================================================

    def register_plugin(self, plugin: Plugin, metadata: PluginMetadata) -> None:
        self._validate_plugin(plugin, metadata)
        self._check_dependencies(metadata)

        self._plugins[plugin.name] = plugin
        self._metadata[plugin.name] = metadata
        self._states[plugin.name] = PluginState.REGISTERED
        self._insert_in_load_order(plugin.name, metadata.load_order)

        logger.info(
            "Plugin registered",
            plugin=plugin.name,
            version=plugin.version,
            load_order=metadata.load_order,
        )
        self._bus.emit(EventType.PLUGIN_REGISTERED, plugin, metadata)

    def _validate_plugin(self, plugin: Plugin, metadata: PluginMetadata) -> None:
        if not plugin.name or not plugin.version:
            raise ConfigurationError(
                code="plugin.invalid",
                message="Plugin must have name and version",
                meta={"plugin": plugin.name},
            )
        if plugin.name != metadata.name:
            raise ConfigurationError(
                code="plugin.name_mismatch",
                message="Plugin name mismatch between plugin and metadata",
                meta={"plugin": plugin.name, "metadata": metadata.name},
            )
        if plugin.name in self._plugins:
            raise ConfigurationError(
                code="plugin.already_registered",
                message=f"Plugin '{plugin.name}' is already registered",
                meta={"plugin": plugin.name},
            )

    def _check_dependencies(self, metadata: PluginMetadata) -> None:
        for dependency in metadata.dependencies:
            if dependency not in self._plugins:
                raise ConfigurationError(
                    code="plugin.dependency_missing",
                    message=f"Plugin '{metadata.name}' depends on '{dependency}' which is not registered",
                    meta={"plugin": metadata.name, "dependency": dependency},
                )

    def _insert_in_load_order(self, name: str, load_order: float) -> None:
        # Before the first strictly greater entry, so ties keep registration order.
        insert_index = len(self._load_order)
        for index, existing in enumerate(self._load_order):
            if self._metadata[existing].load_order > load_order:
                insert_index = index
                break
        self._load_order.insert(insert_index, name)

    def _require(self, name: str) -> tuple[Plugin, PluginMetadata]:
        plugin = self._plugins.get(name)
        metadata = self._metadata.get(name)
        if plugin is None or metadata is None:
            raise ConfigurationError(
                code="plugin.not_found",
                message=f"Plugin '{name}' not found",
                meta={"plugin": name, "known": sorted(self._plugins.keys())},
            )
        return plugin, metadata

    # =========================================================================
    # Lifecycle
    # =========================================================================

    async def load_plugins(self) -> None:
        """Load every registered plugin in load order, one after another."""
        for name in list(self._load_order):
            await self.load_plugin(name)

    async def load_plugin(self, name: str) -> None:
        plugin, metadata = self._require(name)
        if not metadata.enabled:
            logger.debug("Skipping disabled plugin", plugin=name)
            return

        try:
            await _run_hook(plugin.initialize)
            for schema in plugin.components.values():
                self._context.register_component(schema)
            for component_type, renderer in plugin.renderers.items():
                self._context.register_renderer(component_type, renderer)
        except Exception as exc:
            logger.error("Plugin failed to load", plugin=name, error=str(exc))
            self._bus.emit(EventType.PLUGIN_LOAD_ERROR, plugin, metadata, exc)
            reason = exc.message if isinstance(exc, ParametricError) else str(exc)
            raise ConfigurationError(
                code="plugin.load_failed",
                message=f"Failed to load plugin '{name}': {reason}",
                meta={"plugin": name},
            ) from exc

        self._states[name] = PluginState.LOADED
        logger.info(
            "Plugin loaded",
            plugin=name,
            components=len(plugin.components),
            renderers=len(plugin.renderers),
        )
        self._bus.emit(EventType.PLUGIN_LOADED, plugin, metadata)

    async def unload_plugin(self, name: str) -> None:
        plugin, metadata = self._require(name)
        try:
            await _run_hook(plugin.destroy)
        except Exception as exc:
            logger.error("Plugin failed to unload", plugin=name, error=str(exc))
            self._bus.emit(EventType.PLUGIN_UNLOAD_ERROR, plugin, metadata, exc)
            raise ConfigurationError(
                code="plugin.unload_failed",
                message=f"Failed to unload plugin '{name}': {exc}",
                meta={"plugin": name},
            ) from exc

        self._states[name] = PluginState.UNLOADED
        logger.info("Plugin unloaded", plugin=name)
        self._bus.emit(EventType.PLUGIN_UNLOADED, plugin, metadata)

    def enable_plugin(self, name: str) -> None:
        _, metadata = self._require(name)
        metadata.enabled = True
        self._bus.emit(EventType.PLUGIN_ENABLED, name)

    def disable_plugin(self, name: str) -> None:
        _, metadata = self._require(name)
        metadata.enabled = False
        self._bus.emit(EventType.PLUGIN_DISABLED, name)

    # =========================================================================
    # Queries
    # =========================================================================

    def get_plugin(self, name: str) -> tuple[Plugin, PluginMetadata] | None:
        plugin = self._plugins.get(name)
        metadata = self._metadata.get(name)
        if plugin is None or metadata is None:
            return None
        return plugin, metadata

    def list_plugins(self) -> list[tuple[Plugin, PluginMetadata]]:
        return [(self._plugins[name], self._metadata[name]) for name in self._load_order]

    def get_enabled_plugins(self) -> list[tuple[Plugin, PluginMetadata]]:
        return [(plugin, metadata) for plugin, metadata in self.list_plugins() if metadata.enabled]

    @property
    def load_order(self) -> list[str]:
        return list(self._load_order)

    def plugin_state(self, name: str) -> PluginState | None:
        return self._states.get(name)

    def is_plugin_loaded(self, name: str) -> bool:
        return self._states.get(name) == PluginState.LOADED

    def is_plugin_enabled(self, name: str) -> bool:
        metadata = self._metadata.get(name)
        return metadata.enabled if metadata else False

    # =========================================================================
    # Events
    # =========================================================================

    def on(self, event: EventType | str, listener: Listener) -> None:
        self._bus.on(event, listener)

    def off(self, event: EventType | str, listener: Listener) -> None:
        self._bus.off(event, listener)

    def emit(self, event: EventType | str, *args: Any) -> None:
        self._bus.emit(event, *args)

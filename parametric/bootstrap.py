from __future__ import annotations

from dataclasses import dataclass

import structlog

from parametric.config import Settings, get_settings
from parametric.kernel.errors import ConfigurationError
from parametric.logging import configure_logging
from parametric.plugins import BUILTIN_PLUGINS, PluginContext, PluginLoader
from parametric.registry import SystemRegistry
from parametric.rendering import RendererRegistry
from parametric.storage import StorageProvider, get_storage_provider

logger = structlog.get_logger()


@dataclass
class ParametricRuntime:
    settings: Settings
    storage: StorageProvider
    registry: SystemRegistry
    renderers: RendererRegistry
    plugins: PluginLoader


async def bootstrap(
    settings: Settings | None = None,
    storage: StorageProvider | None = None,
) -> ParametricRuntime:
    """Wire storage, registry, renderers and plugins, then load enabled built-ins."""
    settings = settings or get_settings()
    configure_logging(settings)

    storage = storage or get_storage_provider(settings)
    registry = await SystemRegistry.open(storage, preset_key_prefix=settings.preset_key_prefix)
    renderers = RendererRegistry()
    plugins = PluginLoader(PluginContext.for_registry(registry, renderers))

    for plugin_id in settings.enabled_plugins:
        plugin_id = str(plugin_id).strip()
        if not plugin_id:
            continue
        build = BUILTIN_PLUGINS.get(plugin_id)
        if build is None:
            raise ConfigurationError(
                code="plugin.not_found",
                message=f"Unknown plugin id: {plugin_id!r}. Known: {sorted(BUILTIN_PLUGINS.keys())}",
                meta={"plugin": plugin_id},
            )
        plugin, metadata = build()
        plugins.register_plugin(plugin, metadata)

    await plugins.load_plugins()

    logger.info(
        "Parametric engine ready",
        storage_backend=settings.storage_backend,
        plugins=plugins.load_order,
        schemas=len(registry.list_schemas()),
        presets=len(registry.list_presets()),
    )
    return ParametricRuntime(
        settings=settings,
        storage=storage,
        registry=registry,
        renderers=renderers,
        plugins=plugins,
    )

from __future__ import annotations

from typing import Any

import structlog

from parametric.parameters.types import ComponentSchema
from parametric.plugins.contracts import Plugin, PluginMetadata
from parametric.rendering import Renderer

logger = structlog.get_logger()

COMPONENT_PLUGIN_LOAD_ORDER = 100
RENDERER_PLUGIN_LOAD_ORDER = 50


def _announce(kind: str, name: str):
    async def initialize() -> None:
        logger.info("Plugin initialized", kind=kind, plugin=name)

    return initialize


def create_component_plugin(
    name: str,
    version: str,
    components: dict[str, ComponentSchema],
    **options: Any,
) -> tuple[Plugin, PluginMetadata]:
    """Bundle schemas into a plugin. Loads after renderer plugins by default."""
    plugin = Plugin(
        name=name,
        version=version,
        components=dict(components),
        initialize=_announce("Component", name),
    )
    metadata = PluginMetadata(
        **{
            "name": name,
            "version": version,
            "description": f"Component plugin for {name}",
            "load_order": COMPONENT_PLUGIN_LOAD_ORDER,
            **options,
        }
    )
    return plugin, metadata


def create_renderer_plugin(
    name: str,
    version: str,
    renderers: dict[str, Renderer],
    **options: Any,
) -> tuple[Plugin, PluginMetadata]:
    plugin = Plugin(
        name=name,
        version=version,
        renderers=dict(renderers),
        initialize=_announce("Renderer", name),
    )
    metadata = PluginMetadata(
        **{
            "name": name,
            "version": version,
            "description": f"Renderer plugin for {name}",
            "load_order": RENDERER_PLUGIN_LOAD_ORDER,
            **options,
        }
    )
    return plugin, metadata

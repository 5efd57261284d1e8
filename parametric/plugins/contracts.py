from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Union

from pydantic import BaseModel, Field

from parametric.events import Listener
from parametric.parameters.types import ComponentSchema
from parametric.rendering import Renderer

if TYPE_CHECKING:
    from parametric.registry import SystemRegistry
    from parametric.rendering import RendererRegistry


# Lifecycle hooks may be plain functions or coroutines; the loader awaits both.
LifecycleHook = Callable[[], Union[Awaitable[None], None]]


class PluginState(str, Enum):
    REGISTERED = "registered"
    LOADED = "loaded"
    UNLOADED = "unloaded"


@dataclass
class Plugin:
    """A bundle of component schemas and renderers registered at runtime.

    `components` maps component type -> schema; `renderers` maps component
    type -> renderer callable.
    """

    name: str
    version: str
    components: dict[str, ComponentSchema] = field(default_factory=dict)
    renderers: dict[str, Renderer] = field(default_factory=dict)
    initialize: LifecycleHook | None = None
    destroy: LifecycleHook | None = None


class PluginMetadata(BaseModel):
    """Registration metadata. `enabled` gates loading; it never loads by itself."""

    name: str = Field(..., min_length=1, max_length=128)
    version: str = Field(..., min_length=1, max_length=32)
    author: str = "unknown"
    description: str = ""
    dependencies: list[str] = Field(default_factory=list)
    load_order: float = 100
    enabled: bool = True


@dataclass
class PluginContext:
    """Callback handles the loader uses to reach its host.

    The loader never reaches into a registry directly; it only calls these.
    """

    register_component: Callable[[ComponentSchema], Any]
    register_renderer: Callable[[str, Renderer], Any]
    emit: Callable[..., None]
    on: Callable[[str, Listener], None]
    get_system: Callable[[], Any]

    @classmethod
    def for_registry(cls, registry: "SystemRegistry", renderers: "RendererRegistry") -> "PluginContext":
        return cls(
            register_component=registry.register_component,
            register_renderer=renderers.register,
            emit=registry.bus.emit,
            on=registry.bus.on,
            get_system=lambda: registry,
        )

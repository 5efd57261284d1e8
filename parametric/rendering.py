"""
Renderer Registry

The visual rendering layer is an external collaborator. The engine only keeps
track of which renderer handles which component type and hands each one a
validated parameter map plus style overrides.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

import structlog

from parametric.kernel.errors import ConfigurationError
from parametric.parameters.types import ComponentInstance

logger = structlog.get_logger()


@dataclass(frozen=True)
class RenderProps:
    """Everything a renderer is given. Nothing flows back into the engine."""

    parameters: dict[str, Any]
    style: dict[str, Any] = field(default_factory=dict)
    class_name: str | None = None


Renderer = Callable[[RenderProps], Any]


class RendererRegistry:
    def __init__(self) -> None:
        self._renderers: dict[str, Renderer] = {}

    def register(self, component_type: str, renderer: Renderer) -> None:
        if not callable(renderer):
            raise ConfigurationError(
                code="renderer.invalid",
                message=f"Renderer for '{component_type}' is not callable",
                component_type=component_type,
            )
        if component_type in self._renderers and self._renderers[component_type] is not renderer:
            logger.info("Renderer replaced", component_type=component_type)
        self._renderers[component_type] = renderer

    def get(self, component_type: str) -> Renderer:
        renderer = self._renderers.get(component_type)
        if renderer is None:
            raise ConfigurationError(
                code="renderer.not_found",
                message=f"No renderer registered for '{component_type}'",
                component_type=component_type,
                meta={"known_types": self.list_types()},
            )
        return renderer

    def has(self, component_type: str) -> bool:
        return component_type in self._renderers

    def list_types(self) -> list[str]:
        return sorted(self._renderers.keys())

    def render(
        self,
        instance: ComponentInstance,
        *,
        style: dict[str, Any] | None = None,
        class_name: str | None = None,
    ) -> Any:
        renderer = self.get(instance.type)
        props = RenderProps(
            parameters=dict(instance.parameters),
            style=dict(style or {}),
            class_name=class_name,
        )
        return renderer(props)

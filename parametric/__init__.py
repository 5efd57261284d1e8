"""Schema-driven parameter engine for visual components.

Declares typed, bounded parameters, validates values against them, manages
presets, snapshots configuration state and accepts runtime plugins.
"""

from parametric.bootstrap import ParametricRuntime, bootstrap
from parametric.events import EventType, NotificationBus
from parametric.kernel.errors import ConfigurationError, ParametricError, ValidationError
from parametric.parameters import (
    ComponentInstance,
    ComponentSchema,
    PresetConfig,
    ValidationResult,
    validate_parameter,
    validate_parameters,
)
from parametric.plugins import Plugin, PluginContext, PluginLoader, PluginMetadata
from parametric.registry import SystemRegistry
from parametric.rendering import RendererRegistry, RenderProps

__version__ = "0.1.0"

__all__ = [
    "ComponentInstance",
    "ComponentSchema",
    "ConfigurationError",
    "EventType",
    "NotificationBus",
    "ParametricError",
    "ParametricRuntime",
    "Plugin",
    "PluginContext",
    "PluginLoader",
    "PluginMetadata",
    "PresetConfig",
    "RenderProps",
    "RendererRegistry",
    "SystemRegistry",
    "ValidationError",
    "ValidationResult",
    "bootstrap",
    "validate_parameter",
    "validate_parameters",
]

"""
Event Types

Names of the notifications emitted by the registry and the plugin loader.
"""

from enum import Enum


class EventType(str, Enum):
    """Types of events that can be emitted on a notification bus."""

    # Registry lifecycle events
    COMPONENT_REGISTERED = "component.registered"
    COMPONENT_CREATED = "component.created"
    PARAMETER_UPDATED = "parameter.updated"
    REGISTRY_CLEARED = "registry.cleared"

    # Preset and snapshot events
    PRESET_SAVED = "preset.saved"
    PRESET_DELETED = "preset.deleted"
    CONFIGURATION_IMPORTED = "configuration.imported"

    # Plugin events
    PLUGIN_REGISTERED = "plugin.registered"
    PLUGIN_LOADED = "plugin.loaded"
    PLUGIN_LOAD_ERROR = "plugin.load_error"
    PLUGIN_UNLOADED = "plugin.unloaded"
    PLUGIN_UNLOAD_ERROR = "plugin.unload_error"
    PLUGIN_ENABLED = "plugin.enabled"
    PLUGIN_DISABLED = "plugin.disabled"

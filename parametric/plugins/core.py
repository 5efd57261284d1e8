from __future__ import annotations

from parametric.parameters.types import ComponentSchema, PresetConfig, PresetMetadata
from parametric.plugins.contracts import Plugin, PluginMetadata
from parametric.plugins.factories import create_component_plugin

CORE_PLUGIN_ID = "core"
CORE_PLUGIN_VERSION = "1.0.0"

_AUTHOR = "Parametric Engine"


def _preset(preset_id: str, name: str, component_type: str, description: str, tags: list[str], **parameters) -> PresetConfig:
    return PresetConfig(
        id=preset_id,
        name=name,
        component_type=component_type,
        description=description,
        parameters=parameters,
        metadata=PresetMetadata(author=_AUTHOR, tags=tags),
    )


HERO_SCHEMA = ComponentSchema.model_validate(
    {
        "id": "hero",
        "name": "Hero Section",
        "category": "layout",
        "description": "A hero section with gradient background and typography controls",
        "groups": {
            "Visual": ["background_color", "text_color", "opacity", "gradient", "shadow_intensity"],
            "Typography": ["font_size"],
            "Layout": ["padding", "spacing", "alignment"],
            "Effects": ["border_radius", "animation_duration"],
        },
        "parameters": {
            "background_color": {"type": "color", "default": "#1a1a2e", "description": "Background color"},
            "text_color": {"type": "color", "default": "#ffffff", "description": "Text color"},
            "font_size": {"type": "slider", "min": 24, "max": 72, "default": 48, "unit": "px"},
            "padding": {"type": "slider", "min": 20, "max": 100, "default": 60, "unit": "px"},
            "border_radius": {"type": "slider", "min": 0, "max": 50, "default": 12, "unit": "px"},
            "animation_duration": {"type": "slider", "min": 100, "max": 2000, "default": 1000, "unit": "ms"},
            "opacity": {"type": "slider", "min": 0, "max": 1, "step": 0.1, "default": 1},
            "spacing": {"type": "slider", "min": 8, "max": 48, "default": 24, "unit": "px"},
            "alignment": {"type": "dropdown", "options": ["left", "center", "right"], "default": "center"},
            "gradient": {"type": "toggle", "default": True, "description": "Enable gradient"},
            "shadow_intensity": {
                "type": "slider",
                "min": 0,
                "max": 1,
                "step": 0.1,
                "default": 0.3,
                "dependencies": ["gradient"],
            },
        },
        "presets": [
            _preset(
                "hero_modern_dark",
                "Modern Dark",
                "hero",
                "Dark theme with blue gradient",
                ["dark", "modern", "gradient"],
                background_color="#0f172a",
                text_color="#f8fafc",
                font_size=56,
                gradient=True,
                shadow_intensity=0.4,
            )
        ],
    }
)

BUTTON_SCHEMA = ComponentSchema.model_validate(
    {
        "id": "button",
        "name": "Button",
        "category": "interactive",
        "description": "Interactive button with hover effects and multiple variants",
        "groups": {
            "Visual": ["background_color", "text_color", "variant", "shadow"],
            "Typography": ["font_size"],
            "Layout": ["padding", "width", "border_radius"],
            "Effects": ["hover_scale", "animation_duration"],
        },
        "parameters": {
            "background_color": {"type": "color", "default": "#4f46e5"},
            "text_color": {"type": "color", "default": "#ffffff"},
            "font_size": {"type": "slider", "min": 12, "max": 24, "default": 16, "unit": "px"},
            "padding": {"type": "slider", "min": 8, "max": 32, "default": 16, "unit": "px"},
            "border_radius": {"type": "slider", "min": 0, "max": 24, "default": 8, "unit": "px"},
            "hover_scale": {"type": "slider", "min": 1, "max": 1.2, "step": 0.05, "default": 1.05},
            "animation_duration": {"type": "slider", "min": 100, "max": 800, "default": 300, "unit": "ms"},
            "width": {"type": "slider", "min": 100, "max": 300, "default": 180, "unit": "px"},
            "shadow": {"type": "toggle", "default": True},
            "variant": {"type": "dropdown", "options": ["filled", "outlined", "ghost"], "default": "filled"},
        },
        "presets": [
            _preset(
                "button_ghost_minimal",
                "Ghost Minimal",
                "button",
                "Borderless ghost button without shadow",
                ["minimal", "ghost"],
                variant="ghost",
                shadow=False,
                hover_scale=1.0,
            )
        ],
    }
)

CARD_SCHEMA = ComponentSchema.model_validate(
    {
        "id": "card",
        "name": "Card",
        "category": "components",
        "description": "Content card with optional tilt and gradient border",
        "groups": {
            "Visual": ["background", "border_gradient", "elevation"],
            "Layout": ["size", "padding", "border_radius"],
            "Motion": ["tilt_enabled", "tilt_axis", "easing"],
        },
        "parameters": {
            "background": {"type": "color", "default": "rgba(255, 255, 255, 0.9)"},
            "border_gradient": {
                "type": "colorGradient",
                "default": {"type": "linear", "colors": ["#6366f1", "#ec4899"], "stops": [0, 100]},
            },
            "elevation": {"type": "slider", "min": 0, "max": 5, "step": 1, "default": 2},
            "size": {"type": "vector2D", "default": [320, 200], "unit": "px"},
            "padding": {"type": "range", "min": 0, "max": 64, "default": [16, 24], "unit": "px"},
            "border_radius": {"type": "numeric", "min": 0, "max": 32, "default": 12, "unit": "px"},
            "tilt_enabled": {"type": "toggle", "default": False},
            "tilt_axis": {
                "type": "vector3D",
                "default": [0, 1, 0],
                "dependencies": ["tilt_enabled"],
            },
            "easing": {"type": "bezierCurve", "default": [0.25, 0.1, 0.25, 1.0]},
        },
        "presets": [],
    }
)


def build_core_plugin() -> tuple[Plugin, PluginMetadata]:
    """Schemas every installation starts with."""
    return create_component_plugin(
        CORE_PLUGIN_ID,
        CORE_PLUGIN_VERSION,
        {schema.id: schema for schema in (HERO_SCHEMA, BUTTON_SCHEMA, CARD_SCHEMA)},
        author=_AUTHOR,
        description="Built-in hero, button and card components",
        load_order=10,
    )

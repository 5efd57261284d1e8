"""Parameter declarations and the pure validator that checks values against them."""

from parametric.parameters.types import (
    BezierCurveParameter,
    ColorGradientParameter,
    ColorParameter,
    ComponentInstance,
    ComponentSchema,
    ConfigurationSnapshot,
    ConditionalRule,
    DropdownParameter,
    InstanceMetadata,
    MultiSelectParameter,
    NumericParameter,
    ParameterConfig,
    ParameterType,
    ParameterUpdateEvent,
    PresetConfig,
    PresetMetadata,
    SNAPSHOT_VERSION,
    RangeParameter,
    TextParameter,
    ToggleParameter,
    ValidationResult,
    Vector2DParameter,
    Vector3DParameter,
)
from parametric.parameters.validator import is_valid_color, validate_parameter, validate_parameters

__all__ = [
    "BezierCurveParameter",
    "ColorGradientParameter",
    "ColorParameter",
    "ComponentInstance",
    "ComponentSchema",
    "ConfigurationSnapshot",
    "ConditionalRule",
    "DropdownParameter",
    "InstanceMetadata",
    "MultiSelectParameter",
    "NumericParameter",
    "ParameterConfig",
    "ParameterType",
    "ParameterUpdateEvent",
    "PresetConfig",
    "PresetMetadata",
    "SNAPSHOT_VERSION",
    "RangeParameter",
    "TextParameter",
    "ToggleParameter",
    "ValidationResult",
    "Vector2DParameter",
    "Vector3DParameter",
    "is_valid_color",
    "validate_parameter",
    "validate_parameters",
]

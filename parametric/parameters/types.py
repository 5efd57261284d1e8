"""
Parameter and Schema Types

Declarative models for component schemas, parameters, presets, instances and
validation results. Parameter configs form a closed tagged union keyed on
`type`; each variant carries only the constraints that apply to it.
"""

from __future__ import annotations

import copy
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator

from parametric.kernel.time import coerce_utc, utc_now


ParameterType = Literal[
    "slider",
    "numeric",
    "color",
    "dropdown",
    "toggle",
    "range",
    "text",
    "multiSelect",
    "colorGradient",
    "bezierCurve",
    "vector2D",
    "vector3D",
]

# Custom validators return True (pass), False (generic failure) or a message.
ValidationFunction = Callable[[Any], Union[bool, str]]

OptionValue = Union[str, int, float]


class ConditionalRule(BaseModel):
    """Visibility rule: the parameter is shown while `condition` matches `show_when`."""

    depends_on: str = Field(..., min_length=1)
    condition: Callable[[Any], bool]
    show_when: bool = True


class _ParameterBase(BaseModel):
    model_config = ConfigDict(extra="ignore")

    default: Any
    unit: str | None = None
    description: str = ""
    group: str | None = None
    dependencies: list[str] = Field(default_factory=list)
    validation: ValidationFunction | None = None
    conditional: ConditionalRule | None = None


class NumericParameter(_ParameterBase):
    type: Literal["slider", "numeric"]
    min: float | None = None
    max: float | None = None
    step: float | None = Field(default=None, gt=0)


class ColorParameter(_ParameterBase):
    type: Literal["color"]


class DropdownParameter(_ParameterBase):
    type: Literal["dropdown"]
    options: list[OptionValue] | None = None


class ToggleParameter(_ParameterBase):
    type: Literal["toggle"]


class RangeParameter(_ParameterBase):
    type: Literal["range"]
    min: float | None = None
    max: float | None = None
    step: float | None = Field(default=None, gt=0)


class TextParameter(_ParameterBase):
    type: Literal["text"]


class MultiSelectParameter(_ParameterBase):
    type: Literal["multiSelect"]
    options: list[OptionValue] | None = None


class ColorGradientParameter(_ParameterBase):
    type: Literal["colorGradient"]


class BezierCurveParameter(_ParameterBase):
    type: Literal["bezierCurve"]


class Vector2DParameter(_ParameterBase):
    type: Literal["vector2D"]
    # Hints for UI controls; values are not clamped to them.
    min: float | None = None
    max: float | None = None


class Vector3DParameter(_ParameterBase):
    type: Literal["vector3D"]
    min: float | None = None
    max: float | None = None


ParameterConfig = Annotated[
    Union[
        NumericParameter,
        ColorParameter,
        DropdownParameter,
        ToggleParameter,
        RangeParameter,
        TextParameter,
        MultiSelectParameter,
        ColorGradientParameter,
        BezierCurveParameter,
        Vector2DParameter,
        Vector3DParameter,
    ],
    Field(discriminator="type"),
]


class PresetMetadata(BaseModel):
    author: str = "unknown"
    version: str = "1.0.0"
    tags: list[str] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)


class PresetConfig(BaseModel):
    """A named set of parameter overrides for one component type."""

    id: str
    name: str
    component_type: str
    description: str = ""
    category: str | None = None
    parameters: dict[str, Any] = Field(default_factory=dict)
    metadata: PresetMetadata = Field(default_factory=PresetMetadata)


class ComponentSchema(BaseModel):
    """Declarative definition of a component type.

    Registration enforces the invariants (non-empty id/name/category, at least
    one parameter); the model itself stays permissive so that a malformed
    schema surfaces as a registration error rather than at construction.
    """

    id: str
    name: str
    category: str
    description: str = ""
    version: str = "1.0.0"
    groups: dict[str, list[str]] = Field(default_factory=dict)
    parameters: dict[str, ParameterConfig] = Field(default_factory=dict)
    presets: list[PresetConfig] = Field(default_factory=list)

    def defaults(self) -> dict[str, Any]:
        """Fresh copy of every default, safe to mutate."""
        return {name: copy.deepcopy(config.default) for name, config in self.parameters.items()}


class InstanceMetadata(BaseModel):
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)


class ComponentInstance(BaseModel):
    id: str
    type: str
    preset: str | None = None
    parameters: dict[str, Any]
    metadata: InstanceMetadata = Field(default_factory=InstanceMetadata)


class ValidationResult(BaseModel):
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_valid(self) -> bool:
        return not self.errors


SNAPSHOT_VERSION = "1.0.0"


class ConfigurationSnapshot(BaseModel):
    """Versioned export of component instances and presets."""

    version: str = SNAPSHOT_VERSION
    timestamp: datetime = Field(default_factory=utc_now)
    components: list[ComponentInstance] = Field(default_factory=list)
    presets: list[PresetConfig] = Field(default_factory=list)

    @field_validator("timestamp")
    @classmethod
    def validate_timestamp(cls, value: datetime) -> datetime:
        # Older exporters wrote naive timestamps.
        return coerce_utc(value)


@dataclass
class ParameterUpdateEvent:
    """Payload of a `parameter.updated` notification."""

    component_id: str
    component_type: str
    parameter: str
    old_value: Any
    new_value: Any
    timestamp: datetime = field(default_factory=utc_now)

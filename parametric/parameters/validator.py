"""
Parameter Validator

Pure checks of candidate values against parameter declarations. One check per
parameter kind, dispatched on the config's `type` tag.
"""

from __future__ import annotations

import math
import re
from collections.abc import Callable, Mapping
from typing import Any

from parametric.parameters.types import (
    ComponentSchema,
    ParameterConfig,
    ValidationResult,
)

STEP_TOLERANCE = 1e-4
GRADIENT_TYPES = frozenset({"linear", "radial", "conic"})

_HEX_RE = re.compile(r"^#([A-Fa-f0-9]{6}|[A-Fa-f0-9]{3})$")
_RGB_RE = re.compile(
    r"^rgba?\(\s*([0-9]+)\s*,\s*([0-9]+)\s*,\s*([0-9]+)\s*(?:,\s*([0-9.]+))?\s*\)$"
)
_HSL_RE = re.compile(
    r"^hsla?\(\s*([0-9]+)\s*,\s*([0-9]+)%\s*,\s*([0-9]+)%\s*(?:,\s*([0-9.]+))?\s*\)$"
)


def _is_number(value: Any) -> bool:
    # bool is an int subclass; toggles are never numbers.
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def _is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def _parse_alpha(raw: str | None) -> float | None:
    if raw is None:
        return 1.0
    try:
        return float(raw)
    except ValueError:
        return None


def is_valid_color(value: Any) -> bool:
    """Hex (#rgb/#rrggbb), rgb()/rgba() or hsl()/hsla() color strings."""
    if not isinstance(value, str):
        return False

    if _HEX_RE.fullmatch(value):
        return True

    match = _RGB_RE.fullmatch(value)
    if match:
        red, green, blue = (int(part) for part in match.group(1, 2, 3))
        alpha = _parse_alpha(match.group(4))
        if alpha is None:
            return False
        return all(0 <= channel <= 255 for channel in (red, green, blue)) and 0 <= alpha <= 1

    match = _HSL_RE.fullmatch(value)
    if match:
        hue, saturation, lightness = (int(part) for part in match.group(1, 2, 3))
        alpha = _parse_alpha(match.group(4))
        if alpha is None:
            return False
        return (
            0 <= hue <= 360
            and 0 <= saturation <= 100
            and 0 <= lightness <= 100
            and 0 <= alpha <= 1
        )

    return False


def _check_numeric(config: Any, value: Any) -> bool:
    if not _is_number(value):
        return False
    if config.min is not None and value < config.min:
        return False
    if config.max is not None and value > config.max:
        return False
    if config.step is not None:
        base = config.min or 0
        steps = round((value - base) / config.step)
        expected = base + steps * config.step
        if abs(value - expected) > STEP_TOLERANCE:
            return False
    return True


def _check_color(config: Any, value: Any) -> bool:
    return is_valid_color(value)


def _check_dropdown(config: Any, value: Any) -> bool:
    if not isinstance(value, str):
        return False
    return config.options is None or value in config.options


def _check_toggle(config: Any, value: Any) -> bool:
    return isinstance(value, bool)


def _check_range(config: Any, value: Any) -> bool:
    if not _is_sequence(value) or len(value) != 2:
        return False
    low, high = value
    if not (_is_number(low) and _is_number(high)):
        return False
    if low > high:
        return False
    if config.min is not None and low < config.min:
        return False
    if config.max is not None and high > config.max:
        return False
    return True


def _check_text(config: Any, value: Any) -> bool:
    return isinstance(value, str)


def _check_multi_select(config: Any, value: Any) -> bool:
    if not _is_sequence(value):
        return False
    if config.options is None:
        return True
    return all(item in config.options for item in value)


def _check_color_gradient(config: Any, value: Any) -> bool:
    if not isinstance(value, Mapping):
        return False
    if value.get("type") not in GRADIENT_TYPES:
        return False

    colors = value.get("colors")
    if not _is_sequence(colors) or len(colors) < 2:
        return False
    if not all(is_valid_color(color) for color in colors):
        return False

    stops = value.get("stops")
    if stops is not None:
        if not _is_sequence(stops) or len(stops) != len(colors):
            return False
        if not all(_is_number(stop) and 0 <= stop <= 100 for stop in stops):
            return False
    return True


def _check_bezier_curve(config: Any, value: Any) -> bool:
    return (
        _is_sequence(value)
        and len(value) == 4
        and all(_is_number(point) and 0 <= point <= 1 for point in value)
    )


def _check_vector(length: int) -> Callable[[Any, Any], bool]:
    def check(config: Any, value: Any) -> bool:
        return _is_sequence(value) and len(value) == length and all(_is_number(v) for v in value)

    return check


_CHECKS: dict[str, Callable[[Any, Any], bool]] = {
    "slider": _check_numeric,
    "numeric": _check_numeric,
    "color": _check_color,
    "dropdown": _check_dropdown,
    "toggle": _check_toggle,
    "range": _check_range,
    "text": _check_text,
    "multiSelect": _check_multi_select,
    "colorGradient": _check_color_gradient,
    "bezierCurve": _check_bezier_curve,
    "vector2D": _check_vector(2),
    "vector3D": _check_vector(3),
}


def validate_parameter(config: ParameterConfig, value: Any) -> bool:
    """Check one value against its declaration. Never raises."""
    check = _CHECKS.get(getattr(config, "type", None))
    if check is None:
        return False
    try:
        return bool(check(config, value))
    except Exception:
        return False


def _run_custom_validation(name: str, config: ParameterConfig, value: Any) -> str | None:
    try:
        outcome = config.validation(value)
    except Exception as exc:
        return f"{name}: custom validation raised {type(exc).__name__}: {exc}"
    if outcome is True:
        return None
    if isinstance(outcome, str):
        return f"{name}: {outcome}"
    return f"Invalid value for parameter '{name}'"


def _is_visible(config: ParameterConfig, governing_value: Any) -> bool:
    rule = config.conditional
    try:
        return bool(rule.condition(governing_value)) == rule.show_when
    except Exception:
        return False


def validate_parameters(schema: ComponentSchema, values: Mapping[str, Any]) -> ValidationResult:
    """Check a full parameter map against a schema.

    Hard failures (missing or invalid values, failed custom checks) become
    errors. Unknown keys, unmet dependencies and conditional-visibility
    mismatches become warnings. Everything accumulates before returning.
    """
    errors: list[str] = []
    warnings: list[str] = []

    for name, config in schema.parameters.items():
        if name not in values:
            errors.append(f"Missing required parameter: {name}")
            continue

        value = values[name]
        if not validate_parameter(config, value):
            errors.append(f"Invalid value for parameter '{name}': {value!r}")

        if config.validation is not None:
            message = _run_custom_validation(name, config, value)
            if message:
                errors.append(message)

        for dependency in config.dependencies:
            if dependency not in values:
                warnings.append(f"Parameter '{name}' depends on '{dependency}' which is not set")

        if config.conditional is not None and config.conditional.depends_on in values:
            if not _is_visible(config, values[config.conditional.depends_on]):
                warnings.append(f"Parameter '{name}' should not be visible based on current conditions")

    for name in values:
        if name not in schema.parameters:
            warnings.append(f"Unknown parameter: {name}")

    return ValidationResult(errors=errors, warnings=warnings)

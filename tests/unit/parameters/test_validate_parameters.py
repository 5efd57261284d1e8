from __future__ import annotations

import pytest

from parametric.parameters.types import ComponentSchema
from parametric.parameters.validator import validate_parameters
from tests.support.schemas import make_slider_schema

pytestmark = [pytest.mark.unit]


def _valid_values() -> dict:
    return {"size": 50, "color": "#ffffff", "mode": "a", "visible": True}


def test_defaults_validate_cleanly(slider_schema) -> None:
    result = validate_parameters(slider_schema, slider_schema.defaults())
    assert result.is_valid
    assert result.errors == []
    assert result.warnings == []


def test_missing_parameter_is_an_error(slider_schema) -> None:
    values = _valid_values()
    del values["mode"]
    result = validate_parameters(slider_schema, values)
    assert not result.is_valid
    assert result.errors == ["Missing required parameter: mode"]


def test_errors_accumulate(slider_schema) -> None:
    values = {**_valid_values(), "size": 27, "color": "#gggggg"}
    result = validate_parameters(slider_schema, values)
    assert len(result.errors) == 2
    assert any("size" in error for error in result.errors)
    assert any("color" in error for error in result.errors)


def test_unknown_parameter_is_only_a_warning(slider_schema) -> None:
    result = validate_parameters(slider_schema, {**_valid_values(), "extra": 1})
    assert result.is_valid
    assert result.warnings == ["Unknown parameter: extra"]


def test_custom_validation_message_and_failure() -> None:
    schema = make_slider_schema(
        parameters={
            "label": {
                "type": "text",
                "default": "ok",
                "validation": lambda v: True if len(v) <= 5 else "too long",
            },
            "count": {"type": "numeric", "default": 2, "validation": lambda v: v % 2 == 0},
        },
        presets=[],
    )
    assert validate_parameters(schema, {"label": "ok", "count": 2}).is_valid

    result = validate_parameters(schema, {"label": "toolong", "count": 3})
    assert "label: too long" in result.errors
    assert "Invalid value for parameter 'count'" in result.errors


def test_custom_validation_that_raises_becomes_an_error() -> None:
    def explode(value):
        raise RuntimeError("boom")

    schema = make_slider_schema(
        parameters={"label": {"type": "text", "default": "", "validation": explode}},
        presets=[],
    )
    result = validate_parameters(schema, {"label": "x"})
    assert not result.is_valid
    assert "boom" in result.errors[0]


def test_unmet_dependency_is_a_warning() -> None:
    schema = make_slider_schema(
        parameters={
            "shadow": {"type": "toggle", "default": True},
            "blur": {"type": "numeric", "default": 1, "dependencies": ["shadow"]},
        },
        presets=[],
    )
    result = validate_parameters(schema, {"blur": 1})
    # Missing `shadow` is still an error; the dependency adds a warning.
    assert result.errors == ["Missing required parameter: shadow"]
    assert result.warnings == ["Parameter 'blur' depends on 'shadow' which is not set"]


def test_conditional_visibility_mismatch_is_a_warning() -> None:
    schema = ComponentSchema.model_validate(
        {
            "id": "panel",
            "name": "Panel",
            "category": "layout",
            "parameters": {
                "shadow": {"type": "toggle", "default": False},
                "blur": {
                    "type": "numeric",
                    "default": 0,
                    "conditional": {"depends_on": "shadow", "condition": lambda v: v is True},
                },
            },
        }
    )
    hidden = validate_parameters(schema, {"shadow": False, "blur": 0})
    assert hidden.is_valid
    assert hidden.warnings == ["Parameter 'blur' should not be visible based on current conditions"]

    shown = validate_parameters(schema, {"shadow": True, "blur": 0})
    assert shown.warnings == []


def test_conditional_show_when_false_inverts_rule() -> None:
    schema = ComponentSchema.model_validate(
        {
            "id": "panel",
            "name": "Panel",
            "category": "layout",
            "parameters": {
                "flat": {"type": "toggle", "default": True},
                "depth": {
                    "type": "numeric",
                    "default": 0,
                    "conditional": {
                        "depends_on": "flat",
                        "condition": lambda v: v is True,
                        "show_when": False,
                    },
                },
            },
        }
    )
    assert validate_parameters(schema, {"flat": False, "depth": 0}).warnings == []
    assert len(validate_parameters(schema, {"flat": True, "depth": 0}).warnings) == 1

from __future__ import annotations

from datetime import timedelta

import pytest

from parametric.events import EventType
from parametric.kernel.errors import ConfigurationError, ValidationError
from parametric.kernel.ids import is_prefixed_id
from parametric.parameters.types import ParameterUpdateEvent

pytestmark = [pytest.mark.unit]


def test_create_component_uses_schema_defaults(registered, bus) -> None:
    created = []
    bus.on(EventType.COMPONENT_CREATED, created.append)

    instance = registered.create_component("widget")

    assert is_prefixed_id(instance.id, "comp")
    assert instance.type == "widget"
    assert instance.preset is None
    assert instance.parameters == {"size": 50, "color": "#ffffff", "mode": "a", "visible": True}
    assert registered.get_component(instance.id) is instance
    assert created == [instance]


def test_create_component_applies_preset(registered) -> None:
    instance = registered.create_component("widget", "widget_big")

    assert instance.preset == "widget_big"
    assert instance.parameters == {"size": 100, "color": "#ffffff", "mode": "c", "visible": True}


def test_instances_are_independent(registered) -> None:
    first = registered.create_component("widget")
    second = registered.create_component("widget")

    registered.update_parameter(first.id, "size", 10)

    assert first.id != second.id
    assert second.parameters["size"] == 50
    assert [c.id for c in registered.list_components()] == [first.id, second.id]


def test_create_component_unknown_type(registry) -> None:
    with pytest.raises(ConfigurationError) as exc_info:
        registry.create_component("ghost")
    assert exc_info.value.code == "component.type_not_found"


def test_create_component_unknown_preset(registered) -> None:
    with pytest.raises(ConfigurationError) as exc_info:
        registered.create_component("widget", "nope")
    assert exc_info.value.code == "preset.not_found"
    assert registered.list_components() == []


def test_create_component_preset_for_other_type(registered) -> None:
    registered.register_component(
        {
            "id": "badge",
            "name": "Badge",
            "category": "display",
            "parameters": {"label": {"type": "text", "default": "new"}},
        }
    )
    with pytest.raises(ConfigurationError) as exc_info:
        registered.create_component("badge", "widget_big")
    assert exc_info.value.code == "preset.incompatible"


def test_preset_keys_outside_schema_are_not_applied(registry, slider_schema) -> None:
    schema = slider_schema.model_copy(deep=True)
    schema.presets[0].parameters["unknown"] = 1
    registry.register_component(schema)

    instance = registry.create_component("widget", "widget_big")

    assert set(instance.parameters) == set(schema.parameters)


def test_update_parameter_changes_value_and_emits(registered, bus, fake_clock, monkeypatch) -> None:
    monkeypatch.setattr("parametric.registry.utc_now", fake_clock.now)
    instance = registered.create_component("widget")
    updates: list[ParameterUpdateEvent] = []
    bus.on(EventType.PARAMETER_UPDATED, updates.append)

    fake_clock.advance(timedelta(minutes=5))
    event = registered.update_parameter(instance.id, "size", 75)

    assert instance.parameters["size"] == 75
    assert instance.metadata.updated_at == fake_clock.now()
    assert instance.metadata.created_at < instance.metadata.updated_at
    assert event.old_value == 50
    assert event.new_value == 75
    assert event.component_type == "widget"
    assert event.timestamp == fake_clock.now()
    assert updates == [event]


def test_update_parameter_rejects_invalid_value(registered, bus) -> None:
    instance = registered.create_component("widget")
    updates = []
    bus.on(EventType.PARAMETER_UPDATED, updates.append)
    before = instance.metadata.updated_at

    with pytest.raises(ValidationError) as exc_info:
        registered.update_parameter(instance.id, "size", 27)

    assert exc_info.value.code == "parameter.invalid"
    assert exc_info.value.parameter == "size"
    assert instance.parameters["size"] == 50
    assert instance.metadata.updated_at == before
    assert updates == []


def test_update_parameter_rejects_undeclared_parameter(registered) -> None:
    instance = registered.create_component("widget")
    snapshot = dict(instance.parameters)

    with pytest.raises(ValidationError) as exc_info:
        registered.update_parameter(instance.id, "rotation", 90)

    assert exc_info.value.code == "parameter.unknown"
    assert instance.parameters == snapshot


def test_update_parameter_unknown_component(registered) -> None:
    with pytest.raises(ConfigurationError) as exc_info:
        registered.update_parameter("comp_missing", "size", 10)
    assert exc_info.value.code == "component.not_found"


def test_validate_parameters_delegates_to_schema(registered) -> None:
    result = registered.validate_parameters("widget", {"size": 101})
    assert not result.is_valid
    assert "Missing required parameter: color" in result.errors

    unknown = registered.validate_parameters("ghost", {})
    assert unknown.errors == ["Component type 'ghost' not found"]


def test_clear_drops_instances_but_keeps_schemas(registered, bus) -> None:
    cleared = []
    bus.on(EventType.REGISTRY_CLEARED, cleared.append)
    registered.create_component("widget")
    registered.create_component("widget")

    registered.clear()

    assert registered.list_components() == []
    assert registered.get_schema("widget") is not None
    assert cleared == [2]


def test_mutable_values_are_not_shared_between_instances(registry) -> None:
    schema = registry.register_component(
        {
            "id": "slider_pair",
            "name": "Slider Pair",
            "category": "inputs",
            "parameters": {
                "bounds": {"type": "range", "min": 0, "max": 100, "default": [0, 10]},
                "offset": {"type": "vector2D", "default": [0, 0]},
            },
            "presets": [
                {
                    "id": "pair_wide",
                    "name": "Wide",
                    "component_type": "slider_pair",
                    "parameters": {"bounds": [0, 90]},
                }
            ],
        }
    )
    first = registry.create_component("slider_pair")
    second = registry.create_component("slider_pair")
    first.parameters["bounds"].append(99)
    first.parameters["offset"][0] = 5

    assert second.parameters["bounds"] == [0, 10]
    assert second.parameters["offset"] == [0, 0]
    assert schema.parameters["bounds"].default == [0, 10]

    wide = registry.create_component("slider_pair", "pair_wide")
    wide.parameters["bounds"][1] = 50
    assert registry.get_preset("pair_wide").parameters["bounds"] == [0, 90]

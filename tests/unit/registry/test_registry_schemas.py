from __future__ import annotations

import pytest

from parametric.events import EventType
from parametric.kernel.errors import ConfigurationError
from tests.support.schemas import make_slider_schema

pytestmark = [pytest.mark.unit]


def test_register_component_stores_schema_and_embedded_presets(registry, bus, slider_schema) -> None:
    seen = []
    bus.on(EventType.COMPONENT_REGISTERED, seen.append)

    registered = registry.register_component(slider_schema)

    assert registry.get_schema("widget") is registered
    assert [schema.id for schema in registry.list_schemas()] == ["widget"]
    assert registry.get_preset("widget_big") is not None
    assert seen == [registered]


def test_register_component_accepts_plain_mappings(registry) -> None:
    schema = registry.register_component(
        {
            "id": "badge",
            "name": "Badge",
            "category": "display",
            "parameters": {"label": {"type": "text", "default": "new"}},
        }
    )
    assert schema.defaults() == {"label": "new"}


def test_reregistering_replaces_schema(registry, slider_schema) -> None:
    registry.register_component(slider_schema)
    replacement = make_slider_schema(name="Widget v2", presets=[])
    registry.register_component(replacement)

    assert registry.get_schema("widget").name == "Widget v2"
    assert len(registry.list_schemas()) == 1


@pytest.mark.parametrize(
    "overrides",
    [
        {"name": ""},
        {"category": ""},
        {"parameters": {}},
    ],
)
def test_incomplete_schema_is_rejected(registry, overrides) -> None:
    with pytest.raises(ConfigurationError) as exc_info:
        registry.register_component(make_slider_schema(**overrides))
    assert exc_info.value.code == "schema.invalid"
    assert registry.get_schema("widget") is None


def test_parameter_without_default_is_rejected(registry) -> None:
    with pytest.raises(ConfigurationError) as exc_info:
        registry.register_component(
            {
                "id": "broken",
                "name": "Broken",
                "category": "x",
                "parameters": {"size": {"type": "slider", "min": 0, "max": 10}},
            }
        )
    assert exc_info.value.code == "schema.invalid"
    assert exc_info.value.component_type == "broken"


def test_parameter_with_unknown_type_is_rejected(registry) -> None:
    with pytest.raises(ConfigurationError):
        registry.register_component(
            {
                "id": "broken",
                "name": "Broken",
                "category": "x",
                "parameters": {"size": {"type": "knob", "default": 1}},
            }
        )

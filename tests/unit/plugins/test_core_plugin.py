from __future__ import annotations

import pytest

from parametric.parameters.validator import validate_parameters
from parametric.plugins import BUILTIN_PLUGINS
from parametric.plugins.core import BUTTON_SCHEMA, CARD_SCHEMA, CORE_PLUGIN_ID, HERO_SCHEMA

pytestmark = [pytest.mark.unit]

_SCHEMAS = [HERO_SCHEMA, BUTTON_SCHEMA, CARD_SCHEMA]


def test_core_plugin_is_a_builtin() -> None:
    plugin, metadata = BUILTIN_PLUGINS[CORE_PLUGIN_ID]()

    assert plugin.name == metadata.name == "core"
    assert set(plugin.components) == {"hero", "button", "card"}
    assert metadata.load_order < 50


@pytest.mark.parametrize("schema", _SCHEMAS, ids=lambda s: s.id)
def test_builtin_defaults_are_valid(schema) -> None:
    result = validate_parameters(schema, schema.defaults())
    assert result.errors == []


@pytest.mark.parametrize("schema", _SCHEMAS, ids=lambda s: s.id)
def test_builtin_presets_are_valid_and_declared(schema) -> None:
    for preset in schema.presets:
        assert preset.component_type == schema.id
        assert set(preset.parameters) <= set(schema.parameters)
        result = validate_parameters(schema, {**schema.defaults(), **preset.parameters})
        assert result.errors == []


@pytest.mark.parametrize("schema", _SCHEMAS, ids=lambda s: s.id)
def test_builtin_groups_reference_declared_parameters(schema) -> None:
    grouped = [name for names in schema.groups.values() for name in names]
    assert set(grouped) <= set(schema.parameters)

"""
System Registry

Owns the schema, component-instance and preset registries. Validates every
change through the parameter validator, persists presets through a storage
provider, and announces changes on a notification bus.
"""

from __future__ import annotations

import copy
from collections.abc import Iterable, Mapping
from typing import Any

import structlog
from pydantic import ValidationError as PydanticValidationError

from parametric.events import EventType, Listener, NotificationBus
from parametric.kernel.errors import ConfigurationError, ParametricError, ValidationError
from parametric.kernel.ids import new_prefixed_id
from parametric.kernel.time import isoformat_z, utc_now
from parametric.parameters.types import (
    SNAPSHOT_VERSION,
    ComponentInstance,
    ComponentSchema,
    ConfigurationSnapshot,
    InstanceMetadata,
    ParameterUpdateEvent,
    PresetConfig,
    ValidationResult,
)
from parametric.parameters.validator import validate_parameter
from parametric.parameters.validator import validate_parameters as validate_against_schema
from parametric.storage.base import StorageError, StorageProvider

logger = structlog.get_logger()

COMPONENT_ID_PREFIX = "comp"
DEFAULT_PRESET_KEY_PREFIX = "preset_"

_MISSING = object()


def _describe(exc: Exception) -> str:
    if isinstance(exc, ParametricError):
        return exc.message
    return str(exc)


class SystemRegistry:
    """
    Registry of component schemas, live component instances and presets.

    All in-memory mutations are synchronous. Only storage access awaits, and
    callers are expected to await one operation at a time.
    """

    def __init__(
        self,
        storage: StorageProvider,
        bus: NotificationBus | None = None,
        *,
        preset_key_prefix: str = DEFAULT_PRESET_KEY_PREFIX,
    ) -> None:
        self._storage = storage
        self._bus = bus or NotificationBus()
        self._preset_key_prefix = preset_key_prefix
        self._schemas: dict[str, ComponentSchema] = {}
        self._components: dict[str, ComponentInstance] = {}
        self._presets: dict[str, PresetConfig] = {}

    @classmethod
    async def open(
        cls,
        storage: StorageProvider,
        bus: NotificationBus | None = None,
        *,
        preset_key_prefix: str = DEFAULT_PRESET_KEY_PREFIX,
    ) -> "SystemRegistry":
        """Create a registry and preload every persisted preset."""
        registry = cls(storage, bus, preset_key_prefix=preset_key_prefix)
        await registry.load_persisted_presets()
        return registry

    @property
    def bus(self) -> NotificationBus:
        return self._bus

    # =========================================================================
    # Schemas
    # =========================================================================

    def register_component(self, schema: ComponentSchema | Mapping[str, Any]) -> ComponentSchema:
        schema_id = schema.get("id") if isinstance(schema, Mapping) else getattr(schema, "id", None)
        try:
            resolved = ComponentSchema.model_validate(schema)
            self._validate_schema(resolved)
        except (PydanticValidationError, ValidationError) as exc:
            raise ConfigurationError(
                code="schema.invalid",
                message=f"Failed to register component: {_describe(exc)}",
                component_type=schema_id if isinstance(schema_id, str) else None,
            ) from exc

        self._schemas[resolved.id] = resolved
        for preset in resolved.presets:
            self._presets[preset.id] = preset

        logger.debug(
            "Component schema registered",
            component_type=resolved.id,
            parameters=len(resolved.parameters),
            presets=len(resolved.presets),
        )
        self._bus.emit(EventType.COMPONENT_REGISTERED, resolved)
        return resolved

    @staticmethod
    def _validate_schema(schema: ComponentSchema) -> None:
        if not schema.id or not schema.name or not schema.category:
            raise ValidationError(
                message="Schema must have id, name, and category",
                component_type=schema.id or None,
            )
        if not schema.parameters:
            raise ValidationError(
                message="Schema must have at least one parameter",
                component_type=schema.id,
            )
        for name, config in schema.parameters.items():
            if not getattr(config, "type", None) or "default" not in config.model_fields_set:
                raise ValidationError(
                    message=f"Parameter '{name}' must have type and default value",
                    component_type=schema.id,
                    parameter=name,
                )

    def get_schema(self, component_type: str) -> ComponentSchema | None:
        return self._schemas.get(component_type)

    def list_schemas(self) -> list[ComponentSchema]:
        return list(self._schemas.values())

    # =========================================================================
    # Component instances
    # =========================================================================

    def create_component(self, component_type: str, preset_id: str | None = None) -> ComponentInstance:
        schema = self._schemas.get(component_type)
        if schema is None:
            raise ConfigurationError(
                code="component.type_not_found",
                message=f"Component type '{component_type}' not found",
                component_type=component_type,
            )

        parameters = schema.defaults()

        if preset_id:
            preset = self._presets.get(preset_id)
            if preset is None:
                raise ConfigurationError(
                    code="preset.not_found",
                    message=f"Preset '{preset_id}' not found",
                    component_type=component_type,
                    meta={"preset_id": preset_id},
                )
            if preset.component_type != component_type:
                raise ConfigurationError(
                    code="preset.incompatible",
                    message=f"Preset '{preset_id}' is not compatible with component type '{component_type}'",
                    component_type=component_type,
                    meta={"preset_id": preset_id, "preset_component_type": preset.component_type},
                )
            # Instances carry exactly the schema's parameter keys.
            ignored = sorted(set(preset.parameters) - set(parameters))
            if ignored:
                logger.warning(
                    "Preset overrides undeclared parameters",
                    preset_id=preset_id,
                    component_type=component_type,
                    ignored=ignored,
                )
            parameters.update(
                {k: copy.deepcopy(v) for k, v in preset.parameters.items() if k in parameters}
            )

        validation = validate_against_schema(schema, parameters)
        if not validation.is_valid:
            raise ValidationError(
                message=f"Invalid parameters: {', '.join(validation.errors)}",
                component_type=component_type,
                meta={"errors": validation.errors, "warnings": validation.warnings},
            )

        now = utc_now()
        instance = ComponentInstance(
            id=new_prefixed_id(COMPONENT_ID_PREFIX),
            type=component_type,
            preset=preset_id or None,
            parameters=parameters,
            metadata=InstanceMetadata(created_at=now, updated_at=now),
        )
        self._components[instance.id] = instance

        logger.debug(
            "Component created",
            component_id=instance.id,
            component_type=component_type,
            preset_id=preset_id,
        )
        self._bus.emit(EventType.COMPONENT_CREATED, instance)
        return instance

    def update_parameter(self, component_id: str, parameter: str, value: Any) -> ParameterUpdateEvent:
        component = self._components.get(component_id)
        if component is None:
            raise ConfigurationError(
                code="component.not_found",
                message=f"Component '{component_id}' not found",
                meta={"component_id": component_id},
            )

        schema = self._schemas.get(component.type)
        if schema is None:
            raise ConfigurationError(
                code="component.type_not_found",
                message=f"Schema for component type '{component.type}' not found",
                component_type=component.type,
            )

        config = schema.parameters.get(parameter)
        if config is None:
            raise ValidationError(
                code="parameter.unknown",
                message=f"Parameter '{parameter}' not found in component type '{component.type}'",
                component_type=component.type,
                parameter=parameter,
            )

        if not validate_parameter(config, value):
            raise ValidationError(
                message=f"Invalid value for parameter '{parameter}'",
                component_type=component.type,
                parameter=parameter,
                meta={"value": repr(value)},
            )

        old_value = component.parameters.get(parameter)
        now = utc_now()
        component.parameters[parameter] = value
        component.metadata.updated_at = now

        event = ParameterUpdateEvent(
            component_id=component_id,
            component_type=component.type,
            parameter=parameter,
            old_value=old_value,
            new_value=value,
            timestamp=now,
        )
        self._bus.emit(EventType.PARAMETER_UPDATED, event)
        return event

    def validate_parameters(self, component_type: str, values: Mapping[str, Any]) -> ValidationResult:
        schema = self._schemas.get(component_type)
        if schema is None:
            return ValidationResult(errors=[f"Component type '{component_type}' not found"])
        return validate_against_schema(schema, values)

    def get_component(self, component_id: str) -> ComponentInstance | None:
        return self._components.get(component_id)

    def list_components(self) -> list[ComponentInstance]:
        return list(self._components.values())

    def clear(self) -> None:
        """Drop every component instance. Schemas and presets stay registered."""
        removed = len(self._components)
        self._components.clear()
        logger.info("Registry cleared", removed_components=removed)
        self._bus.emit(EventType.REGISTRY_CLEARED, removed)

    # =========================================================================
    # Presets
    # =========================================================================

    def _preset_key(self, preset_id: str) -> str:
        return f"{self._preset_key_prefix}{preset_id}"

    async def save_preset(self, preset: PresetConfig | Mapping[str, Any]) -> PresetConfig:
        try:
            resolved = PresetConfig.model_validate(preset)
        except PydanticValidationError as exc:
            raise ConfigurationError(
                code="preset.invalid",
                message=f"Failed to save preset: {exc}",
            ) from exc

        if not resolved.id or not resolved.name or not resolved.component_type:
            raise ConfigurationError(
                code="preset.invalid",
                message="Preset must have id, name, and component_type",
                component_type=resolved.component_type or None,
            )

        schema = self._schemas.get(resolved.component_type)
        if schema is None:
            raise ConfigurationError(
                code="component.type_not_found",
                message=f"Component type '{resolved.component_type}' not found",
                component_type=resolved.component_type,
                meta={"preset_id": resolved.id},
            )

        # Presets are partial; check them the way create_component will apply them.
        merged = {**schema.defaults(), **resolved.parameters}
        validation = validate_against_schema(schema, merged)
        if not validation.is_valid:
            raise ValidationError(
                message=f"Invalid preset parameters: {', '.join(validation.errors)}",
                component_type=resolved.component_type,
                meta={"preset_id": resolved.id, "errors": validation.errors},
            )

        try:
            await self._storage.save(self._preset_key(resolved.id), resolved.model_dump(mode="json"))
        except StorageError:
            raise
        except Exception as exc:
            raise StorageError(
                code="storage.save_failed",
                message=f"Failed to persist preset '{resolved.id}': {exc}",
                meta={"preset_id": resolved.id},
            ) from exc

        self._presets[resolved.id] = resolved
        logger.info("Preset saved", preset_id=resolved.id, component_type=resolved.component_type)
        self._bus.emit(EventType.PRESET_SAVED, resolved)
        return resolved

    async def load_preset(self, preset_id: str) -> PresetConfig:
        preset = self._presets.get(preset_id)
        if preset is not None:
            return preset

        try:
            stored = await self._storage.load(self._preset_key(preset_id))
            if stored is not None:
                preset = PresetConfig.model_validate(stored)
        except Exception as exc:
            raise ConfigurationError(
                code="preset.load_failed",
                message=f"Failed to load preset '{preset_id}': {_describe(exc)}",
                meta={"preset_id": preset_id},
            ) from exc

        if preset is None:
            raise ConfigurationError(
                code="preset.not_found",
                message=f"Preset '{preset_id}' not found",
                meta={"preset_id": preset_id},
            )

        self._presets[preset.id] = preset
        return preset

    async def delete_preset(self, preset_id: str) -> None:
        preset = self._presets.pop(preset_id, None)
        await self._storage.delete(self._preset_key(preset_id))
        logger.info("Preset deleted", preset_id=preset_id, cached=preset is not None)
        self._bus.emit(EventType.PRESET_DELETED, preset_id)

    def get_preset(self, preset_id: str) -> PresetConfig | None:
        return self._presets.get(preset_id)

    def list_presets(self, component_type: str | None = None) -> list[PresetConfig]:
        presets = list(self._presets.values())
        if component_type is None:
            return presets
        return [preset for preset in presets if preset.component_type == component_type]

    async def load_persisted_presets(self) -> int:
        """Populate the preset registry from storage.

        Entries that fail to load or parse are skipped. Returns how many
        presets were loaded.
        """
        try:
            keys = await self._storage.list()
        except Exception as exc:
            logger.warning("Failed to list persisted presets", error=str(exc))
            return 0

        loaded = 0
        for key in keys:
            if not key.startswith(self._preset_key_prefix):
                continue
            try:
                stored = await self._storage.load(key)
                if stored is None:
                    continue
                preset = PresetConfig.model_validate(stored)
            except Exception as exc:
                logger.warning("Skipping unreadable preset", key=key, error=str(exc))
                continue
            self._presets[preset.id] = preset
            loaded += 1

        logger.info("Persisted presets loaded", count=loaded)
        return loaded

    # =========================================================================
    # Import / export
    # =========================================================================

    def export_configuration(self, component_ids: Iterable[str] | None = None) -> str:
        if component_ids is None:
            components = list(self._components.values())
        else:
            components = [self._components[cid] for cid in component_ids if cid in self._components]

        snapshot = ConfigurationSnapshot(
            components=components,
            presets=list(self._presets.values()),
        )
        return snapshot.model_dump_json(indent=2)

    async def import_configuration(self, configuration: str | bytes) -> list[ComponentInstance]:
        """Replay a snapshot: presets first, then components.

        A failing item aborts the import. Items replayed before the failure
        stay in place.
        """
        try:
            snapshot = ConfigurationSnapshot.model_validate_json(configuration)
        except PydanticValidationError as exc:
            raise ConfigurationError(
                code="configuration.import_failed",
                message=f"Failed to import configuration: {exc}",
            ) from exc

        if snapshot.version.split(".")[0] != SNAPSHOT_VERSION.split(".")[0]:
            raise ConfigurationError(
                code="configuration.version_unsupported",
                message=f"Unsupported configuration version: {snapshot.version}",
                meta={"version": snapshot.version, "supported": SNAPSHOT_VERSION},
            )

        imported: list[ComponentInstance] = []
        try:
            for preset in snapshot.presets:
                await self.save_preset(preset)

            for component_data in snapshot.components:
                component = self.create_component(component_data.type, component_data.preset)
                for parameter, value in component_data.parameters.items():
                    if component.parameters.get(parameter, _MISSING) != value:
                        self.update_parameter(component.id, parameter, value)
                imported.append(component)
        except ParametricError as exc:
            raise ConfigurationError(
                code="configuration.import_failed",
                message=f"Failed to import configuration: {exc.message}",
                component_type=exc.component_type,
                parameter=exc.parameter,
                meta={"imported_components": [c.id for c in imported], "cause_code": exc.code},
            ) from exc

        logger.info(
            "Configuration imported",
            components=len(imported),
            presets=len(snapshot.presets),
            exported_at=isoformat_z(snapshot.timestamp),
        )
        self._bus.emit(EventType.CONFIGURATION_IMPORTED, imported)
        return imported

    # =========================================================================
    # Events
    # =========================================================================

    def on(self, event: EventType | str, listener: Listener) -> None:
        self._bus.on(event, listener)

    def off(self, event: EventType | str, listener: Listener) -> None:
        self._bus.off(event, listener)



"""
Test Configuration and Fixtures

Shared fixtures for the engine test suite.
"""

from __future__ import annotations

import os

import pytest

# Keep test runs independent of a developer's local environment.
os.environ.setdefault("PARAMETRIC_LOG_LEVEL", "WARNING")
os.environ.setdefault("PARAMETRIC_STORAGE_BACKEND", "memory")


# =============================================================================
# PYTEST CONFIGURATION
# =============================================================================


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests (fast, isolated)")
    config.addinivalue_line("markers", "integration: Integration tests (touch the filesystem)")


def pytest_collection_modifyitems(config, items):
    """
    Auto-assign tier markers so we can run:
    - pytest -m unit
    - pytest -m integration

    Convention:
    - tests/integration/** => integration
    - everything else      => unit
    """
    for item in items:
        path = str(getattr(item, "fspath", ""))
        if item.get_closest_marker("integration") or item.get_closest_marker("unit"):
            continue
        if "/tests/integration/" in path or "\\tests\\integration\\" in path:
            item.add_marker(pytest.mark.integration)
        else:
            item.add_marker(pytest.mark.unit)


# =============================================================================
# ENGINE FIXTURES
# =============================================================================


@pytest.fixture
def fake_clock():
    """Deterministic clock for timestamp assertions."""
    from tests.support.clock import FakeClock

    return FakeClock.fixed()


@pytest.fixture
def storage():
    from tests.support.storage import RecordingStorage

    return RecordingStorage()


@pytest.fixture
def bus():
    from parametric.events import NotificationBus

    return NotificationBus()


@pytest.fixture
def registry(storage, bus):
    from parametric.registry import SystemRegistry

    return SystemRegistry(storage, bus)


@pytest.fixture
def slider_schema():
    from tests.support.schemas import make_slider_schema

    return make_slider_schema()


@pytest.fixture
def registered(registry, slider_schema):
    """Registry with the `widget` test schema already registered."""
    registry.register_component(slider_schema)
    return registry

from __future__ import annotations

import pytest

from parametric.config import Settings
from parametric.storage import FileStorageProvider, InMemoryStorageProvider, get_storage_provider

pytestmark = [pytest.mark.unit]


def test_memory_backend_is_the_default() -> None:
    provider = get_storage_provider(Settings(storage_backend="memory"))
    assert isinstance(provider, InMemoryStorageProvider)


def test_file_backend_uses_configured_path_and_prefix(tmp_path) -> None:
    settings = Settings(
        storage_backend="file",
        storage_path=str(tmp_path / "store"),
        storage_key_prefix="demo_",
    )
    provider = get_storage_provider(settings)

    assert isinstance(provider, FileStorageProvider)
    assert provider.root_path == tmp_path / "store"
    assert provider.key_prefix == "demo_"
    assert (tmp_path / "store").is_dir()


def test_settings_read_environment(monkeypatch) -> None:
    monkeypatch.setenv("PARAMETRIC_STORAGE_BACKEND", "file")
    monkeypatch.setenv("PARAMETRIC_ENABLED_PLUGINS", '["core", "extra"]')

    settings = Settings()

    assert settings.storage_backend == "file"
    assert settings.enabled_plugins == ["core", "extra"]

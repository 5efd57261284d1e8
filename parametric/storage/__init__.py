"""Storage providers: the async key/value interface and its backends."""

from __future__ import annotations

import structlog

from parametric.config import Settings, get_settings
from parametric.storage.base import StorageError, StorageProvider
from parametric.storage.file import FileStorageProvider
from parametric.storage.memory import InMemoryStorageProvider

logger = structlog.get_logger()


def get_storage_provider(settings: Settings | None = None) -> StorageProvider:
    """Build the storage backend selected by `settings.storage_backend`."""
    settings = settings or get_settings()

    if settings.storage_backend == "memory":
        provider: StorageProvider = InMemoryStorageProvider()
    elif settings.storage_backend == "file":
        provider = FileStorageProvider(settings.storage_path, key_prefix=settings.storage_key_prefix)
    else:
        raise ValueError(f"Unsupported storage backend: {settings.storage_backend}")

    logger.info(
        "Storage initialized",
        backend=settings.storage_backend,
        path=settings.storage_path if settings.storage_backend == "file" else None,
    )
    return provider


__all__ = [
    "FileStorageProvider",
    "InMemoryStorageProvider",
    "StorageError",
    "StorageProvider",
    "get_storage_provider",
]

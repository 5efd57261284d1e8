from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from parametric.kernel.errors import ConfigurationError


class StorageError(ConfigurationError):
    def __init__(
        self,
        *,
        message: str = "Storage error",
        code: str = "storage.error",
        meta: dict[str, Any] | None = None,
    ):
        super().__init__(code=code, message=message, meta=meta)


class StorageProvider(ABC):
    """Key-based asynchronous persistence.

    Values are JSON-compatible structures. `load` returns None for a missing
    key. `list` returns every stored key in a stable order.
    """

    @abstractmethod
    async def save(self, key: str, value: Any) -> None:
        raise NotImplementedError

    @abstractmethod
    async def load(self, key: str) -> Any | None:
        raise NotImplementedError

    @abstractmethod
    async def delete(self, key: str) -> None:
        raise NotImplementedError

    @abstractmethod
    async def list(self) -> list[str]:
        raise NotImplementedError

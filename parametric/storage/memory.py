from __future__ import annotations

import copy
from typing import Any

from parametric.kernel.serialization import to_jsonable
from parametric.storage.base import StorageProvider


class InMemoryStorageProvider(StorageProvider):
    """Dict-backed storage. Keys list in insertion order."""

    def __init__(self, initial: dict[str, Any] | None = None) -> None:
        self.objects: dict[str, Any] = {}
        for key, value in (initial or {}).items():
            self.objects[key] = to_jsonable(value)

    async def save(self, key: str, value: Any) -> None:
        # Re-saving keeps the key's original position.
        self.objects[key] = to_jsonable(value)

    async def load(self, key: str) -> Any | None:
        if key not in self.objects:
            return None
        return copy.deepcopy(self.objects[key])

    async def delete(self, key: str) -> None:
        self.objects.pop(key, None)

    async def list(self) -> list[str]:
        return list(self.objects.keys())

"""
File Storage

Local filesystem-backed storage: one JSON document per key.
"""

from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Any

import aiofiles
import aiofiles.os
import structlog

from parametric.kernel.serialization import json_dumps_canonical, json_loads
from parametric.storage.base import StorageError, StorageProvider

logger = structlog.get_logger()

_KEY_RE = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_.\-]{0,199}$")
_SUFFIX = ".json"


class FileStorageProvider(StorageProvider):
    """Stores `{key_prefix}{key}.json` files under `root_path`."""

    def __init__(self, root_path: str | Path, key_prefix: str = "parametric_") -> None:
        self.root_path = Path(root_path)
        self.root_path.mkdir(parents=True, exist_ok=True)
        self.key_prefix = key_prefix

    def _build_path(self, key: str) -> Path:
        if not _KEY_RE.fullmatch(key):
            raise StorageError(
                code="storage.key_invalid",
                message=f"Invalid storage key: {key!r}",
                meta={"key": key},
            )
        return self.root_path / f"{self.key_prefix}{key}{_SUFFIX}"

    async def save(self, key: str, value: Any) -> None:
        target_path = self._build_path(key)
        try:
            payload = json_dumps_canonical(value)
            async with aiofiles.open(target_path, "w", encoding="utf-8") as f:
                await f.write(payload)
        except (OSError, TypeError) as exc:
            raise StorageError(
                code="storage.save_failed",
                message=f"Failed to save '{key}': {exc}",
                meta={"key": key, "path": str(target_path)},
            ) from exc

    async def load(self, key: str) -> Any | None:
        target_path = self._build_path(key)
        if not target_path.exists():
            return None
        try:
            async with aiofiles.open(target_path, "r", encoding="utf-8") as f:
                raw = await f.read()
            return json_loads(raw)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise StorageError(
                code="storage.load_failed",
                message=f"Failed to load '{key}': {exc}",
                meta={"key": key, "path": str(target_path)},
            ) from exc

    async def delete(self, key: str) -> None:
        target_path = self._build_path(key)
        try:
            await aiofiles.os.remove(target_path)
        except FileNotFoundError:
            return
        except OSError as exc:
            raise StorageError(
                code="storage.delete_failed",
                message=f"Failed to delete '{key}': {exc}",
                meta={"key": key, "path": str(target_path)},
            ) from exc

    async def list(self) -> list[str]:
        keys: list[str] = []
        for path in self.root_path.glob(f"{self.key_prefix}*{_SUFFIX}"):
            keys.append(path.name[len(self.key_prefix) : -len(_SUFFIX)])
        return sorted(keys)

    async def clear(self) -> None:
        """Remove every entry carrying this provider's prefix."""
        keys = await self.list()
        for key in keys:
            await self.delete(key)
        logger.info("File storage cleared", path=str(self.root_path), removed=len(keys))

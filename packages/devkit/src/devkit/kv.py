from __future__ import annotations

from abc import ABC, abstractmethod
import json
import logging
import os
from pathlib import Path

from devkit.redis import AsyncRedisManager, create_redis_client

logger = logging.getLogger(__name__)


class KeyValueSlot(ABC):
    """String values under string keys, the shape of browser local storage."""

    @abstractmethod
    async def get(self, key: str) -> str | None:
        raise NotImplementedError

    @abstractmethod
    async def set(self, key: str, value: str) -> None:
        raise NotImplementedError

    async def close(self) -> None:
        return None


class InMemoryKeyValueSlot(KeyValueSlot):
    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._values: dict[str, str] = dict(initial or {})

    async def get(self, key: str) -> str | None:
        return self._values.get(key)

    async def set(self, key: str, value: str) -> None:
        self._values[key] = value


class FileKeyValueSlot(KeyValueSlot):
    """All keys live in one JSON object on disk; writes replace the file atomically."""

    def __init__(self, file_path: str) -> None:
        self._file = Path(file_path)

    async def get(self, key: str) -> str | None:
        if not self._file.exists():
            return None
        values = json.loads(self._file.read_text(encoding="utf-8"))
        if not isinstance(values, dict):
            raise ValueError(f"{self._file} does not hold a key-value object")
        value = values.get(key)
        return None if value is None else str(value)

    async def set(self, key: str, value: str) -> None:
        values = self._read_for_update()
        values[key] = value
        self._write_all(values)

    def _read_for_update(self) -> dict[str, str]:
        if not self._file.exists():
            return {}
        try:
            values = json.loads(self._file.read_text(encoding="utf-8"))
        except ValueError:
            logger.warning("kv_file_unreadable_replacing", extra={"path": str(self._file)})
            return {}
        return values if isinstance(values, dict) else {}

    def _write_all(self, values: dict[str, str]) -> None:
        self._file.parent.mkdir(parents=True, exist_ok=True)
        tmp = self._file.with_name(self._file.name + ".tmp")
        tmp.write_text(json.dumps(values, ensure_ascii=False), encoding="utf-8")
        os.replace(tmp, self._file)


class RedisKeyValueSlot(KeyValueSlot):
    def __init__(self, manager: AsyncRedisManager) -> None:
        self._manager = manager

    async def get(self, key: str) -> str | None:
        value = await self._manager.execute("get", key)
        return None if value is None else str(value)

    async def set(self, key: str, value: str) -> None:
        await self._manager.execute("set", key, value)

    async def close(self) -> None:
        await self._manager.close()


def create_key_value_slot(redis_url: str | None = None, storage_path: str | None = None) -> KeyValueSlot:
    manager = create_redis_client(redis_url)
    if manager is not None:
        return RedisKeyValueSlot(manager)
    if storage_path:
        return FileKeyValueSlot(storage_path)
    return InMemoryKeyValueSlot()

from __future__ import annotations

from typing import Mapping, Optional

from .repository import KeyValueStore


class MemoryKeyValueStore(KeyValueStore):
    def __init__(self, initial: Optional[Mapping[str, str]] = None):
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def set_many(self, values: Mapping[str, str]) -> None:
        self._data.update(values)

    def delete(self, key: str) -> bool:
        return self._data.pop(key, None) is not None

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Mapping, Optional

from ..core.exceptions import StoreError
from .repository import KeyValueStore

logger = logging.getLogger(__name__)


class JsonFileKeyValueStore(KeyValueStore):
    """All keys in one JSON object on disk.

    Note: The file is read once and cached; every write rewrites the whole document through a
    temp file + os.replace so a crash never leaves half a file behind.
    """

    def __init__(self, path: str | Path):
        self._path = Path(path)
        self._data: dict[str, str] = self._read()

    @property
    def path(self) -> Path:
        return self._path

    def _read(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning(f"Ignoring unreadable store file {self._path}: {e}")
            return {}
        if not isinstance(raw, dict):
            logger.warning(f"Ignoring store file {self._path}: top level is not an object")
            return {}
        return {str(k): v for k, v in raw.items() if isinstance(v, str)}

    def _flush(self, data: dict[str, str]) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp = tempfile.mkstemp(prefix=".kv-", suffix=".json", dir=str(self._path.parent))
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(data, f, ensure_ascii=False)
                os.replace(tmp, self._path)
            except BaseException:
                if os.path.exists(tmp):
                    os.unlink(tmp)
                raise
        except OSError as e:
            raise StoreError(f"Cannot write {self._path}: {e}") from e
        self._data = data

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self.set_many({key: value})

    def set_many(self, values: Mapping[str, str]) -> None:
        data = dict(self._data)
        data.update(values)
        self._flush(data)

    def delete(self, key: str) -> bool:
        if key not in self._data:
            return False
        data = dict(self._data)
        del data[key]
        self._flush(data)
        return True

from __future__ import annotations

from typing import Mapping, Optional, Protocol


class KeyValueStore(Protocol):
    """Persistence substrate addressed by plain string keys.

    Values are opaque strings (JSON documents in practice). Backends raise
    ``StoreError`` when they cannot read or write.
    """

    def get(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def set(self, key: str, value: str) -> None:
        raise NotImplementedError

    def set_many(self, values: Mapping[str, str]) -> None:
        """Write every pair in one go; backends with transactions make this atomic."""

        raise NotImplementedError

    def delete(self, key: str) -> bool:
        raise NotImplementedError

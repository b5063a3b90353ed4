from __future__ import annotations

import base64
import binascii
import logging
from typing import Optional, Protocol

from ..core.constants import SECRET_KEY_PREFIX
from ..kv.repository import KeyValueStore

logger = logging.getLogger(__name__)


class SecretStore(Protocol):
    """Opaque secret storage keyed by (service, account)."""

    def set_secret(self, service: str, account: str, value: bytes) -> None:
        raise NotImplementedError

    def get_secret(self, service: str, account: str) -> Optional[bytes]:
        raise NotImplementedError

    def delete_secret(self, service: str, account: str) -> bool:
        raise NotImplementedError


class MemorySecretStore(SecretStore):
    def __init__(self):
        self._secrets: dict[tuple[str, str], bytes] = {}

    def set_secret(self, service: str, account: str, value: bytes) -> None:
        self._secrets[(service, account)] = bytes(value)

    def get_secret(self, service: str, account: str) -> Optional[bytes]:
        return self._secrets.get((service, account))

    def delete_secret(self, service: str, account: str) -> bool:
        return self._secrets.pop((service, account), None) is not None


class KeyValueSecretStore(SecretStore):
    """Secrets as base64 values in the key-value store.

    Note: Not encrypted. Point this at a real keychain adapter where one exists.
    """

    def __init__(self, kv: KeyValueStore):
        self._kv = kv

    @staticmethod
    def _key(service: str, account: str) -> str:
        return f"{SECRET_KEY_PREFIX}:{service}:{account}"

    def set_secret(self, service: str, account: str, value: bytes) -> None:
        self._kv.set(self._key(service, account), base64.b64encode(value).decode("ascii"))

    def get_secret(self, service: str, account: str) -> Optional[bytes]:
        raw = self._kv.get(self._key(service, account))
        if raw is None:
            return None
        try:
            return base64.b64decode(raw.encode("ascii"), validate=True)
        except (binascii.Error, UnicodeEncodeError):
            logger.warning(f"Unreadable secret for {service}/{account}")
            return None

    def delete_secret(self, service: str, account: str) -> bool:
        return self._kv.delete(self._key(service, account))

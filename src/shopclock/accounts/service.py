from __future__ import annotations

import json
import logging

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import is_strong_password, require_min_length, require_non_empty
from ..core.constants import (
    LOCAL_ACCOUNTS_KEY,
    MIN_ACCOUNT_PASSWORD_LENGTH,
    MIN_OWNER_PASSWORD_LENGTH,
    OWNER_SECRET_ACCOUNT,
    OWNER_SECRET_SERVICE,
)
from ..core.exceptions import AuthenticationError, NotFoundError, ValidationError
from ..kv.repository import KeyValueStore
from .secret_store import SecretStore

logger = logging.getLogger(__name__)


def _matches(password_hash: str, password: str) -> bool:
    try:
        return check_password_hash(password_hash, password)
    except (TypeError, ValueError):
        # e.g. corrupted or foreign hash formats
        return False


class OwnerAuthService:
    """Use case: the owner password gating payroll / backup screens."""

    def __init__(self, secrets: SecretStore):
        self._secrets = secrets

    def has_password(self) -> bool:
        return self._secrets.get_secret(OWNER_SECRET_SERVICE, OWNER_SECRET_ACCOUNT) is not None

    def set_password(self, password: str) -> None:
        if not is_strong_password(password):
            raise ValidationError(
                f"Password needs {MIN_OWNER_PASSWORD_LENGTH}+ characters with a letter, a digit and a symbol"
            )
        hashed = generate_password_hash(password)
        self._secrets.set_secret(OWNER_SECRET_SERVICE, OWNER_SECRET_ACCOUNT, hashed.encode("utf-8"))
        logger.info("Owner password updated")

    def verify(self, password: str) -> bool:
        stored = self._secrets.get_secret(OWNER_SECRET_SERVICE, OWNER_SECRET_ACCOUNT)
        if stored is None:
            return False
        return _matches(stored.decode("utf-8", errors="replace"), password)

    def require(self, password: str) -> None:
        if not self.verify(password):
            raise AuthenticationError("Wrong owner password")

    def clear(self) -> bool:
        return self._secrets.delete_secret(OWNER_SECRET_SERVICE, OWNER_SECRET_ACCOUNT)


class LocalAccountService:
    """Use case: local id/password accounts (id -> password hash map in the KV store)."""

    def __init__(self, kv: KeyValueStore):
        self._kv = kv

    def _load(self) -> dict[str, str]:
        raw = self._kv.get(LOCAL_ACCOUNTS_KEY)
        if raw is None:
            return {}
        try:
            data = json.loads(raw)
        except ValueError:
            logger.warning("Local account map is corrupt; treating it as empty")
            return {}
        return {str(k): str(v) for k, v in data.items()} if isinstance(data, dict) else {}

    def _save(self, accounts: dict[str, str]) -> None:
        self._kv.set(LOCAL_ACCOUNTS_KEY, json.dumps(accounts, ensure_ascii=False))

    def exists(self, account_id: str) -> bool:
        return account_id in self._load()

    def register(self, account_id: str, password: str) -> str:
        account_id = require_non_empty(account_id, "ID")
        require_min_length(password, "Password", MIN_ACCOUNT_PASSWORD_LENGTH)

        accounts = self._load()
        if account_id in accounts:
            raise ValidationError("This ID is already taken")
        accounts[account_id] = generate_password_hash(password)
        self._save(accounts)
        logger.info("Registered local account")
        return account_id

    def verify(self, account_id: str, password: str) -> bool:
        stored = self._load().get(account_id)
        return stored is not None and _matches(stored, password)

    def set_password(self, account_id: str, password: str) -> None:
        require_min_length(password, "Password", MIN_ACCOUNT_PASSWORD_LENGTH)
        accounts = self._load()
        if account_id not in accounts:
            raise NotFoundError("This ID is not registered")
        accounts[account_id] = generate_password_hash(password)
        self._save(accounts)

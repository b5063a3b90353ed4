from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import date
from typing import Optional

from ..attendance.record_store import RecordStore
from ..common.datetime_utils import parse_iso_date
from ..common.validators import require_non_empty
from ..core.constants import AUTH_SECRET_SERVICE, CURRENT_USER_KEY, FEDERATED_SECRET_ACCOUNT, LAST_AUTO_BACKUP_KEY
from ..core.exceptions import AuthenticationError, StoreError
from ..kv.repository import KeyValueStore
from .namespace import resolve_namespace
from .secret_store import SecretStore
from .service import LocalAccountService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AppSession:
    """Process-wide state that outlives a namespace switch."""

    current_account_id: Optional[str] = None
    last_auto_backup: Optional[date] = None


class SessionRepository:
    """Loads/saves AppSession under fixed, namespace-independent keys."""

    def __init__(self, kv: KeyValueStore):
        self._kv = kv

    def load(self) -> AppSession:
        try:
            account = self._kv.get(CURRENT_USER_KEY)
            last = self._kv.get(LAST_AUTO_BACKUP_KEY)
        except StoreError:
            logger.exception("Cannot read session state; starting signed out")
            return AppSession()

        last_day: Optional[date] = None
        if last:
            try:
                last_day = parse_iso_date(last[:10])
            except ValueError:
                logger.warning(f"Ignoring unreadable {LAST_AUTO_BACKUP_KEY}={last!r}")
        return AppSession(current_account_id=account or None, last_auto_backup=last_day)

    def save(self, session: AppSession) -> None:
        if session.current_account_id:
            self._kv.set(CURRENT_USER_KEY, session.current_account_id)
        else:
            self._kv.delete(CURRENT_USER_KEY)

        if session.last_auto_backup:
            self._kv.set(LAST_AUTO_BACKUP_KEY, session.last_auto_backup.strftime("%Y-%m-%d"))
        else:
            self._kv.delete(LAST_AUTO_BACKUP_KEY)


class SessionService:
    """Use case: sign in/out and keep the record store on the matching namespace."""

    def __init__(
        self,
        store: RecordStore,
        sessions: SessionRepository,
        secrets: SecretStore,
        accounts: LocalAccountService,
    ):
        self._store = store
        self._sessions = sessions
        self._secrets = secrets
        self._accounts = accounts
        self._session = AppSession()

    @property
    def current(self) -> AppSession:
        return self._session

    def restore(self) -> AppSession:
        """Re-apply the persisted account pointer (start-up)."""

        self._session = self._sessions.load()
        self._store.switch_namespace(resolve_namespace(self._session.current_account_id))
        return self._session

    def sign_in(self, account_id: str, *, federated: bool = False) -> AppSession:
        account_id = require_non_empty(account_id, "Account id")
        if federated:
            self._secrets.set_secret(AUTH_SECRET_SERVICE, FEDERATED_SECRET_ACCOUNT, account_id.encode("utf-8"))
        self._update(replace(self._session, current_account_id=account_id))
        self._store.switch_namespace(resolve_namespace(account_id))
        logger.info(f"Signed in (namespace={self._store.namespace})")
        return self._session

    def sign_in_local(self, account_id: str, password: str) -> AppSession:
        account_id = (account_id or "").strip()
        if not self._accounts.verify(account_id, password):
            raise AuthenticationError("Wrong ID or password")
        return self.sign_in(account_id)

    def federated_account_id(self) -> Optional[str]:
        raw = self._secrets.get_secret(AUTH_SECRET_SERVICE, FEDERATED_SECRET_ACCOUNT)
        return raw.decode("utf-8") if raw else None

    def sign_out(self) -> AppSession:
        self._secrets.delete_secret(AUTH_SECRET_SERVICE, FEDERATED_SECRET_ACCOUNT)
        self._update(replace(self._session, current_account_id=None))
        self._store.switch_namespace(resolve_namespace(None))
        logger.info("Signed out")
        return self._session

    def record_auto_backup(self, day: date) -> None:
        self._update(replace(self._session, last_auto_backup=day))

    def _update(self, session: AppSession) -> None:
        self._session = session
        try:
            self._sessions.save(session)
        except StoreError:
            logger.exception("Cannot persist session state; keeping it in memory")

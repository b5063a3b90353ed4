from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from .accounts.secret_store import KeyValueSecretStore
from .accounts.service import LocalAccountService, OwnerAuthService
from .accounts.session import SessionRepository, SessionService
from .attendance.record_store import RecordStore
from .attendance.service import AttendanceService
from .backup.service import BackupService
from .core.constants import DEFAULT_STAFF_NAMES
from .core.enums import StoreBackend
from .kv.repository import KeyValueStore
from .payroll.service import PayrollService
from .staff.service import StaffService


@dataclass(frozen=True)
class Container:
    kv: KeyValueStore
    store: RecordStore

    staff_service: StaffService
    attendance_service: AttendanceService
    payroll_service: PayrollService
    backup_service: BackupService
    session_service: SessionService
    owner_auth_service: OwnerAuthService
    local_account_service: LocalAccountService


def build_kv(settings: Any) -> KeyValueStore:
    backend = StoreBackend(getattr(settings, "STORE_BACKEND", StoreBackend.FILE.value))

    if backend is StoreBackend.MEMORY:
        from .kv.memory_store import MemoryKeyValueStore

        return MemoryKeyValueStore()

    if backend is StoreBackend.MYSQL:
        from .database.bootstrap import apply_schema
        from .database.connection import DBConfig, DatabaseConnection
        from .kv.mysql_store import MySQLKeyValueStore

        db_config = dict(getattr(settings, "DB_CONFIG"))
        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config)
        return MySQLKeyValueStore(DatabaseConnection.get_instance(DBConfig.from_dict(db_config)))

    from .kv.json_file_store import JsonFileKeyValueStore

    return JsonFileKeyValueStore(Path(getattr(settings, "STORE_PATH", "var/shopclock.json")))


def build_container(settings: Any, *, kv: KeyValueStore | None = None) -> Container:
    kv = kv or build_kv(settings)

    store = RecordStore(kv, default_staff_names=getattr(settings, "DEFAULT_STAFF_NAMES", DEFAULT_STAFF_NAMES))
    secrets = KeyValueSecretStore(kv)

    local_account_service = LocalAccountService(kv)
    owner_auth_service = OwnerAuthService(secrets)
    session_service = SessionService(store, SessionRepository(kv), secrets, local_account_service)
    staff_service = StaffService(store)
    attendance_service = AttendanceService(store)
    payroll_service = PayrollService(store)
    backup_service = BackupService(
        store,
        session_service,
        backup_dir=Path(getattr(settings, "BACKUP_DIR", "backups")),
    )

    return Container(
        kv=kv,
        store=store,
        staff_service=staff_service,
        attendance_service=attendance_service,
        payroll_service=payroll_service,
        backup_service=backup_service,
        session_service=session_service,
        owner_auth_service=owner_auth_service,
        local_account_service=local_account_service,
    )

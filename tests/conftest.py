from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from shopclock.accounts.secret_store import MemorySecretStore
from shopclock.accounts.service import LocalAccountService
from shopclock.accounts.session import SessionRepository, SessionService
from shopclock.attendance.record_store import RecordStore
from shopclock.attendance.service import AttendanceService
from shopclock.backup.service import BackupService
from shopclock.kv.memory_store import MemoryKeyValueStore
from shopclock.payroll.service import PayrollService
from shopclock.staff.service import StaffService


class FakeClock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


class CountingKeyValueStore(MemoryKeyValueStore):
    def __init__(self, initial=None):
        super().__init__(initial)
        self.writes = 0

    def set_many(self, values):
        self.writes += 1
        super().set_many(values)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2026, 1, 5, 9, 0, 0))


@pytest.fixture
def kv() -> CountingKeyValueStore:
    return CountingKeyValueStore()


@pytest.fixture
def store(kv) -> RecordStore:
    return RecordStore(kv, default_staff_names=())


@pytest.fixture
def staff_service(store) -> StaffService:
    return StaffService(store)


@pytest.fixture
def attendance(store, clock) -> AttendanceService:
    return AttendanceService(store, clock=clock)


@pytest.fixture
def payroll(store) -> PayrollService:
    return PayrollService(store)


@pytest.fixture
def alice(staff_service):
    staff = staff_service.add_staff("Alice")
    staff_service.set_hourly_wage(staff.id, 1200)
    return staff_service.set_meal_allowance(staff.id, 500)


@pytest.fixture
def secrets() -> MemorySecretStore:
    return MemorySecretStore()


@pytest.fixture
def sessions(store, kv, secrets) -> SessionService:
    return SessionService(store, SessionRepository(kv), secrets, LocalAccountService(kv))


@pytest.fixture
def backups(store, sessions, tmp_path, clock) -> BackupService:
    return BackupService(store, sessions, backup_dir=tmp_path / "backups", clock=clock)

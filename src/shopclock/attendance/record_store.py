from __future__ import annotations

import json
import logging
import re
import threading
import uuid
from typing import Callable, Iterable, Optional

from ..common.datetime_utils import DayLike, iso_date, local_date_from_epoch
from ..core.constants import DEFAULT_NAMESPACE, DEFAULT_STAFF_NAMES, RECORDS_KEY_PREFIX, STAFF_KEY_PREFIX
from ..core.exceptions import StoreError
from ..kv.repository import KeyValueStore
from ..staff.model import Staff
from .codec import decode_records, decode_staff_list, encode_records, encode_staff_list
from .model import AttendanceRecord, Snapshot

logger = logging.getLogger(__name__)

# "<epoch-seconds>_<id>", e.g. "1738713600.0_5F1C...". Canonical keys start with yyyy-MM-dd.
_LEGACY_KEY = re.compile(r"^(-?\d+(?:\.\d+)?)_(.+)$")


def record_key(day: DayLike, staff_id: str) -> str:
    """Canonical record key: ``yyyy-MM-dd_<staffId>`` for the local calendar day."""

    return f"{iso_date(day)}_{staff_id}"


def staff_key(namespace: str) -> str:
    return f"{STAFF_KEY_PREFIX}{namespace}"


def records_key(namespace: str) -> str:
    return f"{RECORDS_KEY_PREFIX}{namespace}"


def new_id() -> str:
    return str(uuid.uuid4()).upper()


class RecordStore:
    """Staff list + day-keyed attendance records for the active namespace.

    The store keeps the active namespace in memory and writes both collections back to the
    key-value substrate on every mutation. A failed write is logged and the session carries on
    from memory.

    A failed read puts the store in degraded mode: it serves an empty in-memory namespace and
    never seeds, migrates or writes, so the stored data stays untouched until a later load
    succeeds.

    Note: All public methods take ``lock``; callers that read-modify-write several steps hold
    it themselves (it is re-entrant).
    """

    def __init__(
        self,
        kv: KeyValueStore,
        *,
        namespace: str = DEFAULT_NAMESPACE,
        default_staff_names: Iterable[str] = DEFAULT_STAFF_NAMES,
        id_factory: Optional[Callable[[], str]] = None,
    ):
        self._kv = kv
        self._lock = threading.RLock()
        self._default_staff_names = tuple(default_staff_names)
        self._new_id = id_factory or new_id
        self._namespace = namespace or DEFAULT_NAMESPACE
        self._staff: list[Staff] = []
        self._records: dict[str, AttendanceRecord] = {}
        self._degraded = False
        self.switch_namespace(self._namespace)

    @property
    def namespace(self) -> str:
        return self._namespace

    @property
    def degraded(self) -> bool:
        return self._degraded

    @property
    def lock(self) -> threading.RLock:
        return self._lock

    def new_id(self) -> str:
        return self._new_id()

    # ----- raw IO -----

    def _read_json(self, key: str):
        # StoreError propagates; an unreachable backend is not an empty one.
        raw = self._kv.get(key)
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except ValueError as e:
            logger.warning(f"Corrupt JSON under {key}: {e}")
            return None

    def _read(self, namespace: str) -> Snapshot:
        staff: list[Staff] = []
        records: dict[str, AttendanceRecord] = {}

        raw_staff = self._read_json(staff_key(namespace))
        if raw_staff is not None:
            try:
                staff = decode_staff_list(raw_staff)
            except (KeyError, TypeError, ValueError) as e:
                logger.warning(f"Dropping unreadable staff list for namespace={namespace}: {e}")

        raw_records = self._read_json(records_key(namespace))
        if raw_records is not None:
            try:
                records = decode_records(raw_records)
            except (KeyError, TypeError, ValueError) as e:
                logger.warning(f"Dropping unreadable records for namespace={namespace}: {e}")

        return Snapshot(staff=tuple(staff), records=records)

    def _persist(self) -> bool:
        if self._degraded:
            logger.warning(f"Store is degraded; not writing namespace={self._namespace}")
            return False
        values = {
            staff_key(self._namespace): json.dumps(encode_staff_list(self._staff), ensure_ascii=False),
            records_key(self._namespace): json.dumps(encode_records(self._records), ensure_ascii=False),
        }
        try:
            self._kv.set_many(values)
            return True
        except StoreError:
            logger.exception(f"Persisting namespace={self._namespace} failed; keeping changes in memory")
            return False

    # ----- whole-collection operations -----

    def load_all(self) -> Snapshot:
        with self._lock:
            try:
                snap = self._read(self._namespace)
            except StoreError:
                logger.exception(f"Cannot read namespace={self._namespace}; running in memory only")
                self._degraded = True
                self._staff = []
                self._records = {}
                return self.snapshot()
            self._degraded = False
            self._staff = list(snap.staff)
            self._records = dict(snap.records)
            self.migrate_legacy_keys()
            return self.snapshot()

    def save_all(self, staff: Iterable[Staff], records: dict[str, AttendanceRecord]) -> bool:
        with self._lock:
            self._staff = list(staff)
            self._records = dict(records)
            return self._persist()

    def snapshot(self) -> Snapshot:
        with self._lock:
            return Snapshot(staff=tuple(self._staff), records=dict(self._records))

    def switch_namespace(self, namespace: Optional[str]) -> Snapshot:
        with self._lock:
            self._namespace = namespace or DEFAULT_NAMESPACE
            logger.info(f"Switching record store to namespace={self._namespace}")
            self.load_all()
            self.migrate_from_default_if_needed()
            if not self._degraded and not self._staff and self._default_staff_names:
                self._staff = [Staff(id=self._new_id(), name=name) for name in self._default_staff_names]
                logger.info(f"Seeded {len(self._staff)} demo staff into namespace={self._namespace}")
                self._persist()
            return self.snapshot()

    def migrate_legacy_keys(self) -> int:
        """Rewrite ``<epoch>_<id>`` keys to ``yyyy-MM-dd_<staffId>``. Returns the rewrite count."""

        with self._lock:
            if self._degraded:
                return 0
            canonical: dict[str, AttendanceRecord] = {}
            legacy: list[tuple[str, AttendanceRecord, float]] = []
            for key, record in self._records.items():
                m = _LEGACY_KEY.match(key)
                if m:
                    legacy.append((key, record, float(m.group(1))))
                else:
                    canonical[key] = record

            if not legacy:
                return 0

            for old_key, record, seconds in sorted(legacy, key=lambda item: item[0]):
                try:
                    new_key = record_key(local_date_from_epoch(seconds), record.staff_id)
                except (OverflowError, OSError, ValueError):
                    logger.warning(f"Keeping legacy key {old_key}: timestamp out of range")
                    canonical[old_key] = record
                    continue
                if new_key in canonical:
                    logger.warning(f"Dropping legacy record {old_key}: {new_key} already exists")
                    continue
                canonical[new_key] = record

            self._records = canonical
            logger.info(f"Rewrote {len(legacy)} legacy record keys in namespace={self._namespace}")
            self._persist()
            return len(legacy)

    def migrate_from_default_if_needed(self) -> bool:
        """Copy the default namespace into an empty account namespace, once."""

        with self._lock:
            if self._degraded or self._namespace == DEFAULT_NAMESPACE:
                return False
            if self._staff or self._records:
                return False
            try:
                source = self._read(DEFAULT_NAMESPACE)
            except StoreError:
                logger.exception(f"Cannot read namespace={DEFAULT_NAMESPACE}; running in memory only")
                self._degraded = True
                return False
            if source.is_empty:
                return False
            self._staff = list(source.staff)
            self._records = dict(source.records)
            logger.info(
                f"Migrated {len(self._staff)} staff / {len(self._records)} records "
                f"from namespace={DEFAULT_NAMESPACE} into namespace={self._namespace}"
            )
            if not self.migrate_legacy_keys():
                self._persist()
            return True

    # ----- lookups -----

    def list_staff(self) -> list[Staff]:
        with self._lock:
            return list(self._staff)

    def get_staff(self, staff_id: str) -> Optional[Staff]:
        with self._lock:
            return next((s for s in self._staff if s.id == staff_id), None)

    def get_record(self, key: str) -> Optional[AttendanceRecord]:
        with self._lock:
            return self._records.get(key)

    def records_for_staff(self, staff_id: str) -> list[AttendanceRecord]:
        with self._lock:
            return [r for r in self._records.values() if r.staff_id == staff_id]

    # ----- mutations (persist immediately) -----

    def put_record(self, record: AttendanceRecord) -> AttendanceRecord:
        with self._lock:
            self._records[record_key(record.work_date, record.staff_id)] = record
            self._persist()
            return record

    def put_staff(self, staff: Staff) -> Staff:
        """Insert or replace by id, keeping list order."""

        with self._lock:
            for i, existing in enumerate(self._staff):
                if existing.id == staff.id:
                    self._staff[i] = staff
                    break
            else:
                self._staff.append(staff)
            self._persist()
            return staff

    def remove_staff(self, staff_id: str) -> int:
        """Remove a staff member and every record of theirs. Returns the removed record count."""

        with self._lock:
            self._staff = [s for s in self._staff if s.id != staff_id]
            kept = {k: r for k, r in self._records.items() if r.staff_id != staff_id}
            removed = len(self._records) - len(kept)
            self._records = kept
            self._persist()
            return removed

from __future__ import annotations

import json
import logging
import os
import tempfile
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Callable, Optional

from ..accounts.session import SessionService
from ..attendance.codec import snapshot_from_dict, snapshot_to_dict
from ..attendance.record_store import RecordStore
from ..common.datetime_utils import iso_date, now_local
from ..core.constants import BACKUP_PREFIX, BACKUP_SUFFIX

logger = logging.getLogger(__name__)


def _write_atomic(path: Path, text: str) -> None:
    fd, tmp = tempfile.mkstemp(prefix=".backup-", suffix=".tmp", dir=str(path.parent))
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(text)
        os.replace(tmp, path)
    except BaseException:
        if os.path.exists(tmp):
            os.unlink(tmp)
        raise


@dataclass(frozen=True)
class BackupOutcome:
    ok: bool
    message: str
    path: Optional[Path] = None


class BackupService:
    """Dated JSON snapshots of the active namespace, plus once-a-day automatic backup.

    Note: Neither backup nor restore raises; failures come back as ``BackupOutcome(ok=False)``.
    """

    def __init__(
        self,
        store: RecordStore,
        sessions: SessionService,
        *,
        backup_dir: str | Path,
        clock: Callable[[], datetime] = now_local,
    ):
        self._store = store
        self._sessions = sessions
        self._dir = Path(backup_dir)
        self._clock = clock

    @property
    def backup_dir(self) -> Path:
        return self._dir

    def filename_for(self, when: datetime) -> str:
        return f"{BACKUP_PREFIX}{iso_date(when)}{BACKUP_SUFFIX}"

    def list_backups(self) -> list[Path]:
        if not self._dir.is_dir():
            return []
        files = [
            p for p in self._dir.iterdir()
            if p.is_file() and p.name.startswith(BACKUP_PREFIX) and p.name.endswith(BACKUP_SUFFIX)
        ]
        return sorted(files, key=lambda p: p.name)

    def backup(self, *, now: Optional[datetime] = None) -> BackupOutcome:
        now = now or self._clock()
        path = self._dir / self.filename_for(now)
        if self._store.degraded:
            logger.warning(f"Skipping backup to {path}: the store could not be read")
            return BackupOutcome(ok=False, message="Backup skipped: stored data could not be read")
        try:
            with self._store.lock:
                payload = snapshot_to_dict(self._store.snapshot())
            self._dir.mkdir(parents=True, exist_ok=True)
            _write_atomic(path, json.dumps(payload, ensure_ascii=False, indent=2))
        except (OSError, TypeError, ValueError) as e:
            logger.exception(f"Backup to {path} failed")
            return BackupOutcome(ok=False, message=f"Backup failed: {e}")

        logger.info(f"Backup saved to {path} (namespace={self._store.namespace})")
        return BackupOutcome(ok=True, message=f"Backup saved ({path.name})", path=path)

    def restore_latest(self) -> BackupOutcome:
        try:
            files = self.list_backups()
        except OSError as e:
            logger.exception(f"Cannot list {self._dir}")
            return BackupOutcome(ok=False, message=f"Restore failed: {e}")

        if not files:
            logger.warning(f"No backup files in {self._dir}")
            return BackupOutcome(ok=False, message="No backup files found")

        latest = files[-1]
        try:
            snapshot = snapshot_from_dict(json.loads(latest.read_text(encoding="utf-8")))
        except (OSError, KeyError, TypeError, ValueError) as e:
            logger.exception(f"Restore from {latest} failed")
            return BackupOutcome(ok=False, message=f"Restore failed: {e}", path=latest)

        with self._store.lock:
            self._store.save_all(snapshot.staff, snapshot.records)
        logger.info(f"Restored namespace={self._store.namespace} from {latest.name}")
        return BackupOutcome(ok=True, message=f"Restored ({latest.name})", path=latest)

    def check_and_auto_backup(self, now: Optional[datetime] = None) -> Optional[BackupOutcome]:
        """Back up once per calendar day. Returns None when today's backup already ran."""

        now = now or self._clock()
        today = now.date()
        last = self._sessions.current.last_auto_backup
        if last is not None and last >= today:
            logger.debug(f"Auto backup already done for {last}")
            return None

        outcome = self.backup(now=now)
        if self._store.degraded:
            # retried on the next check once the store reads again
            return outcome
        self._sessions.record_auto_backup(today)
        return outcome

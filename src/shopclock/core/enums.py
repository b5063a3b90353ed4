from __future__ import annotations

from enum import Enum


class RoundingMode(str, Enum):
    """How raw worked seconds become payable minutes."""

    MINUTE1 = "minute1"
    QUARTER15 = "quarter15"

    @property
    def label(self) -> str:
        return "1分単位" if self is RoundingMode.MINUTE1 else "15分丸め"


class AttendanceState(str, Enum):
    """Where a staff member is within one day."""

    NOT_STARTED = "NOT_STARTED"
    WORKING = "WORKING"
    ON_BREAK = "ON_BREAK"
    FINISHED = "FINISHED"


class StoreBackend(str, Enum):
    FILE = "file"
    MYSQL = "mysql"
    MEMORY = "memory"

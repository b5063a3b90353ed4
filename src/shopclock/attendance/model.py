from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one staff member's attendance for one calendar day."""

    id: str
    staff_id: str
    work_date: date
    clock_in: Optional[datetime] = None
    clock_out: Optional[datetime] = None
    break_start: Optional[datetime] = None
    break_minutes: int = 0
    meal_count: int = 0

    @property
    def is_on_break(self) -> bool:
        return self.break_start is not None

    @property
    def total_seconds_worked(self) -> Optional[float]:
        """(out - in) - completed breaks, never negative; None until both stamps exist."""

        if self.clock_in is None or self.clock_out is None:
            return None
        raw = (self.clock_out - self.clock_in).total_seconds()
        return max(0.0, raw - max(0, self.break_minutes) * 60)

    @property
    def is_blank(self) -> bool:
        return (
            self.clock_in is None
            and self.clock_out is None
            and self.break_start is None
            and self.break_minutes == 0
            and self.meal_count == 0
        )


@dataclass(frozen=True)
class Snapshot:
    """Full staff + records state of one namespace."""

    staff: tuple = ()
    records: dict = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return not self.staff and not self.records

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from ...attendance.model import AttendanceRecord


class RoundingCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll rounding)."""

    @abstractmethod
    def payable_minutes(self, seconds: float) -> float:
        raise NotImplementedError

    def record_minutes(self, record: AttendanceRecord) -> Optional[float]:
        seconds = record.total_seconds_worked
        if seconds is None:
            return None
        return self.payable_minutes(seconds)

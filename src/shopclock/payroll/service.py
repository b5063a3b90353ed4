from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from ..attendance.model import AttendanceRecord
from ..attendance.record_store import RecordStore
from ..common.datetime_utils import DayLike, month_range
from ..core.enums import RoundingMode
from ..staff.model import Staff
from .calculator.factory import RoundingCalculatorFactory


@dataclass(frozen=True)
class PayrollLine:
    """Read-model for one staff member's month (payroll table / export)."""

    staff_id: str
    name: str
    hourly_wage: int
    meal_unit: int
    meal_count: int
    work_days: int
    total_hours: float
    pay: int


def pay_amount(total_hours: float, hourly_wage: Optional[int], meal_unit: Optional[int], meal_count: int) -> int:
    """round(hours * wage) - meal unit * meals; may go negative."""

    base = math.floor(total_hours * (hourly_wage or 0) + 0.5)
    return int(base) - (meal_unit or 0) * int(meal_count)


class PayrollService:
    """Monthly aggregates over the record store (read-only)."""

    def __init__(self, store: RecordStore, *, calculators: Optional[RoundingCalculatorFactory] = None):
        self._store = store
        self._calculators = calculators or RoundingCalculatorFactory()

    def monthly_daily_records(self, staff_id: str, month: DayLike) -> list[AttendanceRecord]:
        start, end = month_range(month)
        rows = [r for r in self._store.records_for_staff(staff_id) if start <= r.work_date < end]
        rows.sort(key=lambda r: r.work_date)
        return rows

    def daily_payable_minutes(self, record: AttendanceRecord, mode: RoundingMode | str) -> Optional[float]:
        return self._calculators.for_mode(mode).record_minutes(record)

    def daily_hours(self, record: AttendanceRecord, mode: RoundingMode | str) -> Optional[float]:
        minutes = self.daily_payable_minutes(record, mode)
        return None if minutes is None else minutes / 60.0

    def monthly_total_hours(self, staff_id: str, month: DayLike, mode: RoundingMode | str) -> float:
        calc = self._calculators.for_mode(mode)
        total_minutes = 0.0
        for r in self.monthly_daily_records(staff_id, month):
            minutes = calc.record_minutes(r)
            if minutes is not None:
                total_minutes += minutes
        return total_minutes / 60.0

    def monthly_meal_count(self, staff_id: str, month: DayLike) -> int:
        return sum(max(0, r.meal_count) for r in self.monthly_daily_records(staff_id, month))

    def monthly_work_days(self, staff_id: str, month: DayLike) -> int:
        return sum(1 for r in self.monthly_daily_records(staff_id, month) if (r.total_seconds_worked or 0) > 0)

    def payroll_line(self, staff: Staff, month: DayLike, mode: RoundingMode | str) -> PayrollLine:
        total_hours = self.monthly_total_hours(staff.id, month, mode)
        meals = self.monthly_meal_count(staff.id, month)
        return PayrollLine(
            staff_id=staff.id,
            name=staff.name,
            hourly_wage=staff.hourly_wage or 0,
            meal_unit=staff.meal_allowance or 0,
            meal_count=meals,
            work_days=self.monthly_work_days(staff.id, month),
            total_hours=total_hours,
            pay=pay_amount(total_hours, staff.hourly_wage, staff.meal_allowance, meals),
        )

    def monthly_summary(self, month: DayLike, mode: RoundingMode | str) -> list[PayrollLine]:
        return [self.payroll_line(s, month, mode) for s in self._store.list_staff()]

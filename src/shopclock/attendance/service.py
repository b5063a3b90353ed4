from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date, datetime
from typing import Callable, Optional

from ..common.datetime_utils import DayLike, minutes_between, now_local, to_day
from ..core.enums import AttendanceState
from ..core.exceptions import NotFoundError
from ..staff.model import Staff
from .model import AttendanceRecord
from .record_store import RecordStore, record_key

logger = logging.getLogger(__name__)


class AttendanceService:
    """Clock-in / break / clock-out / meal transitions for one staff-day.

    Guard violations (clocking in twice, ending a break that never started, ...) are no-ops:
    the current record is returned unchanged and nothing is written.
    """

    def __init__(self, store: RecordStore, *, clock: Callable[[], datetime] = now_local):
        self._store = store
        self._clock = clock

    def _staff(self, staff_id: str) -> Staff:
        staff = self._store.get_staff(staff_id)
        if not staff:
            raise NotFoundError(f"Unknown staff id: {staff_id}")
        return staff

    def _blank(self, staff_id: str, day: date) -> AttendanceRecord:
        return AttendanceRecord(id=self._store.new_id(), staff_id=staff_id, work_date=day)

    def record_for(self, staff_id: str, on: Optional[DayLike] = None) -> AttendanceRecord:
        """Stored record for the day, or an unsaved blank one."""

        day = to_day(on) if on is not None else self._clock().date()
        existing = self._store.get_record(record_key(day, staff_id))
        return existing or self._blank(staff_id, day)

    def state_of(self, staff_id: str, on: Optional[DayLike] = None) -> AttendanceState:
        r = self.record_for(staff_id, on)
        if r.clock_in is None:
            return AttendanceState.NOT_STARTED
        if r.clock_out is not None:
            return AttendanceState.FINISHED
        if r.is_on_break:
            return AttendanceState.ON_BREAK
        return AttendanceState.WORKING

    def clock_in(self, staff_id: str, *, now: Optional[datetime] = None) -> AttendanceRecord:
        now = now or self._clock()
        with self._store.lock:
            self._staff(staff_id)
            r = self.record_for(staff_id, now)
            if r.clock_in is not None:
                return r
            return self._store.put_record(replace(r, clock_in=now, clock_out=None))

    def clock_out(self, staff_id: str, *, now: Optional[datetime] = None) -> AttendanceRecord:
        now = now or self._clock()
        with self._store.lock:
            self._staff(staff_id)
            r = self.record_for(staff_id, now)
            if r.clock_in is None:
                return r
            if r.break_start is not None:
                r = self._close_break(r, now)
            return self._store.put_record(replace(r, clock_out=now))

    def start_break(self, staff_id: str, *, now: Optional[datetime] = None) -> AttendanceRecord:
        now = now or self._clock()
        with self._store.lock:
            self._staff(staff_id)
            r = self.record_for(staff_id, now)
            if r.clock_in is None or r.is_on_break:
                return r
            return self._store.put_record(replace(r, break_start=now))

    def end_break(self, staff_id: str, *, now: Optional[datetime] = None) -> AttendanceRecord:
        now = now or self._clock()
        with self._store.lock:
            self._staff(staff_id)
            r = self.record_for(staff_id, now)
            if r.break_start is None:
                return r
            return self._store.put_record(self._close_break(r, now))

    def add_meal(self, staff_id: str, *, now: Optional[datetime] = None) -> AttendanceRecord:
        now = now or self._clock()
        with self._store.lock:
            self._staff(staff_id)
            r = self.record_for(staff_id, now)
            return self._store.put_record(replace(r, meal_count=r.meal_count + 1))

    def update_record(
        self,
        staff_id: str,
        on: DayLike,
        *,
        clock_in: Optional[datetime],
        clock_out: Optional[datetime],
        break_minutes: int,
        meal_count: Optional[int] = None,
    ) -> AttendanceRecord:
        """Edit mode: overwrite a day's stamps directly. Any running break is discarded."""

        with self._store.lock:
            self._staff(staff_id)
            r = self.record_for(staff_id, on)
            r = replace(
                r,
                clock_in=clock_in,
                clock_out=clock_out,
                break_start=None,
                break_minutes=max(0, int(break_minutes)),
            )
            if meal_count is not None:
                r = replace(r, meal_count=max(0, int(meal_count)))
            logger.info(f"Edited record {record_key(r.work_date, staff_id)}")
            return self._store.put_record(r)

    @staticmethod
    def _close_break(r: AttendanceRecord, now: datetime) -> AttendanceRecord:
        minutes = minutes_between(r.break_start, now)
        return replace(r, break_minutes=max(0, r.break_minutes + minutes), break_start=None)

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Optional

from ..attendance.record_store import RecordStore
from ..common.validators import require_non_empty, require_non_negative_or_none
from ..core.exceptions import NotFoundError
from .model import Staff

logger = logging.getLogger(__name__)


class StaffService:
    """Use case: manage the staff list of the active namespace."""

    def __init__(self, store: RecordStore):
        self._store = store

    def list_staff(self) -> list[Staff]:
        return self._store.list_staff()

    def get(self, staff_id: str) -> Staff:
        staff = self._store.get_staff(staff_id)
        if not staff:
            raise NotFoundError(f"Unknown staff id: {staff_id}")
        return staff

    def add_staff(self, name: str) -> Staff:
        name = require_non_empty(name, "Name")
        with self._store.lock:
            staff = Staff(id=self._store.new_id(), name=name)
            self._store.put_staff(staff)
        logger.info(f"Added staff {staff.id}")
        return staff

    def rename(self, staff_id: str, name: str) -> Staff:
        name = require_non_empty(name, "Name")
        with self._store.lock:
            return self._store.put_staff(replace(self.get(staff_id), name=name))

    def remove(self, staff_id: str) -> None:
        with self._store.lock:
            self.get(staff_id)
            removed = self._store.remove_staff(staff_id)
        logger.info(f"Removed staff {staff_id} and {removed} records")

    def set_hourly_wage(self, staff_id: str, yen: Optional[int]) -> Staff:
        yen = require_non_negative_or_none(yen, "Hourly wage")
        with self._store.lock:
            return self._store.put_staff(replace(self.get(staff_id), hourly_wage=yen))

    def set_meal_allowance(self, staff_id: str, yen: Optional[int]) -> Staff:
        yen = require_non_negative_or_none(yen, "Meal allowance")
        with self._store.lock:
            return self._store.put_staff(replace(self.get(staff_id), meal_allowance=yen))

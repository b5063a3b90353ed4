from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Staff:
    """Domain entity: a person who clocks in at the shop.

    Note: Plain data object; persistence lives in attendance.record_store.
    """

    id: str
    name: str
    hourly_wage: Optional[int] = None
    meal_allowance: Optional[int] = None

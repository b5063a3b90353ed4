from __future__ import annotations

import math

from ...core.constants import QUARTER_MINUTES
from .base import RoundingCalculator


class QuarterHourRoundingCalculator(RoundingCalculator):
    """Nearest 15 minutes: a remainder of 7.5 minutes or more rounds up, less rounds down."""

    def payable_minutes(self, seconds: float) -> float:
        minutes = seconds / 60
        remainder = math.fmod(minutes, QUARTER_MINUTES)
        if remainder >= QUARTER_MINUTES / 2:
            return minutes - remainder + QUARTER_MINUTES
        return minutes - remainder

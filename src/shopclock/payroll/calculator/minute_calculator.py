from __future__ import annotations

import math

from .base import RoundingCalculator


class MinuteRoundingCalculator(RoundingCalculator):
    """Nearest whole minute; exact halves round up."""

    def payable_minutes(self, seconds: float) -> float:
        return float(max(0, math.floor(seconds / 60 + 0.5)))

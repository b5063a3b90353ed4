from __future__ import annotations

from dataclasses import dataclass

from ...core.enums import RoundingMode
from .base import RoundingCalculator
from .minute_calculator import MinuteRoundingCalculator
from .quarter_calculator import QuarterHourRoundingCalculator


@dataclass
class RoundingCalculatorFactory:
    """Factory Pattern: pick the calculator for a rounding mode."""

    def for_mode(self, mode: RoundingMode | str) -> RoundingCalculator:
        mode = RoundingMode(mode)
        if mode is RoundingMode.QUARTER15:
            return QuarterHourRoundingCalculator()
        return MinuteRoundingCalculator()

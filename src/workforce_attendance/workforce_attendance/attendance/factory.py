from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..shifts.model import Shift
from .strategies.absent_strategy import AbsentStrategy
from .strategies.base import DayStatusStrategy
from .strategies.default_strategy import DefaultThresholdStrategy
from .strategies.threshold_strategy import ShiftThresholdStrategy


@dataclass
class DayStatusStrategyFactory:
    """Factory Pattern: choose appropriate strategy based on rules."""

    def for_day(self, *, shift: Optional[Shift], punch_count: int) -> DayStatusStrategy:
        if punch_count == 0:
            return AbsentStrategy()
        if not shift:
            return DefaultThresholdStrategy()
        return ShiftThresholdStrategy(shift)

from __future__ import annotations

from ...core.enums import AttendanceDayStatus
from ...shifts.model import Shift
from .base import DayStatusStrategy, StatusDecision


class ThresholdStrategy(DayStatusStrategy):
    """present >= present_hours, half-day >= half_day_hours, otherwise absent."""

    def __init__(self, *, present_hours: float, half_day_hours: float):
        self.present_hours = float(present_hours)
        self.half_day_hours = float(half_day_hours)

    def decide(self, *, effective_hours: float) -> StatusDecision:
        if effective_hours >= self.present_hours:
            return StatusDecision(status=AttendanceDayStatus.PRESENT)
        if effective_hours >= self.half_day_hours:
            return StatusDecision(status=AttendanceDayStatus.HALF_DAY)
        return StatusDecision(status=AttendanceDayStatus.ABSENT)


class ShiftThresholdStrategy(ThresholdStrategy):
    """Thresholds taken from the active shift."""

    def __init__(self, shift: Shift):
        super().__init__(present_hours=shift.present_hours, half_day_hours=shift.half_day_hours)
        self.shift = shift

from __future__ import annotations

from ...core.enums import AttendanceDayStatus
from .base import DayStatusStrategy, StatusDecision


class AbsentStrategy(DayStatusStrategy):
    """No punches at all for the day."""

    def decide(self, *, effective_hours: float) -> StatusDecision:
        return StatusDecision(status=AttendanceDayStatus.ABSENT)

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Sequence

from ..common.datetime_utils import format_late_message
from ..core.constants import DEFAULT_LATE_GRACE_MINUTES
from ..core.enums import AttendanceDayStatus, DayType, PunchEvent
from ..holidays.model import Holiday
from ..punches.model import PunchRecord
from ..shifts.model import Shift
from .factory import DayStatusStrategyFactory


@dataclass(frozen=True)
class LateArrival:
    is_late: bool
    late_minutes: float
    message: str

    @property
    def difference_hours(self) -> float:
        return self.late_minutes / 60


ON_TIME = LateArrival(is_late=False, late_minutes=0.0, message="On time")


@dataclass(frozen=True)
class DayClassification:
    day_type: DayType
    status: AttendanceDayStatus
    lateness: LateArrival
    is_in_missing: bool


def detect_late_arrival(first_in: datetime, shift: Optional[Shift], grace_minutes: int = DEFAULT_LATE_GRACE_MINUTES) -> LateArrival:
    """Compare the first IN with the shift start on the same calendar date."""
    if not shift:
        return ON_TIME

    shift_start = datetime.combine(first_in.date(), shift.start_time)
    late_minutes = (first_in - shift_start).total_seconds() / 60
    is_late = late_minutes > grace_minutes
    return LateArrival(
        is_late=is_late,
        late_minutes=late_minutes,
        message=format_late_message(late_minutes) if is_late else "On time",
    )


class ReconciledClassifier:
    """Day classification used by the daily summary reconciler.

    Kept separate from SimpleMonthlyClassifier: the monthly view has its own rules.
    """

    def __init__(self, *, strategy_factory: Optional[DayStatusStrategyFactory] = None, grace_minutes: int = DEFAULT_LATE_GRACE_MINUTES):
        self._factory = strategy_factory or DayStatusStrategyFactory()
        self._grace_minutes = int(grace_minutes)

    def classify(
        self,
        *,
        effective_hours: float,
        punches: Sequence[PunchRecord],
        shift: Optional[Shift],
        holiday: Optional[Holiday],
    ) -> DayClassification:
        strategy = self._factory.for_day(shift=shift, punch_count=len(punches))
        decision = strategy.decide(effective_hours=effective_hours)

        first_in = next((p for p in punches if p.event == PunchEvent.IN), None)
        lateness = ON_TIME
        if first_in is not None:
            lateness = detect_late_arrival(first_in.timestamp, shift, self._grace_minutes)

        ins = sum(1 for p in punches if p.event == PunchEvent.IN)
        outs = len(punches) - ins

        return DayClassification(
            day_type=DayType.HOLIDAY if holiday else DayType.WORKING,
            status=decision.status,
            lateness=lateness,
            is_in_missing=ins > outs,
        )

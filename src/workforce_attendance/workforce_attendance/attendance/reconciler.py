from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

import structlog

from ..common.datetime_utils import day_window
from ..core.constants import (
    DEFAULT_HALF_DAY_HOURS,
    DEFAULT_SHIFT_BREAK_HOURS,
    DEFAULT_SHIFT_EFFECTIVE_HOURS,
    WEB_PREMISE_NAME,
)
from ..core.enums import PunchEvent
from ..employees.repository import EmployeeDirectory
from ..holidays.repository import HolidayCalendar
from ..punches.model import PunchRecord
from ..punches.repository import PunchStore
from ..shifts.model import Shift
from ..shifts.repository import ShiftPolicy
from ..summaries.model import DailyAttendanceSummary, TimeEntry
from ..summaries.repository import SummaryStore
from .calculator import calculate_hours, detect_anomalies
from .classifier import ReconciledClassifier
from .pairing import pair_punches

log = structlog.get_logger(__name__)


def _time_entry(punch: PunchRecord) -> TimeEntry:
    adjustment = punch.adjustment
    return TimeEntry(
        punch_id=punch.punch_id,
        event=punch.event,
        timestamp=punch.timestamp,
        actual_timestamp=punch.actual_timestamp,
        adjusted_timestamp=adjustment.adjusted_timestamp if adjustment else None,
        original_event=punch.event,
        modified_event=adjustment.modified_event if adjustment and adjustment.modified_event else punch.event,
        source=punch.source,
        premise_name=punch.premise_name or WEB_PREMISE_NAME,
        location_address=punch.location_address,
        has_address=punch.has_address,
        ip_address=punch.ip_address,
        is_adjusted=punch.is_adjusted,
        is_deleted=punch.is_deleted,
        is_manually_added=punch.is_manually_added,
        note=punch.note,
    )


def _shift_bound(day: date, shift: Optional[Shift], *, end: bool) -> datetime:
    if not shift:
        return datetime.combine(day, datetime.min.time())
    return datetime.combine(day, shift.end_time if end else shift.start_time)


class DailySummaryReconciler:
    """Derive one DailyAttendanceSummary from the raw punches of an employee-day.

    The only side effect is a single upsert into the summary store; running it
    twice on unchanged punches produces an equal summary.
    """

    def __init__(
        self,
        punches: PunchStore,
        shifts: ShiftPolicy,
        holidays: HolidayCalendar,
        summaries: SummaryStore,
        employees: Optional[EmployeeDirectory] = None,
        *,
        classifier: Optional[ReconciledClassifier] = None,
    ):
        self._punches = punches
        self._shifts = shifts
        self._holidays = holidays
        self._summaries = summaries
        self._employees = employees
        self._classifier = classifier or ReconciledClassifier()

    def _location_for(self, employee_id: str) -> Optional[str]:
        if not self._employees:
            return None
        employee = self._employees.get_by_id(employee_id)
        return employee.location_id if employee else None

    def build(self, employee_id: str, day: date) -> DailyAttendanceSummary:
        """Compute the summary without persisting it."""
        start, end = day_window(day)
        logs: Sequence[PunchRecord] = sorted(
            (p for p in self._punches.list_between(employee_id, start, end) if not p.is_deleted),
            key=lambda p: p.timestamp,
        )

        shift = self._shifts.get_active()
        holiday = self._holidays.find(day, self._location_for(employee_id))

        pairing = pair_punches(logs)
        hours = calculate_hours(pairing.valid_intervals)
        anomalies = detect_anomalies(pairing, len(logs))
        classification = self._classifier.classify(
            effective_hours=hours.effective_hours,
            punches=logs,
            shift=shift,
            holiday=holiday,
        )

        ins = [p for p in logs if p.event == PunchEvent.IN]
        outs = [p for p in logs if p.event == PunchEvent.OUT]

        return DailyAttendanceSummary(
            employee_id=employee_id,
            attendance_date=start,
            shift_id=shift.shift_id if shift else None,
            shift_policy_name=shift.name if shift else None,
            shift_start_time=_shift_bound(day, shift, end=False),
            shift_end_time=_shift_bound(day, shift, end=True),
            shift_slot_start_time=start,
            shift_slot_end_time=end,
            shift_effective_duration=(shift.effective_duration if shift else 0) or DEFAULT_SHIFT_EFFECTIVE_HOURS,
            shift_break_duration=(shift.break_duration if shift else 0) or DEFAULT_SHIFT_BREAK_HOURS,
            half_day_duration=(shift.half_day_duration if shift else 0) or DEFAULT_HALF_DAY_HOURS,
            day_type=classification.day_type,
            holiday_name=holiday.name if holiday else None,
            attendance_day_status=classification.status,
            first_log_of_the_day=logs[0].timestamp if logs else None,
            first_in_of_the_day=ins[0].timestamp if ins else None,
            last_log_of_the_day=logs[-1].timestamp if logs else None,
            last_out_of_the_day=outs[-1].timestamp if outs else None,
            total_effective_hours=hours.effective_hours,
            effective_hours_in_hhmm=hours.effective_hhmm,
            total_gross_hours=hours.gross_hours,
            gross_hours_in_hhmm=hours.gross_hhmm,
            total_break_duration=hours.break_hours,
            break_duration_in_hhmm=hours.break_hhmm,
            valid_in_out_pairs=pairing.valid_intervals,
            is_in_missing=classification.is_in_missing,
            is_arrived_late=classification.lateness.is_late,
            late_arrival_difference=classification.lateness.difference_hours,
            arrival_message=classification.lateness.message,
            is_anomaly_detected=bool(anomalies),
            anomalies=tuple(anomalies),
            has_location=any(p.has_address for p in logs),
            is_remote_clock_in=any(p.is_remote_clock_in for p in logs),
            system_generated=True,
            total_time_entries=len(logs),
            time_entries=tuple(_time_entry(p) for p in logs),
        )

    def reconcile(self, employee_id: str, day: date) -> DailyAttendanceSummary:
        summary = self._summaries.upsert(self.build(employee_id, day))
        log.info(
            "attendance_summary_reconciled",
            employee_id=employee_id,
            attendance_date=day.isoformat(),
            status=summary.attendance_day_status.value,
            effective_hours=round(summary.total_effective_hours, 2),
            anomaly=summary.is_anomaly_detected,
        )
        return summary

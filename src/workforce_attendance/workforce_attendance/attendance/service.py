from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Callable, Optional, Sequence

import structlog

from ..common.datetime_utils import day_window, iter_days, month_window, now_utc, to_iso, to_naive_utc
from ..common.validators import optional_str, require_non_empty, require_non_negative_int, require_positive_int
from ..core.constants import DEFAULT_LOG_LIMIT, DEFAULT_LOG_SKIP
from ..core.enums import PunchEvent, PunchSource
from ..core.exceptions import InvalidStateError, NotFoundError, ValidationError
from ..employees.repository import EmployeeDirectory
from ..punches.model import GeoLocation, PunchRecord
from ..punches.repository import PunchStore
from ..summaries.model import DailyAttendanceSummary
from ..summaries.repository import SummaryStore
from .monthly import SimpleMonthlyClassifier
from .reconciler import DailySummaryReconciler

log = structlog.get_logger(__name__)


@dataclass(frozen=True)
class LogsPage:
    logs: Sequence[PunchRecord]
    total: int
    limit: int
    skip: int

    def to_dict(self) -> dict:
        return {
            "logs": [p.to_dict() for p in self.logs],
            "total": self.total,
            "limit": self.limit,
            "skip": self.skip,
        }


class AttendanceService:
    """Use cases: clock in/out commands and attendance queries."""

    def __init__(
        self,
        punches: PunchStore,
        employees: EmployeeDirectory,
        summaries: SummaryStore,
        reconciler: DailySummaryReconciler,
        *,
        monthly_classifier: Optional[SimpleMonthlyClassifier] = None,
        clock: Callable[[], datetime] = now_utc,
    ):
        self._punches = punches
        self._employees = employees
        self._summaries = summaries
        self._reconciler = reconciler
        self._monthly = monthly_classifier or SimpleMonthlyClassifier()
        self._clock = clock

    # ---- commands ----

    def _ensure_employee(self, employee_id: Any) -> str:
        employee_id = require_non_empty(employee_id, "Employee ID")
        if not self._employees.exists(employee_id):
            raise NotFoundError("Employee not found")
        return employee_id

    def _current_event(self, employee_id: str) -> Optional[PunchEvent]:
        last = self._punches.latest_for_employee(employee_id)
        return last.event if last else None

    def _record(
        self,
        event: PunchEvent,
        employee_id: str,
        *,
        timestamp: Optional[datetime],
        note: Optional[str],
        location_address: Optional[dict],
        ip_address: Optional[str],
        acting_user_id: Optional[str],
    ) -> PunchRecord:
        # Caller-supplied time wins (offline / backdated submissions).
        at = to_naive_utc(timestamp) if timestamp else self._clock()

        if location_address is not None and not isinstance(location_address, dict):
            raise ValidationError("Location address must be an object")

        latitude = (location_address or {}).get("latitude")
        longitude = (location_address or {}).get("longitude")
        has_address = bool(latitude and longitude)

        geo_location = None
        if has_address:
            try:
                geo_location = GeoLocation(latitude=float(latitude), longitude=float(longitude))
            except (TypeError, ValueError):
                raise ValidationError("Latitude and longitude must be numbers")

        punch = self._punches.append(
            PunchRecord(
                employee_id=employee_id,
                event=event,
                timestamp=at,
                actual_timestamp=at,
                source=PunchSource.WEB,
                geo_location=geo_location,
                location_address=dict(location_address) if has_address else None,
                has_address=has_address,
                is_remote_clock_in=not has_address,
                ip_address=optional_str(ip_address),
                note=optional_str(note),
                created_by=optional_str(acting_user_id),
            )
        )
        log.info(
            "punch_recorded",
            employee_id=employee_id,
            event=event.value,
            timestamp=to_iso(at),
            remote=punch.is_remote_clock_in,
        )
        return punch

    def clock_in(
        self,
        employee_id: Any,
        *,
        timestamp: Optional[datetime] = None,
        note: Optional[str] = None,
        location_address: Optional[dict] = None,
        ip_address: Optional[str] = None,
        acting_user_id: Optional[str] = None,
    ) -> PunchRecord:
        employee_id = self._ensure_employee(employee_id)

        if self._current_event(employee_id) == PunchEvent.IN:
            log.warning("clock_in_rejected", employee_id=employee_id, reason="already_in")
            raise InvalidStateError("You are already clocked in. Please clock out first.")

        return self._record(
            PunchEvent.IN,
            employee_id,
            timestamp=timestamp,
            note=note,
            location_address=location_address,
            ip_address=ip_address,
            acting_user_id=acting_user_id,
        )

    def clock_out(
        self,
        employee_id: Any,
        *,
        timestamp: Optional[datetime] = None,
        note: Optional[str] = None,
        location_address: Optional[dict] = None,
        ip_address: Optional[str] = None,
        acting_user_id: Optional[str] = None,
    ) -> PunchRecord:
        employee_id = self._ensure_employee(employee_id)

        if self._current_event(employee_id) != PunchEvent.IN:
            log.warning("clock_out_rejected", employee_id=employee_id, reason="not_in")
            raise InvalidStateError("You are not clocked in. Please clock in first.")

        return self._record(
            PunchEvent.OUT,
            employee_id,
            timestamp=timestamp,
            note=note,
            location_address=location_address,
            ip_address=ip_address,
            acting_user_id=acting_user_id,
        )

    # ---- queries ----

    def get_current_status(self, employee_id: Any) -> dict:
        employee_id = require_non_empty(employee_id, "Employee ID")
        last = self._punches.latest_for_employee(employee_id)
        if not last:
            return {"status": None, "lastPunchTime": None, "message": "No attendance record found"}

        return {
            "status": last.event.value,
            "lastPunchTime": to_iso(last.timestamp),
            "message": "Currently clocked in" if last.event == PunchEvent.IN else "Currently clocked out",
        }

    def get_today_attendance(self, employee_id: Any) -> Sequence[PunchRecord]:
        employee_id = require_non_empty(employee_id, "Employee ID")
        start, end = day_window(self._clock().date())
        return list(self._punches.list_between(employee_id, start, end))

    def get_attendance_logs(
        self,
        employee_id: Any,
        *,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
        limit: int = DEFAULT_LOG_LIMIT,
        skip: int = DEFAULT_LOG_SKIP,
    ) -> LogsPage:
        employee_id = require_non_empty(employee_id, "Employee ID")
        limit = require_positive_int(limit, "limit")
        skip = require_non_negative_int(skip, "skip")

        logs = self._punches.list_page(employee_id, start=start_date, end=end_date, limit=limit, skip=skip)
        total = self._punches.count(employee_id, start=start_date, end=end_date)
        return LogsPage(logs=list(logs), total=total, limit=limit, skip=skip)

    def get_monthly_attendance(self, employee_id: Any, year: int, month: int) -> dict:
        employee_id = require_non_empty(employee_id, "Employee ID")
        if not 1 <= int(month) <= 12:
            raise ValidationError("Month must be between 1 and 12")

        start, end = month_window(int(year), int(month))
        days = self._monthly.classify_month(self._punches.list_between(employee_id, start, end))
        return {
            "year": int(year),
            "month": int(month),
            "dailyStatus": {key: day.to_dict() for key, day in days.items()},
            "totalDays": len(days),
        }

    def get_attendance_summary(self, employee_id: Any, day: date) -> DailyAttendanceSummary:
        """Stored summary for the day, reconciled on first request."""
        employee_id = self._ensure_employee(employee_id)
        summary = self._summaries.get(employee_id, day)
        if summary is None:
            summary = self._reconciler.reconcile(employee_id, day)
        return summary

    def get_attendance_summary_range(self, employee_id: Any, start_date: date, end_date: date) -> list[dict]:
        """Summaries for every day in [start_date, end_date], latest date first."""
        employee_id = self._ensure_employee(employee_id)
        if start_date > end_date:
            raise ValidationError("Start date must not be after end date")

        summaries: list[DailyAttendanceSummary] = []
        for day in iter_days(start_date, end_date):
            summary = self._summaries.get(employee_id, day)
            if summary is None or not summary.is_enriched:
                log.info(
                    "attendance_summary_recompute",
                    employee_id=employee_id,
                    attendance_date=day.isoformat(),
                    reason="missing" if summary is None else "not_enriched",
                )
                summary = self._reconciler.reconcile(employee_id, day)
            summaries.append(summary)

        summaries.sort(key=lambda s: s.attendance_date, reverse=True)
        return [s.to_dict() for s in summaries]

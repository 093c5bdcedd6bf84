from __future__ import annotations

from datetime import date
from typing import Optional, Protocol

from .model import DailyAttendanceSummary


class SummaryStore(Protocol):
    def get(self, employee_id: str, day: date) -> Optional[DailyAttendanceSummary]:
        raise NotImplementedError

    def upsert(self, summary: DailyAttendanceSummary) -> DailyAttendanceSummary:
        """Replace-or-insert keyed by (employee_id, attendance_date) in one atomic write.

        Returns the stored summary including storage timestamps.
        """

        raise NotImplementedError

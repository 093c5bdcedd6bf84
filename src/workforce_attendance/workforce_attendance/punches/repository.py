from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .model import PunchRecord


class PunchStore(Protocol):
    """Append-only store of raw punches. Every read excludes soft-deleted rows."""

    def append(self, punch: PunchRecord) -> PunchRecord:
        """Insert one punch and return it with its storage id."""

        raise NotImplementedError

    def latest_for_employee(self, employee_id: str) -> Optional[PunchRecord]:
        """Most recent punch by timestamp, or None when the employee never punched."""

        raise NotImplementedError

    def list_between(self, employee_id: str, start: datetime, end: datetime) -> Sequence[PunchRecord]:
        """Punches with start <= timestamp < end, oldest first."""

        raise NotImplementedError

    def list_page(
        self,
        employee_id: str,
        *,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        limit: int,
        skip: int,
    ) -> Sequence[PunchRecord]:
        """Punches with start <= timestamp <= end, newest first."""

        raise NotImplementedError

    def count(self, employee_id: str, *, start: Optional[datetime] = None, end: Optional[datetime] = None) -> int:
        raise NotImplementedError

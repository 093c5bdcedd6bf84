from __future__ import annotations

from datetime import date
from typing import Optional, Protocol

from .model import Holiday


class HolidayCalendar(Protocol):
    def find(self, day: date, location_id: Optional[str] = None) -> Optional[Holiday]:
        """Active holiday on `day` that is global or belongs to `location_id`."""

        raise NotImplementedError

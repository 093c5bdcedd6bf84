from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass(frozen=True)
class Holiday:
    """Thực thể miền (domain): Ngày nghỉ lễ."""

    holiday_id: str
    holiday_date: date
    name: str
    holiday_type: str
    is_active: bool = True
    location_id: Optional[str] = None

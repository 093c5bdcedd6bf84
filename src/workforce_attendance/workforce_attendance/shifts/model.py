from __future__ import annotations

from dataclasses import dataclass
from datetime import time
from typing import Optional


@dataclass(frozen=True)
class Shift:
    """Thực thể miền (domain): Ca làm việc (Shift).

    Các ngưỡng và thời lượng tính bằng giờ.
    """

    shift_id: str
    name: str
    start_time: time
    end_time: time
    break_duration: float
    effective_duration: float
    half_day_duration: float
    present_hours: float
    half_day_hours: float
    is_active: bool = True
    location_id: Optional[str] = None

from __future__ import annotations

from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone, normalize_mysql_time
from .model import Shift
from .repository import ShiftPolicy


class MySQLShiftRepository(ShiftPolicy):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_active(self) -> Optional[Shift]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT shift_id, name, start_time, end_time, break_duration, effective_duration,
                       half_day_duration, present_hours, half_day_hours, is_active, location_id
                FROM shifts
                WHERE is_active=1
                ORDER BY created_at ASC, shift_id ASC
                LIMIT 1
                """
            )
            r = fetchone(cur)
            if not r:
                return None
            return Shift(
                shift_id=str(r["shift_id"]),
                name=r["name"],
                start_time=normalize_mysql_time(r["start_time"]),
                end_time=normalize_mysql_time(r["end_time"]),
                break_duration=float(r.get("break_duration") or 0),
                effective_duration=float(r.get("effective_duration") or 0),
                half_day_duration=float(r.get("half_day_duration") or 0),
                present_hours=float(r["present_hours"]),
                half_day_hours=float(r["half_day_hours"]),
                is_active=bool(r.get("is_active", True)),
                location_id=r.get("location_id"),
            )

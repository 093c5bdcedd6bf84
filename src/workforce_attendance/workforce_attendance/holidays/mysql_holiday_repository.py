from __future__ import annotations

from datetime import date
from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import Holiday
from .repository import HolidayCalendar


class MySQLHolidayRepository(HolidayCalendar):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def find(self, day: date, location_id: Optional[str] = None) -> Optional[Holiday]:
        clauses = ["holiday_date=%s", "is_active=1"]
        params: list[object] = [day]
        if location_id:
            clauses.append("(location_id IS NULL OR location_id=%s)")
            params.append(location_id)
        else:
            clauses.append("location_id IS NULL")

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT holiday_id, holiday_date, name, holiday_type, is_active, location_id
                FROM holidays
                WHERE {where}
                ORDER BY location_id IS NULL, holiday_id
                LIMIT 1
                """,
                tuple(params),
            )
            r = fetchone(cur)
            if not r:
                return None
            return Holiday(
                holiday_id=str(r["holiday_id"]),
                holiday_date=r["holiday_date"],
                name=r["name"],
                holiday_type=r["holiday_type"],
                is_active=bool(r.get("is_active", True)),
                location_id=r.get("location_id"),
            )

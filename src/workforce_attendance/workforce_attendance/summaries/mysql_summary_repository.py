from __future__ import annotations

import json
from dataclasses import replace
from datetime import date
from typing import Any, Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import DailyAttendanceSummary
from .repository import SummaryStore


def _row_to_summary(r: dict[str, Any]) -> DailyAttendanceSummary:
    payload = r["summary_json"]
    if isinstance(payload, (str, bytes)):
        payload = json.loads(payload)
    summary = DailyAttendanceSummary.from_dict(payload)
    return replace(summary, created_at=r.get("created_at"), updated_at=r.get("updated_at"))


class MySQLSummaryRepository(SummaryStore):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, employee_id: str, day: date) -> Optional[DailyAttendanceSummary]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT summary_json, created_at, updated_at
                FROM attendance_summaries
                WHERE employee_id=%s AND attendance_date=%s
                """,
                (employee_id, day),
            )
            r = fetchone(cur)
            return _row_to_summary(r) if r else None

    def upsert(self, summary: DailyAttendanceSummary) -> DailyAttendanceSummary:
        payload = summary.to_dict()
        payload.pop("createdAt", None)
        payload.pop("updatedAt", None)
        day = summary.attendance_date.date()

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_summaries(
                    employee_id, attendance_date, day_type, attendance_day_status,
                    is_anomaly_detected, system_generated, summary_json
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    day_type=VALUES(day_type),
                    attendance_day_status=VALUES(attendance_day_status),
                    is_anomaly_detected=VALUES(is_anomaly_detected),
                    system_generated=VALUES(system_generated),
                    summary_json=VALUES(summary_json)
                """,
                (
                    summary.employee_id,
                    day,
                    summary.day_type.value,
                    summary.attendance_day_status.value,
                    int(summary.is_anomaly_detected),
                    int(summary.system_generated),
                    json.dumps(payload),
                ),
            )

            cur.execute(
                """
                SELECT summary_json, created_at, updated_at
                FROM attendance_summaries
                WHERE employee_id=%s AND attendance_date=%s
                """,
                (summary.employee_id, day),
            )
            return _row_to_summary(fetchone(cur))

from __future__ import annotations

import json
from datetime import datetime
from typing import Any, Optional, Sequence

from ..core.enums import PunchEvent, PunchSource
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import GeoLocation, PunchAdjustment, PunchRecord
from .repository import PunchStore

_COLUMNS = """
    punch_id, employee_id, event, source, timestamp, actual_timestamp,
    latitude, longitude, location_address, has_address, is_remote_clock_in,
    ip_address, premise_name, is_deleted, is_manually_added,
    adjusted_timestamp, modified_event, adjustment_reason, is_adjusted,
    note, created_by, created_at
"""


def _row_to_punch(r: dict[str, Any]) -> PunchRecord:
    geo = None
    if r.get("latitude") is not None and r.get("longitude") is not None:
        geo = GeoLocation(latitude=float(r["latitude"]), longitude=float(r["longitude"]))

    address = r.get("location_address")
    if isinstance(address, (str, bytes)):
        address = json.loads(address)

    adjustment = None
    if r.get("is_adjusted"):
        adjustment = PunchAdjustment(
            adjusted_timestamp=r.get("adjusted_timestamp"),
            modified_event=PunchEvent(r["modified_event"]) if r.get("modified_event") else None,
            reason=r.get("adjustment_reason"),
        )

    return PunchRecord(
        punch_id=int(r["punch_id"]),
        employee_id=str(r["employee_id"]),
        event=PunchEvent(r["event"]),
        source=PunchSource(r["source"]),
        timestamp=r["timestamp"],
        actual_timestamp=r.get("actual_timestamp") or r["timestamp"],
        geo_location=geo,
        location_address=address,
        has_address=bool(r.get("has_address")),
        is_remote_clock_in=bool(r.get("is_remote_clock_in")),
        ip_address=r.get("ip_address"),
        premise_name=r.get("premise_name"),
        is_deleted=bool(r.get("is_deleted")),
        is_manually_added=bool(r.get("is_manually_added")),
        adjustment=adjustment,
        note=r.get("note"),
        created_by=r.get("created_by"),
        created_at=r.get("created_at"),
    )


def _range_clauses(start: Optional[datetime], end: Optional[datetime]) -> tuple[list[str], list[object]]:
    clauses: list[str] = []
    params: list[object] = []
    if start is not None:
        clauses.append("timestamp >= %s")
        params.append(start)
    if end is not None:
        clauses.append("timestamp <= %s")
        params.append(end)
    return clauses, params


class MySQLPunchRepository(PunchStore):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def append(self, punch: PunchRecord) -> PunchRecord:
        adjustment = punch.adjustment
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_logs(
                    employee_id, event, source, timestamp, actual_timestamp,
                    latitude, longitude, location_address, has_address, is_remote_clock_in,
                    ip_address, premise_name, is_deleted, is_manually_added,
                    adjusted_timestamp, modified_event, adjustment_reason, is_adjusted,
                    note, created_by
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    punch.employee_id,
                    punch.event.value,
                    punch.source.value,
                    punch.timestamp,
                    punch.actual_timestamp,
                    punch.geo_location.latitude if punch.geo_location else None,
                    punch.geo_location.longitude if punch.geo_location else None,
                    json.dumps(punch.location_address) if punch.location_address else None,
                    int(punch.has_address),
                    int(punch.is_remote_clock_in),
                    punch.ip_address,
                    punch.premise_name,
                    int(punch.is_deleted),
                    int(punch.is_manually_added),
                    adjustment.adjusted_timestamp if adjustment else None,
                    adjustment.modified_event.value if adjustment and adjustment.modified_event else None,
                    adjustment.reason if adjustment else None,
                    int(adjustment is not None),
                    punch.note,
                    punch.created_by,
                ),
            )
            punch_id = int(cur.lastrowid)

            cur.execute(f"SELECT {_COLUMNS} FROM attendance_logs WHERE punch_id=%s", (punch_id,))
            return _row_to_punch(fetchone(cur))

    def latest_for_employee(self, employee_id: str) -> Optional[PunchRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_logs
                WHERE employee_id=%s AND is_deleted=0
                ORDER BY timestamp DESC, punch_id DESC
                LIMIT 1
                """,
                (employee_id,),
            )
            r = fetchone(cur)
            return _row_to_punch(r) if r else None

    def list_between(self, employee_id: str, start: datetime, end: datetime) -> Sequence[PunchRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_logs
                WHERE employee_id=%s AND is_deleted=0 AND timestamp >= %s AND timestamp < %s
                ORDER BY timestamp ASC, punch_id ASC
                """,
                (employee_id, start, end),
            )
            return [_row_to_punch(r) for r in fetchall(cur)]

    def list_page(
        self,
        employee_id: str,
        *,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        limit: int,
        skip: int,
    ) -> Sequence[PunchRecord]:
        clauses, params = _range_clauses(start, end)
        where = " AND ".join(["employee_id=%s", "is_deleted=0", *clauses])

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_logs
                WHERE {where}
                ORDER BY timestamp DESC, punch_id DESC
                LIMIT %s OFFSET %s
                """,
                (employee_id, *params, int(limit), int(skip)),
            )
            return [_row_to_punch(r) for r in fetchall(cur)]

    def count(self, employee_id: str, *, start: Optional[datetime] = None, end: Optional[datetime] = None) -> int:
        clauses, params = _range_clauses(start, end)
        where = " AND ".join(["employee_id=%s", "is_deleted=0", *clauses])

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT COUNT(*) AS total FROM attendance_logs WHERE {where}", (employee_id, *params))
            r = fetchone(cur)
            return int(r["total"]) if r else 0

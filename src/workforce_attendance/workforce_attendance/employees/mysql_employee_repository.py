from __future__ import annotations

from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import Employee
from .repository import EmployeeDirectory


class MySQLEmployeeRepository(EmployeeDirectory):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def exists(self, employee_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT 1 AS found FROM employees WHERE employee_id=%s", (employee_id,))
            return fetchone(cur) is not None

    def get_by_id(self, employee_id: str) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT employee_id, full_name, location_id, is_active
                FROM employees
                WHERE employee_id=%s
                """,
                (employee_id,),
            )
            row = fetchone(cur)
            if not row:
                return None
            return Employee(
                employee_id=str(row["employee_id"]),
                full_name=row["full_name"],
                location_id=row.get("location_id"),
                is_active=bool(row.get("is_active", True)),
            )

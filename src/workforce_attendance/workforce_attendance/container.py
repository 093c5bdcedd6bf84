from __future__ import annotations

from dataclasses import dataclass

from .attendance.classifier import ReconciledClassifier
from .attendance.factory import DayStatusStrategyFactory
from .attendance.reconciler import DailySummaryReconciler
from .attendance.service import AttendanceService
from .core.constants import DEFAULT_LATE_GRACE_MINUTES
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.repository import EmployeeDirectory
from .holidays.mysql_holiday_repository import MySQLHolidayRepository
from .holidays.repository import HolidayCalendar
from .punches.mysql_punch_repository import MySQLPunchRepository
from .punches.repository import PunchStore
from .shifts.mysql_shift_repository import MySQLShiftRepository
from .shifts.repository import ShiftPolicy
from .summaries.mysql_summary_repository import MySQLSummaryRepository
from .summaries.repository import SummaryStore


@dataclass(frozen=True)
class Container:
    employees_repo: EmployeeDirectory
    shifts_repo: ShiftPolicy
    holidays_repo: HolidayCalendar
    punches_repo: PunchStore
    summaries_repo: SummaryStore

    reconciler: DailySummaryReconciler
    attendance_service: AttendanceService


def wire_container(
    *,
    employees: EmployeeDirectory,
    shifts: ShiftPolicy,
    holidays: HolidayCalendar,
    punches: PunchStore,
    summaries: SummaryStore,
    grace_minutes: int = DEFAULT_LATE_GRACE_MINUTES,
) -> Container:
    """Build services on top of any repository implementations."""
    classifier = ReconciledClassifier(strategy_factory=DayStatusStrategyFactory(), grace_minutes=grace_minutes)
    reconciler = DailySummaryReconciler(punches, shifts, holidays, summaries, employees, classifier=classifier)
    attendance_service = AttendanceService(punches, employees, summaries, reconciler)

    return Container(
        employees_repo=employees,
        shifts_repo=shifts,
        holidays_repo=holidays,
        punches_repo=punches,
        summaries_repo=summaries,
        reconciler=reconciler,
        attendance_service=attendance_service,
    )


def build_container(*, db_config: dict, grace_minutes: int = DEFAULT_LATE_GRACE_MINUTES) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_settings(db_config))

    return wire_container(
        employees=MySQLEmployeeRepository(conn),
        shifts=MySQLShiftRepository(conn),
        holidays=MySQLHolidayRepository(conn),
        punches=MySQLPunchRepository(conn),
        summaries=MySQLSummaryRepository(conn),
        grace_minutes=grace_minutes,
    )

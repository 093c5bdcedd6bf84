from __future__ import annotations

from datetime import date, datetime, timezone

import pytest

from src.workforce_attendance.workforce_attendance.attendance.reconciler import DailySummaryReconciler
from src.workforce_attendance.workforce_attendance.attendance.service import AttendanceService
from src.workforce_attendance.workforce_attendance.container import wire_container
from src.workforce_attendance.workforce_attendance.core.enums import PunchEvent, PunchSource
from src.workforce_attendance.workforce_attendance.core.exceptions import InvalidStateError, NotFoundError, ValidationError
from src.workforce_attendance.workforce_attendance.employees.model import Employee
from tests.fakes import InMemoryEmployees, InMemoryHolidays, InMemoryPunches, InMemoryShifts, InMemorySummaries


@pytest.fixture()
def punches():
    return InMemoryPunches()


@pytest.fixture()
def service(punches):
    container = wire_container(
        employees=InMemoryEmployees({"E1": Employee(employee_id="E1", full_name="An Nguyen")}),
        shifts=InMemoryShifts(),
        holidays=InMemoryHolidays(),
        punches=punches,
        summaries=InMemorySummaries(),
    )
    return container.attendance_service


def test_clock_in_records_web_punch(service, punches):
    punch = service.clock_in("E1", timestamp=datetime(2024, 1, 10, 9, 0), note=" first day ", acting_user_id="admin")

    assert punch.punch_id == 1
    assert punch.event == PunchEvent.IN
    assert punch.source == PunchSource.WEB
    assert punch.timestamp == punch.actual_timestamp == datetime(2024, 1, 10, 9, 0)
    assert punch.is_remote_clock_in is True
    assert punch.has_address is False
    assert punch.note == "first day"
    assert punch.created_by == "admin"
    assert len(punches.rows) == 1


def test_clock_in_with_coordinates_is_not_remote(service):
    punch = service.clock_in(
        "E1",
        timestamp=datetime(2024, 1, 10, 9, 0),
        location_address={"latitude": 21.02, "longitude": 105.83, "addressLine1": "1 Trang Tien"},
    )

    assert punch.has_address is True
    assert punch.is_remote_clock_in is False
    assert punch.geo_location.latitude == 21.02


def test_zero_latitude_counts_as_no_address(service):
    punch = service.clock_in("E1", timestamp=datetime(2024, 1, 10, 9, 0), location_address={"latitude": 0, "longitude": 105.83})

    assert punch.has_address is False
    assert punch.geo_location is None


def test_aware_timestamp_is_stored_as_naive_utc(service):
    punch = service.clock_in("E1", timestamp=datetime(2024, 1, 10, 9, 0, tzinfo=timezone.utc))

    assert punch.timestamp == datetime(2024, 1, 10, 9, 0)
    assert punch.timestamp.tzinfo is None


def test_clock_in_twice_is_rejected(service, punches):
    service.clock_in("E1", timestamp=datetime(2024, 1, 10, 9, 0))

    with pytest.raises(InvalidStateError, match="already clocked in"):
        service.clock_in("E1", timestamp=datetime(2024, 1, 10, 9, 5))
    assert len(punches.rows) == 1


def test_clock_out_without_clock_in_is_rejected(service, punches):
    with pytest.raises(InvalidStateError, match="not clocked in"):
        service.clock_out("E1")
    assert punches.rows == []


def test_clock_in_then_out_alternates(service):
    service.clock_in("E1", timestamp=datetime(2024, 1, 10, 9, 0))
    service.clock_out("E1", timestamp=datetime(2024, 1, 10, 17, 0))
    service.clock_in("E1", timestamp=datetime(2024, 1, 11, 9, 0))

    assert service.get_current_status("E1")["status"] == "IN"


def test_unknown_employee_is_not_found(service):
    with pytest.raises(NotFoundError, match="Employee not found"):
        service.clock_in("E404")


def test_missing_employee_id_is_validation_error(service):
    with pytest.raises(ValidationError, match="Employee ID is required"):
        service.clock_in("  ")


def test_current_status_without_punches(service):
    assert service.get_current_status("E1") == {
        "status": None,
        "lastPunchTime": None,
        "message": "No attendance record found",
    }


def test_current_status_after_clock_out(service):
    service.clock_in("E1", timestamp=datetime(2024, 1, 10, 9, 0))
    service.clock_out("E1", timestamp=datetime(2024, 1, 10, 17, 0))

    status = service.get_current_status("E1")

    assert status["status"] == "OUT"
    assert status["lastPunchTime"] == "2024-01-10T17:00:00.000Z"
    assert status["message"] == "Currently clocked out"


def test_clock_in_without_timestamp_uses_clock(punches):
    employees = InMemoryEmployees({"E1": Employee(employee_id="E1", full_name="An Nguyen")})
    summaries = InMemorySummaries()
    reconciler = DailySummaryReconciler(punches, InMemoryShifts(), InMemoryHolidays(), summaries, employees)
    service = AttendanceService(punches, employees, summaries, reconciler, clock=lambda: datetime(2024, 3, 1, 8, 30))

    punch = service.clock_in("E1")

    assert punch.timestamp == datetime(2024, 3, 1, 8, 30)
    assert [p.punch_id for p in service.get_today_attendance("E1")] == [punch.punch_id]


def test_logs_are_newest_first_and_paginated(service):
    for day in (1, 2, 3):
        service.clock_in("E1", timestamp=datetime(2024, 1, day, 9, 0))
        service.clock_out("E1", timestamp=datetime(2024, 1, day, 17, 0))

    page = service.get_attendance_logs("E1", limit=2, skip=1)

    assert page.total == 6
    assert [p.timestamp for p in page.logs] == [datetime(2024, 1, 3, 9, 0), datetime(2024, 1, 2, 17, 0)]
    assert page.to_dict()["limit"] == 2


def test_logs_date_filter_is_inclusive(service):
    service.clock_in("E1", timestamp=datetime(2024, 1, 1, 9, 0))
    service.clock_out("E1", timestamp=datetime(2024, 1, 1, 17, 0))

    page = service.get_attendance_logs("E1", start_date=datetime(2024, 1, 1, 17, 0), end_date=datetime(2024, 1, 2))

    assert page.total == 1
    assert page.logs[0].event == PunchEvent.OUT


@pytest.mark.parametrize("limit, skip", [(0, 0), (-1, 0), (10, -1)])
def test_logs_reject_bad_pagination(service, limit, skip):
    with pytest.raises(ValidationError):
        service.get_attendance_logs("E1", limit=limit, skip=skip)


def test_monthly_attendance(service):
    service.clock_in("E1", timestamp=datetime(2024, 1, 2, 9, 0))
    service.clock_out("E1", timestamp=datetime(2024, 1, 2, 17, 0))
    service.clock_in("E1", timestamp=datetime(2024, 1, 3, 9, 0))
    service.clock_out("E1", timestamp=datetime(2024, 2, 1, 9, 0))

    result = service.get_monthly_attendance("E1", 2024, 1)

    assert result["year"] == 2024
    assert result["month"] == 1
    assert result["totalDays"] == 2
    assert result["dailyStatus"]["2024-01-02"]["status"] == "present"
    assert result["dailyStatus"]["2024-01-02"]["totalHours"] == "8.00"
    assert result["dailyStatus"]["2024-01-03"]["status"] == "partial"


def test_monthly_attendance_rejects_bad_month(service):
    with pytest.raises(ValidationError, match="Month"):
        service.get_monthly_attendance("E1", 2024, 13)


def test_summary_is_reconciled_on_first_request(service):
    service.clock_in("E1", timestamp=datetime(2024, 1, 10, 9, 0))
    service.clock_out("E1", timestamp=datetime(2024, 1, 10, 17, 0))

    summary = service.get_attendance_summary("E1", date(2024, 1, 10))

    assert summary.attendance_day_status.value == "present"
    assert summary.total_effective_hours == pytest.approx(8.0)


def test_summary_for_unknown_employee_is_not_found(service):
    with pytest.raises(NotFoundError, match="Employee not found"):
        service.get_attendance_summary("E404", date(2024, 1, 10))


def test_clock_in_rejects_non_object_location(service, punches):
    with pytest.raises(ValidationError, match="Location address"):
        service.clock_in("E1", timestamp=datetime(2024, 1, 10, 9, 0), location_address="Hanoi")
    assert punches.rows == []


def test_clock_in_rejects_non_numeric_coordinates(service, punches):
    with pytest.raises(ValidationError, match="Latitude and longitude"):
        service.clock_in("E1", timestamp=datetime(2024, 1, 10, 9, 0), location_address={"latitude": "abc", "longitude": "x"})
    assert punches.rows == []

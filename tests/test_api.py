from __future__ import annotations

from datetime import time

import pytest

from src.workforce_attendance.workforce_attendance.container import wire_container
from src.workforce_attendance.workforce_attendance.employees.model import Employee
from src.workforce_attendance.workforce_attendance.main import create_app
from src.workforce_attendance.workforce_attendance.shifts.model import Shift
from tests.fakes import InMemoryEmployees, InMemoryHolidays, InMemoryPunches, InMemoryShifts, InMemorySummaries

BASE = "/api/v1/attendance"


@pytest.fixture()
def punches():
    return InMemoryPunches()


@pytest.fixture()
def client(monkeypatch, punches):
    monkeypatch.setenv("APP_ENV", "testing")
    shift = Shift(
        shift_id="S1",
        name="General",
        start_time=time(9, 0),
        end_time=time(18, 0),
        break_duration=1.0,
        effective_duration=8.0,
        half_day_duration=4.0,
        present_hours=8.0,
        half_day_hours=4.0,
    )
    container = wire_container(
        employees=InMemoryEmployees({"E1": Employee(employee_id="E1", full_name="An Nguyen")}),
        shifts=InMemoryShifts(shift),
        holidays=InMemoryHolidays(),
        punches=punches,
        summaries=InMemorySummaries(),
    )
    app = create_app(container=container)
    return app.test_client()


def _clock(client, action, at, **extra):
    return client.post(f"{BASE}/{action}", json={"employeeId": "E1", "timestamp": at, **extra}, headers={"X-User-Id": "U9"})


def test_clock_in_returns_201_with_envelope(client):
    res = _clock(client, "clock-in", "2024-01-10T09:10:00Z", ipAddress="10.0.0.5")

    assert res.status_code == 201
    body = res.get_json()
    assert body["success"] is True
    assert body["message"] == "Clocked in successfully"
    assert body["data"]["event"] == "IN"
    assert body["data"]["timestamp"] == "2024-01-10T09:10:00.000Z"
    assert body["data"]["ipAddress"] == "10.0.0.5"
    assert body["data"]["createdBy"] == "U9"


def test_ip_address_falls_back_to_remote_addr(client):
    res = _clock(client, "clock-in", "2024-01-10T09:10:00Z")

    assert res.get_json()["data"]["ipAddress"] == "127.0.0.1"


def test_double_clock_in_is_400(client):
    _clock(client, "clock-in", "2024-01-10T09:10:00Z")
    res = _clock(client, "clock-in", "2024-01-10T09:15:00Z")

    assert res.status_code == 400
    assert res.get_json() == {"success": False, "message": "You are already clocked in. Please clock out first."}


def test_clock_out_without_in_is_400(client):
    res = _clock(client, "clock-out", "2024-01-10T18:00:00Z")

    assert res.status_code == 400
    assert "not clocked in" in res.get_json()["message"]


def test_unknown_employee_is_404(client):
    res = client.post(f"{BASE}/clock-in", json={"employeeId": "E404"})

    assert res.status_code == 404
    assert res.get_json()["message"] == "Employee not found"


def test_missing_employee_id_is_400(client):
    res = client.post(f"{BASE}/clock-in", json={})

    assert res.status_code == 400
    assert res.get_json()["message"] == "Employee ID is required"


def test_bad_timestamp_is_400(client):
    res = _clock(client, "clock-in", "yesterday")

    assert res.status_code == 400


def test_status_endpoint(client):
    _clock(client, "clock-in", "2024-01-10T09:10:00Z")

    data = client.get(f"{BASE}/status/E1").get_json()["data"]

    assert data["status"] == "IN"
    assert data["message"] == "Currently clocked in"


def test_summary_endpoint_reconciles_day(client):
    _clock(client, "clock-in", "2024-01-10T09:10:00Z")
    _clock(client, "clock-out", "2024-01-10T13:00:00Z")
    _clock(client, "clock-in", "2024-01-10T14:00:00Z")
    _clock(client, "clock-out", "2024-01-10T18:00:00Z")

    res = client.get(f"{BASE}/summary/E1?date=2024-01-10")

    assert res.status_code == 200
    data = res.get_json()["data"]
    assert data["attendanceDayStatus"] == "half-day"
    assert data["isArrivedLate"] is True
    assert data["arrivalMessage"] == "0:10:00 late"
    assert data["effectiveHoursInHHMM"] == "7h 50m"
    assert len(data["validInOutPairs"]) == 2
    assert len(data["timeEntries"]) == 4


def test_summary_requires_date(client):
    res = client.get(f"{BASE}/summary/E1")

    assert res.status_code == 400
    assert res.get_json()["message"] == "Date is required"


def test_summary_range_endpoint(client):
    res = client.get(f"{BASE}/summary-range/E1?startDate=2024-01-01&endDate=2024-01-03")

    data = res.get_json()["data"]
    assert res.status_code == 200
    assert [d["attendanceDate"][:10] for d in data] == ["2024-01-03", "2024-01-02", "2024-01-01"]


def test_summary_range_inverted_is_400(client):
    res = client.get(f"{BASE}/summary-range/E1?startDate=2024-01-05&endDate=2024-01-03")

    assert res.status_code == 400


def test_logs_endpoint_paginates(client):
    _clock(client, "clock-in", "2024-01-10T09:00:00Z")
    _clock(client, "clock-out", "2024-01-10T17:00:00Z")

    data = client.get(f"{BASE}/logs/E1?limit=1").get_json()["data"]

    assert data["total"] == 2
    assert data["limit"] == 1
    assert [log["event"] for log in data["logs"]] == ["OUT"]


def test_logs_rejects_non_numeric_limit(client):
    assert client.get(f"{BASE}/logs/E1?limit=abc").status_code == 400


def test_monthly_endpoint(client):
    _clock(client, "clock-in", "2024-01-10T09:00:00Z")

    data = client.get(f"{BASE}/monthly/E1?year=2024&month=1").get_json()["data"]

    assert data["totalDays"] == 1
    assert data["dailyStatus"]["2024-01-10"]["status"] == "partial"


def test_unexpected_error_is_500(client, punches, monkeypatch):
    def boom(*args, **kwargs):
        raise RuntimeError("db down")

    monkeypatch.setattr(punches, "latest_for_employee", boom)

    res = client.get(f"{BASE}/status/E1")

    assert res.status_code == 500
    assert res.get_json() == {"success": False, "message": "An unexpected error occurred"}


def test_summary_for_unknown_employee_is_404(client):
    res = client.get(f"{BASE}/summary/E404?date=2024-01-10")

    assert res.status_code == 404
    assert res.get_json()["message"] == "Employee not found"


def test_summary_range_for_unknown_employee_is_404(client):
    res = client.get(f"{BASE}/summary-range/E404?startDate=2024-01-01&endDate=2024-01-03")

    assert res.status_code == 404


@pytest.mark.parametrize(
    "payload",
    [
        {"employeeId": "E1", "locationAddress": "Hanoi"},
        {"employeeId": "E1", "locationAddress": {"latitude": "abc", "longitude": "x"}},
        {"employeeId": "E1", "timestamp": 1704877200000},
    ],
)
def test_malformed_clock_payload_is_400(client, punches, payload):
    res = client.post(f"{BASE}/clock-in", json=payload)

    assert res.status_code == 400
    assert res.get_json()["success"] is False
    assert punches.rows == []


def test_non_object_body_is_400(client):
    res = client.post(f"{BASE}/clock-in", json=["E1"])

    assert res.status_code == 400

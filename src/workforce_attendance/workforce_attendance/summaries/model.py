from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional

from ..attendance.pairing import InOutInterval
from ..common.datetime_utils import parse_iso_datetime, to_iso
from ..core.enums import AttendanceDayStatus, DayType, PunchEvent, PunchSource


def _dt(value: Any) -> Optional[datetime]:
    if value is None or isinstance(value, datetime):
        return value
    return parse_iso_datetime(str(value))


@dataclass(frozen=True)
class TimeEntry:
    """Bản sao nguyên văn của một punch, lưu kèm summary để audit/hiển thị lại."""

    punch_id: Optional[int]
    event: PunchEvent
    timestamp: datetime
    actual_timestamp: datetime
    adjusted_timestamp: Optional[datetime]
    original_event: PunchEvent
    modified_event: PunchEvent
    source: PunchSource
    premise_name: str
    location_address: Optional[dict[str, Any]]
    has_address: bool
    ip_address: Optional[str]
    is_adjusted: bool
    is_deleted: bool
    is_manually_added: bool
    note: Optional[str]

    def to_dict(self) -> dict:
        return {
            "punchId": self.punch_id,
            "punchStatus": self.event.value,
            "timestamp": to_iso(self.timestamp),
            "actualTimestamp": to_iso(self.actual_timestamp),
            "adjustedTimestamp": to_iso(self.adjusted_timestamp),
            "originalPunchStatus": self.original_event.value,
            "modifiedPunchStatus": self.modified_event.value,
            "attendanceLogSource": self.source.value,
            "premiseName": self.premise_name,
            "locationAddress": self.location_address,
            "hasAddress": self.has_address,
            "ipAddress": self.ip_address,
            "isAdjusted": self.is_adjusted,
            "isDeleted": self.is_deleted,
            "isManuallyAdded": self.is_manually_added,
            "note": self.note,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "TimeEntry":
        return cls(
            punch_id=data.get("punchId"),
            event=PunchEvent(data["punchStatus"]),
            timestamp=_dt(data["timestamp"]),
            actual_timestamp=_dt(data["actualTimestamp"]),
            adjusted_timestamp=_dt(data.get("adjustedTimestamp")),
            original_event=PunchEvent(data["originalPunchStatus"]),
            modified_event=PunchEvent(data["modifiedPunchStatus"]),
            source=PunchSource(data["attendanceLogSource"]),
            premise_name=data["premiseName"],
            location_address=data.get("locationAddress"),
            has_address=bool(data.get("hasAddress")),
            ip_address=data.get("ipAddress"),
            is_adjusted=bool(data.get("isAdjusted")),
            is_deleted=bool(data.get("isDeleted")),
            is_manually_added=bool(data.get("isManuallyAdded")),
            note=data.get("note"),
        )


@dataclass(frozen=True)
class DailyAttendanceSummary:
    """Bản tổng hợp chấm công theo ngày: duy nhất cho mỗi (employee_id, attendance_date).

    `time_entries is None` đánh dấu bản ghi cũ chưa có chi tiết từng punch.
    """

    employee_id: str
    attendance_date: datetime

    shift_id: Optional[str]
    shift_policy_name: Optional[str]
    shift_start_time: datetime
    shift_end_time: datetime
    shift_slot_start_time: datetime
    shift_slot_end_time: datetime
    shift_effective_duration: float
    shift_break_duration: float
    half_day_duration: float

    day_type: DayType
    holiday_name: Optional[str]
    attendance_day_status: AttendanceDayStatus

    first_log_of_the_day: Optional[datetime]
    first_in_of_the_day: Optional[datetime]
    last_log_of_the_day: Optional[datetime]
    last_out_of_the_day: Optional[datetime]

    total_effective_hours: float
    effective_hours_in_hhmm: str
    total_gross_hours: float
    gross_hours_in_hhmm: str
    total_break_duration: float
    break_duration_in_hhmm: str
    valid_in_out_pairs: tuple[InOutInterval, ...]

    is_in_missing: bool
    is_arrived_late: bool
    late_arrival_difference: float
    arrival_message: str
    is_anomaly_detected: bool
    anomalies: tuple[str, ...]
    has_location: bool
    is_remote_clock_in: bool

    system_generated: bool
    total_time_entries: int
    time_entries: Optional[tuple[TimeEntry, ...]]

    created_at: Optional[datetime] = field(default=None, compare=False)
    updated_at: Optional[datetime] = field(default=None, compare=False)

    @property
    def is_enriched(self) -> bool:
        return self.time_entries is not None

    def to_dict(self) -> dict:
        return {
            "employeeId": self.employee_id,
            "attendanceDate": to_iso(self.attendance_date),
            "shiftId": self.shift_id,
            "shiftPolicyName": self.shift_policy_name,
            "shiftStartTime": to_iso(self.shift_start_time),
            "shiftEndTime": to_iso(self.shift_end_time),
            "shiftSlotStartTime": to_iso(self.shift_slot_start_time),
            "shiftSlotEndTime": to_iso(self.shift_slot_end_time),
            "shiftEffectiveDuration": self.shift_effective_duration,
            "shiftBreakDuration": self.shift_break_duration,
            "halfDayDuration": self.half_day_duration,
            "dayType": self.day_type.value,
            "holidayName": self.holiday_name,
            "attendanceDayStatus": self.attendance_day_status.value,
            "firstLogOfTheDay": to_iso(self.first_log_of_the_day),
            "firstInOfTheDay": to_iso(self.first_in_of_the_day),
            "lastLogOfTheDay": to_iso(self.last_log_of_the_day),
            "lastOutOfTheDay": to_iso(self.last_out_of_the_day),
            "totalEffectiveHours": self.total_effective_hours,
            "effectiveHoursInHHMM": self.effective_hours_in_hhmm,
            "totalGrossHours": self.total_gross_hours,
            "grossHoursInHHMM": self.gross_hours_in_hhmm,
            "totalBreakDuration": self.total_break_duration,
            "breakDurationInHHMM": self.break_duration_in_hhmm,
            "validInOutPairs": [p.to_dict() for p in self.valid_in_out_pairs],
            "isInMissing": self.is_in_missing,
            "isArrivedLate": self.is_arrived_late,
            "lateArrivalDifference": self.late_arrival_difference,
            "arrivalMessage": self.arrival_message,
            "isAnomalyDetected": self.is_anomaly_detected,
            "anomalies": list(self.anomalies),
            "hasLocation": self.has_location,
            "isRemoteClockIn": self.is_remote_clock_in,
            "systemGenerated": self.system_generated,
            "totalTimeEntries": self.total_time_entries,
            "timeEntries": [e.to_dict() for e in self.time_entries] if self.time_entries is not None else None,
            "createdAt": to_iso(self.created_at),
            "updatedAt": to_iso(self.updated_at),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "DailyAttendanceSummary":
        entries = data.get("timeEntries")
        return cls(
            employee_id=str(data["employeeId"]),
            attendance_date=_dt(data["attendanceDate"]),
            shift_id=data.get("shiftId"),
            shift_policy_name=data.get("shiftPolicyName"),
            shift_start_time=_dt(data["shiftStartTime"]),
            shift_end_time=_dt(data["shiftEndTime"]),
            shift_slot_start_time=_dt(data["shiftSlotStartTime"]),
            shift_slot_end_time=_dt(data["shiftSlotEndTime"]),
            shift_effective_duration=float(data.get("shiftEffectiveDuration") or 0),
            shift_break_duration=float(data.get("shiftBreakDuration") or 0),
            half_day_duration=float(data.get("halfDayDuration") or 0),
            day_type=DayType(data.get("dayType") or DayType.WORKING.value),
            holiday_name=data.get("holidayName"),
            attendance_day_status=AttendanceDayStatus(data.get("attendanceDayStatus") or AttendanceDayStatus.ABSENT.value),
            first_log_of_the_day=_dt(data.get("firstLogOfTheDay")),
            first_in_of_the_day=_dt(data.get("firstInOfTheDay")),
            last_log_of_the_day=_dt(data.get("lastLogOfTheDay")),
            last_out_of_the_day=_dt(data.get("lastOutOfTheDay")),
            total_effective_hours=float(data.get("totalEffectiveHours") or 0),
            effective_hours_in_hhmm=data.get("effectiveHoursInHHMM") or "0h 0m",
            total_gross_hours=float(data.get("totalGrossHours") or 0),
            gross_hours_in_hhmm=data.get("grossHoursInHHMM") or "0h 0m",
            total_break_duration=float(data.get("totalBreakDuration") or 0),
            break_duration_in_hhmm=data.get("breakDurationInHHMM") or "0:00",
            valid_in_out_pairs=tuple(
                InOutInterval(
                    in_time=_dt(p["inTime"]),
                    out_time=_dt(p["outTime"]),
                    duration_hours=float(p["totalDuration"]),
                )
                for p in data.get("validInOutPairs") or []
            ),
            is_in_missing=bool(data.get("isInMissing")),
            is_arrived_late=bool(data.get("isArrivedLate")),
            late_arrival_difference=float(data.get("lateArrivalDifference") or 0),
            arrival_message=data.get("arrivalMessage") or "",
            is_anomaly_detected=bool(data.get("isAnomalyDetected")),
            anomalies=tuple(data.get("anomalies") or ()),
            has_location=bool(data.get("hasLocation")),
            is_remote_clock_in=bool(data.get("isRemoteClockIn")),
            system_generated=bool(data.get("systemGenerated")),
            total_time_entries=int(data.get("totalTimeEntries") or 0),
            time_entries=tuple(TimeEntry.from_dict(e) for e in entries) if entries is not None else None,
            created_at=_dt(data.get("createdAt")),
            updated_at=_dt(data.get("updatedAt")),
        )

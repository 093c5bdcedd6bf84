from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional

from ..common.datetime_utils import to_iso
from ..core.constants import WEB_PREMISE_NAME
from ..core.enums import PunchEvent, PunchSource


@dataclass(frozen=True)
class GeoLocation:
    latitude: float
    longitude: float


@dataclass(frozen=True)
class PunchAdjustment:
    """Correction written by the regularization process (read-only here)."""

    adjusted_timestamp: Optional[datetime] = None
    modified_event: Optional[PunchEvent] = None
    reason: Optional[str] = None


@dataclass(frozen=True)
class PunchRecord:
    """Thực thể miền (domain): Một lần chấm công thô (IN hoặc OUT).

    Log chỉ ghi thêm (append-only): xoá mềm bằng `is_deleted`, điều chỉnh nằm trong `adjustment`.
    """

    employee_id: str
    event: PunchEvent
    timestamp: datetime
    actual_timestamp: datetime
    source: PunchSource = PunchSource.WEB
    punch_id: Optional[int] = None
    geo_location: Optional[GeoLocation] = None
    location_address: Optional[dict[str, Any]] = None
    has_address: bool = False
    is_remote_clock_in: bool = True
    ip_address: Optional[str] = None
    premise_name: Optional[str] = None
    is_deleted: bool = False
    is_manually_added: bool = False
    adjustment: Optional[PunchAdjustment] = None
    note: Optional[str] = None
    created_by: Optional[str] = None
    created_at: Optional[datetime] = field(default=None, compare=False)

    @property
    def is_adjusted(self) -> bool:
        return self.adjustment is not None

    def to_dict(self) -> dict:
        return {
            "id": self.punch_id,
            "employeeId": self.employee_id,
            "event": self.event.value,
            "punchType": self.source.value,
            "timestamp": to_iso(self.timestamp),
            "actualTimestamp": to_iso(self.actual_timestamp),
            "adjustedTimestamp": to_iso(self.adjustment.adjusted_timestamp) if self.adjustment else None,
            "geoLocation": (
                {"latitude": self.geo_location.latitude, "longitude": self.geo_location.longitude}
                if self.geo_location
                else None
            ),
            "locationAddress": self.location_address,
            "hasAddress": self.has_address,
            "isRemoteClockIn": self.is_remote_clock_in,
            "ipAddress": self.ip_address,
            "premiseName": self.premise_name or WEB_PREMISE_NAME,
            "isAdjusted": self.is_adjusted,
            "isDeleted": self.is_deleted,
            "isManuallyAdded": self.is_manually_added,
            "note": self.note,
            "createdBy": self.created_by,
            "createdAt": to_iso(self.created_at),
        }

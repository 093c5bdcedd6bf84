from __future__ import annotations

from enum import Enum


class PunchEvent(str, Enum):
    """Loại sự kiện chấm công thô."""

    IN = "IN"
    OUT = "OUT"


class PunchSource(str, Enum):
    """Nguồn ghi nhận punch."""

    WEB = "web"
    GPS = "gps"
    BIOMETRIC = "biometric"


class DayType(str, Enum):
    """Phân loại ngày. WEEKEND được khai báo nhưng chưa được tính toán."""

    WORKING = "working"
    HOLIDAY = "holiday"
    WEEKEND = "weekend"


class AttendanceDayStatus(str, Enum):
    """Trạng thái ngày công sau khi đối soát."""

    PRESENT = "present"
    ABSENT = "absent"
    HALF_DAY = "half-day"


class MonthlyDayStatus(str, Enum):
    """Trạng thái ngày trong bảng công tháng (cách tính đơn giản, độc lập)."""

    PRESENT = "present"
    PARTIAL = "partial"
    ABSENT = "absent"

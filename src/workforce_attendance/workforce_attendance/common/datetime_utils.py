from __future__ import annotations

import math
from datetime import date, datetime, time, timedelta, timezone
from typing import Iterator, Optional


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_iso_datetime(value: str) -> datetime:
    """Parse an ISO-8601 timestamp into naive UTC.

    Accepts a trailing 'Z'. Timestamps without offset are taken as already UTC.
    """
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return to_naive_utc(datetime.fromisoformat(text))


def parse_hhmm(value: str) -> time:
    return datetime.strptime(value.strip(), "%H:%M").time()


def to_naive_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def now_utc() -> datetime:
    """Current time as naive UTC.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now(timezone.utc).replace(tzinfo=None)


def start_of_day(day: date) -> datetime:
    return datetime.combine(day, time.min)


def day_window(day: date) -> tuple[datetime, datetime]:
    """Half-open window [00:00, next day 00:00) for one calendar day."""
    start = start_of_day(day)
    return start, start + timedelta(days=1)


def month_window(year: int, month: int) -> tuple[datetime, datetime]:
    start = datetime(year, month, 1)
    if month == 12:
        end = datetime(year + 1, 1, 1)
    else:
        end = datetime(year, month + 1, 1)
    return start, end


def iter_days(start: date, end: date) -> Iterator[date]:
    """Every calendar day in [start, end], inclusive."""
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


def hours_between(start: datetime, end: datetime) -> float:
    return (end - start).total_seconds() / 3600


def _split_hours(hours: float) -> tuple[int, int]:
    h = math.floor(hours)
    # half a minute rounds up, not to even
    m = math.floor((hours - h) * 60 + 0.5)
    if m == 60:
        return h + 1, 0
    return h, m


def format_hours_hm(hours: float) -> str:
    """8.35 -> '8h 21m'."""
    h, m = _split_hours(hours)
    return f"{h}h {m}m"


def format_hours_clock(hours: float) -> str:
    """0.93 -> '0:56' (used for break durations)."""
    h, m = _split_hours(hours)
    return f"{h}:{m:02d}"


def format_late_message(late_minutes: float) -> str:
    """10.28 -> '0:10:16 late'."""
    value = abs(late_minutes)
    h = math.floor(value / 60)
    m = math.floor(value % 60)
    s = math.floor((value % 1) * 60)
    return f"{h}:{m:02d}:{s:02d} late"


def to_iso(value: Optional[datetime]) -> Optional[str]:
    """Serialize naive UTC datetimes as ISO-8601 with millisecond precision."""
    if value is None:
        return None
    return to_naive_utc(value).isoformat(timespec="milliseconds") + "Z"

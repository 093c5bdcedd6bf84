from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from ..common.datetime_utils import format_hours_clock, format_hours_hm, hours_between
from ..core.constants import EXCESSIVE_PUNCH_COUNT, SHORT_PUNCH_HOURS
from .pairing import InOutInterval, PairingResult


@dataclass(frozen=True)
class HoursBreakdown:
    gross_hours: float
    effective_hours: float
    break_hours: float

    @property
    def gross_hhmm(self) -> str:
        return format_hours_hm(self.gross_hours)

    @property
    def effective_hhmm(self) -> str:
        return format_hours_hm(self.effective_hours)

    @property
    def break_hhmm(self) -> str:
        return format_hours_clock(self.break_hours)


def calculate_hours(valid_intervals: Sequence[InOutInterval]) -> HoursBreakdown:
    """Gross = last OUT - first IN; effective = sum of worked spans; break = the rest."""
    worked = [i for i in valid_intervals if i.duration_hours > 0]
    if not worked:
        return HoursBreakdown(gross_hours=0.0, effective_hours=0.0, break_hours=0.0)

    gross = hours_between(worked[0].in_time, worked[-1].out_time)
    effective = sum(i.duration_hours for i in worked)
    return HoursBreakdown(gross_hours=gross, effective_hours=effective, break_hours=max(0.0, gross - effective))


def detect_anomalies(pairing: PairingResult, total_entries: int) -> list[str]:
    anomalies: list[str] = []

    if any(i.duration_hours == 0 for i in pairing.all_intervals):
        anomalies.append("Missing clock-out detected")

    for index, interval in enumerate(pairing.valid_intervals, start=1):
        if 0 < interval.duration_hours < SHORT_PUNCH_HOURS:
            anomalies.append(f"Short punch detected at pair {index} ({interval.duration_hours:.2f}h)")

    if total_entries > EXCESSIVE_PUNCH_COUNT:
        anomalies.append("Excessive number of punches")

    if total_entries > 0 and not any(i.duration_hours > 0 for i in pairing.valid_intervals):
        anomalies.append("No valid in-out pairs")

    return anomalies

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Optional

from ..common.datetime_utils import hours_between, to_iso
from ..core.enums import MonthlyDayStatus, PunchEvent
from ..punches.model import PunchRecord


@dataclass(frozen=True)
class MonthlyDay:
    status: MonthlyDayStatus
    total_hours: float
    punch_count: int
    first_in: Optional[datetime]
    last_out: Optional[datetime]

    def to_dict(self) -> dict:
        return {
            "status": self.status.value,
            "totalHours": f"{self.total_hours:.2f}",
            "punchCount": self.punch_count,
            "firstIn": to_iso(self.first_in),
            "lastOut": to_iso(self.last_out),
        }


class SimpleMonthlyClassifier:
    """Monthly calendar view: present / partial / absent from IN and OUT presence only.

    Does not pair punches and does not look at shift thresholds.
    """

    def classify_day(self, punches: Iterable[PunchRecord]) -> MonthlyDay:
        day_punches = sorted(punches, key=lambda p: p.timestamp)
        ins = [p for p in day_punches if p.event == PunchEvent.IN]
        outs = [p for p in day_punches if p.event == PunchEvent.OUT]

        if ins and outs:
            status = MonthlyDayStatus.PRESENT
        elif ins or outs:
            status = MonthlyDayStatus.PARTIAL
        else:
            status = MonthlyDayStatus.ABSENT

        first_in = ins[0].timestamp if ins else None
        last_out = outs[-1].timestamp if outs else None
        total = hours_between(first_in, last_out) if first_in and last_out else 0.0

        return MonthlyDay(
            status=status,
            total_hours=total,
            punch_count=len(day_punches),
            first_in=first_in,
            last_out=last_out,
        )

    def classify_month(self, punches: Iterable[PunchRecord]) -> dict[str, MonthlyDay]:
        by_day: dict[str, list[PunchRecord]] = defaultdict(list)
        for punch in punches:
            by_day[punch.timestamp.strftime("%Y-%m-%d")].append(punch)
        return {key: self.classify_day(by_day[key]) for key in sorted(by_day)}

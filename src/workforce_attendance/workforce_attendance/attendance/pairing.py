"""Pair raw IN/OUT punches into worked intervals.

Orphan punches (an IN followed by another IN, an OUT with no open IN, an IN
still open at the end) are emitted as zero-duration markers so anomaly
detection can see them. Hour totals only ever use `valid_intervals`.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Optional

from ..common.datetime_utils import hours_between, to_iso
from ..core.enums import PunchEvent
from ..punches.model import PunchRecord


@dataclass(frozen=True)
class InOutInterval:
    in_time: datetime
    out_time: datetime
    duration_hours: float

    def to_dict(self) -> dict:
        return {
            "inTime": to_iso(self.in_time),
            "outTime": to_iso(self.out_time),
            "totalDuration": self.duration_hours,
        }


@dataclass(frozen=True)
class PairingResult:
    all_intervals: tuple[InOutInterval, ...]
    valid_intervals: tuple[InOutInterval, ...]


def _marker(at: datetime) -> InOutInterval:
    return InOutInterval(in_time=at, out_time=at, duration_hours=0.0)


def pair_punches(punches: Iterable[PunchRecord]) -> PairingResult:
    ordered = sorted((p for p in punches if not p.is_deleted), key=lambda p: p.timestamp)

    intervals: list[InOutInterval] = []
    open_in: Optional[PunchRecord] = None

    for punch in ordered:
        if punch.event == PunchEvent.IN:
            if open_in is not None:
                intervals.append(_marker(open_in.timestamp))
            open_in = punch
        elif open_in is not None:
            intervals.append(
                InOutInterval(
                    in_time=open_in.timestamp,
                    out_time=punch.timestamp,
                    duration_hours=hours_between(open_in.timestamp, punch.timestamp),
                )
            )
            open_in = None
        else:
            intervals.append(_marker(punch.timestamp))

    if open_in is not None:
        intervals.append(_marker(open_in.timestamp))

    valid = tuple(i for i in intervals if i.in_time != i.out_time and i.duration_hours >= 0)
    return PairingResult(all_intervals=tuple(intervals), valid_intervals=valid)

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from ...core.enums import AttendanceDayStatus


@dataclass(frozen=True)
class StatusDecision:
    status: AttendanceDayStatus


class DayStatusStrategy(ABC):
    """Strategy Pattern: encapsulate how effective hours become a day status."""

    @abstractmethod
    def decide(self, *, effective_hours: float) -> StatusDecision:
        raise NotImplementedError

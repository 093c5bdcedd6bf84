from __future__ import annotations

from ...core.constants import DEFAULT_HALF_DAY_HOURS, DEFAULT_PRESENT_HOURS
from .threshold_strategy import ThresholdStrategy


class DefaultThresholdStrategy(ThresholdStrategy):
    """No shift configured: fixed 8h / 4h thresholds."""

    def __init__(self):
        super().__init__(present_hours=DEFAULT_PRESENT_HOURS, half_day_hours=DEFAULT_HALF_DAY_HOURS)

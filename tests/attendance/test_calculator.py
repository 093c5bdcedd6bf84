from datetime import datetime

import pytest

from src.workforce_attendance.workforce_attendance.attendance.calculator import calculate_hours, detect_anomalies
from src.workforce_attendance.workforce_attendance.attendance.pairing import pair_punches
from src.workforce_attendance.workforce_attendance.core.enums import PunchEvent
from src.workforce_attendance.workforce_attendance.punches.model import PunchRecord

IN, OUT = PunchEvent.IN, PunchEvent.OUT


def _p(event, hh, mm, ss=0):
    at = datetime(2024, 1, 10, hh, mm, ss)
    return PunchRecord(employee_id="E1", event=event, timestamp=at, actual_timestamp=at)


def test_hours_identity_gross_equals_effective_plus_break():
    pairing = pair_punches([_p(IN, 9, 10), _p(OUT, 13, 0), _p(IN, 14, 0), _p(OUT, 18, 0)])
    hours = calculate_hours(pairing.valid_intervals)

    assert hours.gross_hours == pytest.approx(8 + 50 / 60)
    assert hours.effective_hours == pytest.approx(7 + 50 / 60)
    assert hours.break_hours == pytest.approx(1.0)
    assert hours.gross_hours == pytest.approx(hours.effective_hours + hours.break_hours)
    assert hours.gross_hhmm == "8h 50m"
    assert hours.effective_hhmm == "7h 50m"
    assert hours.break_hhmm == "1:00"


def test_no_intervals_gives_zero_hours():
    hours = calculate_hours(())

    assert (hours.gross_hours, hours.effective_hours, hours.break_hours) == (0.0, 0.0, 0.0)
    assert hours.effective_hhmm == "0h 0m"
    assert hours.break_hhmm == "0:00"


def test_clean_day_has_no_anomalies():
    punches = [_p(IN, 9, 0), _p(OUT, 18, 0)]

    assert detect_anomalies(pair_punches(punches), len(punches)) == []


def test_orphan_in_flags_missing_clock_out_and_no_valid_pairs():
    punches = [_p(IN, 9, 0)]

    anomalies = detect_anomalies(pair_punches(punches), len(punches))

    assert anomalies == ["Missing clock-out detected", "No valid in-out pairs"]


def test_double_in_flags_missing_clock_out_even_with_a_valid_pair():
    punches = [_p(IN, 9, 0), _p(IN, 9, 5), _p(OUT, 17, 0)]

    anomalies = detect_anomalies(pair_punches(punches), len(punches))

    assert anomalies == ["Missing clock-out detected"]


def test_short_punch_is_reported_with_pair_index():
    punches = [_p(IN, 9, 0), _p(OUT, 12, 0), _p(IN, 13, 0), _p(OUT, 13, 3)]

    anomalies = detect_anomalies(pair_punches(punches), len(punches))

    assert anomalies == ["Short punch detected at pair 2 (0.05h)"]


def test_five_minute_pair_is_not_short():
    punches = [_p(IN, 9, 0), _p(OUT, 9, 5)]

    assert detect_anomalies(pair_punches(punches), len(punches)) == []


def test_more_than_twenty_punches_is_excessive():
    punches = []
    for i in range(11):
        punches.append(_p(IN, 8 + i, 0))
        punches.append(_p(OUT, 8 + i, 30))

    anomalies = detect_anomalies(pair_punches(punches), len(punches))

    assert "Excessive number of punches" in anomalies
    assert detect_anomalies(pair_punches(punches[:20]), 20) == []


def test_no_punches_is_not_an_anomaly():
    assert detect_anomalies(pair_punches([]), 0) == []

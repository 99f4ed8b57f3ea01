"""
Unit tests for scoring - no database needed
"""
from datetime import date, timedelta
from types import SimpleNamespace

from app.models.attendance import AttendanceStatus
from app.services.scoring_service import (
    compute_attendance_rate,
    compute_score,
    count_working_days,
    infer_absent_days,
    month_bounds,
    rank_employees,
    round_half_up,
    tally_records,
    top_performers,
    year_bounds,
)

JUNE_START, JUNE_END = date(2026, 6, 1), date(2026, 6, 30)


def record(day: date, status: AttendanceStatus, hours=8.0):
    return SimpleNamespace(date=day, status=status.value, total_hours=hours)


def june_working_days():
    day = JUNE_START
    while day <= JUNE_END:
        if day.weekday() < 5:
            yield day
        day += timedelta(days=1)


def test_working_days_exclude_weekends():
    assert count_working_days(JUNE_START, JUNE_END) == 22
    # Saturday and Sunday only
    assert count_working_days(date(2026, 6, 6), date(2026, 6, 7)) == 0
    assert count_working_days(date(2026, 6, 5), date(2026, 6, 1)) == 0
    assert count_working_days(date(2026, 6, 1), date(2026, 6, 1)) == 1


def test_score_for_month_with_two_absences():
    """22 working days: 18 present, 2 late, 2 absent"""
    assert compute_score(present=18, late=2, half_day=0, working_days=22) == 88.18
    assert compute_attendance_rate(present=18, late=2, half_day=0, working_days=22) == 90.91


def test_half_day_weight_and_half_up_rounding():
    # 0.5 / 16 * 100 = 3.125 -> 3.13 (not banker's 3.12)
    assert compute_score(present=0, late=0, half_day=1, working_days=16) == 3.13
    assert round_half_up(2.675) == 2.68


def test_zero_working_days_scores_zero():
    assert compute_score(present=3, late=1, half_day=0, working_days=0) == 0.0
    assert compute_attendance_rate(present=3, late=1, half_day=0, working_days=0) == 0.0


def test_tally_records_for_month():
    days = list(june_working_days())
    records = [record(d, AttendanceStatus.PRESENT) for d in days[:18]]
    records += [record(d, AttendanceStatus.LATE, 7.0) for d in days[18:20]]

    tally = tally_records(records, JUNE_START, JUNE_END, today=date(2026, 7, 1))

    assert tally.present == 18
    assert tally.late == 2
    assert tally.absent == 2
    assert tally.working_days == 22
    assert tally.total_hours == 158.0
    assert tally.score == 88.18
    assert tally.attendance_rate == 90.91


def test_weekend_and_out_of_range_records_do_not_inflate_score():
    records = [
        record(date(2026, 6, 6), AttendanceStatus.PRESENT),   # Saturday
        record(date(2026, 5, 29), AttendanceStatus.PRESENT),  # previous month
        record(date(2026, 6, 1), AttendanceStatus.PRESENT),
    ]

    tally = tally_records(records, date(2026, 6, 1), date(2026, 6, 1))

    assert tally.present == 1
    assert tally.score == 100.0
    assert tally.total_records == 3


def test_absent_records_and_missing_days_are_both_absences():
    records = [record(date(2026, 6, 1), AttendanceStatus.ABSENT, None)]

    tally = tally_records(records, date(2026, 6, 1), date(2026, 6, 5), today=date(2026, 6, 3))

    # Mon-Wed elapsed, none attended; Thu-Fri are still in the future
    assert tally.absent == 3
    assert tally.score == 0.0


def test_infer_absent_days_stops_at_today():
    attended = {date(2026, 6, 1)}
    assert infer_absent_days(attended, JUNE_START, JUNE_END, today=date(2026, 6, 2)) == 1
    # Range entirely in the future
    assert infer_absent_days(set(), JUNE_START, JUNE_END, today=date(2026, 5, 31)) == 0


def test_ranking_is_stable_and_descending():
    stats = [
        {"name": "a", "score": 80.0},
        {"name": "b", "score": 95.0},
        {"name": "c", "score": 80.0},
        {"name": "d", "score": 100.0},
        {"name": "e", "score": 10.0},
        {"name": "f", "score": 80.0},
    ]

    ranked = rank_employees(stats)

    assert [s["name"] for s in ranked] == ["d", "b", "a", "c", "f", "e"]
    assert [s["name"] for s in top_performers(ranked)] == ["d", "b", "a", "c", "f"]


def test_period_bounds():
    assert month_bounds(2024, 2) == (date(2024, 2, 1), date(2024, 2, 29))
    assert month_bounds(2026, 12) == (date(2026, 12, 1), date(2026, 12, 31))
    assert year_bounds(2026) == (date(2026, 1, 1), date(2026, 12, 31))

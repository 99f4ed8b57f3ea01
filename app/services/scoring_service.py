"""
Attendance scoring - pure functions over date ranges and attendance records

Weights: present = 1.0, late = 0.7, half-day = 0.5, absent = 0.
The denominator is the number of working days (Monday-Friday) in the range.
"""
import calendar
from dataclasses import dataclass, field
from datetime import date, timedelta
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, List, Optional, Sequence, Set, Tuple

from app.models.attendance import AttendanceStatus

PRESENT_WEIGHT = Decimal("1")
LATE_WEIGHT = Decimal("0.7")
HALF_DAY_WEIGHT = Decimal("0.5")

TOP_PERFORMER_COUNT = 5

# Statuses that mean the employee showed up
ATTENDED_STATUSES = (AttendanceStatus.PRESENT, AttendanceStatus.LATE, AttendanceStatus.HALF_DAY)


def round_half_up(value, places: int = 2) -> float:
    """Round like a spreadsheet would (0.125 -> 0.13), not banker's rounding."""
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def is_working_day(day: date) -> bool:
    return day.weekday() < 5


def iter_days(start: date, end: date) -> Iterable[date]:
    day = start
    while day <= end:
        yield day
        day += timedelta(days=1)


def count_working_days(start: date, end: date) -> int:
    """Number of Monday-Friday days in the inclusive range (0 if start > end)."""
    return sum(1 for day in iter_days(start, end) if is_working_day(day))


def month_bounds(year: int, month: int) -> Tuple[date, date]:
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


def year_bounds(year: int) -> Tuple[date, date]:
    return date(year, 1, 1), date(year, 12, 31)


def compute_score(present: int, late: int, half_day: int, working_days: int) -> float:
    """Weighted attendance percentage; 0 when the range has no working days."""
    if working_days <= 0:
        return 0.0
    weighted = present * PRESENT_WEIGHT + late * LATE_WEIGHT + half_day * HALF_DAY_WEIGHT
    return round_half_up(weighted / working_days * 100)


def compute_attendance_rate(present: int, late: int, half_day: int, working_days: int) -> float:
    """Share of working days attended, as a percentage; 0 when there are none."""
    if working_days <= 0:
        return 0.0
    return round_half_up(Decimal(present + late + half_day) / working_days * 100)


@dataclass
class AttendanceTally:
    """Status counts for one employee (or a team) over a date range."""
    present: int = 0
    late: int = 0
    half_day: int = 0
    absent: int = 0
    total_hours: float = 0.0
    total_records: int = 0
    working_days: int = 0
    score: float = 0.0
    attendance_rate: float = 0.0
    attended_dates: Set[date] = field(default_factory=set, repr=False)


def infer_absent_days(
    attended_dates: Set[date],
    start: date,
    end: date,
    today: date,
) -> int:
    """
    Working days from ``start`` up to ``min(end, today)`` without an attended record.

    Absence is never stored; it is derived here whenever it is displayed.
    """
    last = min(end, today)
    return sum(
        1 for day in iter_days(start, last)
        if is_working_day(day) and day not in attended_dates
    )


def tally_records(
    records: Sequence,
    start: date,
    end: date,
    today: Optional[date] = None,
) -> AttendanceTally:
    """
    Summarize attendance records of a single employee over ``[start, end]``.

    Records outside the range or on weekends are ignored for score and rate,
    which keeps both within [0, 100]. Hours and record count include every
    record passed in.
    """
    tally = AttendanceTally(working_days=count_working_days(start, end))

    for record in records:
        tally.total_records += 1
        tally.total_hours += record.total_hours or 0

        if not (start <= record.date <= end) or not is_working_day(record.date):
            continue
        if record.status == AttendanceStatus.PRESENT:
            tally.present += 1
        elif record.status == AttendanceStatus.LATE:
            tally.late += 1
        elif record.status == AttendanceStatus.HALF_DAY:
            tally.half_day += 1
        else:
            continue
        tally.attended_dates.add(record.date)

    tally.total_hours = round_half_up(tally.total_hours)
    if today is not None:
        tally.absent = infer_absent_days(tally.attended_dates, start, end, today)
    tally.score = compute_score(tally.present, tally.late, tally.half_day, tally.working_days)
    tally.attendance_rate = compute_attendance_rate(
        tally.present, tally.late, tally.half_day, tally.working_days
    )
    return tally


def rank_employees(stats: List[dict]) -> List[dict]:
    """Sort by score descending; ties keep their input order (sorted() is stable)."""
    return sorted(stats, key=lambda s: s["score"], reverse=True)


def top_performers(ranked: List[dict], limit: int = TOP_PERFORMER_COUNT) -> List[dict]:
    return ranked[:limit]

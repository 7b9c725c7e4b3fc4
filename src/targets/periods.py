"""Working-day calendar and period filters for supplier targets.

Working days run Monday to Saturday. The calendar is computed arithmetically
on the proleptic Gregorian calendar so any integer year is accepted, not only
the range supported by ``datetime.date``.
"""
from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import NamedTuple

from targets.exceptions import TargetValidationError

WEEKDAY_NAMES = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")
SUNDAY = 0

WEEK_SLOTS = ("week1", "week2", "week3", "week4")
# First day of each week slot; week4 absorbs the days after the 28th.
_WEEK_SLOT_STARTS = (1, 8, 15, 22)

# Sakamoto's month offsets.
_MONTH_OFFSETS = (0, 3, 2, 5, 0, 3, 5, 1, 4, 6, 2, 4)

# Year bounds converted to UTC must stay inside datetime's range.
LOOKUP_MIN_YEAR = date.min.year + 1
LOOKUP_MAX_YEAR = date.max.year - 1


class WorkingDay(NamedTuple):
    day_of_month: int
    weekday_name: str


def _check_year(year) -> int:
    if isinstance(year, bool) or not isinstance(year, int):
        raise TargetValidationError("Year must be an integer.", field="year")
    return year


def _check_lookup_year(year) -> int:
    """Years usable in a database date lookup; the arithmetic calendar has no such limit."""
    _check_year(year)
    if not LOOKUP_MIN_YEAR <= year <= LOOKUP_MAX_YEAR:
        raise TargetValidationError(
            f"Year must be between {LOOKUP_MIN_YEAR} and {LOOKUP_MAX_YEAR}.", field="year"
        )
    return year


def _check_month(month) -> int:
    if isinstance(month, bool) or not isinstance(month, int) or not 1 <= month <= 12:
        raise TargetValidationError("Month must be an integer between 1 and 12.", field="month")
    return month


def days_in_month(year: int, month: int) -> int:
    _check_year(year)
    _check_month(month)
    if month == 2 and calendar.isleap(year):
        return 29
    return calendar.mdays[month]


def weekday_index(year: int, month: int, day: int) -> int:
    """Day of the week, 0 = Sunday ... 6 = Saturday."""
    if month < 3:
        year -= 1
    return (year + year // 4 - year // 100 + year // 400 + _MONTH_OFFSETS[month - 1] + day) % 7


def working_days(year: int, month: int) -> list[WorkingDay]:
    """Every day of ``month`` (1-indexed) in ``year`` except Sundays, in date order."""
    days = []
    for day in range(1, days_in_month(year, month) + 1):
        weekday = weekday_index(year, month, day)
        if weekday != SUNDAY:
            days.append(WorkingDay(day, WEEKDAY_NAMES[weekday]))
    return days


def daily_target(total: int, year: int, month: int) -> int:
    """Indicative packs per working day, rounded half-up. Advisory only."""
    days = len(working_days(year, month))
    if not days:
        return 0
    return int((Decimal(total) / days).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def week_slot_for_day(day: int) -> str:
    for slot, start in zip(reversed(WEEK_SLOTS), reversed(_WEEK_SLOT_STARTS)):
        if day >= start:
            return slot
    raise TargetValidationError(f"Invalid day of month: {day}.", field="day")


def week_slot_ranges(year: int, month: int) -> dict[str, tuple[int, int]]:
    """First and last day of month covered by each week slot."""
    last_day = days_in_month(year, month)
    ends = [start - 1 for start in _WEEK_SLOT_STARTS[1:]] + [last_day]
    return {
        slot: (start, end)
        for slot, start, end in zip(WEEK_SLOTS, _WEEK_SLOT_STARTS, ends)
    }


@dataclass(frozen=True)
class PeriodFilter:
    """All-time, one calendar month, or a date range with optional open bounds."""

    kind: str
    year: int | None = None
    month: int | None = None
    start: date | None = None
    end: date | None = None

    ALL_TIME = "all_time"
    MONTH = "month"
    RANGE = "range"

    @classmethod
    def all_time(cls) -> "PeriodFilter":
        return cls(kind=cls.ALL_TIME)

    @classmethod
    def for_month(cls, year: int, month: int) -> "PeriodFilter":
        return cls(kind=cls.MONTH, year=_check_lookup_year(year), month=_check_month(month))

    @classmethod
    def between(cls, start: date | None = None, end: date | None = None) -> "PeriodFilter":
        if start and end and start > end:
            raise TargetValidationError("Start date must not be after end date.", field="start_date")
        return cls(kind=cls.RANGE, start=start, end=end)

    @classmethod
    def for_year(cls, year: int) -> "PeriodFilter":
        _check_lookup_year(year)
        return cls.between(date(year, 1, 1), date(year, 12, 31))

    def lookups(self, field: str) -> dict:
        """ORM filter kwargs restricting the datetime ``field`` to this period."""
        if self.kind == self.MONTH:
            return {f"{field}__year": self.year, f"{field}__month": self.month}
        lookups = {}
        if self.kind == self.RANGE:
            if self.start is not None:
                lookups[f"{field}__date__gte"] = self.start
            if self.end is not None:
                lookups[f"{field}__date__lte"] = self.end
        return lookups

    def __str__(self) -> str:
        if self.kind == self.MONTH:
            return f"{self.year}-{self.month:02d}"
        if self.kind == self.RANGE:
            start = self.start.isoformat() if self.start else ""
            end = self.end.isoformat() if self.end else ""
            return f"{start}..{end}"
        return "all-time"

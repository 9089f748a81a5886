"""
Calendar & Period Utilities
Calendar-day identity, day arithmetic and period windows

Calendar days are always UTC calendar days: naive datetimes are read as UTC
and aware datetimes are converted to UTC before the time is dropped.
"""

import calendar
import logging
import math
import numbers
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from enum import Enum
from typing import Iterable, List, Optional, Set, Union

import numpy as np
import pandas as pd

from .models import Timestamp, WorkoutRecord

logger = logging.getLogger(__name__)

STREAK_SCAN_LIMIT = 365


class Period(str, Enum):
    """Reporting periods understood by the engine"""
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"
    LAST_MONTH = "last_month"
    LAST_YEAR = "last_year"
    THREE_MONTHS = "3months"
    FOUR_MONTHS = "4months"
    ALL = "all"


ROLLING_MONTHS = {
    Period.THREE_MONTHS: 3,
    Period.FOUR_MONTHS: 4,
}


class UnknownPeriodError(ValueError):
    """Raised when a caller passes a period the engine does not know"""


def to_period(value: Union[Period, str]) -> Period:
    if isinstance(value, Period):
        return value
    try:
        return Period(value)
    except ValueError:
        raise UnknownPeriodError(f"Unknown period: {value!r}") from None


@dataclass(frozen=True)
class ParsedDate:
    """
    Result of parsing a stored timestamp.

    kind is 'ok' when the input was understood, 'fallback' when it was not
    and value holds the current time instead.
    """
    kind: str
    value: datetime

    @property
    def is_fallback(self) -> bool:
        return self.kind == 'fallback'


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def utc_today() -> date:
    return utc_now().date()


def _fallback(value) -> ParsedDate:
    logger.warning("Unparseable timestamp %r, using current time", value)
    return ParsedDate('fallback', utc_now())


def parse_timestamp(value: Timestamp) -> ParsedDate:
    """Parse a stored timestamp into an aware UTC datetime"""
    # NaT is a datetime instance, so it has to be caught first
    if value is None or value is pd.NaT:
        return _fallback(value)
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return ParsedDate('ok', value.replace(tzinfo=timezone.utc))
        return ParsedDate('ok', value.astimezone(timezone.utc))
    if isinstance(value, date):
        return ParsedDate('ok', datetime(value.year, value.month, value.day, tzinfo=timezone.utc))

    parsed = pd.NaT
    if isinstance(value, str) and value.strip():
        parsed = pd.to_datetime(value.strip(), utc=True, errors='coerce')
    elif isinstance(value, numbers.Real) and not isinstance(value, (bool, np.bool_)):
        # Numeric timestamps are epoch milliseconds
        parsed = pd.to_datetime(value, unit='ms', utc=True, errors='coerce')

    if pd.isna(parsed):
        return _fallback(value)
    return ParsedDate('ok', parsed.to_pydatetime())


def calendar_day(value: Timestamp) -> date:
    """The UTC calendar day a timestamp falls on"""
    return parse_timestamp(value).value.date()


def trained_days(workouts: Iterable[WorkoutRecord]) -> Set[date]:
    return {calendar_day(w.timestamp) for w in workouts}


def days_between(a: Union[date, datetime], b: Union[date, datetime]) -> int:
    """Whole days between two points in time, rounded up"""
    return math.ceil(abs((a - b).total_seconds()) / 86400)


def round_half_up(value: float, digits: int = 0):
    """Round with .5 always going up, the way the logging UI has always displayed values"""
    factor = 10 ** digits
    rounded = math.floor(value * factor + 0.5) / factor
    return int(rounded) if digits == 0 else rounded


def subtract_months(day: date, months: int) -> date:
    """Move back whole calendar months, clamping to the end of shorter months"""
    month_index = day.year * 12 + (day.month - 1) - months
    year, month = divmod(month_index, 12)
    month += 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(day.day, last_day))


@dataclass(frozen=True)
class PeriodWindow:
    """An inclusive range of calendar days; None means unbounded"""
    start: Optional[date]
    end: Optional[date]

    def contains(self, day: date) -> bool:
        if self.start is not None and day < self.start:
            return False
        if self.end is not None and day > self.end:
            return False
        return True

    def up_to(self, today: date) -> 'PeriodWindow':
        """The same window with its end truncated to today"""
        end = today if self.end is None else min(self.end, today)
        return PeriodWindow(self.start, end)

    def days(self) -> List[date]:
        if self.start is None or self.end is None or self.end < self.start:
            return []
        return [self.start + timedelta(days=i) for i in range((self.end - self.start).days + 1)]


def period_window(period: Union[Period, str], reference_date: date) -> PeriodWindow:
    """
    Window boundaries for a period around a reference date.

    weekly is Monday-Sunday, monthly/yearly are the calendar month/year,
    last_month/last_year the previous ones, and 3months/4months run from
    the reference date minus N months up to the reference date.
    """
    period = to_period(period)
    ref = reference_date

    if period == Period.WEEKLY:
        monday = ref - timedelta(days=ref.weekday())
        return PeriodWindow(monday, monday + timedelta(days=6))
    if period == Period.MONTHLY:
        return PeriodWindow(ref.replace(day=1), ref.replace(day=calendar.monthrange(ref.year, ref.month)[1]))
    if period == Period.YEARLY:
        return PeriodWindow(date(ref.year, 1, 1), date(ref.year, 12, 31))
    if period == Period.LAST_MONTH:
        last_month_end = ref.replace(day=1) - timedelta(days=1)
        return PeriodWindow(last_month_end.replace(day=1), last_month_end)
    if period == Period.LAST_YEAR:
        return PeriodWindow(date(ref.year - 1, 1, 1), date(ref.year - 1, 12, 31))
    if period in ROLLING_MONTHS:
        return PeriodWindow(subtract_months(ref, ROLLING_MONTHS[period]), ref)
    return PeriodWindow(None, None)


def _percentage_for_window(days: Set[date], window: PeriodWindow) -> Optional[dict]:
    covered = window.days()
    if not covered:
        return None
    workout_days = sum(1 for day in covered if day in days)
    return {
        'percentage': round_half_up(100 * workout_days / len(covered)),
        'workout_days': workout_days,
        'total_days': len(covered),
    }


def training_percentage(workouts: Iterable[WorkoutRecord],
                        period: Union[Period, str],
                        today: Optional[date] = None) -> Optional[int]:
    """
    Percentage of elapsed days in the period that had a workout.

    Returns None when no day of the window has elapsed yet (for example a
    window that starts after today), so callers never divide by zero.
    """
    today = today or utc_today()
    days = trained_days(workouts)
    window = period_window(period, today)
    if window.start is None:
        if not days:
            return None
        window = PeriodWindow(min(days), window.end)
    result = _percentage_for_window(days, window.up_to(today))
    return result['percentage'] if result else None


def yearly_training_percentages(workouts: Iterable[WorkoutRecord],
                                today: Optional[date] = None) -> List[dict]:
    """Training percentage of every year in the log, newest first; the current year runs to today"""
    today = today or utc_today()
    days = trained_days(workouts)
    results = []
    for year in sorted({d.year for d in days}, reverse=True):
        window = PeriodWindow(date(year, 1, 1), date(year, 12, 31)).up_to(today)
        stats = _percentage_for_window(days, window)
        if stats is None:
            continue
        results.append({'year': year, 'is_current': year == today.year, **stats})
    return results


def monthly_training_percentages(workouts: Iterable[WorkoutRecord],
                                 year: int,
                                 today: Optional[date] = None) -> List[dict]:
    """Training percentage per month of a year, stopping at today for the current year"""
    today = today or utc_today()
    days = trained_days(workouts)
    results = []
    for month in range(1, 13):
        window = period_window(Period.MONTHLY, date(year, month, 1)).up_to(today)
        stats = _percentage_for_window(days, window)
        if stats is None:
            break
        results.append({'month': calendar.month_abbr[month], **stats})
    return results

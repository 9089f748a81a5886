"""
Trend Detection & Year Comparison
Builds on the consistency classifier to say whether training got more regular
"""

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Iterable, List, Optional, Union

from .consistency import (
    ConsistencyPattern,
    ConsistencySummary,
    RestInterval,
    WorkoutPredicate,
    analyze_consistency,
    median,
)
from .models import WorkoutRecord
from .periods import Period, period_window, round_half_up, to_period, utc_today

MIN_TREND_INTERVALS = 4
MIN_HALF_INTERVALS = 2
# Percentage change beyond which the trend counts as a real change
TREND_THRESHOLD = 10


class TrendDirection(str, Enum):
    IMPROVING = "improving"
    DECLINING = "declining"
    STABLE = "stable"
    INSUFFICIENT = "insufficient"


@dataclass(frozen=True)
class TrendResult:
    direction: TrendDirection
    percentage_change: int
    recent_median: float
    past_median: float


@dataclass(frozen=True)
class ConsistencyReport:
    """Consistency summary plus its trend; the trend only exists for the 4-month window"""
    summary: ConsistencySummary
    trend: Optional[TrendResult] = None


@dataclass(frozen=True)
class YearSummary:
    year: int
    workout_count: int
    median_gap: float
    pattern: ConsistencyPattern


@dataclass(frozen=True)
class YearComparison:
    current_year: YearSummary
    last_year: YearSummary
    workout_change: int
    rest_days_change: float
    is_improved: bool


def detect_trend(intervals: List[RestInterval]) -> TrendResult:
    """
    Compare the median gap of the older half of the intervals with the newer half.

    A positive percentage change means the gaps shrank, i.e. training became
    more frequent.
    """
    ordered = sorted(intervals, key=lambda i: i.reference_date)
    midpoint = len(ordered) // 2
    past = [i.gap_days for i in ordered[:midpoint]]
    recent = [i.gap_days for i in ordered[midpoint:]]
    past_median = median(past)
    recent_median = median(recent)

    if (len(ordered) < MIN_TREND_INTERVALS
            or len(past) < MIN_HALF_INTERVALS
            or len(recent) < MIN_HALF_INTERVALS):
        return TrendResult(TrendDirection.INSUFFICIENT, 0, recent_median, past_median)

    percentage_change = 0
    if past_median > 0:
        percentage_change = round_half_up(100 * (past_median - recent_median) / past_median)

    if percentage_change > TREND_THRESHOLD:
        direction = TrendDirection.IMPROVING
    elif percentage_change < -TREND_THRESHOLD:
        direction = TrendDirection.DECLINING
    else:
        direction = TrendDirection.STABLE

    return TrendResult(direction, percentage_change, recent_median, past_median)


def analyze_trend(workouts: Iterable[WorkoutRecord],
                  predicate: WorkoutPredicate,
                  today: Optional[date] = None) -> TrendResult:
    """Trend over the 4-month rolling window, the only window trends are defined for"""
    summary = analyze_consistency(workouts, predicate, Period.FOUR_MONTHS, today)
    return detect_trend(summary.intervals)


def compare_years(workouts: Iterable[WorkoutRecord],
                  predicate: WorkoutPredicate,
                  today: Optional[date] = None) -> YearComparison:
    """
    This calendar year (up to today) against the whole previous year.

    Fewer rest days is an improvement, so rest_days_change is last year's
    median minus this year's.
    """
    today = today or utc_today()
    workouts = list(workouts)
    current = analyze_consistency(workouts, predicate, Period.YEARLY, today)
    last = analyze_consistency(workouts, predicate, Period.LAST_YEAR, today)

    workout_change = current.qualifying_workout_count - last.qualifying_workout_count
    rest_days_change = last.median_gap - current.median_gap

    return YearComparison(
        current_year=YearSummary(
            year=today.year,
            workout_count=current.qualifying_workout_count,
            median_gap=current.median_gap,
            pattern=current.pattern,
        ),
        last_year=YearSummary(
            year=period_window(Period.LAST_YEAR, today).start.year,
            workout_count=last.qualifying_workout_count,
            median_gap=last.median_gap,
            pattern=last.pattern,
        ),
        workout_change=workout_change,
        rest_days_change=round_half_up(rest_days_change, 1),
        is_improved=workout_change > 0 or (workout_change == 0 and rest_days_change > 0),
    )


def consistency_report(workouts: Iterable[WorkoutRecord],
                       predicate: WorkoutPredicate,
                       period: Union[Period, str] = Period.FOUR_MONTHS,
                       today: Optional[date] = None) -> ConsistencyReport:
    period = to_period(period)
    summary = analyze_consistency(workouts, predicate, period, today)
    trend = detect_trend(summary.intervals) if period == Period.FOUR_MONTHS else None
    return ConsistencyReport(summary=summary, trend=trend)

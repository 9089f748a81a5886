"""
Rest-Interval & Consistency Classifier
Describes how regularly an exercise (or category) is trained

CONCEPTS:
1. Rest intervals - calendar-day gaps between consecutive qualifying days
2. Robust statistics - median gap instead of mean, IQR instead of std
3. Pattern labels - Stable / Variable / Irregular from the IQR of the gaps
"""

import logging
import math
from collections import Counter
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple, Union

import numpy as np

from .models import ExerciseCatalog, ExerciseCategory, WorkoutRecord
from .periods import Period, PeriodWindow, calendar_day, days_between, period_window, utc_today

logger = logging.getLogger(__name__)

WorkoutPredicate = Callable[[WorkoutRecord], bool]

# IQR upper bounds (in days) for each pattern
STABLE_MAX_IQR = 2
VARIABLE_MAX_IQR = 7


class ConsistencyPattern(str, Enum):
    STABLE = "Stable"
    VARIABLE = "Variable"
    IRREGULAR = "Irregular"


@dataclass(frozen=True)
class RestInterval:
    """Gap that ended on reference_date"""
    reference_date: date
    gap_days: int


@dataclass(frozen=True)
class ConsistencySummary:
    median_gap: float
    min_gap: int
    max_gap: int
    qualifying_workout_count: int
    pattern: ConsistencyPattern
    gap_counts: Tuple[Tuple[int, int], ...] = ()
    intervals: Tuple[RestInterval, ...] = ()

    @property
    def gap_histogram(self) -> Dict[int, int]:
        """Occurrences of each gap length, as a fresh dict"""
        return dict(self.gap_counts)

    @property
    def range_label(self) -> str:
        if not self.intervals:
            return 'N/A'
        if self.min_gap == self.max_gap:
            return f"{self.min_gap} {'day' if self.min_gap == 1 else 'days'}"
        return f"{self.min_gap}-{self.max_gap} days"


def exercise_predicate(exercise_id: str) -> WorkoutPredicate:
    """Workouts containing at least one set of the exercise"""
    return lambda workout: workout.has_exercise(exercise_id)


def category_predicate(category: Union[ExerciseCategory, str], catalog: ExerciseCatalog) -> WorkoutPredicate:
    """Workouts containing at least one set of an exercise in the category"""
    category = ExerciseCategory(category)
    return lambda workout: any(
        catalog.category_of(s.exercise_id) == category for s in workout.sets
    )


def median(values: Sequence[float]) -> float:
    """Standard median; the two middle values are averaged on even counts"""
    if len(values) == 0:
        return 0.0
    return float(np.median(values))


def classify_pattern(gaps: Sequence[int]) -> ConsistencyPattern:
    """
    Label the regularity of a gap sequence by its interquartile range.

    Quartiles are taken by index (sorted[floor(n * 0.25)] and
    sorted[floor(n * 0.75)]), not interpolated.
    """
    if len(gaps) < 2:
        return ConsistencyPattern.STABLE

    ordered = np.sort(np.asarray(gaps))
    n = len(ordered)
    q1 = ordered[math.floor(n * 0.25)]
    q3 = ordered[math.floor(n * 0.75)]
    iqr = int(q3 - q1)

    if iqr <= STABLE_MAX_IQR:
        return ConsistencyPattern.STABLE
    if iqr <= VARIABLE_MAX_IQR:
        return ConsistencyPattern.VARIABLE
    return ConsistencyPattern.IRREGULAR


def rest_intervals(days: Iterable[date]) -> List[RestInterval]:
    """Gaps between consecutive distinct days"""
    ordered = sorted(set(days))
    return [
        RestInterval(reference_date=current, gap_days=days_between(current, previous))
        for previous, current in zip(ordered, ordered[1:])
    ]


def qualifying_workouts(workouts: Iterable[WorkoutRecord],
                        predicate: WorkoutPredicate,
                        window: PeriodWindow) -> List[WorkoutRecord]:
    return [
        w for w in workouts
        if predicate(w) and window.contains(calendar_day(w.timestamp))
    ]


def summarize_gaps(intervals: List[RestInterval], workout_count: int) -> ConsistencySummary:
    """Build the summary for an already computed list of rest intervals"""
    if not intervals:
        return ConsistencySummary(
            median_gap=0.0,
            min_gap=0,
            max_gap=0,
            qualifying_workout_count=workout_count,
            pattern=ConsistencyPattern.STABLE,
        )

    gaps = [i.gap_days for i in intervals]
    histogram = Counter(gaps)
    return ConsistencySummary(
        median_gap=median(gaps),
        min_gap=min(gaps),
        max_gap=max(gaps),
        qualifying_workout_count=workout_count,
        pattern=classify_pattern(gaps),
        gap_counts=tuple(sorted(histogram.items())),
        intervals=tuple(intervals),
    )


def analyze_window(workouts: Iterable[WorkoutRecord],
                   predicate: WorkoutPredicate,
                   window: PeriodWindow) -> ConsistencySummary:
    matching = qualifying_workouts(workouts, predicate, window)
    intervals = rest_intervals(calendar_day(w.timestamp) for w in matching)
    logger.debug("%d qualifying workouts, %d rest intervals", len(matching), len(intervals))
    return summarize_gaps(intervals, len(matching))


def analyze_consistency(workouts: Iterable[WorkoutRecord],
                        predicate: WorkoutPredicate,
                        period: Union[Period, str] = Period.FOUR_MONTHS,
                        today: Optional[date] = None) -> ConsistencySummary:
    """
    Rest-interval summary of the qualifying workouts in a period.

    The period window never extends past today. With fewer than two
    qualifying days the summary is empty and labelled Stable.
    """
    today = today or utc_today()
    window = period_window(period, today).up_to(today)
    return analyze_window(workouts, predicate, window)

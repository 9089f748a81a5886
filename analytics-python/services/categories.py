"""
Category Aggregator
Fans the consistency pipeline out over the 8 exercise categories

Every category is always present in the results, even without workouts;
hiding sparse categories is left to whoever displays them.
"""

import logging
from dataclasses import dataclass
from datetime import date
from typing import Dict, Iterable, List, Optional, Union

import pandas as pd

from .consistency import category_predicate
from .models import ExerciseCatalog, ExerciseCategory, WorkoutRecord
from .periods import Period, calendar_day, period_window, utc_today
from .trends import ConsistencyReport, consistency_report

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CategoryConsistency:
    category: ExerciseCategory
    report: ConsistencyReport


def category_consistency(workouts: Iterable[WorkoutRecord],
                         catalog: ExerciseCatalog,
                         period: Union[Period, str] = Period.FOUR_MONTHS,
                         today: Optional[date] = None) -> List[CategoryConsistency]:
    """Consistency summary (and 4-month trend) for each category"""
    today = today or utc_today()
    workouts = list(workouts)
    return [
        CategoryConsistency(
            category=category,
            report=consistency_report(workouts, category_predicate(category, catalog), period, today),
        )
        for category in ExerciseCategory
    ]


def _sets_frame(workouts: Iterable[WorkoutRecord], catalog: ExerciseCatalog) -> pd.DataFrame:
    """One row per set whose exercise is in the catalog"""
    rows = []
    for workout in workouts:
        day = calendar_day(workout.timestamp)
        for s in workout.sets:
            exercise = catalog.get(s.exercise_id)
            if exercise is None:
                logger.debug("Set for unknown exercise %s skipped", s.exercise_id)
                continue
            rows.append({
                'day': day,
                'exercise_id': exercise.id,
                'category': exercise.category.value,
            })
    return pd.DataFrame(rows, columns=['day', 'exercise_id', 'category'])


def category_set_counts(workouts: Iterable[WorkoutRecord],
                        catalog: ExerciseCatalog,
                        period: Union[Period, str] = Period.WEEKLY,
                        today: Optional[date] = None) -> Dict[str, int]:
    """Number of sets logged per category within the period window"""
    today = today or utc_today()
    window = period_window(period, today)
    sets_df = _sets_frame(workouts, catalog)
    in_window = sets_df[sets_df['day'].map(window.contains).astype(bool)]
    counts = in_window.groupby('category').size().to_dict()
    return {category.value: int(counts.get(category.value, 0)) for category in ExerciseCategory}


def exercise_frequency(workouts: Iterable[WorkoutRecord],
                       catalog: ExerciseCatalog,
                       year: Optional[int] = None) -> List[Dict]:
    """
    Sets per exercise, most frequent first.

    Exercises missing from the catalog are left out.
    """
    sets_df = _sets_frame(workouts, catalog)
    if year is not None:
        sets_df = sets_df[sets_df['day'].map(lambda d: d.year == year).astype(bool)]
    if sets_df.empty:
        return []

    counts = sets_df.groupby('exercise_id').size().sort_values(ascending=False, kind='mergesort')
    return [
        {
            'exercise_id': exercise_id,
            'name': catalog.get(exercise_id).name,
            'category': catalog.get(exercise_id).category.value,
            'count': int(count),
        }
        for exercise_id, count in counts.items()
    ]

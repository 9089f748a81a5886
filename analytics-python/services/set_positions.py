"""
Set-Position Performance Tracker
Best and average performance at each set position of an exercise

A set's position is its 1-based ordinal among the sets of the same exercise
within one workout, in the order the sets were logged. The max/average
series feed the "suggested target" hints shown while logging a workout.
"""

import calendar
from dataclasses import dataclass, field
from datetime import date
from typing import Dict, Iterable, List, Optional, Union

import pandas as pd

from .models import ExerciseDefinition, WorkoutRecord, set_value
from .periods import (
    Period,
    PeriodWindow,
    parse_timestamp,
    period_window,
    round_half_up,
    subtract_months,
    to_period,
    utc_today,
)

FRAME_COLUMNS = ['workout_order', 'workout_id', 'timestamp', 'day', 'value']


@dataclass(frozen=True)
class SetPositionRecord:
    position: int
    max_value: int
    achieved_on: date


@dataclass(frozen=True)
class AveragePositionRecord:
    position: int
    average: float
    sample_count: int


@dataclass(frozen=True)
class PositionSeries:
    """Sparse per-position series; positions without samples are left out"""
    exercise_id: str
    window: Period
    max_records: List[SetPositionRecord] = field(default_factory=list)
    average_records: List[AveragePositionRecord] = field(default_factory=list)


@dataclass(frozen=True)
class ProgressionPoint:
    """A workout that raised the all-time best value of an exercise"""
    achieved_on: date
    max_value: int
    set_position: int


class SetPositionTracker:
    """
    Tracks performance by set position for one exercise.

    The log is flattened once into a DataFrame with one row per set of the
    exercise; every query filters that frame.
    """

    def __init__(self,
                 workouts: Iterable[WorkoutRecord],
                 exercise: ExerciseDefinition,
                 today: Optional[date] = None):
        self.exercise = exercise
        self.today = today or utc_today()
        self.sets = self._build_frame(workouts)

    def _build_frame(self, workouts: Iterable[WorkoutRecord]) -> pd.DataFrame:
        rows = []
        for order, workout in enumerate(workouts):
            exercise_sets = workout.sets_for(self.exercise.id)
            if not exercise_sets:
                continue
            timestamp = parse_timestamp(workout.timestamp).value
            for s in exercise_sets:
                rows.append({
                    'workout_order': order,
                    'workout_id': workout.id,
                    'timestamp': timestamp,
                    'day': timestamp.date(),
                    'value': set_value(s, self.exercise),
                })

        df = pd.DataFrame(rows, columns=FRAME_COLUMNS)
        # Rows are still in logged order, so cumcount numbers the sets 1, 2, 3...
        df['position'] = df.groupby('workout_order').cumcount() + 1
        return df.sort_values(['timestamp', 'workout_order', 'position'], kind='mergesort')

    def _window(self, window: Union[Period, str]) -> PeriodWindow:
        return period_window(window, self.today).up_to(self.today)

    def _samples(self, position: int, window: Union[Period, str]) -> pd.DataFrame:
        bounds = self._window(window)
        at_position = self.sets[self.sets['position'] == position]
        return at_position[at_position['day'].map(bounds.contains).astype(bool)]

    def max_position(self) -> int:
        """Largest set position ever logged for the exercise"""
        if self.sets.empty:
            return 0
        return int(self.sets['position'].max())

    def max_for_position(self,
                         position: int,
                         window: Union[Period, str] = Period.THREE_MONTHS) -> Optional[SetPositionRecord]:
        """
        Best value at a set position within the window.

        Ties keep the date the value was first reached.
        """
        samples = self._samples(position, window)
        if samples.empty:
            return None
        # idxmax returns the first occurrence; samples are in date order
        best = samples.loc[samples['value'].idxmax()]
        return SetPositionRecord(
            position=position,
            max_value=int(best['value']),
            achieved_on=best['day'],
        )

    def average_for_position(self,
                             position: int,
                             window: Union[Period, str] = Period.THREE_MONTHS) -> Optional[AveragePositionRecord]:
        samples = self._samples(position, window)
        if samples.empty:
            return None
        return AveragePositionRecord(
            position=position,
            average=round_half_up(float(samples['value'].sum()) / len(samples), 2),
            sample_count=len(samples),
        )

    def series(self, window: Union[Period, str] = Period.THREE_MONTHS) -> PositionSeries:
        """Max and average for every position from 1 to the largest one logged"""
        window = to_period(window)
        max_records = []
        average_records = []
        for position in range(1, self.max_position() + 1):
            best = self.max_for_position(position, window)
            if best is not None:
                max_records.append(best)
            average = self.average_for_position(position, window)
            if average is not None:
                average_records.append(average)

        return PositionSeries(
            exercise_id=self.exercise.id,
            window=window,
            max_records=max_records,
            average_records=average_records,
        )

    def max_progression(self, years: int = 3) -> List[ProgressionPoint]:
        """
        Workouts that set a new best value, oldest first.

        Only the last `years` years are scanned and the running best starts
        at 0, so sets with a value of 0 never appear.
        """
        cutoff = subtract_months(self.today, 12 * years)
        recent = self.sets[self.sets['day'].map(lambda d: d >= cutoff).astype(bool)]

        points = []
        running_max = 0
        for _, workout_sets in recent.groupby('workout_order', sort=False):
            best = workout_sets.loc[workout_sets['value'].idxmax()]
            if best['value'] > running_max:
                running_max = int(best['value'])
                points.append(ProgressionPoint(
                    achieved_on=best['day'],
                    max_value=running_max,
                    set_position=int(best['position']),
                ))
        return points

    def sessions_per_month(self, months: int = 4) -> List[Dict]:
        """Number of workouts with the exercise in each of the last `months` calendar months"""
        sessions = self.sets.drop_duplicates('workout_order')
        results = []
        for back in range(months - 1, -1, -1):
            month_start = subtract_months(self.today.replace(day=1), back)
            bounds = period_window(Period.MONTHLY, month_start)
            count = int(sessions['day'].map(bounds.contains).astype(bool).sum())
            results.append({
                'month': calendar.month_abbr[month_start.month],
                'year': month_start.year,
                'count': count,
            })
        return results

    def volume_per_session(self, window: Union[Period, str] = Period.FOUR_MONTHS) -> List[Dict]:
        """Total reps (or seconds for time-based exercises) per workout, oldest first"""
        bounds = self._window(window)
        in_window = self.sets[self.sets['day'].map(bounds.contains).astype(bool)]
        if in_window.empty:
            return []
        volumes = in_window.groupby('workout_order', sort=False).agg(
            day=('day', 'first'),
            volume=('value', 'sum'),
        )
        return [
            {'date': row.day, 'volume': int(row.volume)}
            for row in volumes.itertuples()
        ]


def max_for_position(workouts: Iterable[WorkoutRecord],
                     exercise: ExerciseDefinition,
                     position: int,
                     window: Union[Period, str] = Period.THREE_MONTHS,
                     today: Optional[date] = None) -> Optional[SetPositionRecord]:
    return SetPositionTracker(workouts, exercise, today).max_for_position(position, window)


def average_for_position(workouts: Iterable[WorkoutRecord],
                         exercise: ExerciseDefinition,
                         position: int,
                         window: Union[Period, str] = Period.THREE_MONTHS,
                         today: Optional[date] = None) -> Optional[AveragePositionRecord]:
    return SetPositionTracker(workouts, exercise, today).average_for_position(position, window)


def position_series(workouts: Iterable[WorkoutRecord],
                    exercise: ExerciseDefinition,
                    window: Union[Period, str] = Period.THREE_MONTHS,
                    today: Optional[date] = None) -> PositionSeries:
    return SetPositionTracker(workouts, exercise, today).series(window)

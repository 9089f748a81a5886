"""Builders for workout log test data."""

from datetime import date, datetime, timedelta
from itertools import count

from services import (
    ExerciseCatalog,
    ExerciseCategory,
    ExerciseDefinition,
    ExerciseKind,
    SetRecord,
    WorkoutLog,
    WorkoutRecord,
)

TODAY = date(2024, 6, 15)  # a Saturday

BENCH = ExerciseDefinition(id='bench', name='Bench Press', category=ExerciseCategory.CHEST)
SQUAT = ExerciseDefinition(id='squat', name='Squat', category=ExerciseCategory.LEGS)
LUNGE = ExerciseDefinition(id='lunge', name='Lunges', category=ExerciseCategory.LEGS)
PLANK = ExerciseDefinition(id='plank', name='Plank', category=ExerciseCategory.ABS,
                           kind=ExerciseKind.TIME)

CATALOG = ExerciseCatalog([BENCH, SQUAT, LUNGE, PLANK])

_ids = count(1)


def reps(exercise_id, value):
    return SetRecord(exercise_id=exercise_id, reps=value)


def timed(exercise_id, seconds):
    return SetRecord(exercise_id=exercise_id, reps=0, duration_seconds=seconds)


def workout(day, *sets, timestamp=None):
    """A workout at 18:00 UTC on the given day."""
    if timestamp is None:
        timestamp = datetime(day.year, day.month, day.day, 18, 0)
    return WorkoutRecord(id=f"w{next(_ids)}", timestamp=timestamp, sets=tuple(sets))


def days_ago(n, today=TODAY):
    return today - timedelta(days=n)


def workouts_on(days, exercise_id='bench', value=10):
    return [workout(d, reps(exercise_id, value)) for d in days]


def log_of(workouts, version=1):
    return WorkoutLog(workouts=tuple(workouts), catalog=CATALOG, version=version)

"""
Workout Log Data Model
Read-only snapshot types consumed by the analytics engine
"""

import logging
import re
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Dict, Iterable, Iterator, Optional, Tuple, Union


logger = logging.getLogger(__name__)

Timestamp = Union[datetime, date, str, None]


class ExerciseCategory(str, Enum):
    """The 8 fixed exercise categories"""
    ABS = "abs"
    LEGS = "legs"
    ARMS = "arms"
    BACK = "back"
    SHOULDERS = "shoulders"
    CHEST = "chest"
    CARDIO = "cardio"
    FULL_BODY = "full-body"


class ExerciseKind(str, Enum):
    REPS = "reps"
    TIME = "time"


@dataclass(frozen=True)
class ExerciseDefinition:
    id: str
    category: ExerciseCategory
    kind: ExerciseKind = ExerciseKind.REPS
    name: str = ""

    @property
    def is_time_based(self) -> bool:
        return self.kind == ExerciseKind.TIME


@dataclass(frozen=True)
class SetRecord:
    exercise_id: str
    reps: int = 0
    duration_seconds: Optional[int] = None  # time-based exercises only
    completed_at: Timestamp = None


@dataclass(frozen=True)
class WorkoutRecord:
    id: str
    timestamp: Timestamp
    sets: Tuple[SetRecord, ...] = ()
    notes: Optional[str] = None

    def has_exercise(self, exercise_id: str) -> bool:
        return any(s.exercise_id == exercise_id for s in self.sets)

    def sets_for(self, exercise_id: str) -> Tuple[SetRecord, ...]:
        """Sets of one exercise, in logged order"""
        return tuple(s for s in self.sets if s.exercise_id == exercise_id)


class ExerciseCatalog:
    """Lookup from exercise id to its definition"""

    def __init__(self, exercises: Iterable[ExerciseDefinition] = ()):
        self._exercises: Dict[str, ExerciseDefinition] = {e.id: e for e in exercises}

    def get(self, exercise_id: str) -> Optional[ExerciseDefinition]:
        return self._exercises.get(exercise_id)

    def category_of(self, exercise_id: str) -> Optional[ExerciseCategory]:
        exercise = self._exercises.get(exercise_id)
        return exercise.category if exercise else None

    def __contains__(self, exercise_id: str) -> bool:
        return exercise_id in self._exercises

    def __iter__(self) -> Iterator[ExerciseDefinition]:
        return iter(self._exercises.values())

    def __len__(self) -> int:
        return len(self._exercises)


@dataclass(frozen=True)
class WorkoutLog:
    """An immutable snapshot of the log plus the version it was taken at"""
    workouts: Tuple[WorkoutRecord, ...] = ()
    catalog: ExerciseCatalog = field(default_factory=ExerciseCatalog)
    version: int = 0


_DURATION_RE = re.compile(r'^(\d{1,2}):([0-5]\d)$')


def duration_to_seconds(duration: Optional[str]) -> int:
    """
    Convert an MM:SS duration string to total seconds.

    Invalid or empty strings count as 0 seconds.
    """
    if not duration:
        return 0
    match = _DURATION_RE.match(duration.strip())
    if not match:
        return 0
    return int(match.group(1)) * 60 + int(match.group(2))


def set_value(set_record: SetRecord, exercise: Optional[ExerciseDefinition]) -> int:
    """
    The performance value of a set: duration in seconds for time-based
    exercises, reps otherwise. Negative values are clamped to 0.
    """
    if exercise is not None and exercise.is_time_based:
        value = set_record.duration_seconds or 0
    else:
        value = set_record.reps or 0
    value = int(value)
    if value < 0:
        logger.warning("Negative set value %s for exercise %s, using 0", value, set_record.exercise_id)
        return 0
    return value

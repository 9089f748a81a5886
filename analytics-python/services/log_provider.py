"""
Workout Log Providers
Where the analytics engine gets its snapshot of the workout log from
"""

import threading
from typing import Iterable, Optional, Protocol

from .cache import AnalyticsCache
from .models import ExerciseCatalog, ExerciseDefinition, WorkoutLog, WorkoutRecord


class WorkoutLogProvider(Protocol):
    def snapshot(self) -> WorkoutLog:
        ...


class InMemoryWorkoutLog:
    """
    A mutable log kept in memory.

    Every mutation bumps the version and invalidates the attached cache, so
    snapshots taken before and after a change never share cached results.
    """

    def __init__(self,
                 workouts: Iterable[WorkoutRecord] = (),
                 exercises: Iterable[ExerciseDefinition] = (),
                 cache: Optional[AnalyticsCache] = None):
        self._workouts = list(workouts)
        self._exercises = list(exercises)
        self._version = 0
        self._lock = threading.Lock()
        self.cache = cache

    def _changed(self) -> None:
        self._version += 1
        if self.cache is not None:
            self.cache.invalidate()

    def add_workout(self, workout: WorkoutRecord) -> None:
        with self._lock:
            self._workouts.append(workout)
            self._changed()

    def replace_workout(self, workout: WorkoutRecord) -> None:
        with self._lock:
            self._workouts = [workout if w.id == workout.id else w for w in self._workouts]
            self._changed()

    def remove_workout(self, workout_id: str) -> None:
        with self._lock:
            self._workouts = [w for w in self._workouts if w.id != workout_id]
            self._changed()

    def add_exercise(self, exercise: ExerciseDefinition) -> None:
        with self._lock:
            self._exercises = [e for e in self._exercises if e.id != exercise.id] + [exercise]
            self._changed()

    @property
    def version(self) -> int:
        return self._version

    def snapshot(self) -> WorkoutLog:
        with self._lock:
            return WorkoutLog(
                workouts=tuple(self._workouts),
                catalog=ExerciseCatalog(self._exercises),
                version=self._version,
            )

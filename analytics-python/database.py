"""
Database Configuration
Handles the SQLAlchemy connection and loads workout log snapshots from it
"""

import logging
from functools import lru_cache

import pandas as pd
from fastapi import Depends
from sqlalchemy import create_engine, text
from sqlalchemy.orm import Session, sessionmaker

from config import settings
from services import (
    AnalyticsCache,
    ExerciseCatalog,
    ExerciseCategory,
    ExerciseDefinition,
    ExerciseKind,
    SetRecord,
    WorkoutLog,
    WorkoutRecord,
    duration_to_seconds,
)

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_engine():
    """
    Create the SQLAlchemy engine on first use.

    - pool_pre_ping: Tests connections before using them
    - pool_size: Number of connections to keep open
    """
    if settings.database_url.startswith('sqlite'):
        return create_engine(settings.database_url)
    return create_engine(
        settings.database_url,
        pool_pre_ping=True,
        pool_size=5,
        max_overflow=10
    )


@lru_cache(maxsize=1)
def get_session_factory():
    return sessionmaker(autocommit=False, autoflush=False, bind=get_engine())


def get_db():
    """
    Dependency that provides a database session.
    Use with FastAPI's Depends() for automatic cleanup.

    Usage:
        @app.get("/items")
        def get_items(db: Session = Depends(get_db)):
            ...
    """
    db = get_session_factory()()
    try:
        yield db
    finally:
        db.close()


class SqlWorkoutLogProvider:
    """
    Reads the workout log from the `workouts`, `workout_sets` and `exercises` tables.

    Rows that cannot be interpreted (unknown category, missing exercise) are
    skipped with a warning instead of failing the whole snapshot.
    """

    def __init__(self, db: Session):
        self.db = db

    def _load_catalog(self) -> ExerciseCatalog:
        result = self.db.execute(text("""
            SELECT id, name, category, exercise_type
            FROM exercises
        """)).fetchall()

        exercises = []
        for exercise_id, name, category, exercise_type in result:
            try:
                exercises.append(ExerciseDefinition(
                    id=str(exercise_id),
                    name=name or '',
                    category=ExerciseCategory(category),
                    kind=ExerciseKind(exercise_type or 'reps'),
                ))
            except ValueError:
                logger.warning("Skipping exercise %s with category %r / type %r",
                               exercise_id, category, exercise_type)
        return ExerciseCatalog(exercises)

    def _load_workouts(self) -> tuple:
        workouts_df = pd.DataFrame(
            self.db.execute(text("""
                SELECT id, workout_date, notes
                FROM workouts
            """)).fetchall(),
            columns=['id', 'workout_date', 'notes']
        )
        sets_df = pd.DataFrame(
            self.db.execute(text("""
                SELECT workout_id, exercise_id, set_number, reps, duration_seconds, completed_at
                FROM workout_sets
                ORDER BY workout_id, set_number
            """)).fetchall(),
            columns=['workout_id', 'exercise_id', 'set_number', 'reps',
                     'duration_seconds', 'completed_at']
        )

        # Convert Decimal/NULL values to plain ints
        sets_df['reps'] = pd.to_numeric(sets_df['reps'], errors='coerce').fillna(0).astype(int)
        # Durations entered as MM:SS text are stored as-is by older clients
        sets_df['duration_seconds'] = sets_df['duration_seconds'].map(
            lambda v: duration_to_seconds(v) if isinstance(v, str) and ':' in v else v
        )
        sets_df['duration_seconds'] = pd.to_numeric(sets_df['duration_seconds'], errors='coerce')

        sets_by_workout = {}
        for row in sets_df.itertuples(index=False):
            duration = None if pd.isna(row.duration_seconds) else int(row.duration_seconds)
            sets_by_workout.setdefault(str(row.workout_id), []).append(SetRecord(
                exercise_id=str(row.exercise_id),
                reps=int(row.reps),
                duration_seconds=duration,
                completed_at=row.completed_at,
            ))

        return tuple(
            WorkoutRecord(
                id=str(row.id),
                timestamp=row.workout_date,
                sets=tuple(sets_by_workout.get(str(row.id), ())),
                notes=row.notes,
            )
            for row in workouts_df.itertuples(index=False)
        )

    def snapshot(self) -> WorkoutLog:
        catalog = self._load_catalog()
        workouts = self._load_workouts()
        # Content fingerprint; equal logs share cached results
        version = hash((workouts, tuple(sorted(catalog, key=lambda e: e.id))))
        return WorkoutLog(workouts=workouts, catalog=catalog, version=version)


def get_workout_log(db: Session = Depends(get_db)) -> WorkoutLog:
    """Dependency that provides a snapshot of the workout log"""
    return SqlWorkoutLogProvider(db).snapshot()


analytics_cache = AnalyticsCache(max_entries=settings.cache_size, enabled=settings.cache_enabled)


def get_cache() -> AnalyticsCache:
    return analytics_cache

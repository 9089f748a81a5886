"""
Performance Router
API endpoints for per-set-position performance of an exercise
"""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query

from database import get_cache, get_workout_log
from services import AnalyticsCache, Period, SetPositionTracker, WorkoutLog
from services.periods import utc_today
from .common import exercise_info, require_exercise

router = APIRouter(prefix="/performance", tags=["Performance"])


@router.get("/exercises/{exercise_id}/positions")
async def get_position_series(
    exercise_id: str,
    window: Period = Query(default=Period.THREE_MONTHS),
    today: Optional[date] = Query(default=None),
    log: WorkoutLog = Depends(get_workout_log),
    cache: AnalyticsCache = Depends(get_cache)
):
    """
    Best and average value for each set position (1st set, 2nd set, ...).

    Values are reps, or seconds for time-based exercises. Used as suggested
    targets while logging.

    - **exercise_id**: ID of the exercise
    - **window**: 3months (default), 4months, all, ...
    """
    exercise = require_exercise(log, exercise_id)
    today = today or utc_today()

    series = cache.get_or_compute(
        log.version, "position_series", (exercise_id, window, today),
        lambda: SetPositionTracker(log.workouts, exercise, today).series(window)
    )

    return {
        "exercise": exercise_info(exercise),
        "window": window,
        "max": series.max_records,
        "average": series.average_records,
    }


@router.get("/exercises/{exercise_id}/progression")
async def get_max_progression(
    exercise_id: str,
    years: int = Query(default=3, ge=1, le=10),
    today: Optional[date] = Query(default=None),
    log: WorkoutLog = Depends(get_workout_log)
):
    """
    Workouts that raised the exercise's best value.

    - **years**: How far back to look (1-10)
    """
    exercise = require_exercise(log, exercise_id)
    tracker = SetPositionTracker(log.workouts, exercise, today)
    return {
        "exercise": exercise_info(exercise),
        "years": years,
        "progression": tracker.max_progression(years),
    }


@router.get("/exercises/{exercise_id}/sessions")
async def get_sessions(
    exercise_id: str,
    today: Optional[date] = Query(default=None),
    log: WorkoutLog = Depends(get_workout_log)
):
    """Sessions per month and volume per session over the last 4 months"""
    exercise = require_exercise(log, exercise_id)
    tracker = SetPositionTracker(log.workouts, exercise, today)
    return {
        "exercise": exercise_info(exercise),
        "sessions_per_month": tracker.sessions_per_month(),
        "volume_per_session": tracker.volume_per_session(),
    }

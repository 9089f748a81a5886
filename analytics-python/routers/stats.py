"""
Stats Router
API endpoints for streaks, training percentages and log totals
"""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Path, Query

from database import get_cache, get_workout_log
from services import (
    AnalyticsCache,
    Period,
    WorkoutLog,
    category_set_counts,
    exercise_frequency,
    monthly_training_percentages,
    training_percentage,
    workout_stats,
    yearly_training_percentages,
)
from services.periods import utc_today

router = APIRouter(prefix="/stats", tags=["Stats"])


@router.get("/overview")
async def get_overview(
    today: Optional[date] = Query(default=None, description="Reference day (defaults to today, UTC)"),
    log: WorkoutLog = Depends(get_workout_log),
    cache: AnalyticsCache = Depends(get_cache)
):
    """
    Overall totals, streaks and this week's/month's/year's training percentage.

    A percentage is null when no day of its period has elapsed yet.
    """
    today = today or utc_today()
    workouts = log.workouts

    def compute():
        return {
            "totals": workout_stats(workouts, today),
            "training_percentage": {
                "week": training_percentage(workouts, Period.WEEKLY, today),
                "month": training_percentage(workouts, Period.MONTHLY, today),
                "year": training_percentage(workouts, Period.YEARLY, today),
            },
        }

    return {
        "today": today,
        **cache.get_or_compute(log.version, "overview", (today,), compute)
    }


@router.get("/training-percentage/{period}")
async def get_training_percentage(
    period: Period,
    today: Optional[date] = Query(default=None),
    log: WorkoutLog = Depends(get_workout_log)
):
    """
    Percentage of elapsed days in the period with at least one workout.

    - **period**: weekly, monthly, yearly, last_month, last_year, 3months, 4months or all
    """
    today = today or utc_today()
    return {
        "period": period,
        "today": today,
        "percentage": training_percentage(log.workouts, period, today),
    }


@router.get("/yearly")
async def get_yearly_training(
    today: Optional[date] = Query(default=None),
    log: WorkoutLog = Depends(get_workout_log)
):
    """Training percentage for every year in the log, newest first"""
    return {"years": yearly_training_percentages(log.workouts, today)}


@router.get("/monthly/{year}")
async def get_monthly_training(
    year: int = Path(..., ge=1970, le=9999),
    today: Optional[date] = Query(default=None),
    log: WorkoutLog = Depends(get_workout_log)
):
    """Training percentage per month of a year"""
    return {
        "year": year,
        "months": monthly_training_percentages(log.workouts, year, today),
    }


@router.get("/exercise-frequency")
async def get_exercise_frequency(
    year: Optional[int] = Query(default=None, ge=1970, le=9999),
    log: WorkoutLog = Depends(get_workout_log)
):
    """Number of sets logged per exercise, most frequent first"""
    return {
        "year": year,
        "exercises": exercise_frequency(log.workouts, log.catalog, year),
    }


@router.get("/category-sets")
async def get_category_set_counts(
    period: Period = Query(default=Period.WEEKLY),
    today: Optional[date] = Query(default=None),
    log: WorkoutLog = Depends(get_workout_log)
):
    """
    Sets per category in the period.

    - **period**: typically weekly, monthly or last_month
    """
    return {
        "period": period,
        "categories": category_set_counts(log.workouts, log.catalog, period, today),
    }

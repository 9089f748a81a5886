"""
Consistency Router
API endpoints for rest intervals, consistency patterns and trends
"""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query

from database import get_cache, get_workout_log
from services import (
    AnalyticsCache,
    ConsistencyReport,
    Period,
    WorkoutLog,
    category_consistency,
    compare_years,
    consistency_report,
    exercise_predicate,
)
from services.periods import utc_today
from .common import exercise_info, require_exercise

router = APIRouter(prefix="/consistency", tags=["Consistency"])


def _report_body(report: ConsistencyReport) -> dict:
    summary = report.summary
    return {
        "median_rest_days": summary.median_gap,
        "min_rest_days": summary.min_gap,
        "max_rest_days": summary.max_gap,
        "workout_count": summary.qualifying_workout_count,
        "pattern": summary.pattern,
        "range": summary.range_label,
        "rest_days_distribution": summary.gap_histogram,
        "rest_intervals": summary.intervals,
        "trend": report.trend,
    }


@router.get("/exercises/{exercise_id}")
async def get_exercise_consistency(
    exercise_id: str,
    period: Period = Query(default=Period.FOUR_MONTHS),
    today: Optional[date] = Query(default=None),
    log: WorkoutLog = Depends(get_workout_log),
    cache: AnalyticsCache = Depends(get_cache)
):
    """
    How regularly an exercise is trained.

    Returns the median/min/max rest days, their distribution and a
    Stable/Variable/Irregular pattern. The trend is only present for the
    4-month window.

    - **exercise_id**: ID of the exercise to analyze
    - **period**: 4months (default), yearly, last_year, ...
    """
    exercise = require_exercise(log, exercise_id)
    today = today or utc_today()

    report = cache.get_or_compute(
        log.version, "exercise_consistency", (exercise_id, period, today),
        lambda: consistency_report(log.workouts, exercise_predicate(exercise_id), period, today)
    )

    return {
        "exercise": exercise_info(exercise),
        "period": period,
        **_report_body(report)
    }


@router.get("/exercises/{exercise_id}/year-comparison")
async def get_exercise_year_comparison(
    exercise_id: str,
    today: Optional[date] = Query(default=None),
    log: WorkoutLog = Depends(get_workout_log)
):
    """
    Compare this year (so far) with the whole of last year.

    Improvement means more workouts, or the same number with shorter rests.
    """
    exercise = require_exercise(log, exercise_id)
    comparison = compare_years(log.workouts, exercise_predicate(exercise_id), today)
    return {
        "exercise": exercise_info(exercise),
        "comparison": comparison,
    }


@router.get("/categories")
async def get_category_consistency(
    period: Period = Query(default=Period.FOUR_MONTHS),
    today: Optional[date] = Query(default=None),
    log: WorkoutLog = Depends(get_workout_log),
    cache: AnalyticsCache = Depends(get_cache)
):
    """
    Consistency of each of the 8 exercise categories.

    All categories are returned, including those without workouts.
    """
    today = today or utc_today()
    results = cache.get_or_compute(
        log.version, "category_consistency", (period, today),
        lambda: category_consistency(log.workouts, log.catalog, period, today)
    )
    return {
        "period": period,
        "categories": {
            item.category.value: _report_body(item.report)
            for item in results
        }
    }

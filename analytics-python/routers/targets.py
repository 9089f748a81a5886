"""
Targets Router
API endpoint for progress towards a workout target
"""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, Field

from database import get_workout_log
from services import ExerciseCategory, Period, TargetType, WorkoutLog, WorkoutTarget, target_progress

router = APIRouter(prefix="/targets", tags=["Targets"])


class TargetRequest(BaseModel):
    target_type: TargetType
    target_value: int = Field(..., gt=0)
    period: Period = Period.WEEKLY
    exercise_id: Optional[str] = None
    category: Optional[ExerciseCategory] = None


@router.post("/progress")
async def get_target_progress(
    request: TargetRequest,
    today: Optional[date] = Query(default=None),
    log: WorkoutLog = Depends(get_workout_log)
):
    """
    Progress of a target in its current period.

    A target applies to one exercise (exercise_id) or to a whole category.
    Only weekly, monthly and yearly periods are supported.
    """
    if not request.exercise_id and request.category is None:
        raise HTTPException(status_code=400, detail="Target needs an exercise_id or a category")
    if request.exercise_id and request.exercise_id not in log.catalog:
        raise HTTPException(status_code=404, detail="Exercise not found")

    target = WorkoutTarget(
        target_type=request.target_type,
        target_value=request.target_value,
        period=request.period,
        exercise_id=request.exercise_id,
        category=request.category,
    )

    try:
        progress = target_progress(target, log.workouts, log.catalog, today)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return {
        "target": request,
        "progress": progress,
    }

"""
Target Progress Service
How far the current period has progressed towards a sets/reps/duration target
"""

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Iterable, Optional, Union

from .models import ExerciseCatalog, ExerciseCategory, SetRecord, WorkoutRecord
from .periods import Period, calendar_day, period_window, round_half_up, to_period, utc_today

TARGET_PERIODS = (Period.WEEKLY, Period.MONTHLY, Period.YEARLY)


class TargetType(str, Enum):
    SETS = "sets"
    REPS = "reps"
    DURATION = "duration"


class TargetStatus(str, Enum):
    COMPLETED = "completed"
    ON_TRACK = "on-track"
    MODERATE = "moderate"
    NEEDS_ATTENTION = "needs-attention"


@dataclass(frozen=True)
class WorkoutTarget:
    """A target for one exercise or for a whole category"""
    target_type: TargetType
    target_value: int
    period: Period = Period.WEEKLY
    exercise_id: Optional[str] = None
    category: Optional[ExerciseCategory] = None


@dataclass(frozen=True)
class TargetProgress:
    current_value: int
    percentage: float
    is_completed: bool
    is_exceeded: bool
    days_remaining: int
    status: TargetStatus


def _set_contribution(target_type: TargetType, set_record: SetRecord) -> int:
    if target_type == TargetType.SETS:
        return 1
    if target_type == TargetType.REPS:
        return max(0, int(set_record.reps or 0))
    return max(0, int(set_record.duration_seconds or 0))


def _status(percentage: float, is_completed: bool) -> TargetStatus:
    if is_completed:
        return TargetStatus.COMPLETED
    if percentage >= 75:
        return TargetStatus.ON_TRACK
    if percentage >= 50:
        return TargetStatus.MODERATE
    return TargetStatus.NEEDS_ATTENTION


def target_progress(target: WorkoutTarget,
                    workouts: Iterable[WorkoutRecord],
                    catalog: ExerciseCatalog,
                    today: Optional[date] = None) -> TargetProgress:
    """
    Sum the matching sets logged so far in the target's current period.

    A target needs either an exercise_id or a category; one with neither
    never makes progress.
    """
    today = today or utc_today()
    period = resolve_target_period(target.period)
    if target.target_value <= 0:
        raise ValueError("target_value must be positive")

    target_type = TargetType(target.target_type)
    category = ExerciseCategory(target.category) if target.category else None
    window = period_window(period, today)
    elapsed = window.up_to(today)

    current_value = 0
    for workout in workouts:
        if not elapsed.contains(calendar_day(workout.timestamp)):
            continue
        for s in workout.sets:
            if target.exercise_id:
                matches = s.exercise_id == target.exercise_id
            elif category is not None:
                matches = catalog.category_of(s.exercise_id) == category
            else:
                matches = False
            if matches:
                current_value += _set_contribution(target_type, s)

    percentage = current_value / target.target_value * 100
    is_completed = current_value >= target.target_value

    return TargetProgress(
        current_value=current_value,
        percentage=round_half_up(percentage, 2),
        is_completed=is_completed,
        is_exceeded=current_value > target.target_value,
        days_remaining=max(0, (window.end - today).days),
        status=_status(percentage, is_completed),
    )


def resolve_target_period(value: Union[Period, str]) -> Period:
    period = to_period(value)
    if period not in TARGET_PERIODS:
        raise ValueError(f"Targets only support weekly, monthly or yearly periods, got {period.value!r}")
    return period

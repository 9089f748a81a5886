"""
Streak & Frequency Service
Day streaks and overall totals for a workout log
"""

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterable, Optional, Sequence

from .models import WorkoutRecord
from .periods import STREAK_SCAN_LIMIT, trained_days, utc_today


@dataclass(frozen=True)
class WorkoutStats:
    total_workouts: int
    total_sets: int
    total_reps: int
    total_duration_seconds: int
    current_streak: int
    longest_streak: int


def current_streak(workouts: Iterable[WorkoutRecord], today: Optional[date] = None) -> int:
    """
    Consecutive trained days ending today.

    A day without a workout yet today does not break the streak: the scan
    then starts from yesterday. The scan never looks back more than a year.
    """
    today = today or utc_today()
    days = trained_days(workouts)
    if not days:
        return 0

    check = today if today in days else today - timedelta(days=1)
    streak = 0
    for _ in range(STREAK_SCAN_LIMIT):
        if check not in days:
            break
        streak += 1
        check -= timedelta(days=1)
    return streak


def longest_streak(workouts: Iterable[WorkoutRecord]) -> int:
    """Longest run of consecutive trained days anywhere in the log"""
    days = sorted(trained_days(workouts))
    longest = 0
    run = 0
    previous = None
    for day in days:
        if previous is not None and (day - previous).days == 1:
            run += 1
        else:
            run = 1
        longest = max(longest, run)
        previous = day
    return longest


def workout_stats(workouts: Sequence[WorkoutRecord],
                  today: Optional[date] = None) -> WorkoutStats:
    """Totals across the whole log plus both streaks"""
    all_sets = [s for w in workouts for s in w.sets]

    return WorkoutStats(
        total_workouts=len(workouts),
        total_sets=len(all_sets),
        total_reps=sum(max(0, int(s.reps or 0)) for s in all_sets),
        total_duration_seconds=sum(max(0, int(s.duration_seconds)) for s in all_sets if s.duration_seconds),
        current_streak=current_streak(workouts, today),
        longest_streak=longest_streak(workouts),
    )

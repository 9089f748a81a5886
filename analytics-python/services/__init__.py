"""
Analytics Services Package

Contains the workout analytics engine:
- periods: calendar days, period windows, training percentages
- streaks: current/longest streak and log totals
- set_positions: per-set-position max/average performance
- consistency: rest intervals and Stable/Variable/Irregular patterns
- trends: 4-month trend detection and year-over-year comparison
- categories: per-category consistency and set counts
- targets: progress towards sets/reps/duration targets

Every function is a pure computation over a snapshot of the workout log.
"""

from .models import (
    ExerciseCatalog,
    ExerciseCategory,
    ExerciseDefinition,
    ExerciseKind,
    SetRecord,
    WorkoutLog,
    WorkoutRecord,
    duration_to_seconds,
)
from .periods import (
    ParsedDate,
    Period,
    PeriodWindow,
    UnknownPeriodError,
    calendar_day,
    days_between,
    monthly_training_percentages,
    parse_timestamp,
    period_window,
    training_percentage,
    yearly_training_percentages,
)
from .streaks import WorkoutStats, current_streak, longest_streak, workout_stats
from .set_positions import (
    AveragePositionRecord,
    PositionSeries,
    SetPositionRecord,
    SetPositionTracker,
    average_for_position,
    max_for_position,
    position_series,
)
from .consistency import (
    ConsistencyPattern,
    ConsistencySummary,
    RestInterval,
    analyze_consistency,
    category_predicate,
    classify_pattern,
    exercise_predicate,
)
from .trends import (
    ConsistencyReport,
    TrendDirection,
    TrendResult,
    YearComparison,
    analyze_trend,
    compare_years,
    consistency_report,
    detect_trend,
)
from .categories import category_consistency, category_set_counts, exercise_frequency
from .targets import TargetProgress, TargetStatus, TargetType, WorkoutTarget, target_progress
from .cache import AnalyticsCache
from .log_provider import InMemoryWorkoutLog, WorkoutLogProvider

__all__ = [
    'ExerciseCatalog',
    'ExerciseCategory',
    'ExerciseDefinition',
    'ExerciseKind',
    'SetRecord',
    'WorkoutLog',
    'WorkoutRecord',
    'duration_to_seconds',
    'ParsedDate',
    'Period',
    'PeriodWindow',
    'UnknownPeriodError',
    'calendar_day',
    'days_between',
    'monthly_training_percentages',
    'parse_timestamp',
    'period_window',
    'training_percentage',
    'yearly_training_percentages',
    'WorkoutStats',
    'current_streak',
    'longest_streak',
    'workout_stats',
    'AveragePositionRecord',
    'PositionSeries',
    'SetPositionRecord',
    'SetPositionTracker',
    'average_for_position',
    'max_for_position',
    'position_series',
    'ConsistencyPattern',
    'ConsistencySummary',
    'RestInterval',
    'analyze_consistency',
    'category_predicate',
    'classify_pattern',
    'exercise_predicate',
    'ConsistencyReport',
    'TrendDirection',
    'TrendResult',
    'YearComparison',
    'analyze_trend',
    'compare_years',
    'consistency_report',
    'detect_trend',
    'category_consistency',
    'category_set_counts',
    'exercise_frequency',
    'TargetProgress',
    'TargetStatus',
    'TargetType',
    'WorkoutTarget',
    'target_progress',
    'AnalyticsCache',
    'InMemoryWorkoutLog',
    'WorkoutLogProvider',
]

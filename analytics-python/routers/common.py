"""
Shared helpers for the API routers
"""

from fastapi import HTTPException

from services import ExerciseDefinition, WorkoutLog


def require_exercise(log: WorkoutLog, exercise_id: str) -> ExerciseDefinition:
    """Look up an exercise in the log's catalog or answer 404"""
    exercise = log.catalog.get(exercise_id)
    if exercise is None:
        raise HTTPException(status_code=404, detail="Exercise not found")
    return exercise


def exercise_info(exercise: ExerciseDefinition) -> dict:
    return {
        "id": exercise.id,
        "name": exercise.name,
        "category": exercise.category.value,
        "kind": exercise.kind.value,
    }

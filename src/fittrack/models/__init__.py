"""Data models for fittrack."""

from .exercises import Difficulty, Exercise, ExerciseCategory
from .progress import TRACKED_FIELDS, ProgressMetric
from .workout import Workout, WorkoutDuration, WorkoutExercise

__all__ = [
    "Difficulty",
    "Exercise",
    "ExerciseCategory",
    "ProgressMetric",
    "TRACKED_FIELDS",
    "Workout",
    "WorkoutDuration",
    "WorkoutExercise",
]

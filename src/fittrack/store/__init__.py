"""Data access layer for fittrack."""

from .client import StoreClient
from .repositories import (
    CategoryRepository,
    ExerciseRepository,
    ProgressMetricRepository,
    Repositories,
    WorkoutExerciseRepository,
    WorkoutRepository,
)
from .schema import TABLES, get_schema_path, load_schema_sql

__all__ = [
    "CategoryRepository",
    "ExerciseRepository",
    "get_schema_path",
    "load_schema_sql",
    "ProgressMetricRepository",
    "Repositories",
    "StoreClient",
    "TABLES",
    "WorkoutExerciseRepository",
    "WorkoutRepository",
]

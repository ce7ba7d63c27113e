"""CLI commands for fittrack."""

from .progress import progress
from .schema import schema
from .serve import serve
from .stats import stats
from .workouts import workouts

__all__ = [
    "progress",
    "schema",
    "serve",
    "stats",
    "workouts",
]

"""Derived metrics for the dashboard and progress views."""

from .progress import (
    MetricChange,
    chart_points,
    compute_change,
    format_one_decimal,
    latest_metric,
)
from .workouts import (
    WorkoutStats,
    compute_workout_stats,
    format_total_time,
    round_half_up,
)

__all__ = [
    "chart_points",
    "compute_change",
    "compute_workout_stats",
    "format_one_decimal",
    "format_total_time",
    "latest_metric",
    "MetricChange",
    "round_half_up",
    "WorkoutStats",
]

"""Dashboard statistics over a snapshot of workouts."""

import math
from collections.abc import Iterable, Mapping
from dataclasses import asdict, dataclass
from datetime import date, datetime, time, timedelta
from typing import Any, Protocol


class DatedDuration(Protocol):
    """Anything with a workout date and an optional duration.

    Plain mappings with the same keys are accepted too, with the date either
    a ``date`` or a ``YYYY-MM-DD`` string.
    """

    date: date
    duration_minutes: int | None


@dataclass(frozen=True)
class WorkoutStats:
    """Aggregate numbers shown on the dashboard."""

    total_workouts: int = 0
    this_week_workouts: int = 0
    total_minutes: int = 0
    avg_duration: int = 0

    def to_dict(self) -> dict:
        return asdict(self)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves rounding up.

    ``round()`` rounds halves to even (``round(2.5) == 2``); dashboard
    averages round ``2.5`` to ``3``.
    """
    return math.floor(value + 0.5)


def week_cutoff(now: datetime, window_days: int = 7) -> datetime:
    """The earliest instant counted as "this week"."""
    return now - timedelta(days=window_days)


def _field(workout: Any, name: str) -> Any:
    if isinstance(workout, Mapping):
        return workout.get(name)
    return getattr(workout, name, None)


def as_date(value: date | str) -> date:
    """Coerce a workout date, accepting ISO strings and datetimes."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(value[:10])


def is_within_window(workout_date: date, cutoff: datetime) -> bool:
    """Whether a workout dated ``workout_date`` (at midnight) is on or after ``cutoff``."""
    return datetime.combine(workout_date, time.min) >= cutoff


def compute_workout_stats(
    workouts: Iterable[DatedDuration | Mapping[str, Any]],
    now: datetime | None = None,
    window_days: int = 7,
) -> WorkoutStats:
    """Compute dashboard statistics.

    Args:
        workouts: Workout rows or mappings in any order; a missing duration
            counts as 0
        now: Reference time for the weekly window (defaults to local now)
        window_days: Length of the "this week" window in days

    Returns:
        Totals, the rounded average duration and the count of workouts in
        the window. Empty input yields all zeros.
    """
    if now is None:
        now = datetime.now()
    cutoff = week_cutoff(now, window_days)

    total_workouts = 0
    total_minutes = 0
    this_week = 0
    for workout in workouts:
        total_workouts += 1
        total_minutes += _field(workout, "duration_minutes") or 0
        if is_within_window(as_date(_field(workout, "date")), cutoff):
            this_week += 1

    avg_duration = round_half_up(total_minutes / total_workouts) if total_workouts else 0

    return WorkoutStats(
        total_workouts=total_workouts,
        this_week_workouts=this_week,
        total_minutes=total_minutes,
        avg_duration=avg_duration,
    )


def format_total_time(minutes: int) -> str:
    """Format minutes as ``"{hours}h {minutes}m"``."""
    hours, remainder = divmod(minutes, 60)
    return f"{hours}h {remainder}m"

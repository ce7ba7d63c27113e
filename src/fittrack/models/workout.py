"""Workout and logged-exercise models."""

from dataclasses import dataclass, field
from datetime import date, datetime

from .exercises import Exercise
from .fields import (
    read_date,
    read_float,
    read_int,
    read_optional_datetime,
    read_optional_str,
    read_str,
)


@dataclass
class Workout:
    """A single training session."""

    name: str
    date: date = field(default_factory=date.today)
    duration_minutes: int = 0
    notes: str | None = None
    user_id: str | None = None
    id: str | None = None
    created_at: datetime | None = None

    TABLE = "workouts"

    def to_dict(self) -> dict:
        """Convert to an insert payload."""
        return {
            "name": self.name,
            "date": self.date.isoformat(),
            "duration_minutes": self.duration_minutes,
            "notes": self.notes or None,
            "user_id": self.user_id,
        }

    @classmethod
    def from_row(cls, row: dict) -> "Workout":
        """Decode a row from the ``workouts`` table."""
        return cls(
            id=read_str(row, "id", cls.TABLE),
            name=read_str(row, "name", cls.TABLE),
            date=read_date(row, "date", cls.TABLE),
            duration_minutes=read_int(row, "duration_minutes", cls.TABLE, default=0),
            notes=read_optional_str(row, "notes", cls.TABLE),
            user_id=read_optional_str(row, "user_id", cls.TABLE),
            created_at=read_optional_datetime(row, "created_at", cls.TABLE),
        )


@dataclass
class WorkoutDuration:
    """The ``{date, duration_minutes}`` projection used for dashboard stats."""

    date: date
    duration_minutes: int | None = None

    @classmethod
    def from_row(cls, row: dict) -> "WorkoutDuration":
        duration = row.get("duration_minutes") if isinstance(row, dict) else None
        return cls(
            date=read_date(row, "date", Workout.TABLE),
            duration_minutes=(
                None
                if duration is None
                else read_int(row, "duration_minutes", Workout.TABLE)
            ),
        )


@dataclass
class WorkoutExercise:
    """An exercise performed as part of a workout."""

    workout_id: str
    exercise_id: str
    sets: int = 0
    reps: int = 0
    weight: float = 0.0
    duration_seconds: int = 0
    order_index: int = 0
    notes: str | None = None
    id: str | None = None
    exercise: Exercise | None = None  # only set when fetched with its exercise

    TABLE = "workout_exercises"

    def to_dict(self) -> dict:
        """Convert to an insert payload."""
        return {
            "workout_id": self.workout_id,
            "exercise_id": self.exercise_id,
            "sets": self.sets,
            "reps": self.reps,
            "weight": self.weight,
            "duration_seconds": self.duration_seconds,
            "order_index": self.order_index,
            "notes": self.notes or None,
        }

    @classmethod
    def from_row(cls, row: dict) -> "WorkoutExercise":
        """Decode a row, including an embedded ``exercise`` object if present."""
        exercise = None
        embedded = row.get("exercise") if isinstance(row, dict) else None
        if embedded is not None:
            exercise = Exercise.from_row(embedded)

        return cls(
            id=read_str(row, "id", cls.TABLE),
            workout_id=read_str(row, "workout_id", cls.TABLE),
            exercise_id=read_str(row, "exercise_id", cls.TABLE),
            sets=read_int(row, "sets", cls.TABLE, default=0),
            reps=read_int(row, "reps", cls.TABLE, default=0),
            weight=read_float(row, "weight", cls.TABLE, default=0.0),
            duration_seconds=read_int(row, "duration_seconds", cls.TABLE, default=0),
            order_index=read_int(row, "order_index", cls.TABLE, default=0),
            notes=read_optional_str(row, "notes", cls.TABLE),
            exercise=exercise,
        )

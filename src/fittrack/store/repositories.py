"""Data access layer for fittrack.

Each repository wraps one table of the hosted store and decodes rows into
models. All repositories share the ``StoreClient`` they are given.
"""

import uuid
from dataclasses import dataclass

from ..errors import RowDecodeError
from ..models.exercises import Exercise, ExerciseCategory
from ..models.progress import ProgressMetric
from ..models.workout import Workout, WorkoutDuration, WorkoutExercise
from .client import StoreClient

# Server-side function that counts and inserts under one row lock
APPEND_WORKOUT_EXERCISE_RPC = "append_workout_exercise"


def is_valid_id(value: str) -> bool:
    """Whether ``value`` can be a row ID (all primary keys are UUIDs)."""
    try:
        uuid.UUID(str(value))
    except ValueError:
        return False
    return True


class WorkoutRepository:
    """Repository for workouts."""

    def __init__(self, client: StoreClient):
        self.client = client

    async def list_recent(self, limit: int) -> list[Workout]:
        """List the most recent workouts, newest date first."""
        rows = await self.client.select(
            Workout.TABLE, order="date", descending=True, limit=limit
        )
        return [Workout.from_row(row) for row in rows]

    async def list_for_stats(self) -> list[WorkoutDuration]:
        """Fetch the date and duration of every workout."""
        rows = await self.client.select(Workout.TABLE, columns="duration_minutes,date")
        return [WorkoutDuration.from_row(row) for row in rows]

    async def get(self, workout_id: str) -> Workout | None:
        """Get a workout by ID.

        IDs that are not UUIDs cannot exist and return None without a query.
        """
        if not is_valid_id(workout_id):
            return None
        rows = await self.client.select(Workout.TABLE, filters={"id": workout_id})
        if not rows:
            return None
        return Workout.from_row(rows[0])

    async def create(self, workout: Workout) -> Workout:
        """Create a workout and return it with its generated fields."""
        row = await self.client.insert(Workout.TABLE, workout.to_dict())
        return Workout.from_row(row)

    async def delete(self, workout_id: str) -> None:
        """Delete a workout.

        The store cascades the delete to the workout's logged exercises;
        library exercises are never affected.
        """
        await self.client.delete(Workout.TABLE, {"id": workout_id})


class WorkoutExerciseRepository:
    """Repository for exercises logged within a workout."""

    def __init__(self, client: StoreClient):
        self.client = client

    async def list_for_workout(self, workout_id: str) -> list[WorkoutExercise]:
        """List a workout's exercises, joined with the exercise, in order."""
        rows = await self.client.select(
            WorkoutExercise.TABLE,
            columns="*,exercise:exercises(*)",
            filters={"workout_id": workout_id},
            order="order_index",
        )
        return [WorkoutExercise.from_row(row) for row in rows]

    async def count_for_workout(self, workout_id: str) -> int:
        """Count the exercises logged in a workout."""
        rows = await self.client.select(
            WorkoutExercise.TABLE, columns="id", filters={"workout_id": workout_id}
        )
        return len(rows)

    async def add(
        self,
        workout_id: str,
        exercise_id: str,
        sets: int,
        reps: int,
        weight: float,
        duration_seconds: int = 0,
        notes: str | None = None,
    ) -> WorkoutExercise:
        """Append an exercise to a workout.

        The new row's ``order_index`` is the number of rows the workout had
        before the insert. The count and the insert run in a single store
        transaction that locks the workout, so concurrent appends receive
        distinct indexes.
        """
        row = await self.client.rpc(
            APPEND_WORKOUT_EXERCISE_RPC,
            {
                "p_workout_id": workout_id,
                "p_exercise_id": exercise_id,
                "p_sets": sets,
                "p_reps": reps,
                "p_weight": weight,
                "p_duration_seconds": duration_seconds,
                "p_notes": notes or None,
            },
        )
        if not isinstance(row, dict):
            raise RowDecodeError(
                WorkoutExercise.TABLE,
                f"{APPEND_WORKOUT_EXERCISE_RPC} returned {type(row).__name__}",
            )
        return WorkoutExercise.from_row(row)

    async def delete(self, workout_exercise_id: str) -> None:
        """Remove one logged exercise. Remaining rows keep their indexes."""
        await self.client.delete(WorkoutExercise.TABLE, {"id": workout_exercise_id})


class ExerciseRepository:
    """Repository for the shared exercise library."""

    def __init__(self, client: StoreClient):
        self.client = client

    async def list_all(self, with_category: bool = False) -> list[Exercise]:
        """List all exercises ordered by name.

        Args:
            with_category: Also fetch each exercise's category name
        """
        columns = "*,category:exercise_categories(name)" if with_category else "*"
        rows = await self.client.select(Exercise.TABLE, columns=columns, order="name")
        return [Exercise.from_row(row) for row in rows]

    async def get(self, exercise_id: str) -> Exercise | None:
        """Get an exercise by ID. Malformed IDs return None."""
        if not is_valid_id(exercise_id):
            return None
        rows = await self.client.select(Exercise.TABLE, filters={"id": exercise_id})
        if not rows:
            return None
        return Exercise.from_row(rows[0])


class CategoryRepository:
    """Repository for exercise categories."""

    def __init__(self, client: StoreClient):
        self.client = client

    async def list_all(self) -> list[ExerciseCategory]:
        """List all categories ordered by name."""
        rows = await self.client.select(ExerciseCategory.TABLE, order="name")
        return [ExerciseCategory.from_row(row) for row in rows]


class ProgressMetricRepository:
    """Repository for body-metric progress entries."""

    def __init__(self, client: StoreClient):
        self.client = client

    async def list_chronological(self) -> list[ProgressMetric]:
        """List all entries, oldest date first."""
        rows = await self.client.select(ProgressMetric.TABLE, order="date")
        return [ProgressMetric.from_row(row) for row in rows]

    async def create(self, metric: ProgressMetric) -> ProgressMetric:
        """Record a new progress entry."""
        row = await self.client.insert(ProgressMetric.TABLE, metric.to_dict())
        return ProgressMetric.from_row(row)


@dataclass
class Repositories:
    """All repositories bound to one store client."""

    workouts: WorkoutRepository
    workout_exercises: WorkoutExerciseRepository
    exercises: ExerciseRepository
    categories: CategoryRepository
    progress: ProgressMetricRepository

    @classmethod
    def from_client(cls, client: StoreClient) -> "Repositories":
        return cls(
            workouts=WorkoutRepository(client),
            workout_exercises=WorkoutExerciseRepository(client),
            exercises=ExerciseRepository(client),
            categories=CategoryRepository(client),
            progress=ProgressMetricRepository(client),
        )

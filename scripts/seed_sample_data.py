#!/usr/bin/env python3
"""Insert a few sample workouts and progress entries into the store.

Requires the schema to be applied (``fittrack schema``) and
FITTRACK_STORE_URL / FITTRACK_STORE_KEY to be set.

Usage:
    python scripts/seed_sample_data.py
"""

import asyncio
from datetime import date, timedelta

from fittrack.config import Settings
from fittrack.models import ProgressMetric, Workout
from fittrack.store import Repositories, StoreClient

SAMPLE_WORKOUTS = [
    # (days ago, name, duration, exercise names)
    (1, "Upper Body Strength", 55, ["Bench Press", "Pull-ups"]),
    (3, "Leg Day", 60, ["Squats", "Deadlift"]),
    (6, "Easy Run", 30, ["Running"]),
    (12, "Core Circuit", 25, ["Plank"]),
]

SAMPLE_WEIGHTS = [(28, 184.0, 21.0), (21, 182.5, 20.4), (14, 181.0, 20.1), (7, 180.0, 19.5)]


async def seed() -> None:
    settings = Settings.from_env()
    async with StoreClient(settings) as client:
        repos = Repositories.from_client(client)

        if await repos.workouts.list_recent(1):
            print("Store already contains workouts")
            return

        library = {e.name: e for e in await repos.exercises.list_all()}
        today = date.today()

        for days_ago, name, duration, exercise_names in SAMPLE_WORKOUTS:
            workout = await repos.workouts.create(
                Workout(name=name, date=today - timedelta(days=days_ago), duration_minutes=duration)
            )
            for exercise_name in exercise_names:
                exercise = library.get(exercise_name)
                if exercise is None:
                    print(f"  skipping unknown exercise {exercise_name}")
                    continue
                await repos.workout_exercises.add(
                    workout_id=workout.id,
                    exercise_id=exercise.id,
                    sets=3,
                    reps=10,
                    weight=0.0,
                )
            print(f"Created workout {workout.name} ({len(exercise_names)} exercises)")

        for days_ago, weight, body_fat in SAMPLE_WEIGHTS:
            await repos.progress.create(
                ProgressMetric(
                    date=today - timedelta(days=days_ago),
                    weight=weight,
                    body_fat_percentage=body_fat,
                )
            )
        print(f"Recorded {len(SAMPLE_WEIGHTS)} progress entries")


if __name__ == "__main__":
    asyncio.run(seed())

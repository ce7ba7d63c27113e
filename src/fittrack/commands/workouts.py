"""Workout management commands."""

from datetime import date

import click
import questionary
from questionary import Style

from ..errors import StoreError
from ..models.exercises import Exercise
from ..models.workout import Workout
from ..utils.exercise_utils import filter_exercises, format_long_date, format_number
from .base import (
    async_command,
    echo_error,
    echo_info,
    echo_success,
    format_table,
    open_repositories,
)

custom_style = Style(
    [
        ("qmark", "fg:#2563eb bold"),
        ("question", "bold"),
        ("answer", "fg:#16a34a bold"),
        ("pointer", "fg:#2563eb bold"),
        ("highlighted", "fg:#2563eb bold"),
    ]
)


@click.group()
def workouts():
    """Create, view and edit workouts."""
    pass


@workouts.command("list")
@click.option("--limit", "-n", default=6, show_default=True, type=click.IntRange(min=1))
@click.pass_context
@async_command
async def list_workouts(ctx: click.Context, limit: int):
    """List the most recent workouts."""
    async with open_repositories(ctx) as repos:
        try:
            recent = await repos.workouts.list_recent(limit)
        except StoreError as e:
            echo_error(f"Failed to load workouts: {e}")
            ctx.exit(1)

    if not recent:
        echo_info("No workouts yet. Create one with 'fittrack workouts create'.")
        return

    rows = [
        [w.date.isoformat(), w.name, f"{w.duration_minutes} min", w.id]
        for w in recent
    ]
    click.echo(format_table(["Date", "Name", "Duration", "ID"], rows))


@workouts.command("show")
@click.argument("workout_id")
@click.pass_context
@async_command
async def show(ctx: click.Context, workout_id: str):
    """Show a workout and its exercises."""
    async with open_repositories(ctx) as repos:
        try:
            workout = await repos.workouts.get(workout_id)
            logged = (
                await repos.workout_exercises.list_for_workout(workout_id)
                if workout
                else []
            )
        except StoreError as e:
            echo_error(f"Failed to load workout: {e}")
            ctx.exit(1)

    if workout is None:
        echo_error("Workout not found")
        ctx.exit(1)

    click.echo()
    click.echo(click.style(workout.name, bold=True))
    click.echo(f"{format_long_date(workout.date)} - {workout.duration_minutes} minutes")
    if workout.notes:
        click.echo(workout.notes)
    click.echo()

    if not logged:
        echo_info("No exercises added yet")
        return

    for position, item in enumerate(logged, start=1):
        name = item.exercise.name if item.exercise else item.exercise_id
        detail = f"{item.sets} sets x {item.reps} reps"
        if item.weight > 0:
            detail += f" @ {format_number(item.weight)} lbs"
        click.echo(f"  {position}. {name}: {detail}  [{item.id}]")


@workouts.command("create")
@click.argument("name")
@click.option(
    "--date",
    "workout_date",
    type=click.DateTime(formats=["%Y-%m-%d"]),
    help="Workout date (default: today)",
)
@click.option("--duration", default=60, show_default=True, type=click.IntRange(min=0),
              help="Duration in minutes")
@click.option("--notes", default="", help="Optional notes")
@click.pass_context
@async_command
async def create(ctx: click.Context, name: str, workout_date, duration: int, notes: str):
    """Create a new workout."""
    workout = Workout(
        name=name,
        date=workout_date.date() if workout_date else date.today(),
        duration_minutes=duration,
        notes=notes or None,
    )
    async with open_repositories(ctx) as repos:
        try:
            created = await repos.workouts.create(workout)
        except StoreError as e:
            echo_error(f"Failed to create workout: {e}")
            ctx.exit(1)

    echo_success(f"Workout created: {created.name} ({created.id})")


async def _prompt_exercise(exercises: list[Exercise]) -> Exercise | None:
    """Interactively search and pick an exercise."""
    query = await questionary.text(
        "Search exercises (blank for all):", style=custom_style
    ).ask_async()
    matches = filter_exercises(exercises, query=query or None)
    if not matches:
        echo_info("No exercises match your search")
        return None

    return await questionary.select(
        "Select an exercise:",
        choices=[
            questionary.Choice(f"{e.name} ({e.difficulty})", e) for e in matches
        ],
        style=custom_style,
    ).ask_async()


async def _prompt_int(message: str, default: int) -> int | None:
    """Ask for a positive whole number; None if the prompt was cancelled."""
    answer = await questionary.text(
        message,
        default=str(default),
        validate=lambda v: v.isdigit() and int(v) >= 1 or "Enter a whole number >= 1",
        style=custom_style,
    ).ask_async()
    if answer is None:
        return None
    return int(answer)


@workouts.command("add-exercise")
@click.argument("workout_id")
@click.option("--exercise-id", help="Exercise to add (prompts when omitted)")
@click.option("--sets", type=click.IntRange(min=1), help="Number of sets")
@click.option("--reps", type=click.IntRange(min=1), help="Reps per set")
@click.option("--weight", type=click.FloatRange(min=0), help="Weight in lbs")
@click.pass_context
@async_command
async def add_exercise(
    ctx: click.Context,
    workout_id: str,
    exercise_id: str | None,
    sets: int | None,
    reps: int | None,
    weight: float | None,
):
    """Append an exercise to a workout.

    Missing values are asked for interactively.
    """
    async with open_repositories(ctx) as repos:
        try:
            if exercise_id is None:
                exercise = await _prompt_exercise(await repos.exercises.list_all())
                if exercise is None:
                    return
                exercise_id = exercise.id
            if sets is None:
                sets = await _prompt_int("Sets:", 3)
            if reps is None and sets is not None:
                reps = await _prompt_int("Reps:", 10)
            if sets is None or reps is None:
                echo_info("Cancelled")
                return
            if weight is None:
                weight = 0.0

            added = await repos.workout_exercises.add(
                workout_id=workout_id,
                exercise_id=exercise_id,
                sets=sets,
                reps=reps,
                weight=weight,
            )
        except StoreError as e:
            echo_error(f"Failed to add exercise: {e}")
            ctx.exit(1)

    echo_success(f"Exercise added at position {added.order_index + 1}")


@workouts.command("remove-exercise")
@click.argument("workout_exercise_id")
@click.pass_context
@async_command
async def remove_exercise(ctx: click.Context, workout_exercise_id: str):
    """Remove a logged exercise from its workout."""
    async with open_repositories(ctx) as repos:
        try:
            await repos.workout_exercises.delete(workout_exercise_id)
        except StoreError as e:
            echo_error(f"Failed to remove exercise: {e}")
            ctx.exit(1)

    echo_success("Exercise removed")


@workouts.command("delete")
@click.argument("workout_id")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
@async_command
async def delete(ctx: click.Context, workout_id: str, yes: bool):
    """Delete a workout and its logged exercises."""
    if not yes and not click.confirm("Delete this workout and all its exercises?"):
        return

    async with open_repositories(ctx) as repos:
        try:
            await repos.workouts.delete(workout_id)
        except StoreError as e:
            echo_error(f"Failed to delete workout: {e}")
            ctx.exit(1)

    echo_success("Workout deleted")

"""Workout routes: create, view, delete, and manage logged exercises."""

import logging
from datetime import date

from fastapi import APIRouter, Form, Request, Response
from fastapi.responses import HTMLResponse, RedirectResponse

from ...errors import StoreError
from ...models.workout import Workout
from ...utils.exercise_utils import filter_exercises
from ..deps import get_repositories, get_templates
from ..loading import CLIENT_CLOSED_REQUEST, load_while_connected

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/workouts", tags=["workouts"])


def _redirect(url: str) -> RedirectResponse:
    return RedirectResponse(url=url, status_code=303)


@router.post("")
async def create_workout(
    request: Request,
    name: str = Form(...),
    workout_date: str = Form("", alias="date"),
    duration_minutes: int = Form(60, ge=0),
    notes: str = Form(""),
):
    """Create a workout from the new-workout form."""
    if not name.strip():
        return _redirect("/?error=invalid_input")

    try:
        parsed_date = date.fromisoformat(workout_date) if workout_date else date.today()
    except ValueError:
        return _redirect("/?error=invalid_input")

    workout = Workout(
        name=name.strip(),
        date=parsed_date,
        duration_minutes=duration_minutes,
        notes=notes.strip() or None,
    )

    repos = get_repositories(request)
    try:
        created = await repos.workouts.create(workout)
    except StoreError:
        logger.exception("Error creating workout")
        return _redirect("/?error=create_failed")

    logger.info("Created workout %s (%s)", created.id, created.name)
    return _redirect("/?notice=workout_created")


@router.get("/{workout_id}", response_class=HTMLResponse)
async def workout_detail(request: Request, workout_id: str, q: str = ""):
    """Workout page with its exercises and the add-exercise selector."""
    templates = get_templates(request)
    repos = get_repositories(request)

    async def load():
        workout = await repos.workouts.get(workout_id)
        if workout is None:
            return None, [], []
        logged = await repos.workout_exercises.list_for_workout(workout_id)
        library = await repos.exercises.list_all()
        return workout, logged, library

    try:
        loaded = await load_while_connected(request, load())
    except StoreError:
        logger.exception("Error loading workout %s", workout_id)
        return _redirect("/?error=load_failed")

    if loaded is None:
        return Response(status_code=CLIENT_CLOSED_REQUEST)

    workout, logged, library = loaded
    if workout is None:
        return templates.TemplateResponse(
            request,
            "not_found.html",
            {"message": "Workout not found"},
            status_code=404,
        )

    return templates.TemplateResponse(
        request,
        "workout_detail.html",
        {
            "workout": workout,
            "workout_exercises": logged,
            "library": filter_exercises(library, query=q),
            "query": q,
        },
    )


@router.post("/{workout_id}/delete")
async def delete_workout(request: Request, workout_id: str):
    """Delete a workout together with its logged exercises."""
    repos = get_repositories(request)
    try:
        await repos.workouts.delete(workout_id)
    except StoreError:
        logger.exception("Error deleting workout %s", workout_id)
        return _redirect(f"/workouts/{workout_id}?error=delete_failed")

    return _redirect("/?notice=workout_deleted")


@router.post("/{workout_id}/exercises")
async def add_exercise(
    request: Request,
    workout_id: str,
    exercise_id: str = Form(...),
    sets: int = Form(3, ge=1),
    reps: int = Form(10, ge=1),
    weight: float = Form(0.0, ge=0),
):
    """Append an exercise to the workout."""
    repos = get_repositories(request)
    try:
        added = await repos.workout_exercises.add(
            workout_id=workout_id,
            exercise_id=exercise_id,
            sets=sets,
            reps=reps,
            weight=weight,
        )
    except StoreError:
        logger.exception("Error adding exercise to workout %s", workout_id)
        return _redirect(f"/workouts/{workout_id}?error=add_failed")

    logger.info(
        "Added exercise %s to workout %s at position %d",
        exercise_id,
        workout_id,
        added.order_index,
    )
    return _redirect(f"/workouts/{workout_id}?notice=exercise_added")


@router.post("/{workout_id}/exercises/{workout_exercise_id}/delete")
async def remove_exercise(request: Request, workout_id: str, workout_exercise_id: str):
    """Remove a logged exercise from the workout."""
    repos = get_repositories(request)
    try:
        await repos.workout_exercises.delete(workout_exercise_id)
    except StoreError:
        logger.exception("Error removing exercise %s", workout_exercise_id)
        return _redirect(f"/workouts/{workout_id}?error=remove_failed")

    return _redirect(f"/workouts/{workout_id}?notice=exercise_removed")

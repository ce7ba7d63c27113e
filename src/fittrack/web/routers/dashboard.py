"""Dashboard route: recent workouts and aggregate statistics."""

import logging
from datetime import date

from fastapi import APIRouter, Request, Response
from fastapi.responses import HTMLResponse

from ...errors import StoreError
from ...metrics import WorkoutStats, compute_workout_stats
from ..deps import get_repositories, get_settings, get_templates
from ..loading import CLIENT_CLOSED_REQUEST, load_while_connected

logger = logging.getLogger(__name__)

router = APIRouter(tags=["dashboard"])


@router.get("/", response_class=HTMLResponse)
async def dashboard(request: Request):
    """Dashboard with the latest workouts and training totals."""
    templates = get_templates(request)
    settings = get_settings(request)
    repos = get_repositories(request)

    async def load():
        recent = await repos.workouts.list_recent(settings.recent_limit)
        stats = compute_workout_stats(await repos.workouts.list_for_stats())
        exercise_counts = {
            workout.id: await repos.workout_exercises.count_for_workout(workout.id)
            for workout in recent
        }
        return recent, stats, exercise_counts

    load_error = None
    try:
        loaded = await load_while_connected(request, load())
    except StoreError:
        logger.exception("Error loading dashboard data")
        load_error = "load_failed"
        loaded = ([], WorkoutStats(), {})

    if loaded is None:
        return Response(status_code=CLIENT_CLOSED_REQUEST)

    recent, stats, exercise_counts = loaded
    return templates.TemplateResponse(
        request,
        "dashboard.html",
        {
            "workouts": recent,
            "stats": stats,
            "exercise_counts": exercise_counts,
            "today": date.today().isoformat(),
            "load_error": load_error,
        },
    )

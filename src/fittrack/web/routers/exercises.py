"""Exercise library routes."""

import logging

from fastapi import APIRouter, Request, Response
from fastapi.responses import HTMLResponse

from ...errors import StoreError
from ...utils.exercise_utils import filter_exercises
from ..deps import get_repositories, get_templates
from ..loading import CLIENT_CLOSED_REQUEST, load_while_connected

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/exercises", tags=["exercises"])


@router.get("", response_class=HTMLResponse)
async def exercise_library(request: Request, category: str = "", q: str = ""):
    """Browse the exercise library, optionally filtered by category and search text."""
    templates = get_templates(request)
    repos = get_repositories(request)

    async def load():
        categories = await repos.categories.list_all()
        exercises = await repos.exercises.list_all(with_category=True)
        return categories, exercises

    load_error = None
    try:
        loaded = await load_while_connected(request, load())
    except StoreError:
        logger.exception("Error loading exercises")
        load_error = "load_failed"
        loaded = ([], [])

    if loaded is None:
        return Response(status_code=CLIENT_CLOSED_REQUEST)

    categories, exercises = loaded
    return templates.TemplateResponse(
        request,
        "exercises.html",
        {
            "categories": categories,
            "exercises": filter_exercises(exercises, query=q, category_id=category or None),
            "selected_category": category or None,
            "query": q,
            "load_error": load_error,
        },
    )

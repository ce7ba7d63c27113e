"""JSON endpoints exposing the derived metrics."""

import logging

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from ...errors import StoreError
from ...metrics import compute_change, compute_workout_stats, format_total_time
from ...models.progress import TRACKED_FIELDS
from ..deps import get_repositories

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["api"])


def _store_unavailable(error: StoreError) -> JSONResponse:
    return JSONResponse({"error": str(error)}, status_code=502)


@router.get("/stats")
async def workout_stats(request: Request):
    """Dashboard statistics as JSON."""
    repos = get_repositories(request)
    try:
        rows = await repos.workouts.list_for_stats()
    except StoreError as e:
        logger.exception("Error loading workout stats")
        return _store_unavailable(e)

    stats = compute_workout_stats(rows)
    return {**stats.to_dict(), "total_time": format_total_time(stats.total_minutes)}


@router.get("/progress/changes")
async def progress_changes(request: Request):
    """Change between the two latest entries for each tracked field."""
    repos = get_repositories(request)
    try:
        metrics = await repos.progress.list_chronological()
    except StoreError as e:
        logger.exception("Error loading progress metrics")
        return _store_unavailable(e)

    changes = {}
    for field in TRACKED_FIELDS:
        change = compute_change(metrics, field)
        changes[field] = change.to_dict() if change else None
    return changes

"""Body-metric progress routes."""

import logging
from datetime import date

from fastapi import APIRouter, Form, Request, Response
from fastapi.responses import HTMLResponse, RedirectResponse

from ...errors import StoreError
from ...metrics import chart_points, compute_change, latest_metric
from ...models.progress import ProgressMetric
from ..deps import get_repositories, get_templates
from ..loading import CLIENT_CLOSED_REQUEST, load_while_connected

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/progress", tags=["progress"])


def parse_optional_float(value: str) -> float | None:
    """Parse a numeric form field; blank means not recorded."""
    value = value.strip()
    if not value:
        return None
    return float(value)


@router.get("", response_class=HTMLResponse)
async def progress_page(request: Request):
    """Progress page with latest values, changes, charts and history."""
    templates = get_templates(request)
    repos = get_repositories(request)

    load_error = None
    try:
        metrics = await load_while_connected(request, repos.progress.list_chronological())
    except StoreError:
        logger.exception("Error loading progress metrics")
        load_error = "load_failed"
        metrics = []

    if metrics is None:
        return Response(status_code=CLIENT_CLOSED_REQUEST)

    return templates.TemplateResponse(
        request,
        "progress.html",
        {
            "metrics": metrics,
            "history": list(reversed(metrics)),
            "latest": latest_metric(metrics),
            "weight_change": compute_change(metrics, "weight"),
            "body_fat_change": compute_change(metrics, "body_fat_percentage"),
            "chart_points": chart_points(metrics),
            "today": date.today().isoformat(),
            "load_error": load_error,
        },
    )


@router.post("")
async def log_progress(
    request: Request,
    metric_date: str = Form(..., alias="date"),
    weight: str = Form(""),
    body_fat_percentage: str = Form(""),
    notes: str = Form(""),
):
    """Record a progress entry from the log-progress form."""
    try:
        metric = ProgressMetric(
            date=date.fromisoformat(metric_date),
            weight=parse_optional_float(weight),
            body_fat_percentage=parse_optional_float(body_fat_percentage),
            notes=notes.strip() or None,
        )
    except ValueError:
        return RedirectResponse(url="/progress?error=invalid_input", status_code=303)

    repos = get_repositories(request)
    try:
        await repos.progress.create(metric)
    except StoreError:
        logger.exception("Error saving progress metric")
        return RedirectResponse(url="/progress?error=save_failed", status_code=303)

    return RedirectResponse(url="/progress?notice=progress_logged", status_code=303)

"""Body-metric progress commands."""

from datetime import date

import click

from ..errors import StoreError
from ..metrics import MetricChange, compute_change, latest_metric
from ..models.progress import ProgressMetric
from ..utils.exercise_utils import format_number
from .base import (
    async_command,
    echo_error,
    echo_info,
    echo_success,
    format_table,
    open_repositories,
)


@click.group()
def progress():
    """Record and review body-metric progress."""
    pass


def _format_change(change: MetricChange | None, unit: str) -> str:
    if change is None:
        return ""
    sign = "+" if change.is_positive else ""
    text = f"{sign}{change.change}{unit}"
    if change.percent_change is not None:
        text += f" ({change.percent_change}%)"
    color = "red" if change.is_positive else "green"
    return click.style(text, fg=color) + " vs last entry"


@progress.command("show")
@click.option("--history", "-n", default=10, show_default=True, type=click.IntRange(min=0),
              help="Number of history entries to list")
@click.pass_context
@async_command
async def show(ctx: click.Context, history: int):
    """Show the latest measurements and how they changed."""
    async with open_repositories(ctx) as repos:
        try:
            metrics = await repos.progress.list_chronological()
        except StoreError as e:
            echo_error(f"Failed to load progress data: {e}")
            ctx.exit(1)

    if not metrics:
        echo_info("No progress data yet. Record an entry with 'fittrack progress log'.")
        return

    latest = latest_metric(metrics)
    weight = f"{format_number(latest.weight)} lbs" if latest.weight else "No data"
    body_fat = (
        f"{format_number(latest.body_fat_percentage)}%"
        if latest.body_fat_percentage
        else "No data"
    )

    click.echo()
    click.echo(click.style("Progress Tracking", bold=True))
    click.echo("=" * 40)
    weight_change = _format_change(compute_change(metrics, "weight"), " lbs")
    body_fat_change = _format_change(compute_change(metrics, "body_fat_percentage"), "%")
    click.echo(f"Current weight: {weight}  {weight_change}".rstrip())
    click.echo(f"Body fat:       {body_fat}  {body_fat_change}".rstrip())

    if history:
        click.echo()
        rows = [
            [
                m.date.isoformat(),
                format_number(m.weight) if m.weight else "-",
                format_number(m.body_fat_percentage) if m.body_fat_percentage else "-",
                m.notes or "",
            ]
            for m in list(reversed(metrics))[:history]
        ]
        click.echo(format_table(["Date", "Weight", "Body Fat %", "Notes"], rows))


@progress.command("log")
@click.option(
    "--date",
    "metric_date",
    type=click.DateTime(formats=["%Y-%m-%d"]),
    help="Measurement date (default: today)",
)
@click.option("--weight", type=float, help="Body weight in lbs")
@click.option("--body-fat", type=float, help="Body fat percentage")
@click.option("--notes", default="", help="Optional notes")
@click.pass_context
@async_command
async def log(ctx: click.Context, metric_date, weight, body_fat, notes: str):
    """Record a progress entry."""
    if weight is None and body_fat is None and not notes:
        echo_error("Provide at least one of --weight, --body-fat or --notes.")
        ctx.exit(1)

    metric = ProgressMetric(
        date=metric_date.date() if metric_date else date.today(),
        weight=weight,
        body_fat_percentage=body_fat,
        notes=notes or None,
    )
    async with open_repositories(ctx) as repos:
        try:
            await repos.progress.create(metric)
        except StoreError as e:
            echo_error(f"Failed to save progress: {e}")
            ctx.exit(1)

    echo_success("Progress recorded!")

"""Dashboard statistics command."""

import click

from ..errors import StoreError
from ..metrics import compute_workout_stats, format_total_time
from .base import async_command, echo_error, open_repositories


@click.command()
@click.option(
    "--days",
    default=7,
    show_default=True,
    type=click.IntRange(min=1),
    help="Length of the recent-activity window",
)
@click.pass_context
@async_command
async def stats(ctx: click.Context, days: int):
    """Show workout totals and recent activity."""
    async with open_repositories(ctx) as repos:
        try:
            rows = await repos.workouts.list_for_stats()
        except StoreError as e:
            echo_error(f"Failed to load workouts: {e}")
            ctx.exit(1)

    result = compute_workout_stats(rows, window_days=days)

    lines = [
        ("Total workouts:", str(result.total_workouts)),
        (f"Last {days} days:", str(result.this_week_workouts)),
        ("Total time:", format_total_time(result.total_minutes)),
        ("Avg duration:", f"{result.avg_duration}min"),
    ]

    click.echo()
    click.echo(click.style("Training Summary", bold=True))
    click.echo("=" * 40)
    for label, value in lines:
        click.echo(f"{label.ljust(18)}{value}")

"""CLI entry point for fittrack."""

import click

from . import __version__
from .commands import progress, schema, serve, stats, workouts
from .config import configure_logging


@click.group()
@click.version_option(version=__version__, prog_name="fittrack")
@click.option(
    "--log-level",
    envvar="FITTRACK_LOG_LEVEL",
    default="WARNING",
    show_default=True,
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Logging verbosity for CLI commands",
)
@click.pass_context
def main(ctx: click.Context, log_level: str):
    """fittrack: log workouts and track body-metric progress.

    Data lives in a hosted Postgres store reached over its REST interface.
    Configure it with FITTRACK_STORE_URL and FITTRACK_STORE_KEY.

    Example usage:

        # Print the schema to run once in the store
        fittrack schema

        # Log a workout and add an exercise to it
        fittrack workouts create "Upper Body Strength" --duration 45
        fittrack workouts add-exercise <workout-id>

        # Record and review progress
        fittrack progress log --weight 180 --body-fat 18.5
        fittrack progress show

        # Start the web interface
        fittrack serve
    """
    ctx.ensure_object(dict)
    configure_logging(log_level)


main.add_command(schema)
main.add_command(serve)
main.add_command(stats)
main.add_command(workouts)
main.add_command(progress)


def run():
    """Run the CLI."""
    main()


if __name__ == "__main__":
    run()

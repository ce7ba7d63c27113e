"""Schema migration command."""

from pathlib import Path

import click

from ..store import get_schema_path, load_schema_sql
from .base import echo_success


@click.command()
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, writable=True, path_type=Path),
    help="Write the script to a file instead of stdout",
)
def schema(output: Path | None):
    """Print the SQL migration that creates the store's tables.

    Run the script once in the hosted database's SQL editor before the
    first start. It creates the tables, access policies, indexes, the
    append_workout_exercise function and a starter exercise library.
    """
    sql = load_schema_sql()
    if output is None:
        click.echo(sql, nl=False)
        return

    output.write_text(sql, encoding="utf-8")
    echo_success(f"Wrote {get_schema_path().name} to {output}")

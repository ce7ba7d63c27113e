"""Access to the store migration script shipped with the package."""

from pathlib import Path

SCHEMA_PATH = Path(__file__).parent / "schema.sql"

# Tables the application reads and writes, leaf first
TABLES = (
    "exercise_categories",
    "exercises",
    "workouts",
    "workout_exercises",
    "progress_metrics",
)


def get_schema_path() -> Path:
    """Get the path of the schema migration script."""
    return SCHEMA_PATH


def load_schema_sql() -> str:
    """Read the schema migration script."""
    return SCHEMA_PATH.read_text(encoding="utf-8")

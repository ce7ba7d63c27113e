"""Exercise library models."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from .fields import (
    read_optional_datetime,
    read_optional_str,
    read_str,
    read_str_list,
)


class Difficulty(str, Enum):
    """Known exercise difficulty levels.

    The column is free text in the store, so exercises keep the raw string
    and use ``Exercise.difficulty_level`` to map it onto this enum.
    """

    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


@dataclass
class ExerciseCategory:
    """A named grouping of exercises (Strength, Cardio, ...)."""

    id: str
    name: str
    description: str | None = None
    created_at: datetime | None = None

    TABLE = "exercise_categories"

    def to_dict(self) -> dict:
        """Convert to an insert payload."""
        return {"name": self.name, "description": self.description}

    @classmethod
    def from_row(cls, row: dict) -> "ExerciseCategory":
        """Decode a row from the ``exercise_categories`` table."""
        return cls(
            id=read_str(row, "id", cls.TABLE),
            name=read_str(row, "name", cls.TABLE),
            description=read_optional_str(row, "description", cls.TABLE),
            created_at=read_optional_datetime(row, "created_at", cls.TABLE),
        )


@dataclass
class Exercise:
    """An exercise in the shared library."""

    id: str
    name: str
    description: str | None = None
    category_id: str | None = None
    muscle_groups: list[str] = field(default_factory=list)
    difficulty: str = Difficulty.INTERMEDIATE.value
    instructions: str | None = None
    created_at: datetime | None = None
    category_name: str | None = None  # only set when fetched with its category

    TABLE = "exercises"

    @property
    def difficulty_level(self) -> Difficulty | None:
        """The difficulty as an enum member, or None for non-standard values."""
        try:
            return Difficulty(self.difficulty)
        except ValueError:
            return None

    def to_dict(self) -> dict:
        """Convert to an insert payload."""
        return {
            "name": self.name,
            "description": self.description,
            "category_id": self.category_id,
            "muscle_groups": list(self.muscle_groups),
            "difficulty": self.difficulty,
            "instructions": self.instructions,
        }

    @classmethod
    def from_row(cls, row: dict) -> "Exercise":
        """Decode a row from the ``exercises`` table.

        An embedded ``category`` object (``category:exercise_categories(name)``)
        is flattened into ``category_name``.
        """
        category_name = None
        category = row.get("category") if isinstance(row, dict) else None
        if category is not None:
            category_name = read_str(category, "name", ExerciseCategory.TABLE)

        return cls(
            id=read_str(row, "id", cls.TABLE),
            name=read_str(row, "name", cls.TABLE),
            description=read_optional_str(row, "description", cls.TABLE),
            category_id=read_optional_str(row, "category_id", cls.TABLE),
            muscle_groups=read_str_list(row, "muscle_groups", cls.TABLE),
            difficulty=(
                read_optional_str(row, "difficulty", cls.TABLE)
                or Difficulty.INTERMEDIATE.value
            ),
            instructions=read_optional_str(row, "instructions", cls.TABLE),
            created_at=read_optional_datetime(row, "created_at", cls.TABLE),
            category_name=category_name,
        )

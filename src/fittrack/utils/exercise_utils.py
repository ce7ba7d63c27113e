"""Helpers for browsing the exercise library and formatting display values."""

import re
from collections.abc import Iterable
from datetime import date

from ..models.exercises import Difficulty, Exercise

# Common abbreviations expanded before matching search queries
ABBREVIATIONS = {
    "bb": "barbell",
    "db": "dumbbell",
    "kb": "kettlebell",
    "ohp": "overhead press",
    "rdl": "romanian deadlift",
}

DIFFICULTY_BADGES = {
    Difficulty.BEGINNER: "badge-beginner",
    Difficulty.INTERMEDIATE: "badge-intermediate",
    Difficulty.ADVANCED: "badge-advanced",
}
DEFAULT_BADGE = "badge-default"


def normalize_search_text(text: str) -> str:
    """Normalize text for case-insensitive matching.

    Lowercases, collapses whitespace and expands common abbreviations.
    """
    normalized = re.sub(r"\s+", " ", text.lower().strip())
    if normalized in ABBREVIATIONS:
        return ABBREVIATIONS[normalized]
    for abbrev, full in ABBREVIATIONS.items():
        normalized = re.sub(rf"\b{abbrev}\b", full, normalized)
    return normalized


def matches_query(exercise: Exercise, query: str) -> bool:
    """Whether the exercise name or any muscle group contains ``query``."""
    needle = normalize_search_text(query)
    if not needle:
        return True
    if needle in normalize_search_text(exercise.name):
        return True
    return any(needle in group.lower() for group in exercise.muscle_groups)


def filter_exercises(
    exercises: Iterable[Exercise],
    query: str | None = None,
    category_id: str | None = None,
) -> list[Exercise]:
    """Filter exercises by search text and category, keeping their order.

    An empty query or category matches everything.
    """
    result = []
    for exercise in exercises:
        if category_id and exercise.category_id != category_id:
            continue
        if query and not matches_query(exercise, query):
            continue
        result.append(exercise)
    return result


def difficulty_badge(difficulty: str) -> str:
    """CSS class for a difficulty badge; unknown values get a neutral badge."""
    try:
        return DIFFICULTY_BADGES[Difficulty(difficulty)]
    except ValueError:
        return DEFAULT_BADGE


def format_short_date(value: date) -> str:
    """Format as ``"Jan 8, 2024"``."""
    return f"{value:%b} {value.day}, {value.year}"


def format_long_date(value: date) -> str:
    """Format as ``"Monday, January 8, 2024"``."""
    return f"{value:%A, %B} {value.day}, {value.year}"


def format_number(value: float | None) -> str:
    """Format a measurement without a trailing ``.0``."""
    if value is None:
        return ""
    if value == int(value):
        return str(int(value))
    return f"{value:g}"

"""Body-metric progress model."""

from dataclasses import dataclass, field
from datetime import date, datetime

from .fields import (
    read_date,
    read_number_map,
    read_optional_datetime,
    read_optional_float,
    read_optional_str,
    read_str,
)

# Numeric fields that support period-over-period comparison
TRACKED_FIELDS = ("weight", "body_fat_percentage")


@dataclass
class ProgressMetric:
    """A dated body measurement entry.

    ``weight`` and ``body_fat_percentage`` are optional; ``measurements``
    holds any additional named values (chest, waist, ...).
    """

    date: date = field(default_factory=date.today)
    weight: float | None = None
    body_fat_percentage: float | None = None
    measurements: dict[str, float] = field(default_factory=dict)
    notes: str | None = None
    user_id: str | None = None
    id: str | None = None
    created_at: datetime | None = None

    TABLE = "progress_metrics"

    def value_of(self, field_name: str) -> float | None:
        """Return the value of a tracked numeric field."""
        if field_name not in TRACKED_FIELDS:
            raise ValueError(
                f"Unknown progress field '{field_name}', expected one of {TRACKED_FIELDS}"
            )
        return getattr(self, field_name)

    def to_dict(self) -> dict:
        """Convert to an insert payload."""
        return {
            "date": self.date.isoformat(),
            "weight": self.weight,
            "body_fat_percentage": self.body_fat_percentage,
            "measurements": dict(self.measurements),
            "notes": self.notes or None,
            "user_id": self.user_id,
        }

    @classmethod
    def from_row(cls, row: dict) -> "ProgressMetric":
        """Decode a row from the ``progress_metrics`` table."""
        return cls(
            id=read_str(row, "id", cls.TABLE),
            date=read_date(row, "date", cls.TABLE),
            weight=read_optional_float(row, "weight", cls.TABLE),
            body_fat_percentage=read_optional_float(row, "body_fat_percentage", cls.TABLE),
            measurements=read_number_map(row, "measurements", cls.TABLE),
            notes=read_optional_str(row, "notes", cls.TABLE),
            user_id=read_optional_str(row, "user_id", cls.TABLE),
            created_at=read_optional_datetime(row, "created_at", cls.TABLE),
        )

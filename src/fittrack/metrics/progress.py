"""Period-over-period changes and chart data for body metrics."""

from collections.abc import Sequence
from dataclasses import asdict, dataclass
from decimal import ROUND_HALF_UP, Decimal

from ..models.progress import TRACKED_FIELDS, ProgressMetric


@dataclass(frozen=True)
class MetricChange:
    """Change between the two most recent entries of one field.

    ``change`` and ``percent_change`` are formatted to one decimal place.
    ``percent_change`` is None only when the previous value is 0 and zeros
    were not treated as missing.
    """

    field: str
    change: str
    percent_change: str | None
    is_positive: bool

    def to_dict(self) -> dict:
        return asdict(self)


def format_one_decimal(value: float) -> str:
    """Format to one decimal place, rounding exact halves away from zero.

    ``f"{0.25:.1f}"`` gives ``"0.2"``; this gives ``"0.3"``.
    """
    return str(Decimal(value).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def _is_missing(value: float | None, zero_is_missing: bool) -> bool:
    if value is None:
        return True
    return zero_is_missing and value == 0


def compute_change(
    metrics: Sequence[ProgressMetric],
    field: str,
    zero_is_missing: bool = True,
) -> MetricChange | None:
    """Compare the last two entries of ``metrics`` for ``field``.

    Args:
        metrics: Entries in ascending date order
        field: ``"weight"`` or ``"body_fat_percentage"``
        zero_is_missing: Treat a recorded 0 as "not recorded"

    Returns:
        The change, or None when there are fewer than two entries or either
        of the last two has no value for the field.

    Raises:
        ValueError: If ``field`` is not a tracked field.
    """
    if field not in TRACKED_FIELDS:
        raise ValueError(f"Unknown progress field '{field}', expected one of {TRACKED_FIELDS}")

    if len(metrics) < 2:
        return None

    previous_value = metrics[-2].value_of(field)
    latest_value = metrics[-1].value_of(field)

    if _is_missing(previous_value, zero_is_missing) or _is_missing(
        latest_value, zero_is_missing
    ):
        return None

    change = latest_value - previous_value
    percent_change = None
    if previous_value != 0:
        percent_change = format_one_decimal(change / previous_value * 100)

    return MetricChange(
        field=field,
        change=format_one_decimal(change),
        percent_change=percent_change,
        is_positive=change > 0,
    )


def latest_metric(metrics: Sequence[ProgressMetric]) -> ProgressMetric | None:
    """The most recent entry, or None when there are none."""
    if not metrics:
        return None
    return metrics[-1]


def chart_points(metrics: Sequence[ProgressMetric]) -> list[dict]:
    """Build one chart point per entry; missing values plot as 0."""
    return [
        {
            "date": f"{metric.date:%b} {metric.date.day}",
            "weight": metric.weight or 0,
            "body_fat": metric.body_fat_percentage or 0,
        }
        for metric in metrics
    ]

"""Dashboard aggregate helpers."""

from collections.abc import Collection
from decimal import ROUND_HALF_UP, Decimal


def count_pending(total_employees: int, evaluated_ids: Collection[int]) -> int:
    """Employees never evaluated; never negative."""
    return max(0, total_employees - len(evaluated_ids))


def round_average(value: float | None) -> float | None:
    """Round half-up to one decimal (3.25 -> 3.3), None passes through."""
    if value is None:
        return None
    return float(Decimal(value).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))

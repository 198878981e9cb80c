"""Half-up rounding for report percentages."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal


def _quantize(value: float, places: int) -> Decimal:
    # str() keeps 12.25 as 12.25 instead of its binary expansion.
    return Decimal(str(value)).quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)


def round_half_up(value: float, places: int) -> float:
    return float(_quantize(value, places))


def format_percentage(value: float, places: int) -> str:
    """Format with a fixed number of decimals, rounding .5 away from zero."""
    return f"{_quantize(value, places):.{places}f}"

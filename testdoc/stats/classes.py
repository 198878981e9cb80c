"""Per-class share of the documented method total."""

from __future__ import annotations

from typing import Sequence

from ..config import DEFAULT_PRECISION, validate_precision
from ..logging import get_logger
from ..models import PERCENTAGE_SENTINEL, ClassAggregate
from .rounding import format_percentage

logger = get_logger("stats.classes")


class ClassStatsAggregator:
    """Sets ``percentage`` on each class once every class of a run is known."""

    def __init__(self, precision: int = DEFAULT_PRECISION) -> None:
        self.precision = validate_precision(precision)

    def apply(self, classes: Sequence[ClassAggregate]) -> int:
        """Fill in percentages and return the total method count."""
        total = sum(aggregate.method_count for aggregate in classes)
        if total == 0:
            logger.debug("No methods across %d classes; keeping sentinel percentages", len(classes))
            for aggregate in classes:
                aggregate.percentage = PERCENTAGE_SENTINEL
            return 0

        for aggregate in classes:
            aggregate.percentage = format_percentage(
                100 * aggregate.method_count / total, self.precision
            )
        return total


__all__ = ["ClassStatsAggregator"]

"""Tag category counting and distribution percentages."""

from __future__ import annotations

from collections import Counter
from typing import Iterable

from ..logging import get_logger
from ..models import TagDistribution
from .rounding import round_half_up

logger = get_logger("stats.tags")


def tag_category(tag: str) -> str:
    """``"Feature: Login"`` groups under ``"Feature"``; plain tags are their own category."""
    if ":" in tag:
        return tag.split(":", 1)[0].strip()
    return tag


class TagAggregator:
    """Counts tag categories across a scope of methods.

    Percentages use the number of methods in the scope as the denominator,
    so a scope where methods carry several tags can total more than 100.
    """

    def aggregate(
        self, tag_lists: Iterable[Iterable[str]], total_methods: int
    ) -> TagDistribution:
        counts: Counter[str] = Counter()
        for tags in tag_lists:
            counts.update(tag_category(tag) for tag in tags)

        percentages = {}
        for category, count in counts.items():
            if total_methods > 0:
                percentages[category] = round_half_up(100 * count / total_methods, 1)
            else:
                percentages[category] = 0.0

        logger.debug(
            "Aggregated %d tag categories over %d methods", len(counts), total_methods
        )
        return TagDistribution(counts=dict(counts), percentages=percentages)


__all__ = ["TagAggregator", "tag_category"]

"""Aggregate statistics over documented test methods."""

from .classes import ClassStatsAggregator
from .rounding import format_percentage, round_half_up
from .tags import TagAggregator, tag_category

__all__ = [
    "ClassStatsAggregator",
    "TagAggregator",
    "format_percentage",
    "round_half_up",
    "tag_category",
]

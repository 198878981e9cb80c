"""Include/exclude filtering of documented methods."""

from __future__ import annotations

from typing import Iterable, List, Pattern, Sequence, TypeVar

from .config import FilterConfig
from .logging import get_logger
from .models import MethodNarrative, MethodRecord

_M = TypeVar("_M", MethodRecord, MethodNarrative)


def _matches_any(value: str, patterns: Sequence[Pattern[str]]) -> bool:
    return any(pattern.fullmatch(value) for pattern in patterns)


class MethodFilter:
    """Applies name and tag patterns; every pattern must match the whole string."""

    def __init__(self, config: FilterConfig | None = None) -> None:
        self.config = config or FilterConfig()
        self.logger = get_logger("filters")

    def accepts(self, name: str, tags: Iterable[str]) -> bool:
        config = self.config
        tag_list = list(tags)

        if config.include_methods and not _matches_any(name, config.include_methods):
            return False
        if config.exclude_methods and _matches_any(name, config.exclude_methods):
            return False
        if config.include_tags and not any(
            _matches_any(tag, config.include_tags) for tag in tag_list
        ):
            return False
        if config.exclude_tags and any(_matches_any(tag, config.exclude_tags) for tag in tag_list):
            return False
        return True

    def filter(self, methods: Iterable[_M]) -> List[_M]:
        items = list(methods)
        if self.config.is_empty:
            return items
        kept = [method for method in items if self.accepts(method.name, method.tags)]
        if len(kept) != len(items):
            self.logger.debug("Filters dropped %d of %d methods", len(items) - len(kept), len(items))
        return kept


__all__ = ["MethodFilter"]

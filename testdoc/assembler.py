"""Assembly of the document model handed to report renderers."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence

from .assertions import AssertionDetector
from .config import TestDocConfig
from .filters import MethodFilter
from .logging import get_logger
from .models import (
    ClassAggregate,
    ClassRecord,
    DocumentModel,
    MethodNarrative,
    MethodRecord,
    TagDistribution,
)
from .narrative import NarrativeComposer
from .stats import ClassStatsAggregator, TagAggregator


@dataclass
class _PendingClass:
    record: ClassRecord
    methods: List[MethodRecord]


class DocumentAssembler:
    """Coordinates narrative generation, filtering and statistics for one run."""

    def __init__(
        self,
        config: TestDocConfig | None = None,
        *,
        composer: NarrativeComposer | None = None,
        detectors: Optional[Sequence[AssertionDetector]] = None,
        max_workers: int | None = None,
    ) -> None:
        self.config = config or TestDocConfig()
        self.composer = composer or NarrativeComposer(self.config.narrative, detectors=detectors)
        self.method_filter = MethodFilter(self.config.filters)
        self.class_stats = ClassStatsAggregator(self.config.percentage_precision)
        self.tag_aggregator = TagAggregator()
        self.max_workers = max_workers
        self.logger = get_logger("assembler")

    def assemble(self, class_records: Iterable[ClassRecord]) -> DocumentModel:
        pending = self._select_methods(class_records)
        narratives = self._compose_all([method for item in pending for method in item.methods])

        classes: List[ClassAggregate] = []
        cursor = 0
        for item in pending:
            count = len(item.methods)
            classes.append(
                ClassAggregate(
                    class_name=item.record.class_name,
                    package_name=item.record.package_name,
                    methods=narratives[cursor : cursor + count],
                )
            )
            cursor += count

        total = self.class_stats.apply(classes)

        distribution: TagDistribution | None = None
        presentation = self.config.presentation
        if presentation.display_tags_chart:
            distribution = self.tag_aggregator.aggregate(
                (method.tags for aggregate in classes for method in aggregate.methods),
                total,
            )

        self.logger.info("Documented %d methods across %d classes", total, len(classes))
        return DocumentModel(
            classes=classes,
            total_methods=total,
            tag_distribution=distribution,
            presentation=presentation,
        )

    def _select_methods(self, class_records: Iterable[ClassRecord]) -> List[_PendingClass]:
        pending: List[_PendingClass] = []
        for record in class_records:
            kept = self.method_filter.filter(record.methods)
            if not kept:
                self.logger.debug("Class %s has no documented methods, skipping", record.class_name)
                continue
            pending.append(_PendingClass(record=record, methods=kept))
        return pending

    def _compose_all(self, methods: List[MethodRecord]) -> List[MethodNarrative]:
        if self.max_workers is None or self.max_workers <= 1 or len(methods) < 2:
            return [self.composer.compose(method) for method in methods]
        with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
            # map() yields in submission order, which keeps discovery order.
            return list(pool.map(self.composer.compose, methods))


__all__ = ["DocumentAssembler"]

"""Core data models shared across testdoc components."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

COMMENT_MARKER = "//"
PERCENTAGE_SENTINEL = "0.00"


@dataclass(frozen=True)
class MethodRecord:
    """One discovered test method as handed over by the source parser."""

    name: str
    body_text: Optional[str] = None
    tags: Tuple[str, ...] = ()

    def body_lines(self) -> List[str]:
        if not self.body_text:
            return []
        return [line.strip() for line in self.body_text.splitlines()]

    @property
    def source_comments(self) -> str:
        """Line comments from the body with their markers stripped."""
        harvested: List[str] = []
        for line in self.body_lines():
            if line.startswith(COMMENT_MARKER):
                harvested.append(line[len(COMMENT_MARKER):].strip() + "\n")
        return "".join(harvested)


@dataclass(frozen=True)
class ClassRecord:
    """Methods of a single test class, in discovery order."""

    class_name: str
    package_name: str = ""
    methods: Tuple[MethodRecord, ...] = ()


class NameKind(str, Enum):
    GENERIC = "generic"
    GHERKIN = "gherkin"


@dataclass(frozen=True)
class NameTokens:
    """Readable decomposition of a method identifier."""

    test_case_id: Optional[str]
    phrase: str
    kind: NameKind


@dataclass(frozen=True)
class AssertionFragment:
    """Prose produced for one assertion line."""

    verb_phrase: str
    detail: str

    @property
    def sentence(self) -> str:
        return self.verb_phrase + self.detail


@dataclass
class MethodNarrative:
    name: str
    description: str
    tags: List[str] = field(default_factory=list)


@dataclass
class ClassAggregate:
    """Narratives of one class plus its share of the run."""

    class_name: str
    package_name: str
    methods: List[MethodNarrative] = field(default_factory=list)
    percentage: str = PERCENTAGE_SENTINEL

    @property
    def method_count(self) -> int:
        return len(self.methods)


@dataclass
class TagDistribution:
    counts: Dict[str, int] = field(default_factory=dict)
    percentages: Dict[str, float] = field(default_factory=dict)


@dataclass(frozen=True)
class PresentationSettings:
    """Display options carried through to the renderer untouched."""

    title: str = "TestNG Documentation"
    header: Optional[str] = None
    dark_mode: bool = False
    display_tags_chart: bool = False


@dataclass
class DocumentModel:
    """Everything a renderer needs for one documentation run."""

    classes: List[ClassAggregate]
    total_methods: int
    tag_distribution: Optional[TagDistribution] = None
    presentation: PresentationSettings = field(default_factory=PresentationSettings)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.presentation.title,
            "header": self.presentation.header,
            "dark_mode": self.presentation.dark_mode,
            "display_tags_chart": self.presentation.display_tags_chart,
            "total_methods": self.total_methods,
            "classes": [
                {
                    "class_name": aggregate.class_name,
                    "package_name": aggregate.package_name,
                    "percentage": aggregate.percentage,
                    "methods": [
                        {
                            "name": method.name,
                            "description": method.description,
                            "tags": list(method.tags),
                        }
                        for method in aggregate.methods
                    ],
                }
                for aggregate in self.classes
            ],
            "tag_stats": (
                dict(self.tag_distribution.counts) if self.tag_distribution else None
            ),
            "tag_percentages": (
                dict(self.tag_distribution.percentages) if self.tag_distribution else None
            ),
        }


__all__ = [
    "AssertionFragment",
    "ClassAggregate",
    "ClassRecord",
    "DocumentModel",
    "MethodNarrative",
    "MethodRecord",
    "NameKind",
    "NameTokens",
    "PERCENTAGE_SENTINEL",
    "PresentationSettings",
    "TagDistribution",
]

"""Narrative generation for individual test methods."""

from __future__ import annotations

from typing import List, Optional, Sequence

from .assertions import AssertionDetector, translate_assertion
from .config import NarrativeConfig
from .logging import get_logger
from .models import MethodNarrative, MethodRecord, NameKind, NameTokens
from .naming import decompose_name

_ASSERTION_HINTS = ("assert", "Assert.")


class NarrativeComposer:
    """Builds the description shown for each test method.

    The text is derived from the method name and the assertions in its
    body. Hand-written ``//`` comments stay available on
    :attr:`MethodRecord.source_comments` but are not part of the output.
    """

    def __init__(
        self,
        config: NarrativeConfig | None = None,
        *,
        detectors: Optional[Sequence[AssertionDetector]] = None,
    ) -> None:
        self.config = config or NarrativeConfig()
        self.detectors = list(detectors) if detectors is not None else None
        self.logger = get_logger("narrative")

    def compose(self, record: MethodRecord) -> MethodNarrative:
        return MethodNarrative(
            name=record.name,
            description=self.describe(record),
            tags=list(record.tags),
        )

    def describe(self, record: MethodRecord) -> str:
        tokens = decompose_name(record.name)
        self.logger.debug(
            "Method %s decomposed as %s (id=%s)",
            record.name,
            tokens.kind.value,
            tokens.test_case_id,
        )

        parts: List[str] = [_headline(record.name, tokens)]
        parts.extend(f"- {sentence}\n" for sentence in self._assertion_sentences(record))
        return self._apply_replacements("".join(parts))

    def _assertion_sentences(self, record: MethodRecord) -> List[str]:
        sentences: List[str] = []
        for line in record.body_lines():
            if not any(hint in line for hint in _ASSERTION_HINTS):
                continue
            sentence = translate_assertion(line, self.detectors)
            if sentence:
                sentences.append(sentence)
        return sentences

    def _apply_replacements(self, text: str) -> str:
        for pattern, replacement in self.config.replacements:
            text = text.replace(pattern, replacement)
        return text


def _headline(original_name: str, tokens: NameTokens) -> str:
    if tokens.kind is NameKind.GHERKIN:
        lines = [f"Method: {original_name}\n\n"]
        if tokens.test_case_id:
            lines.append(f"{tokens.test_case_id}\n")
        lines.append(f"{tokens.phrase}\n\n")
        return "".join(lines)

    case_id = f"({tokens.test_case_id}) " if tokens.test_case_id else ""
    return f"This test {case_id}{tokens.phrase.replace('_', ' ')}.\n\n"


__all__ = ["NarrativeComposer"]

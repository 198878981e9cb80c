"""Keyword-driven detector for JUnit/TestNG style assertion calls."""

from __future__ import annotations

from typing import Optional, Sequence, Tuple

from .base import AssertionDetector
from ..models import AssertionFragment

# Checked in order; the first keyword found in the line wins.
DEFAULT_VERBS: Tuple[Tuple[str, str], ...] = (
    ("assertEquals", "Verifies that "),
    ("assertTrue", "Confirms that "),
    ("assertFalse", "Ensures that "),
    ("assertNotNull", "Validates that "),
    ("assertNull", "Checks that "),
)

CONDITION_PREFIX = "the test condition is validated"


class KeywordAssertionDetector(AssertionDetector):
    """Maps assertion method names to verbs and pulls a detail out of the call."""

    def __init__(self, verbs: Sequence[Tuple[str, str]] = DEFAULT_VERBS) -> None:
        self.verbs = tuple(verbs)

    def detect(self, line: str) -> Optional[AssertionFragment]:
        for keyword, verb in self.verbs:
            if keyword in line:
                return AssertionFragment(verb_phrase=verb, detail=extract_detail(line))
        return None


def extract_detail(line: str) -> str:
    """Prefer the first quoted message, then the call arguments.

    Escaped quotes are not understood: ``"a \\"b\\" c"`` yields ``a \\``.
    """
    message_start = line.find('"')
    if message_start != -1:
        message_end = line.find('"', message_start + 1)
        if message_end != -1:
            return line[message_start + 1 : message_end]

    params_start = line.find("(")
    params_end = line.rfind(")")
    if params_start != -1 and params_end > params_start:
        return f"{CONDITION_PREFIX}: {line[params_start + 1 : params_end]}"

    return CONDITION_PREFIX


__all__ = ["CONDITION_PREFIX", "DEFAULT_VERBS", "KeywordAssertionDetector", "extract_detail"]

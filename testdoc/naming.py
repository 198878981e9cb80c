"""Decomposition of test method identifiers into readable phrases."""

from __future__ import annotations

import re

from .models import NameKind, NameTokens

_TEST_CASE_ID = re.compile(r"^(TC\d+)_(.*)$")
_UPPERCASE = re.compile(r"([A-Z])")
_GHERKIN_MARKERS = (("given", "\nGiven "), ("when", "\nWhen "), ("then", "\nThen "))


def decompose_name(name: str) -> NameTokens:
    """Split ``name`` into an optional ``TCnn`` id and a lowercase phrase.

    ``TC07_userCanLogin`` becomes id ``TC07`` with phrase ``user can login``.
    Names mentioning given, when and then are treated as Gherkin style and
    their phrase is broken onto one line per step.
    """
    test_case_id = None
    remainder = name
    match = _TEST_CASE_ID.match(name)
    if match:
        test_case_id = match.group(1)
        remainder = match.group(2)

    phrase = _UPPERCASE.sub(r" \1", remainder.replace("test", "")).lower().strip()

    if all(marker in phrase for marker, _ in _GHERKIN_MARKERS):
        return NameTokens(test_case_id, _gherkin_phrase(phrase), NameKind.GHERKIN)

    return NameTokens(test_case_id, phrase.replace("_", " "), NameKind.GENERIC)


def _gherkin_phrase(phrase: str) -> str:
    for marker, heading in _GHERKIN_MARKERS:
        phrase = phrase.replace(marker, heading)
    return phrase.replace("test", "").replace("_", " ").strip()


__all__ = ["decompose_name"]

"""Tests for assertion-to-prose translation."""

from __future__ import annotations

from typing import Optional

import pytest

from testdoc.assertions import (
    AssertionDetector,
    KeywordAssertionDetector,
    discover_detectors,
    translate_assertion,
)
from testdoc.assertions.keyword import extract_detail
from testdoc.models import AssertionFragment


def test_quoted_message_is_used_verbatim() -> None:
    line = 'Assert.assertEquals(x, 200, "Status code should be 200 OK")'
    assert translate_assertion(line) == "Verifies that Status code should be 200 OK"


def test_arguments_are_used_without_message() -> None:
    assert translate_assertion("assertTrue(x)") == (
        "Confirms that the test condition is validated: x"
    )


@pytest.mark.parametrize(
    ("line", "expected"),
    [
        ('assertFalse(locked, "Account stays unlocked")', "Ensures that Account stays unlocked"),
        ('assertNotNull(user, "User is returned")', "Validates that User is returned"),
        ("assertNull(session);", "Checks that the test condition is validated: session"),
    ],
)
def test_each_keyword_has_its_verb(line: str, expected: str) -> None:
    assert translate_assertion(line) == expected


def test_first_keyword_in_detection_order_wins() -> None:
    line = "assertTrue(assertEquals(a, b))"
    assert translate_assertion(line).startswith("Verifies that ")


def test_not_null_is_not_mistaken_for_null() -> None:
    assert translate_assertion("assertNotNull(value)").startswith("Validates that ")


def test_unknown_assertion_yields_empty_string() -> None:
    assert translate_assertion("assertThat(list).hasSize(2);") == ""


def test_unterminated_quote_falls_back_to_arguments() -> None:
    assert translate_assertion('assertTrue(flag, "oops)') == (
        'Confirms that the test condition is validated: flag, "oops'
    )


def test_missing_parentheses_uses_generic_detail() -> None:
    assert translate_assertion("assertNull value") == "Checks that the test condition is validated"


def test_escaped_quotes_truncate_the_message() -> None:
    assert extract_detail('assertTrue(ok, "say \\"hi\\"")') == "say \\"


def test_lines_are_trimmed_before_detection() -> None:
    assert translate_assertion("    assertTrue(ready);   ") == (
        "Confirms that the test condition is validated: ready"
    )


class _HamcrestDetector(AssertionDetector):
    def detect(self, line: str) -> Optional[AssertionFragment]:
        if "assertThat" in line:
            return AssertionFragment(verb_phrase="Asserts that ", detail="the matcher holds")
        return None


def test_custom_detectors_are_consulted_in_order() -> None:
    detectors = [_HamcrestDetector(), KeywordAssertionDetector()]
    assert translate_assertion("assertThat(total, is(3));", detectors) == (
        "Asserts that the matcher holds"
    )
    assert translate_assertion("assertTrue(x)", detectors).startswith("Confirms that ")


def test_keyword_detector_accepts_custom_verbs() -> None:
    detector = KeywordAssertionDetector(verbs=[("verify", "Double-checks that ")])
    fragment = detector.detect('verify(mock, "called once")')
    assert fragment is not None
    assert fragment.sentence == "Double-checks that called once"
    assert detector.detect("assertTrue(x)") is None


def test_discover_detectors_returns_builtin_keyword_detector(monkeypatch) -> None:
    import testdoc.assertions as assertions_module

    monkeypatch.setattr(assertions_module, "_iter_entry_points", lambda: [])
    detectors = discover_detectors()
    assert len(detectors) == 1
    assert isinstance(detectors[0], KeywordAssertionDetector)


def test_discover_detectors_loads_entry_points(monkeypatch) -> None:
    import testdoc.assertions as assertions_module

    class _Entry:
        name = "hamcrest"

        def load(self) -> object:
            return _HamcrestDetector

    monkeypatch.setattr(assertions_module, "_iter_entry_points", lambda: [_Entry()])
    detectors = discover_detectors(["keyword", "hamcrest"])
    assert [type(item) for item in detectors] == [KeywordAssertionDetector, _HamcrestDetector]


def test_discover_detectors_rejects_unknown_names(monkeypatch) -> None:
    import testdoc.assertions as assertions_module

    monkeypatch.setattr(assertions_module, "_iter_entry_points", lambda: [])
    with pytest.raises(ValueError, match="spock"):
        discover_detectors(["keyword", "spock"])

"""Tests for per-method narrative composition."""

from __future__ import annotations

from testdoc.config import NarrativeConfig
from testdoc.models import MethodRecord
from testdoc.narrative import NarrativeComposer

_LOGIN_BODY = """
// Arrange the user
User user = service.login("alice", "secret");
// assert the returned user
Assert.assertNotNull(user, "User should be returned");
assertEquals(user.getName(), "alice");
System.out.println("done");
"""


def test_generic_name_with_assertions() -> None:
    record = MethodRecord(name="testLoginReturnsUser", body_text=_LOGIN_BODY)
    description = NarrativeComposer().describe(record)
    assert description == (
        "This test login returns user.\n\n"
        "- Validates that User should be returned\n"
        "- Verifies that alice\n"
    )


def test_hand_written_comments_are_not_in_description() -> None:
    record = MethodRecord(name="testLoginReturnsUser", body_text=_LOGIN_BODY)
    description = NarrativeComposer().describe(record)
    assert "Arrange the user" not in description
    assert record.source_comments == "Arrange the user\nassert the returned user\n"


def test_case_id_appears_in_parentheses() -> None:
    description = NarrativeComposer().describe(MethodRecord(name="TC01_verifyLogin"))
    assert description == "This test (TC01) verify login.\n\n"


def test_gherkin_narrative_lists_steps_in_order() -> None:
    name = "givenValidCredentials_whenUserLogsIn_thenLoginSucceedsTest"
    body = 'Assert.assertTrue(loginResult, "Login should be successful");'
    description = NarrativeComposer().describe(MethodRecord(name=name, body_text=body))

    assert description.startswith(f"Method: {name}\n\n")
    given = description.index("Given ")
    when = description.index("When ")
    then = description.index("Then ")
    assert given < when < then
    assert description.endswith("\n\n- Confirms that Login should be successful\n")


def test_gherkin_narrative_puts_case_id_on_its_own_line() -> None:
    name = "TC07_givenEmptyCart_whenCheckout_thenErrorShown"
    description = NarrativeComposer().describe(MethodRecord(name=name))
    assert description.startswith(f"Method: {name}\n\nTC07\nGiven ")


def test_method_named_test_without_body() -> None:
    assert NarrativeComposer().describe(MethodRecord(name="test")) == "This test .\n\n"


def test_unrecognised_assertions_are_skipped() -> None:
    body = "assertThat(items).isEmpty();\nAssert.fail(\"boom\");"
    description = NarrativeComposer().describe(MethodRecord(name="testEmpty", body_text=body))
    assert description == "This test empty.\n\n"


def test_replacements_apply_in_registration_order() -> None:
    config = (
        NarrativeConfig()
        .with_replacement("Verifies that", "Checks")
        .with_replacement("Checks", "Asserts")
    )
    record = MethodRecord(name="testStatus", body_text='assertEquals(code, 200, "status is 200");')
    description = NarrativeComposer(config).describe(record)
    assert "- Asserts status is 200\n" in description


def test_composition_is_idempotent() -> None:
    config = NarrativeConfig().with_replacement("This test", "Scenario:")
    composer = NarrativeComposer(config)
    record = MethodRecord(name="TC02_userCanLogout", body_text=_LOGIN_BODY, tags=("Feature: Auth",))
    first = composer.compose(record)
    second = composer.compose(record)
    assert first == second
    assert first.description.startswith("Scenario: (TC02) user can logout.")


def test_compose_copies_name_and_tags() -> None:
    record = MethodRecord(name="TC05_checkout", tags=("Feature: Cart", "Slow"))
    narrative = NarrativeComposer().compose(record)
    assert narrative.name == "TC05_checkout"
    assert narrative.tags == ["Feature: Cart", "Slow"]

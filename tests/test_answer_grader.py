import pytest

from deckpractice.domain.services.answer_grader import grade, normalize


def test_normalize_collapses_case_and_whitespace():
    assert normalize("  Bonjour   le Monde ") == normalize("bonjour le monde")
    assert normalize("  Bonjour   le Monde ") == "bonjour le monde"


def test_normalize_handles_tabs_and_newlines():
    assert normalize("au\trevoir\n") == "au revoir"


def test_normalize_empty():
    assert normalize("") == ""
    assert normalize("   ") == ""


@pytest.mark.parametrize(
    "submitted, expected, match",
    [
        ("Hello", "hello", True),
        ("thank   you", "Thank you", True),
        ("hello!", "hello", False),
        ("helo", "hello", False),
        ("café", "cafe", False),
    ],
)
def test_grade_matches_after_normalization(submitted, expected, match):
    assert grade(submitted, expected).is_correct is match


def test_grade_is_not_recorded():
    result = grade("  HELLO ", "hello")

    assert result.is_correct
    assert result.normalized == "hello"
    assert result.recorded is False

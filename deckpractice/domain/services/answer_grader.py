"""
Answer Grader.

Normalization and comparison of typed answers. Grading is forgiving about
case and spacing only: no fuzzy matching, no punctuation stripping.
"""

import re

from deckpractice.domain.value_objects.grade_result import GradeResult

_WHITESPACE_RE = re.compile(r"\s+")


def normalize(text: str) -> str:
    """Normalize an answer for comparison.

    Strips surrounding whitespace, lowercases, and collapses every run of
    internal whitespace to a single space.

    Args:
        text: Raw answer text

    Returns:
        Normalized text
    """
    if not text:
        return ""
    return _WHITESPACE_RE.sub(" ", text.strip().lower())


def grade(submitted: str, expected: str) -> GradeResult:
    """Grade a submission against the expected answer.

    The returned result is not yet recorded against any session.
    """
    normalized = normalize(submitted)
    return GradeResult(is_correct=normalized == normalize(expected), normalized=normalized)

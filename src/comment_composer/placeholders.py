"""
Placeholder substitution for outcome and personalized comments.

Supported placeholders (matched case-insensitively):

    <first name>           student's first name
    <last name>            student's last name
    <grade>                student's numeric grade
    <pronoun>              selected subject pronoun (he, she, they)
    <possessive pronoun>   selected possessive pronoun (his, her, their)

A placeholder with no value to substitute is left in the text verbatim so
the user can see what still needs filling in.
"""

from __future__ import annotations

import re
from re import Pattern
from typing import Iterable, Optional

from comment_composer.models import (
    Pronoun,
    PronounReplacementResult,
    ReplacementCount,
    StudentData,
)

PRONOUN_TOKEN = "<pronoun>"
POSSESSIVE_PRONOUN_TOKEN = "<possessive pronoun>"

_PRONOUN_PATTERN: Pattern[str] = re.compile(r"<pronoun>", re.IGNORECASE)
_POSSESSIVE_PATTERN: Pattern[str] = re.compile(r"<possessive pronoun>", re.IGNORECASE)
_FIRST_NAME_PATTERN: Pattern[str] = re.compile(r"<first name>", re.IGNORECASE)
_LAST_NAME_PATTERN: Pattern[str] = re.compile(r"<last name>", re.IGNORECASE)
_GRADE_PATTERN: Pattern[str] = re.compile(r"<grade>", re.IGNORECASE)

# Unclosed placeholder at end of text; "<" directly before a digit (e.g. "<50")
# is a comparison, not a placeholder.
_UNCLOSED_PATTERN: Pattern[str] = re.compile(r"<[a-zA-Z ][^>]*$")

UNCLOSED_PLACEHOLDER_WARNING = "⚠️ Placeholder not closed. Example: <first name>"
EMPTY_PLACEHOLDER_WARNING = (
    "⚠️ Empty placeholder detected. Use: <first name>, <last name>, <grade>"
)


def _has_value(value: Optional[str]) -> bool:
    return bool(value and value.strip())


def _replace_all(pattern: Pattern[str], text: str, value: str) -> str:
    # Callable replacement so backslashes in the value are taken literally
    return pattern.sub(lambda _m: value, text)


def substitute_pronouns(text: str, pronoun: Optional[Pronoun]) -> str:
    """
    Replace pronoun placeholders with the selected pronoun's values.

    Args:
        text: Comment text possibly containing <pronoun> / <possessive pronoun>
        pronoun: Selected pronoun, or None when nothing is selected

    Returns:
        Text with tokens replaced; unchanged when pronoun is None. A blank
        pronoun field leaves its token in place.
    """
    if pronoun is None:
        return text

    result = text
    if _has_value(pronoun.subject_pronoun):
        result = _replace_all(_PRONOUN_PATTERN, result, pronoun.subject_pronoun)
    if _has_value(pronoun.possessive_pronoun):
        result = _replace_all(_POSSESSIVE_PATTERN, result, pronoun.possessive_pronoun)
    return result


def format_grade(grade: float | int) -> str:
    """Render a grade the way it was typed: 92.0 -> "92", 92.5 -> "92.5"."""
    if isinstance(grade, float) and grade.is_integer():
        return str(int(grade))
    return str(grade)


def replace_placeholders(
    text: str,
    student: Optional[StudentData] = None,
    pronoun: Optional[Pronoun] = None,
) -> str:
    """
    Replace student and pronoun placeholders.

    Args:
        text: Text containing placeholders
        student: Student values; blank names and a None grade are skipped
        pronoun: Selected pronoun, if any

    Returns:
        Text with every available placeholder replaced
    """
    result = text

    if student is not None:
        if _has_value(student.first_name):
            result = _replace_all(_FIRST_NAME_PATTERN, result, student.first_name or "")
        if _has_value(student.last_name):
            result = _replace_all(_LAST_NAME_PATTERN, result, student.last_name or "")
        # 0 is a valid grade
        if student.grade is not None:
            result = _replace_all(_GRADE_PATTERN, result, format_grade(student.grade))

    return substitute_pronouns(result, pronoun)


def validate_placeholders(text: str) -> list[str]:
    """
    Check placeholder syntax.

    Returns:
        Warning messages, empty when the text is well formed
    """
    warnings: list[str] = []

    if _UNCLOSED_PATTERN.search(text):
        warnings.append(UNCLOSED_PLACEHOLDER_WARNING)

    if "<>" in text:
        warnings.append(EMPTY_PLACEHOLDER_WARNING)

    return warnings


def replace_pronouns_with_placeholders(
    text: str,
    pronouns: Iterable[Pronoun],
) -> PronounReplacementResult:
    """
    Turn literal pronouns in a comment into placeholders.

    Matching is whole-word and case-insensitive, so "he" is replaced but
    the "he" inside "the" is not. Pronoun values are regex-escaped.

    Args:
        text: Comment text written with real pronouns
        pronouns: Pronoun pairs to look for

    Returns:
        Replaced text and per-kind replacement counts
    """
    result = text
    pronoun_count = 0
    possessive_count = 0

    for pronoun in pronouns:
        if _has_value(pronoun.subject_pronoun):
            pattern = re.compile(rf"\b{re.escape(pronoun.subject_pronoun)}\b", re.IGNORECASE)
            result, n = pattern.subn(PRONOUN_TOKEN, result)
            pronoun_count += n

        if _has_value(pronoun.possessive_pronoun):
            pattern = re.compile(rf"\b{re.escape(pronoun.possessive_pronoun)}\b", re.IGNORECASE)
            result, n = pattern.subn(POSSESSIVE_PRONOUN_TOKEN, result)
            possessive_count += n

    return PronounReplacementResult(
        replaced_text=result,
        replacement_count=ReplacementCount(
            pronoun=pronoun_count,
            possessive_pronoun=possessive_count,
        ),
    )

"""
Composition policy for final comment drafts.

The candidate draft is the matched outcome comment followed by the chosen
personalized comment(s), each after placeholder substitution, joined with
a single space and hard-cut to the configured character limit.
"""

from __future__ import annotations

from typing import Iterable, Optional

from comment_composer.models import OutcomeComment, PersonalizedComment, Pronoun, StudentData
from comment_composer.placeholders import replace_placeholders

# General workflow limit and the extended-mode limit
DEFAULT_MAX_LENGTH = 1000
EXTENDED_MAX_LENGTH = 3000


def compose(
    outcome_text: Optional[str],
    personalized_text: Optional[str],
    max_length: int,
) -> str:
    """
    Join outcome and personalized text into a candidate draft.

    Args:
        outcome_text: Matched outcome comment text, if any
        personalized_text: Selected personalized comment text, if any
        max_length: Character limit supplied by the caller

    Returns:
        "outcome personalized" with empty parts dropped, truncated to
        max_length only when strictly longer. Empty string if nothing
        survives.
    """
    parts = [
        part.strip()
        for part in (outcome_text, personalized_text)
        if part is not None and part.strip()
    ]
    joined = " ".join(parts)

    if len(joined) > max_length:
        return joined[: max(max_length, 0)]
    return joined


def build_candidate(
    outcome: Optional[OutcomeComment],
    personalized: Iterable[PersonalizedComment],
    max_length: int,
    pronoun: Optional[Pronoun] = None,
    student: Optional[StudentData] = None,
) -> str:
    """
    Build the candidate draft from the form's current selections.

    Placeholders are replaced in each source text before joining, so
    truncation applies to the substituted text. Multiple personalized
    comments are joined in selection order.

    Args:
        outcome: Band matched for the current grade, or None
        personalized: Personalized comments picked by the user
        max_length: Character limit
        pronoun: Selected pronoun, threaded explicitly
        student: Student values for name/grade placeholders

    Returns:
        Candidate text, possibly empty
    """
    outcome_text = (
        replace_placeholders(outcome.text, student, pronoun) if outcome is not None else None
    )

    personal_parts = [
        replace_placeholders(c.text, student, pronoun).strip() for c in personalized
    ]
    personalized_text = " ".join(p for p in personal_parts if p) or None

    return compose(outcome_text, personalized_text, max_length)

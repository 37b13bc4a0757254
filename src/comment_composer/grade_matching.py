"""
Grade band matching for outcome comments.

Outcome comments cover inclusive grade bands (lower_range..upper_range).
Bands for one subject are expected not to overlap, but nothing enforces
it: when they do, the first band in list order wins.
"""

from __future__ import annotations

from typing import Iterable, Optional, Sequence

from comment_composer.models import OutcomeComment


def match_band(
    grade: float | int | None,
    bands: Iterable[OutcomeComment],
) -> Optional[OutcomeComment]:
    """
    Find the outcome comment whose band contains the grade.

    No closest-band fallback is attempted. Malformed bands
    (lower_range > upper_range) simply never match.

    Args:
        grade: Entered grade, None when the field is empty
        bands: Outcome comments for the active subject

    Returns:
        First matching band in list order, or None
    """
    if grade is None:
        return None

    for band in bands:
        if band.lower_range <= grade <= band.upper_range:
            return band

    return None


def sort_outcome_comments_by_range(
    bands: Sequence[OutcomeComment],
) -> list[OutcomeComment]:
    """
    Order bands for display, highest band first.

    Sort keys: upper_range descending, then lower_range descending, then
    created_at descending (ISO 8601 strings compare lexicographically).
    Returns a new list.
    """
    return sorted(
        bands,
        key=lambda b: (b.upper_range, b.lower_range, b.created_at),
        reverse=True,
    )

"""
Typeahead search over personalized comments.

The base behaviour is a case-insensitive substring filter. When a fuzzy
threshold is configured, comments that rapidfuzz scores at or above it
(partial_ratio, 0-100) are included as well, so small typos in the query
still find the comment.
"""

from __future__ import annotations

from typing import Iterable, Optional

from rapidfuzz import fuzz

from comment_composer.models import PersonalizedComment


def search_personalized_comments(
    query: str,
    comments: Iterable[PersonalizedComment],
    fuzzy_threshold: Optional[int] = None,
) -> list[PersonalizedComment]:
    """
    Filter comments matching a search query.

    Args:
        query: Text typed into the search box
        comments: Candidate comments, typically already rating-sorted
        fuzzy_threshold: Minimum partial_ratio score for a fuzzy match,
            None to disable fuzzy matching

    Returns:
        Matching comments in input order; all comments for a blank query
    """
    items = list(comments)
    needle = query.strip().lower()
    if not needle:
        return items

    matches: list[PersonalizedComment] = []
    for comment in items:
        haystack = comment.text.lower()
        if needle in haystack:
            matches.append(comment)
        elif fuzzy_threshold is not None and fuzz.partial_ratio(needle, haystack) >= fuzzy_threshold:
            matches.append(comment)

    return matches

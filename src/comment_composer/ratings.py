"""
Personalized comment ratings.

Ratings are a 1-5 sentiment scale attached to personalized comments:

    1  Very Negative
    2  Negative
    3  Neutral (default for unrated comments)
    4  Positive
    5  Very Positive

This module normalizes absent ratings, maps ratings to their emoji and
accessibility label, and orders/filters comment lists for the picker.
All functions are pure and never mutate their inputs.
"""

from __future__ import annotations

import math
import unicodedata
from typing import Iterable

from comment_composer.models import PersonalizedComment

DEFAULT_RATING = 3

# Sentinel for "show every rating" in the rating filter
NO_RATING_FILTER = 0

RATING_EMOJIS: dict[int, str] = {
    1: "\U0001F622",  # crying face
    2: "\U0001F61F",  # worried face
    3: "\U0001F610",  # neutral face
    4: "\U0001F642",  # slightly smiling face
    5: "\U0001F60A",  # smiling face with smiling eyes
}

RATING_LABELS: dict[int, str] = {
    1: "Very Negative",
    2: "Negative",
    3: "Neutral",
    4: "Positive",
    5: "Very Positive",
}


def _is_finite_number(value: object) -> bool:
    return (
        isinstance(value, (int, float))
        and not isinstance(value, bool)
        and math.isfinite(value)
    )


def round_half_up(value: float) -> int:
    """Round to the nearest integer, sending .5 toward positive infinity.

    Python's round() uses banker's rounding; ratings use the UI convention
    where 2.5 -> 3 and -2.5 -> -2.
    """
    return math.floor(value + 0.5)


def normalize_rating(rating: int | float | None) -> int | float:
    """
    Get the canonical rating value.

    Args:
        rating: Raw rating from the API, possibly None

    Returns:
        The rating unchanged when it is a finite number (0 included),
        otherwise DEFAULT_RATING.
    """
    if rating is None or not _is_finite_number(rating):
        return DEFAULT_RATING
    return rating


def _rounded_lookup(rating: int | float, table: dict[int, str]) -> str:
    if not _is_finite_number(rating):
        return table[DEFAULT_RATING]
    return table.get(round_half_up(rating), table[DEFAULT_RATING])


def rating_emoji(rating: int | float) -> str:
    """Emoji for a rating; out-of-range values fall back to neutral."""
    return _rounded_lookup(rating, RATING_EMOJIS)


def rating_label(rating: int | float) -> str:
    """Accessibility label for a rating; out-of-range values fall back to "Neutral"."""
    return _rounded_lookup(rating, RATING_LABELS)


def rating_bucket(comment: PersonalizedComment) -> int:
    """Rounded normalized rating used for sorting and filtering."""
    return round_half_up(normalize_rating(comment.rating))


def _text_sort_key(text: str) -> str:
    # Base-letter comparison: ignore case and accents
    decomposed = unicodedata.normalize("NFKD", text.casefold())
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def sort_by_rating_desc(
    comments: Iterable[PersonalizedComment],
) -> list[PersonalizedComment]:
    """
    Sort personalized comments by rating, highest first.

    Ties on the rounded rating are broken by comment text, case- and
    accent-insensitively; remaining ties keep input order (sorted() is stable).

    Args:
        comments: Comments to sort

    Returns:
        New sorted list
    """
    return sorted(
        comments,
        key=lambda c: (-rating_bucket(c), _text_sort_key(c.text)),
    )


def filter_by_rating(
    comments: Iterable[PersonalizedComment],
    selected: int,
) -> list[PersonalizedComment]:
    """
    Filter comments to a single rating.

    Args:
        comments: Comments to filter
        selected: Rating to keep, or NO_RATING_FILTER (0) for all comments

    Returns:
        Matching comments in sort_by_rating_desc order
    """
    ordered = sort_by_rating_desc(comments)
    if selected == NO_RATING_FILTER:
        return ordered
    return [c for c in ordered if rating_bucket(c) == selected]

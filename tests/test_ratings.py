"""
Unit tests for personalized comment ratings.

Tests cover:
- Rating normalization (None -> 3, 0 kept)
- Emoji and label lookup with half-up rounding and fallbacks
- Descending sort with case-insensitive text tie-break
- Rating filter with the 0 "no filter" sentinel
"""

import sys
from pathlib import Path

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from comment_composer.models import PersonalizedComment
from comment_composer.ratings import (
    DEFAULT_RATING,
    RATING_EMOJIS,
    filter_by_rating,
    normalize_rating,
    rating_emoji,
    rating_label,
    round_half_up,
    sort_by_rating_desc,
)


def _comment(cid: str, text: str, rating=None) -> PersonalizedComment:
    return PersonalizedComment(id=cid, text=text, rating=rating)


class TestNormalizeRating:
    """Tests for normalize_rating."""

    @pytest.mark.parametrize("rating", [1, 2, 3, 4, 5, 4.6])
    def test_numbers_are_returned_unchanged(self, rating):
        assert normalize_rating(rating) == rating

    def test_none_defaults_to_neutral(self):
        assert normalize_rating(None) == DEFAULT_RATING == 3

    def test_zero_is_a_valid_rating(self):
        """Zero is an explicit rating, distinct from unset."""
        assert normalize_rating(0) == 0

    def test_nan_defaults_to_neutral(self):
        assert normalize_rating(float("nan")) == 3


class TestEmojiAndLabel:
    """Tests for rating_emoji and rating_label."""

    def test_labels_for_scale(self):
        assert [rating_label(r) for r in range(1, 6)] == [
            "Very Negative",
            "Negative",
            "Neutral",
            "Positive",
            "Very Positive",
        ]

    def test_emojis_for_scale(self):
        assert [rating_emoji(r) for r in range(1, 6)] == [RATING_EMOJIS[r] for r in range(1, 6)]

    def test_half_rounds_up(self):
        """3.5 rounds to 4, not to the even neighbour."""
        assert rating_label(3.5) == "Positive"
        assert rating_label(2.5) == "Neutral"

    def test_decimal_rounds_to_nearest(self):
        assert rating_emoji(4.8) == RATING_EMOJIS[5]
        assert rating_label(1.2) == "Very Negative"

    @pytest.mark.parametrize("rating", [0, -1, 6, 5.5, 0.4])
    def test_out_of_range_falls_back_to_neutral(self, rating):
        assert rating_label(rating) == "Neutral"
        assert rating_emoji(rating) == RATING_EMOJIS[3]

    def test_non_finite_falls_back_to_neutral(self):
        assert rating_label(float("inf")) == "Neutral"
        assert rating_emoji(float("nan")) == RATING_EMOJIS[3]

    def test_round_half_up_negative(self):
        assert round_half_up(-2.5) == -2
        assert round_half_up(0.5) == 1


class TestSortByRatingDesc:
    """Tests for sort_by_rating_desc."""

    def test_orders_by_rating_then_text(self, personalized_comments):
        result = sort_by_rating_desc(personalized_comments)
        assert [c.id for c in result] == ["p4", "p2", "p5", "p6", "p3", "p1"]

    def test_tie_break_is_case_insensitive(self):
        comments = [
            _comment("1", "banana", 4),
            _comment("2", "Apple", 4),
            _comment("3", "cherry", 4),
        ]
        assert [c.text for c in sort_by_rating_desc(comments)] == ["Apple", "banana", "cherry"]

    def test_tie_break_ignores_accents(self):
        comments = [_comment("1", "elbow", 3), _comment("2", "Élan", 3)]
        assert [c.id for c in sort_by_rating_desc(comments)] == ["2", "1"]

    def test_identical_text_keeps_input_order(self):
        comments = [_comment("1", "Same", 5), _comment("2", "same", 5)]
        assert [c.id for c in sort_by_rating_desc(comments)] == ["1", "2"]

    def test_unrated_sorts_with_neutral(self):
        comments = [_comment("1", "b", 3), _comment("2", "a", None)]
        assert [c.id for c in sort_by_rating_desc(comments)] == ["2", "1"]

    def test_decimal_ratings_sort_by_rounded_value(self):
        comments = [_comment("1", "b", 4.6), _comment("2", "a", 5)]
        # Both round to 5, so text decides
        assert [c.id for c in sort_by_rating_desc(comments)] == ["2", "1"]

    def test_does_not_mutate_input(self, personalized_comments):
        before = [c.model_dump() for c in personalized_comments]
        sort_by_rating_desc(personalized_comments)
        assert [c.model_dump() for c in personalized_comments] == before

    def test_empty_list(self):
        assert sort_by_rating_desc([]) == []


class TestFilterByRating:
    """Tests for filter_by_rating."""

    def test_zero_returns_all_sorted(self, personalized_comments):
        assert filter_by_rating(personalized_comments, 0) == sort_by_rating_desc(personalized_comments)

    def test_filters_to_single_rating(self, personalized_comments):
        result = filter_by_rating(personalized_comments, 5)
        assert [c.id for c in result] == ["p4", "p2"]

    def test_unrated_counts_as_three(self, personalized_comments):
        result = filter_by_rating(personalized_comments, 3)
        assert [c.id for c in result] == ["p6", "p3"]

    def test_rounded_rating_matches(self):
        comments = [_comment("1", "x", 3.5), _comment("2", "y", 4)]
        assert [c.id for c in filter_by_rating(comments, 4)] == ["1", "2"]

    def test_no_matches(self, personalized_comments):
        assert filter_by_rating(personalized_comments, 1) == []

    def test_does_not_mutate_input(self, personalized_comments):
        ids = [c.id for c in personalized_comments]
        filter_by_rating(personalized_comments, 5)
        assert [c.id for c in personalized_comments] == ids

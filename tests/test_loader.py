"""
Unit tests for comment library loading.
"""

import json
import sys
from pathlib import Path

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from comment_composer.errors import CommentDataError
from comment_composer.loader import load_comment_library


class TestLoadCommentLibrary:
    """Tests for load_comment_library."""

    def test_loads_camel_case_export(self, library_file):
        library = load_comment_library(library_file)
        assert len(library.outcome_comments) == 2
        assert library.outcome_comments[1].lower_range == 80
        assert library.personalized_comments[0].text == "Always curious"
        assert library.personalized_comments[2].rating is None
        assert library.pronouns[0].possessive_pronoun == "their"

    def test_loads_json(self, tmp_path):
        path = tmp_path / "library.json"
        path.write_text(
            json.dumps({"outcome_comments": [{"id": 1, "comment": "Good", "lowerRange": 0, "upperRange": 100}]}),
            encoding="utf-8",
        )
        library = load_comment_library(path)
        assert library.outcome_comments[0].text == "Good"
        assert library.personalized_comments == []

    def test_missing_file(self, tmp_path):
        with pytest.raises(CommentDataError, match="not found"):
            load_comment_library(tmp_path / "missing.yaml")

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("outcome_comments: [", encoding="utf-8")
        with pytest.raises(CommentDataError, match="Could not parse"):
            load_comment_library(path)

    def test_top_level_list(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- 1\n- 2\n", encoding="utf-8")
        with pytest.raises(CommentDataError, match="Expected a mapping"):
            load_comment_library(path)

    def test_entry_missing_range(self, tmp_path):
        path = tmp_path / "partial.yaml"
        path.write_text("outcome_comments:\n  - {id: 1, comment: Good}\n", encoding="utf-8")
        with pytest.raises(CommentDataError) as exc_info:
            load_comment_library(path)
        assert exc_info.value.path == path


class TestLookups:
    """Tests for CommentLibrary lookups."""

    def test_find_pronoun_by_string_id(self, library_file):
        library = load_comment_library(library_file)
        assert library.find_pronoun("1").subject_pronoun == "they"
        assert library.find_pronoun("2") is None
        assert library.find_pronoun(None) is None

    def test_find_personalized_keeps_order(self, library_file):
        library = load_comment_library(library_file)
        found = library.find_personalized(["p3", "missing", "p1"])
        assert [c.id for c in found] == ["p3", "p1"]

"""
Shared pytest fixtures for comment_composer tests.

This module provides common fixtures used across test modules including:
- Outcome comment band fixtures
- Personalized comment fixtures
- Pronoun fixtures
- Comment library file fixtures
"""

import sys
from pathlib import Path
from typing import List

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from comment_composer.config import ComposerConfig
from comment_composer.models import (
    OutcomeComment,
    PersonalizedComment,
    Pronoun,
)

# ============================================================================
# Outcome Comment Fixtures
# ============================================================================


@pytest.fixture
def grade_bands() -> List[OutcomeComment]:
    """Two non-overlapping bands: B for 70-79, A for 80-100."""
    return [
        OutcomeComment(id=1, text="B", lower_range=70, upper_range=79, subject_id=5),
        OutcomeComment(id=2, text="A", lower_range=80, upper_range=100, subject_id=5),
    ]


@pytest.fixture
def placeholder_bands() -> List[OutcomeComment]:
    """Bands whose text uses pronoun placeholders."""
    return [
        OutcomeComment(
            id=10,
            text="<pronoun> demonstrates strong understanding of algebra.",
            lower_range=90,
            upper_range=100,
            subject_id=5,
        ),
        OutcomeComment(
            id=11,
            text="<possessive pronoun> work meets expectations.",
            lower_range=60,
            upper_range=89,
            subject_id=5,
        ),
    ]


# ============================================================================
# Personalized Comment Fixtures
# ============================================================================


@pytest.fixture
def personalized_comments() -> List[PersonalizedComment]:
    """Mixed ratings, including unrated and tied comments."""
    return [
        PersonalizedComment(id="p1", text="needs to focus", rating=2, subject_id=5),
        PersonalizedComment(id="p2", text="Excellent work this semester", rating=5, subject_id=5),
        PersonalizedComment(id="p3", text="Participates regularly", rating=None, subject_id=5),
        PersonalizedComment(id="p4", text="always curious", rating=5, subject_id=5),
        PersonalizedComment(id="p5", text="Good effort", rating=4, subject_id=5),
        PersonalizedComment(id="p6", text="Brings <possessive pronoun> best", rating=3, subject_id=5),
    ]


# ============================================================================
# Pronoun Fixtures
# ============================================================================


@pytest.fixture
def they_pronoun() -> Pronoun:
    return Pronoun(id="1", subject_pronoun="they", possessive_pronoun="their")


@pytest.fixture
def pronouns(they_pronoun: Pronoun) -> List[Pronoun]:
    return [
        Pronoun(id="2", subject_pronoun="he", possessive_pronoun="his"),
        Pronoun(id="3", subject_pronoun="she", possessive_pronoun="her"),
        they_pronoun,
    ]


# ============================================================================
# Config and File Fixtures
# ============================================================================


@pytest.fixture
def default_config() -> ComposerConfig:
    return ComposerConfig()


@pytest.fixture
def library_file(tmp_path: Path) -> Path:
    """A comment library in the API's camelCase shape."""
    path = tmp_path / "library.yaml"
    path.write_text(
        """
outcome_comments:
  - {id: 1, comment: "Solid progress.", lowerRange: 70, upperRange: 79}
  - {id: 2, comment: "<pronoun> excels in this subject.", lowerRange: 80, upperRange: 100}
personalized_comments:
  - {id: p1, comment: "Always curious", rating: 5}
  - {id: p2, comment: "Needs to review <possessive pronoun> notes", rating: 2}
  - {id: p3, comment: "Participates regularly"}
pronouns:
  - {id: 1, pronoun: they, possessivePronoun: their}
""",
        encoding="utf-8",
    )
    return path

"""
Comment library loading.

Reads the outcome comments, personalized comments and pronouns for a
subject from a YAML or JSON export of the API:

    outcome_comments:
      - {id: 1, comment: "Excellent grasp of <possessive pronoun> material.", lowerRange: 90, upperRange: 100}
    personalized_comments:
      - {id: p1, comment: "Always curious", rating: 5}
    pronouns:
      - {id: 1, pronoun: they, possessivePronoun: their}

JSON is a subset of YAML, so both are read with yaml.safe_load.
"""

from __future__ import annotations

from pathlib import Path

import structlog
import yaml  # type: ignore[import-untyped]
from pydantic import BaseModel, Field, ValidationError

from comment_composer.errors import CommentDataError
from comment_composer.models import OutcomeComment, PersonalizedComment, Pronoun

logger = structlog.get_logger()


class CommentLibrary(BaseModel):
    """Everything the composer needs for one subject."""

    outcome_comments: list[OutcomeComment] = Field(default_factory=list)
    personalized_comments: list[PersonalizedComment] = Field(default_factory=list)
    pronouns: list[Pronoun] = Field(default_factory=list)

    def find_pronoun(self, pronoun_id: str | None) -> Pronoun | None:
        """Find a pronoun by id, comparing ids as strings."""
        if pronoun_id is None:
            return None
        return next((p for p in self.pronouns if str(p.id) == pronoun_id), None)

    def find_personalized(self, comment_ids: list[str]) -> list[PersonalizedComment]:
        """Personalized comments for the given ids, in the order given."""
        by_id = {str(c.id): c for c in self.personalized_comments}
        return [by_id[i] for i in comment_ids if i in by_id]


def load_comment_library(path: Path) -> CommentLibrary:
    """
    Load a comment library file.

    Args:
        path: YAML or JSON file

    Returns:
        Parsed CommentLibrary

    Raises:
        CommentDataError: If the file is missing, unparseable or has invalid entries
    """
    if not path.exists():
        raise CommentDataError(f"Comment data file not found: {path}", path=path)

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise CommentDataError(f"Could not parse {path}: {e}", path=path) from e

    if not isinstance(data, dict):
        raise CommentDataError(f"Expected a mapping at the top of {path}", path=path)

    try:
        library = CommentLibrary.model_validate(data)
    except ValidationError as e:
        raise CommentDataError(f"Invalid comment data in {path}: {e}", path=path) from e

    logger.info(
        "comment_library_loaded",
        path=str(path),
        outcome_comments=len(library.outcome_comments),
        personalized_comments=len(library.personalized_comments),
        pronouns=len(library.pronouns),
    )
    return library

"""
Core data models for the final comment composer.

All data structures are defined here to ensure consistent typing
across the composition engine, the form session and the CLI.

Entities owned by the external API layer (comments, pronouns) are frozen.
API payloads use camelCase keys and call the comment body ``comment``;
both shapes are accepted through aliases.
"""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class PopulateState(str, Enum):
    """States of the populate/overwrite confirmation machine."""
    IDLE = "idle"
    READY = "ready"
    CONFIRMING = "confirming"
    APPLIED = "applied"


class PersonalizedComment(BaseModel):
    """A reusable, rated comment for a subject, independent of grade."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str | int = Field(description="Opaque identifier from the API")
    text: str = Field(alias="comment", description="Comment body")
    rating: int | float | None = Field(default=None, description="Sentiment score 1-5, None when unrated")
    subject_id: str | int | None = Field(default=None, alias="subjectId")


class OutcomeComment(BaseModel):
    """A canned comment tied to an inclusive grade band for a subject."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str | int
    text: str = Field(alias="comment")
    lower_range: float = Field(alias="lowerRange", description="Inclusive lower bound")
    upper_range: float = Field(alias="upperRange", description="Inclusive upper bound")
    subject_id: str | int | None = Field(default=None, alias="subjectId")
    created_at: str = Field(default="", alias="createdAt", description="ISO 8601 timestamp")


class Pronoun(BaseModel):
    """A selectable pronoun pair."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str | int
    subject_pronoun: str = Field(alias="pronoun", description="e.g. they")
    possessive_pronoun: str = Field(alias="possessivePronoun", description="e.g. their")


class StudentData(BaseModel):
    """Student values used for <first name>, <last name> and <grade>."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    first_name: str | None = Field(default=None, alias="firstName")
    last_name: str | None = Field(default=None, alias="lastName")
    grade: float | int | None = None


class DraftComment(BaseModel):
    """The in-progress final comment text held by the form session."""

    text: str = ""
    dirty: bool = Field(default=False, description="True once anything was written into the field")

    @property
    def is_blank(self) -> bool:
        return not self.text.strip()


class CopyRequest(BaseModel):
    """Arguments for the server-side copy-between-subjects operation."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    source_subject_id: str | int | None = Field(default=None, alias="sourceSubjectId")
    target_subject_id: str | int | None = Field(default=None, alias="targetSubjectId")
    overwrite: bool = False


class CopyResult(BaseModel):
    """Counts returned by the copy operation; consumed verbatim."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    success_count: int = Field(alias="successCount")
    duplicate_count: int = Field(default=0, alias="duplicateCount")
    overwrite: bool = False


class ParsedComment(BaseModel):
    """A single line of a bulk paste after rating detection."""
    model_config = ConfigDict(frozen=True)

    text: str
    rating: int = 3


class DeduplicationResult(BaseModel):
    """Outcome of removing duplicate comments from a bulk import."""

    unique: list[ParsedComment] = Field(default_factory=list)
    duplicate_count: int = 0
    removed_duplicates: list[ParsedComment] = Field(default_factory=list)


class FailedSave(BaseModel):
    """A bulk import entry the create collaborator rejected."""
    model_config = ConfigDict(frozen=True)

    line_number: int
    original_text: str
    reason: str


class BulkSaveResult(BaseModel):
    """Overall result of saving a bulk import."""

    successful: list[ParsedComment] = Field(default_factory=list)
    failed: list[FailedSave] = Field(default_factory=list)
    total_attempted: int = 0
    duplicate_count: int = 0


class ReplacementCount(BaseModel):
    """Replacements made per placeholder kind."""

    pronoun: int = 0
    possessive_pronoun: int = 0


class PronounReplacementResult(BaseModel):
    """Text with literal pronouns turned into placeholders."""

    replaced_text: str
    replacement_count: ReplacementCount = Field(default_factory=ReplacementCount)


class FinalCommentRequest(BaseModel):
    """Payload handed to the final comment create/update collaborator."""

    class_id: str | int | None = None
    first_name: str
    last_name: str | None = None
    grade: float | int
    comment: str | None = None
    pronoun_id: str | int | None = None
    submitted_at: datetime | None = None

"""
Final comment form session.

Holds the state of one add/edit final comment form (student names, grade,
selected personalized comments, pronoun, rating filter, search query and
the draft) and wires the pure composition engine to it:

    grade / selection / pronoun change
        -> match_band + placeholder substitution
        -> build_candidate
        -> PopulateConfirmationMachine.candidate_changed

The UI layer only forwards events and renders the properties exposed here.
"""

from __future__ import annotations

from datetime import datetime
from typing import Callable, Optional, cast

import structlog

from comment_composer.composition import build_candidate
from comment_composer.config import ComposerConfig
from comment_composer.confirmation import (
    OVERWRITE_CONFIRMATION_MESSAGE,
    PopulateConfirmationMachine,
)
from comment_composer.errors import FinalCommentValidationError, PronounConfirmationRequired
from comment_composer.grade_matching import match_band
from comment_composer.models import (
    DraftComment,
    FinalCommentRequest,
    OutcomeComment,
    PersonalizedComment,
    PopulateState,
    Pronoun,
    StudentData,
)
from comment_composer.ratings import filter_by_rating
from comment_composer.search import search_personalized_comments

logger = structlog.get_logger()

MISSING_PRONOUN_MESSAGE = (
    "You are adding this comment without a pronoun, do you want to continue saving?"
)
NO_OUTCOME_MATCH_MESSAGE = "No outcome comment for this grade."

MIN_GRADE = 0
MAX_GRADE = 100


class FinalCommentForm:
    """
    State holder for one final comment form.

    Every setter that affects the candidate recomputes it, so the form is
    safe to drive from debounced or repeated UI events.
    """

    def __init__(
        self,
        outcome_comments: list[OutcomeComment] | None = None,
        personalized_comments: list[PersonalizedComment] | None = None,
        pronouns: list[Pronoun] | None = None,
        config: ComposerConfig | None = None,
        class_id: str | int | None = None,
        on_focus: Optional[Callable[[], None]] = None,
    ):
        """
        Initialize the form.

        Args:
            outcome_comments: Outcome bands for the active subject
            personalized_comments: Personalized comments for the active subject
            pronouns: Pronouns available for selection
            config: Composer configuration (limits, search, rating filter)
            class_id: Class the final comment belongs to
            on_focus: Called when the draft field should receive focus
        """
        self.config = config or ComposerConfig()
        self.outcome_comments = list(outcome_comments or [])
        self.personalized_comments = list(personalized_comments or [])
        self.pronouns = list(pronouns or [])
        self.class_id = class_id

        self.first_name = ""
        self.last_name = ""
        self.grade: float | int | None = None
        self.pronoun: Pronoun | None = None
        # Ids are kept as strings; API ids may arrive as int or str
        self.selected_ids: list[str] = []
        self.rating_filter = self.config.ratings.default_filter
        self.search_query = ""

        self.machine = PopulateConfirmationMachine(DraftComment(), on_focus=on_focus)

    # ------------------------------------------------------------------
    # Derived values
    # ------------------------------------------------------------------

    @property
    def draft(self) -> DraftComment:
        return self.machine.draft

    @property
    def state(self) -> PopulateState:
        return self.machine.state

    @property
    def max_length(self) -> int:
        return self.config.limits.composition_limit

    @property
    def matched_outcome(self) -> OutcomeComment | None:
        """Outcome band for the current grade, None drives the empty-state message."""
        return match_band(self.grade, self.outcome_comments)

    @property
    def outcome_display(self) -> str:
        matched = self.matched_outcome
        return matched.text if matched is not None else NO_OUTCOME_MATCH_MESSAGE

    @property
    def selected_comments(self) -> list[PersonalizedComment]:
        by_id = {str(c.id): c for c in self.personalized_comments}
        return [by_id[i] for i in self.selected_ids if i in by_id]

    @property
    def visible_comments(self) -> list[PersonalizedComment]:
        """Rating-filtered, sorted and searched comments for the picker."""
        filtered = filter_by_rating(self.personalized_comments, self.rating_filter)
        return search_personalized_comments(
            self.search_query,
            filtered,
            fuzzy_threshold=self.config.search.fuzzy_threshold,
        )

    @property
    def student(self) -> StudentData:
        return StudentData(
            first_name=self.first_name or None,
            last_name=self.last_name or None,
            grade=self.grade,
        )

    @property
    def candidate(self) -> str:
        return build_candidate(
            self.matched_outcome,
            self.selected_comments,
            self.max_length,
            pronoun=self.pronoun,
            student=self.student,
        )

    @property
    def can_populate(self) -> bool:
        return self.machine.can_populate

    @property
    def needs_pronoun_confirmation(self) -> bool:
        return self.pronoun is None

    @property
    def confirmation_message(self) -> str | None:
        """Overwrite prompt while a populate is waiting for confirmation."""
        return OVERWRITE_CONFIRMATION_MESSAGE if self.machine.is_confirming else None

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    def _recompute(self) -> PopulateState:
        return self.machine.candidate_changed(self.candidate)

    def set_grade(self, grade: float | int | None) -> PopulateState:
        self.grade = grade
        logger.debug("grade_changed", grade=grade, matched=self.matched_outcome is not None)
        return self._recompute()

    def set_student_name(self, first_name: str = "", last_name: str = "") -> PopulateState:
        self.first_name = first_name
        self.last_name = last_name
        return self._recompute()

    def select_pronoun(self, pronoun_id: str | int | None) -> PopulateState:
        """Select a pronoun by id; None or an unknown id clears the selection."""
        if pronoun_id is None:
            self.pronoun = None
        else:
            self.pronoun = next(
                (p for p in self.pronouns if str(p.id) == str(pronoun_id)), None
            )
        return self._recompute()

    def select_comment(self, comment_id: str | int) -> PopulateState:
        if str(comment_id) not in self.selected_ids:
            self.selected_ids.append(str(comment_id))
        return self._recompute()

    def deselect_comment(self, comment_id: str | int) -> PopulateState:
        self.selected_ids = [i for i in self.selected_ids if i != str(comment_id)]
        return self._recompute()

    def toggle_comment(self, comment_id: str | int) -> PopulateState:
        if str(comment_id) in self.selected_ids:
            return self.deselect_comment(comment_id)
        return self.select_comment(comment_id)

    def set_rating_filter(self, rating: int) -> None:
        self.rating_filter = rating

    def set_search_query(self, query: str) -> None:
        self.search_query = query

    def edit_comment(self, text: str) -> PopulateState:
        return self.machine.edit(text)

    def populate(self) -> PopulateState:
        return self.machine.populate()

    def confirm_replace(self) -> PopulateState:
        return self.machine.confirm()

    def cancel_replace(self) -> PopulateState:
        return self.machine.cancel()

    # ------------------------------------------------------------------
    # Validation and submission
    # ------------------------------------------------------------------

    def _first_error(self) -> tuple[str, str] | None:
        """First failing (field, message) pair, or None if the form is valid."""
        if not self.first_name.strip():
            return "first_name", "First name is required"

        if self.grade is None:
            return "grade", "Grade is required"

        if self.grade < MIN_GRADE or self.grade > MAX_GRADE:
            return "grade", f"Grade must be between {MIN_GRADE} and {MAX_GRADE}"

        limit = self.config.limits.max_final_comment_length
        if len(self.draft.text) > limit:
            return "comment", f"Comment cannot exceed {limit} characters"

        return None

    def validate(self) -> str | None:
        """
        Validate the form fields.

        Returns:
            First validation message, or None if valid
        """
        error = self._first_error()
        return error[1] if error is not None else None

    def submit(self, confirm_without_pronoun: bool = False) -> FinalCommentRequest:
        """
        Build the create/update request and clear the draft.

        Args:
            confirm_without_pronoun: The user confirmed saving without a pronoun

        Returns:
            FinalCommentRequest with trimmed values; blank optional fields omitted

        Raises:
            FinalCommentValidationError: If validate() reports a problem; the
                offending form field is set on the exception
            PronounConfirmationRequired: If no pronoun is selected and the
                user has not confirmed
        """
        error = self._first_error()
        if error is not None:
            field, message = error
            logger.info("final_comment_invalid", field=field, error=message)
            raise FinalCommentValidationError(message, field=field)

        if self.needs_pronoun_confirmation and not confirm_without_pronoun:
            raise PronounConfirmationRequired(MISSING_PRONOUN_MESSAGE)

        request = FinalCommentRequest(
            class_id=self.class_id,
            first_name=self.first_name.strip(),
            last_name=self.last_name.strip() or None,
            grade=cast(float, self.grade),
            comment=self.draft.text.strip() or None,
            pronoun_id=self.pronoun.id if self.pronoun is not None else None,
            submitted_at=datetime.now(),
        )

        logger.info(
            "final_comment_submitted",
            class_id=self.class_id,
            comment_length=len(request.comment or ""),
        )

        self.reset()
        return request

    def reset(self) -> None:
        """Reset all fields to their empty state (after submit or close)."""
        self.first_name = ""
        self.last_name = ""
        self.grade = None
        self.pronoun = None
        self.selected_ids = []
        self.rating_filter = self.config.ratings.default_filter
        self.search_query = ""
        self.machine.reset()

"""
Populate/overwrite confirmation state machine.

Governs when a composed candidate may be written into the editable final
comment field:

    IDLE        no usable candidate
    READY       candidate computed, nothing pending
    CONFIRMING  overwrite confirmation shown, draft untouched
    APPLIED     candidate written into the draft

A draft that already holds text is only ever replaced after an explicit
confirm(); cancel() and every other path leave it exactly as it was.
"""

from __future__ import annotations

from typing import Callable, Optional

import structlog

from comment_composer.models import DraftComment, PopulateState

logger = structlog.get_logger()

OVERWRITE_CONFIRMATION_MESSAGE = (
    "This will replace your current comment. Do you want to continue?"
)


class PopulateConfirmationMachine:
    """
    Confirm-before-overwrite controller for one draft.

    Focus requests are reported through ``on_focus`` so the UI layer can
    move input focus to the editable field.
    """

    def __init__(
        self,
        draft: Optional[DraftComment] = None,
        on_focus: Optional[Callable[[], None]] = None,
    ) -> None:
        """
        Initialize the machine.

        Args:
            draft: Draft to protect; a fresh empty draft when omitted
            on_focus: Called whenever the candidate is applied
        """
        self.draft = draft if draft is not None else DraftComment()
        self.on_focus = on_focus
        self.state = PopulateState.IDLE
        self.candidate = ""
        self.pending_candidate: Optional[str] = None

    @property
    def can_populate(self) -> bool:
        """Populate is disabled when the candidate would be empty."""
        return bool(self.candidate.strip())

    @property
    def is_confirming(self) -> bool:
        return self.state == PopulateState.CONFIRMING

    def _apply(self, text: str) -> PopulateState:
        self.draft.text = text
        self.draft.dirty = True
        self.pending_candidate = None
        self.state = PopulateState.APPLIED
        logger.debug("candidate_applied", length=len(text))
        if self.on_focus is not None:
            self.on_focus()
        return self.state

    def candidate_changed(self, candidate: str) -> PopulateState:
        """
        Record a recomputed candidate (grade or selection changed).

        A blank draft receives the candidate immediately. A draft with
        text is left alone until the user asks to populate.
        """
        self.candidate = candidate

        if self.state == PopulateState.CONFIRMING:
            return self.state

        if not self.can_populate:
            self.state = PopulateState.IDLE
            return self.state

        if self.draft.is_blank:
            return self._apply(candidate)

        self.state = PopulateState.READY
        return self.state

    def populate(self) -> PopulateState:
        """Explicit populate request from the user."""
        if not self.can_populate:
            logger.debug("populate_ignored_empty_candidate")
            return self.state

        if self.state == PopulateState.CONFIRMING:
            # Latest request wins
            self.pending_candidate = self.candidate
            logger.debug("pending_candidate_replaced")
            return self.state

        if self.draft.is_blank:
            return self._apply(self.candidate)

        if self.draft.text == self.candidate:
            self.state = PopulateState.READY
            return self.state

        self.pending_candidate = self.candidate
        self.state = PopulateState.CONFIRMING
        logger.info("populate_confirmation_requested")
        return self.state

    def confirm(self) -> PopulateState:
        """User chose Replace."""
        if self.state != PopulateState.CONFIRMING or self.pending_candidate is None:
            return self.state
        return self._apply(self.pending_candidate)

    def cancel(self) -> PopulateState:
        """User dismissed the confirmation (Cancel, outside click, Escape)."""
        if self.state != PopulateState.CONFIRMING:
            return self.state
        self.pending_candidate = None
        self.state = PopulateState.READY
        logger.info("populate_confirmation_cancelled")
        return self.state

    def edit(self, text: str) -> PopulateState:
        """The user typed into the field."""
        self.draft.text = text
        self.draft.dirty = True
        if self.state == PopulateState.APPLIED:
            self.state = PopulateState.READY if self.can_populate else PopulateState.IDLE
        return self.state

    def reset(self) -> PopulateState:
        """Clear the draft after a successful submit or when the form closes."""
        self.draft.text = ""
        self.draft.dirty = False
        self.candidate = ""
        self.pending_candidate = None
        self.state = PopulateState.IDLE
        return self.state

"""Custom exception classes for the final comment composer.

The composition engine itself is total over its inputs and raises none of
these; they are raised by the form session, data loading and configuration
layers around it.
"""

from pathlib import Path
from typing import Optional


class CommentComposerError(Exception):
    """Base class for all composer errors."""


class FinalCommentValidationError(CommentComposerError):
    """Raised when a final comment form is submitted with invalid fields.

    The message is the user-facing validation message, e.g.
    "First name is required".
    """

    def __init__(self, message: str, field: Optional[str] = None) -> None:
        self.field = field
        super().__init__(message)


class PronounConfirmationRequired(CommentComposerError):
    """Raised when saving without a pronoun has not been confirmed.

    The caller should show the confirmation prompt and resubmit with
    ``confirm_without_pronoun=True`` if the user agrees. The draft is
    left untouched.
    """


class CommentDataError(CommentComposerError):
    """Raised when a comment data file cannot be read or parsed.

    This typically occurs when:
    - The file does not exist or is not valid YAML/JSON
    - A comment entry is missing required fields
    """

    def __init__(self, message: str, path: Optional[Path] = None) -> None:
        self.path = path
        super().__init__(message)


class ConfigError(CommentComposerError):
    """Raised when a configuration file is present but malformed."""

    def __init__(self, message: str, path: Optional[Path] = None) -> None:
        self.path = path
        super().__init__(message)

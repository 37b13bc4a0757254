"""
Validation of outcome and personalized comment text before it is saved.

Checks run in order and the first failure is reported:

    1. text is required
    2. at least min_comment_length characters
    3. at most max_comment_length characters
    4. not an exact (trimmed) duplicate of a stored comment

Lengths are measured on the trimmed text.
"""

from __future__ import annotations

from typing import Callable, Iterable, Optional, TypeVar

from comment_composer.comparison import find_duplicate, trim
from comment_composer.config import LimitsConfig

T = TypeVar("T")

COMMENT_REQUIRED_MESSAGE = "Comment is required"
DUPLICATE_COMMENT_MESSAGE = "This comment already exists"


def validate_comment_text(
    text: str,
    existing: Iterable[T] = (),
    limits: Optional[LimitsConfig] = None,
    scope: Optional[Callable[[T], bool]] = None,
    text_of: Optional[Callable[[T], str]] = None,
) -> Optional[str]:
    """
    Validate comment text about to be created or updated.

    Args:
        text: Text typed into the comment field
        existing: Comments already stored, checked for duplicates
        limits: Length limits; defaults when omitted
        scope: Optional predicate narrowing the duplicate search
        text_of: Optional text getter passed through to find_duplicate

    Returns:
        First validation message, or None when the text can be saved
    """
    limits = limits or LimitsConfig()
    trimmed = trim(text)

    if not trimmed:
        return COMMENT_REQUIRED_MESSAGE

    if len(trimmed) < limits.min_comment_length:
        return f"Comment must be at least {limits.min_comment_length} characters"

    if len(trimmed) > limits.max_comment_length:
        return f"Comment cannot exceed {limits.max_comment_length} characters"

    if find_duplicate(trimmed, existing, scope=scope, text_of=text_of) is not None:
        return DUPLICATE_COMMENT_MESSAGE

    return None

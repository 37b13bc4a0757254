"""
User-facing messages for the copy-between-subjects operation.

The copy itself, including duplicate counting, runs server-side; only the
result counts are formatted here.
"""

from __future__ import annotations

from typing import Optional

from comment_composer.models import CopyRequest, CopyResult


def pluralize(count: int, singular: str, plural: Optional[str] = None) -> str:
    """Pick the singular form only when count is exactly 1."""
    if count == 1:
        return singular
    return plural if plural is not None else f"{singular}s"


def format_copy_message(result: CopyResult, target_name: str) -> str:
    """
    Format the success message for a copy result.

    Args:
        result: Counts returned by the copy operation
        target_name: Display name of the target subject

    Returns:
        Overwrite-mode or append-mode message
    """
    copied = f"{result.success_count} {pluralize(result.success_count, 'comment')}"

    if result.overwrite:
        return f"Successfully replaced all comments in {target_name}. Copied {copied}."

    message = f"Successfully copied {copied} to {target_name}."
    if result.duplicate_count == 0:
        return message

    skipped = pluralize(result.duplicate_count, "duplicate was", "duplicates were")
    return f"{message} {result.duplicate_count} {skipped} skipped (already existed)."


def validate_copy_request(request: CopyRequest) -> Optional[str]:
    """
    Check a copy request before it is sent.

    Returns:
        Validation message, or None when the request is valid
    """
    if request.source_subject_id in (None, ""):
        return "Please select a source subject"
    if request.target_subject_id in (None, ""):
        return "Please select a target subject"
    if request.source_subject_id == request.target_subject_id:
        return "Source and target subjects must be different"
    return None

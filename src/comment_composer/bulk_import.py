"""
Bulk import of personalized comments.

Users paste one comment per line, optionally ending in ", N" where N is
a 1-5 rating:

    Shows great curiosity in class, 5
    Needs to review <possessive pronoun> notes more often, 2
    Participates regularly

Lines are parsed, deduplicated (case-insensitive, whitespace-collapsed,
also against comments already stored for the subject) and then saved one
at a time through a caller-supplied create function. A failing save is
recorded and the import continues.
"""

from __future__ import annotations

import re
from typing import Any, Callable, Iterable, Optional

import structlog

from comment_composer.models import (
    BulkSaveResult,
    DeduplicationResult,
    FailedSave,
    ParsedComment,
    PersonalizedComment,
)
from comment_composer.ratings import DEFAULT_RATING

logger = structlog.get_logger()

_LINE_SPLIT = re.compile(r"\r?\n")
_TRAILING_RATING = re.compile(r", ([0-9])$")
_WHITESPACE = re.compile(r"\s+")


def parse_comments(raw: str) -> list[ParsedComment]:
    """
    Parse pasted text into comments with ratings.

    Args:
        raw: Pasted text, one comment per line

    Returns:
        Parsed comments; blank lines are skipped, rating defaults to 3.
        A trailing digit outside 1-5 is kept as part of the text.
    """
    if not raw or not raw.strip():
        return []

    parsed: list[ParsedComment] = []

    for line in _LINE_SPLIT.split(raw):
        trimmed = line.strip()
        if not trimmed:
            continue

        text = trimmed
        rating = DEFAULT_RATING

        match = _TRAILING_RATING.search(trimmed)
        if match:
            digit = int(match.group(1))
            if 1 <= digit <= 5:
                text = trimmed[: trimmed.rfind(",")].strip()
                rating = digit

        parsed.append(ParsedComment(text=text, rating=rating))

    return parsed


def normalize_for_dedup(text: str) -> str:
    """Lowercase, collapse all whitespace runs to one space, trim."""
    return _WHITESPACE.sub(" ", text.lower()).strip()


def deduplicate_comments(
    comments: Iterable[ParsedComment],
    existing: Optional[Iterable[PersonalizedComment]] = None,
) -> DeduplicationResult:
    """
    Remove duplicate comments, keeping the first occurrence.

    Comments with identical text but different ratings are duplicates.

    Args:
        comments: Parsed comments from a bulk paste
        existing: Comments already stored for the subject

    Returns:
        Unique comments, duplicate count and the removed entries
    """
    seen: set[str] = set()
    if existing is not None:
        seen.update(normalize_for_dedup(c.text) for c in existing)

    unique: list[ParsedComment] = []
    removed: list[ParsedComment] = []

    for comment in comments:
        key = normalize_for_dedup(comment.text)
        if key in seen:
            removed.append(comment)
        else:
            seen.add(key)
            unique.append(comment)

    return DeduplicationResult(
        unique=unique,
        duplicate_count=len(removed),
        removed_duplicates=removed,
    )


def bulk_save_comments(
    subject_id: str | int,
    comments: list[ParsedComment],
    create_comment: Callable[[dict[str, Any]], Any],
    on_progress: Optional[Callable[[int], None]] = None,
    existing: Optional[Iterable[PersonalizedComment]] = None,
) -> BulkSaveResult:
    """
    Deduplicate and save comments sequentially.

    Args:
        subject_id: Subject the comments belong to
        comments: Parsed comments to import
        create_comment: Create collaborator, called with
            ``{"comment", "subjectId", "rating"}`` for each unique comment
        on_progress: Called with the number of comments processed so far
        existing: Comments already stored, used for deduplication

    Returns:
        BulkSaveResult; total_attempted is the count before deduplication
    """
    dedup = deduplicate_comments(comments, existing)

    result = BulkSaveResult(
        total_attempted=len(comments),
        duplicate_count=dedup.duplicate_count,
    )

    logger.info(
        "bulk_save_started",
        subject_id=subject_id,
        total=len(comments),
        duplicates=dedup.duplicate_count,
    )

    for index, comment in enumerate(dedup.unique):
        try:
            create_comment({
                "comment": comment.text,
                "subjectId": subject_id,
                "rating": comment.rating,
            })
            result.successful.append(comment)
        except Exception as e:
            # Keep importing the remaining comments
            logger.warning(
                "bulk_save_failed",
                line_number=index + 1,
                error=str(e),
            )
            result.failed.append(
                FailedSave(
                    line_number=index + 1,
                    original_text=comment.text,
                    reason=str(e) or "Unknown error",
                )
            )

        if on_progress is not None:
            on_progress(index + 1)

    logger.info(
        "bulk_save_complete",
        subject_id=subject_id,
        successful=len(result.successful),
        failed=len(result.failed),
    )

    return result

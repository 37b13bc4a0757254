"""
Exact-match duplicate detection for comment text.

Used to stop a user from saving the same outcome or personalized
comment twice. Comparison trims leading/trailing whitespace only; case and
internal whitespace (repeated spaces, newlines) are significant.

Trimming matches the browser's String.prototype.trim: a byte order mark is
stripped, the ASCII separators 0x1C-0x1F are not.
"""

from __future__ import annotations

from typing import Any, Callable, Iterable, Optional, TypeVar

T = TypeVar("T")

TRIM_CHARACTERS = (
    # ECMAScript WhiteSpace and LineTerminator code points
    "\t\n\x0b\x0c\r \xa0\u1680"
    "\u2000\u2001\u2002\u2003\u2004\u2005\u2006\u2007\u2008\u2009\u200a"
    "\u2028\u2029\u202f\u205f\u3000\ufeff"
)


def trim(text: str) -> str:
    """Strip leading/trailing whitespace, including a byte order mark."""
    return text.strip(TRIM_CHARACTERS)


def is_duplicate(new_text: str, existing_text: str) -> bool:
    """Whether two comment texts are identical once trimmed."""
    return trim(new_text) == trim(existing_text)


def _default_text_of(item: Any) -> str:
    if isinstance(item, dict):
        value = item.get("text")
    else:
        value = getattr(item, "text", None)
    return value if isinstance(value, str) else ""


def find_duplicate(
    candidate_text: str,
    existing: Iterable[T],
    scope: Optional[Callable[[T], bool]] = None,
    text_of: Optional[Callable[[T], str]] = None,
) -> Optional[T]:
    """
    Find the first existing comment whose text duplicates the candidate.

    Args:
        candidate_text: Text about to be saved
        existing: Comments already stored, scanned in order
        scope: Optional predicate narrowing the search (e.g. same subject)
        text_of: Optional text getter; defaults to the ``text`` attribute/key

    Returns:
        The first duplicate, or None
    """
    getter = text_of or _default_text_of

    for item in existing:
        if scope is not None and not scope(item):
            continue
        if is_duplicate(candidate_text, getter(item)):
            return item

    return None

"""Final Comment Composer - assemble student final comments.

This package combines grade-banded outcome comments and rated personalized
comments into an editable final comment draft, with placeholder
substitution, duplicate detection and confirm-before-overwrite protection.
"""

__version__ = "0.1.0"
__author__ = "Final Comment Composer Team"

from comment_composer.composition import build_candidate, compose
from comment_composer.confirmation import PopulateConfirmationMachine
from comment_composer.session import FinalCommentForm
from comment_composer.validation import validate_comment_text

__all__ = [
    "__version__",
    "__author__",
    "FinalCommentForm",
    "PopulateConfirmationMachine",
    "build_candidate",
    "compose",
    "validate_comment_text",
]

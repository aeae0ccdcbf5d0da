"""Author identity model: validation, ignore globs and canonical authors."""

from gitcredit.identity.validation import ValidationError, validate_emails, validate_globs
from gitcredit.identity.matcher import IgnoreGlobMatcher
from gitcredit.identity.author import (
    NO_AUTHOR_WITH_COMMITS,
    UNKNOWN_AUTHOR,
    Author,
    is_placeholder_author,
)
from gitcredit.identity.registry import AuthorRegistry

__all__ = [
    "ValidationError",
    "validate_emails",
    "validate_globs",
    "IgnoreGlobMatcher",
    "Author",
    "AuthorRegistry",
    "UNKNOWN_AUTHOR",
    "NO_AUTHOR_WITH_COMMITS",
    "is_placeholder_author",
]

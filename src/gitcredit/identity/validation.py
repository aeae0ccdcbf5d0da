"""Allow-list validation for author emails and ignore globs."""

import re
from typing import Iterable

COMMON_EMAIL_REGEX = re.compile(
    r"^([a-zA-Z0-9_\-\.\+]+)@([a-zA-Z0-9_\-\.]+)\.([a-zA-Z]{2,5})$"
)
COMMON_GLOB_REGEX = re.compile(r"^[-a-zA-Z0-9 _/\\*!{}\[\]!(),:.]*$")

MESSAGE_UNCOMMON_EMAIL_PATTERN = "The provided email, {}, uses uncommon pattern."
MESSAGE_UNCOMMON_GLOB_PATTERN = "The provided ignore glob, {}, uses uncommon pattern."


class ValidationError(ValueError):
    """Raised when an email or ignore glob fails its allow-list pattern."""

    def __init__(self, message: str, value: str) -> None:
        super().__init__(message)
        self.value = value


def validate_emails(emails: Iterable[str]) -> None:
    """Check that every email uses a commonly seen pattern.

    Args:
        emails: Candidate email strings

    Raises:
        ValidationError: On the first email that does not match
    """
    for email in emails:
        if not isinstance(email, str) or not COMMON_EMAIL_REGEX.fullmatch(email):
            raise ValidationError(MESSAGE_UNCOMMON_EMAIL_PATTERN.format(email), email)


def validate_globs(globs: Iterable[str]) -> None:
    """Check that every ignore glob only uses common glob characters.

    Args:
        globs: Candidate glob strings

    Raises:
        ValidationError: On the first glob that does not match
    """
    for glob in globs:
        if not isinstance(glob, str) or not COMMON_GLOB_REGEX.fullmatch(glob):
            raise ValidationError(MESSAGE_UNCOMMON_GLOB_PATTERN.format(glob), glob)

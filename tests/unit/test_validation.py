"""Unit tests for email and ignore glob validation."""

import re

import pytest

from gitcredit.identity.validation import ValidationError, validate_emails, validate_globs


@pytest.mark.parametrize(
    "email",
    [
        "alice@example.com",
        "alice.smith+git@mail.example.co",
        "a_b-c@sub-domain.example.io",
        "octocat@users.noreply.github.com",
    ],
)
def test_common_emails_pass(email):
    """Test that ordinary emails are accepted."""
    validate_emails([email])


@pytest.mark.parametrize(
    "email",
    [
        "not-an-email",
        "alice@localhost",
        "alice@example.c",
        "alice@example.technology",
        "alice smith@example.com",
        "alice@example.com\n",
        "",
    ],
)
def test_uncommon_emails_rejected(email):
    """Test that unusual emails are rejected."""
    with pytest.raises(ValidationError):
        validate_emails([email])


def test_email_error_names_offending_value():
    """Test that the first bad email is named in the error."""
    with pytest.raises(ValidationError, match="The provided email, bad@@x.com, uses uncommon pattern") as excinfo:
        validate_emails(["good@example.com", "bad@@x.com", "worse"])

    assert excinfo.value.value == "bad@@x.com"


def test_validation_error_is_value_error():
    """Test that callers catching ValueError also catch validation errors."""
    with pytest.raises(ValueError):
        validate_emails(["nope"])


def test_empty_batches_pass():
    """Test that empty batches are valid."""
    validate_emails([])
    validate_globs([])


@pytest.mark.parametrize(
    "glob",
    ["*.md", "secret/**", "docs/{api,guide}/*.txt", "[!a]*.py", "my file.txt", "a\\b", "(x),y:z"],
)
def test_common_globs_pass(glob):
    """Test that ordinary globs are accepted."""
    validate_globs([glob])


@pytest.mark.parametrize("glob", ["src/?.py", "$(rm -rf)", "a|b", "~/x", "a;b", "x#y"])
def test_uncommon_globs_rejected(glob):
    """Test that globs with unusual characters are rejected."""
    with pytest.raises(ValidationError, match="uses uncommon pattern"):
        validate_globs([glob])


def test_glob_error_names_offending_value():
    """Test that the bad glob is named in the error."""
    with pytest.raises(ValidationError, match=re.escape("The provided ignore glob, a|b, uses uncommon pattern")) as excinfo:
        validate_globs(["*.md", "a|b"])

    assert excinfo.value.value == "a|b"

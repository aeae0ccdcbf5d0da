"""Canonical author identity records."""

from typing import TYPE_CHECKING, Iterable, List, Optional, Tuple

from gitcredit.identity.matcher import IgnoreGlobMatcher, PathLike
from gitcredit.identity.validation import validate_emails, validate_globs

if TYPE_CHECKING:
    from gitcredit.models.config import StandaloneAuthor

NAME_NO_AUTHOR_WITH_COMMITS_FOUND = "NO AUTHOR WITH COMMITS FOUND WITHIN THIS PERIOD OF TIME"
UNKNOWN_AUTHOR_GIT_ID = "-"

STANDARD_GITHUB_EMAIL_DOMAIN = "@users.noreply.github.com"
STANDARD_GITLAB_EMAIL_DOMAIN = "@users.noreply.gitlab.com"


def _dedupe(values: Iterable[str]) -> Tuple[str, ...]:
    return tuple(dict.fromkeys(values))


class Author:
    """A contributor, identified by a case-insensitive git id.

    Emails, aliases and ignore globs are held in tuples that are replaced,
    never mutated, so copies made with :meth:`alias_of` can safely share
    them. The ignore glob matcher is rebuilt inside every operation that
    changes the glob list.
    """

    def __init__(self, git_id: str) -> None:
        """Create a minimal author carrying only the standard host emails.

        Args:
            git_id: Canonical handle of the contributor
        """
        self._git_id = git_id
        self.display_name = git_id
        self._author_aliases: Tuple[str, ...] = ()
        self._emails: Tuple[str, ...] = self._with_standard_git_host_emails(())
        self._ignore_glob_list: Tuple[str, ...] = ()
        self._ignore_glob_matcher = IgnoreGlobMatcher()

    @classmethod
    def from_standalone(cls, standalone: "StandaloneAuthor") -> "Author":
        """Build an author from a user supplied author description.

        Args:
            standalone: Author description from configuration

        Returns:
            Author with validated emails and ignore globs

        Raises:
            ValidationError: If an email or glob uses an uncommon pattern
        """
        author = cls(standalone.git_id)
        author.display_name = standalone.display_name or standalone.git_id
        author.set_author_aliases(standalone.author_names)
        author.set_emails(standalone.emails)
        author.set_ignore_glob_list(standalone.ignore_glob_list)
        return author

    @classmethod
    def alias_of(cls, other: "Author") -> "Author":
        """Copy ``other`` sharing its collections and compiled matcher."""
        author = cls.__new__(cls)
        author._git_id = other._git_id
        author.display_name = other.display_name
        author._author_aliases = other._author_aliases
        author._emails = other._emails
        author._ignore_glob_list = other._ignore_glob_list
        author._ignore_glob_matcher = other._ignore_glob_matcher
        return author

    @classmethod
    def snapshot_of(cls, other: "Author") -> "Author":
        """Copy ``other`` into fresh collections with a freshly compiled matcher."""
        author = cls.alias_of(other)
        author._author_aliases = tuple(other._author_aliases)
        author._emails = tuple(other._emails)
        author._ignore_glob_list = tuple(other._ignore_glob_list)
        author._ignore_glob_matcher = IgnoreGlobMatcher(author._ignore_glob_list)
        return author

    @property
    def git_id(self) -> str:
        return self._git_id

    @property
    def emails(self) -> List[str]:
        return list(self._emails)

    @property
    def author_aliases(self) -> List[str]:
        return list(self._author_aliases)

    @property
    def ignore_glob_list(self) -> List[str]:
        return list(self._ignore_glob_list)

    @property
    def ignore_glob_matcher(self) -> IgnoreGlobMatcher:
        return self._ignore_glob_matcher

    def set_emails(self, emails: Iterable[str]) -> None:
        """Replace the email list, keeping the standard host emails.

        Args:
            emails: New emails

        Raises:
            ValidationError: If any email uses an uncommon pattern; the
                current emails are left untouched
        """
        emails = list(emails)
        validate_emails(emails)
        self._emails = self._with_standard_git_host_emails(_dedupe(emails))

    def set_author_aliases(self, aliases: Iterable[str]) -> None:
        self._author_aliases = _dedupe(aliases)

    def set_ignore_glob_list(self, ignore_glob_list: Iterable[str]) -> None:
        """Replace the ignore glob list and rebuild the matcher.

        Args:
            ignore_glob_list: New ignore globs

        Raises:
            ValidationError: If any glob is uncommon or malformed; the
                current globs and matcher are left untouched
        """
        globs = _dedupe(ignore_glob_list)
        validate_globs(globs)
        matcher = IgnoreGlobMatcher(globs)
        self._ignore_glob_list = globs
        self._ignore_glob_matcher = matcher

    def import_ignore_glob_list(self, ignore_glob_list: Iterable[str]) -> None:
        """Add ignore globs not already present and rebuild the matcher.

        Args:
            ignore_glob_list: Globs to merge into the current list

        Raises:
            ValidationError: If any glob is uncommon or malformed
        """
        globs = list(ignore_glob_list)
        validate_globs(globs)
        self.set_ignore_glob_list(self._ignore_glob_list + tuple(globs))

    def is_ignoring_file(self, file_path: PathLike) -> bool:
        """Check whether this author's changes to ``file_path`` are excluded."""
        return self._ignore_glob_matcher.matches(file_path)

    def _with_standard_git_host_emails(self, emails: Tuple[str, ...]) -> Tuple[str, ...]:
        standard_emails = (
            self._git_id + STANDARD_GITHUB_EMAIL_DOMAIN,
            self._git_id + STANDARD_GITLAB_EMAIL_DOMAIN,
        )
        return emails + tuple(email for email in standard_emails if email not in emails)

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, Author):
            return NotImplemented
        return self._git_id.lower() == other._git_id.lower()

    def __hash__(self) -> int:
        return hash(self._git_id.lower())

    def __str__(self) -> str:
        return self._git_id

    def __repr__(self) -> str:
        return f"Author(git_id={self._git_id!r}, display_name={self.display_name!r})"


# Shared placeholders; treat as read-only and mutate copies made with alias_of
UNKNOWN_AUTHOR = Author(UNKNOWN_AUTHOR_GIT_ID)
NO_AUTHOR_WITH_COMMITS = Author(NAME_NO_AUTHOR_WITH_COMMITS_FOUND)


def is_placeholder_author(author: Optional[Author]) -> bool:
    """Check whether ``author`` is one of the reserved placeholder identities."""
    return author is not None and author in (UNKNOWN_AUTHOR, NO_AUTHOR_WITH_COMMITS)

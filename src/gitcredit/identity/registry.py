"""Resolution of raw commit identities to canonical authors."""

import re
from typing import TYPE_CHECKING, Dict, Iterable, List, Optional

import structlog

from gitcredit.identity.author import (
    STANDARD_GITHUB_EMAIL_DOMAIN,
    STANDARD_GITLAB_EMAIL_DOMAIN,
    UNKNOWN_AUTHOR,
    Author,
)
from gitcredit.identity.matcher import PathLike

if TYPE_CHECKING:
    from gitcredit.models.config import StandaloneAuthor

logger = structlog.get_logger(__name__)

# GitHub's numbered no-reply form: "<user id>+<login>@users.noreply.github.com"
GITHUB_NUMBERED_EMAIL_REGEX = re.compile(
    r"^\d+\+(?P<git_id>[^@]+)" + re.escape(STANDARD_GITHUB_EMAIL_DOMAIN) + r"$",
    re.IGNORECASE,
)


class AuthorRegistry:
    """Maps emails, names and git ids seen in commits to canonical authors.

    Lookups are case-insensitive. Registering an author whose git id is
    already known merges the new emails, aliases and ignore globs into the
    existing record.
    """

    def __init__(self, authors: Optional[Iterable[Author]] = None) -> None:
        self._authors: Dict[str, Author] = {}
        self._email_to_author: Dict[str, Author] = {}
        self._name_to_author: Dict[str, Author] = {}

        for author in authors or []:
            self.add_author(author)

    @classmethod
    def from_standalone_authors(cls, standalone_authors: Iterable["StandaloneAuthor"]) -> "AuthorRegistry":
        """Build a registry from configured author descriptions.

        Raises:
            ValidationError: If any author carries an uncommon email or glob
        """
        return cls(Author.from_standalone(sa) for sa in standalone_authors)

    @property
    def authors(self) -> List[Author]:
        return list(self._authors.values())

    def __len__(self) -> int:
        return len(self._authors)

    def __contains__(self, author: object) -> bool:
        return isinstance(author, Author) and author.git_id.lower() in self._authors

    def add_author(self, author: Author) -> Author:
        """Register an author, merging it into an existing record with the same id.

        Args:
            author: Author to register

        Returns:
            The registered (possibly merged) author
        """
        key = author.git_id.lower()
        existing = self._authors.get(key)

        if existing is None:
            registered = author
            self._authors[key] = registered
        else:
            logger.debug("author_merged", git_id=existing.git_id, merged_from=author.git_id)
            existing.set_emails(
                [
                    email
                    for email in existing.emails + author.emails
                    if not _is_standard_email(email, existing) and not _is_standard_email(email, author)
                ]
            )
            existing.set_author_aliases(existing.author_aliases + author.author_aliases)
            existing.import_ignore_glob_list(author.ignore_glob_list)
            registered = existing

        for email in registered.emails:
            self._email_to_author[email.lower()] = registered
        for name in [registered.git_id, registered.display_name, *registered.author_aliases]:
            self._name_to_author.setdefault(name.lower(), registered)

        return registered

    def get_author(self, name: Optional[str] = None, email: Optional[str] = None) -> Author:
        """Resolve a commit's author name and email to a canonical author.

        Email takes precedence over name. GitHub numbered no-reply emails
        resolve through the login they embed.

        Args:
            name: Author name as recorded in the commit
            email: Author email as recorded in the commit

        Returns:
            The matching author, or a copy of ``UNKNOWN_AUTHOR``
        """
        if email:
            author = self._email_to_author.get(email.lower())
            if author is not None:
                return author

            numbered = GITHUB_NUMBERED_EMAIL_REGEX.match(email)
            if numbered:
                author = self._authors.get(numbered.group("git_id").lower())
                if author is not None:
                    return author

        if name:
            author = self._name_to_author.get(name.lower())
            if author is not None:
                return author

        logger.debug("author_unresolved", name=name, email=email)
        return Author.alias_of(UNKNOWN_AUTHOR)

    def is_ignored_by(self, author: Author, file_path: PathLike) -> bool:
        """Check whether the registered record of ``author`` ignores ``file_path``."""
        registered = self._authors.get(author.git_id.lower(), author)
        return registered.is_ignoring_file(file_path)


def _is_standard_email(email: str, author: Author) -> bool:
    return email in (
        author.git_id + STANDARD_GITHUB_EMAIL_DOMAIN,
        author.git_id + STANDARD_GITLAB_EMAIL_DOMAIN,
    )

"""Base class for version-control collaborators."""

from abc import ABC, abstractmethod
from datetime import datetime
from pathlib import Path
from typing import Optional


class CommitNotFoundError(ValueError):
    """Raised when no commit on a branch is at or before the requested date."""

    def __init__(self, repo_root: Path, branch: str, until_date: Optional[datetime]) -> None:
        super().__init__(f"Commit not found on {branch} in {repo_root} at or before {until_date}")
        self.repo_root = repo_root
        self.branch = branch
        self.until_date = until_date


class VersionControl(ABC):
    """Abstract base class for the operations the extractor needs from git."""

    @abstractmethod
    def checkout_to_date(
        self,
        repo_root: Path,
        branch: str,
        until_date: Optional[datetime],
    ) -> str:
        """Check the working copy out at the latest commit not after ``until_date``.

        Calling it again with the same arguments must leave the working copy
        in the same state.

        Args:
            repo_root: Path to the working copy
            branch: Branch to take the commit from
            until_date: Inclusive upper bound; None means the branch tip

        Returns:
            Hash of the checked-out commit

        Raises:
            CommitNotFoundError: If the branch has no commit at or before the date
        """
        pass

    @abstractmethod
    def get_diff_text(self, repo_root: Path, since_date: Optional[datetime] = None) -> str:
        """Return the unified diff of the checked-out state against the window start.

        Every changed file carries a ``+++ b/<path>`` line, or
        ``+++ /dev/null`` when the file was removed.

        Args:
            repo_root: Path to the working copy
            since_date: Start of the window; None diffs against the empty tree

        Returns:
            Raw diff text
        """
        pass

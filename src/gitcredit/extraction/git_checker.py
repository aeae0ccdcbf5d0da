"""GitPython implementation of the version-control collaborator."""

from datetime import datetime
from pathlib import Path
from typing import Dict, Optional

import git
import structlog
from git import Repo

from gitcredit.extraction.base import CommitNotFoundError, VersionControl

logger = structlog.get_logger(__name__)

# Hash of the tree with no entries, identical in every git repository
EMPTY_TREE_SHA = "4b825dc642cb6eb9a060e54bf8d69288fbee4904"

_UNKNOWN_REVISION_MARKERS = ("unknown revision", "bad revision", "ambiguous argument")


class GitChecker(VersionControl):
    """Runs checkout and diff commands against a local working copy."""

    def __init__(self, timeout: Optional[float] = None) -> None:
        """Initialize the GitChecker.

        Args:
            timeout: Seconds after which a git command is killed (None waits forever)
        """
        self.timeout = timeout
        self._head_refs: Dict[str, str] = {}

    def open_repo(self, repo_root: Path) -> Repo:
        """Open the repository at ``repo_root``.

        Raises:
            ValueError: If the path does not exist or is not a git repository
        """
        repo_root = Path(repo_root)
        if not repo_root.exists():
            raise ValueError(f"Repository path does not exist: {repo_root}")

        try:
            return Repo(repo_root)
        except git.exc.InvalidGitRepositoryError as e:
            raise ValueError(f"Invalid Git repository: {repo_root}") from e

    def checkout_to_date(
        self,
        repo_root: Path,
        branch: str,
        until_date: Optional[datetime],
    ) -> str:
        repo = self.open_repo(repo_root)
        rev = self._resolve_branch(repo, repo_root, branch)

        if rev != "HEAD":
            try:
                repo.git.checkout(rev, kill_after_timeout=self.timeout)
            except git.exc.GitCommandError as e:
                if not _is_unknown_revision(e) and "did not match" not in str(e.stderr):
                    raise
                logger.warning("branch_not_found", repo=str(repo_root), branch=branch)
                raise CommitNotFoundError(repo_root, branch, until_date) from e

        commit_hash = self._last_commit_before(repo, rev, until_date)
        if not commit_hash:
            raise CommitNotFoundError(repo_root, branch, until_date)

        repo.git.checkout(commit_hash, kill_after_timeout=self.timeout)
        logger.debug(
            "checked_out_to_date",
            repo=str(repo_root),
            branch=branch,
            until_date=str(until_date),
            commit=commit_hash[:7],
        )
        return commit_hash

    def get_diff_text(self, repo_root: Path, since_date: Optional[datetime] = None) -> str:
        repo = self.open_repo(repo_root)

        base = EMPTY_TREE_SHA
        if since_date is not None:
            base = self._last_commit_before(repo, "HEAD", since_date) or EMPTY_TREE_SHA

        # Keep non-ASCII paths readable; the parser unquotes what git still quotes
        return repo.git(c="core.quotePath=false").diff(
            "--no-ext-diff",
            "--no-color",
            "-M",
            base,
            "HEAD",
            kill_after_timeout=self.timeout,
        )

    def _resolve_branch(self, repo: Repo, repo_root: Path, branch: str) -> str:
        """Pin ``HEAD`` to the ref it named on first use of ``repo_root``.

        Checking out to a date detaches ``HEAD``, so walking from it again
        would never reach commits after the previous until-date.
        """
        if branch != "HEAD":
            return branch

        key = str(Path(repo_root).resolve())
        if key in self._head_refs:
            return self._head_refs[key]

        # No commits yet: nothing to pin
        if not repo.head.is_valid():
            return branch

        if repo.head.is_detached:
            ref = repo.head.commit.hexsha
        else:
            ref = repo.active_branch.name

        logger.debug("head_resolved", repo=str(repo_root), ref=ref)
        self._head_refs[key] = ref
        return ref

    def _last_commit_before(self, repo: Repo, rev: str, date: Optional[datetime]) -> str:
        args = ["-1"]
        if date is not None:
            args.append(f"--before={date.isoformat()}")
        args.append(rev)

        try:
            return repo.git.rev_list(*args, kill_after_timeout=self.timeout).strip()
        except git.exc.GitCommandError as e:
            # An empty repository has no HEAD to walk from
            if _is_unknown_revision(e):
                return ""
            raise


def _is_unknown_revision(error: git.exc.GitCommandError) -> bool:
    stderr = str(error.stderr or "")
    return any(marker in stderr for marker in _UNKNOWN_REVISION_MARKERS)

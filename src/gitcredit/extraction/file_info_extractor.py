"""Extraction of surviving changed files for a history window."""

import re
from pathlib import Path, PurePosixPath
from typing import List, Optional

import structlog

from gitcredit.extraction.base import CommitNotFoundError, VersionControl
from gitcredit.identity.matcher import IgnoreGlobMatcher
from gitcredit.models import FileChangeRecord, LineInfo, RepositoryConfig

logger = structlog.get_logger(__name__)

FILE_DELETED_SYMBOL = "dev/null"

DIFF_SECTION_PATTERN = re.compile(r"^diff --git ", re.MULTILINE)
FILE_CHANGED_PATTERN = re.compile(
    r'^\+{3} (?P<quote>"?)(?P<prefix>b)?/(?P<file_path>.*?)(?P=quote)\t?$', re.MULTILINE
)
HUNK_HEADER_PATTERN = re.compile(r"^@@ -\d+(?:,\d+)? \+(?P<start>\d+)(?:,\d+)? @@")

C_ESCAPE_PATTERN = re.compile(rb"\\([0-7]{3}|.)", re.DOTALL)
C_ESCAPES = {
    b"a": b"\a",
    b"b": b"\b",
    b"t": b"\t",
    b"n": b"\n",
    b"v": b"\v",
    b"f": b"\f",
    b"r": b"\r",
    b'"': b'"',
    b"\\": b"\\",
}


def unquote_path(quoted: str) -> str:
    """Undo git's C-style quoting of a path (without the surrounding quotes).

    Octal escapes are raw bytes of the UTF-8 encoded name.
    """

    def replace(match: "re.Match[bytes]") -> bytes:
        token = match.group(1)
        if len(token) == 3:
            return bytes([int(token, 8)])
        return C_ESCAPES.get(token, token)

    raw = C_ESCAPE_PATTERN.sub(replace, quoted.encode("utf-8"))
    return raw.decode("utf-8", errors="replace")


def split_diff_sections(diff_text: str) -> List[str]:
    """Split raw diff output into one section per file.

    Text before the first ``diff --git`` header is kept as its own section
    so that bare ``---``/``+++`` diffs are still parsed.
    """
    sections = DIFF_SECTION_PATTERN.split(diff_text)
    return [section for section in sections if section.strip()]


def parse_changed_lines(section: str) -> List[int]:
    """Collect the new-side line numbers of lines added in a diff section."""
    changed_lines: List[int] = []
    line_number: Optional[int] = None

    for line in section.split("\n"):
        header = HUNK_HEADER_PATTERN.match(line)
        if header:
            line_number = int(header.group("start"))
            continue
        if line_number is None:
            continue
        if line.startswith("+"):
            changed_lines.append(line_number)
            line_number += 1
        elif line.startswith(" "):
            line_number += 1
        # "-" lines and "\ No newline at end of file" do not advance the new side

    return changed_lines


def parse_diff_section(section: str) -> Optional[FileChangeRecord]:
    """Turn a single file's diff section into a record.

    Args:
        section: Diff text of one file

    Returns:
        FileChangeRecord, or None when the section has no file-changed
        marker or describes a deleted file
    """
    match = FILE_CHANGED_PATTERN.search(section)

    # no marker: mode change, binary file or pure rename, nothing to attribute
    if not match:
        return None

    file_path = match.group("file_path")

    if match.group("quote"):
        file_path = unquote_path(file_path)
    elif match.group("prefix") is None and file_path == FILE_DELETED_SYMBOL:
        return None

    return FileChangeRecord(
        file_path=file_path,
        changed_lines=parse_changed_lines(section[match.end():]),
    )


def parse_diff_text(diff_text: str) -> List[FileChangeRecord]:
    """Parse raw diff output into records, keeping the order of the diff.

    Args:
        diff_text: Unified diff text covering any number of files

    Returns:
        One FileChangeRecord per changed, non-deleted file
    """
    records = []
    for section in split_diff_sections(diff_text):
        record = parse_diff_section(section)
        if record is not None:
            records.append(record)
    return records


class FileInfoExtractor:
    """Lists the files changed in a repository up to a given date."""

    def __init__(self, vcs: VersionControl, read_contents: bool = False) -> None:
        """Initialize the FileInfoExtractor.

        Args:
            vcs: Version-control collaborator used for checkout and diff
            read_contents: Whether to load each file's surviving lines
        """
        self.vcs = vcs
        self.read_contents = read_contents

    def extract_file_infos(self, config: RepositoryConfig) -> List[FileChangeRecord]:
        """Check the repository out at the until-date and list its changed files.

        A branch with no commit at or before the until-date yields an empty
        list; every other failure is raised to the caller.

        Args:
            config: Repository, branch and date window to analyze

        Returns:
            Records in the order the diff lists the files
        """
        try:
            self.vcs.checkout_to_date(config.repo_root, config.branch, config.until_date)
        except CommitNotFoundError:
            logger.warning(
                "no_history_until_date",
                repo=str(config.repo_root),
                branch=config.branch,
                until_date=str(config.until_date),
            )
            return []

        diff_text = self.vcs.get_diff_text(config.repo_root, config.since_date)
        ignore_matcher = IgnoreGlobMatcher(config.ignore_glob_list)
        records = [
            record
            for record in parse_diff_text(diff_text)
            if self._should_include_file(config, ignore_matcher, record.file_path)
        ]

        if self.read_contents:
            for record in records:
                record.lines = self._read_lines(config.repo_root, record.file_path)

        logger.info(
            "files_extracted",
            repo=str(config.repo_root),
            branch=config.branch,
            count=len(records),
        )
        return records

    def _should_include_file(
        self,
        config: RepositoryConfig,
        ignore_matcher: IgnoreGlobMatcher,
        file_path: str,
    ) -> bool:
        """Check if a file should be analyzed based on the repository config.

        Args:
            config: Repository configuration
            ignore_matcher: Matcher compiled from the repository ignore globs
            file_path: Repository-relative path

        Returns:
            True if file should be included
        """
        if ignore_matcher.matches(file_path):
            return False

        if not config.file_formats:
            return True

        return PurePosixPath(file_path).suffix.lstrip(".").lower() in config.file_formats

    @staticmethod
    def _read_lines(repo_root: Path, file_path: str) -> List[LineInfo]:
        content = (Path(repo_root) / file_path).read_text(encoding="utf-8", errors="replace")
        return [
            LineInfo(line_number=number, content=line)
            for number, line in enumerate(content.splitlines(), start=1)
        ]

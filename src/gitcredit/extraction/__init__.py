"""History window extraction: checkout to a date and parse the resulting diff."""

from gitcredit.extraction.base import CommitNotFoundError, VersionControl
from gitcredit.extraction.git_checker import GitChecker
from gitcredit.extraction.file_info_extractor import FileInfoExtractor, parse_diff_text

__all__ = [
    "CommitNotFoundError",
    "VersionControl",
    "GitChecker",
    "FileInfoExtractor",
    "parse_diff_text",
]

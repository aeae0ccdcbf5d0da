"""Data models for history window extraction."""

from gitcredit.models.file_info import FileChangeRecord, LineInfo
from gitcredit.models.config import RepositoryConfig, Settings, StandaloneAuthor

__all__ = [
    "FileChangeRecord",
    "LineInfo",
    "RepositoryConfig",
    "StandaloneAuthor",
    "Settings",
]

"""Configuration models."""

from datetime import datetime
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from gitcredit.identity.validation import validate_globs


class RepositoryConfig(BaseModel):
    """Configuration for one repository/branch/date-window analysis."""

    repo_root: Path = Field(..., description="Path to the working copy of the repository")
    branch: str = Field("HEAD", description="Branch to analyze")
    since_date: Optional[datetime] = Field(None, description="Start of the analysis window")
    until_date: Optional[datetime] = Field(None, description="Inclusive end of the analysis window")
    ignore_glob_list: List[str] = Field(
        default_factory=list,
        description="Repository-wide globs of files to leave out of the analysis",
    )
    file_formats: List[str] = Field(
        default_factory=list,
        description="File extensions (without dot) to analyze; empty means all",
    )

    @field_validator("ignore_glob_list")
    @classmethod
    def _check_ignore_globs(cls, value: List[str]) -> List[str]:
        validate_globs(value)
        return value

    @field_validator("file_formats")
    @classmethod
    def _strip_format_dots(cls, value: List[str]) -> List[str]:
        return [fmt.lstrip(".").lower() for fmt in value]

    class Config:
        """Pydantic config."""
        json_schema_extra = {
            "example": {
                "repo_root": "/path/to/repo",
                "branch": "main",
                "since_date": "2024-01-01T00:00:00",
                "until_date": "2024-06-30T23:59:59",
                "ignore_glob_list": ["docs/**", "*.lock"],
                "file_formats": ["py", "md"],
            }
        }


class StandaloneAuthor(BaseModel):
    """Author description as written by users in configuration."""

    git_id: str = Field(..., min_length=1, description="Canonical git handle")
    emails: List[str] = Field(default_factory=list, description="Emails used in commits")
    display_name: str = Field("", description="Name shown in reports; defaults to the git id")
    author_names: List[str] = Field(default_factory=list, description="Other names seen in commits")
    ignore_glob_list: List[str] = Field(
        default_factory=list,
        description="Globs of files whose changes by this author are ignored",
    )

    class Config:
        """Pydantic config."""
        json_schema_extra = {
            "example": {
                "git_id": "octocat",
                "emails": ["octocat@example.com"],
                "display_name": "The Octocat",
                "author_names": ["Octo Cat"],
                "ignore_glob_list": ["vendor/**"],
            }
        }


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="GITCREDIT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Git
    default_branch: str = "HEAD"
    git_timeout: Optional[float] = 120.0

    # Logging
    log_level: str = "INFO"

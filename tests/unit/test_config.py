"""Unit tests for configuration models."""

from pathlib import Path

import pytest
from pydantic import ValidationError as PydanticValidationError

from gitcredit.models import RepositoryConfig, Settings, StandaloneAuthor


def test_repository_config_defaults():
    """Test RepositoryConfig defaults."""
    config = RepositoryConfig(repo_root=Path("/tmp/repo"))

    assert config.branch == "HEAD"
    assert config.since_date is None
    assert config.until_date is None
    assert config.ignore_glob_list == []
    assert config.file_formats == []


def test_repository_config_parses_dates():
    """Test that ISO dates are parsed."""
    config = RepositoryConfig(repo_root="/tmp/repo", until_date="2024-06-30T23:59:59")

    assert config.until_date.year == 2024
    assert config.until_date.month == 6


def test_repository_config_normalizes_formats():
    """Test that file formats lose their dots and case."""
    config = RepositoryConfig(repo_root="/tmp/repo", file_formats=[".PY", "md"])

    assert config.file_formats == ["py", "md"]


def test_repository_config_rejects_uncommon_glob():
    """Test that repository ignore globs are validated."""
    with pytest.raises(PydanticValidationError, match="uses uncommon pattern"):
        RepositoryConfig(repo_root="/tmp/repo", ignore_glob_list=["ok/**", "rm -rf $HOME"])


def test_standalone_author_defaults():
    """Test StandaloneAuthor defaults."""
    author = StandaloneAuthor(git_id="octocat")

    assert author.emails == []
    assert author.display_name == ""
    assert author.author_names == []
    assert author.ignore_glob_list == []


def test_standalone_author_requires_id():
    """Test that an empty git id is rejected."""
    with pytest.raises(PydanticValidationError):
        StandaloneAuthor(git_id="")


def test_settings_defaults(monkeypatch):
    """Test Settings defaults."""
    monkeypatch.delenv("GITCREDIT_LOG_LEVEL", raising=False)
    monkeypatch.delenv("GITCREDIT_GIT_TIMEOUT", raising=False)
    settings = Settings(_env_file=None)

    assert settings.log_level == "INFO"
    assert settings.git_timeout == 120.0
    assert settings.default_branch == "HEAD"


def test_settings_from_environment(monkeypatch):
    """Test that settings are read from prefixed environment variables."""
    monkeypatch.setenv("GITCREDIT_LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("GITCREDIT_GIT_TIMEOUT", "5")
    settings = Settings(_env_file=None)

    assert settings.log_level == "DEBUG"
    assert settings.git_timeout == 5.0

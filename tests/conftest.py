"""Shared fixtures."""

import tempfile
from datetime import datetime, timezone
from pathlib import Path

import git
import pytest


def git_date(year: int, month: int, day: int) -> str:
    """Format a UTC date the way git stores it internally."""
    timestamp = int(datetime(year, month, day, 12, tzinfo=timezone.utc).timestamp())
    return f"{timestamp} +0000"


@pytest.fixture
def dated_repo():
    """Create a temporary Git repository with commits a year apart.

    2020-01-01: add README.md and main.py
    2021-01-01: modify main.py, add docs/guide.md
    2022-01-01: delete README.md, add notes.txt
    """
    with tempfile.TemporaryDirectory() as tmpdir:
        repo_path = Path(tmpdir)
        repo = git.Repo.init(repo_path)

        # Configure git
        repo.config_writer().set_value("user", "name", "Test User").release()
        repo.config_writer().set_value("user", "email", "test@example.com").release()

        def commit(message, date):
            repo.index.commit(message, author_date=date, commit_date=date)

        (repo_path / "README.md").write_text("# Test Project\n")
        (repo_path / "main.py").write_text("def hello():\n    print('Hello')\n")
        repo.index.add(["README.md", "main.py"])
        commit("Initial commit", git_date(2020, 1, 1))

        (repo_path / "docs").mkdir()
        (repo_path / "docs" / "guide.md").write_text("# Guide\n\nRead me first.\n")
        (repo_path / "main.py").write_text("def hello():\n    print('Hello, World!')\nhello()\n")
        repo.index.add(["docs/guide.md", "main.py"])
        commit("Add guide and greet the world", git_date(2021, 1, 1))

        repo.index.remove(["README.md"], working_tree=True)
        (repo_path / "notes.txt").write_text("Meeting notes\nnothing decided\n")
        repo.index.add(["notes.txt"])
        commit("Replace README with notes", git_date(2022, 1, 1))

        yield repo_path


@pytest.fixture
def commit_file(dated_repo):
    """Return a helper committing one new file to ``dated_repo`` on a given day."""
    repo = git.Repo(dated_repo)

    def commit(file_name, content, day):
        (dated_repo / file_name).write_text(content, encoding="utf-8")
        repo.index.add([file_name])
        date = git_date(*day)
        repo.index.commit(f"Add {file_name}", author_date=date, commit_date=date)

    return commit

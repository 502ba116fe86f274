"""Shared test fixtures for FireSight."""

import os
import shutil
import subprocess
from datetime import datetime, timedelta, timezone

import pytest

from firesight.heat.models import FileChangeStats

NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


def pytest_addoption(parser):
    """Add --run-slow option for slow tests."""
    parser.addoption(
        "--run-slow",
        action="store_true",
        default=False,
        help="run slow tests",
    )


def pytest_configure(config):
    """Configure slow marker."""
    config.addinivalue_line("markers", "slow: mark test as slow to run")


def pytest_collection_modifyitems(config, items):
    """Skip slow tests unless --run-slow is given."""
    if config.getoption("--run-slow"):
        return
    skip_slow = pytest.mark.skip(reason="need --run-slow option to run")
    for item in items:
        if "slow" in item.keywords:
            item.add_marker(skip_slow)


def make_stats(
    path: str,
    changes_by_day: dict[int, int] | None = None,
    authors: dict[str, int] | None = None,
    now: datetime = NOW,
) -> FileChangeStats:
    """FileChangeStats consistent with its own changes_by_day.

    ``last_modified``/``first_seen`` are derived from the smallest/largest
    day offset; authors default to a single author owning every change.
    """
    changes_by_day = dict(changes_by_day or {})
    total = sum(changes_by_day.values())
    if authors is None:
        authors = {"alice": total} if total else {}
    if changes_by_day:
        last = now - timedelta(days=min(changes_by_day))
        first = now - timedelta(days=max(changes_by_day))
    else:
        last = first = now
    return FileChangeStats(
        file_path=path,
        total_changes=total,
        last_modified=last,
        first_seen=first,
        changes_by_day=changes_by_day,
        unique_authors=dict(authors),
    )


@pytest.fixture
def now():
    """Fixed reference time."""
    return NOW


@pytest.fixture
def scenario_stats():
    """One hot, recent file and one cold, old file in the same folder."""
    return {
        "a/b.go": make_stats("a/b.go", {0: 10}, {"x": 10}),
        "a/c.go": make_stats("a/c.go", {200: 1}, {"y": 1}),
    }


@pytest.fixture
def nested_stats():
    """Small multi-level tree with mixed activity."""
    return {
        "src/app.py": make_stats("src/app.py", {1: 4, 10: 2}, {"alice": 3, "bob": 3}),
        "src/util/strings.py": make_stats("src/util/strings.py", {30: 1}),
        "src/util/numbers.py": make_stats("src/util/numbers.py", {5: 3}),
        "docs/index.md": make_stats("docs/index.md", {90: 2}),
        "README.md": make_stats("README.md", {0: 1}),
        "setup.py": make_stats("setup.py", {400: 1}),
    }


def _git(cwd, *args, env=None):
    subprocess.run(["git", "-C", str(cwd), *args], check=True, capture_output=True, env=env)


@pytest.fixture
def git_repo(tmp_path):
    """Throwaway repository on branch ``main`` with three commits.

    Commits are authored 1, 3 and 400 days before NOW.
    """
    if shutil.which("git") is None:
        pytest.skip("git not available")

    repo = tmp_path / "repo"
    repo.mkdir()
    _git(repo, "init", "--quiet", "--initial-branch=main")
    _git(repo, "config", "user.email", "test@example.com")
    _git(repo, "config", "user.name", "Test")
    _git(repo, "config", "commit.gpgsign", "false")

    def commit(files: dict[str, str], author: str, days_ago: int, message: str):
        for rel, content in files.items():
            target = repo / rel
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content)
        _git(repo, "add", "-A")
        when = (NOW - timedelta(days=days_ago)).isoformat()
        env = {
            "GIT_AUTHOR_NAME": author,
            "GIT_AUTHOR_EMAIL": f"{author.lower()}@example.com",
            "GIT_AUTHOR_DATE": when,
            "GIT_COMMITTER_NAME": author,
            "GIT_COMMITTER_EMAIL": f"{author.lower()}@example.com",
            "GIT_COMMITTER_DATE": when,
            "PATH": os.environ.get("PATH", ""),
            "HOME": str(tmp_path),
        }
        _git(repo, "commit", "--quiet", "-m", message, env=env)

    commit({"legacy/old.py": "x = 0\n"}, "Carol", 400, "ancient history")
    commit({"src/app.py": "print(1)\n", "README.md": "hi\n"}, "Alice", 3, "add app")
    commit({"src/app.py": "print(2)\n"}, "Bob", 1, "tweak app")
    return repo
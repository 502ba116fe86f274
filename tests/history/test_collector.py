"""Tests for folding commits into per-file change statistics."""

from datetime import timedelta

from conftest import NOW
from firesight.history.collector import collect_file_stats, day_offset
from firesight.history.models import Commit


def commit(sha: str, days_ago: float, author: str, files: list[str]) -> Commit:
    ts = int((NOW - timedelta(days=days_ago)).timestamp())
    return Commit(hash=sha * 40, timestamp=ts, author=author, files=files)


class TestDayOffset:
    def test_truncates_partial_days(self):
        assert day_offset(NOW - timedelta(hours=23), NOW) == 0
        assert day_offset(NOW - timedelta(hours=25), NOW) == 1


class TestCollectFileStats:
    def test_empty(self):
        assert collect_file_stats([], now=NOW) == {}

    def test_counts_and_invariants(self):
        commits = [
            commit("a", 1, "alice", ["src/a.py", "src/b.py"]),
            commit("b", 1.5, "bob", ["src/a.py"]),
            commit("c", 10, "alice", ["src/a.py"]),
        ]
        stats = collect_file_stats(commits, now=NOW)

        a = stats["src/a.py"]
        assert a.file_path == "src/a.py"
        assert a.total_changes == 3
        assert a.changes_by_day == {1: 2, 10: 1}
        assert a.unique_authors == {"alice": 2, "bob": 1}
        assert sum(a.changes_by_day.values()) == a.total_changes
        assert sum(a.unique_authors.values()) == a.total_changes

        b = stats["src/b.py"]
        assert b.total_changes == 1
        assert b.unique_authors == {"alice": 1}

    def test_first_seen_and_last_modified(self):
        # newest first, as git log returns them
        commits = [
            commit("a", 2, "alice", ["x.py"]),
            commit("b", 5, "alice", ["x.py"]),
            commit("c", 9, "alice", ["x.py"]),
        ]
        stats = collect_file_stats(commits, now=NOW)["x.py"]
        assert stats.last_modified == commits[0].authored_at
        assert stats.first_seen == commits[2].authored_at

    def test_order_does_not_matter(self):
        commits = [
            commit("a", 2, "alice", ["x.py"]),
            commit("b", 5, "bob", ["x.py"]),
        ]
        forward = collect_file_stats(commits, now=NOW)["x.py"]
        backward = collect_file_stats(list(reversed(commits)), now=NOW)["x.py"]
        assert forward == backward

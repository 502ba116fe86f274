"""Fold a commit list into per-file change statistics."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Iterable, Optional

from ..heat.models import FileChangeStats
from .models import Commit


def day_offset(moment: datetime, now: datetime) -> int:
    """Whole days between ``moment`` and ``now`` (truncated)."""
    return int((now - moment).total_seconds() / 3600 / 24)


def collect_file_stats(
    commits: Iterable[Commit], now: Optional[datetime] = None
) -> dict[str, FileChangeStats]:
    """Build one FileChangeStats per path touched by ``commits``.

    Every commit counts once per file it touches, regardless of how many
    lines it changed.
    """
    now = now or datetime.now(timezone.utc)
    file_stats: dict[str, FileChangeStats] = {}

    for commit in commits:
        when = commit.authored_at
        offset = day_offset(when, now)

        for path in commit.files:
            fs = file_stats.get(path)
            if fs is None:
                fs = FileChangeStats(file_path=path, first_seen=when, last_modified=when)
                file_stats[path] = fs

            fs.total_changes += 1
            if when > fs.last_modified:
                fs.last_modified = when
            if when < fs.first_seen:
                fs.first_seen = when

            fs.changes_by_day[offset] = fs.changes_by_day.get(offset, 0) + 1
            fs.unique_authors[commit.author] = fs.unique_authors.get(commit.author, 0) + 1

    return file_stats

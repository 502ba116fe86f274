"""Data models for git history collection."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone

from ..heat.models import FileChangeStats


@dataclass
class Commit:
    hash: str
    timestamp: int  # author time, unix seconds
    author: str  # author name
    files: list[str]  # relative paths changed

    @property
    def authored_at(self) -> datetime:
        return datetime.fromtimestamp(self.timestamp, tz=timezone.utc)


@dataclass
class AnalysisResult:
    """Change statistics of one repository, branch and time window."""

    repo_id: str
    repo_url: str
    branch: str  # branch actually analyzed (may be the fallback)
    analyzed_at: datetime
    commit_count: int
    file_stats: dict[str, FileChangeStats]
    time_range_days: int

"""
Public API for FireSight: analyze one repository end to end.

Example:
    >>> from firesight import analyze
    >>> report = analyze("https://github.com/pallets/flask", time_range_days=90)
    >>> [s.path for s in report.hottest(3)]
"""

from __future__ import annotations

import hashlib
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from .config import AnalysisConfig, load_config
from .exceptions import AnalysisTimeoutError
from .heat import FileNode, HeatScore, build_tree, compute_heat_scores, is_likely_dead_code
from .history import AnalysisResult, GitExtractor, checkout, collect_file_stats
from .history.clone import redact
from .logging_config import get_logger

logger = get_logger(__name__)


def generate_repo_id(repo_url: str, branch: str) -> str:
    """Deterministic 16-hex-char id for a repository/branch pair."""
    digest = hashlib.sha256(f"{repo_url}:{branch}".encode("utf-8")).hexdigest()
    return digest[:16]


@dataclass
class HeatmapReport:
    """Everything one analysis produced."""

    result: AnalysisResult
    heat_scores: list[HeatScore]
    tree: FileNode
    duration_seconds: float

    @property
    def repo_id(self) -> str:
        return self.result.repo_id

    def hottest(self, limit: int = 10) -> list[HeatScore]:
        return sorted(self.heat_scores, key=lambda s: (-s.score, s.path))[:limit]

    def dead_code_paths(
        self, now: Optional[datetime] = None, config: Optional[AnalysisConfig] = None
    ) -> list[str]:
        """Paths the dead-code heuristic flags, sorted."""
        scoring = config.scoring if config is not None else None
        now = now or self.result.analyzed_at
        return sorted(
            path
            for path, stats in self.result.file_stats.items()
            if is_likely_dead_code(stats, now, scoring)
        )


class _Deadline:
    def __init__(self, seconds: float):
        self.seconds = seconds
        self._expires = time.monotonic() + seconds

    def remaining(self, stage: str) -> float:
        left = self._expires - time.monotonic()
        if left <= 0:
            raise AnalysisTimeoutError(self.seconds, stage)
        return left


def analyze(
    repo: str,
    branch: Optional[str] = None,
    time_range_days: Optional[int] = None,
    auth_token: Optional[str] = None,
    config: Optional[AnalysisConfig] = None,
    now: Optional[datetime] = None,
) -> HeatmapReport:
    """
    Analyze the recent change history of a repository.

    Args:
        repo: Remote URL or local path of a git repository
        branch: Branch to analyze (default: config.default_branch)
        time_range_days: Days of history to include (default: config.time_range_days)
        auth_token: Token for private https repositories
        config: Analysis configuration (default: load_config())
        now: End of the analyzed window (default: current UTC time). A naive
            datetime is taken to be UTC.

    Returns:
        HeatmapReport with per-file scores and the aggregated tree

    Raises:
        HistoryError: Clone, branch or git failures
        AnalysisTimeoutError: Clone + history collection exceeded config.timeout_seconds
        InvalidConfigError: time_range_days reaches back past year 1
    """
    config = config or load_config()
    branch = branch or config.default_branch
    time_range_days = time_range_days or config.time_range_days
    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)

    started = time.perf_counter()
    deadline = _Deadline(config.timeout_seconds)
    repo_id = generate_repo_id(repo, branch)

    try:
        with checkout(
            repo,
            auth_token=auth_token,
            temp_dir=config.temp_dir,
            timeout=deadline.remaining("clone"),
        ) as repo_path:
            extractor = GitExtractor(
                repo_path,
                branch=branch,
                time_range_days=time_range_days,
                max_commits=config.git_max_commits,
                timeout=deadline.remaining("resolve branch"),
                fallback_branch=config.fallback_branch,
            )
            resolved_branch, ref = extractor.resolve_branch()
            extractor.timeout = deadline.remaining("git log")
            commits = extractor.extract(now=now, ref=ref)
    except AnalysisTimeoutError as e:
        raise AnalysisTimeoutError(config.timeout_seconds, e.stage) from e

    history_done = time.perf_counter()
    logger.info(
        "Collected %d commits from %s in %.2fs",
        len(commits),
        redact(repo),
        history_done - started,
    )

    file_stats = collect_file_stats(commits, now=now)
    heat_scores = compute_heat_scores(file_stats, now=now, config=config.scoring)
    tree = build_tree(heat_scores, file_stats)

    duration = time.perf_counter() - started
    logger.info(
        "Scored %d files in %.2fs (total %.2fs)",
        len(heat_scores),
        duration - (history_done - started),
        duration,
    )

    result = AnalysisResult(
        repo_id=repo_id,
        repo_url=redact(repo),
        branch=resolved_branch,
        analyzed_at=now,
        commit_count=len(commits),
        file_stats=file_stats,
        time_range_days=time_range_days,
    )
    return HeatmapReport(
        result=result, heat_scores=heat_scores, tree=tree, duration_seconds=duration
    )

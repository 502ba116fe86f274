"""Extract commit history of one branch via the git CLI."""

from __future__ import annotations

import os
import re
import subprocess
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Optional

from ..exceptions import (
    AnalysisTimeoutError,
    BranchNotFoundError,
    GitCommandError,
    GitNotFoundError,
    InvalidConfigError,
    NotARepositoryError,
)
from ..logging_config import get_logger
from .models import Commit

logger = get_logger(__name__)


def run_git(
    args: list[str], cwd: Optional[str] = None, timeout: Optional[float] = None
) -> subprocess.CompletedProcess:
    """Run a git command, mapping launch failures and timeouts to FireSight errors.

    A non-zero exit status is returned to the caller, not raised.
    """
    cmd = ["git", "-c", "core.quotepath=off"]
    if cwd is not None:
        cmd += ["-C", cwd]
    cmd += args
    # never block on an interactive credential prompt
    env = {**os.environ, "GIT_TERMINAL_PROMPT": "0"}
    logger.debug("Running git %s", args[0])
    try:
        return subprocess.run(
            cmd,
            capture_output=True,
            encoding="utf-8",
            errors="replace",
            timeout=timeout,
            env=env,
        )
    except FileNotFoundError:
        raise GitNotFoundError()
    except subprocess.TimeoutExpired:
        raise AnalysisTimeoutError(timeout or 0, stage=f"git {args[0]}")


class GitExtractor:
    """Read the commits of one branch inside a trailing time window."""

    # 40-char hex hash | unix author time | author name (may itself contain "|")
    _HEADER_RE = re.compile(r"^[0-9a-f]{40}\|\d+\|.*$")

    def __init__(
        self,
        repo_path: str,
        branch: str = "main",
        time_range_days: int = 180,
        max_commits: int = 0,
        timeout: Optional[float] = None,
        fallback_branch: Optional[str] = "master",
    ):
        self.repo_path = str(Path(repo_path).resolve())
        self.branch = branch
        self.time_range_days = time_range_days
        self.max_commits = max_commits
        self.timeout = timeout
        self.fallback_branch = fallback_branch

    def is_git_repo(self) -> bool:
        result = run_git(["rev-parse", "--git-dir"], cwd=self.repo_path, timeout=self.timeout)
        return result.returncode == 0

    def resolve_branch(self) -> tuple[str, str]:
        """Find the ref to read.

        Returns:
            (branch name, fully qualified ref). Falls back to
            ``fallback_branch`` when the requested branch is missing.
        """
        candidates = [self.branch]
        if self.fallback_branch and self.fallback_branch != self.branch:
            candidates.append(self.fallback_branch)

        tried: list[str] = []
        for name in candidates:
            for ref in (f"refs/heads/{name}", f"refs/remotes/origin/{name}"):
                tried.append(ref)
                result = run_git(
                    ["rev-parse", "--verify", "--quiet", ref],
                    cwd=self.repo_path,
                    timeout=self.timeout,
                )
                if result.returncode == 0:
                    if name != self.branch:
                        logger.info("Branch %s not found, using %s", self.branch, name)
                    return name, ref

        raise BranchNotFoundError(self.branch, tried)

    def cutoff(self, now: datetime) -> datetime:
        try:
            return now - timedelta(days=self.time_range_days)
        except OverflowError:
            raise InvalidConfigError(
                "time_range_days", self.time_range_days, "window starts before year 1"
            )

    def extract(self, now: Optional[datetime] = None, ref: Optional[str] = None) -> list[Commit]:
        """Commits inside the window, newest first.

        Args:
            now: End of the window (default: current UTC time)
            ref: Ref to read; resolved from ``branch`` when omitted
        """
        if not self.is_git_repo():
            raise NotARepositoryError(self.repo_path)

        now = now or datetime.now(timezone.utc)
        if ref is None:
            _, ref = self.resolve_branch()

        cutoff = self.cutoff(now)
        raw = self._run_git_log(ref, cutoff)
        commits = self.parse_log(raw)

        # --since filters on committer time; the window is defined on author time
        cutoff_ts = int(cutoff.timestamp())
        in_window = [c for c in commits if c.timestamp >= cutoff_ts]
        skipped = len(commits) - len(in_window)
        if skipped:
            logger.debug("Skipped %d commits authored before %s", skipped, cutoff.date())

        logger.info("Read %d commits from %s", len(in_window), ref)
        return in_window

    def _run_git_log(self, ref: str, cutoff: datetime) -> str:
        args = [
            "log",
            ref,
            f"--since={cutoff.isoformat()}",
            "--format=%H|%at|%an",
            "--name-only",
            "--no-renames",
        ]
        if self.max_commits:
            args.append(f"-n{self.max_commits}")

        result = run_git(args, cwd=self.repo_path, timeout=self.timeout)
        if result.returncode != 0:
            raise GitCommandError("log", result.stderr.strip())
        return result.stdout

    @classmethod
    def parse_log(cls, raw: str) -> list[Commit]:
        """Parse ``git log --format=%H|%at|%an --name-only`` output.

        Headers are detected by regex rather than blank-line separation.
        Merge and empty commits are kept with an empty ``files`` list.
        """
        commits: list[Commit] = []
        current: Optional[Commit] = None

        for line in raw.split("\n"):
            line = line.strip()
            if not line:
                continue

            if cls._HEADER_RE.match(line):
                if current is not None:
                    commits.append(current)
                sha, ts, author = line.split("|", 2)
                current = Commit(hash=sha, timestamp=int(ts), author=author, files=[])
            elif current is not None:
                current.files.append(line)

        if current is not None:
            commits.append(current)

        return commits

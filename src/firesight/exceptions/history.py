"""History provider exceptions: git availability, refs, clones."""

from typing import List

from .base import FireSightError


class HistoryError(FireSightError):
    """Base class for errors while collecting change history."""

    pass


class GitNotFoundError(HistoryError):
    """Raised when the git executable cannot be run."""

    def __init__(self):
        super().__init__("git executable not found on PATH")


class NotARepositoryError(HistoryError):
    """Raised when a local path is not a git working tree."""

    def __init__(self, path: str):
        super().__init__(f"Not a git repository: {path}", details={"path": path})
        self.path = path


class BranchNotFoundError(HistoryError):
    """Raised when neither the requested nor the fallback branch exists."""

    def __init__(self, branch: str, tried: List[str]):
        super().__init__(
            f"Branch not found: {branch}",
            details={"branch": branch, "tried": ", ".join(tried)},
        )
        self.branch = branch
        self.tried = tried


class CloneError(HistoryError):
    """Raised when a remote repository cannot be cloned.

    ``url`` must already have credentials stripped.
    """

    def __init__(self, url: str, reason: str):
        super().__init__(
            f"Failed to clone {url}",
            details={"url": url, "reason": reason},
        )
        self.url = url
        self.reason = reason


class GitCommandError(HistoryError):
    """Raised when a git subprocess exits with an error."""

    def __init__(self, command: str, reason: str):
        super().__init__(
            f"git {command} failed",
            details={"command": command, "reason": reason},
        )
        self.command = command
        self.reason = reason

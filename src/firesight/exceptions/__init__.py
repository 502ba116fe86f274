"""Exception hierarchy for FireSight."""

from .analysis import (
    AnalysisError,
    AnalysisTimeoutError,
    InvalidFilePathError,
    MissingFileStatsError,
    PathConflictError,
)
from .base import FireSightError
from .config import ConfigurationError, InvalidConfigError
from .history import (
    BranchNotFoundError,
    CloneError,
    GitCommandError,
    GitNotFoundError,
    HistoryError,
    NotARepositoryError,
)

__all__ = [
    "FireSightError",
    "AnalysisError",
    "MissingFileStatsError",
    "InvalidFilePathError",
    "PathConflictError",
    "AnalysisTimeoutError",
    "HistoryError",
    "GitNotFoundError",
    "NotARepositoryError",
    "BranchNotFoundError",
    "CloneError",
    "GitCommandError",
    "ConfigurationError",
    "InvalidConfigError",
]

"""Analysis-related exceptions: caller contract breaches and deadlines."""

from .base import FireSightError


class AnalysisError(FireSightError):
    """Base class for analysis-related errors."""
    pass


class MissingFileStatsError(AnalysisError):
    """Raised when a heat score references a path absent from the stats map."""

    def __init__(self, path: str):
        super().__init__(
            f"No change statistics for scored path: {path}",
            details={"path": path},
        )
        self.path = path


class InvalidFilePathError(AnalysisError):
    """Raised when a path has no usable segment to place in the tree."""

    def __init__(self, path: str):
        super().__init__(
            f"Path has no segments: {path!r}",
            details={"path": path},
        )
        self.path = path


class PathConflictError(AnalysisError):
    """Raised when an input path lands on a node that already exists."""

    def __init__(self, path: str, existing_type: str):
        super().__init__(
            f"Path collides with an existing {existing_type} node: {path}",
            details={"path": path, "existing_type": existing_type},
        )
        self.path = path
        self.existing_type = existing_type


class AnalysisTimeoutError(AnalysisError):
    """Raised when an analysis exceeds its deadline."""

    def __init__(self, timeout_seconds: float, stage: str):
        super().__init__(
            f"Analysis timed out after {timeout_seconds:g}s",
            details={"stage": stage},
        )
        self.timeout_seconds = timeout_seconds
        self.stage = stage

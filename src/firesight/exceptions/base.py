"""Root of the FireSight error hierarchy.

Every error carries a short human message plus optional ``details``: flat
key/value context (path, branch, stage) that ends up in log lines and in the
``error`` field of HTTP responses as ``message (key=value, ...)``.
"""

from typing import Any, Mapping, Optional


class FireSightError(Exception):
    """Base class; catch this to handle any failure raised by FireSight."""

    def __init__(self, message: str, details: Optional[Mapping[str, Any]] = None):
        super().__init__(message)
        self.message = message
        # values are stringified once so rendering never depends on caller objects
        self.details: dict[str, str] = {k: str(v) for k, v in (details or {}).items()}

    def __str__(self) -> str:
        if not self.details:
            return self.message
        context = ", ".join(f"{key}={value}" for key, value in self.details.items())
        return f"{self.message} ({context})"

"""History provider: git log extraction and per-file change statistics."""

from .clone import checkout
from .collector import collect_file_stats
from .git_extractor import GitExtractor
from .models import AnalysisResult, Commit

__all__ = [
    "AnalysisResult",
    "Commit",
    "GitExtractor",
    "checkout",
    "collect_file_stats",
]

"""
FireSight - code heat from version-control history

Scores how actively each file of a repository is changing and folds the
scores into a directory tree for heatmap dashboards.
"""

__version__ = "0.1.0"

from .api import HeatmapReport, analyze
from .heat import FileChangeStats, FileNode, HeatScore, build_tree, compute_heat_scores

__all__ = [
    "analyze",  # Main entry point
    "HeatmapReport",
    "compute_heat_scores",  # Core, for callers with their own history provider
    "build_tree",
    "FileChangeStats",
    "HeatScore",
    "FileNode",
]

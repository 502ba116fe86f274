"""Heat scoring core: per-file scores and the aggregated directory tree."""

from .dead_code import DeadCodeSignals, dead_code_signals, is_likely_dead_code
from .models import FileChangeStats, FileNode, HeatScore, NodeType
from .scorer import compute_heat_scores
from .tree import TreeBuilder, build_tree

__all__ = [
    "FileChangeStats",
    "HeatScore",
    "FileNode",
    "NodeType",
    "compute_heat_scores",
    "TreeBuilder",
    "build_tree",
    "DeadCodeSignals",
    "dead_code_signals",
    "is_likely_dead_code",
]

"""Data models for heat scoring and the aggregated file tree."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional


@dataclass
class FileChangeStats:
    """Change history of one file inside the analyzed window.

    ``total_changes`` equals the sum of ``changes_by_day`` and the sum of
    ``unique_authors``. Built by the history collector, read-only afterwards.
    """

    file_path: str
    total_changes: int = 0
    last_modified: Optional[datetime] = None
    first_seen: Optional[datetime] = None
    changes_by_day: Dict[int, int] = field(default_factory=dict)  # days-before-now -> changes
    unique_authors: Dict[str, int] = field(default_factory=dict)  # author -> commits


@dataclass(frozen=True)
class HeatScore:
    """Batch-relative heat of one file (or one folder, once aggregated)."""

    path: str
    score: float  # 0-100
    change_frequency: float = 0.0  # changes per week since last edit
    days_since_edit: int = 0
    total_file_changes: int = 0


class NodeType(str, Enum):
    FILE = "file"
    FOLDER = "folder"


@dataclass
class FileNode:
    """One path segment of the heat tree.

    File nodes own their HeatScore; folder nodes carry a synthesized one whose
    ``score`` is the change-weighted average of their children.
    """

    id: str
    name: str
    path: str
    type: NodeType
    extension: str = ""
    size: int = 0
    lines_of_code: int = 0
    file_count: int = 0
    last_modified: Optional[datetime] = None
    heat_score: Optional[HeatScore] = None
    functions: List[str] = field(default_factory=list)
    children: List["FileNode"] = field(default_factory=list)

    @property
    def is_file(self) -> bool:
        return self.type is NodeType.FILE

    @property
    def score(self) -> float:
        return self.heat_score.score if self.heat_score is not None else 0.0

    @property
    def total_file_changes(self) -> int:
        return self.heat_score.total_file_changes if self.heat_score is not None else 0

    def walk(self):
        """Yield this node and every descendant, depth first."""
        yield self
        for child in self.children:
            yield from child.walk()

    def files(self) -> List["FileNode"]:
        """All file-type descendants."""
        return [node for node in self.walk() if node.is_file]

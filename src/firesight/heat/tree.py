"""Fold per-file heat scores into a directory tree with folder aggregates.

Construction runs in three steps:

1. Insert every scored file, materializing intermediate folders once via a
   path -> node cache owned by the builder.
2. Aggregate folders post-order from their direct children. Folder heat is a
   change-weighted average: each child weighs ``max(total_changes, 1)``.
3. Sort children at every level: folders (by name) before files (hottest first).
"""

from __future__ import annotations

import hashlib
import posixpath
from typing import Iterable, Mapping

from ..exceptions import InvalidFilePathError, MissingFileStatsError, PathConflictError
from ..logging_config import get_logger
from .models import FileChangeStats, FileNode, HeatScore, NodeType

logger = get_logger(__name__)

ROOT_ID = "root"
ROOT_NAME = "root"


def node_id(path: str) -> str:
    """Stable node id for a tree path.

    Hex digests never equal ``ROOT_ID``, so a real top-level directory named
    "root" cannot be mistaken for the synthetic root.
    """
    return hashlib.sha256(path.encode("utf-8")).hexdigest()[:16]


def split_path(path: str) -> list[str]:
    """Split a slash-separated path, skipping empty segments."""
    return [part for part in path.split("/") if part]


def file_extension(filename: str) -> str:
    """Extension without the leading dot ("" when there is none)."""
    return posixpath.splitext(filename)[1].lstrip(".")


class TreeBuilder:
    """Builds one heat tree. Use a fresh builder per tree."""

    def __init__(self) -> None:
        # path -> node, for O(1) parent resolution during insertion
        self._node_cache: dict[str, FileNode] = {}

    def build(
        self,
        heat_scores: Iterable[HeatScore],
        file_stats: Mapping[str, FileChangeStats],
    ) -> FileNode:
        root = FileNode(id=ROOT_ID, name=ROOT_NAME, path="", type=NodeType.FOLDER)
        self._node_cache = {"": root}

        inserted = 0
        for score in heat_scores:
            stats = file_stats.get(score.path)
            if stats is None:
                raise MissingFileStatsError(score.path)
            self._add_file(root, score, stats)
            inserted += 1

        self._aggregate(root)
        logger.debug(
            "Built heat tree: %d files, %d nodes", inserted, len(self._node_cache) - 1
        )
        return root

    def _add_file(self, root: FileNode, score: HeatScore, stats: FileChangeStats) -> None:
        parts = split_path(score.path)
        if not parts:
            raise InvalidFilePathError(score.path)

        current = root
        current_path = ""
        last = len(parts) - 1

        for i, part in enumerate(parts):
            current_path = f"{current_path}/{part}" if current_path else part
            is_file = i == last

            node = self._node_cache.get(current_path)
            if node is not None:
                # Existing folders are shared prefixes; anything else is a clash.
                if is_file or node.is_file:
                    raise PathConflictError(score.path, node.type.value)
                current = node
                continue

            if is_file:
                node = FileNode(
                    id=node_id(current_path),
                    name=part,
                    path=current_path,
                    type=NodeType.FILE,
                    extension=file_extension(part),
                    last_modified=stats.last_modified,
                    heat_score=score,
                )
            else:
                node = FileNode(
                    id=node_id(current_path),
                    name=part,
                    path=current_path,
                    type=NodeType.FOLDER,
                )

            current.children.append(node)
            self._node_cache[current_path] = node
            current = node

    def _aggregate(self, node: FileNode) -> None:
        """Fill folder aggregates bottom-up, then order the children."""
        if node.is_file:
            return

        for child in node.children:
            self._aggregate(child)

        file_count = 0
        size = 0
        lines = 0
        total_changes = 0
        latest = None
        weighted_heat = 0.0
        total_weight = 0

        for child in node.children:
            file_count += 1 if child.is_file else child.file_count
            size += child.size
            lines += child.lines_of_code
            changes = child.total_file_changes
            total_changes += changes

            if child.last_modified is not None and (
                latest is None or child.last_modified > latest
            ):
                latest = child.last_modified

            weight = changes if changes > 0 else 1
            weighted_heat += child.score * weight
            total_weight += weight

        node.file_count = file_count
        node.size = size
        node.lines_of_code = lines
        node.last_modified = latest
        node.heat_score = HeatScore(
            path=node.path,
            score=weighted_heat / total_weight if total_weight > 0 else 0.0,
            total_file_changes=total_changes,
        )

        node.children.sort(key=_display_order)


def _display_order(node: FileNode) -> tuple:
    if node.is_file:
        return (1, "", -node.score)
    return (0, node.name, 0.0)


def build_tree(
    heat_scores: Iterable[HeatScore], file_stats: Mapping[str, FileChangeStats]
) -> FileNode:
    """Build the aggregated heat tree for one analysis batch.

    Raises:
        MissingFileStatsError: A score's path has no entry in ``file_stats``
        InvalidFilePathError: A path has no non-empty segment
        PathConflictError: Two paths resolve to the same node
    """
    return TreeBuilder().build(heat_scores, file_stats)

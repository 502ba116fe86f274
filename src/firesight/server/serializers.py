"""Convert heat scores, trees and reports to JSON-safe dicts."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Any, Optional

from ..heat.models import FileNode, HeatScore

if TYPE_CHECKING:
    from ..api import HeatmapReport


def _iso(moment: Optional[datetime]) -> Optional[str]:
    return moment.isoformat() if moment is not None else None


def heat_score_to_dict(score: HeatScore) -> dict[str, Any]:
    return {
        "path": score.path,
        "score": round(score.score, 4),
        "change_freq": round(score.change_frequency, 4),
        "days_since_edit": score.days_since_edit,
        "total_file_changes": score.total_file_changes,
    }


def file_node_to_dict(node: FileNode) -> dict[str, Any]:
    """Serialize a node and its subtree, keeping child order."""
    data: dict[str, Any] = {
        "id": node.id,
        "name": node.name,
        "path": node.path,
        "type": node.type.value,
        "size": node.size,
        "lines_of_code": node.lines_of_code,
        "last_modified": _iso(node.last_modified),
        "heat_score": heat_score_to_dict(node.heat_score) if node.heat_score else None,
    }
    if node.is_file:
        data["extension"] = node.extension
        data["functions"] = list(node.functions)
    else:
        data["file_count"] = node.file_count
    data["children"] = [file_node_to_dict(child) for child in node.children]
    return data


def format_duration(seconds: float) -> str:
    return f"{seconds:.3f}s"


def report_to_response(report: HeatmapReport) -> dict[str, Any]:
    """Payload of a successful ``POST /analyze``."""
    return {
        "repo_id": report.repo_id,
        "status": "complete",
        "branch": report.result.branch,
        "commit_count": report.result.commit_count,
        "time_range_days": report.result.time_range_days,
        "file_stats": [heat_score_to_dict(s) for s in report.heat_scores],
        "tree": file_node_to_dict(report.tree),
        "analyzed_files": len(report.heat_scores),
        "duration": format_duration(report.duration_seconds),
    }


def error_response(message: str) -> dict[str, Any]:
    return {"status": "error", "error": message}

"""Turn per-file change statistics into batch-normalized heat scores.

Raw score of a file::

    raw = sum(changes * exp(-decay_rate * day_offset)) * (1 + author_bonus)
    author_bonus = min(unique_authors * 0.1, 0.5)

Scores are then normalized so the hottest file in the batch is exactly 100.
They are relative to the batch and not comparable across runs.
"""

from __future__ import annotations

import math
from datetime import datetime, timezone
from typing import Mapping, Optional

import numpy as np

from ..config import DEFAULT_SCORING, ScoringConfig
from ..logging_config import get_logger
from .models import FileChangeStats, HeatScore

logger = get_logger(__name__)


def time_decay(day_offset: int, decay_rate: float = DEFAULT_SCORING.decay_rate) -> float:
    """Weight of a change made ``day_offset`` days ago."""
    return math.exp(-decay_rate * day_offset)


def author_bonus(
    num_unique_authors: int,
    step: float = DEFAULT_SCORING.author_bonus_step,
    cap: float = DEFAULT_SCORING.author_bonus_cap,
) -> float:
    """Multiplicative boost for files touched by several authors."""
    return min(num_unique_authors * step, cap)


def raw_heat_score(stats: FileChangeStats, config: ScoringConfig = DEFAULT_SCORING) -> float:
    """Decay-weighted, author-boosted change count of one file."""
    if not stats.changes_by_day:
        return 0.0

    offsets = np.fromiter(stats.changes_by_day.keys(), dtype=np.float64)
    counts = np.fromiter(stats.changes_by_day.values(), dtype=np.float64)
    weighted = float(np.sum(counts * np.exp(-config.decay_rate * offsets)))

    bonus = author_bonus(
        len(stats.unique_authors), config.author_bonus_step, config.author_bonus_cap
    )
    return weighted * (1.0 + bonus)


def days_since(last_modified: Optional[datetime], now: datetime) -> int:
    """Whole days between ``last_modified`` and ``now`` (truncated)."""
    if last_modified is None:
        return 0
    hours = (now - last_modified).total_seconds() / 3600
    return int(hours / 24)


def change_frequency(total_changes: int, days_since_edit: int) -> float:
    """Changes per week since the last edit; 0 for files edited today."""
    if days_since_edit == 0:
        return 0.0
    weeks = days_since_edit / 7.0
    return total_changes / weeks


def compute_heat_scores(
    stats: Optional[Mapping[str, FileChangeStats]],
    now: Optional[datetime] = None,
    config: Optional[ScoringConfig] = None,
) -> list[HeatScore]:
    """Score every file of one analysis batch.

    Args:
        stats: Mapping of file path -> change statistics
        now: Reference time for ``days_since_edit`` (default: current UTC time)
        config: Scoring parameters (default: ScoringConfig())

    Returns:
        One HeatScore per key of ``stats``; empty for empty input.
    """
    if not stats:
        return []

    config = config or DEFAULT_SCORING
    now = now or datetime.now(timezone.utc)

    raw_scores = {path: raw_heat_score(fs, config) for path, fs in stats.items()}
    max_raw = max(raw_scores.values())

    if max_raw <= 0:
        logger.info(
            "No weighted changes across %d files; assigning floor score %.1f",
            len(stats),
            config.min_score,
        )

    scores: list[HeatScore] = []
    for path, fs in stats.items():
        if max_raw > 0:
            normalized = (raw_scores[path] / max_raw) * 100
        else:
            normalized = config.min_score

        days = days_since(fs.last_modified, now)
        scores.append(
            HeatScore(
                path=path,
                score=normalized,
                change_frequency=change_frequency(fs.total_changes, days),
                days_since_edit=days,
                total_file_changes=fs.total_changes,
            )
        )

    logger.debug("Computed heat scores for %d files (max raw %.3f)", len(scores), max_raw)
    return scores

"""Majority-vote heuristic for files that look abandoned.

Independent of heat scoring: nothing in the scorer or tree builder calls it.
"""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from ..config import DEFAULT_SCORING, ScoringConfig
from .models import FileChangeStats


@dataclass(frozen=True)
class DeadCodeSignals:
    stale: bool  # untouched for the configured number of months
    few_changes: bool
    single_author: bool  # might be an abandoned experiment

    @property
    def count(self) -> int:
        return sum((self.stale, self.few_changes, self.single_author))


def months_before(moment: datetime, months: int) -> datetime:
    """Same wall-clock time ``months`` calendar months earlier.

    The day is clamped to the target month's length (Aug 31 -> Feb 28/29).
    """
    month_index = moment.year * 12 + (moment.month - 1) - months
    year, month = divmod(month_index, 12)
    month += 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


def dead_code_signals(
    stats: FileChangeStats,
    now: Optional[datetime] = None,
    config: Optional[ScoringConfig] = None,
) -> DeadCodeSignals:
    config = config or DEFAULT_SCORING
    now = now or datetime.now(timezone.utc)

    cutoff = months_before(now, config.dead_code_stale_months)
    stale = stats.last_modified is not None and stats.last_modified < cutoff

    return DeadCodeSignals(
        stale=stale,
        few_changes=stats.total_changes < config.dead_code_few_changes_below,
        single_author=len(stats.unique_authors) == 1,
    )


def is_likely_dead_code(
    stats: FileChangeStats,
    now: Optional[datetime] = None,
    config: Optional[ScoringConfig] = None,
) -> bool:
    """True when at least ``dead_code_min_signals`` (default 2 of 3) signals fire."""
    config = config or DEFAULT_SCORING
    return dead_code_signals(stats, now, config).count >= config.dead_code_min_signals

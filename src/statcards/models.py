"""Data models for statcards."""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass, field

# Language name -> number of repositories using it as primary language.
LanguageStats = dict[str, int]

LAYOUTS = ("default", "compact")
OPTIONAL_STATS = frozenset({"reviews", "prs_merged"})


class CardKind(str, enum.Enum):
    STATS = "stats"
    TOP_LANGS = "top-langs"
    STREAK = "streak"
    ADDITIONAL_STATS = "additional-stats"


def merged_percentage(merged: int, total: int) -> int:
    """Share of merged pull requests, as a whole percentage in [0, 100]."""
    if total <= 0:
        return 0
    # Half-up rounding, so 12.5 becomes 13 rather than 12.
    return max(0, min(100, math.floor(merged / total * 100 + 0.5)))


@dataclass(frozen=True)
class GeneralStats:
    """Profile-wide activity totals.

    ``total_commits`` is an estimate derived from repository, pull request
    and issue counts; the REST API has no cheap exact commit count.
    """

    total_commits: int = 0
    total_prs: int = 0
    total_issues: int = 0
    total_stars: int = 0
    total_forks: int = 0
    total_reviews: int = 0
    total_discussions: int = 0
    prs_merged: int = 0
    prs_merged_percentage: int = 0


@dataclass(frozen=True)
class StreakStats:
    """Estimated streak figures.

    These are proxies computed from activity counts, not real per-day
    contribution data.
    """

    current_streak: int = 0
    best_streak: int = 0
    total_contributions: int = 0


@dataclass(frozen=True)
class RenderOptions:
    show_icons: bool = False
    hide_border: bool = False
    # Accepted for compatibility; no layout currently uses it.
    hide_progress: bool = False
    layout: str = "default"
    show: frozenset[str] = field(default_factory=frozenset)

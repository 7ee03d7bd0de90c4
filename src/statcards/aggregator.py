"""Data aggregation: turn raw GitHub API results into metric bundles."""

from __future__ import annotations

import asyncio
import logging
import math
from collections import defaultdict
from typing import Any, Awaitable

from .errors import UpstreamError
from .github.client import GitHubClient
from .models import GeneralStats, LanguageStats, StreakStats, merged_percentage

logger = logging.getLogger(__name__)


async def _join(**operations: Awaitable[Any]) -> dict[str, Any]:
    """Run named awaitables concurrently and wait for all of them.

    If any operation fails, the first failure (in argument order) is raised;
    upstream failures are tagged with the operation name.
    """
    names = list(operations)
    results = await asyncio.gather(*operations.values(), return_exceptions=True)
    for name, result in zip(names, results):
        if isinstance(result, UpstreamError):
            logger.warning("%s failed: %s", name, result)
            raise result.tagged(name) from result
        if isinstance(result, BaseException):
            raise result
    return dict(zip(names, results))


def estimate_commits(repo_count: int, total_prs: int, total_issues: int) -> int:
    """Approximate commit count; the REST API has no cheap exact total."""
    return repo_count * 15 + total_prs * 3 + total_issues * 2


def estimate_streak(
    repo_count: int, total_prs: int, total_issues: int
) -> StreakStats:
    """Streak proxy from activity counts.

    Real per-day streaks need the contribution calendar, which the REST API
    does not expose. Every figure here is an estimate.
    """
    total = total_prs + total_issues + repo_count * 5
    activity = min(total / 100, 1)
    current = max(1, math.floor(activity * 30))
    best = max(current, math.floor(activity * 100))
    return StreakStats(
        current_streak=current, best_streak=best, total_contributions=total
    )


def count_languages(repos: list[dict[str, Any]]) -> LanguageStats:
    """Count repositories per primary language, skipping unset languages."""
    counts: dict[str, int] = defaultdict(int)
    for repo in repos:
        language = repo.get("language")
        if language:
            counts[language] += 1
    return dict(counts)


async def fetch_general_stats(client: GitHubClient, identity: str) -> GeneralStats:
    """Collect profile-wide totals. Fails as a whole if any call fails."""
    results = await _join(
        profile=client.get_user(identity),
        prs=client.search_count(f"author:{identity} type:pr"),
        issues=client.search_count(f"author:{identity} type:issue"),
        reviews=client.search_count(f"reviewed-by:{identity} type:pr"),
        discussions=client.search_count(f"author:{identity} type:discussion"),
        merged=client.search_count(f"author:{identity} type:pr is:merged"),
        repos=client.list_repos(identity),
    )
    repos = results["repos"]
    total_prs = results["prs"]
    total_issues = results["issues"]
    prs_merged = results["merged"]

    return GeneralStats(
        total_commits=estimate_commits(len(repos), total_prs, total_issues),
        total_prs=total_prs,
        total_issues=total_issues,
        total_stars=sum(r.get("stargazers_count", 0) for r in repos),
        total_forks=sum(r.get("forks_count", 0) for r in repos),
        total_reviews=results["reviews"],
        total_discussions=results["discussions"],
        prs_merged=prs_merged,
        prs_merged_percentage=merged_percentage(prs_merged, total_prs),
    )


async def fetch_language_stats(client: GitHubClient, identity: str) -> LanguageStats:
    """Count repositories per primary language."""
    results = await _join(repos=client.list_repos(identity))
    return count_languages(results["repos"])


async def fetch_streak_stats(client: GitHubClient, identity: str) -> StreakStats:
    """Estimate streak figures from the first page of repositories and counts."""
    results = await _join(
        repos=client.list_repos(identity, max_pages=1),
        prs=client.search_count(f"author:{identity} type:pr"),
        issues=client.search_count(f"author:{identity} type:issue"),
    )
    return estimate_streak(len(results["repos"]), results["prs"], results["issues"])

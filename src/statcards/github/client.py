"""GitHub REST API client."""

from __future__ import annotations

import asyncio
import logging
import os
from typing import Any

import httpx

from ..errors import UpstreamError
from .rate_limit import RateLimitMonitor

logger = logging.getLogger(__name__)

BASE_URL = "https://api.github.com"
PAGE_SIZE = 100
MAX_REPO_PAGES = 10  # caps enumeration at ~1000 repositories


class GitHubClient:
    """Async GitHub REST API client.

    The token is optional; without one the same calls are made against the
    unauthenticated rate limit.
    """

    def __init__(
        self,
        token: str | None = None,
        concurrency: int = 8,
        base_url: str | None = None,
        timeout: float = 10.0,
    ) -> None:
        token = token if token is not None else os.environ.get("GITHUB_TOKEN")
        headers = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
            "User-Agent": "statcards",
        }
        if token:
            headers["Authorization"] = f"Bearer {token}"
        self._client = httpx.AsyncClient(
            base_url=base_url or BASE_URL,
            headers=headers,
            timeout=timeout,
        )
        self._rate_limit = RateLimitMonitor()
        self._semaphore = asyncio.Semaphore(concurrency)

    async def close(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> GitHubClient:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.close()

    async def _get(
        self, url: str, params: dict[str, Any] | None = None
    ) -> httpx.Response:
        async with self._semaphore:
            self._rate_limit.check()
            logger.debug("GET %s %s", url, params or {})
            try:
                response = await self._client.get(url, params=params)
                self._rate_limit.update(response)
                response.raise_for_status()
            except httpx.HTTPStatusError as exc:
                status = exc.response.status_code
                try:
                    body = exc.response.json()
                except ValueError:
                    body = None
                message = body.get("message", "") if isinstance(body, dict) else ""
                raise UpstreamError(status, message or f"GET {url} failed") from exc
            except httpx.TimeoutException as exc:
                raise UpstreamError(504, f"GET {url} timed out") from exc
            except httpx.HTTPError as exc:
                raise UpstreamError(502, f"GET {url} failed: {exc}") from exc
            return response

    async def get_user(self, identity: str) -> dict[str, Any]:
        """Look up a user profile. Raises UpstreamError(404) for unknown users."""
        response = await self._get(f"/users/{identity}")
        return response.json()

    async def search_count(self, query: str) -> int:
        """Return the ``total_count`` of an issue/pull request search."""
        response = await self._get(
            "/search/issues", params={"q": query, "per_page": 1}
        )
        data = response.json()
        if not isinstance(data, dict):
            raise UpstreamError(502, f"unexpected search response for {query!r}")
        return data.get("total_count") or 0

    async def list_repos(
        self, identity: str, max_pages: int = MAX_REPO_PAGES
    ) -> list[dict[str, Any]]:
        """List a user's repositories, one page at a time.

        Pages are fetched in order; enumeration stops at the first short
        page or after ``max_pages`` pages.
        """
        results: list[dict[str, Any]] = []
        for page in range(1, max_pages + 1):
            response = await self._get(
                f"/users/{identity}/repos",
                params={"per_page": PAGE_SIZE, "page": page, "sort": "updated"},
            )
            data = response.json()
            if not isinstance(data, list):
                raise UpstreamError(
                    502, f"unexpected repository listing for {identity} (page {page})"
                )
            results.extend(data)
            if len(data) < PAGE_SIZE:
                break
        else:
            logger.info(
                "%s: stopped repository enumeration after %d pages",
                identity,
                max_pages,
            )
        return results

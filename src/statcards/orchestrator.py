"""Orchestrator: wires together client, cache, aggregator, and renderer."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Mapping

from .aggregator import fetch_general_stats, fetch_language_stats, fetch_streak_stats
from .cache import MemoryCache
from .errors import UpstreamError, ValidationError
from .github.client import GitHubClient
from .models import (
    LAYOUTS,
    CardKind,
    GeneralStats,
    LanguageStats,
    RenderOptions,
    StreakStats,
)
from .renderer import (
    render_additional_stats_card,
    render_error_card,
    render_stats_card,
    render_streak_card,
    render_top_languages_card,
)
from .themes import get_theme, override_theme

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 25.0
SVG_CONTENT_TYPE = "image/svg+xml"
RATE_LIMIT_MESSAGE = "Rate limit exceeded. Please try again later."
FAILURE_MESSAGE = "Failed to load stats"


@dataclass(frozen=True)
class CardRequest:
    kind: CardKind
    username: str
    theme: str = "default"
    options: RenderOptions = field(default_factory=RenderOptions)
    bg_color: str | None = None
    title_color: str | None = None


@dataclass(frozen=True)
class CardResponse:
    body: str
    status: int = 200
    headers: dict[str, str] = field(default_factory=dict)


def _flag(value: str | None) -> bool:
    return value == "true"


def parse_card_request(kind: str, params: Mapping[str, str]) -> CardRequest:
    """Build a CardRequest from string query parameters.

    Booleans are true only for the literal ``"true"``. Raises
    ValidationError for a missing username, unknown kind or unknown layout.
    """
    try:
        card_kind = CardKind(kind)
    except ValueError:
        raise ValidationError(f"Unknown card kind: {kind!r}") from None

    username = (params.get("username") or "").strip()
    if not username:
        raise ValidationError("Username is required")

    layout = params.get("layout") or "default"
    if layout not in LAYOUTS:
        raise ValidationError(f"Unknown layout: {layout!r}")

    show = frozenset(
        item.strip() for item in (params.get("show") or "").split(",") if item.strip()
    )
    options = RenderOptions(
        show_icons=_flag(params.get("show_icons")),
        hide_border=_flag(params.get("hide_border")),
        hide_progress=_flag(params.get("hide_progress")),
        layout=layout,
        show=show,
    )
    return CardRequest(
        kind=card_kind,
        username=username,
        theme=params.get("theme") or "default",
        options=options,
        bg_color=params.get("bg_color") or None,
        title_color=params.get("title_color") or None,
    )


class CardService:
    """Resolve metric bundles through the cache and render cards."""

    def __init__(
        self,
        client: GitHubClient,
        cache: MemoryCache | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self._client = client
        self._cache = cache if cache is not None else MemoryCache()
        self._timeout = timeout

    @property
    def cache(self) -> MemoryCache:
        return self._cache

    async def _cached(
        self,
        kind: str,
        identity: str,
        fetch: Callable[[GitHubClient, str], Awaitable[Any]],
    ) -> Any:
        if not identity:
            raise ValidationError("Username is required")

        async def compute() -> Any:
            try:
                return await asyncio.wait_for(
                    fetch(self._client, identity), timeout=self._timeout
                )
            except asyncio.TimeoutError:
                raise UpstreamError(
                    504, f"timed out after {self._timeout:g}s", operation=kind
                ) from None

        return await self._cache.get_or_compute(
            MemoryCache.make_key(kind, identity), compute
        )

    async def get_general_stats(self, identity: str) -> GeneralStats:
        return await self._cached("stats", identity, fetch_general_stats)

    async def get_language_stats(self, identity: str) -> LanguageStats:
        return await self._cached("languages", identity, fetch_language_stats)

    async def get_streak_stats(self, identity: str) -> StreakStats:
        return await self._cached("streak", identity, fetch_streak_stats)

    async def _render_svg(self, request: CardRequest) -> str:
        theme = override_theme(
            get_theme(request.theme),
            bg_color=request.bg_color,
            title_color=request.title_color,
        )
        if request.kind is CardKind.STATS:
            stats = await self.get_general_stats(request.username)
            return render_stats_card(stats, theme, request.options)
        if request.kind is CardKind.TOP_LANGS:
            languages = await self.get_language_stats(request.username)
            return render_top_languages_card(languages, theme, request.options)
        if request.kind is CardKind.STREAK:
            streak = await self.get_streak_stats(request.username)
            return render_streak_card(streak, theme, request.options)
        stats = await self.get_general_stats(request.username)
        return render_additional_stats_card(stats, theme, request.options)

    async def render(self, request: CardRequest) -> CardResponse:
        """Render a card; upstream failures yield a fallback card, still 200."""
        if not request.username:
            raise ValidationError("Username is required")
        try:
            svg = await self._render_svg(request)
        except UpstreamError as exc:
            logger.warning(
                "Error generating %s card for %s (%s): %s",
                request.kind.value,
                request.username,
                exc.operation or "unknown",
                exc,
            )
            message = RATE_LIMIT_MESSAGE if exc.is_rate_limited else FAILURE_MESSAGE
            return CardResponse(
                body=render_error_card(message),
                headers={"Content-Type": SVG_CONTENT_TYPE},
            )
        max_age = int(self._cache.ttl)
        return CardResponse(
            body=svg,
            headers={
                "Content-Type": SVG_CONTENT_TYPE,
                "Cache-Control": f"public, max-age={max_age}, s-maxage={max_age}",
            },
        )

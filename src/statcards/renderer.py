"""SVG card renderer.

Every function here is pure: equal input always produces byte-identical
markup, and nothing performs I/O.
"""

from __future__ import annotations

import math
import re
from typing import NamedTuple

from .icons import get_icon_path
from .models import GeneralStats, LanguageStats, RenderOptions, StreakStats
from .themes import Theme

CARD_WIDTH = 550
PADDING = 30
HEADER_HEIGHT = 50
FOOTER_PADDING = 30
ICON_SIZE = 20
ICON_VIEWBOX = 24
FIXED_CARD_HEIGHT = 210
TOP_LANGUAGES = 5
NO_LANGUAGES_LABEL = "No languages found"

ERROR_CARD_WIDTH = 540
ERROR_CARD_HEIGHT = 200

FALLBACK_COLOR = "ffffff"
_HEX6 = re.compile(r"[0-9A-Fa-f]{6}")

_FONT = "-apple-system, BlinkMacSystemFont, 'Segoe UI', 'Noto Sans', Helvetica, Arial, sans-serif"
_TITLE_STYLE = f".title {{ font-family: {_FONT}; font-size: 22px; font-weight: 700; letter-spacing: -0.5px; }}"
_ROW_STYLES = (
    _TITLE_STYLE,
    f".label {{ font-family: {_FONT}; font-size: 13px; font-weight: 500; opacity: 0.9; }}",
    f".value {{ font-family: {_FONT}; font-size: 16px; font-weight: 700; }}",
)
_LANG_STYLES = (
    _TITLE_STYLE,
    f".lang {{ font-family: {_FONT}; font-size: 13px; font-weight: 500; }}",
    f".percent {{ font-family: {_FONT}; font-size: 15px; font-weight: 700; }}",
)

_XML_ESCAPES = {
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    '"': "&quot;",
    "'": "&#039;",
}


class _Row(NamedTuple):
    label: str
    value: str
    icon: str


class _Palette(NamedTuple):
    bg: str
    border: str
    title: str
    text: str
    icon: str


def escape_xml(text: str) -> str:
    """Escape the five XML metacharacters."""
    return "".join(_XML_ESCAPES.get(ch, ch) for ch in str(text))


def normalize_hex_color(color: str | None) -> str:
    """Return ``color`` as six hex digits without ``#``.

    Three-digit colors are expanded; anything else that is not six hex
    digits becomes white.
    """
    color = color or ""
    if color.startswith("#"):
        color = color[1:]
    if len(color) == 3:
        color = "".join(ch * 2 for ch in color)
    if not _HEX6.fullmatch(color):
        return FALLBACK_COLOR
    return color


def format_count(n: int) -> str:
    return f"{n:,}"


def _round_half_up(x: float) -> int:
    return math.floor(x + 0.5)


def _fmt(x: float) -> str:
    """Format a coordinate without a trailing ``.0``."""
    if float(x).is_integer():
        return str(int(x))
    return f"{x:.2f}".rstrip("0").rstrip(".")


def _palette(theme: Theme) -> _Palette:
    return _Palette(
        bg=normalize_hex_color(theme.bg_color),
        border=normalize_hex_color(theme.border_color),
        title=normalize_hex_color(theme.title_color),
        text=normalize_hex_color(theme.text_color),
        icon=normalize_hex_color(theme.icon_color),
    )


def _card_open(
    title: str,
    height: int,
    palette: _Palette,
    hide_border: bool,
    styles: tuple[str, ...],
) -> list[str]:
    border_style = (
        "" if hide_border else f' stroke="#{palette.border}" stroke-width="1"'
    )
    parts = [
        f'<svg width="{CARD_WIDTH}" height="{height}" '
        f'viewBox="0 0 {CARD_WIDTH} {height}" xmlns="http://www.w3.org/2000/svg">',
        "  <defs>",
        "    <style>",
        *(f"      {style}" for style in styles),
        "    </style>",
        "  </defs>",
        f'  <rect width="{CARD_WIDTH}" height="{height}" fill="#{palette.bg}"'
        f'{border_style} rx="10" opacity="1"/>',
    ]
    if not hide_border:
        parts.append(
            f'  <rect x="0.5" y="0.5" width="{CARD_WIDTH - 1}" height="{height - 1}" '
            f'fill="none" stroke="#{palette.border}" stroke-width="1" rx="10" '
            f'opacity="0.3"/>'
        )
    parts += [
        f'  <rect width="{CARD_WIDTH}" height="{HEADER_HEIGHT}" fill="#{palette.bg}" rx="10"/>',
        f'  <text x="{PADDING}" y="32" class="title" fill="#{palette.title}">'
        f"{escape_xml(title)}</text>",
        _separator(HEADER_HEIGHT + 5, palette, width=1, opacity=0.2),
    ]
    return parts


def _separator(y: float, palette: _Palette, width: float, opacity: float) -> str:
    return (
        f'  <line x1="{PADDING}" y1="{_fmt(y)}" x2="{CARD_WIDTH - PADDING}" '
        f'y2="{_fmt(y)}" stroke="#{palette.border}" stroke-width="{width}" '
        f'opacity="{opacity}"/>'
    )


def _icon(name: str, x: float, y: float, palette: _Palette) -> str:
    return (
        f'  <g transform="translate({_fmt(x)}, {_fmt(y)}) '
        f'scale({ICON_SIZE / ICON_VIEWBOX:.4g})">'
        f'<path d="{escape_xml(get_icon_path(name))}" fill="#{palette.icon}" '
        f'opacity="0.9"/></g>'
    )


def _render_rows(
    rows: list[_Row],
    palette: _Palette,
    show_icons: bool,
    start_y: int,
    row_height: int,
    separator_offset: int,
) -> list[str]:
    parts: list[str] = []
    label_x = PADDING + ICON_SIZE + 15 if show_icons else PADDING
    for index, row in enumerate(rows):
        y = start_y + index * row_height
        if show_icons:
            parts.append(_icon(row.icon, PADDING, y - 10, palette))
        parts.append(
            f'  <text x="{label_x}" y="{y}" class="label" fill="#{palette.text}">'
            f"{escape_xml(row.label)}</text>"
        )
        parts.append(
            f'  <text x="{CARD_WIDTH - PADDING}" y="{y}" class="value" '
            f'fill="#{palette.text}" text-anchor="end">{escape_xml(row.value)}</text>'
        )
        if index < len(rows) - 1:
            parts.append(
                _separator(y + separator_offset, palette, width=0.5, opacity=0.15)
            )
    return parts


def _close(parts: list[str]) -> str:
    parts.append("</svg>")
    return "\n".join(parts) + "\n"


def render_stats_card(
    stats: GeneralStats, theme: Theme, options: RenderOptions | None = None
) -> str:
    """Render the general stats card.

    Five base rows, plus ``reviews`` and ``prs_merged`` when listed in
    ``options.show``.
    """
    options = options or RenderOptions()
    rows = [
        _Row("Total Commits", format_count(stats.total_commits), "commits"),
        _Row("Total PRs", format_count(stats.total_prs), "prs"),
        _Row("Total Issues", format_count(stats.total_issues), "issues"),
        _Row("Stars Earned", format_count(stats.total_stars), "stars"),
        _Row("Forks", format_count(stats.total_forks), "forks"),
    ]
    if "reviews" in options.show:
        rows.append(_Row("Reviews", format_count(stats.total_reviews), "reviews"))
    if "prs_merged" in options.show:
        rows.append(
            _Row(
                "PRs Merged",
                f"{format_count(stats.prs_merged)} ({stats.prs_merged_percentage}%)",
                "merged",
            )
        )

    row_height = 45
    height = HEADER_HEIGHT + len(rows) * row_height + FOOTER_PADDING
    palette = _palette(theme)
    parts = _card_open("GitHub Stats", height, palette, options.hide_border, _ROW_STYLES)
    parts += _render_rows(
        rows,
        palette,
        options.show_icons,
        start_y=70,
        row_height=row_height,
        separator_offset=20,
    )
    return _close(parts)


def top_languages(
    languages: LanguageStats, limit: int = TOP_LANGUAGES
) -> list[tuple[str, int]]:
    """Languages by descending count, ties kept in input order."""
    ranked = sorted(languages.items(), key=lambda item: item[1], reverse=True)
    return ranked[:limit]


def render_top_languages_card(
    languages: LanguageStats, theme: Theme, options: RenderOptions | None = None
) -> str:
    """Render the top languages card with one proportional bar per language."""
    options = options or RenderOptions()
    ranked = top_languages(languages) or [(NO_LANGUAGES_LABEL, 0)]
    total = sum(count for _, count in ranked) or 1

    row_height = 38 if options.layout == "compact" else 48
    height = HEADER_HEIGHT + len(ranked) * row_height + FOOTER_PADDING
    bar_span = CARD_WIDTH - PADDING * 2 - 100
    palette = _palette(theme)

    parts = _card_open(
        "Top Languages", height, palette, options.hide_border, _LANG_STYLES
    )
    for index, (language, count) in enumerate(ranked):
        y = 70 + index * row_height
        percentage = _round_half_up(count / total * 100)
        bar_width = count / total * bar_span
        parts.append(
            f'  <text x="{PADDING}" y="{y}" class="lang" fill="#{palette.text}">'
            f"{escape_xml(language)}</text>"
        )
        parts.append(
            f'  <text x="{CARD_WIDTH - PADDING}" y="{y}" class="percent" '
            f'fill="#{palette.text}" text-anchor="end">{percentage}%</text>'
        )
        parts.append(
            f'  <rect x="{PADDING}" y="{y + 22}" width="{_fmt(bar_width)}" height="10" '
            f'fill="#{palette.icon}" rx="5" opacity="0.85"/>'
        )
        if index < len(ranked) - 1:
            parts.append(_separator(y + 30, palette, width=0.5, opacity=0.15))
    return _close(parts)


def _fixed_card(
    title: str, rows: list[_Row], theme: Theme, options: RenderOptions
) -> str:
    palette = _palette(theme)
    parts = _card_open(
        title, FIXED_CARD_HEIGHT, palette, options.hide_border, _ROW_STYLES
    )
    parts += _render_rows(
        rows,
        palette,
        options.show_icons,
        start_y=75,
        row_height=50,
        separator_offset=25,
    )
    return _close(parts)


def render_streak_card(
    streak: StreakStats, theme: Theme, options: RenderOptions | None = None
) -> str:
    rows = [
        _Row("Current Streak", f"{streak.current_streak} days", "streak"),
        _Row("Best Streak", f"{streak.best_streak} days", "streak"),
        _Row(
            "Total Contributions",
            format_count(streak.total_contributions),
            "contributions",
        ),
    ]
    return _fixed_card("GitHub Streak", rows, theme, options or RenderOptions())


def render_additional_stats_card(
    stats: GeneralStats, theme: Theme, options: RenderOptions | None = None
) -> str:
    rows = [
        _Row("Reviews", format_count(stats.total_reviews), "reviews"),
        _Row("Discussions", format_count(stats.total_discussions), "discussions"),
        _Row("PR Merge Rate", f"{stats.prs_merged_percentage}%", "merged"),
    ]
    return _fixed_card("Additional Stats", rows, theme, options or RenderOptions())


def render_error_card(message: str) -> str:
    """Fixed-size, theme-independent card shown when stats cannot be loaded."""
    w, h = ERROR_CARD_WIDTH, ERROR_CARD_HEIGHT
    return (
        f'<svg width="{w}" height="{h}" viewBox="0 0 {w} {h}" '
        f'xmlns="http://www.w3.org/2000/svg">\n'
        f'  <rect width="{w}" height="{h}" fill="#f0f0f0" stroke="#d0d0d0" '
        f'stroke-width="1.5" rx="8"/>\n'
        f'  <text x="{w // 2}" y="{h // 2}" font-family="Arial, sans-serif" '
        f'font-size="16" fill="#666" text-anchor="middle">{escape_xml(message)}</text>\n'
        "</svg>\n"
    )

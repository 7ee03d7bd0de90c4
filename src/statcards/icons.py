"""Icon path data (24x24 viewBox) drawn beside card labels."""

from __future__ import annotations

ICON_PATHS: dict[str, str] = {
    "commits": (
        "M12 7a5 5 0 0 1 4.9 4H22v2h-5.1a5 5 0 0 1-9.8 0H2v-2h5.1A5 5 0 0 1 12 7z"
        "m0 2a3 3 0 1 0 0 6 3 3 0 0 0 0-6z"
    ),
    "prs": (
        "M6 3a3 3 0 0 1 1 5.83v6.34A3 3 0 1 1 5 15.17V8.83A3 3 0 0 1 6 3z"
        "m12 12.17V9a2 2 0 0 0-2-2h-2v3L10 6l4-4v3h2a4 4 0 0 1 4 4v6.17"
        "a3 3 0 1 1-2 0z"
    ),
    "issues": (
        "M12 2a10 10 0 1 1 0 20 10 10 0 0 1 0-20zm0 2a8 8 0 1 0 0 16 8 8 0 0 0 0-16z"
        "m0 5a3 3 0 1 1 0 6 3 3 0 0 1 0-6z"
    ),
    "stars": (
        "M12 2l3.09 6.26L22 9.27l-5 4.87 1.18 6.88L12 17.77l-6.18 3.25"
        "L7 14.14 2 9.27l6.91-1.01L12 2z"
    ),
    "forks": (
        "M6 2a3 3 0 0 1 1 5.83V9a1 1 0 0 0 1 1h8a1 1 0 0 0 1-1V7.83"
        "a3 3 0 1 1 2 0V9a3 3 0 0 1-3 3h-3v4.17a3 3 0 1 1-2 0V12H8"
        "a3 3 0 0 1-3-3V7.83A3 3 0 0 1 6 2z"
    ),
    "reviews": (
        "M12 5c5 0 9 4.5 10 7-1 2.5-5 7-10 7S3 14.5 2 12c1-2.5 5-7 10-7z"
        "m0 3a4 4 0 1 0 0 8 4 4 0 0 0 0-8z"
    ),
    "merged": (
        "M7 3a3 3 0 0 1 1 5.83v.34A7 7 0 0 0 14 15h1.17a3 3 0 1 1 0 2H14"
        "a9 9 0 0 1-6-2.3v1.47A3 3 0 1 1 6 16.17V8.83A3 3 0 0 1 7 3z"
    ),
    "streak": (
        "M13.5 1s1 3.5-1.5 7c-1.5 2-4 3.5-4 7a6 6 0 0 0 12 0c0-4-3-6-3-9"
        "0 0-1 2-2.5 2 0 0 1.5-3-1-7z"
    ),
    "contributions": (
        "M3 3h4v4H3V3zm7 0h4v4h-4V3zm7 0h4v4h-4V3zM3 10h4v4H3v-4zm7 0h4v4h-4v-4z"
        "m7 0h4v4h-4v-4zM3 17h4v4H3v-4zm7 0h4v4h-4v-4zm7 0h4v4h-4v-4z"
    ),
    "discussions": (
        "M3 3h14a2 2 0 0 1 2 2v8a2 2 0 0 1-2 2H9l-4 4v-4H3a2 2 0 0 1-2-2V5"
        "a2 2 0 0 1 2-2zm18 5a2 2 0 0 1 2 2v11l-3-3h-7a2 2 0 0 1-2-2v-1h6"
        "a4 4 0 0 0 4-4V8z"
    ),
}

# Filled circle, used for names missing from the table.
FALLBACK_ICON = "M12 4a8 8 0 1 1 0 16 8 8 0 0 1 0-16z"


def get_icon_path(name: str) -> str:
    return ICON_PATHS.get(name, FALLBACK_ICON)

"""Theme definitions for rendered cards."""

from __future__ import annotations

from dataclasses import dataclass, replace


@dataclass(frozen=True)
class Theme:
    """Card colors, as hex strings without a leading ``#``."""

    name: str
    bg_color: str
    border_color: str
    title_color: str
    text_color: str
    icon_color: str


# Theme registry
THEMES: dict[str, Theme] = {
    "default": Theme(
        name="Default",
        bg_color="ffffff",
        border_color="e4e2e2",
        title_color="2f80ed",
        text_color="434d58",
        icon_color="4c71f2",
    ),
    "dark": Theme(
        name="Dark",
        bg_color="151515",
        border_color="333333",
        title_color="ffffff",
        text_color="9f9f9f",
        icon_color="79ff97",
    ),
    "github_dark": Theme(
        name="GitHub Dark",
        bg_color="0d1117",
        border_color="30363d",
        title_color="58a6ff",
        text_color="c9d1d9",
        icon_color="1f6feb",
    ),
    "radical": Theme(
        name="Radical",
        bg_color="141321",
        border_color="fe428e",
        title_color="fe428e",
        text_color="a9fef7",
        icon_color="f8d847",
    ),
    "tokyonight": Theme(
        name="Tokyo Night",
        bg_color="1a1b27",
        border_color="414868",
        title_color="70a5fd",
        text_color="38bdae",
        icon_color="bf91f3",
    ),
    "dracula": Theme(
        name="Dracula",
        bg_color="282a36",
        border_color="44475a",
        title_color="ff6e96",
        text_color="f8f8f2",
        icon_color="79dafa",
    ),
    "gruvbox": Theme(
        name="Gruvbox",
        bg_color="282828",
        border_color="504945",
        title_color="fabd2f",
        text_color="8ec07c",
        icon_color="fe8019",
    ),
    "nord": Theme(
        name="Nord",
        bg_color="2e3440",
        border_color="4c566a",
        title_color="81a1c1",
        text_color="d8dee9",
        icon_color="88c0d0",
    ),
}

DEFAULT_THEME = "default"


def get_theme(name: str | None) -> Theme:
    """Look up a theme by key, falling back to the default theme."""
    return THEMES.get(name or DEFAULT_THEME, THEMES[DEFAULT_THEME])


def override_theme(
    theme: Theme, bg_color: str | None = None, title_color: str | None = None
) -> Theme:
    """Return a copy of ``theme`` with the given colors replaced."""
    changes = {}
    if bg_color:
        changes["bg_color"] = bg_color.replace("#", "")
    if title_color:
        changes["title_color"] = title_color.replace("#", "")
    return replace(theme, **changes) if changes else theme

"""CLI entrypoint for statcards."""

from __future__ import annotations

import asyncio
import logging
import sys

import click
from rich.console import Console
from rich.logging import RichHandler

from . import __version__
from .cache import DEFAULT_TTL, MemoryCache
from .errors import ValidationError
from .models import LAYOUTS, CardKind
from .themes import THEMES


async def _render(
    kind: str,
    params: dict[str, str],
    token: str | None,
    api_url: str | None,
    timeout: float,
    cache_ttl: float,
):
    from .github.client import GitHubClient
    from .orchestrator import CardService, parse_card_request

    request = parse_card_request(kind, params)
    async with GitHubClient(token=token, base_url=api_url) as client:
        service = CardService(client, cache=MemoryCache(ttl=cache_ttl), timeout=timeout)
        return await service.render(request)


@click.command()
@click.argument("kind", type=click.Choice([k.value for k in CardKind]))
@click.argument("username")
@click.option(
    "--theme",
    type=click.Choice(sorted(THEMES)),
    default="default",
    show_default=True,
    help="Color theme",
)
@click.option("--show-icons", is_flag=True, default=False, help="Draw an icon beside each label")
@click.option("--hide-border", is_flag=True, default=False, help="Omit the card border")
@click.option("--hide-progress", is_flag=True, default=False, help="Accepted for compatibility")
@click.option(
    "--layout",
    type=click.Choice(LAYOUTS),
    default="default",
    show_default=True,
    help="Row spacing for the top-langs card",
)
@click.option(
    "--show",
    default="",
    help="Comma-separated optional stats rows (reviews,prs_merged)",
)
@click.option("--bg-color", default=None, help="Background color override (hex)")
@click.option("--title-color", default=None, help="Title color override (hex)")
@click.option(
    "--token",
    envvar="GITHUB_TOKEN",
    default=None,
    show_envvar=True,
    help="GitHub personal access token (optional, raises the rate limit)",
)
@click.option(
    "--api-url",
    envvar="STATCARDS_API_URL",
    default=None,
    show_envvar=True,
    help="GitHub Enterprise API base URL",
)
@click.option(
    "--timeout",
    envvar="STATCARDS_TIMEOUT",
    default=25.0,
    type=float,
    show_default=True,
    show_envvar=True,
    help="Overall deadline in seconds for fetching stats",
)
@click.option(
    "--cache-ttl",
    envvar="STATCARDS_CACHE_TTL",
    default=float(DEFAULT_TTL),
    type=float,
    show_default=True,
    show_envvar=True,
    help="Seconds to keep fetched stats cached",
)
@click.option(
    "--output",
    "output_file",
    default=None,
    type=click.Path(),
    help="Save the SVG to a file instead of stdout",
)
@click.option("-v", "--verbose", is_flag=True, default=False, help="Enable debug logging")
@click.version_option(version=__version__)
def main(
    kind: str,
    username: str,
    theme: str,
    show_icons: bool,
    hide_border: bool,
    hide_progress: bool,
    layout: str,
    show: str,
    bg_color: str | None,
    title_color: str | None,
    token: str | None,
    api_url: str | None,
    timeout: float,
    cache_ttl: float,
    output_file: str | None,
    verbose: bool,
) -> None:
    """Render a GitHub stats card as SVG.

    \b
    KIND is one of: stats, top-langs, streak, additional-stats.

    \b
    Examples:
      statcards stats octocat --show-icons --show reviews,prs_merged
      statcards top-langs octocat --layout compact --theme dracula
      statcards streak octocat --output streak.svg
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )

    params = {
        "username": username,
        "theme": theme,
        "show_icons": "true" if show_icons else "false",
        "hide_border": "true" if hide_border else "false",
        "hide_progress": "true" if hide_progress else "false",
        "layout": layout,
        "show": show,
        "bg_color": bg_color or "",
        "title_color": title_color or "",
    }
    try:
        response = asyncio.run(
            _render(kind, params, token, api_url, timeout, cache_ttl)
        )
    except ValidationError as exc:
        raise click.BadParameter(str(exc)) from exc

    if output_file:
        with open(output_file, "w", encoding="utf-8") as f:
            f.write(response.body)
        Console(stderr=True).print(f"Saved to {output_file}")
    else:
        sys.stdout.write(response.body)


if __name__ == "__main__":  # pragma: no cover
    main()

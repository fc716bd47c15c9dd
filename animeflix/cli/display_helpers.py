"""Shared display helpers for CLI."""

import re
from dataclasses import asdict
from typing import Any

import click

from ..config import MAX_VISIBLE_PAGES, SYNOPSIS_PREVIEW_LENGTH
from ..genres import genre_names
from ..models import MediaItem, Pagination, Trailer, ViewState
from ..reconciler import carousel, featured, grid, shows_pagination

EMBED_ID_RE = re.compile(r"/embed/([^?]+)")
ELLIPSIS = "..."


def page_numbers(last_page: int, current: int, max_visible: int = MAX_VISIBLE_PAGES) -> list[int | str]:
    """Page numbers to show, with "..." where a run of pages is skipped.

    The first and last page are always shown, plus the neighbours of the
    current page.
    """
    if last_page <= max_visible:
        return list(range(1, last_page + 1))

    pages: list[int | str] = [1]
    if current > 3:
        pages.append(ELLIPSIS)

    start = max(2, current - 1)
    end = min(last_page - 1, current + 1)
    pages.extend(range(start, end + 1))

    if current < last_page - 2:
        pages.append(ELLIPSIS)
    pages.append(last_page)
    return pages


def youtube_watch_url(trailer: Trailer) -> str | None:
    """Best watch link for a trailer: its url, else one built from the video id."""
    if trailer.url:
        return trailer.url
    if trailer.youtube_id:
        return f"https://www.youtube.com/watch?v={trailer.youtube_id}"
    if trailer.embed_url:
        match = EMBED_ID_RE.search(trailer.embed_url)
        if match:
            return f"https://www.youtube.com/watch?v={match.group(1)}"
    return None


def synopsis_preview(synopsis: str, length: int = SYNOPSIS_PREVIEW_LENGTH) -> str:
    if len(synopsis) <= length:
        return synopsis
    return synopsis[:length].rstrip() + "..."


def format_item(item: MediaItem, rank: int | None = None) -> str:
    """One-line summary of a title."""
    rank_str = f"#{rank:<2} " if rank is not None else ""
    type_str = f"[{item.type}] " if item.type else ""
    year_str = f" ({item.year})" if item.year else ""
    score_str = f"  * {item.score}" if item.score is not None else ""
    return f"{rank_str}{type_str}{item.title}{year_str}{score_str}"


def format_pagination(pagination: Pagination, current: int) -> str:
    prev_str = "<- Previous" if current > 1 else "  "
    next_str = "Next ->" if pagination.has_next else ""
    numbers = " ".join(
        f"[{page}]" if page == current else str(page) for page in page_numbers(pagination.last_page, current)
    )
    return f"{prev_str}  {numbers}  {next_str}".rstrip()


def describe_intent(state: ViewState) -> str:
    intent = state.intent
    parts = [f"search '{intent.text.strip()}'" if intent.text.strip() else "top anime"]
    if intent.genres:
        parts.append(f"genres: {', '.join(genre_names(intent.genres))}")
    parts.append(f"page {intent.page}")
    return " | ".join(parts)


def display_view(state: ViewState) -> None:
    """Print the current view: hero and carousel when browsing, then the grid."""
    click.echo(f"\n{describe_intent(state)}")

    if state.error:
        click.echo(f"\nError: {state.error}")
        click.echo("Type 'r' to retry.")
        return

    if state.result is None:
        click.echo("\nLoading..." if state.loading else "\nNothing loaded yet.")
        return

    text = state.intent.text
    items = state.result.items
    hero = featured(text, items)
    if hero is not None:
        click.echo(f"\n  {format_item(hero, rank=1)}")
        if hero.synopsis:
            click.echo(f"      {synopsis_preview(hero.synopsis)}")
        watch_url = youtube_watch_url(hero.trailer)
        if watch_url:
            click.echo(f"      Watch: {watch_url}")

        top = carousel(text, items)
        if top:
            click.echo("\n  Top 10 Anime")
            for rank, item in enumerate(top, 2):
                click.echo(f"    {format_item(item, rank=rank)}")

    main_grid = grid(text, items)
    if main_grid:
        click.echo()
        for item in main_grid:
            click.echo(f"  {format_item(item)}")
    elif hero is None:
        click.echo("\nNo anime found. Try searching for something else.")

    if shows_pagination(state.result):
        click.echo(f"\n  {format_pagination(state.result.pagination, state.intent.page)}")
    click.echo()


def view_as_json(state: ViewState) -> dict[str, Any]:
    """JSON-friendly form of the view and its derived sections."""
    intent = state.intent
    result = state.result
    items = result.items if result else ()
    hero = featured(intent.text, items)
    return {
        "query": intent.text,
        "mode": intent.mode.value,
        "genres": sorted(intent.genres),
        "page": intent.page,
        "pagination": asdict(result.pagination) if result else None,
        "featured": asdict(hero) if hero else None,
        "carousel": [asdict(item) for item in carousel(intent.text, items)],
        "grid": [asdict(item) for item in grid(intent.text, items)],
        "error": state.error,
    }

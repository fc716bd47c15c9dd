"""CLI for Animeflix."""

import asyncio
import json as json_module
from collections.abc import Callable, Iterable

import click

from ..config import DEFAULT_DEBOUNCE, DEFAULT_TIMEOUT, JIKAN_BASE_URL, Settings
from ..genres import ALL_GENRES, TOP_GENRES, find_genre
from ..log import configure_logging
from ..models import ViewState
from ..session import BrowseSession
from ..transport import JikanTransport, Transport
from .display_helpers import display_view, view_as_json

TransportFactory = Callable[[Settings], Transport]


@click.group()
@click.option("--api-url", envvar="ANIMEFLIX_API_URL", default=JIKAN_BASE_URL, help="Catalog API base URL")
@click.option("--timeout", envvar="ANIMEFLIX_TIMEOUT", type=float, default=DEFAULT_TIMEOUT, help="Request timeout (s)")
@click.option(
    "--debounce",
    envvar="ANIMEFLIX_DEBOUNCE",
    type=float,
    default=DEFAULT_DEBOUNCE,
    help="Delay before a dispatched query hits the network (s)",
)
@click.option("--verbose", "-v", is_flag=True, help="Log requests and cancellations")
@click.pass_context
def cli(ctx: click.Context, api_url: str, timeout: float, debounce: float, verbose: bool) -> None:
    """Animeflix - browse and search the anime catalog."""
    settings = Settings(
        api_url=api_url,
        timeout=timeout,
        debounce=debounce,
        log_level="DEBUG" if verbose else "WARNING",
    )
    configure_logging(settings.log_level)

    ctx.ensure_object(dict)
    ctx.obj["settings"] = settings
    ctx.obj.setdefault("transport_factory", JikanTransport.from_settings)


def resolve_genres(names: Iterable[str]) -> frozenset[int]:
    """Map genre names from the command line onto catalog ids."""
    ids: set[int] = set()
    for name in names:
        genre = find_genre(name)
        if genre is None:
            raise click.BadParameter(f"Unknown genre '{name}'. Run 'animeflix genres' to list them.", param_hint="--genre")
        ids.add(genre.id)
    return frozenset(ids)


async def load_view(transport: Transport, text: str, genres: frozenset[int], page: int) -> ViewState:
    """Apply a query to a fresh session and wait for its outcome."""
    async with BrowseSession(transport) as session:
        session.change_filter(genres)
        session.run_query(text)
        if page > 1:
            session.set_page(page)
        if session.store.generation == 0:
            session.start()
        await session.wait_idle()
        return session.state


def _show(ctx: click.Context, text: str, genre_names: tuple[str, ...], page: int, format: str) -> None:
    genres = resolve_genres(genre_names)
    settings: Settings = ctx.obj["settings"]
    transport_factory: TransportFactory = ctx.obj["transport_factory"]

    state = asyncio.run(load_view(transport_factory(settings), text, genres, page))
    if state.error:
        raise click.ClickException(state.error)

    if format == "json":
        click.echo(json_module.dumps(view_as_json(state), indent=2, default=str))
    else:
        display_view(state)


_genre_option = click.option("--genre", "-g", "genre_names", multiple=True, help="Filter by genre (repeatable)")
_page_option = click.option("--page", "-p", type=click.IntRange(min=1), default=1, help="Page number")
_format_option = click.option(
    "--format", "-f", type=click.Choice(["text", "json"]), default="text", help="Output format"
)


@cli.command()
@_genre_option
@_page_option
@_format_option
@click.pass_context
def top(ctx: click.Context, genre_names: tuple[str, ...], page: int, format: str) -> None:
    """Show the top-rated anime.

    Examples:

      animeflix top                      # Featured title, top 10 and the rest
      animeflix top -g action -p 2       # Second page of top action titles
      animeflix top -g comedy -g romance -f json
    """
    _show(ctx, "", genre_names, page, format)


@cli.command()
@click.argument("query")
@_genre_option
@_page_option
@_format_option
@click.pass_context
def search(ctx: click.Context, query: str, genre_names: tuple[str, ...], page: int, format: str) -> None:
    """Search the catalog by title."""
    _show(ctx, query, genre_names, page, format)


@cli.command()
@click.option("--top", "top_only", is_flag=True, help="Only the header shortcuts")
def genres(top_only: bool) -> None:
    """List the genres that can be used as filters."""
    for genre in TOP_GENRES if top_only else ALL_GENRES:
        click.echo(f"  {genre.id:>3}  {genre.name}")


from . import explore as _explore  # noqa: F401,E402


def main() -> None:
    """Entry point."""
    cli()


if __name__ == "__main__":
    main()

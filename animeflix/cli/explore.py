"""Interactive browse session."""

import asyncio

import click

from ..config import Settings
from ..errors import ValidationError
from ..genres import find_genre
from ..session import BrowseSession
from .core import TransportFactory, cli
from .display_helpers import display_view

HELP_TEXT = """
Commands:
  /TEXT        search for TEXT (a lone / goes back to the top listing)
  g GENRE      toggle a genre filter
  top GENRE    show only GENRE (again to clear it)
  clear        clear search and genre filters
  n, p         next / previous page
  page N       jump to page N
  r            retry the current query
  q            quit
"""


def handle_command(session: BrowseSession, line: str) -> bool:
    """Apply one command line to the session.

    Returns:
        False when the user asked to quit
    """
    line = line.strip()
    if not line:
        return True
    if line in ("q", "quit", "exit"):
        return False
    if line in ("?", "help"):
        click.echo(HELP_TEXT)
        return True

    if line.startswith("/"):
        session.run_query(line[1:])
        return True

    command, _, arg = line.partition(" ")
    arg = arg.strip()

    if command in ("g", "top"):
        genre = find_genre(arg)
        if genre is None:
            click.echo(f"Unknown genre '{arg}'")
        elif command == "g":
            session.toggle_genre(genre.id)
        else:
            session.select_genre(genre.id)
    elif command == "clear":
        session.clear_genres()
        session.clear_search()
    elif command == "n":
        if not session.next_page():
            click.echo("Already on the last page")
    elif command == "p":
        if not session.previous_page():
            click.echo("Already on the first page")
    elif command == "page":
        try:
            session.set_page(int(arg))
        except ValueError:
            click.echo(f"Not a page number: '{arg}'")
        except ValidationError as e:
            click.echo(str(e))
    elif command == "r":
        session.retry()
    else:
        click.echo(f"Unknown command '{line}'. Type ? for help.")
    return True


async def run_explore(session: BrowseSession) -> None:
    session.start()
    await session.wait_idle()
    display_view(session.state)

    while True:
        # Nothing is in flight while the prompt blocks
        try:
            line = click.prompt("animeflix", default="", show_default=False, prompt_suffix="> ")
        except click.Abort:
            break
        if not handle_command(session, line):
            break
        await session.wait_idle()
        display_view(session.state)


@cli.command()
@click.pass_context
def explore(ctx: click.Context) -> None:
    """Browse interactively. Type ? for the list of commands."""
    settings: Settings = ctx.obj["settings"]
    transport_factory: TransportFactory = ctx.obj["transport_factory"]

    async def _main() -> None:
        async with BrowseSession(transport_factory(settings), debounce=settings.debounce) as session:
            await run_explore(session)

    asyncio.run(_main())

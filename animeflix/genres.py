"""Static genre catalog and filter helpers."""

from collections.abc import Iterable

from rapidfuzz import fuzz, process

from .config import GENRE_MATCH_THRESHOLD
from .models import Genre

ALL_GENRES: tuple[Genre, ...] = (
    Genre(1, "Action"),
    Genre(2, "Adventure"),
    Genre(4, "Comedy"),
    Genre(8, "Drama"),
    Genre(10, "Fantasy"),
    Genre(14, "Horror"),
    Genre(7, "Mystery"),
    Genre(22, "Romance"),
    Genre(24, "Sci-Fi"),
    Genre(36, "Slice of Life"),
    Genre(30, "Sports"),
    Genre(37, "Supernatural"),
    Genre(41, "Thriller"),
    Genre(9, "Ecchi"),
)

# Shortcuts shown in the header
TOP_GENRES: tuple[Genre, ...] = (
    Genre(1, "Action"),
    Genre(2, "Adventure"),
    Genre(4, "Comedy"),
    Genre(10, "Fantasy"),
    Genre(22, "Romance"),
)

_BY_ID = {genre.id: genre for genre in ALL_GENRES}


def genre_by_id(genre_id: int) -> Genre | None:
    return _BY_ID.get(genre_id)


def _normalize(name: str) -> str:
    return " ".join(name.lower().replace("-", " ").split())


def find_genre(name: str, threshold: int = GENRE_MATCH_THRESHOLD) -> Genre | None:
    """Look up a catalog genre by name.

    Tries an exact (case/punctuation-insensitive) match first, then falls back
    to fuzzy matching via rapidfuzz so "scifi" or "slice-of-life" still resolve.

    Args:
        name: Genre name as typed by the user
        threshold: Minimum fuzzy score (0-100)

    Returns:
        The matching Genre, or None
    """
    if not name or not name.strip():
        return None

    wanted = _normalize(name)
    for genre in ALL_GENRES:
        if _normalize(genre.name) == wanted:
            return genre

    match = process.extractOne(
        wanted,
        [_normalize(genre.name) for genre in ALL_GENRES],
        scorer=fuzz.WRatio,
        score_cutoff=threshold,
    )
    if match is None:
        return None
    return ALL_GENRES[match[2]]


def toggle_genre(selected: Iterable[int], genre_id: int) -> frozenset[int]:
    """Add the genre to the selection, or remove it if already selected."""
    current = frozenset(selected)
    if genre_id in current:
        return current - {genre_id}
    return current | {genre_id}


def select_single_genre(selected: Iterable[int], genre_id: int) -> frozenset[int]:
    """Header shortcut: select only this genre, or clear it if it is the sole selection."""
    current = frozenset(selected)
    if current == {genre_id}:
        return frozenset()
    return frozenset({genre_id})


def genre_names(genre_ids: Iterable[int]) -> list[str]:
    """Names for the given ids in catalog order (unknown ids are shown as numbers)."""
    ids = set(genre_ids)
    names = [genre.name for genre in ALL_GENRES if genre.id in ids]
    names.extend(str(genre_id) for genre_id in sorted(ids - _BY_ID.keys()))
    return names

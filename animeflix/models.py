"""Data models for Animeflix."""

from dataclasses import dataclass, field
from enum import Enum


class Mode(str, Enum):
    BROWSE = "browse"
    SEARCH = "search"


def mode_for_text(text: str) -> Mode:
    """Browse when there is no free-text query, search otherwise."""
    return Mode.BROWSE if not text.strip() else Mode.SEARCH


@dataclass(frozen=True)
class Genre:
    """An entry of the static genre catalog."""

    id: int
    name: str


@dataclass(frozen=True)
class QueryIntent:
    """What the user currently wants to see."""

    text: str = ""
    genres: frozenset[int] = field(default_factory=frozenset)
    page: int = 1

    @property
    def mode(self) -> Mode:
        return mode_for_text(self.text)


@dataclass(frozen=True)
class Images:
    """Poster URLs, empty string when the API has none."""

    small: str = ""
    medium: str = ""
    large: str = ""


@dataclass(frozen=True)
class Trailer:
    url: str | None = None
    embed_url: str | None = None
    youtube_id: str | None = None

    @property
    def is_empty(self) -> bool:
        return not (self.url or self.embed_url or self.youtube_id)


@dataclass(frozen=True)
class MediaItem:
    """A single title returned by the catalog API."""

    id: int
    title: str
    images: Images = field(default_factory=Images)
    score: float | None = None
    year: int | None = None
    type: str = ""
    synopsis: str = ""
    trailer: Trailer = field(default_factory=Trailer)
    genres: tuple[Genre, ...] = ()


@dataclass(frozen=True)
class Pagination:
    last_page: int = 1
    has_next: bool = False


@dataclass(frozen=True)
class PageResult:
    """One fully received page of results."""

    items: tuple[MediaItem, ...] = ()
    pagination: Pagination = field(default_factory=Pagination)
    mode: Mode = Mode.BROWSE


@dataclass(frozen=True)
class ViewState:
    """Everything the UI reads. Replaced wholesale, never mutated."""

    intent: QueryIntent = field(default_factory=QueryIntent)
    result: PageResult | None = None
    loading: bool = False
    error: str | None = None

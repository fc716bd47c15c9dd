"""Shape raw catalog payloads into results and derive the page views."""

from collections.abc import Sequence
from typing import Any

from .config import CAROUSEL_SIZE
from .errors import TransportError
from .models import Genre, Images, MediaItem, Mode, PageResult, Pagination, Trailer, mode_for_text


def _text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _optional_text(value: Any) -> str | None:
    return value if isinstance(value, str) and value else None


def _number(value: Any) -> float | None:
    if isinstance(value, bool) or not isinstance(value, int | float):
        return None
    return value


def _integer(value: Any) -> int | None:
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value


def _images(raw: Any) -> Images:
    jpg = raw.get("jpg") if isinstance(raw, dict) else None
    if not isinstance(jpg, dict):
        return Images()
    return Images(
        small=_text(jpg.get("small_image_url")),
        medium=_text(jpg.get("image_url")),
        large=_text(jpg.get("large_image_url")),
    )


def _trailer(raw: Any) -> Trailer:
    if not isinstance(raw, dict):
        return Trailer()
    return Trailer(
        url=_optional_text(raw.get("url")),
        embed_url=_optional_text(raw.get("embed_url")),
        youtube_id=_optional_text(raw.get("youtube_id")),
    )


def _genres(raw: Any) -> tuple[Genre, ...]:
    if not isinstance(raw, list):
        return ()
    return tuple(
        Genre(id=entry["mal_id"], name=_text(entry.get("name")))
        for entry in raw
        if isinstance(entry, dict) and _integer(entry.get("mal_id")) is not None
    )


def parse_item(raw: Any) -> MediaItem:
    """Map a single Jikan anime object onto a MediaItem.

    Every optional field ends up with an explicit empty value.
    """
    if not isinstance(raw, dict):
        raise TransportError("Catalog API returned an item that is not an object")

    item_id = _integer(raw.get("mal_id"))
    if item_id is None:
        raise TransportError("Catalog API returned an item without an id")

    return MediaItem(
        id=item_id,
        title=_text(raw.get("title")),
        images=_images(raw.get("images")),
        score=_number(raw.get("score")),
        year=_integer(raw.get("year")),
        type=_text(raw.get("type")),
        synopsis=_text(raw.get("synopsis")),
        trailer=_trailer(raw.get("trailer")),
        genres=_genres(raw.get("genres")),
    )


def parse_pagination(raw: Any) -> Pagination:
    if not isinstance(raw, dict):
        return Pagination()
    last_page = _integer(raw.get("last_visible_page"))
    return Pagination(
        last_page=last_page if last_page is not None and last_page >= 1 else 1,
        has_next=raw.get("has_next_page") is True,
    )


def reconcile(mode: Mode, payload: Any) -> PageResult:
    """Turn a raw API payload into a PageResult.

    Item order is preserved as received.

    Raises:
        TransportError: If the payload is not shaped like a Jikan list response
    """
    if not isinstance(payload, dict):
        raise TransportError("Catalog API returned an unexpected payload")

    data = payload.get("data", [])
    if not isinstance(data, list):
        raise TransportError("Catalog API returned an unexpected payload")

    items = tuple(parse_item(raw) for raw in data)
    return PageResult(items=items, pagination=parse_pagination(payload.get("pagination")), mode=mode)


# Derived views. These are recomputed on every read.


def featured(text: str, items: Sequence[MediaItem]) -> MediaItem | None:
    """Hero item: the first result, only when browsing."""
    if mode_for_text(text) is not Mode.BROWSE or not items:
        return None
    return items[0]


def carousel(text: str, items: Sequence[MediaItem]) -> tuple[MediaItem, ...]:
    """Items 1-9 of the top listing, shown next to the hero."""
    if mode_for_text(text) is not Mode.BROWSE:
        return ()
    return tuple(items[1:CAROUSEL_SIZE])


def grid(text: str, items: Sequence[MediaItem]) -> tuple[MediaItem, ...]:
    """Main grid: everything after the top 10 when browsing, all results when searching."""
    if mode_for_text(text) is Mode.BROWSE:
        return tuple(items[CAROUSEL_SIZE:])
    return tuple(items)


def shows_pagination(result: PageResult | None) -> bool:
    """Pagination controls only make sense with more than one page."""
    return result is not None and result.pagination.last_page > 1

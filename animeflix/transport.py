"""Request transports for the catalog API."""

import asyncio
from abc import ABC, abstractmethod
from collections.abc import Iterable
from typing import Any

import httpx
from loguru import logger

from .config import Settings
from .errors import Cancelled, TransportError


class Transport(ABC):
    """Performs single catalog requests on behalf of the query coordinator.

    Implementations return the raw JSON payload. They raise ``Cancelled`` when
    a request was aborted through ``cancel_pending`` and ``TransportError``
    for everything else that goes wrong.
    """

    @abstractmethod
    async def browse_top(self, page: int, genres: Iterable[int]) -> dict[str, Any]:
        """Fetch a page of the top-rated listing, optionally filtered by genre."""
        pass

    @abstractmethod
    async def search(self, text: str, page: int, genres: Iterable[int]) -> dict[str, Any]:
        """Fetch a page of free-text search results."""
        pass

    @abstractmethod
    def cancel_pending(self) -> None:
        """Abort the request currently in flight, if any."""
        pass

    async def aclose(self) -> None:
        pass


def _genre_param(genres: Iterable[int]) -> str:
    return ",".join(str(genre_id) for genre_id in sorted(genres))


class JikanTransport(Transport):
    """Transport for the Jikan v4 API (unofficial MyAnimeList API)."""

    def __init__(self, client: httpx.AsyncClient):
        self._client = client
        self._pending: asyncio.Task | None = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "JikanTransport":
        client = httpx.AsyncClient(base_url=settings.api_url, timeout=settings.timeout)
        return cls(client)

    async def browse_top(self, page: int, genres: Iterable[int]) -> dict[str, Any]:
        genre_ids = _genre_param(genres)
        if not genre_ids:
            return await self._get("/top/anime", {"page": page})
        # /top/anime cannot filter by genre, so fall back to the listing ordered by score
        return await self._get(
            "/anime",
            {"genres": genre_ids, "order_by": "score", "sort": "desc", "page": page},
        )

    async def search(self, text: str, page: int, genres: Iterable[int]) -> dict[str, Any]:
        params: dict[str, Any] = {"q": text.strip(), "page": page}
        genre_ids = _genre_param(genres)
        if genre_ids:
            params["genres"] = genre_ids
        return await self._get("/anime", params)

    def cancel_pending(self) -> None:
        if self._pending is not None and not self._pending.done():
            logger.debug("Aborting pending request")
            self._pending.cancel()
        self._pending = None

    async def aclose(self) -> None:
        self.cancel_pending()
        await self._client.aclose()

    async def _get(self, path: str, params: dict[str, Any]) -> dict[str, Any]:
        """GET a JSON object, mapping every failure onto the transport error taxonomy."""
        request = asyncio.ensure_future(self._client.get(path, params=params))
        self._pending = request
        try:
            response = await request
        except asyncio.CancelledError:
            current = asyncio.current_task()
            if current is not None and current.cancelling():
                # The caller itself was cancelled, let asyncio unwind it
                raise
            raise Cancelled(f"Request to {path} was cancelled") from None
        except httpx.TimeoutException as e:
            raise TransportError(f"Request to {path} timed out") from e
        except httpx.HTTPError as e:
            raise TransportError(f"Catalog API error: {e}") from e
        finally:
            if self._pending is request:
                self._pending = None

        if response.status_code == 429:
            raise TransportError("Too many requests, please wait a moment and retry", status_code=429)
        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise TransportError(f"Catalog API error: {e.response.status_code}", status_code=e.response.status_code) from e

        try:
            data = response.json()
        except ValueError as e:
            raise TransportError("Catalog API returned invalid JSON") from e
        if not isinstance(data, dict):
            raise TransportError("Catalog API returned an unexpected payload")
        return data

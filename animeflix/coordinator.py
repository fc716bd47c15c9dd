"""Query coordinator: the only caller of the request transport."""

import asyncio
from typing import Any

from loguru import logger

from .errors import Cancelled, TransportError
from .models import Mode, QueryIntent
from .reconciler import reconcile
from .store import Store
from .transport import Transport


class QueryCoordinator:
    """Runs at most one catalog request at a time and applies its outcome.

    ``dispatch`` supersedes whatever is in flight. A finished request only
    touches the store when the intent generation it was started for is still
    current and it still owns the in-flight slot, so late responses from
    transports that ignore cancellation are dropped as well.
    """

    def __init__(self, store: Store, transport: Transport, debounce: float = 0.0):
        self._store = store
        self._transport = transport
        self._debounce = debounce
        self._in_flight: asyncio.Task | None = None

    @property
    def in_flight(self) -> asyncio.Task | None:
        return self._in_flight

    def dispatch(self) -> asyncio.Task:
        """Fetch the store's current intent, cancelling any earlier request.

        Must be called from a running event loop.
        """
        self._cancel_in_flight()

        generation = self._store.generation
        intent = self._store.state.intent
        self._store.begin_load()

        logger.debug("Dispatching generation {} ({})", generation, intent.mode.value)
        task = asyncio.get_running_loop().create_task(self._run(intent, generation))
        self._in_flight = task
        return task

    async def wait_idle(self) -> None:
        """Wait until the current request (and any that replaces it) has finished."""
        while self._in_flight is not None and not self._in_flight.done():
            task = self._in_flight
            await asyncio.wait({task})
            if not task.cancelled() and task.exception() is not None:
                raise task.exception()

    async def close(self) -> None:
        task = self._in_flight
        self._cancel_in_flight()
        if task is not None:
            await asyncio.wait({task})

    def _cancel_in_flight(self) -> None:
        self._transport.cancel_pending()
        if self._in_flight is not None and not self._in_flight.done():
            self._in_flight.cancel()
        self._in_flight = None

    def _is_current(self, generation: int) -> bool:
        return generation == self._store.generation and asyncio.current_task() is self._in_flight

    async def _fetch(self, intent: QueryIntent) -> dict[str, Any]:
        if intent.mode is Mode.BROWSE:
            return await self._transport.browse_top(intent.page, intent.genres)
        return await self._transport.search(intent.text, intent.page, intent.genres)

    async def _run(self, intent: QueryIntent, generation: int) -> None:
        try:
            if self._debounce > 0:
                await asyncio.sleep(self._debounce)
            payload = await self._fetch(intent)
            result = reconcile(intent.mode, payload)
        except asyncio.CancelledError:
            logger.debug("Generation {} cancelled", generation)
            raise
        except Cancelled:
            logger.debug("Generation {} aborted by the transport", generation)
            return
        except TransportError as e:
            if not self._is_current(generation):
                logger.debug("Dropping error for stale generation {}: {}", generation, e)
                return
            logger.warning("Query failed: {}", e)
            self._store.fail_load(str(e))
            return

        if not self._is_current(generation):
            logger.debug("Dropping stale response for generation {}", generation)
            return

        logger.debug("Generation {} loaded {} items", generation, len(result.items))
        self._store.complete_load(result)

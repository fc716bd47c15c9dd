"""Browse session: wires the store, the coordinator and the transport together."""

from collections.abc import Callable, Iterable

from .coordinator import QueryCoordinator
from .genres import select_single_genre, toggle_genre
from .models import MediaItem, ViewState
from .reconciler import carousel, featured, grid, shows_pagination
from .store import Listener, Store
from .transport import Transport


class BrowseSession:
    """What a UI talks to.

    Reads go through ``state`` and the derived views; writes go through
    ``run_query``, ``change_filter``, ``set_page`` and ``retry``. Whenever the
    store's intent generation moves, a new request is dispatched.

    Must be used from inside a running event loop.
    """

    def __init__(self, transport: Transport, debounce: float = 0.0, store: Store | None = None):
        self.store = store or Store()
        self.transport = transport
        self.coordinator = QueryCoordinator(self.store, transport, debounce=debounce)
        self._seen_generation = self.store.generation
        self._unsubscribe = self.store.subscribe(self._on_state)

    async def __aenter__(self) -> "BrowseSession":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> bool:
        await self.aclose()
        return False

    async def aclose(self) -> None:
        self._unsubscribe()
        await self.coordinator.close()
        await self.transport.aclose()

    def _on_state(self, state: ViewState) -> None:
        if self.store.generation == self._seen_generation:
            return
        # Record first: the begin_load() state from dispatch() also comes through here
        self._seen_generation = self.store.generation
        self.coordinator.dispatch()

    # Reads

    @property
    def state(self) -> ViewState:
        return self.store.state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        return self.store.subscribe(listener)

    @property
    def featured(self) -> MediaItem | None:
        state = self.state
        return featured(state.intent.text, state.result.items if state.result else ())

    @property
    def carousel(self) -> tuple[MediaItem, ...]:
        state = self.state
        return carousel(state.intent.text, state.result.items if state.result else ())

    @property
    def grid(self) -> tuple[MediaItem, ...]:
        state = self.state
        return grid(state.intent.text, state.result.items if state.result else ())

    @property
    def shows_pagination(self) -> bool:
        return shows_pagination(self.state.result)

    # Writes

    def start(self) -> None:
        """Load the initial (unfiltered top listing) view."""
        self.coordinator.dispatch()

    def run_query(self, text: str) -> None:
        self.store.set_text(text)

    def change_filter(self, genres: Iterable[int]) -> None:
        self.store.set_genres(genres)

    def set_page(self, page: int) -> None:
        self.store.set_page(page)

    def retry(self) -> None:
        """Re-run the current intent unchanged."""
        self.coordinator.dispatch()

    def toggle_genre(self, genre_id: int) -> None:
        self.change_filter(toggle_genre(self.state.intent.genres, genre_id))

    def select_genre(self, genre_id: int) -> None:
        self.change_filter(select_single_genre(self.state.intent.genres, genre_id))

    def clear_genres(self) -> None:
        self.change_filter(())

    def clear_search(self) -> None:
        self.run_query("")

    def next_page(self) -> bool:
        result = self.state.result
        if result is None or not result.pagination.has_next:
            return False
        self.set_page(self.state.intent.page + 1)
        return True

    def previous_page(self) -> bool:
        if self.state.intent.page <= 1:
            return False
        self.set_page(self.state.intent.page - 1)
        return True

    async def wait_idle(self) -> None:
        await self.coordinator.wait_idle()

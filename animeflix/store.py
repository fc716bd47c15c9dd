"""Application state store."""

from collections import deque
from collections.abc import Callable, Iterable
from dataclasses import replace

from loguru import logger

from .errors import ValidationError
from .models import PageResult, QueryIntent, ViewState

Listener = Callable[[ViewState], None]


class Store:
    """Single source of truth for the browse/search view.

    Each transition builds a new ``ViewState`` and swaps it in; the previous
    object is never touched. ``version`` counts swaps and ``generation``
    counts intent changes (the coordinator uses the latter to drop stale
    responses).
    """

    def __init__(self, initial: ViewState | None = None):
        self._state = initial or ViewState()
        self._version = 0
        self._generation = 0
        self._listeners: list[Listener] = []
        self._pending: deque[ViewState] = deque()
        self._notifying = False

    @property
    def state(self) -> ViewState:
        return self._state

    @property
    def version(self) -> int:
        return self._version

    @property
    def generation(self) -> int:
        return self._generation

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call ``listener`` with every new state. Returns an unsubscribe function."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # Intent transitions

    def set_text(self, text: str) -> None:
        """Replace the search text and go back to the first page."""
        intent = replace(self._state.intent, text=text, page=1)
        if intent == self._state.intent:
            return
        self._set_intent(intent)

    def set_genres(self, genres: Iterable[int]) -> None:
        """Replace the genre filter and go back to the first page.

        Setting the same set again is a no-op.
        """
        wanted = frozenset(genres)
        if wanted == self._state.intent.genres:
            return
        self._set_intent(replace(self._state.intent, genres=wanted, page=1))

    def set_page(self, page: int) -> None:
        """Jump to a page. Always produces a new intent, even for the current page."""
        if isinstance(page, bool) or not isinstance(page, int) or page < 1:
            raise ValidationError(f"Page must be a positive integer, got {page!r}")
        self._set_intent(replace(self._state.intent, page=page))

    # Load transitions

    def begin_load(self) -> None:
        self._commit(replace(self._state, loading=True, error=None))

    def complete_load(self, result: PageResult) -> None:
        self._commit(replace(self._state, result=result, loading=False, error=None))

    def fail_load(self, message: str) -> None:
        """Record an error; the previous result stays visible."""
        self._commit(replace(self._state, loading=False, error=message))

    def _set_intent(self, intent: QueryIntent) -> None:
        self._generation += 1
        logger.debug(
            "Intent generation {}: text={!r} genres={} page={}",
            self._generation,
            intent.text,
            sorted(intent.genres),
            intent.page,
        )
        self._commit(replace(self._state, intent=intent))

    def _commit(self, state: ViewState) -> None:
        self._state = state
        self._version += 1
        self._pending.append(state)
        if self._notifying:
            # A listener committed a new state; the outer loop delivers it in order
            return

        self._notifying = True
        error: Exception | None = None
        try:
            while self._pending:
                current = self._pending.popleft()
                for listener in list(self._listeners):
                    try:
                        listener(current)
                    except Exception as e:
                        logger.exception("Store listener failed")
                        if error is None:
                            error = e
        finally:
            self._notifying = False
        if error is not None:
            raise error

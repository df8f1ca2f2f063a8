"""Application search – SearchPaginationController.

One controller per screen owns the query text, the structured filters, the
page cursor and the displayed result, and reconciles them against an injected
:class:`~vegadmin.application.search.port.SearchBackend`.

State machine::

    idle    --set_query(non-empty)------------------> loading
    loading --fetch succeeded-----------------------> loaded
    loading --fetch failed--------------------------> error
    loaded|error --set_query/set_filters/
                   go_to_page/refresh---------------> loading
    any     --set_query(blank)----------------------> idle

Every dispatched fetch carries a sequence number. A completing fetch is
applied only if its number is still the latest one issued by this controller;
``set_query`` also advances the counter so results for superseded text are
dropped even before the debounced fetch goes out.
"""
from __future__ import annotations

import asyncio
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, Iterable, Mapping

from vegadmin.application.pagination import PageState
from vegadmin.application.scheduler import AsyncioTimer, Debouncer, Timer
from vegadmin.application.search.errors import SearchError
from vegadmin.application.search.port import SearchBackend
from vegadmin.application.search.query import FilterSet, NormalizedQuery, normalize_query
from vegadmin.application.search.result import SearchResult
from vegadmin.observability.logging import get_logger

if TYPE_CHECKING:
    from vegadmin.config import AdminSettings

__all__ = ["ControllerState", "SearchPaginationController"]

DEFAULT_DEBOUNCE_SECONDS = 0.3
DEFAULT_PAGE_SIZE = 20

Listener = Callable[["SearchPaginationController"], None]


class ControllerState(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    ERROR = "error"


class SearchPaginationController:
    """Search/filter/paginate state for a single admin screen.

    Parameters
    ----------
    backend:
        The search capability; see :class:`SearchBackend`.
    page_size:
        Fixed number of records per page.
    debounce_seconds:
        Quiet period before a typed query is sent.
    timer:
        Timer used for debouncing; defaults to the running event loop.
    require_query:
        When ``True`` a blank query means "no search" and the controller sits
        in ``idle``. Screens that list everything by default pass ``False``.
    name:
        Screen name bound on every log event.
    """

    def __init__(
        self,
        backend: SearchBackend,
        *,
        page_size: int = DEFAULT_PAGE_SIZE,
        debounce_seconds: float = DEFAULT_DEBOUNCE_SECONDS,
        timer: Timer | None = None,
        require_query: bool = True,
        name: str = "search",
    ) -> None:
        self._backend = backend
        self._debouncer = Debouncer(timer or AsyncioTimer(), debounce_seconds)
        self._require_query = require_query
        self._name = name
        self._log = get_logger(__name__, screen=name)

        self._query_text = ""
        self._normalized: NormalizedQuery | None = None
        self._filters = FilterSet()
        self._page = PageState(page_size=page_size)
        self._items: list[Any] = []
        self._state = ControllerState.IDLE
        self._last_error: SearchError | None = None

        self._seq = 0
        self._tasks: set[asyncio.Task[None]] = set()
        self._listeners: list[Listener] = []

    @classmethod
    def from_settings(
        cls,
        backend: SearchBackend,
        settings: "AdminSettings",
        **kwargs: Any,
    ) -> "SearchPaginationController":
        """Build a controller with page size and debounce taken from *settings*."""
        return cls(
            backend,
            page_size=settings.page_size,
            debounce_seconds=settings.debounce_seconds,
            **kwargs,
        )

    # ------------------------------------------------------------------
    # Exposed state
    # ------------------------------------------------------------------

    @property
    def name(self) -> str:
        return self._name

    @property
    def state(self) -> ControllerState:
        return self._state

    @property
    def items(self) -> list[Any]:
        return list(self._items)

    @property
    def total_count(self) -> int:
        return self._page.total_count

    @property
    def page_index(self) -> int:
        return self._page.page_index

    @property
    def page_size(self) -> int:
        return self._page.page_size

    @property
    def page(self) -> PageState:
        return self._page

    @property
    def query(self) -> str:
        return self._query_text

    @property
    def normalized_query(self) -> NormalizedQuery | None:
        return self._normalized

    @property
    def filters(self) -> FilterSet:
        return self._filters

    @property
    def has_error(self) -> bool:
        return self._state is ControllerState.ERROR

    @property
    def last_error(self) -> SearchError | None:
        return self._last_error

    @property
    def has_searched(self) -> bool:
        """``False`` only while no search has been issued for the current input."""
        return self._state is not ControllerState.IDLE

    @property
    def is_loading(self) -> bool:
        return self._state is ControllerState.LOADING

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def set_query(self, text: str) -> None:
        """Store *text* and schedule a debounced fetch.

        A blank query (when a query is required) cancels the pending timer and
        returns the controller to ``idle`` without fetching.
        """
        self._query_text = text
        self._normalized = normalize_query(text)
        self._page = self._page.reset().with_total(0)
        self._seq += 1

        if not self._can_search():
            self._debouncer.cancel()
            self._items = []
            self._last_error = None
            self._set_state(ControllerState.IDLE)
            return

        self._set_state(ControllerState.LOADING)
        self._debouncer.trigger(self._on_debounce_elapsed)

    def set_filters(self, filters: FilterSet | Mapping[str, Iterable[str]]) -> asyncio.Task[None] | None:
        """Replace the filter set and fetch page 0 immediately."""
        self._filters = filters if isinstance(filters, FilterSet) else FilterSet(filters)
        self._page = self._page.reset().with_total(0)
        if not self._can_search():
            return None
        self._debouncer.cancel()
        return self._dispatch()

    def go_to_page(self, page_index: int) -> asyncio.Task[None] | None:
        """Fetch *page_index*; out-of-range indexes are ignored."""
        if not self._page.contains(page_index) or not self._can_search():
            self._log.debug(
                "page_out_of_range",
                requested=page_index,
                total_pages=self._page.total_pages,
            )
            return None
        self._page = self._page.with_index(page_index)
        self._debouncer.cancel()
        return self._dispatch()

    def next_page(self) -> asyncio.Task[None] | None:
        return self.go_to_page(self._page.page_index + 1)

    def previous_page(self) -> asyncio.Task[None] | None:
        return self.go_to_page(self._page.page_index - 1)

    def refresh(self) -> asyncio.Task[None] | None:
        """Re-issue the fetch for the current query, filters and page."""
        if not self._can_search():
            return None
        self._debouncer.cancel()
        return self._dispatch()

    def start(self) -> asyncio.Task[None] | None:
        """Initial load for screens that list records without a query."""
        return self.refresh()

    async def settle(self) -> None:
        """Wait until no fetch is in flight."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    def close(self) -> None:
        """Cancel the pending debounce and every in-flight fetch."""
        self._debouncer.cancel()
        self._seq += 1
        for task in list(self._tasks):
            task.cancel()

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call *listener* after every state change; returns an unsubscriber."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _can_search(self) -> bool:
        return self._normalized is not None or not self._require_query

    def _on_debounce_elapsed(self) -> None:
        self._dispatch()

    def _dispatch(self) -> asyncio.Task[None]:
        self._seq += 1
        seq = self._seq
        query, filters, page = self._normalized, self._filters, self._page
        self._set_state(ControllerState.LOADING)
        self._log.debug(
            "search_dispatched",
            seq=seq,
            pattern=query.pattern if query else None,
            search_type=query.search_type.value if query else None,
            filters=filters.as_params(),
            page_index=page.page_index,
        )
        task = asyncio.get_running_loop().create_task(self._fetch(seq, query, filters, page))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def _fetch(
        self,
        seq: int,
        query: NormalizedQuery | None,
        filters: FilterSet,
        page: PageState,
    ) -> None:
        try:
            result = await self._backend.search(query, filters, page.offset, page.page_size)
        except SearchError as exc:
            self._apply_failure(seq, exc)
        except Exception as exc:  # noqa: BLE001
            self._apply_failure(
                seq,
                SearchError(str(exc) or type(exc).__name__, backend=self._name, cause=exc),
            )
        else:
            self._apply_result(seq, result)

    def _is_stale(self, seq: int) -> bool:
        if seq != self._seq:
            self._log.debug("search_discarded", seq=seq, latest=self._seq)
            return True
        return False

    def _apply_result(self, seq: int, result: SearchResult[Any]) -> None:
        if self._is_stale(seq):
            return
        self._items = list(result.items)
        self._page = self._page.with_total(result.total_count)
        self._last_error = None
        self._log.debug("search_completed", seq=seq, count=len(self._items), total_count=result.total_count)
        self._set_state(ControllerState.LOADED)

    def _apply_failure(self, seq: int, error: SearchError) -> None:
        if self._is_stale(seq):
            return
        self._items = []
        self._page = self._page.with_total(0)
        self._last_error = error
        self._log.warning("search_failed", seq=seq, error=error.to_dict())
        self._set_state(ControllerState.ERROR)

    def _set_state(self, state: ControllerState) -> None:
        self._state = state
        for listener in list(self._listeners):
            try:
                listener(self)
            except Exception:  # noqa: BLE001
                self._log.exception("listener_failed", listener=repr(listener))

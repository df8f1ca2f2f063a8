"""Testing fakes – ScriptedSearchBackend."""
from __future__ import annotations

import asyncio
import dataclasses
from typing import Any, Callable

from vegadmin.application.search import FilterSet, NormalizedQuery, SearchError, SearchResult

__all__ = ["ScriptedSearchBackend", "SearchCall"]


@dataclasses.dataclass
class SearchCall:
    """One recorded ``search`` invocation, resolved by the test."""

    query: NormalizedQuery | None
    filters: FilterSet
    page_offset: int
    page_size: int
    future: asyncio.Future[SearchResult[Any]]

    @property
    def pattern(self) -> str | None:
        return self.query.pattern if self.query else None

    def resolve(self, items: list[Any], total_count: int | None = None) -> None:
        self.future.set_result(
            SearchResult(items=list(items), total_count=len(items) if total_count is None else total_count)
        )

    def fail(self, error: BaseException | None = None) -> None:
        self.future.set_exception(error or SearchError("backend unavailable"))


class ScriptedSearchBackend:
    """SearchBackend double that records calls.

    Without a *responder* every call stays pending until the test resolves or
    fails it, in any order. With one, calls complete immediately with whatever
    the responder returns or raises.
    """

    def __init__(self, responder: Callable[[SearchCall], SearchResult[Any]] | None = None) -> None:
        self._responder = responder
        self.calls: list[SearchCall] = []

    async def search(
        self,
        query: NormalizedQuery | None,
        filters: FilterSet,
        page_offset: int,
        page_size: int,
    ) -> SearchResult[Any]:
        call = SearchCall(
            query=query,
            filters=filters,
            page_offset=page_offset,
            page_size=page_size,
            future=asyncio.get_running_loop().create_future(),
        )
        self.calls.append(call)
        if self._responder is not None:
            return self._responder(call)
        return await call.future

    async def wait_for_calls(self, count: int, *, max_spins: int = 100) -> list[SearchCall]:
        """Yield to the loop until *count* calls have arrived."""
        for _ in range(max_spins):
            if len(self.calls) >= count:
                break
            await asyncio.sleep(0)
        assert len(self.calls) >= count, f"expected {count} search calls, got {len(self.calls)}"
        return self.calls

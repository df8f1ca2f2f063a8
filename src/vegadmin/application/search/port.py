"""Application search – SearchBackend port."""
from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from vegadmin.application.search.query import FilterSet, NormalizedQuery
from vegadmin.application.search.result import SearchResult

__all__ = ["SearchBackend"]


@runtime_checkable
class SearchBackend(Protocol):
    """Port: the one capability a search screen consumes.

    ``query`` is ``None`` only for screens that list records without a query.
    Implementations raise :class:`~vegadmin.application.search.errors.SearchError`
    on network or backend failure.
    """

    async def search(
        self,
        query: NormalizedQuery | None,
        filters: FilterSet,
        page_offset: int,
        page_size: int,
    ) -> SearchResult[Any]: ...

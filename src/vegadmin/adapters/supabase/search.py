"""Supabase adapter – SearchBackend implementations for the dashboard screens.

The admin RPCs come in two shapes:

* list RPCs take ``limit_count`` and return a bare JSON array; the capped
  array is paginated locally (:class:`ListRpcSearch`);
* paginated RPCs take ``page_size``/``page_offset`` and return
  ``{"<items_key>": [...], "total_count": n}`` (:class:`PaginatedRpcSearch`).

Both are mapped onto the single :class:`SearchResult` contract.
"""
from __future__ import annotations

from typing import Any, Mapping, Protocol

from vegadmin.application.search import FilterSet, NormalizedQuery, SearchError, SearchResult, SearchType
from vegadmin.kernel.errors import BaseError
from vegadmin.observability.logging import get_logger

__all__ = [
    "ListRpcSearch",
    "PaginatedRpcSearch",
    "RpcCaller",
    "activity_log",
    "ingredient_search",
    "newest_ingredients",
    "product_search",
    "profile_search",
    "subscription_search",
    "unclassified_ingredients",
]

_log = get_logger(__name__)

DEFAULT_LIMIT = 50


class RpcCaller(Protocol):
    async def rpc(self, function: str, params: dict[str, Any] | None = None) -> Any: ...


class _RpcSearch:
    def __init__(
        self,
        client: RpcCaller,
        function: str,
        *,
        filter_params: Mapping[str, str] | None = None,
    ) -> None:
        self._client = client
        self._function = function
        self._filter_params = dict(filter_params or {})

    @property
    def function(self) -> str:
        return self._function

    def _encode_filters(self, filters: FilterSet) -> dict[str, list[str]]:
        params: dict[str, list[str]] = {}
        for dimension, values in filters.as_params().items():
            param = self._filter_params.get(dimension)
            if param is None:
                raise SearchError(
                    f"Filter '{dimension}' is not supported by {self._function}",
                    backend=self._function,
                )
            params[param] = values
        return params

    async def _call(self, params: dict[str, Any]) -> Any:
        try:
            return await self._client.rpc(self._function, params)
        except BaseError as exc:
            raise SearchError(exc.message, backend=self._function, cause=exc) from exc

    def _bad_shape(self, data: Any) -> SearchError:
        _log.warning("rpc_unexpected_shape", function=self._function, payload_type=type(data).__name__)
        return SearchError(
            f"Unexpected response shape from {self._function}",
            backend=self._function,
            detail={"payload_type": type(data).__name__},
        )


class ListRpcSearch(_RpcSearch):
    """Backend for RPCs returning a bare array capped by ``limit_count``.

    With ``send_search_type`` the wildcard pattern and its ``search_type`` are
    sent; otherwise the trimmed text is sent as typed.
    """

    def __init__(
        self,
        client: RpcCaller,
        function: str,
        *,
        limit: int = DEFAULT_LIMIT,
        query_param: str = "query",
        send_search_type: bool = False,
        filter_params: Mapping[str, str] | None = None,
    ) -> None:
        super().__init__(client, function, filter_params=filter_params)
        self._limit = limit
        self._query_param = query_param
        self._send_search_type = send_search_type

    async def search(
        self,
        query: NormalizedQuery | None,
        filters: FilterSet,
        page_offset: int,
        page_size: int,
    ) -> SearchResult[dict[str, Any]]:
        params: dict[str, Any] = {"limit_count": self._limit}
        if self._send_search_type:
            params[self._query_param] = query.pattern if query else ""
            params["search_type"] = (query.search_type if query else SearchType.EXACT).value
        else:
            params[self._query_param] = query.text if query else ""
        params.update(self._encode_filters(filters))

        data = await self._call(params)
        if data is None:
            data = []
        if not isinstance(data, list):
            raise self._bad_shape(data)
        return SearchResult(
            items=data[page_offset:page_offset + page_size],
            total_count=len(data),
        )


class PaginatedRpcSearch(_RpcSearch):
    """Backend for RPCs with server-side ``page_size``/``page_offset``."""

    def __init__(
        self,
        client: RpcCaller,
        function: str,
        *,
        items_key: str,
        query_param: str | None = None,
        filter_params: Mapping[str, str] | None = None,
    ) -> None:
        super().__init__(client, function, filter_params=filter_params)
        self._items_key = items_key
        self._query_param = query_param

    async def search(
        self,
        query: NormalizedQuery | None,
        filters: FilterSet,
        page_offset: int,
        page_size: int,
    ) -> SearchResult[dict[str, Any]]:
        params: dict[str, Any] = {"page_size": page_size, "page_offset": page_offset}
        if self._query_param is not None and query is not None:
            params[self._query_param] = query.pattern
        params.update(self._encode_filters(filters))

        data = await self._call(params)
        # Set-returning functions come back wrapped in a one-element array.
        if isinstance(data, list) and len(data) == 1 and isinstance(data[0], dict):
            data = data[0]
        if data is None:
            return SearchResult.empty()
        if not isinstance(data, dict):
            raise self._bad_shape(data)
        items = data.get(self._items_key) or []
        if not isinstance(items, list):
            raise self._bad_shape(items)
        return SearchResult(items=items, total_count=int(data.get("total_count") or 0))


def ingredient_search(client: RpcCaller, *, limit: int = DEFAULT_LIMIT) -> ListRpcSearch:
    """Ingredient title search with wildcards and class filters."""
    return ListRpcSearch(
        client,
        "admin_search_ingredients_exact",
        limit=limit,
        send_search_type=True,
        # admin_search_ingredients_exact must declare class_filter and
        # primary_class_filter text[] arguments for filtered searches to work
        filter_params={"class": "class_filter", "primary_class": "primary_class_filter"},
    )


def product_search(client: RpcCaller, *, limit: int = DEFAULT_LIMIT) -> ListRpcSearch:
    return ListRpcSearch(client, "admin_search_products", limit=limit)


def subscription_search(client: RpcCaller, *, limit: int = DEFAULT_LIMIT) -> ListRpcSearch:
    return ListRpcSearch(client, "admin_user_subscription_search", limit=limit)


def profile_search(client: RpcCaller, *, limit: int = 100) -> ListRpcSearch:
    return ListRpcSearch(client, "admin_search_profiles", limit=limit)


def activity_log(client: RpcCaller) -> PaginatedRpcSearch:
    return PaginatedRpcSearch(client, "admin_actionlog_paginated", items_key="activities")


def newest_ingredients(client: RpcCaller) -> PaginatedRpcSearch:
    return PaginatedRpcSearch(client, "admin_get_newest_ingredients", items_key="ingredients")


def unclassified_ingredients(client: RpcCaller) -> PaginatedRpcSearch:
    return PaginatedRpcSearch(client, "admin_get_unclassified_ingredients", items_key="ingredients")

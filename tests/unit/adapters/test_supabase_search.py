"""Unit tests – Supabase search backends (fake RPC caller)."""
from __future__ import annotations

import asyncio
from typing import Any

import pytest

from vegadmin.adapters.supabase import (
    ListRpcSearch,
    PaginatedRpcSearch,
    activity_log,
    ingredient_search,
    newest_ingredients,
    product_search,
    profile_search,
    subscription_search,
    unclassified_ingredients,
)
from vegadmin.application.search import (
    ControllerState,
    FilterSet,
    SearchBackend,
    SearchError,
    SearchPaginationController,
    normalize_query,
)
from vegadmin.kernel.errors import ExternalServiceError
from vegadmin.testing.fakes import ManualTimer


class FakeRpc:
    """Records RPC calls and answers from a canned payload."""

    def __init__(self, payload: Any = None, error: Exception | None = None):
        self.payload = payload
        self.error = error
        self.calls: list[tuple[str, dict[str, Any]]] = []

    async def rpc(self, function: str, params: dict[str, Any] | None = None) -> Any:
        self.calls.append((function, dict(params or {})))
        if self.error is not None:
            raise self.error
        return self.payload


def _search(backend: Any, query: str | None = None, filters: FilterSet | None = None,
            offset: int = 0, size: int = 20) -> Any:
    q = normalize_query(query) if query is not None else None
    return asyncio.run(backend.search(q, filters or FilterSet(), offset, size))


# ---------------------------------------------------------------------------
# List RPCs
# ---------------------------------------------------------------------------


class TestIngredientSearch:
    def test_sends_pattern_search_type_and_limit(self):
        rpc = FakeRpc([{"title": "salt"}])
        _search(ingredient_search(rpc), "salt*")
        assert rpc.calls == [
            (
                "admin_search_ingredients_exact",
                {"query": "salt%", "search_type": "starts_with", "limit_count": 50},
            )
        ]

    def test_exact_search(self):
        rpc = FakeRpc([])
        _search(ingredient_search(rpc, limit=10), "sea salt")
        _, params = rpc.calls[0]
        assert params["query"] == "sea salt"
        assert params["search_type"] == "exact"
        assert params["limit_count"] == 10

    def test_class_filters_are_encoded(self):
        rpc = FakeRpc([])
        filters = FilterSet({"class": ["vegan", "null"], "primary_class": ["vegetarian"]})
        _search(ingredient_search(rpc), "*gum*", filters)
        _, params = rpc.calls[0]
        assert params["class_filter"] == ["null", "vegan"]
        assert params["primary_class_filter"] == ["vegetarian"]

    def test_empty_filter_dimensions_are_not_sent(self):
        rpc = FakeRpc([])
        _search(ingredient_search(rpc), "salt", FilterSet({"class": []}))
        _, params = rpc.calls[0]
        assert "class_filter" not in params

    def test_unknown_filter_dimension_fails(self):
        rpc = FakeRpc([])
        with pytest.raises(SearchError, match="brand"):
            _search(ingredient_search(rpc), "salt", FilterSet({"brand": ["acme"]}))
        assert rpc.calls == []


class TestListPaging:
    def test_capped_list_is_paged_locally(self):
        rows = [{"n": i} for i in range(25)]
        result = _search(product_search(FakeRpc(rows)), "oat", offset=20, size=10)
        assert result.items == rows[20:25]
        assert result.total_count == 25

    def test_product_search_sends_text_as_typed(self):
        rpc = FakeRpc([])
        _search(product_search(rpc), " oat* milk ")
        assert rpc.calls == [("admin_search_products", {"query": "oat* milk", "limit_count": 50})]

    def test_browse_without_query_sends_empty_string(self):
        rpc = FakeRpc([])
        _search(subscription_search(rpc), None)
        assert rpc.calls == [("admin_user_subscription_search", {"query": "", "limit_count": 50})]

    def test_profile_search_default_limit(self):
        rpc = FakeRpc([])
        _search(profile_search(rpc), "a@b.c")
        assert rpc.calls[0][0] == "admin_search_profiles"
        assert rpc.calls[0][1]["limit_count"] == 100

    def test_null_payload_is_empty(self):
        result = _search(product_search(FakeRpc(None)), "oat")
        assert result.items == []
        assert result.total_count == 0

    def test_unexpected_shape(self):
        with pytest.raises(SearchError):
            _search(product_search(FakeRpc({"rows": []})), "oat")


# ---------------------------------------------------------------------------
# Paginated RPCs
# ---------------------------------------------------------------------------


class TestPaginatedSearch:
    def test_activity_log_request_and_mapping(self):
        rpc = FakeRpc({"activities": [{"id": "1"}], "total_count": 41, "page_size": 20, "page_offset": 20})
        result = _search(activity_log(rpc), None, offset=20, size=20)
        assert rpc.calls == [("admin_actionlog_paginated", {"page_size": 20, "page_offset": 20})]
        assert result.items == [{"id": "1"}]
        assert result.total_count == 41

    @pytest.mark.parametrize(
        "factory, function",
        [
            (newest_ingredients, "admin_get_newest_ingredients"),
            (unclassified_ingredients, "admin_get_unclassified_ingredients"),
        ],
    )
    def test_ingredient_lists(self, factory: Any, function: str):
        rpc = FakeRpc({"ingredients": [{"title": "x"}], "total_count": 1})
        result = _search(factory(rpc), None)
        assert rpc.calls[0][0] == function
        assert result.items == [{"title": "x"}]

    def test_single_row_wrapper_is_unwrapped(self):
        rpc = FakeRpc([{"ingredients": [{"title": "x"}], "total_count": 7}])
        result = _search(newest_ingredients(rpc), None)
        assert result.total_count == 7

    def test_missing_keys_default_to_empty(self):
        result = _search(activity_log(FakeRpc({})), None)
        assert result.items == []
        assert result.total_count == 0

    def test_optional_query_param(self):
        rpc = FakeRpc({"rows": [], "total_count": 0})
        backend = PaginatedRpcSearch(rpc, "fn", items_key="rows", query_param="search")
        _search(backend, "abc*")
        assert rpc.calls[0][1]["search"] == "abc%"

    def test_non_list_items_rejected(self):
        with pytest.raises(SearchError):
            _search(activity_log(FakeRpc({"activities": "nope"})), None)


# ---------------------------------------------------------------------------
# Error translation and controller integration
# ---------------------------------------------------------------------------


class TestErrorTranslation:
    def test_infrastructure_error_becomes_search_error(self):
        cause = ExternalServiceError("admin_search_products", "boom", status_code=500)
        with pytest.raises(SearchError) as exc_info:
            _search(product_search(FakeRpc(error=cause)), "oat")
        assert exc_info.value.backend == "admin_search_products"
        assert exc_info.value.cause is cause

    def test_backends_satisfy_port(self):
        rpc = FakeRpc([])
        assert isinstance(ListRpcSearch(rpc, "fn"), SearchBackend)
        assert isinstance(activity_log(rpc), SearchBackend)


class TestControllerWithRpcBackend:
    def test_backend_failure_surfaces_as_error_state(self):
        async def run() -> SearchPaginationController:
            timer = ManualTimer()
            rpc = FakeRpc(error=ExternalServiceError("admin_search_ingredients_exact", status_code=500))
            controller = SearchPaginationController(ingredient_search(rpc), timer=timer)
            controller.set_query("salt")
            timer.advance(0.3)
            await controller.settle()
            return controller

        controller = asyncio.run(run())
        assert controller.state is ControllerState.ERROR
        assert controller.items == []

    def test_activity_screen_pages_through_log(self):
        async def run() -> tuple[SearchPaginationController, FakeRpc]:
            rpc = FakeRpc({"activities": [{"id": "a"}], "total_count": 45})
            controller = SearchPaginationController(activity_log(rpc), require_query=False, timer=ManualTimer())
            controller.start()
            await controller.settle()
            controller.go_to_page(2)
            await controller.settle()
            return controller, rpc

        controller, rpc = asyncio.run(run())
        assert rpc.calls[-1][1] == {"page_size": 20, "page_offset": 40}
        assert controller.page_index == 2
        assert controller.state is ControllerState.LOADED

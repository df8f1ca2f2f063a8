"""Supabase adapter – statistics RPCs shown above each screen and on the dashboard.

``admin_get_ingredient_stats`` and ``admin_get_product_stats`` return one JSON
object each. ``admin_user_stats`` returns ``{"stat_type", "count"}`` rows that
are folded into :class:`UserStats`. The dashboard combines all three with the
ten most recent action-log entries.
"""
from __future__ import annotations

import asyncio
import dataclasses
from typing import Any, Mapping

from vegadmin.adapters.supabase.search import RpcCaller
from vegadmin.kernel.errors import SerializationError
from vegadmin.observability.logging import get_logger

__all__ = [
    "DashboardStats",
    "Distribution",
    "IngredientStats",
    "ProductStats",
    "StatsService",
    "UserStats",
]

_log = get_logger(__name__)

RECENT_ACTIVITY_LIMIT = 10


def _rate(part: int, whole: int) -> int:
    """Whole-number percentage; 0 when *whole* is 0."""
    if whole <= 0:
        return 0
    return round(part * 100 / whole)


def _int(data: Mapping[str, Any], key: str) -> int:
    return int(data.get(key) or 0)


@dataclasses.dataclass(frozen=True, slots=True)
class Distribution:
    """One bar of a distribution chart. ``label`` is ``None`` for unclassified rows."""

    label: str | None
    count: int
    percentage: float

    @classmethod
    def rows(cls, raw: Any, label_key: str) -> list["Distribution"]:
        return [
            cls(
                label=row.get(label_key),
                count=_int(row, "count"),
                percentage=float(row.get("percentage") or 0),
            )
            for row in raw or []
        ]


@dataclasses.dataclass(frozen=True, slots=True)
class IngredientStats:
    total_ingredients: int
    with_classification: int
    without_classification: int
    class_distribution: list[Distribution]
    primary_class_distribution: list[Distribution]

    @property
    def classification_rate(self) -> int:
        return _rate(self.with_classification, self.total_ingredients)

    @classmethod
    def from_row(cls, data: Mapping[str, Any]) -> "IngredientStats":
        return cls(
            total_ingredients=_int(data, "total_ingredients"),
            with_classification=_int(data, "with_classification"),
            without_classification=_int(data, "without_classification"),
            class_distribution=Distribution.rows(data.get("class_distribution"), "class"),
            primary_class_distribution=Distribution.rows(data.get("primary_class_distribution"), "class"),
        )


@dataclasses.dataclass(frozen=True, slots=True)
class ProductStats:
    total_products: int
    classified_products: int
    unclassified_products: int
    vegan_products: int
    vegetarian_products: int
    classification_distribution: list[Distribution]
    brand_distribution: list[Distribution]

    @property
    def classification_rate(self) -> int:
        return _rate(self.classified_products, self.total_products)

    @property
    def vegan_rate(self) -> int:
        return _rate(self.vegan_products, self.total_products)

    @classmethod
    def from_row(cls, data: Mapping[str, Any]) -> "ProductStats":
        return cls(
            total_products=_int(data, "total_products"),
            classified_products=_int(data, "classified_products"),
            unclassified_products=_int(data, "unclassified_products"),
            vegan_products=_int(data, "vegan_products"),
            vegetarian_products=_int(data, "vegetarian_products"),
            classification_distribution=Distribution.rows(
                data.get("classification_distribution"), "classification"
            ),
            brand_distribution=Distribution.rows(data.get("brand_distribution"), "brand"),
        )


@dataclasses.dataclass(frozen=True, slots=True)
class UserStats:
    total_users: int = 0
    email_users: int = 0
    recent_users_30d: int = 0

    @property
    def growth_rate(self) -> int:
        """Share of all users that signed up in the last 30 days."""
        return _rate(self.recent_users_30d, self.total_users)

    @classmethod
    def from_rows(cls, rows: list[Mapping[str, Any]]) -> "UserStats":
        # unknown stat types are ignored
        counts = {row.get("stat_type"): int(row.get("count") or 0) for row in rows}
        return cls(
            total_users=counts.get("total_users", 0),
            email_users=counts.get("email_users", 0),
            recent_users_30d=counts.get("recent_users_30d", 0),
        )


@dataclasses.dataclass(frozen=True, slots=True)
class DashboardStats:
    ingredients: IngredientStats
    products: ProductStats
    users: UserStats
    recent_activity: list[dict[str, Any]]

    @property
    def recent_activity_count(self) -> int:
        return len(self.recent_activity)


class StatsService:
    """Fetch and type the statistics RPC results.

    Backend failures propagate as the client raised them
    (:class:`~vegadmin.kernel.errors.ExternalServiceError` and friends); an
    unexpected payload shape raises :class:`SerializationError`.
    """

    def __init__(self, client: RpcCaller) -> None:
        self._client = client

    async def ingredient_stats(self) -> IngredientStats:
        data = await self._client.rpc("admin_get_ingredient_stats")
        return IngredientStats.from_row(self._object("admin_get_ingredient_stats", data))

    async def product_stats(self) -> ProductStats:
        data = await self._client.rpc("admin_get_product_stats")
        return ProductStats.from_row(self._object("admin_get_product_stats", data))

    async def user_stats(self) -> UserStats:
        data = await self._client.rpc("admin_user_stats")
        return UserStats.from_rows(self._rows("admin_user_stats", data))

    async def recent_activity(self, limit: int = RECENT_ACTIVITY_LIMIT) -> list[dict[str, Any]]:
        data = await self._client.rpc("admin_actionlog_recent", {"limit_count": limit})
        return self._rows("admin_actionlog_recent", data)

    async def dashboard(self) -> DashboardStats:
        """All four calls concurrently; the first failure is raised."""
        ingredients, products, users, activity = await asyncio.gather(
            self.ingredient_stats(),
            self.product_stats(),
            self.user_stats(),
            self.recent_activity(),
        )
        _log.debug(
            "dashboard_stats_loaded",
            total_ingredients=ingredients.total_ingredients,
            total_products=products.total_products,
            total_users=users.total_users,
            recent_activity=len(activity),
        )
        return DashboardStats(ingredients=ingredients, products=products, users=users, recent_activity=activity)

    @staticmethod
    def _object(function: str, data: Any) -> Mapping[str, Any]:
        # single-row set-returning functions come back as a one-element array
        if isinstance(data, list) and len(data) == 1:
            data = data[0]
        if not isinstance(data, Mapping):
            raise SerializationError(
                f"{function} returned {type(data).__name__}, expected an object",
                payload_type=type(data).__name__,
            )
        return data

    @staticmethod
    def _rows(function: str, data: Any) -> list[Any]:
        if data is None:
            return []
        if not isinstance(data, list):
            raise SerializationError(
                f"{function} returned {type(data).__name__}, expected an array",
                payload_type=type(data).__name__,
            )
        return data

"""Supabase adapter – AdminScreens, the per-screen wiring of the dashboard.

Every screen gets its own :class:`SearchPaginationController` over the
matching RPC backend, sized from :class:`~vegadmin.config.AdminSettings`.
Screens that list records before anything is typed (subscriptions, profiles,
activity log, newest/unclassified ingredients) accept a blank query.
"""
from __future__ import annotations

from typing import Any

from vegadmin.adapters.supabase import search
from vegadmin.adapters.supabase.commands import (
    IngredientCommands,
    ProductCommands,
    ProfileCommands,
    SubscriptionCommands,
)
from vegadmin.adapters.supabase.search import RpcCaller
from vegadmin.adapters.supabase.stats import StatsService
from vegadmin.application.scheduler import Timer
from vegadmin.application.search import SearchBackend, SearchPaginationController
from vegadmin.config import AdminSettings

__all__ = ["AdminScreens"]


class AdminScreens:
    def __init__(self, client: RpcCaller, settings: AdminSettings, *, timer: Timer | None = None) -> None:
        self.client = client
        self.settings = settings
        self._timer = timer

        self.stats = StatsService(client)
        self.ingredient_commands = IngredientCommands(client)
        self.product_commands = ProductCommands(client)
        self.subscription_commands = SubscriptionCommands(client)
        self.profile_commands = ProfileCommands(client)

    def _controller(self, backend: SearchBackend, name: str, **kwargs: Any) -> SearchPaginationController:
        return SearchPaginationController.from_settings(
            backend, self.settings, timer=self._timer, name=name, **kwargs
        )

    def ingredients(self) -> SearchPaginationController:
        backend = search.ingredient_search(self.client, limit=self.settings.search_limit)
        return self._controller(backend, "ingredients")

    def products(self) -> SearchPaginationController:
        backend = search.product_search(self.client, limit=self.settings.search_limit)
        return self._controller(backend, "products")

    def subscriptions(self) -> SearchPaginationController:
        backend = search.subscription_search(self.client, limit=self.settings.search_limit)
        return self._controller(backend, "subscriptions", require_query=False)

    def profiles(self) -> SearchPaginationController:
        # the freebie-profile RPC is always asked for its own fixed cap
        return self._controller(search.profile_search(self.client), "profiles", require_query=False)

    def activity(self) -> SearchPaginationController:
        return self._controller(search.activity_log(self.client), "activity", require_query=False)

    def newest_ingredients(self) -> SearchPaginationController:
        return self._controller(search.newest_ingredients(self.client), "newest_ingredients", require_query=False)

    def unclassified_ingredients(self) -> SearchPaginationController:
        return self._controller(
            search.unclassified_ingredients(self.client), "unclassified_ingredients", require_query=False
        )

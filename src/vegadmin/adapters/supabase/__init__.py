"""Supabase adapter – RPC client, screen search backends, statistics and mutation commands."""
from vegadmin.adapters.supabase.client import SupabaseRpcClient
from vegadmin.adapters.supabase.commands import (
    IngredientCommands,
    ProductCommands,
    ProfileCommands,
    SubscriptionCommands,
    refresh_after,
)
from vegadmin.adapters.supabase.search import (
    ListRpcSearch,
    PaginatedRpcSearch,
    RpcCaller,
    activity_log,
    ingredient_search,
    newest_ingredients,
    product_search,
    profile_search,
    subscription_search,
    unclassified_ingredients,
)
from vegadmin.adapters.supabase.stats import (
    DashboardStats,
    Distribution,
    IngredientStats,
    ProductStats,
    StatsService,
    UserStats,
)
from vegadmin.adapters.supabase.screens import AdminScreens

__all__ = [
    "AdminScreens",
    "DashboardStats",
    "Distribution",
    "IngredientCommands",
    "IngredientStats",
    "ListRpcSearch",
    "PaginatedRpcSearch",
    "ProductCommands",
    "ProductStats",
    "ProfileCommands",
    "RpcCaller",
    "StatsService",
    "SubscriptionCommands",
    "SupabaseRpcClient",
    "UserStats",
    "activity_log",
    "ingredient_search",
    "newest_ingredients",
    "product_search",
    "profile_search",
    "refresh_after",
    "subscription_search",
    "unclassified_ingredients",
]

"""Supabase adapter – mutation RPCs used by the edit/delete dialogs.

After a mutation the screen re-issues its search so the list reflects the
change; :func:`refresh_after` does both steps.
"""
from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Any, Awaitable, Mapping, TypeVar

from vegadmin.adapters.supabase.search import RpcCaller
from vegadmin.kernel.errors import BaseError, ValidationError
from vegadmin.observability.logging import get_logger

if TYPE_CHECKING:
    from vegadmin.application.search import SearchPaginationController

__all__ = [
    "IngredientCommands",
    "ProductCommands",
    "ProfileCommands",
    "SubscriptionCommands",
    "refresh_after",
]

T = TypeVar("T")

_log = get_logger(__name__)


def _blank_to_none(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


def _require(name: str, value: str | None) -> str:
    cleaned = _blank_to_none(value)
    if cleaned is None:
        raise ValidationError(
            f"{name} is required",
            errors=[{"field": name, "error": "required"}],
        )
    return cleaned


def _updates(updates: Mapping[str, Any]) -> dict[str, Any]:
    if not updates:
        raise ValidationError("No changes to apply", errors=[{"field": "updates", "error": "empty"}])
    return {k: _blank_to_none(v) if isinstance(v, str) else v for k, v in updates.items()}


class IngredientCommands:
    def __init__(self, client: RpcCaller) -> None:
        self._client = client

    async def create(self, title: str, class_: str | None = None, primary_class: str | None = None) -> Any:
        return await self._client.rpc(
            "admin_create_ingredient",
            {
                "ingredient_title": _require("title", title),
                "ingredient_class": _blank_to_none(class_),
                "ingredient_primary_class": _blank_to_none(primary_class),
            },
        )

    async def update(self, title: str, class_: str | None, primary_class: str | None) -> Any:
        return await self._client.rpc(
            "admin_update_ingredient",
            {
                "ingredient_title": _require("title", title),
                "new_class": _blank_to_none(class_),
                "new_primary_class": _blank_to_none(primary_class),
            },
        )

    async def delete(self, title: str) -> Any:
        return await self._client.rpc("admin_delete_ingredient", {"ingredient_title": _require("title", title)})


class ProductCommands:
    def __init__(self, client: RpcCaller) -> None:
        self._client = client

    async def update(self, ean13: str, updates: Mapping[str, Any], *, reclassify: bool = False) -> Any:
        """Apply *updates* to the product; optionally re-run classification.

        A failed re-classification is logged, the update itself stands.
        """
        ean13 = _require("ean13", ean13)
        result = await self._client.rpc(
            "admin_update_product",
            {"product_ean13": ean13, "updates": _updates(updates)},
        )
        if reclassify:
            try:
                await self._client.rpc("classify_upc", {"upc_code": ean13})
            except BaseError as exc:
                _log.warning("product_reclassify_failed", ean13=ean13, error=exc.to_dict())
        return result


class SubscriptionCommands:
    def __init__(self, client: RpcCaller) -> None:
        self._client = client

    async def update(self, subscription_id: str, updates: Mapping[str, Any]) -> Any:
        return await self._client.rpc(
            "admin_update_user_subscription",
            {"subscription_id": _require("subscription_id", subscription_id), "updates": _updates(updates)},
        )


class ProfileCommands:
    def __init__(self, client: RpcCaller) -> None:
        self._client = client

    async def update(self, profile_id: str, subscription_level: str, expires_at: datetime | None = None) -> Any:
        return await self._client.rpc(
            "admin_update_profile",
            {
                "profile_id": _require("profile_id", profile_id),
                "new_subscription_level": _require("subscription_level", subscription_level),
                "new_expires_at": expires_at.isoformat() if expires_at else None,
            },
        )

    async def create_or_update_by_email(
        self,
        email: str,
        subscription_level: str,
        expires_at: datetime | None = None,
    ) -> Any:
        return await self._client.rpc(
            "admin_create_or_update_profile_by_email",
            {
                "user_email": _require("email", email),
                "new_subscription_level": _require("subscription_level", subscription_level),
                "new_expires_at": expires_at.isoformat() if expires_at else None,
            },
        )


async def refresh_after(controller: "SearchPaginationController", mutation: Awaitable[T]) -> T:
    """Await *mutation*, then refresh *controller* and wait for the new page.

    Errors from the mutation propagate; the list is not refreshed then.
    """
    result = await mutation
    controller.refresh()
    await controller.settle()
    return result

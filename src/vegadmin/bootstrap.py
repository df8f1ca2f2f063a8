"""Process start-up: settings, logging and the Supabase client in one call."""
from __future__ import annotations

from vegadmin.adapters.supabase import AdminScreens, SupabaseRpcClient
from vegadmin.application.scheduler import Timer
from vegadmin.config import AdminSettings, DotenvSettingsLoader, SettingsLoader
from vegadmin.observability.logging import JsonLoggerFactory, get_logger

__all__ = ["bootstrap"]


def bootstrap(
    settings: AdminSettings | None = None,
    *,
    loader: SettingsLoader | None = None,
    configure_logging: bool = True,
    timer: Timer | None = None,
) -> AdminScreens:
    """Load :class:`AdminSettings` (from ``.env`` unless given) and wire the screens.

    The returned screens own a :class:`SupabaseRpcClient`; close it with
    ``await screens.client.aclose()``.
    """
    if settings is None:
        settings = (loader or DotenvSettingsLoader()).load(AdminSettings)
    if configure_logging:
        JsonLoggerFactory.configure(settings.log_level)
    get_logger(__name__).info(
        "vegadmin_started",
        supabase_url=settings.supabase_url,
        page_size=settings.page_size,
        debounce_ms=settings.debounce_ms,
    )
    return AdminScreens(SupabaseRpcClient.from_settings(settings), settings, timer=timer)

"""Unit tests – bootstrap wiring."""
from __future__ import annotations

import asyncio
import logging

import pytest
import structlog

from vegadmin.adapters.supabase import AdminScreens, SupabaseRpcClient
from vegadmin.bootstrap import bootstrap
from vegadmin.config import AdminSettings, EnvSettingsLoader, MissingRequiredSettingError

URL = "https://project.supabase.example"


@pytest.fixture(autouse=True)
def _restore_logging():
    root = logging.getLogger()
    level = root.level
    handlers = list(root.handlers)
    yield
    structlog.reset_defaults()
    root.handlers[:] = handlers
    root.setLevel(level)


def _close(screens: AdminScreens):
    asyncio.run(screens.client.aclose())


class TestBootstrap:
    def test_configures_logging_from_settings(self):
        screens = bootstrap(AdminSettings(supabase_url=URL, supabase_anon_key="k", log_level="warning"))
        try:
            assert isinstance(screens.client, SupabaseRpcClient)
            assert logging.getLogger().level == logging.WARNING
        finally:
            _close(screens)

    def test_logging_can_be_left_alone(self):
        logging.getLogger().setLevel(logging.ERROR)
        screens = bootstrap(
            AdminSettings(supabase_url=URL, supabase_anon_key="k", log_level="DEBUG"),
            configure_logging=False,
        )
        try:
            assert logging.getLogger().level == logging.ERROR
        finally:
            _close(screens)

    def test_loads_settings_with_loader(self, monkeypatch):
        monkeypatch.setenv("VEGADMIN_SUPABASE_URL", URL)
        monkeypatch.setenv("VEGADMIN_SUPABASE_ANON_KEY", "from-env")
        monkeypatch.setenv("VEGADMIN_PAGE_SIZE", "12")
        screens = bootstrap(loader=EnvSettingsLoader(), configure_logging=False)
        try:
            assert screens.settings.supabase_anon_key == "from-env"
            assert screens.products().page_size == 12
        finally:
            _close(screens)

    def test_missing_settings_fail_fast(self, monkeypatch):
        monkeypatch.delenv("VEGADMIN_SUPABASE_URL", raising=False)
        with pytest.raises(MissingRequiredSettingError):
            bootstrap(loader=EnvSettingsLoader(), configure_logging=False)

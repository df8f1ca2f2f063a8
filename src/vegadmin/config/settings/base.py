"""Config settings – Settings base class and AdminSettings."""
from __future__ import annotations

import dataclasses
from typing import ClassVar

from vegadmin.config.validation import InvalidSettingValueError


@dataclasses.dataclass
class Settings:
    """Base class for settings read from prefixed environment variables."""

    _prefix: ClassVar[str] = ""

    def __post_init__(self) -> None:
        self._validate()

    @classmethod
    def env_key(cls, field_name: str) -> str:
        """Environment variable that feeds *field_name*."""
        return f"{cls._prefix}_{field_name}".upper().lstrip("_")

    def _validate(self) -> None:
        """Override to add cross-field validation."""

    def _invalid(self, field_name: str, reason: str) -> InvalidSettingValueError:
        return InvalidSettingValueError(
            field_name, getattr(self, field_name), reason, env_key=self.env_key(field_name)
        )


@dataclasses.dataclass
class AdminSettings(Settings):
    """Settings for the admin dashboard backend connection and search screens.

    Read from ``VEGADMIN_*`` environment variables, e.g.
    ``VEGADMIN_SUPABASE_URL`` and ``VEGADMIN_SUPABASE_ANON_KEY``.
    """

    _prefix: ClassVar[str] = "VEGADMIN"

    supabase_url: str
    supabase_anon_key: str
    rpc_timeout_seconds: float = 10.0
    debounce_ms: int = 300
    page_size: int = 20
    search_limit: int = 50
    log_level: str = "INFO"

    def _validate(self) -> None:
        if not self.supabase_url.startswith(("http://", "https://")):
            raise self._invalid("supabase_url", "must be an http(s) URL")
        if self.rpc_timeout_seconds <= 0:
            raise self._invalid("rpc_timeout_seconds", "must be > 0")
        if self.debounce_ms < 0:
            raise self._invalid("debounce_ms", "must be >= 0")
        if self.page_size < 1:
            raise self._invalid("page_size", "must be >= 1")
        if self.search_limit < 1:
            raise self._invalid("search_limit", "must be >= 1")
        if self.log_level.upper() not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise self._invalid("log_level", "must be a logging level name")

    @property
    def debounce_seconds(self) -> float:
        return self.debounce_ms / 1000


__all__ = ["AdminSettings", "Settings"]

"""Config validation errors.

Each error remembers the ``VEGADMIN_*`` environment variable it is about, so
an operator can tell which line of the ``.env`` file to fix.
"""
from __future__ import annotations

from typing import Any

from vegadmin.kernel.errors import ApplicationError


class ConfigError(ApplicationError):
    """Settings could not be loaded."""

    default_code = "config_error"
    default_message = "Invalid configuration"

    def __init__(self, message: str | None = None, *, env_key: str | None = None, **kwargs: Any) -> None:
        super().__init__(message, **kwargs)
        self.env_key = env_key
        if env_key:
            self.detail.setdefault("env_key", env_key)


class MissingRequiredSettingError(ConfigError):
    default_code = "missing_required_setting"

    def __init__(self, setting_name: str, *, env_key: str | None = None) -> None:
        super().__init__(f"{env_key or setting_name} must be set", env_key=env_key)
        self.setting_name = setting_name


class InvalidSettingValueError(ConfigError):
    """The variable is set but its value is unusable.

    The offending value is kept on the instance and left out of the message,
    since it may be a key.
    """

    default_code = "invalid_setting_value"

    def __init__(self, setting_name: str, value: object, reason: str, *, env_key: str | None = None) -> None:
        super().__init__(f"{env_key or setting_name} {reason}", env_key=env_key)
        self.setting_name = setting_name
        self.value = value
        self.reason = reason


__all__ = ["ConfigError", "InvalidSettingValueError", "MissingRequiredSettingError"]

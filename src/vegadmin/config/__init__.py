"""Config – 12-factor settings and loaders."""

from vegadmin.config.settings import (
    AdminSettings,
    DotenvSettingsLoader,
    EnvSettingsLoader,
    Settings,
    SettingsLoader,
)
from vegadmin.config.validation import (
    ConfigError,
    InvalidSettingValueError,
    MissingRequiredSettingError,
)

__all__ = [
    "AdminSettings",
    "ConfigError",
    "DotenvSettingsLoader",
    "EnvSettingsLoader",
    "InvalidSettingValueError",
    "MissingRequiredSettingError",
    "Settings",
    "SettingsLoader",
]

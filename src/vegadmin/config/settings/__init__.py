"""Config settings – 12-factor env-based configuration."""
from vegadmin.config.settings.base import AdminSettings, Settings
from vegadmin.config.settings.loaders import DotenvSettingsLoader, EnvSettingsLoader, SettingsLoader

__all__ = ["AdminSettings", "DotenvSettingsLoader", "EnvSettingsLoader", "Settings", "SettingsLoader"]

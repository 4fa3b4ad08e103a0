"""Config settings – 12-factor env-based configuration."""
from logroute.config.settings.base import RoutingSettings, Settings
from logroute.config.settings.loaders import DotenvSettingsLoader, EnvSettingsLoader, SettingsLoader

__all__ = [
    "DotenvSettingsLoader",
    "EnvSettingsLoader",
    "RoutingSettings",
    "Settings",
    "SettingsLoader",
]

"""Config – settings, loaders and tree setup helpers."""

from logroute.config.dict_config import configure_from_dict
from logroute.config.factory import RouterFactory, make_formatter
from logroute.config.settings import EnvSettingsLoader, RoutingSettings, Settings, SettingsLoader
from logroute.config.validation import ConfigError, InvalidSettingValueError

__all__ = [
    "ConfigError",
    "EnvSettingsLoader",
    "InvalidSettingValueError",
    "RouterFactory",
    "RoutingSettings",
    "Settings",
    "SettingsLoader",
    "configure_from_dict",
    "make_formatter",
]

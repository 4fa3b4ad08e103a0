"""Config settings – EnvSettingsLoader, DotenvSettingsLoader."""
from __future__ import annotations

import abc
import dataclasses
import os
from typing import Any, TypeVar

from logroute.config.settings.base import Settings
from logroute.config.validation import InvalidSettingValueError

T = TypeVar("T", bound=Settings)

_TRUE = frozenset({"1", "true", "yes", "on"})
_FALSE = frozenset({"0", "false", "no", "off"})


class SettingsLoader(abc.ABC):
    """Port: load settings from an external source."""

    @abc.abstractmethod
    def load(self, settings_class: type[T]) -> T: ...


class EnvSettingsLoader(SettingsLoader):
    """Load settings from ``PREFIX_FIELD`` environment variables.

    Unset variables keep the field default.  ``bool`` fields take
    ``1/true/yes/on`` or ``0/false/no/off`` in any case; every other field
    is read as a string and validated by the settings class itself.
    """

    def load(self, settings_class: type[T]) -> T:
        prefix = settings_class._prefix.upper()
        kwargs: dict[str, Any] = {}
        for field in dataclasses.fields(settings_class):
            env_key = f"{prefix}_{field.name.upper()}"
            raw = os.environ.get(env_key)
            if raw is not None:
                kwargs[field.name] = self._coerce(env_key, raw, field.type)
        return settings_class(**kwargs)

    @staticmethod
    def _coerce(env_key: str, raw: str, type_hint: Any) -> Any:
        # annotations are strings under ``from __future__ import annotations``
        if type_hint not in (bool, "bool"):
            return raw
        value = raw.strip().lower()
        if value in _TRUE:
            return True
        if value in _FALSE:
            return False
        raise InvalidSettingValueError(env_key, raw, "expected a boolean")


class DotenvSettingsLoader(SettingsLoader):
    """Load a ``.env`` file into the environment, then read it like ``EnvSettingsLoader``.

    Variables already set in the process win unless *override* is true.
    """

    def __init__(self, env_file: str = ".env", override: bool = False) -> None:
        self._env_file = env_file
        self._override = override

    def load(self, settings_class: type[T]) -> T:
        from dotenv import load_dotenv

        load_dotenv(self._env_file, override=self._override)
        return EnvSettingsLoader().load(settings_class)


__all__ = ["DotenvSettingsLoader", "EnvSettingsLoader", "SettingsLoader"]

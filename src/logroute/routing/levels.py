"""Routing – ordered severity levels."""
from __future__ import annotations

from enum import IntEnum
from typing import Any

from logroute.kernel.errors import UnknownLevelError

_ALIASES = {"WARN": "WARNING", "FATAL": "CRITICAL"}


class LogLevel(IntEnum):
    """Severity levels in ascending order of importance."""

    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40
    CRITICAL = 50

    @classmethod
    def coerce(cls, value: Any) -> "LogLevel":
        """Return the level named or numbered by *value*.

        Accepts a :class:`LogLevel`, a case-insensitive name (``"warn"`` and
        ``"fatal"`` are aliases) or one of the five integer values.  ``bool``
        is rejected even though it is an ``int``.

        Raises
        ------
        UnknownLevelError
            For anything else.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            name = value.strip().upper()
            name = _ALIASES.get(name, name)
            try:
                return cls[name]
            except KeyError:
                raise UnknownLevelError(value) from None
        if isinstance(value, int) and not isinstance(value, bool):
            try:
                return cls(value)
            except ValueError:
                raise UnknownLevelError(value) from None
        raise UnknownLevelError(value)


__all__ = ["LogLevel"]

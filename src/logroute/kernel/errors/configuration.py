"""Configuration errors – programmer mistakes, raised at the point of misuse."""

from __future__ import annotations

from typing import Any

from logroute.kernel.errors.base import BaseError


class ConfigurationError(BaseError):
    """The routing tree, a handler or a log call is misconfigured."""

    default_code = "configuration_error"


class UnknownLevelError(ConfigurationError):
    """A severity that is not one of the five ordered levels."""

    default_code = "unknown_level"

    def __init__(self, value: Any, **kwargs: Any) -> None:
        super().__init__(f"Unknown log level {value!r}", **kwargs)
        self.value = value


class MissingFormatterError(ConfigurationError):
    """A handler was attached or used before a formatter was set."""

    default_code = "missing_formatter"

    def __init__(self, handler_name: str, **kwargs: Any) -> None:
        super().__init__(f"Handler '{handler_name}' has no formatter", **kwargs)
        self.handler_name = handler_name


class InvalidLoggerNameError(ConfigurationError):
    """A dotted logger name with empty segments (``"a..b"``, ``".a"``)."""

    default_code = "invalid_logger_name"

    def __init__(self, name: str, **kwargs: Any) -> None:
        super().__init__(f"Invalid logger name {name!r}", **kwargs)
        self.name = name


__all__ = [
    "ConfigurationError",
    "InvalidLoggerNameError",
    "MissingFormatterError",
    "UnknownLevelError",
]

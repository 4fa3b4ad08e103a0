"""Config settings – Settings base class and RoutingSettings."""
from __future__ import annotations

import dataclasses
from typing import ClassVar

from logroute.config.validation import InvalidSettingValueError
from logroute.kernel.errors import UnknownLevelError
from logroute.routing.formatters import DEFAULT_TEMPLATE
from logroute.routing.levels import LogLevel

FORMATS = ("text", "json", "kv")
STREAMS = ("stderr", "stdout")


@dataclasses.dataclass
class Settings:
    """Base class for 12-factor settings."""

    _prefix: ClassVar[str] = ""

    def __post_init__(self) -> None:
        self._validate()

    def _validate(self) -> None:
        """Override to add cross-field validation."""


@dataclasses.dataclass
class RoutingSettings(Settings):
    """Root-logger setup read from ``LOGROUTE_*`` environment variables.

    ``LOGROUTE_ROOT_LEVEL=INFO LOGROUTE_FILE_PATH=/var/log/app.jsonl`` gives
    an INFO root with a console handler on stderr and a JSON file handler.
    """

    _prefix: ClassVar[str] = "LOGROUTE"

    root_level: str = "WARNING"
    console_enabled: bool = True
    console_level: str = "DEBUG"
    console_stream: str = "stderr"
    console_format: str = "text"
    console_template: str = DEFAULT_TEMPLATE
    file_path: str = ""
    file_level: str = "DEBUG"
    file_format: str = "json"
    redact_sensitive: bool = False

    def _validate(self) -> None:
        for name in ("root_level", "console_level", "file_level"):
            value = getattr(self, name)
            try:
                LogLevel.coerce(value)
            except UnknownLevelError:
                raise InvalidSettingValueError(name, value, "unknown log level") from None
        for name in ("console_format", "file_format"):
            value = getattr(self, name)
            if value not in FORMATS:
                raise InvalidSettingValueError(name, value, f"expected one of {', '.join(FORMATS)}")
        if self.console_stream not in STREAMS:
            raise InvalidSettingValueError(
                "console_stream", self.console_stream, f"expected one of {', '.join(STREAMS)}"
            )


__all__ = ["RoutingSettings", "Settings"]

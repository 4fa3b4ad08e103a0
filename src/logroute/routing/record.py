"""Routing – LogRecord value object."""
from __future__ import annotations

import dataclasses
import threading
from collections.abc import Mapping
from datetime import UTC, datetime
from types import MappingProxyType
from typing import Any

from logroute.routing.levels import LogLevel


@dataclasses.dataclass(frozen=True)
class LogRecord:
    """A single accepted log call.

    Built once by :meth:`Logger.log` and shared read-only by every handler on
    the dispatch path.  ``extra`` is copied into a read-only mapping so the
    caller's dict can be reused and handlers cannot mutate it.
    """

    level: LogLevel
    message: str
    logger_name: str
    timestamp: datetime = dataclasses.field(default_factory=lambda: datetime.now(UTC))
    args: tuple[Any, ...] = ()
    extra: Mapping[str, Any] = dataclasses.field(default_factory=dict)
    thread_name: str = dataclasses.field(default_factory=lambda: threading.current_thread().name)
    exc_text: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "extra", MappingProxyType(dict(self.extra)))
        object.__setattr__(self, "args", tuple(self.args))

    def get_message(self) -> str:
        """Return the message with deferred ``%`` arguments applied."""
        if not self.args:
            return self.message
        args: Any = self.args
        if len(args) == 1 and isinstance(args[0], Mapping):
            args = args[0]
        try:
            return self.message % args
        except (TypeError, ValueError, KeyError):
            rendered = " ".join(repr(a) for a in self.args)
            return f"{self.message} {rendered}"


__all__ = ["LogRecord"]

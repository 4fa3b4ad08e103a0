"""Routing – Logger: a named node in the registry's tree.

A logger gate-keeps direct calls with its effective threshold, builds the
:class:`LogRecord`, and walks the record up the tree::

    child handlers → (propagate?) parent handlers → … → root handlers

Thresholds of ancestors are not re-checked for propagated records; only each
logger's ``propagate`` flag and each handler's own threshold and filters
apply.  All structural mutation goes through the owning
:class:`~logroute.routing.registry.LoggerRegistry`.
"""
from __future__ import annotations

import sys
import traceback
from typing import TYPE_CHECKING, Any

from logroute.routing.context import current_context
from logroute.routing.handlers import Handler
from logroute.routing.levels import LogLevel
from logroute.routing.record import LogRecord

if TYPE_CHECKING:
    from logroute.routing.registry import LoggerRegistry


def _render_exception(exc_info: Any) -> str | None:
    if isinstance(exc_info, BaseException):
        exc = exc_info
    elif exc_info:
        exc = sys.exc_info()[1]
    else:
        return None
    if exc is None:
        return None
    return "".join(traceback.format_exception(type(exc), exc, exc.__traceback__)).rstrip()


class Logger:
    """Named routing node.  Obtain instances from a registry, never directly."""

    def __init__(self, name: str, registry: LoggerRegistry, level: LogLevel | None = None) -> None:
        self._name = name
        self._registry = registry
        self._level = level
        self._handlers: tuple[Handler, ...] = ()
        self._propagate = True

    def __repr__(self) -> str:
        own = self._level.name if self._level is not None else "NOTSET"
        return f"<Logger {self._name} ({own})>"

    # ------------------------------------------------------------------
    # Tree
    # ------------------------------------------------------------------

    @property
    def name(self) -> str:
        return self._name

    @property
    def registry(self) -> LoggerRegistry:
        return self._registry

    @property
    def parent(self) -> Logger | None:
        return self._registry.parent_of(self)

    def get_child(self, suffix: str) -> Logger:
        """Return the logger ``"<name>.<suffix>"`` (``"<suffix>"`` for the root)."""
        if self is self._registry.root:
            return self._registry.get_logger(suffix)
        return self._registry.get_logger(f"{self._name}.{suffix}")

    # ------------------------------------------------------------------
    # Thresholds, handlers, propagation
    # ------------------------------------------------------------------

    @property
    def level(self) -> LogLevel | None:
        """Own threshold, ``None`` when inherited."""
        return self._level

    def set_level(self, level: Any) -> None:
        self._registry.set_threshold(self, level)

    @property
    def effective_level(self) -> LogLevel:
        """Own threshold, else the nearest ancestor's explicit one."""
        logger: Logger | None = self
        while logger is not None:
            if logger._level is not None:
                return logger._level
            logger = logger.parent
        return self._registry.root.level or LogLevel.WARNING

    def is_enabled_for(self, level: Any) -> bool:
        return LogLevel.coerce(level) >= self.effective_level

    @property
    def handlers(self) -> tuple[Handler, ...]:
        return self._handlers

    def add_handler(self, handler: Handler) -> None:
        self._registry.attach_handler(self, handler)

    def remove_handler(self, handler: Handler) -> None:
        self._registry.detach_handler(self, handler)

    @property
    def propagate(self) -> bool:
        return self._propagate

    @propagate.setter
    def propagate(self, value: bool) -> None:
        self._registry.set_propagate(self, value)

    # ------------------------------------------------------------------
    # Logging
    # ------------------------------------------------------------------

    def log(self, level: Any, message: str, /, *args: Any, exc_info: Any = False, **extra: Any) -> None:
        """Log *message* at *level*.

        ``args`` are applied lazily with ``%`` formatting; ``extra`` becomes
        the record's contextual fields, on top of any :func:`bind_context`
        fields.  Below the effective threshold nothing is built at all.

        Raises
        ------
        UnknownLevelError
            When *level* is not one of the five levels.
        """
        level = LogLevel.coerce(level)
        if level < self.effective_level:
            return
        context = current_context()
        if extra:
            context.update(extra)
        record = LogRecord(
            level=level,
            message=str(message),
            logger_name=self._name,
            timestamp=self._registry.clock.now(),
            args=args,
            extra=context,
            exc_text=_render_exception(exc_info),
        )
        self.dispatch(record)

    def debug(self, message: str, /, *args: Any, **extra: Any) -> None:
        self.log(LogLevel.DEBUG, message, *args, **extra)

    def info(self, message: str, /, *args: Any, **extra: Any) -> None:
        self.log(LogLevel.INFO, message, *args, **extra)

    def warning(self, message: str, /, *args: Any, **extra: Any) -> None:
        self.log(LogLevel.WARNING, message, *args, **extra)

    # common alias
    warn = warning

    def error(self, message: str, /, *args: Any, **extra: Any) -> None:
        self.log(LogLevel.ERROR, message, *args, **extra)

    def critical(self, message: str, /, *args: Any, **extra: Any) -> None:
        self.log(LogLevel.CRITICAL, message, *args, **extra)

    def exception(self, message: str, /, *args: Any, **extra: Any) -> None:
        """Log at ERROR with the active exception's traceback attached."""
        extra.setdefault("exc_info", True)
        self.log(LogLevel.ERROR, message, *args, **extra)

    def dispatch(self, record: LogRecord) -> None:
        """Hand *record* to this logger's handlers, then up the tree.

        Also the entry point for records built elsewhere.  Each logger's
        handler tuple is read once, so a concurrent attach/detach is seen
        either entirely or not at all.
        """
        logger: Logger | None = self
        while logger is not None:
            for handler in logger._handlers:
                handler.handle(record)
            if not logger._propagate:
                break
            logger = logger.parent


__all__ = ["Logger"]

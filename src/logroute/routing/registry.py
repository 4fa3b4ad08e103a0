"""Routing – LoggerRegistry: owner of every logger in one tree.

The registry is the only object that holds loggers; parent/child edges are
name lookups (``"a.b"`` → ``"a"`` → root), never references.  Structural
changes take the registry lock and replace immutable snapshots (the name
map, each logger's handler tuple), so concurrent dispatches never observe a
half-applied change.

A process-wide default registry is available through :func:`get_registry`
and :func:`get_logger`; tests and embedders can construct their own and pass
it around, or install one with :func:`set_registry`.
"""
from __future__ import annotations

import threading
from typing import Any

from logroute.kernel.errors import (
    ConfigurationError,
    HandlerNotAttachedError,
    InvalidLoggerNameError,
    SinkError,
)
from logroute.kernel.time import Clock, SystemClock
from logroute.routing import channel as _channel
from logroute.routing.handlers import Handler
from logroute.routing.levels import LogLevel
from logroute.routing.logger import Logger

ROOT_NAME = "root"


def check_logger_name(name: object) -> None:
    """Raise :class:`InvalidLoggerNameError` unless *name* is a usable dotted name.

    Empty segments are rejected, and so is a leading ``root`` segment: the
    root is addressed as ``"root"`` alone and is never an ancestor by name.
    """
    if not isinstance(name, str):
        raise InvalidLoggerNameError(str(name))
    parts = name.split(".")
    if any(not part.strip() for part in parts) or (len(parts) > 1 and parts[0] == ROOT_NAME):
        raise InvalidLoggerNameError(name)


class LoggerRegistry:
    """Creates, caches and links loggers by dotted name.

    Parameters
    ----------
    root_level:
        Threshold of the root logger (``WARNING`` by default).  The root
        always has an explicit threshold.
    clock:
        Timestamp source for records (:class:`SystemClock` by default).
    """

    def __init__(self, root_level: Any = LogLevel.WARNING, clock: Clock | None = None) -> None:
        self._lock = threading.RLock()
        self._clock: Clock = clock or SystemClock()
        self._root = Logger(ROOT_NAME, self, LogLevel.coerce(root_level))
        self._loggers: dict[str, Logger] = {}

    @property
    def root(self) -> Logger:
        return self._root

    @property
    def clock(self) -> Clock:
        return self._clock

    # ------------------------------------------------------------------
    # Lookup / creation
    # ------------------------------------------------------------------

    def get_logger(self, name: str | None = None) -> Logger:
        """Return the logger for *name*, creating it and its ancestors.

        ``None``, ``""`` and ``"root"`` return the root logger.

        Raises
        ------
        InvalidLoggerNameError
            When *name* has empty dotted segments or starts with ``root.``.
        """
        if not name or name == ROOT_NAME:
            return self._root
        logger = self._loggers.get(name)
        if logger is not None:
            return logger
        check_logger_name(name)
        with self._lock:
            logger = self._loggers.get(name)
            if logger is not None:
                return logger
            loggers = dict(self._loggers)
            parts = name.split(".")
            for i in range(1, len(parts) + 1):
                dotted = ".".join(parts[:i])
                if dotted not in loggers:
                    loggers[dotted] = Logger(dotted, self)
            self._loggers = loggers
            return loggers[name]

    def parent_of(self, logger: Logger) -> Logger | None:
        """Return the parent of *logger*; ``None`` for the root."""
        if logger is self._root:
            return None
        head, sep, _ = logger.name.rpartition(".")
        if not sep:
            return self._root
        return self.get_logger(head)

    def names(self) -> list[str]:
        """Names of every non-root logger, sorted."""
        return sorted(self._loggers)

    def __contains__(self, name: object) -> bool:
        return name == ROOT_NAME or name in self._loggers

    def __len__(self) -> int:
        return len(self._loggers) + 1

    # ------------------------------------------------------------------
    # Mutation surface
    # ------------------------------------------------------------------

    def attach_handler(self, logger: Logger, handler: Handler) -> None:
        """Append *handler* to *logger*.

        Attaching the same handler twice is allowed and duplicates output.

        Raises
        ------
        MissingFormatterError
            When *handler* has no formatter yet.
        """
        handler.require_formatter()
        with self._lock:
            logger._handlers = logger._handlers + (handler,)

    def detach_handler(self, logger: Logger, handler: Handler) -> None:
        """Remove the first attachment of *handler* from *logger*.

        Raises
        ------
        HandlerNotAttachedError
            When *handler* is not attached to *logger*.
        """
        with self._lock:
            handlers = list(logger._handlers)
            if handler not in handlers:
                raise HandlerNotAttachedError(handler.name, logger.name)
            handlers.remove(handler)
            logger._handlers = tuple(handlers)

    def set_threshold(self, target: Logger | Handler, level: Any) -> None:
        """Set the threshold of a logger or a handler.

        ``None`` unsets a logger's own threshold so it inherits again.

        Raises
        ------
        ConfigurationError
            When unsetting the root's threshold or unsetting a handler's.
        UnknownLevelError
            When *level* is not a known level.
        """
        if isinstance(target, Handler):
            if level is None:
                raise ConfigurationError(f"Handler '{target.name}' requires a threshold")
            target.set_level(level)
            return
        if level is None:
            if target is self._root:
                raise ConfigurationError("The root logger requires a threshold")
            with self._lock:
                target._level = None
            return
        resolved = LogLevel.coerce(level)
        with self._lock:
            target._level = resolved

    def set_propagate(self, logger: Logger, propagate: bool) -> None:
        with self._lock:
            logger._propagate = bool(propagate)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def loggers(self) -> list[Logger]:
        """Root first, then every other logger by name."""
        snapshot = self._loggers
        return [self._root] + [snapshot[n] for n in sorted(snapshot)]

    def handlers(self) -> list[Handler]:
        """Every distinct handler attached anywhere in the tree."""
        seen: dict[int, Handler] = {}
        for logger in self.loggers():
            for handler in logger.handlers:
                seen.setdefault(id(handler), handler)
        return list(seen.values())

    def shutdown(self) -> None:
        """Flush, close and detach every handler in the tree.

        Close failures are reported to the error channel; shutdown never
        raises for them.
        """
        with self._lock:
            handlers = self.handlers()
            for logger in self.loggers():
                logger._handlers = ()
        for handler in handlers:
            try:
                handler.close()
            except Exception as exc:  # noqa: BLE001
                _channel.report(
                    SinkError("Sink close failed", handler_name=handler.name, cause=exc),
                    handler.error_channel,
                )


# ---------------------------------------------------------------------------
# Process-wide default
# ---------------------------------------------------------------------------

_default_lock = threading.Lock()
_default: LoggerRegistry | None = None


def get_registry() -> LoggerRegistry:
    """Return the process-wide registry, creating it on first use."""
    global _default
    if _default is None:
        with _default_lock:
            if _default is None:
                _default = LoggerRegistry()
    return _default


def set_registry(registry: LoggerRegistry) -> None:
    """Install *registry* as the process-wide default."""
    global _default
    with _default_lock:
        _default = registry


def reset_registry() -> LoggerRegistry:
    """Shut down the process-wide registry and replace it with a fresh one."""
    global _default
    fresh = LoggerRegistry()
    with _default_lock:
        previous, _default = _default, fresh
    if previous is not None:
        previous.shutdown()
    return fresh


def get_logger(name: str | None = None) -> Logger:
    """Shorthand for ``get_registry().get_logger(name)``."""
    return get_registry().get_logger(name)


__all__ = [
    "LoggerRegistry",
    "ROOT_NAME",
    "check_logger_name",
    "get_logger",
    "get_registry",
    "reset_registry",
    "set_registry",
]

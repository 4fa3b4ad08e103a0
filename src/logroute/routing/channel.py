"""Routing – out-of-band error channel.

Handlers never raise delivery failures back through ``Logger.log``.  They
report them here instead.  The process-wide default writes one key=value
line per failure to stderr through its own structlog logger, so a broken
routing tree cannot hide its own failures.
"""
from __future__ import annotations

import abc
import sys
import threading
from typing import IO

import structlog

from logroute.kernel.errors import DeliveryError


class ErrorChannel(abc.ABC):
    """Receives :class:`DeliveryError` reports from handlers."""

    @abc.abstractmethod
    def report(self, error: DeliveryError) -> None: ...


class StructlogErrorChannel(ErrorChannel):
    """Report failures as structured lines on *stream* (stderr by default)."""

    def __init__(self, stream: IO[str] | None = None) -> None:
        self._log = structlog.wrap_logger(
            structlog.PrintLogger(file=stream or sys.stderr),
            processors=[
                structlog.processors.add_log_level,
                structlog.processors.TimeStamper(fmt="iso"),
                structlog.processors.KeyValueRenderer(key_order=["timestamp", "level", "event"]),
            ],
        )

    def report(self, error: DeliveryError) -> None:
        self._log.error(
            "logroute.delivery_failed",
            code=error.code,
            message=error.message,
            handler=error.handler_name,
            logger=error.logger_name,
            cause=repr(error.cause) if error.cause is not None else None,
        )


_lock = threading.Lock()
_channel: ErrorChannel | None = None


def get_error_channel() -> ErrorChannel:
    """Return the process-wide channel, creating the default on first use."""
    global _channel
    if _channel is None:
        with _lock:
            if _channel is None:
                _channel = StructlogErrorChannel()
    return _channel


def set_error_channel(channel: ErrorChannel | None) -> None:
    """Install *channel* process-wide; ``None`` restores the default."""
    global _channel
    with _lock:
        _channel = channel


def report(error: DeliveryError, channel: ErrorChannel | None = None) -> None:
    """Deliver *error* to *channel* (or the process-wide one).

    A channel that raises is ignored: reporting must never reach the caller
    of ``Logger.log``.
    """
    try:
        (channel or get_error_channel()).report(error)
    except Exception:  # noqa: BLE001
        pass


__all__ = [
    "ErrorChannel",
    "StructlogErrorChannel",
    "get_error_channel",
    "report",
    "set_error_channel",
]

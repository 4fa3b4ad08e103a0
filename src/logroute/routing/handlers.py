"""Routing – Handler: threshold, filters, formatter and one sink.

:meth:`Handler.handle` is the only place a record turns into output::

    level < threshold  → drop
    any filter rejects → drop
    no formatter       → MissingFormatterError (raised)
    format + write     → failures reported to the error channel, not raised

Writes to the sink happen under a per-handler lock so concurrent records
never interleave on the same destination.
"""
from __future__ import annotations

import itertools
import os
import threading
from typing import IO, Any

from logroute.kernel.errors import (
    FilterError,
    FormattingError,
    MissingFormatterError,
    NotFoundError,
    SinkError,
)
from logroute.routing import channel as _channel
from logroute.routing.channel import ErrorChannel
from logroute.routing.filters import Filter
from logroute.routing.formatters import Formatter
from logroute.routing.levels import LogLevel
from logroute.routing.record import LogRecord
from logroute.routing.sinks import FileSink, Sink, StreamSink

_ids = itertools.count(1)


class Handler:
    """Decides per record whether to emit, then emits to its sink.

    Parameters
    ----------
    sink:
        Destination for formatted text.
    formatter:
        Required before the first record reaches the formatting step.
    level:
        Minimum severity, independent of any logger's threshold.
    filters:
        Evaluated in order; the first rejection drops the record.
    name:
        Label used in error reports.  Generated when omitted.
    error_channel:
        Where delivery failures go.  The process-wide channel when omitted.
    """

    def __init__(
        self,
        sink: Sink,
        formatter: Formatter | None = None,
        level: Any = LogLevel.DEBUG,
        filters: list[Filter] | tuple[Filter, ...] = (),
        name: str | None = None,
        error_channel: ErrorChannel | None = None,
    ) -> None:
        self._sink = sink
        self._formatter = formatter
        self._level = LogLevel.coerce(level)
        self._filters: tuple[Filter, ...] = tuple(filters)
        self.name = name or f"{type(self).__name__.lower()}-{next(_ids)}"
        self._error_channel = error_channel
        self._lock = threading.Lock()

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name} ({self._level.name})>"

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    @property
    def sink(self) -> Sink:
        return self._sink

    @property
    def level(self) -> LogLevel:
        return self._level

    def set_level(self, level: Any) -> None:
        self._level = LogLevel.coerce(level)

    @property
    def formatter(self) -> Formatter | None:
        return self._formatter

    def set_formatter(self, formatter: Formatter) -> None:
        self._formatter = formatter

    @property
    def filters(self) -> tuple[Filter, ...]:
        return self._filters

    def add_filter(self, flt: Filter) -> None:
        with self._lock:
            self._filters = self._filters + (flt,)

    def remove_filter(self, flt: Filter) -> None:
        """Detach *flt*.

        Raises
        ------
        NotFoundError
            When *flt* is not attached to this handler.
        """
        with self._lock:
            if flt not in self._filters:
                raise NotFoundError("Filter", type(flt).__name__, detail={"handler": self.name})
            filters = list(self._filters)
            filters.remove(flt)
            self._filters = tuple(filters)

    @property
    def error_channel(self) -> ErrorChannel | None:
        return self._error_channel

    def require_formatter(self) -> Formatter:
        if self._formatter is None:
            raise MissingFormatterError(self.name)
        return self._formatter

    # ------------------------------------------------------------------
    # Delivery
    # ------------------------------------------------------------------

    def handle(self, record: LogRecord) -> bool:
        """Emit *record* if it passes the threshold and every filter.

        Returns ``True`` when the sink accepted the text.  Dropped records
        and delivery failures return ``False``; failures are reported to the
        error channel.

        Raises
        ------
        MissingFormatterError
            When the record would be emitted but no formatter is set.
        """
        if record.level < self._level:
            return False

        for flt in self._filters:
            try:
                accepted = flt.accepts(record)
            except Exception as exc:  # noqa: BLE001
                self._report(FilterError, f"Filter {type(flt).__name__} raised", record, exc)
                return False
            if not accepted:
                return False

        formatter = self.require_formatter()
        try:
            text = formatter.format(record)
        except Exception as exc:  # noqa: BLE001
            self._report(FormattingError, f"{type(formatter).__name__} failed", record, exc)
            return False

        with self._lock:
            try:
                self._sink.write(text)
            except Exception as exc:  # noqa: BLE001
                failure = exc
            else:
                return True
        # reported outside the lock: a channel may write through this handler
        self._report(SinkError, "Sink write failed", record, failure)
        return False

    def _report(
        self,
        error_cls: type[FilterError] | type[FormattingError] | type[SinkError],
        message: str,
        record: LogRecord,
        exc: Exception,
    ) -> None:
        error = error_cls(
            message,
            handler_name=self.name,
            logger_name=record.logger_name,
            detail={"level": record.level.name},
            cause=exc,
        )
        _channel.report(error, self._error_channel)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @property
    def closed(self) -> bool:
        return self._sink.closed

    def flush(self) -> None:
        with self._lock:
            self._sink.flush()

    def close(self) -> None:
        """Flush and release the sink.  Later records are reported as lost."""
        with self._lock:
            self._sink.close()


class StreamHandler(Handler):
    """Handler writing to a text stream (``sys.stderr`` by default)."""

    def __init__(self, stream: IO[str] | None = None, **kwargs: Any) -> None:
        super().__init__(StreamSink(stream), **kwargs)


class FileHandler(Handler):
    """Handler appending to a file."""

    def __init__(
        self,
        path: str | os.PathLike[str],
        mode: str = "a",
        encoding: str = "utf-8",
        delay: bool = False,
        **kwargs: Any,
    ) -> None:
        super().__init__(FileSink(path, mode=mode, encoding=encoding, delay=delay), **kwargs)

    @property
    def path(self) -> str:
        return self.sink.path  # type: ignore[attr-defined]


__all__ = ["FileHandler", "Handler", "StreamHandler"]

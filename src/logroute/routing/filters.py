"""Routing – record filters.

A filter answers ``accepts(record) -> bool`` and never mutates the record.
Handlers evaluate their filters in attachment order and drop the record on
the first rejection.
"""
from __future__ import annotations

import abc
import threading
from collections import defaultdict
from collections.abc import Callable
from typing import Any

from logroute.routing.levels import LogLevel
from logroute.routing.record import LogRecord

_ANY = object()


class Filter(abc.ABC):
    """Predicate over a :class:`LogRecord`."""

    @abc.abstractmethod
    def accepts(self, record: LogRecord) -> bool: ...


class LevelRangeFilter(Filter):
    """Accept records whose level lies in ``[min_level, max_level]``."""

    def __init__(self, min_level: Any = None, max_level: Any = None) -> None:
        self._min = LogLevel.coerce(min_level) if min_level is not None else None
        self._max = LogLevel.coerce(max_level) if max_level is not None else None

    def accepts(self, record: LogRecord) -> bool:
        if self._min is not None and record.level < self._min:
            return False
        if self._max is not None and record.level > self._max:
            return False
        return True


class LoggerNameFilter(Filter):
    """Accept records from the logger named *prefix* and its descendants."""

    def __init__(self, prefix: str) -> None:
        self._prefix = prefix

    def accepts(self, record: LogRecord) -> bool:
        name = record.logger_name
        return name == self._prefix or name.startswith(self._prefix + ".")


class ExtraFieldFilter(Filter):
    """Require ``record.extra[key]`` to exist (and equal *value* if given)."""

    def __init__(self, key: str, value: Any = _ANY) -> None:
        self._key = key
        self._value = value

    def accepts(self, record: LogRecord) -> bool:
        if self._key not in record.extra:
            return False
        return self._value is _ANY or record.extra[self._key] == self._value


class PredicateFilter(Filter):
    """Wrap an arbitrary ``record -> bool`` callable."""

    def __init__(self, predicate: Callable[[LogRecord], bool]) -> None:
        self._predicate = predicate

    def accepts(self, record: LogRecord) -> bool:
        return bool(self._predicate(record))


class SamplingFilter(Filter):
    """Accept only 1-in-N records per log level.

    Useful for suppressing noise from high-frequency events (health probes,
    cache hits) without losing the signal entirely.

    Parameters
    ----------
    sample_rates:
        Mapping of level → keep-1-in-N, e.g. ``{"DEBUG": 100, "INFO": 10}``
        keeps 1 % of DEBUG and 10 % of INFO records.
    default_rate:
        Rate for levels not listed.  ``1`` keeps everything (default).

    The first record of each level is always kept; counters are shared by
    every thread using this filter.
    """

    def __init__(
        self,
        sample_rates: dict[Any, int] | None = None,
        default_rate: int = 1,
    ) -> None:
        self._rates: dict[LogLevel, int] = {
            LogLevel.coerce(k): v for k, v in (sample_rates or {}).items()
        }
        self._default_rate = max(1, default_rate)
        self._counters: dict[LogLevel, int] = defaultdict(int)
        self._lock = threading.Lock()

    def accepts(self, record: LogRecord) -> bool:
        rate = self._rates.get(record.level, self._default_rate)
        if rate <= 1:
            return True
        with self._lock:
            self._counters[record.level] += 1
            return self._counters[record.level] % rate == 1

    def reset(self) -> None:
        """Reset sampling counters (useful in tests)."""
        with self._lock:
            self._counters.clear()


__all__ = [
    "ExtraFieldFilter",
    "Filter",
    "LevelRangeFilter",
    "LoggerNameFilter",
    "PredicateFilter",
    "SamplingFilter",
]

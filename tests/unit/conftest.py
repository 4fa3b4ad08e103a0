"""Shared fixtures for logroute unit tests."""

from __future__ import annotations

import dataclasses
from collections.abc import Callable, Iterator
from datetime import UTC, datetime
from typing import Any

import pytest

from logroute.config.settings import RoutingSettings
from logroute.routing import (
    Handler,
    LoggerRegistry,
    MemorySink,
    TemplateFormatter,
    set_error_channel,
)
from logroute.testing.fakes import CollectingErrorChannel, FrozenClock

FROZEN_AT = datetime(2024, 1, 2, 3, 4, 5, 678000, tzinfo=UTC)


@pytest.fixture
def clock() -> FrozenClock:
    return FrozenClock(FROZEN_AT)


@pytest.fixture
def registry(clock: FrozenClock) -> LoggerRegistry:
    return LoggerRegistry(clock=clock)


@pytest.fixture
def channel() -> Iterator[CollectingErrorChannel]:
    """Install a collecting channel process-wide for the duration of a test."""
    collecting = CollectingErrorChannel()
    set_error_channel(collecting)
    yield collecting
    set_error_channel(None)


@pytest.fixture
def memory_handler() -> Callable[..., Handler]:
    """Factory: a handler writing ``{level}:{message}`` into a MemorySink."""

    def _make(level: Any = "DEBUG", template: str = "{level}:{message}", **kwargs: Any) -> Handler:
        return Handler(MemorySink(), formatter=TemplateFormatter(template), level=level, **kwargs)

    return _make


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """Unset every ``LOGROUTE_*`` variable and restore the real env afterwards."""
    for f in dataclasses.fields(RoutingSettings):
        key = f"LOGROUTE_{f.name.upper()}"
        # setenv first so teardown also removes values written by dotenv
        monkeypatch.setenv(key, "")
        monkeypatch.delenv(key)
    return monkeypatch

"""Unit tests for bound context fields and the out-of-band error channel."""

from __future__ import annotations

import asyncio
import io

import pytest

from logroute.kernel.errors import DeliveryError, SinkError
from logroute.routing import (
    ErrorChannel,
    StructlogErrorChannel,
    bind_context,
    clear_context,
    current_context,
    get_error_channel,
    set_error_channel,
)
from logroute.routing.channel import report
from logroute.testing.fakes import CollectingErrorChannel


# ---------------------------------------------------------------------------
# bind_context
# ---------------------------------------------------------------------------


class TestBindContext:
    def test_nesting_merges_and_restores(self) -> None:
        with bind_context(a=1):
            with bind_context(b=2, a=10):
                assert current_context() == {"a": 10, "b": 2}
            assert current_context() == {"a": 1}
        assert current_context() == {}

    def test_restored_after_exception(self) -> None:
        with pytest.raises(RuntimeError):
            with bind_context(a=1):
                raise RuntimeError("x")
        assert current_context() == {}

    def test_current_context_is_a_copy(self) -> None:
        with bind_context(a=1):
            snapshot = current_context()
            snapshot["a"] = 99
            assert current_context() == {"a": 1}

    def test_clear_context(self) -> None:
        with bind_context(a=1):
            clear_context()
            assert current_context() == {}

    def test_tasks_do_not_share_bindings(self) -> None:
        async def worker(tag: str) -> dict[str, object]:
            with bind_context(tag=tag):
                await asyncio.sleep(0)
                return current_context()

        async def run() -> list[dict[str, object]]:
            return await asyncio.gather(worker("a"), worker("b"))

        assert asyncio.run(run()) == [{"tag": "a"}, {"tag": "b"}]


# ---------------------------------------------------------------------------
# Error channel
# ---------------------------------------------------------------------------


class TestErrorChannel:
    def test_default_channel_is_structlog(self) -> None:
        set_error_channel(None)
        assert isinstance(get_error_channel(), StructlogErrorChannel)

    def test_set_and_restore(self) -> None:
        collecting = CollectingErrorChannel()
        set_error_channel(collecting)
        try:
            assert get_error_channel() is collecting
        finally:
            set_error_channel(None)
        assert get_error_channel() is not collecting

    def test_structlog_channel_writes_key_value_line(self) -> None:
        stream = io.StringIO()
        channel = StructlogErrorChannel(stream)
        channel.report(SinkError("Sink write failed", handler_name="disk", logger_name="app"))
        line = stream.getvalue()
        assert "event='logroute.delivery_failed'" in line
        assert "code='sink_error'" in line
        assert "handler='disk'" in line
        assert "level='error'" in line

    def test_report_swallows_channel_failures(self) -> None:
        class Broken(ErrorChannel):
            def report(self, error: DeliveryError) -> None:
                raise RuntimeError("channel down")

        report(SinkError("x"), Broken())

    def test_explicit_channel_preferred_over_process_channel(self, channel: CollectingErrorChannel) -> None:
        explicit = CollectingErrorChannel()
        report(SinkError("x"), explicit)
        assert len(explicit.errors) == 1
        assert channel.errors == []

    def test_delivery_error_detail(self) -> None:
        err = SinkError("failed", handler_name="h", logger_name="l")
        assert err.to_dict()["detail"] == {"handler": "h", "logger": "l"}

"""Unit tests for stream, file and memory sinks."""

from __future__ import annotations

import io
import sys
from pathlib import Path

import pytest

from logroute.kernel.errors import SinkError
from logroute.routing import FileSink, MemorySink, StreamSink


class TestStreamSink:
    def test_appends_terminator(self) -> None:
        stream = io.StringIO()
        sink = StreamSink(stream)
        sink.write("hello")
        assert stream.getvalue() == "hello\n"

    def test_defaults_to_current_stderr(self, capsys: pytest.CaptureFixture[str]) -> None:
        sink = StreamSink()
        sink.write("to stderr")
        assert capsys.readouterr().err == "to stderr\n"
        assert sink.stream is sys.stderr

    def test_close_leaves_borrowed_stream_open(self) -> None:
        stream = io.StringIO()
        sink = StreamSink(stream)
        sink.close()
        assert sink.closed
        assert not stream.closed

    def test_close_owned_stream(self) -> None:
        stream = io.StringIO()
        StreamSink(stream, owns_stream=True).close()
        assert stream.closed

    def test_write_after_close_raises(self) -> None:
        sink = StreamSink(io.StringIO())
        sink.close()
        with pytest.raises(SinkError):
            sink.write("late")


class TestFileSink:
    def test_creates_parent_directories(self, tmp_path: Path) -> None:
        path = tmp_path / "a" / "b" / "out.log"
        sink = FileSink(path)
        sink.write("line")
        sink.close()
        assert path.read_text(encoding="utf-8") == "line\n"

    def test_append_mode_keeps_existing_content(self, tmp_path: Path) -> None:
        path = tmp_path / "out.log"
        path.write_text("old\n", encoding="utf-8")
        sink = FileSink(path)
        sink.write("new")
        sink.close()
        assert path.read_text(encoding="utf-8") == "old\nnew\n"

    def test_write_mode_truncates(self, tmp_path: Path) -> None:
        path = tmp_path / "out.log"
        path.write_text("old\n", encoding="utf-8")
        sink = FileSink(path, mode="w")
        sink.write("new")
        sink.close()
        assert path.read_text(encoding="utf-8") == "new\n"

    def test_delay_opens_on_first_write(self, tmp_path: Path) -> None:
        path = tmp_path / "lazy.log"
        sink = FileSink(path, delay=True)
        assert not path.exists()
        sink.write("x")
        assert path.exists()
        sink.close()

    def test_write_after_close_raises(self, tmp_path: Path) -> None:
        sink = FileSink(tmp_path / "c.log")
        sink.close()
        sink.close()
        with pytest.raises(SinkError):
            sink.write("late")


class TestMemorySink:
    def test_collects_and_clears(self) -> None:
        sink = MemorySink()
        sink.write("a")
        sink.write("b")
        assert sink.messages == ["a", "b"]
        sink.clear()
        assert sink.messages == []

    def test_closed_rejects_writes(self) -> None:
        sink = MemorySink()
        sink.close()
        with pytest.raises(SinkError):
            sink.write("x")

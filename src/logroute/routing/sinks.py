"""Routing – sinks: where formatted text ends up.

A sink knows nothing about records, levels or filters; it receives one
already formatted line per ``write`` call.  Serialising writes is the
owning handler's job.
"""
from __future__ import annotations

import abc
import os
import sys
from typing import IO

from logroute.kernel.errors import SinkError

TERMINATOR = "\n"


class Sink(abc.ABC):
    """Opaque write target for formatted log text."""

    @abc.abstractmethod
    def write(self, text: str) -> None:
        """Write one formatted record.  Raises on failure."""

    def flush(self) -> None:
        """Push buffered output to the destination."""

    @abc.abstractmethod
    def close(self) -> None:
        """Flush and release the destination.  Idempotent."""

    @property
    @abc.abstractmethod
    def closed(self) -> bool: ...


class StreamSink(Sink):
    """Writes to a text stream (``sys.stderr`` by default).

    The stream is resolved at write time when none is given, so test
    harnesses that swap ``sys.stderr`` still capture output.  ``close()``
    only closes the stream when the sink owns it.
    """

    def __init__(self, stream: IO[str] | None = None, owns_stream: bool = False) -> None:
        self._stream = stream
        self._owns_stream = owns_stream
        self._closed = False

    @property
    def stream(self) -> IO[str]:
        return self._stream if self._stream is not None else sys.stderr

    @property
    def closed(self) -> bool:
        return self._closed

    def write(self, text: str) -> None:
        if self._closed:
            raise SinkError("Stream sink is closed")
        self.stream.write(text + TERMINATOR)

    def flush(self) -> None:
        if not self._closed:
            self.stream.flush()

    def close(self) -> None:
        if self._closed:
            return
        try:
            self.flush()
        finally:
            self._closed = True
            if self._owns_stream and self._stream is not None:
                self._stream.close()


class FileSink(Sink):
    """Appends to a file, creating parent directories as needed.

    Parameters
    ----------
    path:
        Destination file.
    mode:
        ``"a"`` (default) appends, ``"w"`` truncates on open.
    encoding:
        Text encoding, UTF-8 by default.
    delay:
        Open the file on first write instead of on construction.
    """

    def __init__(
        self,
        path: str | os.PathLike[str],
        mode: str = "a",
        encoding: str = "utf-8",
        delay: bool = False,
    ) -> None:
        self._path = os.fspath(path)
        self._mode = mode
        self._encoding = encoding
        self._file: IO[str] | None = None
        self._closed = False
        if not delay:
            self._open()

    @property
    def path(self) -> str:
        return self._path

    @property
    def closed(self) -> bool:
        return self._closed

    def _open(self) -> IO[str]:
        directory = os.path.dirname(self._path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        self._file = open(self._path, self._mode, encoding=self._encoding)  # noqa: SIM115
        return self._file

    def write(self, text: str) -> None:
        if self._closed:
            raise SinkError(f"File sink '{self._path}' is closed")
        handle = self._file or self._open()
        handle.write(text + TERMINATOR)
        handle.flush()

    def flush(self) -> None:
        if self._file is not None and not self._closed:
            self._file.flush()

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        if self._file is not None:
            try:
                self._file.flush()
            finally:
                self._file.close()
                self._file = None


class MemorySink(Sink):
    """Keeps every written text in :attr:`messages` (in-process capture)."""

    def __init__(self) -> None:
        self.messages: list[str] = []
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def write(self, text: str) -> None:
        if self._closed:
            raise SinkError("Memory sink is closed")
        self.messages.append(text)

    def close(self) -> None:
        self._closed = True

    def clear(self) -> None:
        self.messages.clear()


__all__ = ["FileSink", "MemorySink", "Sink", "StreamSink", "TERMINATOR"]

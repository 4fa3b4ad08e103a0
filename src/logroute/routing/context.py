"""Routing – contextual fields bound for the current thread / task.

Fields bound with :func:`bind_context` are merged into the ``extra`` of every
record created inside the block; call-site fields override them.
"""
from __future__ import annotations

import contextlib
from collections.abc import Iterator
from contextvars import ContextVar
from types import MappingProxyType
from typing import Any, Mapping

_EMPTY: Mapping[str, Any] = MappingProxyType({})
_CTX_VAR: ContextVar[Mapping[str, Any]] = ContextVar("_logroute_context", default=_EMPTY)


@contextlib.contextmanager
def bind_context(**fields: Any) -> Iterator[Mapping[str, Any]]:
    """Bind *fields* for the duration of the ``with`` block.

    Nested blocks merge with the outer binding; leaving a block restores
    whatever was bound before it::

        with bind_context(request_id="r-1"):
            log.info("handled")          # extra == {"request_id": "r-1"}
    """
    merged = MappingProxyType({**_CTX_VAR.get(), **fields})
    token = _CTX_VAR.set(merged)
    try:
        yield merged
    finally:
        _CTX_VAR.reset(token)


def current_context() -> dict[str, Any]:
    """Return a copy of the currently bound fields."""
    return dict(_CTX_VAR.get())


def clear_context() -> None:
    """Drop every bound field in the current context."""
    _CTX_VAR.set(_EMPTY)


__all__ = ["bind_context", "clear_context", "current_context"]

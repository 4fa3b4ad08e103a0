"""Kernel errors – BaseError, the root of every logroute error."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, ClassVar


class BaseError(Exception):
    """Root of every error logroute raises or reports.

    ``code`` is a stable slug an error channel can match on.  ``detail``
    names what was involved (logger, handler, setting) and ``cause`` keeps
    the exception that triggered the error, chained as ``__cause__``.

    ``str(error)`` reads ``[code] message (key=value ...)``.
    """

    default_code: ClassVar[str] = "base_error"

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        detail: Mapping[str, Any] | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.detail: dict[str, Any] = dict(detail or {})
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        if not self.detail:
            return f"[{self.code}] {self.message}"
        context = " ".join(f"{key}={value}" for key, value in self.detail.items())
        return f"[{self.code}] {self.message} ({context})"

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.code}: {self.message}>"

    def to_dict(self) -> dict[str, Any]:
        """Plain mapping of code, message, detail and (if any) cause."""
        payload: dict[str, Any] = {
            "code": self.code,
            "message": self.message,
            "detail": dict(self.detail),
        }
        if self.cause is not None:
            payload["cause"] = f"{type(self.cause).__name__}: {self.cause}"
        return payload


__all__ = ["BaseError"]

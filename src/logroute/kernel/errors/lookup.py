"""Lookup errors – a referenced object is not where the caller expected it."""

from __future__ import annotations

from typing import Any

from logroute.kernel.errors.base import BaseError


class NotFoundError(BaseError):
    """The requested resource does not exist."""

    default_code = "not_found"

    def __init__(
        self,
        resource: str,
        identifier: Any = None,
        **kwargs: Any,
    ) -> None:
        msg = f"{resource} not found"
        if identifier is not None:
            msg = f"{resource} '{identifier}' not found"
        super().__init__(msg, **kwargs)
        self.resource = resource
        self.identifier = identifier


class HandlerNotAttachedError(NotFoundError):
    """``detach_handler`` was called with a handler the logger does not hold."""

    default_code = "handler_not_attached"

    def __init__(self, handler_name: str, logger_name: str, **kwargs: Any) -> None:
        super().__init__(
            "Handler",
            handler_name,
            detail={"logger": logger_name},
            **kwargs,
        )
        self.handler_name = handler_name
        self.logger_name = logger_name


__all__ = ["HandlerNotAttachedError", "NotFoundError"]

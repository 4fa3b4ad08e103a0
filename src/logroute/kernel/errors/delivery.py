"""Delivery errors – failures inside a handler, reported out-of-band.

These are never raised through ``Logger.log``; handlers build them and hand
them to an :class:`~logroute.routing.channel.ErrorChannel`.
"""

from __future__ import annotations

from typing import Any

from logroute.kernel.errors.base import BaseError


class DeliveryError(BaseError):
    """A record could not be delivered by one handler."""

    default_code = "delivery_error"

    def __init__(
        self,
        message: str,
        *,
        handler_name: str | None = None,
        logger_name: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.handler_name = handler_name
        self.logger_name = logger_name
        if handler_name is not None:
            self.detail.setdefault("handler", handler_name)
        if logger_name is not None:
            self.detail.setdefault("logger", logger_name)


class SinkError(DeliveryError):
    """The destination rejected a write (closed stream, disk full, …)."""

    default_code = "sink_error"


class FormattingError(DeliveryError):
    """The formatter raised while rendering a record."""

    default_code = "formatting_error"


class FilterError(DeliveryError):
    """A filter raised instead of answering accept/reject."""

    default_code = "filter_error"


__all__ = ["DeliveryError", "FilterError", "FormattingError", "SinkError"]

"""Routing – formatters: LogRecord → display text.

Three variants share the :class:`Formatter` interface:

* :class:`TemplateFormatter` – ``str.format`` templates such as
  ``"{timestamp} {level} {logger}: {message}"``.
* :class:`JsonFormatter` – one JSON object per record, rendered by
  :class:`structlog.processors.JSONRenderer`.
* :class:`KeyValueFormatter` – ``key=value`` pairs, rendered by
  :class:`structlog.processors.KeyValueRenderer`.

Formatters keep no per-record state, so formatting the same record twice
yields the same text.
"""
from __future__ import annotations

import abc
import string
from typing import Any

import structlog

from logroute.kernel.errors import ConfigurationError
from logroute.routing.record import LogRecord
from logroute.routing.redaction import SensitiveFieldsRedactor

DEFAULT_TEMPLATE = "{timestamp} {level} {logger}: {message}"
MISSING_PLACEHOLDER = "-"

_BUILTIN_KEYS = ("timestamp", "level", "logger", "event")


class Formatter(abc.ABC):
    """Renders a :class:`LogRecord` into a single display string."""

    def __init__(self, redactor: SensitiveFieldsRedactor | None = None) -> None:
        self._redactor = redactor

    @abc.abstractmethod
    def format(self, record: LogRecord) -> str: ...

    def format_timestamp(self, record: LogRecord) -> str:
        return record.timestamp.isoformat(timespec="milliseconds")

    def extra_fields(self, record: LogRecord) -> dict[str, Any]:
        """Record extras, passed through the redactor when one is set."""
        if self._redactor is None:
            return dict(record.extra)
        return self._redactor.redact(record.extra)

    def event_dict(self, record: LogRecord) -> dict[str, Any]:
        """Build a fresh structlog-style event dict for *record*.

        Built-in keys win over extras of the same name.
        """
        event: dict[str, Any] = {
            "timestamp": self.format_timestamp(record),
            "level": record.level.name,
            "logger": record.logger_name,
            "event": record.get_message(),
        }
        for key, value in self.extra_fields(record).items():
            if key not in event:
                event[key] = value
        if record.exc_text is not None:
            event["exception"] = record.exc_text
        return event


_ABSENT = object()


class _TemplateRenderer(string.Formatter):
    """``str.format`` that renders absent fields as ``"-"``.

    A field is absent when its key is missing or an attribute/index lookup
    on it fails; its conversion and format spec are then ignored.
    """

    def get_field(self, field_name: str, args: Any, kwargs: Any) -> tuple[Any, str]:
        try:
            return super().get_field(field_name, args, kwargs)
        except (KeyError, IndexError, AttributeError, TypeError):
            return _ABSENT, field_name

    def convert_field(self, value: Any, conversion: str | None) -> Any:
        if value is _ABSENT:
            return value
        return super().convert_field(value, conversion)

    def format_field(self, value: Any, format_spec: str) -> str:
        if value is _ABSENT:
            return MISSING_PLACEHOLDER
        return super().format_field(value, format_spec)


_renderer = _TemplateRenderer()


class TemplateFormatter(Formatter):
    """``str.format`` template formatter.

    Built-in placeholders: ``level``, ``message``, ``logger``, ``timestamp``
    and ``thread``.  Any other placeholder is read from ``record.extra``.  A
    placeholder the record cannot satisfy (missing key, failed ``.attr`` or
    ``[index]`` lookup) renders as ``"-"`` whatever its format spec.

    Parameters
    ----------
    template:
        Format string, e.g. ``"{level}:{message}"``.
    datefmt:
        Optional :meth:`~datetime.datetime.strftime` pattern for
        ``{timestamp}``.  ISO-8601 with milliseconds when omitted.
    redactor:
        Optional :class:`SensitiveFieldsRedactor` applied to extras.

    Raises
    ------
    ConfigurationError
        When *template* is not a valid format string.
    """

    def __init__(
        self,
        template: str = DEFAULT_TEMPLATE,
        datefmt: str | None = None,
        redactor: SensitiveFieldsRedactor | None = None,
    ) -> None:
        super().__init__(redactor)
        try:
            fields = [f for _, f, _, _ in _renderer.parse(template) if f is not None]
        except ValueError as exc:
            raise ConfigurationError(f"Invalid template {template!r}: {exc}", cause=exc) from exc
        if any(f == "" or f.isdigit() for f in fields):
            raise ConfigurationError(f"Template {template!r} uses positional placeholders")
        self._template = template
        self._datefmt = datefmt

    @property
    def template(self) -> str:
        return self._template

    def format_timestamp(self, record: LogRecord) -> str:
        if self._datefmt is None:
            return super().format_timestamp(record)
        return record.timestamp.strftime(self._datefmt)

    def format(self, record: LogRecord) -> str:
        context = self.extra_fields(record)
        context.update(
            level=record.level.name,
            message=record.get_message(),
            logger=record.logger_name,
            timestamp=self.format_timestamp(record),
            thread=record.thread_name,
        )
        text = _renderer.vformat(self._template, (), context)
        if record.exc_text:
            text = f"{text}\n{record.exc_text}"
        return text


class JsonFormatter(Formatter):
    """One JSON object per record (``timestamp``, ``level``, ``logger``,
    ``event`` + extras)."""

    def __init__(
        self,
        sort_keys: bool = False,
        redactor: SensitiveFieldsRedactor | None = None,
    ) -> None:
        super().__init__(redactor)
        self._renderer = structlog.processors.JSONRenderer(sort_keys=sort_keys)

    def format(self, record: LogRecord) -> str:
        return self._renderer(None, record.level.name.lower(), self.event_dict(record))


class KeyValueFormatter(Formatter):
    """``timestamp=… level=… logger=… event=…`` followed by extras."""

    def __init__(self, redactor: SensitiveFieldsRedactor | None = None) -> None:
        super().__init__(redactor)
        self._renderer = structlog.processors.KeyValueRenderer(
            key_order=list(_BUILTIN_KEYS),
            drop_missing=True,
            repr_native_str=False,
        )

    def format(self, record: LogRecord) -> str:
        return self._renderer(None, record.level.name.lower(), self.event_dict(record))


__all__ = [
    "DEFAULT_TEMPLATE",
    "Formatter",
    "JsonFormatter",
    "KeyValueFormatter",
    "MISSING_PLACEHOLDER",
    "TemplateFormatter",
]

"""Routing – loggers, handlers, filters, formatters and sinks."""
from logroute.routing.channel import (
    ErrorChannel,
    StructlogErrorChannel,
    get_error_channel,
    set_error_channel,
)
from logroute.routing.context import bind_context, clear_context, current_context
from logroute.routing.filters import (
    ExtraFieldFilter,
    Filter,
    LevelRangeFilter,
    LoggerNameFilter,
    PredicateFilter,
    SamplingFilter,
)
from logroute.routing.formatters import (
    Formatter,
    JsonFormatter,
    KeyValueFormatter,
    TemplateFormatter,
)
from logroute.routing.handlers import FileHandler, Handler, StreamHandler
from logroute.routing.levels import LogLevel
from logroute.routing.logger import Logger
from logroute.routing.record import LogRecord
from logroute.routing.redaction import DEFAULT_SENSITIVE_FIELDS, SensitiveFieldsRedactor
from logroute.routing.registry import (
    LoggerRegistry,
    get_logger,
    get_registry,
    reset_registry,
    set_registry,
)
from logroute.routing.sinks import FileSink, MemorySink, Sink, StreamSink

__all__ = [
    "DEFAULT_SENSITIVE_FIELDS",
    "ErrorChannel",
    "ExtraFieldFilter",
    "FileHandler",
    "FileSink",
    "Filter",
    "Formatter",
    "Handler",
    "JsonFormatter",
    "KeyValueFormatter",
    "LevelRangeFilter",
    "LogLevel",
    "LogRecord",
    "Logger",
    "LoggerNameFilter",
    "LoggerRegistry",
    "MemorySink",
    "PredicateFilter",
    "SamplingFilter",
    "SensitiveFieldsRedactor",
    "Sink",
    "StreamHandler",
    "StreamSink",
    "StructlogErrorChannel",
    "TemplateFormatter",
    "bind_context",
    "clear_context",
    "current_context",
    "get_error_channel",
    "get_logger",
    "get_registry",
    "reset_registry",
    "set_error_channel",
    "set_registry",
]

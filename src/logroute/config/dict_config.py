"""Config – declarative tree setup from a plain mapping.

Example::

    configure_from_dict({
        "formatters": {"short": {"template": "{level}:{message}"}},
        "filters": {"app_only": {"type": "logger_name", "prefix": "app"}},
        "handlers": {
            "console": {"sink": "stderr", "formatter": "short", "level": "INFO"},
            "audit": {"sink": "file", "path": "audit.log", "formatter": "short",
                      "filters": ["app_only"]},
        },
        "loggers": {"app.db": {"level": "DEBUG", "handlers": ["audit"], "propagate": False}},
        "root": {"level": "WARNING", "handlers": ["console"]},
    })

Sections are built in dependency order (formatters, filters, handlers,
loggers, root).  The whole mapping is validated before the registry is
touched, so a bad reference leaves the tree unchanged.
"""
from __future__ import annotations

import sys
from collections.abc import Mapping
from typing import Any

from logroute.config.factory import make_formatter
from logroute.config.validation import ConfigError
from logroute.kernel.errors import ConfigurationError, InvalidLoggerNameError
from logroute.routing.filters import (
    ExtraFieldFilter,
    Filter,
    LevelRangeFilter,
    LoggerNameFilter,
    SamplingFilter,
)
from logroute.routing.formatters import DEFAULT_TEMPLATE, Formatter
from logroute.routing.handlers import Handler
from logroute.routing.levels import LogLevel
from logroute.routing.redaction import SensitiveFieldsRedactor
from logroute.routing.registry import ROOT_NAME, LoggerRegistry, check_logger_name, get_registry
from logroute.routing.sinks import FileSink, MemorySink, Sink, StreamSink


def _section(config: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    value = config.get(key) or {}
    if not isinstance(value, Mapping):
        raise ConfigError(f"'{key}' must be a mapping")
    return value


def _build_formatter(name: str, options: Mapping[str, Any]) -> Formatter:
    redact = options.get("redact", False)
    redactor = None
    if redact:
        fields = frozenset(redact) if isinstance(redact, (list, tuple, set, frozenset)) else None
        redactor = SensitiveFieldsRedactor(fields)
    try:
        return make_formatter(
            options.get("type", "template"),
            options.get("template", DEFAULT_TEMPLATE),
            datefmt=options.get("datefmt"),
            redactor=redactor,
        )
    except ConfigError:
        raise
    except ConfigurationError as exc:
        raise ConfigError(f"Formatter '{name}': {exc.message}", cause=exc) from exc


def _build_filter(name: str, options: Mapping[str, Any]) -> Filter:
    kind = options.get("type")
    if kind == "level_range":
        return LevelRangeFilter(options.get("min_level"), options.get("max_level"))
    if kind == "logger_name":
        return LoggerNameFilter(options["prefix"])
    if kind == "extra_field":
        if "value" in options:
            return ExtraFieldFilter(options["key"], options["value"])
        return ExtraFieldFilter(options["key"])
    if kind == "sampling":
        return SamplingFilter(options.get("rates"), options.get("default_rate", 1))
    raise ConfigError(f"Filter '{name}' has unknown type {kind!r}")


def _build_sink(name: str, options: Mapping[str, Any]) -> Sink:
    kind = options.get("sink", "stderr")
    if kind == "stderr":
        return StreamSink()
    if kind == "stdout":
        return StreamSink(sys.stdout)
    if kind == "memory":
        return MemorySink()
    if kind == "file":
        if "path" not in options:
            raise ConfigError(f"Handler '{name}' needs a 'path' for a file sink")
        return FileSink(options["path"], mode=options.get("mode", "a"), delay=True)
    raise ConfigError(f"Handler '{name}' has unknown sink {kind!r}")


def _lookup(kind: str, names: Any, built: Mapping[str, Any], owner: str) -> list[Any]:
    if isinstance(names, str):
        names = [names]
    missing = [n for n in names or () if n not in built]
    if missing:
        raise ConfigError(f"{owner} references unknown {kind} {', '.join(map(repr, missing))}")
    return [built[n] for n in names or ()]


def configure_from_dict(
    config: Mapping[str, Any],
    registry: LoggerRegistry | None = None,
) -> dict[str, Handler]:
    """Build the routing tree described by *config* into *registry*.

    Listed loggers (and the root) get their handler lists replaced; loggers
    not mentioned are left alone.  Returns the built handlers by name.

    Raises
    ------
    ConfigError
        For unknown types, unknown references or malformed sections.
    """
    registry = registry or get_registry()
    try:
        formatters = {n: _build_formatter(n, s) for n, s in _section(config, "formatters").items()}
        filters = {n: _build_filter(n, s) for n, s in _section(config, "filters").items()}

        handler_entries = _section(config, "handlers")
        for name, options in handler_entries.items():
            _lookup("formatter", options.get("formatter", ()), formatters, f"Handler '{name}'")
            _lookup("filter", options.get("filters", ()), filters, f"Handler '{name}'")

        plan: list[tuple[str | None, Mapping[str, Any]]] = [
            (name, options) for name, options in _section(config, "loggers").items()
        ]
        if "root" in config:
            plan.append((None, _section(config, "root")))
        for name, options in plan:
            owner = f"Logger '{name or ROOT_NAME}'"
            is_root = not name or name == ROOT_NAME
            if not is_root:
                try:
                    check_logger_name(name)
                except InvalidLoggerNameError as exc:
                    raise ConfigError(f"{owner} has an invalid name", cause=exc) from exc
            for handler_options in _lookup("handler", options.get("handlers", ()), handler_entries, owner):
                if not handler_options.get("formatter"):
                    raise ConfigError(f"{owner} uses a handler without a formatter")
            if options.get("level") is not None:
                LogLevel.coerce(options["level"])
            elif is_root and "level" in options:
                raise ConfigError("The root logger requires a level")

        handlers: dict[str, Handler] = {}
        for name, options in handler_entries.items():
            formatter_name = options.get("formatter")
            handlers[name] = Handler(
                _build_sink(name, options),
                formatter=formatters[formatter_name] if formatter_name else None,
                level=options.get("level", LogLevel.DEBUG),
                filters=_lookup("filter", options.get("filters", ()), filters, name),
                name=name,
            )
    except ConfigError:
        raise
    except ConfigurationError as exc:
        raise ConfigError(exc.message, cause=exc) from exc
    except (KeyError, TypeError, AttributeError) as exc:
        raise ConfigError(f"Malformed routing config: {exc!r}", cause=exc) from exc

    for name, options in plan:
        logger = registry.get_logger(name)
        for handler in logger.handlers:
            registry.detach_handler(logger, handler)
        if "level" in options:
            registry.set_threshold(logger, options["level"])
        if "propagate" in options:
            registry.set_propagate(logger, options["propagate"])
        for handler in _lookup("handler", options.get("handlers", ()), handlers, name or "root"):
            registry.attach_handler(logger, handler)
    return handlers


__all__ = ["configure_from_dict"]

"""Config – RouterFactory: build root handlers from :class:`RoutingSettings`."""
from __future__ import annotations

import sys
import weakref
from typing import ClassVar

from logroute.config.settings import DotenvSettingsLoader, EnvSettingsLoader, RoutingSettings
from logroute.config.validation import ConfigError
from logroute.routing.formatters import (
    DEFAULT_TEMPLATE,
    Formatter,
    JsonFormatter,
    KeyValueFormatter,
    TemplateFormatter,
)
from logroute.routing.handlers import FileHandler, Handler, StreamHandler
from logroute.routing.redaction import SensitiveFieldsRedactor
from logroute.routing.registry import LoggerRegistry, get_registry


def make_formatter(
    kind: str,
    template: str = DEFAULT_TEMPLATE,
    datefmt: str | None = None,
    redactor: SensitiveFieldsRedactor | None = None,
) -> Formatter:
    """Return a formatter for *kind* (``text``/``template``, ``json``, ``kv``)."""
    if kind in ("text", "template"):
        return TemplateFormatter(template, datefmt=datefmt, redactor=redactor)
    if kind == "json":
        return JsonFormatter(redactor=redactor)
    if kind == "kv":
        return KeyValueFormatter(redactor=redactor)
    raise ConfigError(f"Unknown formatter type {kind!r}")


class RouterFactory:
    """Configure a registry's root logger from settings.

    Existing root handlers are detached and replaced by a console handler
    and, when ``file_path`` is set, a file handler.  Handlers built by an
    earlier ``configure`` are closed once detached; any other handler is
    left open, since its caller still owns it.
    """

    _built: ClassVar[weakref.WeakSet[Handler]] = weakref.WeakSet()

    @staticmethod
    def configure(settings: RoutingSettings, registry: LoggerRegistry | None = None) -> LoggerRegistry:
        registry = registry or get_registry()
        root = registry.root
        redactor = SensitiveFieldsRedactor() if settings.redact_sensitive else None

        for handler in root.handlers:
            registry.detach_handler(root, handler)
            if handler in RouterFactory._built:
                RouterFactory._built.discard(handler)
                handler.close()
        registry.set_threshold(root, settings.root_level)

        handlers: list[Handler] = []
        if settings.console_enabled:
            stream = sys.stdout if settings.console_stream == "stdout" else None
            handlers.append(
                StreamHandler(
                    stream,
                    formatter=make_formatter(
                        settings.console_format, settings.console_template, redactor=redactor
                    ),
                    level=settings.console_level,
                    name="console",
                )
            )
        if settings.file_path:
            handlers.append(
                FileHandler(
                    settings.file_path,
                    delay=True,
                    formatter=make_formatter(
                        settings.file_format, settings.console_template, redactor=redactor
                    ),
                    level=settings.file_level,
                    name="file",
                )
            )
        for handler in handlers:
            registry.attach_handler(root, handler)
            RouterFactory._built.add(handler)
        return registry

    @staticmethod
    def from_env(
        registry: LoggerRegistry | None = None,
        env_file: str | None = None,
    ) -> LoggerRegistry:
        """Load :class:`RoutingSettings` from the environment and configure.

        With *env_file*, the file is loaded first via python-dotenv.
        """
        loader = DotenvSettingsLoader(env_file) if env_file else EnvSettingsLoader()
        return RouterFactory.configure(loader.load(RoutingSettings), registry)


__all__ = ["RouterFactory", "make_formatter"]

"""Unit tests for RouterFactory and make_formatter."""

from __future__ import annotations

import json
import sys
from pathlib import Path

import pytest

from logroute.config import ConfigError, RouterFactory, RoutingSettings, make_formatter
from logroute.routing import (
    FileHandler,
    JsonFormatter,
    KeyValueFormatter,
    LoggerRegistry,
    LogLevel,
    MemorySink,
    StreamHandler,
    TemplateFormatter,
)
from logroute.routing.handlers import Handler


class TestMakeFormatter:
    @pytest.mark.parametrize(
        ("kind", "cls"),
        [("text", TemplateFormatter), ("template", TemplateFormatter), ("json", JsonFormatter), ("kv", KeyValueFormatter)],
    )
    def test_known_kinds(self, kind: str, cls: type) -> None:
        assert isinstance(make_formatter(kind), cls)

    def test_unknown_kind(self) -> None:
        with pytest.raises(ConfigError):
            make_formatter("xml")


class TestRouterFactoryConfigure:
    def test_defaults_give_console_on_stderr(self, registry: LoggerRegistry) -> None:
        RouterFactory.configure(RoutingSettings(), registry)
        root = registry.root
        assert root.level is LogLevel.WARNING
        assert [h.name for h in root.handlers] == ["console"]
        console = root.handlers[0]
        assert isinstance(console, StreamHandler)
        assert console.sink.stream is sys.stderr  # type: ignore[attr-defined]

    def test_returns_registry(self, registry: LoggerRegistry) -> None:
        assert RouterFactory.configure(RoutingSettings(), registry) is registry

    def test_console_on_stderr_writes_template(
        self, registry: LoggerRegistry, capsys: pytest.CaptureFixture[str]
    ) -> None:
        RouterFactory.configure(RoutingSettings(console_template="{level}|{message}"), registry)
        registry.get_logger("app").error("boom %s", 1)
        assert capsys.readouterr().err == "ERROR|boom 1\n"

    def test_console_on_stdout(self, registry: LoggerRegistry, capsys: pytest.CaptureFixture[str]) -> None:
        RouterFactory.configure(
            RoutingSettings(console_stream="stdout", console_template="{message}"), registry
        )
        registry.get_logger("app").warning("hello")
        assert capsys.readouterr().out == "hello\n"

    def test_console_disabled(self, registry: LoggerRegistry) -> None:
        RouterFactory.configure(RoutingSettings(console_enabled=False), registry)
        assert registry.root.handlers == ()

    def test_file_handler_writes_json(self, registry: LoggerRegistry, tmp_path: Path) -> None:
        path = tmp_path / "logs" / "app.jsonl"
        settings = RoutingSettings(console_enabled=False, root_level="INFO", file_path=str(path))
        RouterFactory.configure(settings, registry)

        (handler,) = registry.root.handlers
        assert isinstance(handler, FileHandler)
        assert handler.name == "file"
        registry.get_logger("app.db").info("connected", host="db1")
        registry.shutdown()

        payload = json.loads(path.read_text().strip())
        assert payload["event"] == "connected"
        assert payload["level"] == "INFO"
        assert payload["logger"] == "app.db"
        assert payload["host"] == "db1"

    def test_file_is_not_created_until_first_record(self, registry: LoggerRegistry, tmp_path: Path) -> None:
        path = tmp_path / "app.log"
        RouterFactory.configure(RoutingSettings(console_enabled=False, file_path=str(path)), registry)
        assert not path.exists()

    def test_reconfigure_replaces_root_handlers(self, registry: LoggerRegistry) -> None:
        previous = Handler(MemorySink(), formatter=TemplateFormatter(), name="old")
        registry.attach_handler(registry.root, previous)
        RouterFactory.configure(RoutingSettings(), registry)
        RouterFactory.configure(RoutingSettings(), registry)
        assert [h.name for h in registry.root.handlers] == ["console"]
        assert not previous.closed

    def test_reconfigure_closes_handlers_it_built(self, registry: LoggerRegistry, tmp_path: Path) -> None:
        path = tmp_path / "app.log"
        RouterFactory.configure(RoutingSettings(file_path=str(path)), registry)
        console, file_handler = registry.root.handlers
        registry.get_logger("app").error("first")

        RouterFactory.configure(RoutingSettings(console_enabled=False), registry)

        assert registry.root.handlers == ()
        assert console.closed
        assert file_handler.closed
        assert path.read_text().count("first") == 1

    def test_redaction(self, registry: LoggerRegistry, capsys: pytest.CaptureFixture[str]) -> None:
        settings = RoutingSettings(console_format="kv", redact_sensitive=True)
        RouterFactory.configure(settings, registry)
        registry.get_logger("auth").error("login", user="ada", password="hunter2")
        err = capsys.readouterr().err
        assert "password=[REDACTED]" in err
        assert "user=ada" in err
        assert "hunter2" not in err


class TestRouterFactoryFromEnv:
    def test_from_env(self, clean_env: pytest.MonkeyPatch, registry: LoggerRegistry) -> None:
        clean_env.setenv("LOGROUTE_ROOT_LEVEL", "ERROR")
        clean_env.setenv("LOGROUTE_CONSOLE_LEVEL", "CRITICAL")
        RouterFactory.from_env(registry)
        assert registry.root.level is LogLevel.ERROR
        assert registry.root.handlers[0].level is LogLevel.CRITICAL

    def test_from_env_file(self, clean_env: pytest.MonkeyPatch, registry: LoggerRegistry, tmp_path: Path) -> None:
        env_file = tmp_path / ".env"
        env_file.write_text("LOGROUTE_ROOT_LEVEL=DEBUG\nLOGROUTE_CONSOLE_ENABLED=false\n")
        RouterFactory.from_env(registry, env_file=str(env_file))
        assert registry.root.level is LogLevel.DEBUG
        assert registry.root.handlers == ()

    def test_invalid_env_leaves_tree_untouched(
        self, clean_env: pytest.MonkeyPatch, registry: LoggerRegistry
    ) -> None:
        existing = Handler(MemorySink(), formatter=TemplateFormatter())
        registry.attach_handler(registry.root, existing)
        clean_env.setenv("LOGROUTE_ROOT_LEVEL", "LOUD")
        with pytest.raises(ConfigError):
            RouterFactory.from_env(registry)
        assert registry.root.handlers == (existing,)

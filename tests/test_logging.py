"""Tests for the event logger, template catalog and colorlog configuration."""

import logging

import colorlog
import pytest

from tabchat.logging_config import LoggerConfigurator, log_structured_error
from tabchat.logs import event_catalog
from tabchat.logs.logger import ChatLogger


@pytest.fixture
def chat_logger(monkeypatch):
    monkeypatch.delenv("DEBUG", raising=False)
    return ChatLogger(name="tabchat.test")


class TestChatLogger:
    def test_template_is_rendered_with_prefix(self, chat_logger, caplog):
        with caplog.at_level(logging.INFO, logger="tabchat.test"):
            chat_logger.log_event("cmd", "connect_new", server="irc.test", addr="irc.test", port=6697)
        assert len(caplog.records) == 1
        message = caplog.records[0].getMessage()
        assert message.startswith("[irc.test")
        assert message.endswith("Opening new connection to irc.test:6697")

    def test_channel_is_part_of_prefix(self, chat_logger, caplog):
        with caplog.at_level(logging.INFO, logger="tabchat.test"):
            chat_logger.log_event("cmd", "close_chan", server="irc.test", channel="#rust")
        assert caplog.records[0].getMessage().startswith("[irc.test#rust")

    def test_unknown_event_falls_back_to_derived_text(self, chat_logger, caplog):
        with caplog.at_level(logging.INFO, logger="tabchat.test"):
            chat_logger.log_event("made_up", "some_action")
        assert "made up: some action" in caplog.records[0].getMessage()

    def test_missing_placeholder_keeps_raw_template(self, chat_logger, caplog):
        with caplog.at_level(logging.INFO, logger="tabchat.test"):
            chat_logger.log_event("irc", "connect_start")
        assert "Connecting to {addr}:{port}" in caplog.records[0].getMessage()

    def test_debug_events_are_filtered_at_info(self, chat_logger, caplog):
        with caplog.at_level(logging.DEBUG, logger="tabchat.test"):
            chat_logger.set_level(logging.INFO)
            chat_logger.log_event("irc", "raw_in", level=logging.DEBUG, raw="PING :x")
        assert caplog.records == []

    def test_debug_mode_appends_context(self, monkeypatch, caplog):
        monkeypatch.setenv("DEBUG", "1")
        debug_logger = ChatLogger(name="tabchat.test.debug")
        with caplog.at_level(logging.DEBUG, logger="tabchat.test.debug"):
            debug_logger.log_event("irc", "raw_in", level=logging.DEBUG, server="s", raw="PING :x")
        message = caplog.records[0].getMessage()
        assert message.startswith("irc_raw_in")
        assert "(raw=PING :x)" in message

    def test_log_file(self, tmp_path, monkeypatch):
        monkeypatch.delenv("DEBUG", raising=False)
        path = tmp_path / "chat.log"
        file_logger = ChatLogger(name="tabchat.test.file", log_file=str(path))
        file_logger.log_event("irc", "quit", server="irc.test")
        for handler in file_logger.logger.handlers:
            handler.flush()
        assert "Quitting" in path.read_text()


class TestEventCatalog:
    def test_templates_are_loaded(self):
        assert event_catalog.EVENT_TEMPLATES[("pump", "start")] == "Event pump started"

    def test_partial_context_keeps_unfilled_placeholders(self):
        rendered = event_catalog.render_event("irc", "connect_start", {"addr": "irc.test"})
        assert rendered == "Connecting to irc.test:{port}"
        assert event_catalog.render_event("irc", "no_such_action", {}) is None

    def test_load_skips_non_string_entries(self, tmp_path):
        path = tmp_path / "templates.json"
        path.write_text('{"cmd": {"ok": "fine", "bad": 3}, "ui": ["not", "a", "map"]}')
        assert event_catalog.load_event_templates(path) == {("cmd", "ok"): "fine"}

    def test_unreadable_file_reports_load_error(self, tmp_path):
        path = tmp_path / "templates.json"
        path.write_text("{not json")
        templates = event_catalog.load_event_templates(path)
        assert list(templates) == [("app", "load_error")]
        assert templates[("app", "load_error")].startswith("Failed to load event templates")

    def test_missing_file_leaves_load_error(self, monkeypatch):
        monkeypatch.setattr(event_catalog, "_JSON_FILENAME", "does_not_exist.json")
        try:
            event_catalog.reload_event_templates()
            assert ("app", "load_error") in event_catalog.EVENT_TEMPLATES
        finally:
            monkeypatch.undo()
            event_catalog.reload_event_templates()


class TestLoggerConfigurator:
    @pytest.fixture(autouse=True)
    def restore_root_logger(self):
        root = logging.getLogger()
        handlers, level = root.handlers[:], root.level
        tabchat_level = logging.getLogger("tabchat").level
        yield
        root.handlers[:] = handlers
        root.setLevel(level)
        logging.getLogger("tabchat").setLevel(tabchat_level)

    def test_installs_colored_stderr_handler(self, monkeypatch):
        monkeypatch.delenv("DEBUG", raising=False)
        handler = LoggerConfigurator().configure()
        assert isinstance(handler.formatter, colorlog.ColoredFormatter)
        assert logging.getLogger().level == logging.INFO
        assert handler in logging.getLogger().handlers

    def test_debug_env_enables_debug(self, monkeypatch):
        monkeypatch.setenv("DEBUG", "true")
        LoggerConfigurator().configure()
        assert logging.getLogger("tabchat").level == logging.DEBUG

    def test_log_file_option(self, tmp_path, monkeypatch):
        monkeypatch.delenv("DEBUG", raising=False)
        handler = LoggerConfigurator({"log_file": str(tmp_path / "out.log")}).configure()
        try:
            assert isinstance(handler, logging.FileHandler)
        finally:
            handler.close()


def test_structured_error_line(caplog):
    with caplog.at_level(logging.ERROR, logger="tabchat"):
        log_structured_error(
            "network", "send failed", ValueError("bad"), context={"server": "irc.test"}
        )
    assert caplog.records[0].getMessage() == (
        "[NETWORK] send failed | Exception: ValueError: bad | Context: server=irc.test"
    )

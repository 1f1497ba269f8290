"""
Tests for channel-aware logging configuration.
"""

import pytest

from htmlval.core.logging import (
    LogChannel,
    LogLevel,
    configure_logging,
    get_current_config,
    get_logger,
    get_pass_logger,
)


@pytest.fixture
def restore_logging():
    yield
    configure_logging(level="silent", force=True)


class TestLogConfig:
    def test_level_from_string(self):
        assert LogLevel.from_string("VERBOSE") == LogLevel.VERBOSE
        assert LogLevel.from_string("unknown") == LogLevel.INFO

    def test_channel_from_string(self):
        assert LogChannel.from_string("lexer") == LogChannel.LEXER
        assert LogChannel.from_string("nope") is None

    def test_configure(self, restore_logging):
        configure_logging(level="debug", format="json", channels=["rules", "bogus"], force=True)

        config = get_current_config()
        assert config["level"] == "DEBUG"
        assert config["format"] == "json"
        assert config["channels"] == ["RULES"]

    def test_environment(self, monkeypatch, restore_logging):
        monkeypatch.setenv("HTMLVAL_LOG_LEVEL", "verbose")
        monkeypatch.setenv("HTMLVAL_LOG_CHANNELS", "tree,document")

        configure_logging(force=True)

        config = get_current_config()
        assert config["level"] == "VERBOSE"
        assert sorted(config["channels"]) == ["DOCUMENT", "TREE"]


class TestLoggers:
    @pytest.mark.parametrize(
        "pass_name,channel",
        [
            ("p00_doctype", LogChannel.LEXER),
            ("p10_tag_balance", LogChannel.LEXER),
            ("p20_parse_tree", LogChannel.TREE),
            ("p30_document", LogChannel.DOCUMENT),
            ("p40_elements", LogChannel.RULES),
            ("p50_charset", LogChannel.DOCUMENT),
            ("p99_other", LogChannel.PIPELINE),
        ],
    )
    def test_pass_channels(self, pass_name, channel):
        log = get_pass_logger(pass_name)

        assert log.channel == channel
        assert log.pass_name == pass_name

    def test_filtered_channel_is_quiet(self, restore_logging):
        configure_logging(level="debug", channels=["lexer"], force=True)

        assert get_logger(LogChannel.LEXER)._should_log(LogLevel.DEBUG)
        assert not get_logger(LogChannel.RULES)._should_log(LogLevel.INFO)

"""Unit tests for logger configuration."""

import io
import logging

import pytest
from loguru import logger as _logger

from news_curator.config import LoggingConfig
from news_curator.logger import (
    InterceptHandler,
    get_logger,
    logger as app_logger,
    route_std_logging,
    setup_logger,
)


@pytest.fixture
def file_only(tmp_path) -> LoggingConfig:
    """Logging section writing only to a temporary file."""
    return LoggingConfig(
        console_enabled=False,
        file_enabled=True,
        file_path=str(tmp_path / "logs" / "curator.log"),
    )


@pytest.fixture
def capture():
    """Collect loguru output in memory."""
    output = io.StringIO()
    handler_id = _logger.add(output, format="{level} {extra[name]} {message}", level="DEBUG")
    yield output
    _logger.remove(handler_id)


class TestSetupLogger:
    """Tests for setup_logger function."""

    def test_writes_configured_file(self, file_only: LoggingConfig, tmp_path):
        """Test that the file sink uses the configured path."""
        setup_logger(config=file_only)
        _logger.info("Test message")
        _logger.remove()  # flushes the enqueued file sink

        content = (tmp_path / "logs" / "curator.log").read_text()
        assert "Test message" in content
        assert "INFO" in content

    def test_arguments_override_config(self, file_only: LoggingConfig, tmp_path):
        """Test that explicit arguments win over the config section."""
        override = tmp_path / "override.log"

        setup_logger(level="WARNING", log_file=str(override), config=file_only)
        _logger.info("quiet")
        _logger.warning("loud")
        _logger.remove()

        content = override.read_text()
        assert "loud" in content
        assert "quiet" not in content
        assert not (tmp_path / "logs" / "curator.log").exists()

    def test_file_sink_disabled(self, tmp_path):
        """Test that no file is created when file logging is off."""
        log_file = tmp_path / "never.log"
        config = LoggingConfig(console_enabled=False, file_enabled=False, file_path=str(log_file))

        setup_logger(config=config)
        _logger.info("not written")

        assert not log_file.exists()

    def test_routes_library_loggers(self, file_only: LoggingConfig):
        """Test that setup_logger intercepts httpx and werkzeug logging."""
        setup_logger(config=file_only)

        for name in ("httpx", "werkzeug"):
            std_logger = logging.getLogger(name)
            assert any(isinstance(h, InterceptHandler) for h in std_logger.handlers)
            assert std_logger.propagate is False
        _logger.remove()


class TestRouteStdLogging:
    """Tests for forwarding standard-library logging into loguru."""

    def test_forwards_records(self, capture):
        route_std_logging(["news_curator.test.std"], level="INFO")

        logging.getLogger("news_curator.test.std").warning("provider slow")

        assert "WARNING news_curator.test.std provider slow" in capture.getvalue()

    def test_respects_level(self, capture):
        route_std_logging(["news_curator.test.quiet"], level="WARNING")

        logging.getLogger("news_curator.test.quiet").info("chatty")

        assert "chatty" not in capture.getvalue()


class TestGetLogger:
    """Tests for get_logger."""

    def test_bound_name(self, capture):
        get_logger("news_curator.core").info("hello")
        assert "INFO news_curator.core hello" in capture.getvalue()

    def test_without_name(self):
        assert get_logger() is app_logger

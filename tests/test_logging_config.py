"""Tests for logging setup."""

import logging

from streetwise.logging_config import get_logger, setup_logging


class TestSetupLogging:
    """Tests for setup_logging."""

    def teardown_method(self):
        logging.basicConfig(level=logging.WARNING, force=True)

    def test_level_and_file(self, tmp_path):
        log_file = tmp_path / "logs" / "crawl.log"

        setup_logging(level="DEBUG", log_file=str(log_file))
        get_logger("streetwise.test").debug("hello from the crawler")

        assert logging.getLogger().level == logging.DEBUG
        assert "hello from the crawler" in log_file.read_text()

    def test_third_party_loggers_quieted(self):
        setup_logging(level="DEBUG")

        assert logging.getLogger("httpx").level == logging.WARNING
        assert logging.getLogger("playwright").level == logging.WARNING

    def test_unknown_level_defaults_to_info(self):
        setup_logging(level="chatty")

        assert logging.getLogger().level == logging.INFO

    def test_custom_quiet_loggers(self):
        logging.getLogger("streetwise.noisy").setLevel(logging.NOTSET)

        setup_logging(level="DEBUG", quiet_loggers=["streetwise.noisy"])

        assert logging.getLogger("streetwise.noisy").level == logging.WARNING

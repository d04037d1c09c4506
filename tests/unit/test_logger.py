"""Unit tests for logging setup."""

import json
import logging

from mediameta.config import LoggingConfig
from mediameta.utils.logger import get_logger, setup_logging


class TestSetupLogging:
    """Test structured logging configuration."""

    def test_json_logs_written_to_file(self, tmp_path):
        """Should write JSON log lines to the configured file."""
        log_file = tmp_path / "logs" / "mediameta.log"
        setup_logging(LoggingConfig(format="json", level="info", output=str(log_file)))

        get_logger("mediameta.test").info("Resolved metadata", file="a.jpg")

        line = log_file.read_text().strip().splitlines()[-1]
        entry = json.loads(line)
        assert entry["event"] == "Resolved metadata"
        assert entry["file"] == "a.jpg"
        assert entry["level"] == "info"

    def test_level_applied(self):
        """Should set the root logger level."""
        setup_logging(LoggingConfig(level="WARNING"))

        assert logging.getLogger().level == logging.WARNING

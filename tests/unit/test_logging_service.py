"""Tests for logging service configuration."""

import logging
from pathlib import Path

from src.services.config import reset_settings
from src.services.logging import get_log_level, setup_server_logging


class TestServerLogging:
    """Test server logging configuration."""

    def setup_method(self):
        """Save original handlers before each test."""
        self.root_logger = logging.getLogger()
        self.original_handlers = self.root_logger.handlers.copy()
        self.original_level = self.root_logger.level

    def teardown_method(self):
        """Restore original handlers after each test."""
        for handler in self.root_logger.handlers[:]:
            if handler not in self.original_handlers:
                handler.close()
            self.root_logger.removeHandler(handler)
        for handler in self.original_handlers:
            self.root_logger.addHandler(handler)
        self.root_logger.setLevel(self.original_level)

    def test_creates_log_directory(self, tmp_path: Path) -> None:
        log_file = tmp_path / "nested" / "server.log"

        setup_server_logging(str(log_file))

        assert log_file.parent.exists()

    def test_installs_stdout_and_file_handlers(self, tmp_path: Path) -> None:
        setup_server_logging(str(tmp_path / "server.log"))

        assert len(self.root_logger.handlers) == 2
        assert any(isinstance(h, logging.FileHandler) for h in self.root_logger.handlers)

    def test_level_from_environment(self, tmp_path: Path, monkeypatch) -> None:
        """LOG_LEVEL drives root and handler levels."""
        monkeypatch.setenv("LOG_LEVEL", "debug")
        reset_settings()

        setup_server_logging(str(tmp_path / "server.log"))

        assert get_log_level() == logging.DEBUG
        assert self.root_logger.level == logging.DEBUG
        assert all(handler.level == logging.DEBUG for handler in self.root_logger.handlers)

    def test_writes_formatted_lines_to_file(self, tmp_path: Path) -> None:
        log_file = tmp_path / "server.log"
        setup_server_logging(str(log_file))

        logging.getLogger("src.services.ledger_service").warning("Skipping receipt")
        for handler in self.root_logger.handlers:
            handler.flush()

        contents = log_file.read_text(encoding="utf-8")
        # [YYYY-MM-DD HH:MM:SS] name - LEVEL - message
        assert "[20" in contents
        assert "src.services.ledger_service - WARNING - Skipping receipt" in contents

    def test_repeated_setup_does_not_duplicate_handlers(self, tmp_path: Path) -> None:
        dummy_handler = logging.StreamHandler()
        self.root_logger.addHandler(dummy_handler)

        setup_server_logging(str(tmp_path / "server.log"))
        setup_server_logging(str(tmp_path / "server.log"))

        assert len(self.root_logger.handlers) == 2
        assert dummy_handler not in self.root_logger.handlers

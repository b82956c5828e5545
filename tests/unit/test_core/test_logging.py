"""Unit tests for logging configuration."""

from pathlib import Path

import pytest
from loguru import logger

from trade_school_api.core.logging import LOG_FILE_NAME, setup_logging


class TestLogging:
    """Tests for Loguru logging setup."""

    def test_setup_logging_does_not_raise(self) -> None:
        setup_logging("DEBUG")
        setup_logging("INFO")
        setup_logging("WARNING")

    def test_setup_logging_case_insensitive(self) -> None:
        setup_logging(" info ")
        setup_logging("debug")

    def test_unknown_level_rejected(self) -> None:
        with pytest.raises(ValueError):
            setup_logging("CHATTY")

    def test_file_sink(self, tmp_path: Path) -> None:
        log_dir = tmp_path / "logs"
        setup_logging("INFO", log_dir=str(log_dir))
        logger.info("school directory ready")
        setup_logging("INFO")  # removing the sink closes the file
        assert "school directory ready" in (log_dir / LOG_FILE_NAME).read_text()

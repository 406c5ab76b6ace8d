"""Tests for structured logging."""
from clinic_booking.logging_config import get_logger, setup_structured_logging


class TestStructuredLogging:
    def test_setup_configures_structlog(self):
        setup_structured_logging(log_level="INFO")
        logger = get_logger(__name__)

        assert hasattr(logger, "info")
        assert hasattr(logger, "warning")
        assert hasattr(logger, "error")

    def test_logger_accepts_context(self):
        setup_structured_logging(log_level="DEBUG")
        logger = get_logger(__name__)

        # These should not raise
        logger.info("reservation workflow transition", slot_id="slot-1", to="succeeded")
        logger.warning("loading slots failed", error="timeout")

    def test_unknown_level_falls_back(self):
        setup_structured_logging(log_level="verbose")

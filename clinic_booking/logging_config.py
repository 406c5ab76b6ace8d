"""Logging setup for the booking app.

Every module logs through ``get_logger(__name__)``; records come out as one
JSON object per line on stdout, which is what Streamlit's console shows.
"""
import logging
import sys

import structlog


def setup_structured_logging(log_level: str = "INFO"):
    """Route structlog through stdlib logging at ``log_level``.

    Called once per session from ``main._init_app_state``. An unknown level
    name falls back to INFO.
    """
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(ensure_ascii=False),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, log_level.upper(), logging.INFO),
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)

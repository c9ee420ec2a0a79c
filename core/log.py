"""
Logging for the report pipeline.

Events are structlog key/value pairs (`report_written`, `calendar_generate`,
...) routed through the standard library logger, so LOG_LEVEL filters them
and LOG_FORMAT=json gives one JSON object per line for log collectors.
"""

import logging
import sys
from typing import Optional

import structlog

from config import LOG_FORMAT, LOG_LEVEL


def configure_logging(level: Optional[str] = None, json: Optional[bool] = None) -> None:
    """Send structlog events to stdout at `level` (default config.LOG_LEVEL)."""
    level = (level or LOG_LEVEL).upper()
    if json is None:
        json = LOG_FORMAT == "json"

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=getattr(logging, level))

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer() if json else structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def ensure_logging() -> None:
    """Configure logging once for callers that did not do it themselves."""
    if not structlog.is_configured():
        configure_logging()


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)

"""DeckOracle - Shared Logging.

Loguru-based logging module with:
- Structured JSON logging for production
- Colored console output for development
- Request id correlation
- Sensitive field redaction
"""

from loguru import logger

from .config import (
    InterceptHandler,
    configure_third_party_loggers,
    get_logger,
    serialize_record,
    setup_logger,
)
from .event_logger import (
    log_export_completed,
    log_import_completed,
    log_import_failed,
    log_import_started,
)

__all__ = [
    "logger",
    "setup_logger",
    "get_logger",
    "serialize_record",
    "InterceptHandler",
    "configure_third_party_loggers",
    "log_import_started",
    "log_import_completed",
    "log_import_failed",
    "log_export_completed",
]

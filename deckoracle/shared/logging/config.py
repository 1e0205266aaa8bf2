"""DeckOracle - Logger Configuration.

Loguru-based logging configuration:
- Loguru for application logs (colored console or JSON lines)
- Intercept handler routing standard ``logging`` records into Loguru
- Request/trace id correlation from the request context variables
"""

from __future__ import annotations

import json
import logging
import re
import sys
from typing import TYPE_CHECKING, Any

from loguru import logger

from deckoracle.shared.context import get_request_id, get_trace_id

if TYPE_CHECKING:
    from deckoracle.core.config import Settings

NO_TRACE = "-"

SENSITIVE_PATTERNS = re.compile(
    r"(password|token|secret|credential|authorization)",
    re.IGNORECASE,
)

# Stable keys of a JSON log line; everything else in ``extra`` is appended
_BASE_KEYS = {"trace_id", "request_id", "name"}

_THIRD_PARTY_LOGGERS = (
    "",
    "uvicorn",
    "uvicorn.access",
    "uvicorn.error",
    "fastapi",
    "asyncpg",
    "aiosqlite",
    "sqlalchemy",
    "sqlalchemy.engine",
    "alembic",
)


def _get_settings() -> Settings:
    # Imported lazily: core.config is not needed to merely import this module
    from deckoracle.core.config import get_settings

    return get_settings()


class InterceptHandler(logging.Handler):
    """Redirect standard ``logging`` records to Loguru.

    Services and libraries (uvicorn, sqlalchemy) log through the standard
    module; this handler keeps all output in one Loguru format.
    """

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Walk past the logging module frames so file/line point at the caller
        frame = logging.currentframe()
        depth = 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def _context_patcher(record: dict[str, Any]) -> None:
    """Attach the current request and trace ids to every record."""
    record["extra"].setdefault("trace_id", get_trace_id() or NO_TRACE)
    record["extra"].setdefault("request_id", get_request_id() or NO_TRACE)


def _redact(key: str, value: Any) -> Any:
    if SENSITIVE_PATTERNS.search(key):
        return "***REDACTED***"
    return value


def serialize_record(record: dict[str, Any], service_name: str) -> str:
    """Render a Loguru record as one JSON line."""
    entry: dict[str, Any] = {
        "timestamp": record["time"].isoformat(),
        "level": record["level"].name,
        "message": record["message"],
        "module": record["extra"].get("name", record["name"]),
        "function": record["function"],
        "line": record["line"],
        "trace_id": record["extra"].get("trace_id", NO_TRACE),
        "request_id": record["extra"].get("request_id", NO_TRACE),
        "service": service_name,
    }

    for key, value in record["extra"].items():
        if key not in _BASE_KEYS:
            entry[key] = _redact(key, value)

    exc = record.get("exception")
    if exc:
        entry["exception"] = {
            "type": exc.type.__name__ if exc.type else None,
            "value": str(exc.value) if exc.value else None,
        }

    return json.dumps(entry, ensure_ascii=False, default=str)


def _create_json_sink(service_name: str) -> Any:
    def json_sink(message: Any) -> None:
        sys.stdout.write(serialize_record(message.record, service_name) + "\n")
        sys.stdout.flush()

    return json_sink


def setup_logger() -> None:
    """Configure Loguru.

    Console output with colors in development, JSON lines when
    ``LOG_FORMAT=json``. Standard-library loggers are intercepted.
    """
    settings = _get_settings()

    logger.remove()
    logger.configure(patcher=_context_patcher)

    is_json = settings.logging.format.lower() == "json"
    level = settings.logging.level.upper()

    if is_json:
        logger.add(
            _create_json_sink(settings.app.name),
            level=level,
            backtrace=True,
            diagnose=False,
            enqueue=True,
        )
    else:
        dev_format = (
            "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
            "<level>{message}</level> | "
            "<dim>request_id={extra[request_id]}</dim>"
        )
        logger.add(
            sys.stdout,
            format=dev_format,
            level=level,
            colorize=True,
            backtrace=True,
            diagnose=settings.app.debug,
            enqueue=True,
        )

    configure_third_party_loggers(quiet=is_json)

    logger.info(
        "Logger configured",
        level=settings.logging.level,
        format="json" if is_json else "console",
    )


def configure_third_party_loggers(quiet: bool = False) -> None:
    """Route library loggers through Loguru and tame their verbosity."""
    logging.root.handlers = []
    logging.root.setLevel(logging.INFO)

    for logger_name in _THIRD_PARTY_LOGGERS:
        std_logger = logging.getLogger(logger_name)
        std_logger.handlers = [InterceptHandler()]
        std_logger.propagate = False

        if logger_name in ("uvicorn.access", "asyncpg", "aiosqlite"):
            std_logger.setLevel(logging.WARNING if quiet else logging.INFO)
        elif logger_name.startswith("sqlalchemy"):
            std_logger.setLevel(logging.WARNING)
        else:
            std_logger.setLevel(logging.INFO)


def get_logger(name: str):
    """Loguru logger bound to a module name."""
    return logger.bind(name=name)

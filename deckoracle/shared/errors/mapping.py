"""Mapping of storage errors to domain errors."""

import logging
from collections.abc import Callable
from typing import Any

from sqlalchemy.exc import DatabaseError, IntegrityError, OperationalError

from .base import AppError
from .domain import ConflictError, ServiceUnavailableError, ValidationError

logger = logging.getLogger(__name__)

Handler = Callable[[Any, str], AppError]


class ExceptionMapper:
    """Registry of technical exception -> domain exception handlers."""

    _handlers: dict[type[Exception], Handler] = {}

    @classmethod
    def register(cls, *exception_types: type[Exception]) -> Callable[[Handler], Handler]:
        """Register a handler for the given exception types.

        Usage:
            @ExceptionMapper.register(IntegrityError)
            def _handle_integrity_error(exc: IntegrityError, func_name: str) -> AppError:
                return ConflictError(message="Record already exists")
        """

        def decorator(handler: Handler) -> Handler:
            for exc_type in exception_types:
                cls._handlers[exc_type] = handler
            return handler

        return decorator

    @classmethod
    def map(cls, exc: Exception, func_name: str = "") -> AppError:
        """Map a technical exception to a domain exception.

        Exact type matches win over base-class matches; anything unknown
        becomes a generic ``AppError`` (500).
        """
        handler = cls._handlers.get(type(exc))

        if handler is None:
            for exc_type, exc_handler in cls._handlers.items():
                if isinstance(exc, exc_type):
                    handler = exc_handler
                    break

        if handler:
            return handler(exc, func_name)

        logger.error(
            "Unhandled exception in %s: %s",
            func_name,
            type(exc).__name__,
            exc_info=exc,
        )
        return AppError(
            message="Internal server error",
            details={"function": func_name} if func_name else {},
        )


@ExceptionMapper.register(IntegrityError)
def _handle_integrity_error(exc: IntegrityError, func_name: str) -> AppError:
    """Database: integrity constraint violation."""
    err_msg = str(exc).lower()
    if "unique" in err_msg or "duplicate" in err_msg:
        return ConflictError(
            message="Record already exists",
            details={"constraint": "unique"},
        )
    if "foreign key" in err_msg:
        return ValidationError(
            message="Related record not found",
            details={"constraint": "foreign_key"},
        )
    return ValidationError(message="Database constraint violation")


@ExceptionMapper.register(OperationalError, DatabaseError)
def _handle_database_error(exc: Exception, func_name: str) -> AppError:
    """Database: connection or operational error."""
    logger.error("Database error in %s: %s", func_name, exc)
    return ServiceUnavailableError(
        message="Database temporarily unavailable",
        details={"service": "database"},
    )

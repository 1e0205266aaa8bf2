"""Shared errors package.

Error hierarchy, infrastructure exception mapping and FastAPI handlers.
"""

from deckoracle.shared.context import trace_id_var

from .base import AppError
from .decorators import safe
from .domain import (
    AuthenticationError,
    BadRequestError,
    ConflictError,
    NotFoundError,
    ServiceUnavailableError,
    ValidationError,
)
from .handlers import setup_exception_handlers
from .mapping import ExceptionMapper
from .schemas import ErrorDetail, ErrorResponse

__all__ = [
    "AppError",
    "NotFoundError",
    "ConflictError",
    "ValidationError",
    "AuthenticationError",
    "ServiceUnavailableError",
    "BadRequestError",
    "ExceptionMapper",
    "safe",
    "setup_exception_handlers",
    "trace_id_var",
    "ErrorDetail",
    "ErrorResponse",
]

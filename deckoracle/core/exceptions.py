"""
Application exception catalog.

Domain exceptions used across the API and the transfer engine. All of them
derive from the shared ``AppError`` hierarchy so the registered FastAPI
handlers render them as ``ErrorResponse`` bodies.
"""

from http import HTTPStatus

from deckoracle.shared.errors import (
    AppError,
    AuthenticationError,
    BadRequestError,
    ConflictError,
    ExceptionMapper,
    NotFoundError,
    ServiceUnavailableError,
    ValidationError,
    safe,
    setup_exception_handlers,
    trace_id_var,
)

__all__ = [
    "AppError",
    # Authentication
    "AuthenticationError",
    "TokenExpiredError",
    "TokenInvalidError",
    # Resources
    "NotFoundError",
    "DeckNotFoundError",
    "FolderNotFoundError",
    # Validation
    "ValidationError",
    "InvalidInputError",
    "BadRequestError",
    "UnsupportedFormatError",
    "PayloadTooLargeError",
    # Conflicts
    "ConflictError",
    "DuplicateDeckError",
    # Infrastructure
    "ServiceUnavailableError",
    # Helpers
    "ExceptionMapper",
    "safe",
    "setup_exception_handlers",
    "trace_id_var",
]


# ==================== Authentication exceptions ====================


class TokenExpiredError(AuthenticationError):
    """Token has expired."""

    code = "TOKEN_EXPIRED"


class TokenInvalidError(AuthenticationError):
    """Invalid token."""

    code = "TOKEN_INVALID"


# ==================== Resource exceptions ====================


class DeckNotFoundError(NotFoundError):
    """Deck not found."""

    code = "DECK_NOT_FOUND"


class FolderNotFoundError(NotFoundError):
    """Folder not found."""

    code = "FOLDER_NOT_FOUND"


# ==================== Validation exceptions ====================


class InvalidInputError(ValidationError):
    """Invalid input data."""

    code = "INVALID_INPUT"


class UnsupportedFormatError(BadRequestError):
    """Unsupported import/export format."""

    code = "UNSUPPORTED_FORMAT"


class PayloadTooLargeError(AppError):
    """Uploaded file is too large."""

    status_code = HTTPStatus.REQUEST_ENTITY_TOO_LARGE
    code = "PAYLOAD_TOO_LARGE"


# ==================== Conflict exceptions ====================


class DuplicateDeckError(ConflictError):
    """Deck with this title already exists."""

    code = "DUPLICATE_DECK"

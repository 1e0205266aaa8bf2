"""Standard domain error types shared by every module."""

from .base import AppError


class NotFoundError(AppError):
    """Resource not found."""

    status_code = 404


class ConflictError(AppError):
    """Resource conflict or duplicate."""

    status_code = 409


class ValidationError(AppError):
    """Input validation error."""

    status_code = 422


class AuthenticationError(AppError):
    """Authentication required or failed."""

    status_code = 401


class ServiceUnavailableError(AppError):
    """Storage is unavailable."""

    status_code = 503


class BadRequestError(AppError):
    """Malformed or invalid request."""

    status_code = 400

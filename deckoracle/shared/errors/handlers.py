"""Exception handlers for FastAPI.

Every error leaves the API as an ``ErrorResponse`` body with an
``X-Error-Code`` header.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from deckoracle.shared.context import trace_id_var

from .base import AppError
from .schemas import ErrorResponse

logger = logging.getLogger(__name__)


def _error_response(status_code: int, body: ErrorResponse) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(mode="json"),
        headers={"X-Error-Code": body.error},
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """Register exception handlers in the FastAPI application.

    Handles, in order of specificity: business errors (``AppError``),
    request validation errors, Starlette HTTP errors and finally any
    unexpected exception (generic 500, traceback logged).
    """

    @app.exception_handler(AppError)
    async def app_exception_handler(request: Request, exc: AppError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        return _error_response(exc.status_code, exc.to_response())

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        body = ErrorResponse(
            error="VALIDATION_ERROR",
            message="Input validation error",
            details={"errors": exc.errors()},
            trace_id=trace_id_var.get(),
        )
        return _error_response(422, body)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        body = ErrorResponse(
            error=f"HTTP_{exc.status_code}",
            message=str(exc.detail),
            trace_id=trace_id_var.get(),
        )
        return _error_response(exc.status_code, body)

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
        body = ErrorResponse(
            error="INTERNAL_SERVER_ERROR",
            message="Internal server error",
            trace_id=trace_id_var.get(),
        )
        return _error_response(500, body)

"""
Middleware для обработки запросов.
"""

import time
import uuid
from collections.abc import Awaitable, Callable

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware

from deckoracle.shared.context import request_id_var, trace_id_var
from deckoracle.shared.logging import get_logger

from .config import settings

logger = get_logger(__name__)


class RequestTracingMiddleware(BaseHTTPMiddleware):
    """Middleware для трейсинга и логирования запросов.

    Присваивает каждому запросу request ID (из ``X-Request-ID`` или новый),
    кладет его в контекстные переменные и возвращает в заголовке ответа.
    """

    SKIP_LOG_ENDPOINTS: set[str] = {
        "/observability/health",
        "/observability/ready",
        "/observability/live",
    }

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        trace_id = request.headers.get("X-Trace-ID") or request_id
        request.state.request_id = request_id

        request_token = request_id_var.set(request_id)
        trace_token = trace_id_var.set(trace_id)
        start_time = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception:
            logger.exception(
                f"{request.method} {request.url.path} failed",
                method=request.method,
                path=request.url.path,
                duration_ms=round((time.perf_counter() - start_time) * 1000, 2),
            )
            raise
        finally:
            request_id_var.reset(request_token)
            trace_id_var.reset(trace_token)

        response.headers["X-Request-ID"] = request_id
        response.headers["X-Trace-ID"] = trace_id
        self._log_request(request, response, time.perf_counter() - start_time, request_id)
        return response

    def _log_request(
        self,
        request: Request,
        response: Response,
        duration: float,
        request_id: str,
    ) -> None:
        if request.url.path in self.SKIP_LOG_ENDPOINTS:
            return

        log_level = "INFO"
        if response.status_code >= 500:
            log_level = "ERROR"
        elif response.status_code >= 400:
            log_level = "WARNING"

        logger.log(
            log_level,
            f"{request.method} {request.url.path}",
            request_id=request_id,
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            duration_ms=round(duration * 1000, 2),
        )


def setup_middleware(app: FastAPI) -> None:
    """Настроить middleware приложения.

    Порядок важен: последний добавленный выполняется первым.
    """
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.app.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["Content-Disposition", "X-Request-ID", "X-Error-Code"],
    )
    app.add_middleware(RequestTracingMiddleware)

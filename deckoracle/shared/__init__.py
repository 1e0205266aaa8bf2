"""
Shared module - cross-cutting concerns.

- Context variables for request/trace IDs
- Loguru logging and structured transfer events
- Error hierarchy (``shared.errors``)
- ORM mixins and UUID7 keys
"""

from .context import (
    get_request_id,
    get_trace_id,
    request_id_var,
    set_request_id,
    set_trace_id,
    trace_id_var,
)
from .logging import get_logger, logger, setup_logger

__all__ = [
    "get_request_id",
    "get_trace_id",
    "request_id_var",
    "set_request_id",
    "set_trace_id",
    "trace_id_var",
    "logger",
    "setup_logger",
    "get_logger",
]

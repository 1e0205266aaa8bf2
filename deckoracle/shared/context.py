"""
Context variables for request tracing.

The tracing middleware fills them per request; the error handlers and the
structured event logger read them without receiving the request object.
"""

from contextvars import ContextVar

trace_id_var: ContextVar[str] = ContextVar("trace_id", default="")
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def get_trace_id() -> str:
    """Get current trace ID, or an empty string outside a request."""
    return trace_id_var.get()


def get_request_id() -> str:
    """Get current request ID, or an empty string outside a request."""
    return request_id_var.get()


def set_trace_id(trace_id: str) -> None:
    trace_id_var.set(trace_id)


def set_request_id(request_id: str) -> None:
    request_id_var.set(request_id)

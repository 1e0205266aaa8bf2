"""Decorators for error handling at the service layer."""

from collections.abc import Callable
from functools import wraps
from inspect import iscoroutinefunction
from typing import Never, ParamSpec, TypeVar

from .base import AppError
from .mapping import ExceptionMapper

P = ParamSpec("P")
T = TypeVar("T")


def safe(func: Callable[P, T]) -> Callable[P, T]:
    """Map infrastructure exceptions raised by ``func`` to domain errors.

    Usage:
        @safe
        async def import_deck(...) -> ImportResult:
            # AppError subclasses pass through unchanged
            # IntegrityError, OperationalError, ... -> ConflictError, ...
            ...

    Works with both sync and async functions.
    """

    def _reraise(e: Exception, func_name: str) -> Never:
        if isinstance(e, AppError):
            raise e
        raise ExceptionMapper.map(e, func_name) from e

    if iscoroutinefunction(func):

        @wraps(func)
        async def async_wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
            try:
                return await func(*args, **kwargs)
            except Exception as e:
                _reraise(e, func.__name__)

        return async_wrapper  # type: ignore[return-value]

    @wraps(func)
    def sync_wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
        try:
            return func(*args, **kwargs)
        except Exception as e:
            _reraise(e, func.__name__)

    return sync_wrapper

"""Decorators for error handling.

Function wrappers that turn foreign exceptions into chained application errors.
"""

from collections.abc import Callable
from functools import wraps
from inspect import iscoroutinefunction
from typing import ParamSpec, TypeVar

from .base import BaseError
from .mapping import ExceptionMapper

P = ParamSpec("P")
T = TypeVar("T")


def safe(func: Callable[P, T]) -> Callable[P, T]:
    """Chain foreign exceptions raised by ``func`` into application errors.

    Usage:
        @safe
        async def load_profile(member_id: int) -> Profile:
            ...

    An application error raised inside ``func`` propagates unchanged. Any
    other exception is handed to ``ExceptionMapper``; the mapped error is
    raised with the original as both its ``cause`` and ``__cause__``, so the
    full chain reaches the handler and the log. Nothing is swallowed.
    """

    if iscoroutinefunction(func):

        @wraps(func)
        async def async_wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
            try:
                return await func(*args, **kwargs)
            except BaseError:
                raise
            except Exception as e:
                raise ExceptionMapper.map(e, func.__name__) from e

        return async_wrapper  # type: ignore[return-value]

    @wraps(func)
    def sync_wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
        try:
            return func(*args, **kwargs)
        except BaseError:
            raise
        except Exception as e:
            raise ExceptionMapper.map(e, func.__name__) from e

    return sync_wrapper  # type: ignore[return-value]

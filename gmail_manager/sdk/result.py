"""Operation outcomes for the SDK.

Every mailbox and credential operation returns a Result instead of raising.
A failed Result still carries the operation's documented empty value
([], None or False) so callers that only read ``value`` behave the same way
as callers that check ``ok``.
"""

import copy
import logging
from dataclasses import dataclass
from functools import wraps
from typing import Any, Callable, Generic, Optional, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Result(Generic[T]):
    ok: bool
    value: T
    error: Optional[str] = None

    @classmethod
    def success(cls, value: T) -> "Result[T]":
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, reason: str, value: T = None) -> "Result[T]":
        return cls(ok=False, value=value, error=reason)

    def __bool__(self) -> bool:
        return self.ok


def api_operation(description: str, empty: Any, logger: logging.Logger) -> Callable:
    """
    Decorator converting a raising operation into one returning a Result.

    The wrapped function returns its plain value on success. Any exception is
    logged as "Error <description>: ..." and turned into a failed Result whose
    value is a fresh copy of `empty`.
    """
    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return Result.success(func(*args, **kwargs))
            except Exception as e:
                logger.error(f"Error {description}: {e}")
                return Result.failure(str(e), copy.copy(empty))
        return wrapper
    return decorator

"""Programmer-misuse errors for the container types.

Domain failures (absence, error payloads) are values, never exceptions. The
types here cover the other category: constructing a container around ``None``
or handing a combinator something that is not a usable function. These are
defects in the caller and are raised immediately.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Callable, Self, TypeVar

from pydantic import BaseModel, ConfigDict

T = TypeVar("T")


class ErrorCode(StrEnum):
    """Standard codes for misuse and verification failures."""
    INVALID_ARGUMENT = "INVALID_ARGUMENT"
    INVALID_FUNCTION = "INVALID_FUNCTION"
    LAW_VIOLATION = "LAW_VIOLATION"


class MisuseDetail(BaseModel):
    """Structured description of a misuse: which operation, which argument, why."""

    model_config = ConfigDict(frozen=True)

    operation: str
    argument: str
    message: str
    code: ErrorCode = ErrorCode.INVALID_ARGUMENT

    @classmethod
    def create(
        cls,
        operation: str,
        argument: str,
        message: str,
        code: ErrorCode = ErrorCode.INVALID_ARGUMENT,
    ) -> Self:
        """Factory method for construction."""
        return cls(operation=operation, argument=argument, message=message, code=code)

    def render(self) -> str:
        """Format as ``operation(argument): message [CODE]``."""
        return f"{self.operation}({self.argument}): {self.message} [{self.code}]"

    __str__ = render


class MisuseError(Exception):
    """Base exception wrapping a MisuseDetail."""

    code: ErrorCode = ErrorCode.INVALID_ARGUMENT

    def __init__(self, detail: MisuseDetail) -> None:
        self.detail = detail
        super().__init__(detail.render())

    @classmethod
    def create(cls, operation: str, argument: str, message: str) -> Self:
        """Create with the code matching the exception class."""
        return cls(MisuseDetail.create(operation, argument, message, cls.code))


class InvalidArgument(MisuseError, ValueError):
    """A payload that cannot be represented, e.g. ``Present(None)``."""

    code = ErrorCode.INVALID_ARGUMENT


class InvalidFunction(MisuseError, TypeError):
    """A combinator argument that is not callable, or returned the wrong container."""

    code = ErrorCode.INVALID_FUNCTION


# ═════════════════════════════════════════════════════════════════════════════
# Guards
# ═════════════════════════════════════════════════════════════════════════════


def require_value(value: T | None, operation: str, argument: str = "value") -> T:
    """Reject ``None`` payloads at construction time."""
    if value is None:
        raise InvalidArgument.create(operation, argument, "payload has to be some value, not None")
    return value


def require_callable(fn: Callable[..., T] | None, operation: str, argument: str = "f") -> Callable[..., T]:
    """Reject missing or non-callable transformation functions."""
    if fn is None or not callable(fn):
        raise InvalidFunction.create(operation, argument, f"expected a callable, got {type(fn).__name__}")
    return fn

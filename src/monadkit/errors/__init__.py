"""Error handling for monadkit.

- ErrorCode: Standard codes for misuse and law violations
- MisuseDetail/MisuseError: Structured programmer-misuse errors
- InvalidArgument/InvalidFunction: Raised by constructors and combinators
- require_value/require_callable: Guards used at construction and call time
"""

from .errors import (
    ErrorCode,
    InvalidArgument,
    InvalidFunction,
    MisuseDetail,
    MisuseError,
    require_callable,
    require_value,
)

__all__ = [
    "ErrorCode", "MisuseDetail", "MisuseError",
    "InvalidArgument", "InvalidFunction",
    "require_value", "require_callable",
]

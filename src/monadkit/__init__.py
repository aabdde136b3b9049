"""monadkit - lawful Option, Result and Identity containers for Python.

Generic, immutable, exhaustively matchable containers with the combinators
that make them functors and monads, plus a harness that checks the laws.

Quick Start:
    >>> from monadkit import Success, Failure, Present, Absent, compose
    >>>
    >>> def parse(s: str):
    ...     return Success(int(s)) if s.isdigit() else Failure(f"not a number: {s}")
    >>>
    >>> parse("21").map(lambda n: n * 2)
    Success(42)
    >>> parse("x").bind(lambda n: Success(n + 1))
    Failure('not a number: x')

Pattern Matching:
    >>> match parse("7"):
    ...     case Success(n): print(n)
    ...     case Failure(e): print(e)
    7

Law Verification:
    >>> from monadkit.laws import RESULT, assert_lawful
    >>> assert_lawful(RESULT, trials=50).ok
    True
"""

from __future__ import annotations

__version__ = "0.1.0"

# Containers & combinators
from .monads import (
    ALL,
    ANY,
    CONCAT,
    PRODUCT,
    SUM,
    Absent,
    Failure,
    Identity,
    Monoid,
    Option,
    Present,
    Result,
    Success,
    attempt,
    collect_results,
    compose,
    do,
    from_optional,
    select_many,
    sequence,
    sequence_options,
    traverse,
    traverse_options,
)

# Errors
from .errors import ErrorCode, InvalidArgument, InvalidFunction, MisuseDetail, MisuseError

# Settings
from .config import get_settings

# Logging
from .observability import configure_logging, get_logger

__all__ = [
    "__version__",
    # Containers
    "Identity", "Option", "Present", "Absent", "from_optional",
    "Result", "Success", "Failure", "attempt",
    # Combinators
    "compose", "select_many", "do",
    "sequence", "traverse", "collect_results", "sequence_options", "traverse_options",
    # Monoids
    "Monoid", "SUM", "PRODUCT", "ANY", "ALL", "CONCAT",
    # Errors
    "ErrorCode", "MisuseDetail", "MisuseError", "InvalidArgument", "InvalidFunction",
    # Settings & logging
    "get_settings", "configure_logging", "get_logger",
]

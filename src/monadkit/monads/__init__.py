"""Lawful container types and their combinators.

Provides:
- Option (Present | Absent): zero or one value
- Result (Success | Failure): exactly one of two outcomes
- Identity: the single-case reference monad
- compose/select_many: Kleisli composition and projection
- do: generator-based sequential binding
- Monoid: associative combine with identity

Example:
    >>> from monadkit.monads import Success, Failure, Result
    >>>
    >>> def divide(a: int, b: int) -> Result[float, str]:
    ...     return Failure("division by zero") if b == 0 else Success(a / b)
    >>>
    >>> divide(10, 2).map(lambda x: x * 2).bind(lambda x: Success(x + 1))
    Success(11.0)
"""

from .compose import compose, select_many
from .do import do
from .identity import Identity
from .monoid import ALL, ANY, CONCAT, PRODUCT, SUM, Monoid
from .option import Absent, Option, Present, from_optional, sequence_options, traverse_options
from .result import Failure, Result, Success, attempt, collect_results, sequence, traverse

__all__ = [
    # Containers
    "Identity",
    "Option", "Present", "Absent", "from_optional",
    "Result", "Success", "Failure", "attempt",
    # Combinators
    "compose", "select_many", "do",
    # Collection operations
    "sequence", "traverse", "collect_results",
    "sequence_options", "traverse_options",
    # Monoids
    "Monoid", "SUM", "PRODUCT", "ANY", "ALL", "CONCAT",
]

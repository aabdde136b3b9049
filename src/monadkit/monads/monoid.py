"""Monoids: an associative binary operation with an identity element.

    >>> SUM.fold([1, 2, 3])
    6
    >>> ANY.combine(False, ANY.identity)
    False
"""

from __future__ import annotations

import operator
from dataclasses import dataclass
from functools import reduce
from typing import TYPE_CHECKING, Callable, Generic, TypeVar

from ..errors import require_callable

if TYPE_CHECKING:
    from collections.abc import Iterable

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Monoid(Generic[T]):
    """A set closed under ``combine``, with ``identity`` as two-sided unit."""

    name: str
    identity: T
    combine: Callable[[T, T], T]

    def __post_init__(self) -> None:
        require_callable(self.combine, f"Monoid({self.name})", "combine")

    def fold(self, values: Iterable[T]) -> T:
        """Combine all values left to right, starting from identity."""
        return reduce(self.combine, values, self.identity)


SUM: Monoid[int] = Monoid("sum", 0, operator.add)
PRODUCT: Monoid[int] = Monoid("product", 1, operator.mul)
ANY: Monoid[bool] = Monoid("any", False, operator.or_)
ALL: Monoid[bool] = Monoid("all", True, operator.and_)
CONCAT: Monoid[str] = Monoid("concat", "", operator.add)

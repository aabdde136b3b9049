"""Hypothesis strategies for the law harness.

Sizes and NaN generation default to ``MONADKIT_LAWS_*`` settings, resolved
when the strategy is built.
"""

from __future__ import annotations

import math
import string
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Callable, Generic, TypeVar

from hypothesis import strategies as st
from hypothesis.strategies import SearchStrategy

from ..config import get_settings

T = TypeVar("T")
U = TypeVar("U")

Strategy = SearchStrategy


@dataclass(frozen=True, slots=True)
class Named(Generic[T, U]):
    """A pure function with a readable name, so counterexamples can be reported."""

    name: str
    fn: Callable[[T], U]

    def __call__(self, x: T) -> U:
        return self.fn(x)

    def __repr__(self) -> str:
        return self.name


def integers(lo: int = -1000, hi: int = 1000) -> SearchStrategy[int]:
    return st.integers(min_value=lo, max_value=hi)


def booleans() -> SearchStrategy[bool]:
    return st.booleans()


def floats(lo: float = -1e6, hi: float = 1e6, *, allow_nan: bool | None = None) -> SearchStrategy[float]:
    """Bounded floats; with allow_nan, NaN is drawn as well."""
    bounded = st.floats(min_value=lo, max_value=hi)
    nan = get_settings().laws.allow_nan if allow_nan is None else allow_nan
    return st.one_of(bounded, st.just(math.nan)) if nan else bounded


def text(max_size: int | None = None, alphabet: str = string.ascii_letters + string.digits + " ") -> SearchStrategy[str]:
    return st.text(alphabet, max_size=max_size if max_size is not None else get_settings().laws.max_size)


def lists(elements: SearchStrategy[T], max_size: int | None = None) -> SearchStrategy[list[T]]:
    return st.lists(elements, max_size=max_size if max_size is not None else get_settings().laws.max_size)


def sampled_from(items: Sequence[T]) -> SearchStrategy[T]:
    """Raises ValueError for an empty pool instead of silently drawing nothing."""
    if not items:
        raise ValueError("sampled_from requires at least one item")
    return st.sampled_from(items)


def one_of(*strategies: SearchStrategy[T]) -> SearchStrategy[T]:
    return st.one_of(*strategies)


# ═════════════════════════════════════════════════════════════════════════════
# Function Pools
# ═════════════════════════════════════════════════════════════════════════════

INT_FUNCTIONS: tuple[Named[int, int], ...] = (
    Named("x + 1", lambda x: x + 1),
    Named("x * 2", lambda x: x * 2),
    Named("x - 7", lambda x: x - 7),
    Named("-x", lambda x: -x),
    Named("x * x", lambda x: x * x),
    Named("x // 3", lambda x: x // 3),
    Named("abs(x)", abs),
    Named("x % 5", lambda x: x % 5),
)

INT_PREDICATES: tuple[Named[int, bool], ...] = (
    Named("always", lambda x: True),
    Named("never", lambda x: False),
    Named("even", lambda x: x % 2 == 0),
    Named("positive", lambda x: x > 0),
    Named("x % 3 != 0", lambda x: x % 3 != 0),
)


def _chain(fns: list[Named[int, int]]) -> Named[int, int]:
    if len(fns) == 1:
        return fns[0]

    def run(x: int) -> int:
        for fn in fns:
            x = fn(x)
        return x
    return Named(" ∘ ".join(reversed([fn.name for fn in fns])), run)


def pure_functions(depth: int = 2) -> SearchStrategy[Named[int, int]]:
    """Total int → int functions: a pool member, or a composition of up to ``depth`` members."""
    return st.lists(st.sampled_from(INT_FUNCTIONS), min_size=1, max_size=depth).map(_chain)


def predicates() -> SearchStrategy[Named[int, bool]]:
    return sampled_from(INT_PREDICATES)

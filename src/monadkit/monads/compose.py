"""Kleisli composition and projection over any container with ``bind``.

Works uniformly for Option, Result and Identity:

    >>> from monadkit.monads import Present, Absent
    >>> half = lambda n: Present(n // 2) if n % 2 == 0 else Absent()
    >>> compose(half, half)(12)
    Present(3)
    >>> compose(half, half)(6)
    Absent()
"""

from __future__ import annotations

from functools import reduce
from typing import Any, Callable, TypeVar

from ..errors import require_callable

A = TypeVar("A")
B = TypeVar("B")
C = TypeVar("C")

Kleisli = Callable[[Any], Any]


def _compose2(f: Kleisli, g: Kleisli) -> Kleisli:
    def composed(x: Any) -> Any:
        return f(x).bind(g)
    return composed


def compose(f: Callable[[A], Any], g: Callable[[B], Any], *more: Kleisli) -> Callable[[A], Any]:
    """Kleisli composition: ``x => f(x).bind(g)``, folded left over ``more``.

    Type signature: (A → M[B], B → M[C], ...) → (A → M[C])

    Associative, with the container's unit (Present, Success, Identity.pure)
    as two-sided identity.
    """
    fns = (f, g, *more)
    for i, fn in enumerate(fns):
        require_callable(fn, "compose", f"fns[{i}]")
    return reduce(_compose2, fns)


def select_many(source: Any, k: Callable[[A], Any], s: Callable[[A, B], C]) -> Any:
    """Bind with a result projection that sees both the outer and inner values.

    ``source.bind(x => k(x).map(y => s(x, y)))``

    Example:
        >>> from monadkit.monads import Success
        >>> select_many(Success(2), lambda x: Success(x * 10), lambda x, y: x + y)
        Success(22)
    """
    require_callable(k, "select_many", "k")
    require_callable(s, "select_many", "s")
    return source.bind(lambda x: k(x).map(lambda y: s(x, y)))

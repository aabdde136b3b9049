"""Generator-based sequential binding ("do-notation").

Python has no query/for-comprehension syntax over monads, so a generator
stands in for it: each ``yield`` binds a container and receives its payload.

    >>> from monadkit.monads import Success, Failure
    >>> @do(Success)
    ... def total(a, b):
    ...     x = yield Success(a)
    ...     y = yield (Success(b) if b else Failure("zero"))
    ...     return x + y
    >>> total(1, 2)
    Success(3)
    >>> total(1, 0)
    Failure('zero')

The chain is left-biased: the first Absent/Failure yielded is returned as is,
the generator is closed, and no later stage runs.
"""

from __future__ import annotations

from functools import wraps
from typing import Any, Callable, Generator, ParamSpec, TypeVar

from ..errors import InvalidFunction, require_callable

P = ParamSpec("P")
T = TypeVar("T")

DoBlock = Callable[P, Generator[Any, Any, T]]


def do(unit: Callable[[T], Any]) -> Callable[[DoBlock[P, T]], Callable[P, Any]]:
    """Turn a generator function into a chain of binds.

    Args:
        unit: Wraps the generator's return value (Success, Present, Identity).

    Every yielded value must be a container that iterates over zero or one
    payload, which all containers in this package do.
    """
    require_callable(unit, "do", "unit")

    def decorator(block: DoBlock[P, T]) -> Callable[P, Any]:
        @wraps(block)
        def run(*args: P.args, **kwargs: P.kwargs) -> Any:
            gen = block(*args, **kwargs)
            try:
                container = next(gen)
                while True:
                    if not hasattr(container, "bind"):
                        raise InvalidFunction.create(block.__name__, "yield", f"expected a container, got {type(container).__name__}")
                    for payload in container:
                        break
                    else:
                        gen.close()
                        return container
                    container = gen.send(payload)
            except StopIteration as stop:
                return unit(stop.value)
        return run

    return decorator

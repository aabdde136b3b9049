"""Option monad: zero or one value.

``Option[T]`` is the closed union ``Present[T] | Absent[T]``:
- Functor: map
- Monad: bind (flat_map / and_then), flatten
- Exhaustive extraction: match, or structural pattern matching

``Present`` never wraps ``None``; absence is expressed only by ``Absent``.
Use ``from_optional`` to lift a nullable value.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Generic, TypeVar, Union, final

from ..errors import InvalidFunction, require_callable, require_value

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from .result import Result

T = TypeVar("T")
U = TypeVar("U")
E = TypeVar("E")


@final
@dataclass(frozen=True, slots=True, eq=False, repr=False)
class Present(Generic[T]):
    """The case holding a value.

    Examples:
        >>> Present(4).map(lambda x: x + 1)
        Present(5)
        >>> Present(4).bind(lambda x: Absent() if x > 3 else Present(x))
        Absent()

    Raises:
        InvalidArgument: If value is None
    """

    value: T

    def __post_init__(self) -> None:
        require_value(self.value, "Present")

    # ─── Type Checking ─────────────────────────────────────────────────

    def is_present(self) -> bool:
        return True

    def is_absent(self) -> bool:
        return False

    # ─── Functor / Monad ───────────────────────────────────────────────

    def map(self, f: Callable[[T], U]) -> Option[U]:
        """Apply f to the value. Signature: Option[T] → (T→U) → Option[U]"""
        return Present(require_callable(f, "Present.map")(self.value))

    def bind(self, f: Callable[[T], Option[U]]) -> Option[U]:
        """Monadic bind (>>=): return f(value) without re-wrapping it."""
        out = require_callable(f, "Present.bind")(self.value)
        if not isinstance(out, (Present, Absent)):
            raise InvalidFunction.create("Present.bind", "f", f"expected an Option, got {type(out).__name__}")
        return out

    flat_map = bind
    and_then = bind

    def flatten(self: Present[Option[U]]) -> Option[U]:
        """Option[Option[U]] → Option[U]"""
        return self.bind(lambda inner: inner)

    join = flatten

    def filter(self, predicate: Callable[[T], bool]) -> Option[T]:
        """Keep the value only if predicate holds."""
        return self if require_callable(predicate, "Present.filter", "predicate")(self.value) else Absent()

    # ─── Extraction ────────────────────────────────────────────────────

    def match(self, *, on_present: Callable[[T], U], on_absent: Callable[[], U]) -> U:
        """Exhaustive case analysis. Both handlers are required."""
        require_callable(on_absent, "Present.match", "on_absent")
        return require_callable(on_present, "Present.match", "on_present")(self.value)

    def unwrap_or(self, default: T) -> T:
        return self.value

    def unwrap_or_else(self, f: Callable[[], T]) -> T:
        return self.value

    def or_else(self, f: Callable[[], Option[T]]) -> Option[T]:
        """On Absent, compute an alternative. Present passes through."""
        return self

    def to_result(self, error: E) -> Result[T, E]:
        """Present(v) → Success(v); the error is only used for Absent."""
        from .result import Success
        return Success(self.value)

    # ─── Dunder Methods ────────────────────────────────────────────────

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Present):
            return self.value == other.value
        return False if isinstance(other, Absent) else NotImplemented

    def __hash__(self) -> int:
        return hash((True, self.value))

    def __repr__(self) -> str:
        return _display(self)

    __str__ = __repr__

    def __bool__(self) -> bool:
        return True

    def __iter__(self) -> Iterator[T]:
        """Yield the value once. Enables use in for loops and comprehensions."""
        yield self.value


@final
@dataclass(frozen=True, slots=True, eq=False, repr=False)
class Absent(Generic[T]):
    """The case holding nothing. Every combinator short-circuits without calling its function."""

    def is_present(self) -> bool:
        return False

    def is_absent(self) -> bool:
        return True

    # ─── Functor / Monad ───────────────────────────────────────────────

    def map(self, f: Callable[[T], U]) -> Option[U]:
        require_callable(f, "Absent.map")
        return Absent()

    def bind(self, f: Callable[[T], Option[U]]) -> Option[U]:
        require_callable(f, "Absent.bind")
        return Absent()

    flat_map = bind
    and_then = bind

    def flatten(self) -> Option[U]:
        return Absent()

    join = flatten

    def filter(self, predicate: Callable[[T], bool]) -> Option[T]:
        require_callable(predicate, "Absent.filter", "predicate")
        return self

    # ─── Extraction ────────────────────────────────────────────────────

    def match(self, *, on_present: Callable[[T], U], on_absent: Callable[[], U]) -> U:
        require_callable(on_present, "Absent.match", "on_present")
        return require_callable(on_absent, "Absent.match", "on_absent")()

    def unwrap_or(self, default: T) -> T:
        return default

    def unwrap_or_else(self, f: Callable[[], T]) -> T:
        return require_callable(f, "Absent.unwrap_or_else")()

    def or_else(self, f: Callable[[], Option[T]]) -> Option[T]:
        return require_callable(f, "Absent.or_else")()

    def to_result(self, error: E) -> Result[T, E]:
        from .result import Failure
        return Failure(error)

    # ─── Dunder Methods ────────────────────────────────────────────────

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Absent):
            return True
        return False if isinstance(other, Present) else NotImplemented

    def __hash__(self) -> int:
        return hash((False, None))

    def __repr__(self) -> str:
        return _display(self)

    __str__ = __repr__

    def __bool__(self) -> bool:
        return False

    def __iter__(self) -> Iterator[T]:
        return iter(())


Option = Union[Present[T], Absent[T]]


def _display(option: Option[object]) -> str:
    return option.match(on_present=lambda v: f"Present({v!r})", on_absent=lambda: "Absent()")


# ═══════════════════════════════════════════════════════════════════════════════
# Constructors & Collection Operations
# ═══════════════════════════════════════════════════════════════════════════════


def from_optional(value: T | None) -> Option[T]:
    """Lift a nullable value: None → Absent(), anything else → Present(value)."""
    return Absent() if value is None else Present(value)


def sequence_options(options: Iterable[Option[T]]) -> Option[list[T]]:
    """[Option[T]] → Option[[T]]. Absent if any element is Absent."""
    values: list[T] = []
    for opt in options:
        if not isinstance(opt, Present):
            return Absent()
        values.append(opt.value)
    return Present(values)


def traverse_options(items: Iterable[T], f: Callable[[T], Option[U]]) -> Option[list[U]]:
    """Map f over items and sequence. Stops calling f at the first Absent."""
    require_callable(f, "traverse_options")
    values: list[U] = []
    for item in items:
        out = f(item)
        if not isinstance(out, Present):
            return Absent()
        values.append(out.value)
    return Present(values)

"""Result/Either monad for type-safe error handling.

``Result[T, E]`` is the closed union ``Success[T, E] | Failure[T, E]``:
- Bifunctor: bimap (every other mapping operator is built from it)
- Functor: map (success side), map_failure (failure side)
- Monad: bind (flat_map / and_then) = map then flatten
- Railway-oriented composition with left-biased short-circuiting

By convention Success is the right-hand/happy path and Failure the
left-hand/error path. Neither case accepts a ``None`` payload.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Generic, TypeVar, Union, final

from ..errors import InvalidFunction, MisuseError, require_callable, require_value

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from .option import Option

T = TypeVar("T")  # Success type
E = TypeVar("E")  # Error type
U = TypeVar("U")  # Mapped success type
F = TypeVar("F")  # Mapped error type


def _identity(x: T) -> T:
    return x


def _require_result(out: object, operation: str) -> Result[object, object]:
    if not isinstance(out, (Success, Failure)):
        raise InvalidFunction.create(operation, "f", f"expected a Result, got {type(out).__name__}")
    return out


@final
@dataclass(frozen=True, slots=True, eq=False, repr=False)
class Success(Generic[T, E]):
    """Success case (right-hand side).

    Examples:
        >>> Success(42).map(lambda x: x * 2)
        Success(84)
        >>> Success(5).bind(lambda x: Success(x * 2) if x > 0 else Failure("neg"))
        Success(10)
    """

    value: T

    def __post_init__(self) -> None:
        require_value(self.value, "Success")

    # ─── Type Checking ─────────────────────────────────────────────────

    def is_success(self) -> bool:
        return True

    def is_failure(self) -> bool:
        return False

    # ─── Bifunctor / Functor ───────────────────────────────────────────

    def bimap(self, on_failure: Callable[[E], F], on_success: Callable[[T], U]) -> Result[U, F]:
        """Map both sides. Signature: Result[T,E] → (E→F, T→U) → Result[U,F]

        Only ``on_success`` is applied here; ``on_failure`` is validated but never called.
        """
        require_callable(on_failure, "Success.bimap", "on_failure")
        return Success(require_callable(on_success, "Success.bimap", "on_success")(self.value))

    def map(self, f: Callable[[T], U]) -> Result[U, E]:
        """Apply f to the success value. Signature: Result[T,E] → (T→U) → Result[U,E]"""
        return self.bimap(_identity, require_callable(f, "Result.map"))

    def map_failure(self, f: Callable[[E], F]) -> Result[T, F]:
        """Apply f to the error value; Success passes through."""
        return self.bimap(require_callable(f, "Result.map_failure"), _identity)

    # ─── Monad Operations ──────────────────────────────────────────────

    def flatten(self: Success[Result[U, E], E]) -> Result[U, E]:
        """Result[Result[U,E],E] → Result[U,E]. The inner Result becomes the result."""
        return _require_result(self.value, "Success.flatten")  # type: ignore[return-value]

    join = flatten

    def bind(self, f: Callable[[T], Result[U, E]]) -> Result[U, E]:
        """Monadic bind (>>=): map(f) then flatten.

        Example:
            >>> def parse_int(s: str) -> Result[int, str]:
            ...     return Success(int(s)) if s.isdigit() else Failure(f"invalid int: {s}")
            >>> Success("42").bind(parse_int)
            Success(42)
        """
        return self.map(f).flatten()

    flat_map = bind
    and_then = bind

    def or_else(self, f: Callable[[E], Result[T, F]]) -> Result[T, F]:
        """On Failure, apply f to recover. Success passes through."""
        require_callable(f, "Success.or_else")
        return Success(self.value)

    # ─── Extraction ────────────────────────────────────────────────────

    def match(self, *, on_failure: Callable[[E], U], on_success: Callable[[T], U]) -> U:
        """Exhaustive case analysis. Both handlers are required."""
        require_callable(on_failure, "Success.match", "on_failure")
        return require_callable(on_success, "Success.match", "on_success")(self.value)

    def unwrap_or(self, default: T) -> T:
        return self.value

    def unwrap_or_else(self, f: Callable[[E], T]) -> T:
        return self.value

    def inspect(self, f: Callable[[T], None]) -> Result[T, E]:
        """Call f with the success value for side effects, return self."""
        require_callable(f, "Success.inspect")(self.value)
        return self

    def inspect_failure(self, f: Callable[[E], None]) -> Result[T, E]:
        return self

    def to_option(self) -> Option[T]:
        """Success(v) → Present(v)."""
        from .option import Present
        return Present(self.value)

    # ─── Dunder Methods ────────────────────────────────────────────────

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Success):
            return self.value == other.value
        return False if isinstance(other, Failure) else NotImplemented

    def __hash__(self) -> int:
        return hash((True, self.value))

    def __repr__(self) -> str:
        return _display(self)

    __str__ = __repr__

    def __bool__(self) -> bool:
        return True

    def __iter__(self) -> Iterator[T]:
        """Yield the success value once."""
        yield self.value


@final
@dataclass(frozen=True, slots=True, eq=False, repr=False)
class Failure(Generic[T, E]):
    """Failure case (left-hand side). Success-side functions are never invoked.

    Examples:
        >>> Failure("fail").map(lambda x: x * 2)
        Failure('fail')
        >>> Failure("fail").map_failure(str.upper)
        Failure('FAIL')
    """

    error: E

    def __post_init__(self) -> None:
        require_value(self.error, "Failure", "error")

    def is_success(self) -> bool:
        return False

    def is_failure(self) -> bool:
        return True

    # ─── Bifunctor / Functor ───────────────────────────────────────────

    def bimap(self, on_failure: Callable[[E], F], on_success: Callable[[T], U]) -> Result[U, F]:
        require_callable(on_success, "Failure.bimap", "on_success")
        return Failure(require_callable(on_failure, "Failure.bimap", "on_failure")(self.error))

    def map(self, f: Callable[[T], U]) -> Result[U, E]:
        return self.bimap(_identity, require_callable(f, "Result.map"))

    def map_failure(self, f: Callable[[E], F]) -> Result[T, F]:
        return self.bimap(require_callable(f, "Result.map_failure"), _identity)

    # ─── Monad Operations ──────────────────────────────────────────────

    def flatten(self) -> Result[U, E]:
        """The outer failure wins; nothing inside is inspected."""
        return Failure(self.error)

    join = flatten

    def bind(self, f: Callable[[T], Result[U, E]]) -> Result[U, E]:
        """Short-circuit: return this failure unchanged, never calling f."""
        return self.map(f).flatten()

    flat_map = bind
    and_then = bind

    def or_else(self, f: Callable[[E], Result[T, F]]) -> Result[T, F]:
        return _require_result(require_callable(f, "Failure.or_else")(self.error), "Failure.or_else")  # type: ignore[return-value]

    # ─── Extraction ────────────────────────────────────────────────────

    def match(self, *, on_failure: Callable[[E], U], on_success: Callable[[T], U]) -> U:
        require_callable(on_success, "Failure.match", "on_success")
        return require_callable(on_failure, "Failure.match", "on_failure")(self.error)

    def unwrap_or(self, default: T) -> T:
        return default

    def unwrap_or_else(self, f: Callable[[E], T]) -> T:
        """Compute a fallback from the error."""
        return require_callable(f, "Failure.unwrap_or_else")(self.error)

    def inspect(self, f: Callable[[T], None]) -> Result[T, E]:
        return self

    def inspect_failure(self, f: Callable[[E], None]) -> Result[T, E]:
        """Call f with the error for side effects, return self."""
        require_callable(f, "Failure.inspect_failure")(self.error)
        return self

    def to_option(self) -> Option[T]:
        from .option import Absent
        return Absent()

    # ─── Dunder Methods ────────────────────────────────────────────────

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Failure):
            return self.error == other.error
        return False if isinstance(other, Success) else NotImplemented

    def __hash__(self) -> int:
        return hash((False, self.error))

    def __repr__(self) -> str:
        return _display(self)

    __str__ = __repr__

    def __bool__(self) -> bool:
        return False

    def __iter__(self) -> Iterator[T]:
        return iter(())


Result = Union[Success[T, E], Failure[T, E]]


def _display(result: Result[object, object]) -> str:
    return result.match(on_failure=lambda e: f"Failure({e!r})", on_success=lambda v: f"Success({v!r})")


# ═══════════════════════════════════════════════════════════════════════════════
# Constructors
# ═══════════════════════════════════════════════════════════════════════════════


def attempt(
    fn: Callable[..., T],
    *args: object,
    catch: tuple[type[Exception], ...],
    **kwargs: object,
) -> Result[T, Exception]:
    """Call fn, converting the named exception types into Failure.

    Only the listed types are caught. Misuse errors always propagate, even
    when ``catch`` names one of their bases (ValueError, TypeError).

    Example:
        >>> attempt(int, "42", catch=(ValueError,))
        Success(42)
        >>> attempt(int, "x", catch=(ValueError,)).is_failure()
        True
    """
    if not catch:
        raise InvalidFunction.create("attempt", "catch", "at least one exception type is required")
    require_callable(fn, "attempt", "fn")
    try:
        return Success(fn(*args, **kwargs))
    except MisuseError:
        raise
    except catch as e:
        return Failure(e)


# ═══════════════════════════════════════════════════════════════════════════════
# Collection Operations
# ═══════════════════════════════════════════════════════════════════════════════


def sequence(results: Iterable[Result[T, E]]) -> Result[list[T], E]:
    """[Result[T,E]] → Result[[T],E]. Fail-fast on first Failure."""
    values: list[T] = []
    for r in results:
        if isinstance(r, Failure):
            return Failure(r.error)
        values.append(r.value)
    return Success(values)


def traverse(items: Iterable[T], f: Callable[[T], Result[U, E]]) -> Result[list[U], E]:
    """Map f over items, sequence results. f is not called after the first Failure."""
    require_callable(f, "traverse")
    values: list[U] = []
    for item in items:
        r = _require_result(f(item), "traverse")
        if isinstance(r, Failure):
            return Failure(r.error)
        values.append(r.value)  # type: ignore[arg-type]
    return Success(values)


def collect_results(results: Iterable[Result[T, E]]) -> Result[list[T], list[E]]:
    """Collect all Results, accumulating ALL errors (not fail-fast)."""
    values: list[T] = []
    errors: list[E] = []
    for r in results:
        if isinstance(r, Failure):
            errors.append(r.error)
        else:
            values.append(r.value)
    return Success(values) if not errors else Failure(errors)

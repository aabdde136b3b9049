"""Tests for Result monad implementation.

Validates:
- Functor laws
- Monad laws
- Bifunctor operations (bimap, map, map_failure)
- Short-circuiting: functions are never invoked on Failure
- Misuse errors at construction and call time
"""

from __future__ import annotations

from typing import Any, Callable

from hypothesis import given, settings
from hypothesis import strategies as st
import pytest

from monadkit.errors import ErrorCode, InvalidArgument, InvalidFunction
from monadkit.monads import (
    Absent,
    Failure,
    Present,
    Result,
    Success,
    attempt,
    collect_results,
    sequence,
    traverse,
)


def parse_int(s: str) -> Result[int, str]:
    try:
        return Success(int(s))
    except ValueError:
        return Failure(f"invalid: {s}")


def validate_positive(n: int) -> Result[int, str]:
    return Success(n) if n > 0 else Failure("must be positive")


# ═════════════════════════════════════════════════════════════════════════════
# Property Tests - Functor Laws
# ═════════════════════════════════════════════════════════════════════════════

results = st.one_of(st.integers().map(Success), st.text(min_size=1, max_size=10).map(Failure))
numerals = st.one_of(st.integers().map(str), st.text(max_size=6))


@given(result=results)
@settings(max_examples=50, deadline=None)
def test_functor_identity(result: Result[int, str]) -> None:
    """Functor law: fmap id = id"""
    assert result.map(lambda x: x) == result


@given(result=results, k=st.integers(-10, 10))
@settings(max_examples=50, deadline=None)
def test_functor_composition(result: Result[int, str], k: int) -> None:
    """Functor law: fmap (f . g) = fmap f . fmap g"""
    f: Callable[[int], int] = lambda x: x + k
    g: Callable[[int], int] = lambda x: x * 2

    assert result.map(lambda x: f(g(x))) == result.map(g).map(f)


# ═════════════════════════════════════════════════════════════════════════════
# Property Tests - Monad Laws
# ═════════════════════════════════════════════════════════════════════════════


@given(a=numerals)
@settings(max_examples=50, deadline=None)
def test_monad_left_identity(a: str) -> None:
    """Monad law: return a >>= f = f a"""
    assert Success(a).bind(parse_int) == parse_int(a)


@given(a=numerals)
@settings(max_examples=50, deadline=None)
def test_monad_right_identity(a: str) -> None:
    """Monad law: m >>= return = m"""
    m = parse_int(a)
    assert m.bind(Success) == m


@given(a=numerals)
@settings(max_examples=50, deadline=None)
def test_monad_associativity(a: str) -> None:
    """Monad law: (m >>= f) >>= g = m >>= (\\x -> f x >>= g)"""
    m: Result[str, str] = Success(a)
    left = m.bind(parse_int).bind(validate_positive)
    right = m.bind(lambda x: parse_int(x).bind(validate_positive))
    assert left == right



# ═════════════════════════════════════════════════════════════════════════════
# Operational Tests
# ═════════════════════════════════════════════════════════════════════════════


def test_success_construction() -> None:
    result: Result[int, str] = Success(42)

    assert result.is_success()
    assert not result.is_failure()
    assert result.value == 42


def test_failure_construction() -> None:
    result: Result[int, str] = Failure("failed")

    assert result.is_failure()
    assert not result.is_success()
    assert result.error == "failed"


@pytest.mark.parametrize("ctor", [Success, Failure])
def test_none_payload_rejected(ctor: Callable[[object], object]) -> None:
    """A None payload is a programmer error, raised immediately."""
    with pytest.raises(InvalidArgument) as exc_info:
        ctor(None)
    assert exc_info.value.detail.code is ErrorCode.INVALID_ARGUMENT
    assert isinstance(exc_info.value, ValueError)


def test_immutable() -> None:
    result = Success(1)
    with pytest.raises(AttributeError):
        result.value = 2  # type: ignore[misc]


def test_bimap() -> None:
    """bimap applies exactly one side."""
    assert Success(5).bimap(lambda e: f"Error: {e}", lambda x: x * 2) == Success(10)
    assert Failure("fail").bimap(lambda e: f"Error: {e}", lambda x: x * 2) == Failure("Error: fail")


def test_map_skips_failure(counted: Callable[..., Any]) -> None:
    counter = counted(lambda x: x * 2)
    result: Result[int, str] = Failure("fail")

    assert result.map(counter) == Failure("fail")
    assert counter.calls == 0


def test_map_failure(counted: Callable[..., Any]) -> None:
    counter = counted(lambda x: x)
    assert Failure("fail").map_failure(str.upper) == Failure("FAIL")
    assert Success(42).map_failure(counter) == Success(42)
    assert counter.calls == 0


def test_bind_short_circuits(counted: Callable[..., Any]) -> None:
    """Failure(e).bind(f) returns Failure(e) and never calls f."""
    counter = counted(lambda x: Success(x))
    result: Result[int, str] = Failure("boom")

    assert result.bind(counter) == Failure("boom")
    assert result.flat_map(counter) == Failure("boom")
    assert result.and_then(counter) == Failure("boom")
    assert counter.calls == 0


def test_bind_success() -> None:
    assert Success(5).bind(lambda x: Success(x * 2)) == Success(10)
    assert Success(5).bind(lambda x: Failure("failed")) == Failure("failed")


def test_bind_returns_inner_directly() -> None:
    inner = Success(3)
    assert Success(1).bind(lambda _: inner) is inner


def test_bind_requires_result() -> None:
    with pytest.raises(InvalidFunction):
        Success(1).bind(lambda x: x + 1)  # type: ignore[arg-type, return-value]


def test_non_callable_rejected() -> None:
    with pytest.raises(InvalidFunction) as exc_info:
        Success(1).map(None)  # type: ignore[arg-type]
    assert exc_info.value.detail.argument == "f"
    assert isinstance(exc_info.value, TypeError)

    with pytest.raises(InvalidFunction):
        Failure("e").bind("not a function")  # type: ignore[arg-type]


def test_flatten() -> None:
    """Join: outer Failure wins, outer Success yields the inner Result."""
    assert Success(Success(42)).flatten() == Success(42)
    assert Success(Failure("inner")).flatten() == Failure("inner")
    assert Failure("outer").flatten() == Failure("outer")
    assert Success(Success(1)).join() == Success(1)


def test_or_else() -> None:
    assert Failure("fail").or_else(lambda _: Success(42)) == Success(42)
    assert Success(5).or_else(lambda _: Success(42)) == Success(5)


def test_unwrap_or() -> None:
    assert Success(5).unwrap_or(10) == 5
    assert Failure("fail").unwrap_or(10) == 10
    assert Failure("fail").unwrap_or_else(len) == 4


def test_match() -> None:
    """Exhaustive extraction on both variants."""
    handlers = dict(on_failure=lambda e: f"failed: {e}", on_success=lambda x: f"success: {x}")

    assert Success(42).match(**handlers) == "success: 42"
    assert Failure("fail").match(**handlers) == "failed: fail"


def test_match_requires_both_handlers() -> None:
    with pytest.raises(InvalidFunction):
        Success(1).match(on_failure=None, on_success=str)  # type: ignore[arg-type]


def test_structural_pattern_matching() -> None:
    def describe(r: Result[int, str]) -> str:
        match r:
            case Success(v):
                return f"ok {v}"
            case Failure(e):
                return f"err {e}"

    assert describe(Success(1)) == "ok 1"
    assert describe(Failure("x")) == "err x"


def test_inspect() -> None:
    seen: list[object] = []

    assert Success(42).inspect(seen.append) == Success(42)
    assert Failure("e").inspect(seen.append) == Failure("e")
    assert Failure("e").inspect_failure(seen.append) == Failure("e")
    assert seen == [42, "e"]


def test_to_option() -> None:
    assert Success(1).to_option() == Present(1)
    assert Failure("e").to_option() == Absent()


def test_equality_and_hash() -> None:
    assert Success(42) == Success(42)
    assert Failure("fail") == Failure("fail")
    assert Success(42) != Success(43)
    assert Success("x") != Failure("x")
    assert len({Success(1), Success(1), Failure(1)}) == 2


def test_repr() -> None:
    assert repr(Success("a")) == "Success('a')"
    assert str(Failure(3)) == "Failure(3)"


def test_truthiness_and_iteration() -> None:
    assert bool(Success(0)) is True
    assert bool(Failure("fail")) is False
    assert list(Success(42)) == [42]
    assert list(Failure("fail")) == []


# ═════════════════════════════════════════════════════════════════════════════
# Collection Operations
# ═════════════════════════════════════════════════════════════════════════════


def test_sequence() -> None:
    assert sequence([Success(1), Success(2), Success(3)]) == Success([1, 2, 3])
    assert sequence([Success(1), Failure("fail"), Failure("later")]) == Failure("fail")
    assert sequence([]) == Success([])


def test_traverse_stops_at_first_failure(counted: Callable[..., Any]) -> None:
    counter = counted(lambda s: parse_int(s))

    assert traverse(["1", "bad", "3"], counter) == Failure("invalid: bad")
    assert counter.calls == 2
    assert traverse(["1", "2"], parse_int) == Success([1, 2])


def test_collect_results_accumulates_errors() -> None:
    assert collect_results([Success(1), Failure("e1"), Success(3), Failure("e2")]) == Failure(["e1", "e2"])
    assert collect_results([Success(1), Success(2)]) == Success([1, 2])


def test_attempt() -> None:
    assert attempt(int, "42", catch=(ValueError,)) == Success(42)

    failed = attempt(int, "x", catch=(ValueError,))
    assert failed.is_failure()
    assert isinstance(failed.error, ValueError)


def test_attempt_lets_other_exceptions_propagate() -> None:
    with pytest.raises(ZeroDivisionError):
        attempt(lambda: 1 / 0, catch=(ValueError,))
    with pytest.raises(InvalidFunction):
        attempt(int, "1", catch=())


def test_attempt_never_converts_misuse() -> None:
    """Misuse errors subclass ValueError/TypeError but are never turned into Failure."""
    with pytest.raises(InvalidArgument):
        attempt(Present, None, catch=(ValueError,))
    with pytest.raises(InvalidFunction):
        attempt(Success(1).map, None, catch=(TypeError,))
    assert attempt(int, "x", catch=(ValueError,)).is_failure()


# ═════════════════════════════════════════════════════════════════════════════
# Railway-Oriented Programming Patterns
# ═════════════════════════════════════════════════════════════════════════════


def test_railway_success_path() -> None:
    result = Success("42").bind(parse_int).bind(validate_positive).map(lambda n: n * 2)
    assert result == Success(84)


def test_railway_error_path(counted: Callable[..., Any]) -> None:
    later = counted(validate_positive)

    result = Success("bad").bind(parse_int).bind(later).map(lambda n: n * 2)
    assert result == Failure("invalid: bad")
    assert later.calls == 0

    result = Success("-5").bind(parse_int).bind(validate_positive).map(lambda n: n * 2)
    assert result == Failure("must be positive")


def test_fallback_chain() -> None:
    result = (
        Failure("primary unavailable")
        .or_else(lambda _: Failure("backup unavailable"))
        .or_else(lambda _: Success("cached data"))
    )
    assert result == Success("cached data")

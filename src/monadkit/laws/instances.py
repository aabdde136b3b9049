"""Monad descriptions consumed by the law harness.

A MonadInstance bundles what the harness needs to check a monad without
knowing its concrete type: unit (Return), bind, fmap, and hypothesis
strategies for containers and Kleisli arrows over integers.
"""

from __future__ import annotations

import operator
from dataclasses import dataclass, field
from typing import Any, Callable

from hypothesis import strategies as st
from hypothesis.strategies import SearchStrategy

from ..monads import Absent, Failure, Identity, Present, Success
from .strategies import Named, integers, lists, predicates, pure_functions, text

Kleisli = Callable[[int], Any]


@dataclass(frozen=True, slots=True)
class MonadInstance:
    """Everything the harness needs to know about one monad.

    Attributes:
        name: Label used in reports and logs.
        unit: Return, lifting a plain value.
        bind: ``bind(m, f)``.
        fmap: ``fmap(m, f)``.
        containers: Strategy producing arbitrary ``M[int]`` values.
        kleisli: Strategy producing arbitrary ``int → M[int]`` functions.
        values: Strategy producing plain payloads.
        equal: Equality on containers.
    """

    name: str
    unit: Callable[[Any], Any]
    bind: Callable[[Any, Callable[[Any], Any]], Any]
    fmap: Callable[[Any, Callable[[Any], Any]], Any]
    containers: SearchStrategy[Any]
    kleisli: SearchStrategy[Kleisli]
    values: SearchStrategy[int] = field(default_factory=integers)
    equal: Callable[[Any, Any], bool] = operator.eq


def _method_bind(m: Any, f: Callable[[Any], Any]) -> Any:
    return m.bind(f)


def _method_map(m: Any, f: Callable[[Any], Any]) -> Any:
    return m.map(f)


# ─── Identity ────────────────────────────────────────────────────────────────


def _identity_arrow(f: Named[int, int]) -> Kleisli:
    return Named(f"Identity({f.name})", lambda x: Identity(f(x)))


IDENTITY = MonadInstance(
    name="identity",
    unit=Identity.pure,
    bind=_method_bind,
    fmap=_method_map,
    containers=integers().map(Identity),
    kleisli=st.builds(_identity_arrow, pure_functions()),
)


# ─── Option ──────────────────────────────────────────────────────────────────


def _option_arrow(f: Named[int, int], p: Named[int, bool]) -> Kleisli:
    return Named(f"Present({f.name}) if {p.name} else Absent()", lambda x: Present(f(x)) if p(x) else Absent())


OPTION = MonadInstance(
    name="option",
    unit=Present,
    bind=_method_bind,
    fmap=_method_map,
    containers=st.one_of(integers().map(Present), st.just(Absent())),
    kleisli=st.builds(_option_arrow, pure_functions(), predicates()),
)


# ─── Result ──────────────────────────────────────────────────────────────────


def _result_arrow(f: Named[int, int], p: Named[int, bool]) -> Kleisli:
    return Named(
        f"Success({f.name}) if {p.name} else Failure(...)",
        lambda x: Success(f(x)) if p(x) else Failure(f"rejected {x} by {p.name}"),
    )


RESULT = MonadInstance(
    name="result",
    unit=Success,
    bind=_method_bind,
    fmap=_method_map,
    containers=st.one_of(integers().map(Success), text(max_size=8).map(Failure)),
    kleisli=st.builds(_result_arrow, pure_functions(), predicates()),
)


# ─── List ────────────────────────────────────────────────────────────────────


def _list_arrow(f: Named[int, int], g: Named[int, int]) -> Kleisli:
    return Named(f"[{f.name}, {g.name}][: x % 3]", lambda x: [f(x), g(x)][: x % 3])


LIST = MonadInstance(
    name="list",
    unit=lambda x: [x],
    bind=lambda m, f: [y for x in m for y in f(x)],
    fmap=lambda m, f: [f(x) for x in m],
    containers=lists(integers(), max_size=5),
    kleisli=st.builds(_list_arrow, pure_functions(), pure_functions()),
)

BUILTIN_INSTANCES: tuple[MonadInstance, ...] = (IDENTITY, OPTION, RESULT, LIST)

"""Property-based verification of the functor, monad and monoid laws.

Each law is a predicate over one generated case, drawing its inputs through
hypothesis. ``verify_laws`` runs every law for up to ``trials`` examples from a
fixed seed with no example database, so a report is reproducible. A failing
law is shrunk by hypothesis and its smallest counterexample is reported.

Laws checked for a monad M with unit ``return`` and ``bind``:
- left_identity: ``bind(return(x), f) == f(x)``
- right_identity: ``bind(m, return) == m``
- associativity: ``bind(bind(m, f), g) == bind(m, x => bind(f(x), g))``
- functor_identity: ``fmap(m, id) == m``
- functor_composition: ``fmap(fmap(m, g), f) == fmap(m, x => f(g(x)))``
- kleisli_left_identity / kleisli_right_identity: ``return`` is a two-sided unit of ``>=>``
- kleisli_associativity: ``(f >=> g) >=> h == f >=> (g >=> h)``

Example:
    >>> from monadkit.laws import OPTION, verify_laws
    >>> verify_laws(OPTION, trials=50).ok
    True
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from concurrent.futures import ThreadPoolExecutor
from typing import TYPE_CHECKING, Any, Callable, TypeVar

from hypothesis import HealthCheck, Verbosity, given, seed as fix_seed, settings
from hypothesis import strategies as st
from pydantic import BaseModel, ConfigDict, computed_field

from ..config import get_settings
from ..errors import ErrorCode
from ..observability import get_logger, log_context
from .strategies import pure_functions

if TYPE_CHECKING:
    from hypothesis.strategies import SearchStrategy

    from ..monads.monoid import Monoid
    from .instances import MonadInstance

T = TypeVar("T")

log = get_logger("monadkit.laws")

Draw = Callable[["SearchStrategy[Any]"], Any]
# A law returns None when the case holds, or a description of the counterexample
Law = Callable[["MonadInstance", Draw], "str | None"]
MonoidLaw = Callable[["Monoid[Any]", "SearchStrategy[Any]", Draw], "str | None"]


class LawViolation(AssertionError):
    """A law failed for at least one generated case."""

    code = ErrorCode.LAW_VIOLATION

    def __init__(self, law: str, instance: str, counterexample: str) -> None:
        self.law, self.instance, self.counterexample = law, instance, counterexample
        super().__init__(f"{instance}: {law} violated [{self.code}]\n  {counterexample}")


class LawResult(BaseModel):
    """Outcome of one law. ``examples`` counts every case evaluated, shrinking included."""

    model_config = ConfigDict(frozen=True)

    law: str
    trials: int
    examples: int
    counterexample: str | None = None

    @computed_field
    @property
    def holds(self) -> bool:
        return self.counterexample is None


class LawReport(BaseModel):
    """All law outcomes for one instance."""

    model_config = ConfigDict(frozen=True)

    instance: str
    seed: int
    results: tuple[LawResult, ...]

    @computed_field
    @property
    def ok(self) -> bool:
        return all(r.holds for r in self.results)

    @property
    def failures(self) -> tuple[LawResult, ...]:
        return tuple(r for r in self.results if not r.holds)

    def __getitem__(self, law: str) -> LawResult:
        for r in self.results:
            if r.law == law:
                return r
        raise KeyError(law)

    def raise_for_violation(self) -> LawReport:
        """Raise LawViolation for the first failing law; return self otherwise."""
        if failures := self.failures:
            raise LawViolation(failures[0].law, self.instance, failures[0].counterexample or "")
        return self


# ═════════════════════════════════════════════════════════════════════════════
# Monad & Functor Laws
# ═════════════════════════════════════════════════════════════════════════════


def _differ(inst: MonadInstance, left: Any, right: Any, inputs: str) -> str | None:
    return None if inst.equal(left, right) else f"{inputs}: {left!r} != {right!r}"


def left_identity(inst: MonadInstance, draw: Draw) -> str | None:
    x, f = draw(inst.values), draw(inst.kleisli)
    return _differ(inst, inst.bind(inst.unit(x), f), f(x), f"x={x!r}, f={f!r}")


def right_identity(inst: MonadInstance, draw: Draw) -> str | None:
    m = draw(inst.containers)
    return _differ(inst, inst.bind(m, inst.unit), m, f"m={m!r}")


def associativity(inst: MonadInstance, draw: Draw) -> str | None:
    m, f, g = draw(inst.containers), draw(inst.kleisli), draw(inst.kleisli)
    left = inst.bind(inst.bind(m, f), g)
    right = inst.bind(m, lambda x: inst.bind(f(x), g))
    return _differ(inst, left, right, f"m={m!r}, f={f!r}, g={g!r}")


def functor_identity(inst: MonadInstance, draw: Draw) -> str | None:
    m = draw(inst.containers)
    return _differ(inst, inst.fmap(m, lambda x: x), m, f"m={m!r}")


def functor_composition(inst: MonadInstance, draw: Draw) -> str | None:
    m, f, g = draw(inst.containers), draw(pure_functions()), draw(pure_functions())
    left = inst.fmap(inst.fmap(m, g), f)
    right = inst.fmap(m, lambda x: f(g(x)))
    return _differ(inst, left, right, f"m={m!r}, f={f!r}, g={g!r}")


def _kleisli(inst: MonadInstance, f: Callable[[Any], Any], g: Callable[[Any], Any]) -> Callable[[Any], Any]:
    return lambda x: inst.bind(f(x), g)


def kleisli_left_identity(inst: MonadInstance, draw: Draw) -> str | None:
    x, f = draw(inst.values), draw(inst.kleisli)
    return _differ(inst, _kleisli(inst, inst.unit, f)(x), f(x), f"x={x!r}, f={f!r}")


def kleisli_right_identity(inst: MonadInstance, draw: Draw) -> str | None:
    x, f = draw(inst.values), draw(inst.kleisli)
    return _differ(inst, _kleisli(inst, f, inst.unit)(x), f(x), f"x={x!r}, f={f!r}")


def kleisli_associativity(inst: MonadInstance, draw: Draw) -> str | None:
    x, f, g, h = draw(inst.values), draw(inst.kleisli), draw(inst.kleisli), draw(inst.kleisli)
    left = _kleisli(inst, _kleisli(inst, f, g), h)(x)
    right = _kleisli(inst, f, _kleisli(inst, g, h))(x)
    return _differ(inst, left, right, f"x={x!r}, f={f!r}, g={g!r}, h={h!r}")


MONAD_LAWS: Mapping[str, Law] = {
    "left_identity": left_identity,
    "right_identity": right_identity,
    "associativity": associativity,
    "functor_identity": functor_identity,
    "functor_composition": functor_composition,
    "kleisli_left_identity": kleisli_left_identity,
    "kleisli_right_identity": kleisli_right_identity,
    "kleisli_associativity": kleisli_associativity,
}


# ═════════════════════════════════════════════════════════════════════════════
# Monoid Laws
# ═════════════════════════════════════════════════════════════════════════════


def monoid_associativity(monoid: Monoid[Any], values: SearchStrategy[Any], draw: Draw) -> str | None:
    a, b, c = draw(values), draw(values), draw(values)
    left, right = monoid.combine(monoid.combine(a, b), c), monoid.combine(a, monoid.combine(b, c))
    return None if left == right else f"a={a!r}, b={b!r}, c={c!r}: {left!r} != {right!r}"


def monoid_identity(monoid: Monoid[Any], values: SearchStrategy[Any], draw: Draw) -> str | None:
    a = draw(values)
    left, right = monoid.combine(monoid.identity, a), monoid.combine(a, monoid.identity)
    return None if left == a == right else f"a={a!r}: e<>a={left!r}, a<>e={right!r}"


MONOID_LAWS: Mapping[str, MonoidLaw] = {
    "monoid_associativity": monoid_associativity,
    "monoid_identity": monoid_identity,
}


# ═════════════════════════════════════════════════════════════════════════════
# Runners
# ═════════════════════════════════════════════════════════════════════════════


def _run_law(name: str, subject: str, case: Callable[[Draw], str | None], trials: int, seed: int) -> LawResult:
    evaluated = 0

    @fix_seed(seed)
    @given(st.data())
    @settings(max_examples=trials, database=None, deadline=None, verbosity=Verbosity.quiet,
              report_multiple_bugs=False, suppress_health_check=[HealthCheck.too_slow])
    def check(data: st.DataObject) -> None:
        nonlocal evaluated
        evaluated += 1
        if (outcome := case(data.draw)) is not None:
            raise LawViolation(name, subject, outcome)

    try:
        check()
    except LawViolation as violation:
        return LawResult(law=name, trials=trials, examples=evaluated, counterexample=violation.counterexample)
    return LawResult(law=name, trials=trials, examples=evaluated)


def _run_all(subject: str, cases: Mapping[str, Callable[[Draw], str | None]],
             trials: int, seed: int, workers: int) -> list[LawResult]:
    def run(name: str) -> LawResult:
        return _run_law(name, subject, cases[name], trials, seed)

    if workers > 1:
        with ThreadPoolExecutor(max_workers=workers) as pool:
            return list(pool.map(run, cases))
    return [run(name) for name in cases]


def _resolve(trials: int | None, seed: int | None, workers: int | None) -> tuple[int, int, int]:
    s = get_settings().laws
    return (trials if trials is not None else s.trials,
            seed if seed is not None else s.seed,
            workers if workers is not None else s.workers)


def _report(instance: str, seed: int, results: Iterable[LawResult]) -> LawReport:
    report = LawReport(instance=instance, seed=seed, results=tuple(results))
    with log_context(instance=instance, seed=seed):
        for r in report.results:
            if r.holds:
                log.debug("law verified", law=r.law, examples=r.examples)
            else:
                log.warning("law violated", law=r.law, examples=r.examples,
                            counterexample=r.counterexample)
        log.info("laws checked", laws=len(report.results), ok=report.ok)
    return report


def verify_laws(
    instance: MonadInstance,
    *,
    laws: Iterable[str] | None = None,
    trials: int | None = None,
    seed: int | None = None,
    workers: int | None = None,
) -> LawReport:
    """Check the monad and functor laws for an instance.

    Args:
        instance: The monad under test
        laws: Subset of MONAD_LAWS names (default: all)
        trials: Maximum examples per law (default: MONADKIT_LAWS_TRIALS)
        seed: Hypothesis seed (default: MONADKIT_LAWS_SEED)
        workers: Laws checked concurrently (default: MONADKIT_LAWS_WORKERS)

    Raises:
        KeyError: If a requested law name is unknown
    """
    trials, seed, workers = _resolve(trials, seed, workers)
    names = list(laws) if laws is not None else list(MONAD_LAWS)
    cases = {name: (lambda draw, law=MONAD_LAWS[name]: law(instance, draw)) for name in names}
    return _report(instance.name, seed, _run_all(instance.name, cases, trials, seed, workers))


def assert_lawful(instance: MonadInstance, **kwargs: Any) -> LawReport:
    """verify_laws, raising LawViolation on the first failing law."""
    return verify_laws(instance, **kwargs).raise_for_violation()


def verify_monoid(
    monoid: Monoid[T],
    values: SearchStrategy[T],
    *,
    trials: int | None = None,
    seed: int | None = None,
    workers: int | None = None,
) -> LawReport:
    """Check associativity and two-sided identity for a monoid over drawn values."""
    trials, seed, workers = _resolve(trials, seed, workers)
    subject = f"monoid:{monoid.name}"
    cases = {name: (lambda draw, law=law: law(monoid, values, draw)) for name, law in MONOID_LAWS.items()}
    return _report(subject, seed, _run_all(subject, cases, trials, seed, workers))

"""Identity monad: the trivially lawful reference container.

A single case holding exactly one value. There is no absence or failure to
branch on, so map/bind/flatten are plain function application. The law
harness checks this instance first to validate its own machinery.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Generic, TypeVar, final

from ..errors import InvalidFunction, require_callable

if TYPE_CHECKING:
    from collections.abc import Iterator

T = TypeVar("T")
U = TypeVar("U")


@final
@dataclass(frozen=True, slots=True, eq=False, repr=False)
class Identity(Generic[T]):
    """Wrap exactly one value.

    Examples:
        >>> Identity(2).map(lambda x: x + 1)
        Identity(3)
        >>> Identity(2).bind(lambda x: Identity(x * 10)).extract()
        20
    """

    value: T

    @classmethod
    def pure(cls, value: U) -> Identity[U]:
        """Return: lift a plain value into the container."""
        return Identity(value)

    # ─── Functor / Monad ───────────────────────────────────────────────

    def map(self, f: Callable[[T], U]) -> Identity[U]:
        """Signature: Identity[T] → (T→U) → Identity[U]"""
        return Identity(require_callable(f, "Identity.map")(self.value))

    def flatten(self: Identity[Identity[U]]) -> Identity[U]:
        """Identity[Identity[U]] → Identity[U]"""
        inner = self.value
        if not isinstance(inner, Identity):
            raise InvalidFunction.create("Identity.flatten", "self", f"expected nested Identity, got {type(inner).__name__}")
        return inner

    def bind(self, f: Callable[[T], Identity[U]]) -> Identity[U]:
        """Monadic bind, defined as map followed by flatten."""
        return self.map(f).flatten()

    flat_map = bind

    def extract(self) -> T:
        """Return the wrapped value; total because there is only one case."""
        return self.value

    # ─── Dunder Methods ────────────────────────────────────────────────

    def __eq__(self, other: object) -> bool:
        return self.value == other.value if isinstance(other, Identity) else NotImplemented

    def __hash__(self) -> int:
        return hash((Identity, self.value))

    def __repr__(self) -> str:
        return f"Identity({self.value!r})"

    __str__ = __repr__

    def __iter__(self) -> Iterator[T]:
        yield self.value

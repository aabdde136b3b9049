"""Law-verification harness.

- MonadInstance: what the harness needs to know about a monad
- IDENTITY, OPTION, RESULT, LIST: built-in instances
- verify_laws/assert_lawful: functor, monad and Kleisli laws over hypothesis-generated cases
- verify_monoid: monoid associativity and identity
- strategies: hypothesis strategies for payloads, containers and named functions
"""

from . import strategies
from .harness import (
    MONAD_LAWS,
    MONOID_LAWS,
    LawReport,
    LawResult,
    LawViolation,
    assert_lawful,
    verify_laws,
    verify_monoid,
)
from .instances import BUILTIN_INSTANCES, IDENTITY, LIST, OPTION, RESULT, MonadInstance

__all__ = [
    "MonadInstance",
    "IDENTITY", "OPTION", "RESULT", "LIST", "BUILTIN_INSTANCES",
    "MONAD_LAWS", "MONOID_LAWS",
    "LawReport", "LawResult", "LawViolation",
    "verify_laws", "assert_lawful", "verify_monoid",
    "strategies",
]

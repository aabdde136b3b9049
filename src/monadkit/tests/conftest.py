"""Shared fixtures."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import Any

import pytest

from monadkit.config import clear_settings_cache


class Counter:
    """Callable wrapper counting invocations."""

    def __init__(self, fn: Callable[..., Any]) -> None:
        self.fn, self.calls = fn, 0

    def __call__(self, *args: Any) -> Any:
        self.calls += 1
        return self.fn(*args)


@pytest.fixture
def counted() -> type[Counter]:
    """Wrap a function so tests can assert how often it ran: ``counted(f).calls``."""
    return Counter


@pytest.fixture
def laws_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[Callable[..., None]]:
    """Set MONADKIT_* variables for one test; settings are re-read before and after."""

    def apply(**env: str) -> None:
        for key, value in env.items():
            monkeypatch.setenv(key, value)
        clear_settings_cache()

    yield apply
    clear_settings_cache()

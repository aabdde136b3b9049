"""Structured key/value logging.

Containers never log. The law harness and the report pipeline use this module
to say which laws were checked and which stages resolved.

Quick Start:
    >>> from monadkit.observability import get_logger, configure_logging
    >>> configure_logging(format="console")  # or "json" for machines
    >>> log = get_logger("laws").bind(instance="option")
    >>> log.info("law verified", law="left_identity", trials=100)

Configuration and scoped fields live in ContextVars, so a configuration made
inside ``contextvars.copy_context().run(...)`` stays inside that context.
"""

from __future__ import annotations

import logging
import sys
import time
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from datetime import UTC, datetime
from functools import partialmethod
from typing import TYPE_CHECKING, Any, Protocol, TextIO, runtime_checkable

import orjson

if TYPE_CHECKING:
    from ..config import LoggingSettings

Fields = dict[str, Any]


@dataclass(frozen=True, slots=True)
class LogEntry:
    """One event plus every field in scope when it was emitted."""

    timestamp: float
    level: str
    event: str
    fields: Mapping[str, Any]

    def when(self, fmt: str | None = None) -> str:
        """ISO-8601 by default; ``fmt`` is a strftime pattern."""
        dt = datetime.fromtimestamp(self.timestamp, tz=UTC)
        return dt.isoformat() if fmt is None else dt.strftime(fmt)


# ═════════════════════════════════════════════════════════════════════════════
# Renderers
# ═════════════════════════════════════════════════════════════════════════════


@runtime_checkable
class LogRenderer(Protocol):
    def render(self, entry: LogEntry) -> None: ...


@dataclass(frozen=True, slots=True)
class Palette:
    """ANSI escape codes; ``Palette.plain()`` disables them all."""

    reset: str = "\033[0m"
    event: str = "\033[1m"
    muted: str = "\033[2m"
    key: str = "\033[36m"
    string: str = "\033[33m"
    number: str = "\033[34m"
    levels: Mapping[str, str] = field(default_factory=lambda: {
        "debug": "\033[2m", "info": "\033[32m", "warning": "\033[33m", "error": "\033[31m",
    })

    @classmethod
    def plain(cls) -> Palette:
        return cls("", "", "", "", "", "", {})

    def paint(self, code: str, text: str) -> str:
        return f"{code}{text}{self.reset}" if code else text


@dataclass(slots=True)
class ConsoleRenderer:
    """One human-readable line per entry: ``time [level] event key=value ...``"""

    output: TextIO = field(default_factory=lambda: sys.stderr)
    colors: bool | None = None  # None: color only when writing to a tty
    show_timestamp: bool = True

    def render(self, entry: LogEntry) -> None:
        tty = self.colors if self.colors is not None else getattr(self.output, "isatty", lambda: False)()
        p = Palette() if tty else Palette.plain()
        head = [p.paint(p.muted, entry.when("%H:%M:%S.%f")[:-3])] if self.show_timestamp else []
        head += [p.paint(p.levels.get(entry.level, ""), f"[{entry.level}]"), p.paint(p.event, entry.event)]
        pairs = (f"{p.paint(p.key, k)}={_display(v, p)}" for k, v in sorted(entry.fields.items()))
        self.output.write(" ".join([*head, *pairs]) + "\n")


@dataclass(slots=True)
class JsonRenderer:
    """JSON Lines; values orjson cannot encode are written as their repr."""

    output: TextIO = field(default_factory=lambda: sys.stdout)

    def render(self, entry: LogEntry) -> None:
        record = {"timestamp": entry.when(), "level": entry.level, "event": entry.event, **entry.fields}
        line = orjson.dumps(record, default=repr, option=orjson.OPT_NON_STR_KEYS | orjson.OPT_APPEND_NEWLINE)
        self.output.write(line.decode())


class NoOpRenderer:
    """Discards every entry."""

    def render(self, entry: LogEntry) -> None:
        return None


def _display(value: Any, p: Palette) -> str:
    match value:
        case bool():
            return p.paint(p.number, "true" if value else "false")
        case int() | float():
            return p.paint(p.number, str(value))
        case str():
            return p.paint(p.string, f'"{value}"')
        case list() | tuple() | dict():
            return p.paint(p.muted, f"<{len(value)} items>")
        case _:
            return repr(value)


# ═════════════════════════════════════════════════════════════════════════════
# Global Configuration
# ═════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class _Config:
    renderer: LogRenderer | None = None  # None: a stderr console, created on first use
    threshold: int = logging.WARNING


_config: ContextVar[_Config] = ContextVar("monadkit_log_config", default=_Config())
_scope: ContextVar[Fields] = ContextVar("monadkit_log_scope", default={})

_RENDERERS: Mapping[str, Any] = {
    "console": lambda output, colors: ConsoleRenderer(output=output or sys.stderr, colors=colors),
    "json": lambda output, colors: JsonRenderer(output=output or sys.stdout),
    "none": lambda output, colors: NoOpRenderer(),
}


def configure_logging(
    format: str = "console",  # noqa: A002
    level: str = "INFO",
    *,
    output: TextIO | None = None,
    colors: bool | None = None,
) -> LogRenderer:
    """Select the renderer ("console", "json" or "none") and the minimum level for this context.

    Raises:
        ValueError: If format is not one of the three names
    """
    if format not in _RENDERERS:
        raise ValueError(f"Unknown log format {format!r}; expected one of {sorted(_RENDERERS)}")
    renderer: LogRenderer = _RENDERERS[format](output, colors)
    _config.set(_Config(renderer, logging.getLevelNamesMapping().get(level.upper(), logging.INFO)))
    return renderer


def configure_from_settings(settings: LoggingSettings | None = None) -> LogRenderer:
    """configure_logging driven by MONADKIT_LOG_FORMAT / MONADKIT_LOG_LEVEL."""
    if settings is None:
        from ..config import get_settings
        settings = get_settings().logging
    return configure_logging(format=settings.format, level=settings.level)


def _active_renderer() -> LogRenderer:
    cfg = _config.get()
    if cfg.renderer is None:
        cfg = _Config(ConsoleRenderer(), cfg.threshold)
        _config.set(cfg)
    return cfg.renderer  # type: ignore[return-value]


@contextmanager
def log_context(**fields: Any) -> Iterator[None]:
    """Attach fields to every entry logged inside the block, by any logger."""
    token = _scope.set({**_scope.get(), **fields})
    try:
        yield
    finally:
        _scope.reset(token)


# ═════════════════════════════════════════════════════════════════════════════
# Logger
# ═════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class BoundLogger:
    """Immutable logger carrying fields that are added to each of its entries.

    ``_renderer`` and ``_level`` pin output and threshold for this logger
    only; left as None they follow configure_logging.

    Example:
        >>> log = BoundLogger(context={"component": "laws"})
        >>> log.warning("law violated", law="associativity")
        # => 10:30:45.123 [warning] law violated component="laws" law="associativity"
    """

    context: Fields = field(default_factory=dict)
    _renderer: LogRenderer | None = None
    _level: int | None = None

    def bind(self, **fields: Any) -> BoundLogger:
        return BoundLogger({**self.context, **fields}, self._renderer, self._level)

    def log(self, level: int, event: str, **fields: Any) -> None:
        threshold = self._level if self._level is not None else _config.get().threshold
        if level < threshold:
            return
        entry = LogEntry(time.time(), logging.getLevelName(level).lower(), event,
                         {**_scope.get(), **self.context, **fields})
        (self._renderer or _active_renderer()).render(entry)

    debug = partialmethod(log, logging.DEBUG)
    info = partialmethod(log, logging.INFO)
    warning = partialmethod(log, logging.WARNING)
    error = partialmethod(log, logging.ERROR)


def get_logger(name: str | None = None, **fields: Any) -> BoundLogger:
    """A logger whose entries carry ``logger=name`` plus the given fields."""
    return BoundLogger({**fields, "logger": name} if name else dict(fields))

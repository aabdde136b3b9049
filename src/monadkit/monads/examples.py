"""Report lookup: a three-stage Result pipeline.

Demonstrates:
- Chains whose payload type changes at every stage (str → list[int] → Report)
- One error type shared by all stages
- Short-circuiting on the first failing stage
- Three equivalent spellings: explicit binds, do-notation, and do-notation
  that reuses earlier stage values
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from statistics import fmean
from typing import Generator

import orjson
from pydantic import BaseModel, ConfigDict

from ..observability import get_logger
from .do import do
from .result import Failure, Result, Success

log = get_logger("monadkit.examples")


class ReportError(BaseModel):
    """Domain failure carried in Failure; never raised."""

    model_config = ConfigDict(frozen=True)

    message: str


class Report(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    numbers: tuple[int, ...]
    average: float


REPORT_NAMES: Mapping[str, str] = {
    "001": "report-001",
    "002": "report-002",
    "003": "report-003",
}

REPORT_NUMBERS: Mapping[str, tuple[int, ...]] = {
    "report-001": (),
    "report-002": tuple(range(1, 11)),
    "report-003": tuple(range(1, 12)),
}


# ═════════════════════════════════════════════════════════════════════════════
# Services
# ═════════════════════════════════════════════════════════════════════════════


def get_report_name(report_id: str | None) -> Result[str, ReportError]:
    """Stage 1: id → report name."""
    if report_id is None or not report_id.strip():
        return Failure(ReportError(message="Invalid report id"))
    if (name := REPORT_NAMES.get(report_id)) is None:
        return Failure(ReportError(message="Report id not found"))
    log.debug("report name resolved", report_id=report_id, name=name)
    return Success(name)


def get_numbers(report_name: str) -> Result[Sequence[int], ReportError]:
    """Stage 2: report name → its numbers. An empty list is a failure."""
    numbers = REPORT_NUMBERS[report_name]
    if not numbers:
        return Failure(ReportError(message="Report has no numbers"))
    return Success(numbers)


def get_report(numbers: Sequence[int]) -> Result[Report, ReportError]:
    """Stage 3: numbers → anonymous report."""
    return get_report_for("", "", numbers)


def get_report_for(report_id: str, name: str, numbers: Sequence[int]) -> Result[Report, ReportError]:
    """Stage 3 with the values produced by earlier stages."""
    return Success(Report(id=report_id, name=name, numbers=tuple(numbers), average=fmean(numbers)))


# ═════════════════════════════════════════════════════════════════════════════
# Controllers
# ═════════════════════════════════════════════════════════════════════════════


def render_response(result: Result[Report, ReportError]) -> str:
    """Terminate the chain: ``Error: <message>`` or ``Report: <json>``."""
    return result.match(
        on_failure=lambda error: f"Error: {error.message}",
        on_success=lambda report: f"Report: {orjson.dumps(report.model_dump()).decode()}",
    )


def lookup_chained(report_id: str | None) -> Result[Report, ReportError]:
    return get_report_name(report_id).bind(get_numbers).bind(get_report)


@do(Success)
def lookup_do(report_id: str | None) -> Generator[Result[object, ReportError], object, Report]:
    name = yield get_report_name(report_id)
    numbers = yield get_numbers(name)
    report = yield get_report(numbers)
    return report


@do(Success)
def lookup_with_context(report_id: str | None) -> Generator[Result[object, ReportError], object, Report]:
    name = yield get_report_name(report_id)
    numbers = yield get_numbers(name)
    report = yield get_report_for(report_id, name, numbers)
    return report


def get_report_chained(report_id: str | None) -> str:
    return render_response(lookup_chained(report_id))


def get_report_do(report_id: str | None) -> str:
    return render_response(lookup_do(report_id))


def get_report_with_context(report_id: str | None) -> str:
    return render_response(lookup_with_context(report_id))

"""Tests for the report lookup pipeline.

Validates:
- Each stage's failure message reaches the response unchanged
- Later stages are skipped after the first failure
- The three controller spellings agree
"""

from __future__ import annotations

from typing import Callable

import orjson
import pytest

from monadkit.monads import Failure, Success
from monadkit.monads import examples
from monadkit.monads.examples import (
    Report,
    ReportError,
    get_numbers,
    get_report,
    get_report_chained,
    get_report_do,
    get_report_name,
    get_report_with_context,
    lookup_chained,
    render_response,
)

CONTROLLERS = [get_report_chained, get_report_do, get_report_with_context]


@pytest.mark.parametrize("controller", CONTROLLERS)
@pytest.mark.parametrize(
    ("report_id", "expected"),
    [
        (None, "Error: Invalid report id"),
        ("", "Error: Invalid report id"),
        ("   ", "Error: Invalid report id"),
        ("foo", "Error: Report id not found"),
        ("001", "Error: Report has no numbers"),
    ],
)
def test_failures(controller: Callable[[str | None], str], report_id: str | None, expected: str) -> None:
    assert controller(report_id) == expected


@pytest.mark.parametrize("controller", CONTROLLERS)
@pytest.mark.parametrize(("report_id", "average", "size"), [("002", 5.5, 10), ("003", 6.0, 11)])
def test_reports(controller: Callable[[str | None], str], report_id: str, average: float, size: int) -> None:
    response = controller(report_id)
    assert response.startswith("Report: ")

    body = orjson.loads(response.removeprefix("Report: "))
    assert body["average"] == average
    assert body["numbers"] == list(range(1, size + 1))


def test_context_controller_keeps_earlier_values() -> None:
    body = orjson.loads(get_report_with_context("002").removeprefix("Report: "))
    assert body["id"] == "002"
    assert body["name"] == "report-002"


def test_anonymous_report() -> None:
    body = orjson.loads(get_report_chained("003").removeprefix("Report: "))
    assert body["id"] == ""
    assert body["name"] == ""


def test_stages() -> None:
    assert get_report_name("002") == Success("report-002")
    assert get_report_name("x") == Failure(ReportError(message="Report id not found"))
    assert get_numbers("report-001") == Failure(ReportError(message="Report has no numbers"))
    assert get_report([2, 4]) == Success(Report(id="", name="", numbers=(2, 4), average=3.0))


def test_later_stages_skipped(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[str] = []

    def spy(name: str) -> object:
        calls.append(name)
        return get_numbers(name)

    monkeypatch.setattr(examples, "get_numbers", spy)

    assert examples.lookup_do("foo") == Failure(ReportError(message="Report id not found"))
    assert lookup_chained("foo").is_failure()
    assert calls == []

    assert examples.lookup_do("002").is_success()
    assert calls == ["report-002"]


def test_render_response() -> None:
    assert render_response(Failure(ReportError(message="boom"))) == "Error: boom"
    rendered = render_response(Success(Report(id="a", name="b", numbers=(1,), average=1.0)))
    assert rendered == 'Report: {"id":"a","name":"b","numbers":[1],"average":1.0}'

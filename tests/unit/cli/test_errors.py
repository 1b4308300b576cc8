"""Tests for exit code mapping and error rendering."""

from __future__ import annotations

import json

import click
import pytest

from attio_cli.cli.errors import (
    ExitCode,
    NoResultsError,
    UsageError,
    emit_error,
    error_payload,
    exit_code_for,
    format_error,
    json_requested,
)
from attio_cli.clients.exceptions import AttioAPIError, TransportError
from attio_cli.clients.http.pagination import PageFetchError, PaginationCancelled
from attio_cli.config.loader import AuthRequiredError


@pytest.mark.unit
@pytest.mark.parametrize(
    ("error", "code"),
    [
        (UsageError("bad flag"), ExitCode.USAGE),
        (click.UsageError("no such option"), ExitCode.USAGE),
        (NoResultsError(), ExitCode.NO_RESULT),
        (AuthRequiredError("no key"), ExitCode.AUTH),
        (PaginationCancelled(items=[], pages_fetched=2), ExitCode.CANCELLED),
        (KeyboardInterrupt(), ExitCode.CANCELLED),
        (click.Abort(), ExitCode.CANCELLED),
        (AttioAPIError(401, "bad key"), ExitCode.GENERIC),
        (TransportError("refused"), ExitCode.GENERIC),
        (RuntimeError("boom"), ExitCode.GENERIC),
    ],
)
def test_exit_code_for(error: BaseException, code: ExitCode) -> None:
    assert exit_code_for(error) is code


@pytest.mark.unit
def test_page_fetch_error_is_unwrapped() -> None:
    wrapped = PageFetchError(AttioAPIError(500, "boom"), items=[1], pages_fetched=1)

    assert exit_code_for(wrapped) is ExitCode.GENERIC
    assert format_error(wrapped) == "Attio API error (500): boom"


@pytest.mark.unit
def test_format_api_error_hints() -> None:
    throttled = AttioAPIError(429, "Too many requests", code="rate_limit_exceeded", retry_after="3")
    unauthorised = AttioAPIError(401, "Invalid token", type="auth_error")

    assert format_error(throttled) == "Attio API error (429) rate_limit_exceeded: Too many requests (retry-after: 3)"
    assert format_error(unauthorised).splitlines() == [
        "Attio API error (401): Invalid token",
        "Check ATTIO_API_KEY or run: attio auth login --api-key <key>",
    ]


@pytest.mark.unit
def test_format_error_fallbacks() -> None:
    assert format_error(KeyboardInterrupt()) == "cancelled"
    assert format_error(RuntimeError("")) == "RuntimeError"
    assert format_error(UsageError(" bad ")) == "bad"


@pytest.mark.unit
def test_error_payload_for_api_error() -> None:
    payload = error_payload(AttioAPIError(404, "Record not found", type="invalid_request_error", code="not_found"))

    assert payload == {
        "message": "Record not found",
        "exit_code": 1,
        "kind": "api",
        "status_code": 404,
        "type": "invalid_request_error",
        "code": "not_found",
    }


@pytest.mark.unit
def test_error_payload_for_auth_and_usage() -> None:
    assert error_payload(AuthRequiredError("missing"))["code"] == "auth_required"
    assert error_payload(UsageError("nope")) == {"message": "nope", "exit_code": 2, "kind": "usage"}
    assert "kind" not in error_payload(RuntimeError("x"))


@pytest.mark.unit
def test_emit_error_text_and_json(capsys: pytest.CaptureFixture[str]) -> None:
    assert emit_error(UsageError("bad flag"), as_json=False) is ExitCode.USAGE
    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err.strip() == "bad flag"

    assert emit_error(NoResultsError(), as_json=True) is ExitCode.NO_RESULT
    captured = capsys.readouterr()
    assert json.loads(captured.err) == {"error": {"message": "no results", "exit_code": 3}}


@pytest.mark.unit
@pytest.mark.parametrize(
    ("args", "expected"),
    [(["--json", "x"], True), (["-j"], True), (["--json", "--plain"], False), (["records"], False)],
)
def test_json_requested(args: list[str], expected: bool) -> None:
    assert json_requested(args) is expected

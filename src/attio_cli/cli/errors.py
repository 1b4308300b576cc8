"""CLI exit codes and error rendering."""

from __future__ import annotations

import json
from collections.abc import Iterable
from enum import IntEnum
from typing import Any

import click
import typer

from attio_cli.clients.exceptions import AttioAPIError
from attio_cli.clients.http.pagination import PageFetchError, PaginationCancelled
from attio_cli.config.loader import AuthRequiredError
from attio_cli.core.exceptions import AttioCLIError
from attio_cli.core.log_events import LogEvents
from attio_cli.core.logger import UnifiedLogger

__all__ = [
    "ExitCode",
    "NoResultsError",
    "UsageError",
    "emit_error",
    "error_payload",
    "exit_code_for",
    "format_error",
    "json_requested",
    "unwrap_error",
]

_LOGIN_HINT = "Check ATTIO_API_KEY or run: attio auth login --api-key <key>"


class ExitCode(IntEnum):
    """Stable process exit codes."""

    SUCCESS = 0
    GENERIC = 1
    USAGE = 2
    NO_RESULT = 3
    AUTH = 4
    CANCELLED = 130


class UsageError(AttioCLIError):
    """Invalid flags or input supplied by the user."""


class NoResultsError(AttioCLIError):
    """A list or query returned nothing while ``--fail-empty`` was set."""

    def __init__(self, message: str = "no results") -> None:
        super().__init__(message)


def unwrap_error(error: BaseException) -> BaseException:
    """Return the API error hidden behind a pagination wrapper, if any."""

    if isinstance(error, PageFetchError):
        return error.cause
    return error


def exit_code_for(error: BaseException) -> ExitCode:
    error = unwrap_error(error)
    if isinstance(error, (UsageError, click.UsageError)):
        return ExitCode.USAGE
    if isinstance(error, NoResultsError):
        return ExitCode.NO_RESULT
    if isinstance(error, AuthRequiredError):
        return ExitCode.AUTH
    if isinstance(error, (PaginationCancelled, KeyboardInterrupt, click.Abort)):
        return ExitCode.CANCELLED
    return ExitCode.GENERIC


def _format_api_error(error: AttioAPIError) -> str:
    message = f"Attio API error ({error.status_code})"
    if error.code:
        message += f" {error.code}"
    if error.message:
        message += f": {error.message}"
    if error.status_code == 429 and error.retry_after:
        message += f" (retry-after: {error.retry_after})"
    if error.status_code in (401, 403):
        message += f"\n{_LOGIN_HINT}"
    return message


def format_error(error: BaseException) -> str:
    """Return the human readable message printed on stderr."""

    error = unwrap_error(error)
    if isinstance(error, AttioAPIError):
        return _format_api_error(error)
    if isinstance(error, click.UsageError):
        return error.format_message()
    if isinstance(error, (KeyboardInterrupt, click.Abort)):
        return "cancelled"
    return str(error).strip() or type(error).__name__


def _kind(error: BaseException) -> str | None:
    if isinstance(error, (UsageError, click.UsageError)):
        return "usage"
    if isinstance(error, AuthRequiredError):
        return "auth_required"
    if isinstance(error, AttioAPIError):
        return "api"
    if isinstance(error, (PaginationCancelled, KeyboardInterrupt, click.Abort)):
        return "cancelled"
    return None


def error_payload(error: BaseException) -> dict[str, Any]:
    """Build the object written under ``{"error": ...}`` in JSON mode."""

    code = exit_code_for(error)
    inner = unwrap_error(error)
    payload: dict[str, Any] = {
        "message": format_error(error),
        "exit_code": int(code),
    }
    kind = _kind(inner)
    if kind is not None:
        payload["kind"] = kind
    if isinstance(inner, AuthRequiredError):
        payload["code"] = "auth_required"
    if isinstance(inner, AttioAPIError):
        if inner.status_code:
            payload["status_code"] = inner.status_code
        if inner.type:
            payload["type"] = inner.type
        if inner.code:
            payload["code"] = inner.code
        if inner.message:
            payload["message"] = inner.message
        if inner.retry_after:
            payload["retry_after"] = inner.retry_after
    return payload


def emit_error(error: BaseException, *, as_json: bool) -> ExitCode:
    """Log ``error``, write it once on stderr and return its exit code."""

    code = exit_code_for(error)
    log = UnifiedLogger.get(__name__)
    event = LogEvents.CLI_RUN_CANCELLED if code is ExitCode.CANCELLED else LogEvents.CLI_RUN_ERROR
    log.debug(event, error_type=type(error).__name__, exit_code=int(code))

    if as_json:
        typer.echo(json.dumps({"error": error_payload(error)}, indent=2, ensure_ascii=False), err=True)
    else:
        typer.echo(format_error(error), err=True)
    return code


def json_requested(args: Iterable[str]) -> bool:
    """Detect ``--json`` in raw arguments when parsing itself failed."""

    wants_json = False
    wants_plain = False
    for arg in args:
        if arg in ("--json", "-j"):
            wants_json = True
        elif arg in ("--plain", "-p"):
            wants_plain = True
    return wants_json and not wants_plain

"""Tests for UnifiedLogger and the event registry."""

from __future__ import annotations

import logging

import pytest
from structlog.contextvars import bound_contextvars

from attio_cli.core.log_events import LogEvents
from attio_cli.core.logger import REDACTED, LogConfig, UnifiedLogger


@pytest.mark.unit
@pytest.mark.parametrize(
    ("member", "value"),
    [
        (LogEvents.CLI_RUN_START, "cli.run.start"),
        (LogEvents.HTTP_REQUEST_RETRY, "http.request.retry"),
        (LogEvents.HTTP_PAGINATOR_LIMIT_REACHED, "http.paginator.limit.reached"),
        (LogEvents.CONFIG_FILE_SAVED, "config.file.saved"),
    ],
)
def test_event_names_are_dotted(member: LogEvents, value: str) -> None:
    assert member.value == value
    assert str(member) == value


def _render(capsys: pytest.CaptureFixture[str], config: LogConfig, emit) -> str:
    UnifiedLogger.configure(config)
    emit(UnifiedLogger.get("attio_cli.test"))
    logging.getLogger().handlers[0].flush()
    return capsys.readouterr().err


@pytest.mark.unit
def test_credentials_are_redacted(capsys: pytest.CaptureFixture[str]) -> None:
    err = _render(
        capsys,
        LogConfig(level="DEBUG"),
        lambda log: log.debug(
            LogEvents.HTTP_REQUEST_COMPLETED,
            api_key="sk_live_123",
            Authorization="Bearer sk_live_123",
            error="401 for header Bearer sk_live_456 on /v2/self",
            status_code=200,
        ),
    )

    line = err.strip().splitlines()[-1]
    assert "sk_live_" not in line
    assert f"api_key={REDACTED}" in line
    assert f"Authorization={REDACTED}" in line
    assert f"Bearer {REDACTED} on /v2/self" in line
    assert "message=http.request.completed" in line
    assert "status_code=200" in line
    assert line.startswith("timestamp=")


@pytest.mark.unit
def test_command_context_is_rendered(capsys: pytest.CaptureFixture[str]) -> None:
    def emit(log) -> None:
        with bound_contextvars(command="records query"):
            log.warning(LogEvents.CLI_COMMAND_BLOCKED)
        log.warning(LogEvents.CLI_RUN_ERROR)

    first, second = _render(capsys, LogConfig(), emit).strip().splitlines()

    assert "level=warning command=records query message=cli.command.blocked" in first
    assert "command=" not in second


@pytest.mark.unit
def test_level_filter_drops_debug_by_default(capsys: pytest.CaptureFixture[str]) -> None:
    err = _render(
        capsys,
        LogConfig(),
        lambda log: (log.debug(LogEvents.HTTP_REQUEST_RETRY), log.warning(LogEvents.CLI_COMMAND_BLOCKED)),
    )

    assert "http.request.retry" not in err
    assert "message=cli.command.blocked" in err


@pytest.mark.unit
def test_reset_clears_bound_context(capsys: pytest.CaptureFixture[str]) -> None:
    def emit(log) -> None:
        with bound_contextvars(command="notes list"):
            UnifiedLogger.reset()
            UnifiedLogger.configure(LogConfig())
            UnifiedLogger.get("attio_cli.test").warning(LogEvents.CLI_RUN_ERROR)

    err = _render(capsys, LogConfig(), emit)

    assert "message=cli.run.error" in err
    assert "notes list" not in err


@pytest.mark.unit
def test_unknown_level_is_rejected() -> None:
    with pytest.raises(ValueError, match="Unsupported log level"):
        UnifiedLogger.configure(LogConfig(level="LOUD"))

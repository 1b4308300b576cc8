"""Per-invocation CLI state and the error boundary around commands."""

from __future__ import annotations

import functools
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, TypeVar

import click
import typer
from structlog.contextvars import bound_contextvars

from attio_cli.clients.api_client import AttioClient
from attio_cli.clients.http.pagination import (
    CancellationToken,
    CursorFetcher,
    OffsetFetcher,
    fetch_all_cursor,
    fetch_all_offset,
)
from attio_cli.config.environment import EnvironmentSettings
from attio_cli.config.loader import load_config, resolve_api_key, resolve_base_url
from attio_cli.config.models import ConfigFile, HTTPClientConfig
from attio_cli.core.log_events import LogEvents
from attio_cli.core.logger import UnifiedLogger

from .errors import NoResultsError, UsageError, emit_error
from .helpers import enforce_command_allowlist
from .output import Column, Printer, any_string, id_string
from .signals import cancel_on_interrupt

__all__ = ["CliState", "cli_command", "get_state"]

T = TypeVar("T")
F = TypeVar("F", bound=Callable[..., Any])


@dataclass
class CliState:
    """Options of the root command shared with every subcommand."""

    settings: EnvironmentSettings
    printer: Printer = field(default_factory=Printer)
    profile: str | None = None
    timeout_sec: float = 30.0
    dry_run: bool = False
    fail_empty: bool = False
    id_only: bool = False
    enable_commands: str | None = None
    token: CancellationToken = field(default_factory=CancellationToken)
    _config: ConfigFile | None = field(default=None, repr=False)
    _client: AttioClient | None = field(default=None, repr=False)

    # ------------------------------------------------------------------
    # Configuration and client
    # ------------------------------------------------------------------

    def config(self) -> ConfigFile:
        if self._config is None:
            self._config = load_config(settings=self.settings)
        return self._config

    def client(self) -> AttioClient:
        """Return the authenticated client, building it on first use."""
        if self._client is None:
            config = self.config()
            resolved = resolve_api_key(self.profile, settings=self.settings, config=config)
            http_config = HTTPClientConfig(
                base_url=resolve_base_url(self.profile, settings=self.settings, config=config),
                timeout_sec=self.timeout_sec,
            )
            self._client = AttioClient(http_config, resolved.key)
        return self._client

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None

    # ------------------------------------------------------------------
    # Pagination
    # ------------------------------------------------------------------

    def fetch_all_offset(self, fetch_page: OffsetFetcher[T], *, page_size: int, max_pages: int) -> list[T]:
        with cancel_on_interrupt(self.token):
            return fetch_all_offset(fetch_page, page_size=page_size, max_pages=max_pages, token=self.token)

    def fetch_all_cursor(self, fetch_page: CursorFetcher[T], *, max_pages: int) -> list[T]:
        with cancel_on_interrupt(self.token):
            return fetch_all_cursor(fetch_page, max_pages=max_pages, token=self.token)

    # ------------------------------------------------------------------
    # Output helpers
    # ------------------------------------------------------------------

    def maybe_dry_run(self, action: str, payload: Any | None = None) -> bool:
        """Print the intended action instead of running it under ``--dry-run``."""
        if not self.dry_run:
            return False
        if self.printer.is_json:
            self.printer.json({"dry_run": True, "action": action, "data": payload})
            return True
        self.printer.line(f"[dry-run] {action}")
        if payload is not None:
            self.printer.line(f"[dry-run] payload: {any_string(payload)}")
        return True

    def check_results(self, count: int) -> None:
        if count > 0 or not self.fail_empty:
            return
        if not self.printer.is_json:
            typer.echo("No results", err=True)
        raise NoResultsError()

    def maybe_id_only(self, resource: Mapping[str, Any]) -> bool:
        if not self.id_only:
            return False
        identifier = id_string(resource.get("id"))
        if not identifier:
            raise UsageError("--id-only requires a response with an id field")
        self.printer.line(identifier)
        return True

    def emit_items(
        self,
        items: Sequence[Mapping[str, Any]],
        columns: Sequence[Column],
        *,
        pagination: Mapping[str, Any] | None = None,
    ) -> None:
        self.check_results(len(items))
        if self.printer.is_json:
            payload: dict[str, Any] = {"data": list(items)}
            if pagination is not None:
                payload["pagination"] = dict(pagination)
            self.printer.json(payload)
            return
        self.printer.table(columns, items)

    def emit_item(self, item: Mapping[str, Any], columns: Sequence[Column]) -> None:
        if self.maybe_id_only(item):
            return
        if self.printer.is_json:
            self.printer.json({"data": item})
            return
        self.printer.table(columns, [item])

    def emit_deleted(self, label: str, identifier: str, payload: Mapping[str, Any]) -> None:
        if self.printer.is_json:
            self.printer.json({"deleted": True, **payload})
            return
        self.printer.line(f"Deleted {label} {identifier}")


def get_state(ctx: click.Context) -> CliState:
    state = ctx.find_root().obj
    if not isinstance(state, CliState):
        raise RuntimeError("CLI state is not initialised; invoke commands through the root app")
    return state


def _command_path(ctx: click.Context) -> str:
    # Drop the program name; the allowlist speaks in subcommand paths.
    return " ".join(ctx.command_path.split()[1:])


def cli_command(func: F) -> F:
    """Run a command callback inside the shared error boundary.

    The wrapper enforces ``--enable-commands``, renders any failure once on
    stderr (JSON when ``--json`` is active), maps it to a stable exit code
    and releases the HTTP session.
    """

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        ctx = click.get_current_context()
        state = get_state(ctx)
        command_path = _command_path(ctx)
        log = UnifiedLogger.get(__name__)
        try:
            with bound_contextvars(command=command_path):
                try:
                    enforce_command_allowlist(command_path, state.enable_commands)
                except UsageError:
                    log.warning(LogEvents.CLI_COMMAND_BLOCKED)
                    raise
                log.debug(LogEvents.CLI_RUN_START, profile=state.profile)
                return func(*args, **kwargs)
        except (typer.Exit, click.exceptions.Exit):
            raise
        except (Exception, KeyboardInterrupt) as exc:
            code = emit_error(exc, as_json=state.printer.is_json)
            raise typer.Exit(int(code)) from exc
        finally:
            state.close()

    return wrapper  # type: ignore[return-value]

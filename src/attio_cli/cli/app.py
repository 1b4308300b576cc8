"""Main Typer application for the Attio CLI.

The root callback turns global options into a :class:`CliState` stored on
the click context; every command group reads it from there.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Sequence

import click
import typer

from attio_cli import __version__
from attio_cli.cli.commands import (
    attributes,
    auth,
    comments,
    entries,
    lists,
    meetings,
    members,
    notes,
    objects,
    records,
    tasks,
    threads,
    webhooks,
)
from attio_cli.cli.commands._common import current_state
from attio_cli.cli.commands.self_info import show_self
from attio_cli.cli.context import CliState, cli_command
from attio_cli.cli.errors import ExitCode, UsageError, emit_error, json_requested
from attio_cli.cli.helpers import parse_timeout, split_comma_list
from attio_cli.cli.output import JSONTransform, OutputMode, Printer
from attio_cli.config.environment import EnvironmentSettings, load_environment_settings
from attio_cli.core.logger import DEFAULT_LOG_LEVEL, LogConfig, UnifiedLogger

__all__ = ["app", "create_app", "main", "run"]

PROG_NAME = "attio"
DEFAULT_TIMEOUT = "30s"


def _output_mode(settings: EnvironmentSettings, *, json_output: bool, plain: bool) -> OutputMode:
    if json_output and plain:
        raise UsageError("--json and --plain cannot be used together")
    if json_output:
        return OutputMode.JSON
    if plain:
        return OutputMode.PLAIN
    if settings.auto_json and not sys.stdout.isatty():
        return OutputMode.JSON
    return OutputMode.TABLE


def _build_state(
    *,
    profile: str,
    json_output: bool,
    plain: bool,
    id_only: bool,
    results_only: bool,
    select: str,
    dry_run: bool,
    fail_empty: bool,
    enable_commands: str,
    timeout: str,
) -> CliState:
    settings = load_environment_settings()
    mode = _output_mode(settings, json_output=json_output, plain=plain)
    transform = JSONTransform(results_only=results_only, select=tuple(split_comma_list(select)))
    return CliState(
        settings=settings,
        printer=Printer(mode=mode, transform=transform),
        profile=profile.strip() or None,
        timeout_sec=parse_timeout(timeout or settings.timeout or DEFAULT_TIMEOUT),
        dry_run=dry_run,
        fail_empty=fail_empty,
        id_only=id_only,
        enable_commands=enable_commands.strip() or settings.enable_commands,
    )


def _root_callback(
    ctx: typer.Context,
    profile: str = typer.Option("", "--profile", help="Config profile name"),
    json_output: bool = typer.Option(False, "--json", "-j", help="Output JSON to stdout"),
    plain: bool = typer.Option(False, "--plain", "-p", help="Output stable TSV to stdout"),
    id_only: bool = typer.Option(False, "--id-only", help="Print only the resource id"),
    results_only: bool = typer.Option(False, "--results-only", help="In JSON mode, emit only the primary result"),
    select: str = typer.Option("", "--select", help="In JSON mode, keep only these comma-separated fields"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Print the intended action without calling the API"),
    fail_empty: bool = typer.Option(False, "--fail-empty", help="Exit with code 3 when a list is empty"),
    enable_commands: str = typer.Option(
        "", "--enable-commands", help="Comma-separated allowlist of runnable commands"
    ),
    timeout: str = typer.Option("", "--timeout", help="HTTP timeout, e.g. 30s or 1m30s (default 30s)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging on stderr"),
) -> None:
    """Attio CRM from the command line."""

    UnifiedLogger.configure(LogConfig(level=logging.DEBUG if verbose else DEFAULT_LOG_LEVEL))
    try:
        ctx.obj = _build_state(
            profile=profile,
            json_output=json_output,
            plain=plain,
            id_only=id_only,
            results_only=results_only,
            select=select,
            dry_run=dry_run,
            fail_empty=fail_empty,
            enable_commands=enable_commands,
            timeout=timeout,
        )
    except UsageError as exc:
        code = emit_error(exc, as_json=json_output and not plain)
        raise typer.Exit(int(code)) from exc


@cli_command
def _version() -> None:
    """Print the CLI version."""

    state = current_state()
    if state.printer.is_json:
        state.printer.json({"version": __version__})
        return
    state.printer.line(__version__)


def create_app() -> typer.Typer:
    """Create the Typer application with every command group registered."""

    application = typer.Typer(
        name=PROG_NAME,
        help="Attio CRM from the command line.",
        add_completion=False,
        no_args_is_help=True,
    )
    application.callback()(_root_callback)

    for module in (
        auth,
        objects,
        records,
        lists,
        entries,
        notes,
        tasks,
        comments,
        threads,
        webhooks,
        meetings,
        attributes,
        members,
    ):
        application.add_typer(module.app)

    application.command("self", help="Show current token info")(show_self)
    application.command("version", help="Print version")(_version)
    application.command("search", help="Alias for 'records search' (Beta)")(records.search_records)
    application.command("query", help="Alias for 'records query'")(records.query_records)
    return application


app = create_app()


def main(argv: Sequence[str] | None = None) -> int:
    """Run the CLI and return its exit code instead of exiting."""

    args = list(sys.argv[1:] if argv is None else argv)
    command = typer.main.get_command(app)
    try:
        result = command.main(args=args, prog_name=PROG_NAME, standalone_mode=False)
    except click.ClickException as exc:
        if json_requested(args):
            return int(emit_error(exc, as_json=True))
        exc.show()
        return exc.exit_code
    except (click.Abort, KeyboardInterrupt) as exc:
        return int(emit_error(exc, as_json=json_requested(args)))
    return result if isinstance(result, int) else int(ExitCode.SUCCESS)


def run() -> None:
    """Entry point for the ``attio`` console script."""
    exit_code = main()
    if exit_code != 0:
        raise SystemExit(exit_code)

"""``attio threads``: comment threads."""

from __future__ import annotations

import typer

from attio_cli.cli.context import cli_command

from ._common import THREAD_COLUMNS, current_state, offset_pagination

__all__ = ["app"]

app = typer.Typer(name="threads", help="List and inspect comment threads.", no_args_is_help=True)


@app.command("list")
@cli_command
def list_threads(
    record_id: str = typer.Option(..., "--record-id", help="Record UUID"),
    obj: str = typer.Option(..., "--object", help="Object slug or UUID"),
    entry_id: str = typer.Option("", "--entry-id", help="Entry UUID"),
    list_id: str = typer.Option("", "--list", help="List slug or UUID"),
    limit: int = typer.Option(20, "--limit", help="Page size"),
    offset: int = typer.Option(0, "--offset", help="Offset"),
) -> None:
    state = current_state()
    items = state.client().threads.list(
        obj=obj, record_id=record_id, list_id=list_id, entry_id=entry_id, limit=limit, offset=offset
    )
    state.emit_items(items, THREAD_COLUMNS, pagination=offset_pagination(limit, offset, len(items)))


@app.command("get")
@cli_command
def get_thread(thread_id: str = typer.Argument(..., metavar="THREAD_ID", help="Thread UUID")) -> None:
    state = current_state()
    state.emit_item(state.client().threads.get(thread_id), THREAD_COLUMNS)

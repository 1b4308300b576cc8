"""``attio lists``: list definitions."""

from __future__ import annotations

import typer

from attio_cli.cli.context import cli_command
from attio_cli.cli.helpers import read_json_object

from ._common import LIST_COLUMNS, current_state

__all__ = ["app"]

app = typer.Typer(name="lists", help="List and manage lists.", no_args_is_help=True)

_DATA_HELP = "List data JSON; supports '-' or @file.json"


@app.command("list")
@cli_command
def list_lists() -> None:
    state = current_state()
    state.emit_items(state.client().lists.list(), LIST_COLUMNS)


@app.command("get")
@cli_command
def get_list(list_id: str = typer.Argument(..., metavar="LIST", help="List slug or UUID")) -> None:
    state = current_state()
    state.emit_item(state.client().lists.get(list_id), LIST_COLUMNS)


@app.command("create")
@cli_command
def create_list(data: str = typer.Option(..., "--data", help=_DATA_HELP)) -> None:
    state = current_state()
    payload = read_json_object(data)
    if state.maybe_dry_run("lists create", payload):
        return
    state.emit_item(state.client().lists.create(payload), LIST_COLUMNS)


@app.command("update")
@cli_command
def update_list(
    list_id: str = typer.Argument(..., metavar="LIST", help="List slug or UUID"),
    data: str = typer.Option(..., "--data", help=_DATA_HELP),
) -> None:
    state = current_state()
    payload = read_json_object(data)
    if state.maybe_dry_run("lists update", {"list": list_id, "data": payload}):
        return
    state.emit_item(state.client().lists.update(list_id, payload), LIST_COLUMNS)

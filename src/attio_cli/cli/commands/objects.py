"""``attio objects``: workspace object definitions."""

from __future__ import annotations

import typer

from attio_cli.cli.context import cli_command
from attio_cli.cli.helpers import read_json_object

from ._common import OBJECT_COLUMNS, current_state

__all__ = ["app"]

app = typer.Typer(name="objects", help="List and manage objects.", no_args_is_help=True)

_DATA_HELP = "Object data JSON; supports '-' or @file.json"


@app.command("list")
@cli_command
def list_objects() -> None:
    """List all objects in the workspace."""
    state = current_state()
    state.emit_items(state.client().objects.list(), OBJECT_COLUMNS)


@app.command("get")
@cli_command
def get_object(obj: str = typer.Argument(..., metavar="OBJECT", help="Object slug or UUID")) -> None:
    state = current_state()
    state.emit_item(state.client().objects.get(obj), OBJECT_COLUMNS)


@app.command("create")
@cli_command
def create_object(data: str = typer.Option(..., "--data", help=_DATA_HELP)) -> None:
    state = current_state()
    payload = read_json_object(data)
    if state.maybe_dry_run("objects create", payload):
        return
    state.emit_item(state.client().objects.create(payload), OBJECT_COLUMNS)


@app.command("update")
@cli_command
def update_object(
    obj: str = typer.Argument(..., metavar="OBJECT", help="Object slug or UUID"),
    data: str = typer.Option(..., "--data", help=_DATA_HELP),
) -> None:
    state = current_state()
    payload = read_json_object(data)
    if state.maybe_dry_run("objects update", {"object": obj, "data": payload}):
        return
    state.emit_item(state.client().objects.update(obj, payload), OBJECT_COLUMNS)

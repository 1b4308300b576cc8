"""``attio members``: workspace members."""

from __future__ import annotations

import typer

from attio_cli.cli.context import cli_command

from ._common import MEMBER_COLUMNS, current_state

__all__ = ["app"]

app = typer.Typer(name="members", help="Workspace members.", no_args_is_help=True)


@app.command("list")
@cli_command
def list_members() -> None:
    state = current_state()
    state.emit_items(state.client().members.list(), MEMBER_COLUMNS)


@app.command("get")
@cli_command
def get_member(member_id: str = typer.Argument(..., metavar="MEMBER_ID", help="Workspace member UUID")) -> None:
    state = current_state()
    state.emit_item(state.client().members.get(member_id), MEMBER_COLUMNS)

"""``attio entries``: list entries."""

from __future__ import annotations

from typing import Any

import typer

from attio_cli.cli.context import cli_command
from attio_cli.cli.helpers import read_json_object, read_json_value

from ._common import (
    DEFAULT_MAX_PAGES,
    ENTRY_COLUMNS,
    VALUE_COLUMNS,
    current_state,
    fetch_offset_pages,
    offset_pagination,
)

__all__ = ["app"]

DEFAULT_QUERY_LIMIT = 500

app = typer.Typer(name="entries", help="Create, query and manage list entries.", no_args_is_help=True)
values_app = typer.Typer(name="values", help="Entry attribute values.", no_args_is_help=True)
app.add_typer(values_app)

_DATA_HELP = "Entry data JSON; supports '-' or @file.json"


def _list_argument() -> Any:
    return typer.Argument(..., metavar="LIST", help="List slug or UUID")


def _entry_argument() -> Any:
    return typer.Argument(..., metavar="ENTRY_ID", help="Entry UUID")


@app.command("create")
@cli_command
def create_entry(
    list_id: str = _list_argument(),
    data: str = typer.Option(..., "--data", help=_DATA_HELP),
) -> None:
    state = current_state()
    payload = read_json_object(data)
    if state.maybe_dry_run("entries create", {"list": list_id, "data": payload}):
        return
    state.emit_item(state.client().entries.create(list_id, payload), ENTRY_COLUMNS)


@app.command("assert")
@cli_command
def assert_entry(
    list_id: str = _list_argument(),
    data: str = typer.Option(..., "--data", help=_DATA_HELP),
) -> None:
    """Create or update the entry of the parent record in ``--data``."""

    state = current_state()
    payload = read_json_object(data)
    if state.maybe_dry_run("entries assert", {"list": list_id, "data": payload}):
        return
    state.emit_item(state.client().entries.assert_(list_id, payload), ENTRY_COLUMNS)


@app.command("query")
@cli_command
def query_entries(
    list_id: str = _list_argument(),
    filter_: str = typer.Option("", "--filter", help="Filter JSON object"),
    sorts: str = typer.Option("", "--sorts", help="Sorts JSON array"),
    limit: int = typer.Option(DEFAULT_QUERY_LIMIT, "--limit", help="Page size"),
    offset: int = typer.Option(0, "--offset", help="Offset for first page"),
    all_pages: bool = typer.Option(False, "--all", help="Fetch all pages"),
    max_pages: int = typer.Option(
        DEFAULT_MAX_PAGES, "--max-pages", help="Maximum pages to fetch when --all is set"
    ),
) -> None:
    state = current_state()
    filter_value = read_json_value(filter_, flag_name="--filter") if filter_.strip() else None
    sorts_value = read_json_value(sorts, flag_name="--sorts") if sorts.strip() else None
    page_size = limit if limit > 0 else DEFAULT_QUERY_LIMIT
    entries_client = state.client().entries

    items, pagination = fetch_offset_pages(
        state,
        lambda page_limit, page_offset: entries_client.query(
            list_id, filter=filter_value, sorts=sorts_value, limit=page_limit, offset=page_offset
        ),
        limit=page_size,
        offset=offset,
        all_pages=all_pages,
        max_pages=max_pages,
    )
    state.emit_items(items, ENTRY_COLUMNS, pagination=pagination)


@app.command("get")
@cli_command
def get_entry(list_id: str = _list_argument(), entry_id: str = _entry_argument()) -> None:
    state = current_state()
    state.emit_item(state.client().entries.get(list_id, entry_id), ENTRY_COLUMNS)


@app.command("update")
@cli_command
def update_entry(
    list_id: str = _list_argument(),
    entry_id: str = _entry_argument(),
    data: str = typer.Option(..., "--data", help=_DATA_HELP),
) -> None:
    state = current_state()
    payload = read_json_object(data)
    if state.maybe_dry_run("entries update", {"list": list_id, "entry_id": entry_id, "data": payload}):
        return
    state.emit_item(state.client().entries.update(list_id, entry_id, payload), ENTRY_COLUMNS)


@app.command("replace")
@cli_command
def replace_entry(
    list_id: str = _list_argument(),
    entry_id: str = _entry_argument(),
    data: str = typer.Option(..., "--data", help=_DATA_HELP),
) -> None:
    state = current_state()
    payload = read_json_object(data)
    if state.maybe_dry_run("entries replace", {"list": list_id, "entry_id": entry_id, "data": payload}):
        return
    state.emit_item(state.client().entries.replace(list_id, entry_id, payload), ENTRY_COLUMNS)


@app.command("delete")
@cli_command
def delete_entry(list_id: str = _list_argument(), entry_id: str = _entry_argument()) -> None:
    state = current_state()
    target = {"list": list_id, "entry_id": entry_id}
    if state.maybe_dry_run("entries delete", target):
        return
    state.client().entries.delete(list_id, entry_id)
    state.emit_deleted("entry", entry_id, target)


@values_app.command("list")
@cli_command
def list_entry_values(
    list_id: str = _list_argument(),
    entry_id: str = _entry_argument(),
    attribute: str = typer.Argument(..., metavar="ATTRIBUTE", help="Attribute slug or UUID"),
    show_historic: bool = typer.Option(False, "--show-historic", help="Include historic values"),
    limit: int = typer.Option(0, "--limit", help="Page size"),
    offset: int = typer.Option(0, "--offset", help="Offset"),
) -> None:
    state = current_state()
    items = state.client().entries.list_attribute_values(
        list_id, entry_id, attribute, show_historic=show_historic, limit=limit, offset=offset
    )
    state.emit_items(items, VALUE_COLUMNS, pagination=offset_pagination(limit, offset, len(items)))

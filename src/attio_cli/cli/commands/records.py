"""``attio records``: create, query and manage object records."""

from __future__ import annotations

from typing import Any

import typer

from attio_cli.cli.context import cli_command
from attio_cli.cli.errors import UsageError
from attio_cli.cli.helpers import read_json_object, read_json_value, split_comma_list

from ._common import (
    DEFAULT_MAX_PAGES,
    RECORD_COLUMNS,
    RECORD_ENTRY_COLUMNS,
    VALUE_COLUMNS,
    current_state,
    fetch_offset_pages,
    offset_pagination,
)

__all__ = ["app", "query_records", "search_records"]

DEFAULT_QUERY_LIMIT = 500
DEFAULT_SEARCH_LIMIT = 25

app = typer.Typer(name="records", help="Create, query and manage records.", no_args_is_help=True)
values_app = typer.Typer(name="values", help="Record attribute values.", no_args_is_help=True)
entries_app = typer.Typer(name="entries", help="List entries for a record.", no_args_is_help=True)
app.add_typer(values_app)
app.add_typer(entries_app)

_DATA_HELP = "Record data JSON; supports '-' or @file.json"
_OBJECT_HELP = "Object slug or UUID"


def _object_argument() -> Any:
    return typer.Argument(..., metavar="OBJECT", help=_OBJECT_HELP)


def _record_argument() -> Any:
    return typer.Argument(..., metavar="RECORD_ID", help="Record UUID")


@app.command("create")
@cli_command
def create_record(
    obj: str = _object_argument(),
    data: str = typer.Option(..., "--data", help=_DATA_HELP),
) -> None:
    state = current_state()
    payload = read_json_object(data)
    if state.maybe_dry_run("records create", {"object": obj, "data": payload}):
        return
    state.emit_item(state.client().records.create(obj, payload), RECORD_COLUMNS)


@app.command("assert")
@cli_command
def assert_record(
    obj: str = _object_argument(),
    matching_attribute: str = typer.Option(
        ..., "--matching-attribute", help="Matching attribute slug or UUID"
    ),
    data: str = typer.Option(..., "--data", help=_DATA_HELP),
) -> None:
    """Create or update the record matching ``--matching-attribute``."""

    state = current_state()
    payload = read_json_object(data)
    action = {"object": obj, "matching_attribute": matching_attribute, "data": payload}
    if state.maybe_dry_run("records assert", action):
        return
    state.emit_item(state.client().records.assert_(obj, matching_attribute, payload), RECORD_COLUMNS)


@app.command("query")
@cli_command
def query_records(
    obj: str = _object_argument(),
    filter_: str = typer.Option("", "--filter", help="Filter JSON object"),
    sorts: str = typer.Option("", "--sorts", help="Sorts JSON array"),
    limit: int = typer.Option(DEFAULT_QUERY_LIMIT, "--limit", help="Page size"),
    offset: int = typer.Option(0, "--offset", help="Offset for first page"),
    all_pages: bool = typer.Option(False, "--all", help="Fetch all pages"),
    max_pages: int = typer.Option(
        DEFAULT_MAX_PAGES, "--max-pages", help="Maximum pages to fetch when --all is set"
    ),
) -> None:
    """Query records of an object with optional filter and sorts."""

    state = current_state()
    filter_value = read_json_value(filter_, flag_name="--filter") if filter_.strip() else None
    sorts_value = read_json_value(sorts, flag_name="--sorts") if sorts.strip() else None
    page_size = limit if limit > 0 else DEFAULT_QUERY_LIMIT
    records_client = state.client().records

    items, pagination = fetch_offset_pages(
        state,
        lambda page_limit, page_offset: records_client.query(
            obj, filter=filter_value, sorts=sorts_value, limit=page_limit, offset=page_offset
        ),
        limit=page_size,
        offset=offset,
        all_pages=all_pages,
        max_pages=max_pages,
    )
    state.emit_items(items, RECORD_COLUMNS, pagination=pagination)


@app.command("search")
@cli_command
def search_records(
    query: str = typer.Argument(..., metavar="QUERY", help="Search query"),
    objects: str = typer.Option(..., "--objects", help="Comma-separated object slugs/UUIDs"),
    limit: int = typer.Option(DEFAULT_SEARCH_LIMIT, "--limit", help="Max results (1-25)"),
    request_as: str = typer.Option(
        "", "--request-as", help='Request context JSON (defaults to {"type":"workspace"})'
    ),
) -> None:
    """Full-text search across objects (Beta)."""

    state = current_state()
    object_names = split_comma_list(objects)
    if not object_names:
        raise UsageError("--objects is required")
    context = read_json_value(request_as, flag_name="--request-as") if request_as.strip() else None
    items = state.client().records.search(query, objects=object_names, limit=limit, request_as=context)
    state.emit_items(items, RECORD_COLUMNS)


@app.command("get")
@cli_command
def get_record(obj: str = _object_argument(), record_id: str = _record_argument()) -> None:
    state = current_state()
    state.emit_item(state.client().records.get(obj, record_id), RECORD_COLUMNS)


@app.command("update")
@cli_command
def update_record(
    obj: str = _object_argument(),
    record_id: str = _record_argument(),
    data: str = typer.Option(..., "--data", help=_DATA_HELP),
) -> None:
    """Update a record; multiselect values are appended."""

    state = current_state()
    payload = read_json_object(data)
    if state.maybe_dry_run("records update", {"object": obj, "record_id": record_id, "data": payload}):
        return
    state.emit_item(state.client().records.update(obj, record_id, payload), RECORD_COLUMNS)


@app.command("replace")
@cli_command
def replace_record(
    obj: str = _object_argument(),
    record_id: str = _record_argument(),
    data: str = typer.Option(..., "--data", help=_DATA_HELP),
) -> None:
    """Replace a record; multiselect values are overwritten."""

    state = current_state()
    payload = read_json_object(data)
    if state.maybe_dry_run("records replace", {"object": obj, "record_id": record_id, "data": payload}):
        return
    state.emit_item(state.client().records.replace(obj, record_id, payload), RECORD_COLUMNS)


@app.command("delete")
@cli_command
def delete_record(obj: str = _object_argument(), record_id: str = _record_argument()) -> None:
    state = current_state()
    target = {"object": obj, "record_id": record_id}
    if state.maybe_dry_run("records delete", target):
        return
    state.client().records.delete(obj, record_id)
    state.emit_deleted("record", record_id, target)


@values_app.command("list")
@cli_command
def list_record_values(
    obj: str = _object_argument(),
    record_id: str = _record_argument(),
    attribute: str = typer.Argument(..., metavar="ATTRIBUTE", help="Attribute slug or UUID"),
    show_historic: bool = typer.Option(False, "--show-historic", help="Include historic values"),
    limit: int = typer.Option(0, "--limit", help="Page size"),
    offset: int = typer.Option(0, "--offset", help="Offset"),
) -> None:
    state = current_state()
    items = state.client().records.list_attribute_values(
        obj, record_id, attribute, show_historic=show_historic, limit=limit, offset=offset
    )
    state.emit_items(
        items,
        VALUE_COLUMNS,
        pagination=offset_pagination(limit, offset, len(items)),
    )


@entries_app.command("list")
@cli_command
def list_record_entries(
    obj: str = _object_argument(),
    record_id: str = _record_argument(),
    limit: int = typer.Option(0, "--limit", help="Page size"),
    offset: int = typer.Option(0, "--offset", help="Offset"),
) -> None:
    state = current_state()
    items = state.client().records.list_entries(obj, record_id, limit=limit, offset=offset)
    state.emit_items(
        items,
        RECORD_ENTRY_COLUMNS,
        pagination=offset_pagination(limit, offset, len(items)),
    )

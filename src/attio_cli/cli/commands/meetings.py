"""``attio meetings``: meetings, call recordings and transcripts."""

from __future__ import annotations

from typing import Any

import typer

from attio_cli.cli.context import CliState, cli_command
from attio_cli.cli.helpers import read_json_object

from ._common import (
    DEFAULT_MAX_PAGES,
    MEETING_COLUMNS,
    RECORDING_COLUMNS,
    TRANSCRIPT_COLUMNS,
    current_state,
    fetch_cursor_pages,
)

__all__ = ["app"]

DEFAULT_PAGE_SIZE = 50

app = typer.Typer(name="meetings", help="Meetings, recordings and transcripts (Beta).", no_args_is_help=True)
recordings_app = typer.Typer(name="recordings", help="Manage call recordings (Alpha/Beta).", no_args_is_help=True)
app.add_typer(recordings_app)

_ALL_HELP = "Fetch all pages"
_MAX_PAGES_HELP = "Maximum pages when --all is set"


def _meeting_argument() -> Any:
    return typer.Argument(..., metavar="MEETING_ID", help="Meeting UUID")


def _recording_argument() -> Any:
    return typer.Argument(..., metavar="RECORDING_ID", help="Call recording UUID")


def _emit_cursor_items(
    state: CliState,
    items: list[dict[str, Any]],
    next_cursor: str,
    columns: Any,
    *,
    all_pages: bool,
) -> None:
    # A full walk has nothing left to resume from, so it omits the cursor.
    pagination = None if all_pages else {"next_cursor": next_cursor}
    state.emit_items(items, columns, pagination=pagination)


@app.command("list")
@cli_command
def list_meetings(
    limit: int = typer.Option(DEFAULT_PAGE_SIZE, "--limit", help="Page size"),
    cursor: str = typer.Option("", "--cursor", help="Cursor"),
    sort: str = typer.Option("", "--sort", help="Sort order"),
    participants: str = typer.Option("", "--participants", help="Participants filter"),
    linked_object: str = typer.Option("", "--linked-object", help="Linked object slug or UUID"),
    linked_record_id: str = typer.Option("", "--linked-record-id", help="Linked record UUID"),
    ends_from: str = typer.Option("", "--ends-from", help="ISO timestamp lower bound for end"),
    starts_before: str = typer.Option("", "--starts-before", help="ISO timestamp upper bound for start"),
    timezone: str = typer.Option("", "--timezone", help="IANA timezone"),
    all_pages: bool = typer.Option(False, "--all", help=_ALL_HELP),
    max_pages: int = typer.Option(DEFAULT_MAX_PAGES, "--max-pages", help=_MAX_PAGES_HELP),
) -> None:
    """List meetings (Beta)."""

    state = current_state()
    meetings = state.client().meetings
    items, next_cursor = fetch_cursor_pages(
        state,
        lambda page_cursor: meetings.list(
            limit=limit,
            cursor=page_cursor,
            sort=sort,
            participants=participants,
            linked_object=linked_object,
            linked_record_id=linked_record_id,
            ends_from=ends_from,
            starts_before=starts_before,
            timezone=timezone,
        ),
        cursor=cursor,
        all_pages=all_pages,
        max_pages=max_pages,
    )
    _emit_cursor_items(state, items, next_cursor, MEETING_COLUMNS, all_pages=all_pages)


@app.command("get")
@cli_command
def get_meeting(meeting_id: str = _meeting_argument()) -> None:
    state = current_state()
    state.emit_item(state.client().meetings.get(meeting_id), MEETING_COLUMNS)


@app.command("create")
@cli_command
def create_meeting(
    data: str = typer.Option(..., "--data", help="Meeting payload JSON; supports '-' or @file.json"),
) -> None:
    """Find or create a meeting (Alpha)."""

    state = current_state()
    payload = read_json_object(data)
    if state.maybe_dry_run("meetings create", payload):
        return
    state.emit_item(state.client().meetings.find_or_create(payload), MEETING_COLUMNS)


@app.command("transcript")
@cli_command
def get_transcript(
    meeting_id: str = _meeting_argument(),
    recording_id: str = _recording_argument(),
    cursor: str = typer.Option("", "--cursor", help="Cursor"),
    all_pages: bool = typer.Option(False, "--all", help=_ALL_HELP),
    max_pages: int = typer.Option(DEFAULT_MAX_PAGES, "--max-pages", help=_MAX_PAGES_HELP),
) -> None:
    """Get transcript segments of a call recording (Beta)."""

    state = current_state()
    meetings = state.client().meetings
    items, next_cursor = fetch_cursor_pages(
        state,
        lambda page_cursor: meetings.transcript(meeting_id, recording_id, cursor=page_cursor),
        cursor=cursor,
        all_pages=all_pages,
        max_pages=max_pages,
    )
    _emit_cursor_items(state, items, next_cursor, TRANSCRIPT_COLUMNS, all_pages=all_pages)


@recordings_app.command("list")
@cli_command
def list_recordings(
    meeting_id: str = _meeting_argument(),
    limit: int = typer.Option(DEFAULT_PAGE_SIZE, "--limit", help="Page size"),
    cursor: str = typer.Option("", "--cursor", help="Cursor"),
    all_pages: bool = typer.Option(False, "--all", help=_ALL_HELP),
    max_pages: int = typer.Option(DEFAULT_MAX_PAGES, "--max-pages", help=_MAX_PAGES_HELP),
) -> None:
    state = current_state()
    meetings = state.client().meetings
    items, next_cursor = fetch_cursor_pages(
        state,
        lambda page_cursor: meetings.list_recordings(meeting_id, limit=limit, cursor=page_cursor),
        cursor=cursor,
        all_pages=all_pages,
        max_pages=max_pages,
    )
    _emit_cursor_items(state, items, next_cursor, RECORDING_COLUMNS, all_pages=all_pages)


@recordings_app.command("get")
@cli_command
def get_recording(meeting_id: str = _meeting_argument(), recording_id: str = _recording_argument()) -> None:
    state = current_state()
    state.emit_item(state.client().meetings.get_recording(meeting_id, recording_id), RECORDING_COLUMNS)


@recordings_app.command("create")
@cli_command
def create_recording(
    meeting_id: str = _meeting_argument(),
    data: str = typer.Option(..., "--data", help="Call recording payload JSON; supports '-' or @file.json"),
) -> None:
    state = current_state()
    payload = read_json_object(data)
    if state.maybe_dry_run("meetings recordings create", {"meeting_id": meeting_id, "data": payload}):
        return
    state.emit_item(state.client().meetings.create_recording(meeting_id, payload), RECORDING_COLUMNS)


@recordings_app.command("delete")
@cli_command
def delete_recording(meeting_id: str = _meeting_argument(), recording_id: str = _recording_argument()) -> None:
    state = current_state()
    target = {"meeting_id": meeting_id, "call_recording_id": recording_id}
    if state.maybe_dry_run("meetings recordings delete", target):
        return
    state.client().meetings.delete_recording(meeting_id, recording_id)
    state.emit_deleted("call recording", recording_id, target)

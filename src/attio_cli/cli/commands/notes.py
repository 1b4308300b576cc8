"""``attio notes``: notes attached to records."""

from __future__ import annotations

from typing import Any, Final

import typer

from attio_cli.cli.context import cli_command
from attio_cli.cli.errors import UsageError

from ._common import NOTE_COLUMNS, current_state, nullable, offset_pagination, optional_payload

__all__ = ["app", "build_note_payload"]

NOTE_FORMATS: Final[tuple[str, ...]] = ("plaintext", "markdown")
_REQUIRED_FIELDS: Final[tuple[str, ...]] = ("parent_object", "parent_record_id", "title", "format", "content")

app = typer.Typer(name="notes", help="List and manage notes.", no_args_is_help=True)


def build_note_payload(
    data: str = "",
    *,
    parent_object: str = "",
    parent_record_id: str = "",
    title: str = "",
    content: str = "",
    format_: str = "",
    created_at: str = "",
    meeting_id: str = "",
) -> dict[str, Any]:
    """Merge ``--data`` with the named flags; flags win over the JSON body."""

    payload = optional_payload(data)
    for key, value in (
        ("parent_object", parent_object),
        ("parent_record_id", parent_record_id),
        ("title", title),
        ("content", content),
        ("created_at", created_at),
    ):
        if value:
            payload[key] = value
    if format_:
        if format_ not in NOTE_FORMATS:
            raise UsageError("--format must be one of: plaintext, markdown")
        payload["format"] = format_
    else:
        payload.setdefault("format", "plaintext")
    if meeting_id:
        payload["meeting_id"] = nullable(meeting_id)

    missing = [key for key in _REQUIRED_FIELDS if key not in payload]
    if missing:
        raise UsageError("notes create requires: " + ", ".join(missing))
    return payload


@app.command("list")
@cli_command
def list_notes(
    parent_object: str = typer.Option(..., "--parent-object", help="Parent object slug or UUID"),
    parent_record_id: str = typer.Option(..., "--parent-record", help="Parent record UUID"),
    limit: int = typer.Option(10, "--limit", help="Page size"),
    offset: int = typer.Option(0, "--offset", help="Offset"),
) -> None:
    state = current_state()
    items = state.client().notes.list(
        parent_object=parent_object, parent_record_id=parent_record_id, limit=limit, offset=offset
    )
    state.emit_items(items, NOTE_COLUMNS, pagination=offset_pagination(limit, offset, len(items)))


@app.command("create")
@cli_command
def create_note(
    data: str = typer.Option("", "--data", help="Optional note payload JSON; supports '-' or @file.json"),
    parent_object: str = typer.Option("", "--parent-object", help="Parent object slug or UUID"),
    parent_record_id: str = typer.Option("", "--parent-record", help="Parent record UUID"),
    title: str = typer.Option("", "--title", help="Note title"),
    content: str = typer.Option("", "--content", help="Note content"),
    format_: str = typer.Option("", "--format", help="Content format (plaintext|markdown, defaults to plaintext)"),
    created_at: str = typer.Option("", "--created-at", help="Optional created timestamp (ISO 8601)"),
    meeting_id: str = typer.Option("", "--meeting-id", help="Optional meeting UUID or 'null'"),
) -> None:
    state = current_state()
    payload = build_note_payload(
        data,
        parent_object=parent_object,
        parent_record_id=parent_record_id,
        title=title,
        content=content,
        format_=format_,
        created_at=created_at,
        meeting_id=meeting_id,
    )
    if state.maybe_dry_run("notes create", payload):
        return
    state.emit_item(state.client().notes.create(payload), NOTE_COLUMNS)


@app.command("get")
@cli_command
def get_note(note_id: str = typer.Argument(..., metavar="NOTE_ID", help="Note UUID")) -> None:
    state = current_state()
    state.emit_item(state.client().notes.get(note_id), NOTE_COLUMNS)


@app.command("delete")
@cli_command
def delete_note(note_id: str = typer.Argument(..., metavar="NOTE_ID", help="Note UUID")) -> None:
    state = current_state()
    if state.maybe_dry_run("notes delete", {"note_id": note_id}):
        return
    state.client().notes.delete(note_id)
    state.emit_deleted("note", note_id, {"note_id": note_id})

"""``attio comments``: comments on threads, records and entries."""

from __future__ import annotations

from typing import Any, Final

import typer

from attio_cli.cli.context import cli_command
from attio_cli.cli.errors import UsageError

from ._common import COMMENT_COLUMNS, current_state, optional_payload

__all__ = ["app", "build_comment_payload"]

_TARGET_KEYS: Final[tuple[str, ...]] = ("thread_id", "record", "entry")
_REQUIRED_FIELDS: Final[tuple[str, ...]] = ("author", "content", "format")

app = typer.Typer(name="comments", help="Create and manage comments.", no_args_is_help=True)


def _set_target(payload: dict[str, Any], key: str, value: Any) -> None:
    # A flag target replaces whatever target the JSON body carried.
    for other in _TARGET_KEYS:
        payload.pop(other, None)
    payload[key] = value


def build_comment_payload(
    data: str = "",
    *,
    author: str = "",
    content: str = "",
    format_: str = "",
    created_at: str = "",
    thread_id: str = "",
    record_object: str = "",
    record_id: str = "",
    entry_list: str = "",
    entry_id: str = "",
) -> dict[str, Any]:
    """Build a comment body that names exactly one target.

    The target is a thread reply (``--thread``), a new record thread
    (``--record-object``/``--record-id``) or a new entry thread
    (``--entry-list``/``--entry-id``).
    """

    payload = optional_payload(data)
    if author:
        payload["author"] = {"type": "workspace-member", "id": author}
    if content:
        payload["content"] = content
    if format_:
        payload["format"] = format_
    else:
        payload.setdefault("format", "plaintext")
    if created_at:
        payload["created_at"] = created_at

    flag_targets = 0
    if thread_id:
        flag_targets += 1
    if record_object or record_id:
        if not (record_object and record_id):
            raise UsageError("--record-object and --record-id must be provided together")
        flag_targets += 1
    if entry_list or entry_id:
        if not (entry_list and entry_id):
            raise UsageError("--entry-list and --entry-id must be provided together")
        flag_targets += 1
    if flag_targets > 1:
        raise UsageError(
            "only one target mode can be set: --thread, --record-object/--record-id, or --entry-list/--entry-id"
        )

    if thread_id:
        _set_target(payload, "thread_id", thread_id)
    elif record_object:
        _set_target(payload, "record", {"object": record_object, "record_id": record_id})
    elif entry_list:
        _set_target(payload, "entry", {"list": entry_list, "entry_id": entry_id})

    missing = [key for key in _REQUIRED_FIELDS if key not in payload]
    if missing:
        raise UsageError("comments create requires: " + ", ".join(missing))
    if sum(1 for key in _TARGET_KEYS if key in payload) != 1:
        raise UsageError(
            "comments create requires one of: --thread, --record-object/--record-id, or --entry-list/--entry-id"
        )
    return payload


@app.command("create")
@cli_command
def create_comment(
    data: str = typer.Option("", "--data", help="Optional comment payload JSON; supports '-' or @file.json"),
    author: str = typer.Option("", "--author", help="Author workspace member UUID"),
    content: str = typer.Option("", "--content", "--body", help="Comment content text"),
    format_: str = typer.Option("", "--format", help="Body format (plaintext|markdown, defaults to plaintext)"),
    created_at: str = typer.Option("", "--created-at", help="Optional created timestamp (ISO 8601)"),
    thread_id: str = typer.Option("", "--thread", help="Existing thread UUID to reply to"),
    record_object: str = typer.Option("", "--record-object", help="Record object slug/UUID for new top-level comment"),
    record_id: str = typer.Option("", "--record-id", help="Record UUID for new top-level comment"),
    entry_list: str = typer.Option("", "--entry-list", help="List slug/UUID for new top-level comment"),
    entry_id: str = typer.Option("", "--entry-id", help="Entry UUID for new top-level comment"),
) -> None:
    state = current_state()
    payload = build_comment_payload(
        data,
        author=author,
        content=content,
        format_=format_,
        created_at=created_at,
        thread_id=thread_id,
        record_object=record_object,
        record_id=record_id,
        entry_list=entry_list,
        entry_id=entry_id,
    )
    if state.maybe_dry_run("comments create", payload):
        return
    state.emit_item(state.client().comments.create(payload), COMMENT_COLUMNS)


@app.command("get")
@cli_command
def get_comment(comment_id: str = typer.Argument(..., metavar="COMMENT_ID", help="Comment UUID")) -> None:
    state = current_state()
    state.emit_item(state.client().comments.get(comment_id), COMMENT_COLUMNS)


@app.command("delete")
@cli_command
def delete_comment(comment_id: str = typer.Argument(..., metavar="COMMENT_ID", help="Comment UUID")) -> None:
    state = current_state()
    if state.maybe_dry_run("comments delete", {"comment_id": comment_id}):
        return
    state.client().comments.delete(comment_id)
    state.emit_deleted("comment", comment_id, {"comment_id": comment_id})

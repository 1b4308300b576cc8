"""``attio tasks``: workspace tasks."""

from __future__ import annotations

from typing import Any

import typer

from attio_cli.cli.context import cli_command
from attio_cli.cli.errors import UsageError
from attio_cli.cli.helpers import parse_json_array, parse_optional_bool, split_comma_list

from ._common import TASK_COLUMNS, current_state, nullable, offset_pagination, optional_payload

__all__ = ["app", "build_task_create_payload", "build_task_update_payload", "parse_assignees"]

app = typer.Typer(name="tasks", help="List and manage tasks.", no_args_is_help=True)

_DATA_HELP = "Optional task payload JSON; supports '-' or @file.json"
_DEADLINE_HELP = "Task deadline timestamp (ISO 8601) or 'null'"
_ASSIGNEES_HELP = "Comma-separated assignee IDs or emails"
_LINKED_HELP = "Linked records JSON array"
_COMPLETED_HELP = "Task completion state (true|false)"


def parse_assignees(value: str) -> list[dict[str, str]]:
    """Emails address members by email; anything else is a member id."""

    assignees: list[dict[str, str]] = []
    for part in split_comma_list(value):
        if "@" in part:
            assignees.append({"workspace_member_email_address": part})
        else:
            assignees.append({"referenced_actor_type": "workspace-member", "referenced_actor_id": part})
    return assignees


def _apply_task_flags(
    payload: dict[str, Any],
    *,
    deadline: str,
    assignees: str,
    linked_records: str,
    is_completed: str,
) -> None:
    if deadline:
        payload["deadline_at"] = nullable(deadline)
    completed = parse_optional_bool(is_completed, "--is-completed")
    if completed is not None:
        payload["is_completed"] = completed
    if assignees:
        payload["assignees"] = parse_assignees(assignees)
    records = parse_json_array(linked_records, "--linked-records")
    if records is not None:
        payload["linked_records"] = records


def build_task_create_payload(
    data: str = "",
    *,
    content: str = "",
    deadline: str = "",
    assignees: str = "",
    linked_records: str = "",
    is_completed: str = "",
) -> dict[str, Any]:
    payload = optional_payload(data)
    if content:
        payload["content"] = content
    _apply_task_flags(
        payload,
        deadline=deadline,
        assignees=assignees,
        linked_records=linked_records,
        is_completed=is_completed,
    )
    if "content" not in payload:
        raise UsageError("tasks create requires --content (or content in --data)")
    payload.setdefault("format", "plaintext")
    payload.setdefault("deadline_at", None)
    payload.setdefault("is_completed", False)
    payload.setdefault("linked_records", [])
    payload.setdefault("assignees", [])
    return payload


def build_task_update_payload(
    data: str = "",
    *,
    deadline: str = "",
    assignees: str = "",
    linked_records: str = "",
    is_completed: str = "",
) -> dict[str, Any]:
    payload = optional_payload(data)
    _apply_task_flags(
        payload,
        deadline=deadline,
        assignees=assignees,
        linked_records=linked_records,
        is_completed=is_completed,
    )
    if not payload:
        raise UsageError("tasks update requires at least one update field")
    if "content" in payload:
        raise UsageError("tasks update does not support content updates")
    return payload


@app.command("list")
@cli_command
def list_tasks(
    limit: int = typer.Option(20, "--limit", help="Page size"),
    offset: int = typer.Option(0, "--offset", help="Offset"),
    sort: str = typer.Option("", "--sort", help="Sort key"),
    linked_object: str = typer.Option("", "--linked-object", help="Linked object slug or UUID"),
    linked_record_id: str = typer.Option("", "--linked-record", help="Linked record UUID"),
    assignee: str = typer.Option("", "--assignee", help="Assignee workspace member UUID"),
    is_completed: str = typer.Option("", "--is-completed", help="Filter completed tasks (true|false)"),
) -> None:
    state = current_state()
    completed = parse_optional_bool(is_completed, "--is-completed")
    items = state.client().tasks.list(
        limit=limit,
        offset=offset,
        sort=sort,
        linked_object=linked_object,
        linked_record_id=linked_record_id,
        assignee=assignee,
        is_completed=completed,
    )
    state.emit_items(items, TASK_COLUMNS, pagination=offset_pagination(limit, offset, len(items)))


@app.command("create")
@cli_command
def create_task(
    data: str = typer.Option("", "--data", help=_DATA_HELP),
    content: str = typer.Option("", "--content", help="Task content (required)"),
    deadline: str = typer.Option("", "--deadline", help=_DEADLINE_HELP),
    assignees: str = typer.Option("", "--assignees", help=_ASSIGNEES_HELP),
    linked_records: str = typer.Option("", "--linked-records", help=_LINKED_HELP),
    is_completed: str = typer.Option("", "--is-completed", help=_COMPLETED_HELP),
) -> None:
    state = current_state()
    payload = build_task_create_payload(
        data,
        content=content,
        deadline=deadline,
        assignees=assignees,
        linked_records=linked_records,
        is_completed=is_completed,
    )
    if state.maybe_dry_run("tasks create", payload):
        return
    state.emit_item(state.client().tasks.create(payload), TASK_COLUMNS)


@app.command("get")
@cli_command
def get_task(task_id: str = typer.Argument(..., metavar="TASK_ID", help="Task UUID")) -> None:
    state = current_state()
    state.emit_item(state.client().tasks.get(task_id), TASK_COLUMNS)


@app.command("update")
@cli_command
def update_task(
    task_id: str = typer.Argument(..., metavar="TASK_ID", help="Task UUID"),
    data: str = typer.Option("", "--data", help=_DATA_HELP),
    deadline: str = typer.Option("", "--deadline", help=_DEADLINE_HELP),
    assignees: str = typer.Option("", "--assignees", help=_ASSIGNEES_HELP),
    linked_records: str = typer.Option("", "--linked-records", help=_LINKED_HELP),
    is_completed: str = typer.Option("", "--is-completed", help=_COMPLETED_HELP),
) -> None:
    state = current_state()
    payload = build_task_update_payload(
        data,
        deadline=deadline,
        assignees=assignees,
        linked_records=linked_records,
        is_completed=is_completed,
    )
    if state.maybe_dry_run("tasks update", {"task_id": task_id, "data": payload}):
        return
    state.emit_item(state.client().tasks.update(task_id, payload), TASK_COLUMNS)


@app.command("delete")
@cli_command
def delete_task(task_id: str = typer.Argument(..., metavar="TASK_ID", help="Task UUID")) -> None:
    state = current_state()
    if state.maybe_dry_run("tasks delete", {"task_id": task_id}):
        return
    state.client().tasks.delete(task_id)
    state.emit_deleted("task", task_id, {"task_id": task_id})

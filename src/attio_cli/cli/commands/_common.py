"""Shared columns, summaries and pagination glue for command modules."""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from typing import Any, Final

import click

from attio_cli.cli.context import CliState, get_state
from attio_cli.cli.helpers import read_json_object
from attio_cli.cli.output import Column, any_string, field_column, id_string
from attio_cli.clients.http.pagination import DEFAULT_MAX_PAGES

__all__ = [
    "ATTRIBUTE_COLUMNS",
    "COMMENT_COLUMNS",
    "DEFAULT_MAX_PAGES",
    "ENTRY_COLUMNS",
    "LIST_COLUMNS",
    "MEETING_COLUMNS",
    "MEMBER_COLUMNS",
    "NOTE_COLUMNS",
    "OBJECT_COLUMNS",
    "OPTION_COLUMNS",
    "RECORDING_COLUMNS",
    "RECORD_COLUMNS",
    "RECORD_ENTRY_COLUMNS",
    "TASK_COLUMNS",
    "THREAD_COLUMNS",
    "TRANSCRIPT_COLUMNS",
    "VALUE_COLUMNS",
    "WEBHOOK_COLUMNS",
    "current_state",
    "fetch_cursor_pages",
    "fetch_offset_pages",
    "nullable",
    "offset_pagination",
    "optional_payload",
    "record_value_summary",
    "value_summary",
]

_SUMMARY_KEYS: Final[tuple[str, ...]] = (
    "full_name",
    "email_address",
    "workspace_member_email_address",
    "name",
    "title",
    "value",
    "domain",
    "original_phone_number",
    "target_record_id",
    "record_id",
)


def current_state() -> CliState:
    return get_state(click.get_current_context())


def value_summary(value: Any) -> str:
    """Pick a readable string out of an Attio attribute value."""

    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, Mapping):
        for key in _SUMMARY_KEYS:
            text = any_string(value.get(key))
            if text:
                return text
        return any_string(value)
    if isinstance(value, list):
        for item in value:
            text = value_summary(item)
            if text:
                return text
        return ""
    return any_string(value)


def record_value_summary(record: Mapping[str, Any], *keys: str) -> str:
    values = record.get("values")
    if not isinstance(values, Mapping):
        return ""
    for key in keys:
        text = value_summary(values.get(key))
        if text:
            return text
    return ""


def _id_column(header: str = "ID") -> Column:
    return Column(header, lambda row: id_string(row.get("id")))


def _task_status(task: Mapping[str, Any]) -> str:
    completed = task.get("is_completed")
    if isinstance(completed, bool):
        return "completed" if completed else "open"
    return any_string(completed)


def _task_assignees(task: Mapping[str, Any]) -> str:
    names: list[str] = []
    for item in task.get("assignees") or []:
        if not isinstance(item, Mapping):
            continue
        name = any_string(item.get("workspace_member_email_address")) or any_string(item.get("referenced_actor_id"))
        if name:
            names.append(name)
    return ",".join(names)


def _meeting_participants(meeting: Mapping[str, Any]) -> str:
    count = meeting.get("participant_count")
    if isinstance(count, int) and not isinstance(count, bool) and count >= 0:
        return str(count)
    participants = meeting.get("participants")
    if isinstance(participants, list):
        return str(len(participants))
    return ""


def _subscription_count(webhook: Mapping[str, Any]) -> str:
    subscriptions = webhook.get("subscriptions")
    return str(len(subscriptions)) if isinstance(subscriptions, list) else "0"


OBJECT_COLUMNS: Final[tuple[Column, ...]] = (
    _id_column(),
    field_column("API_SLUG", "api_slug"),
    field_column("SINGULAR", "singular_noun"),
    field_column("PLURAL", "plural_noun"),
)
RECORD_COLUMNS: Final[tuple[Column, ...]] = (
    _id_column(),
    Column("NAME", lambda row: record_value_summary(row, "name", "full_name", "company_name")),
    Column("EMAIL", lambda row: record_value_summary(row, "email_addresses", "email_address")),
    field_column("CREATED_AT", "created_at"),
    field_column("WEB_URL", "web_url"),
)
LIST_COLUMNS: Final[tuple[Column, ...]] = (
    _id_column(),
    field_column("API_SLUG", "api_slug"),
    field_column("NAME", "name"),
    Column("PARENT_OBJECT", lambda row: value_summary(row.get("parent_object"))),
)
ENTRY_COLUMNS: Final[tuple[Column, ...]] = (
    _id_column(),
    field_column("CREATED_AT", "created_at"),
    field_column("WEB_URL", "web_url"),
)
RECORD_ENTRY_COLUMNS: Final[tuple[Column, ...]] = (
    Column("ENTRY_ID", lambda row: id_string(row.get("entry_id") or row.get("id"))),
    field_column("CREATED_AT", "created_at"),
    field_column("WEB_URL", "web_url"),
)
VALUE_COLUMNS: Final[tuple[Column, ...]] = (
    field_column("ACTIVE_FROM", "active_from"),
    field_column("ACTIVE_UNTIL", "active_until"),
    Column("VALUE", value_summary),
)
NOTE_COLUMNS: Final[tuple[Column, ...]] = (
    _id_column(),
    field_column("TITLE", "title"),
    field_column("PARENT_RECORD_ID", "parent_record_id"),
    field_column("CREATED_AT", "created_at"),
)
TASK_COLUMNS: Final[tuple[Column, ...]] = (
    _id_column(),
    Column("CONTENT", lambda row: row.get("content_plaintext") or row.get("content")),
    Column("STATUS", _task_status),
    field_column("DEADLINE", "deadline_at"),
    Column("ASSIGNEE", _task_assignees),
)
COMMENT_COLUMNS: Final[tuple[Column, ...]] = (
    _id_column(),
    field_column("THREAD_ID", "thread_id"),
    field_column("CREATED_AT", "created_at"),
)
THREAD_COLUMNS: Final[tuple[Column, ...]] = (
    _id_column(),
    field_column("IS_RESOLVED", "is_resolved"),
    field_column("CREATED_AT", "created_at"),
)
WEBHOOK_COLUMNS: Final[tuple[Column, ...]] = (
    _id_column(),
    field_column("TARGET_URL", "target_url"),
    Column("SUBSCRIPTIONS", _subscription_count),
    field_column("STATUS", "status"),
    field_column("CREATED_AT", "created_at"),
)
MEETING_COLUMNS: Final[tuple[Column, ...]] = (
    _id_column(),
    field_column("TITLE", "title"),
    field_column("START", "start_at"),
    field_column("END", "end_at"),
    Column("PARTICIPANTS", _meeting_participants),
)
RECORDING_COLUMNS: Final[tuple[Column, ...]] = (
    _id_column(),
    field_column("CREATED_AT", "created_at"),
    field_column("URL", "url"),
)
TRANSCRIPT_COLUMNS: Final[tuple[Column, ...]] = (
    field_column("START", "start_at"),
    field_column("END", "end_at"),
    field_column("SPEAKER", "speaker_name"),
    field_column("TEXT", "text"),
)
ATTRIBUTE_COLUMNS: Final[tuple[Column, ...]] = (
    _id_column(),
    field_column("TITLE", "title"),
    field_column("TYPE", "api_type"),
    field_column("IS_ARCHIVED", "is_archived"),
)
OPTION_COLUMNS: Final[tuple[Column, ...]] = (
    _id_column(),
    field_column("TITLE", "title"),
    field_column("IS_ARCHIVED", "is_archived"),
)
MEMBER_COLUMNS: Final[tuple[Column, ...]] = (
    _id_column(),
    Column(
        "NAME",
        lambda row: " ".join(
            part for part in (any_string(row.get("first_name")), any_string(row.get("last_name"))) if part
        ),
    ),
    field_column("EMAIL", "email_address"),
    field_column("ROLE", "access_level"),
)


def offset_pagination(limit: int, offset: int, count: int) -> dict[str, Any]:
    """``has_more`` guesses from a full page; the API does not report it."""
    return {"limit": limit, "offset": offset, "has_more": limit > 0 and count >= limit}


def fetch_offset_pages(
    state: CliState,
    query: Callable[[int, int], Sequence[dict[str, Any]]],
    *,
    limit: int,
    offset: int,
    all_pages: bool,
    max_pages: int,
) -> tuple[list[dict[str, Any]], dict[str, Any]]:
    """Run an offset query once or across pages starting at ``offset``.

    Returns the items and the ``pagination`` object written in JSON mode.
    """

    if all_pages:
        items = state.fetch_all_offset(
            lambda page_offset: query(limit, offset + page_offset),
            page_size=limit,
            max_pages=max_pages,
        )
        return items, {"limit": limit, "offset": offset, "has_more": False}
    items = list(query(limit, offset))
    return items, offset_pagination(limit, offset, len(items))


def fetch_cursor_pages(
    state: CliState,
    fetch_page: Callable[[str], tuple[Sequence[dict[str, Any]], str | None]],
    *,
    cursor: str,
    all_pages: bool,
    max_pages: int,
) -> tuple[list[dict[str, Any]], str]:
    """Fetch one cursor page, or every page from ``cursor`` onwards.

    The second element is the cursor of the next unread page, always empty
    after a full ``--all`` walk.
    """

    if all_pages:
        # The driver always starts from an empty cursor; resume from --cursor instead.
        return state.fetch_all_cursor(lambda next_cursor: fetch_page(next_cursor or cursor), max_pages=max_pages), ""
    items, next_cursor = fetch_page(cursor)
    return list(items), next_cursor or ""


def optional_payload(data: str) -> dict[str, Any]:
    """Parse an optional ``--data`` object; blank means start from ``{}``."""
    return read_json_object(data) if data.strip() else {}


def nullable(value: str) -> str | None:
    # The literal "null" clears a field.
    return None if value.strip().lower() == "null" else value

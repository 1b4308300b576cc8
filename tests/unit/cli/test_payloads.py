"""Tests for the request bodies assembled from command flags."""

from __future__ import annotations

import pytest

from attio_cli.cli.commands.attributes import validate_target
from attio_cli.cli.commands.comments import build_comment_payload
from attio_cli.cli.commands.notes import build_note_payload
from attio_cli.cli.commands.tasks import build_task_create_payload, build_task_update_payload, parse_assignees
from attio_cli.cli.commands.webhooks import build_webhook_payload
from attio_cli.cli.errors import UsageError


@pytest.mark.unit
def test_note_payload_from_flags() -> None:
    payload = build_note_payload(
        parent_object="people", parent_record_id="r1", title="Call", content="Went well", meeting_id="null"
    )

    assert payload == {
        "parent_object": "people",
        "parent_record_id": "r1",
        "title": "Call",
        "content": "Went well",
        "format": "plaintext",
        "meeting_id": None,
    }


@pytest.mark.unit
def test_note_flags_override_data() -> None:
    payload = build_note_payload(
        '{"parent_object": "companies", "parent_record_id": "c1", "title": "Old", "content": "x", "format": "markdown"}',
        title="New",
    )

    assert payload["title"] == "New"
    assert payload["format"] == "markdown"


@pytest.mark.unit
def test_note_payload_validation() -> None:
    with pytest.raises(UsageError, match="notes create requires: parent_record_id, title, content"):
        build_note_payload(parent_object="people")
    with pytest.raises(UsageError, match="--format must be one of"):
        build_note_payload(format_="html")


@pytest.mark.unit
def test_parse_assignees() -> None:
    assert parse_assignees("ada@example.com, m-42") == [
        {"workspace_member_email_address": "ada@example.com"},
        {"referenced_actor_type": "workspace-member", "referenced_actor_id": "m-42"},
    ]
    assert parse_assignees("") == []


@pytest.mark.unit
def test_task_create_defaults() -> None:
    assert build_task_create_payload(content="Follow up") == {
        "content": "Follow up",
        "format": "plaintext",
        "deadline_at": None,
        "is_completed": False,
        "linked_records": [],
        "assignees": [],
    }


@pytest.mark.unit
def test_task_create_with_flags() -> None:
    payload = build_task_create_payload(
        content="Ship",
        deadline="2024-06-01T00:00:00Z",
        assignees="m-1",
        linked_records='[{"target_object": "people", "target_record_id": "r1"}]',
        is_completed="true",
    )

    assert payload["deadline_at"] == "2024-06-01T00:00:00Z"
    assert payload["is_completed"] is True
    assert payload["assignees"] == [{"referenced_actor_type": "workspace-member", "referenced_actor_id": "m-1"}]
    assert payload["linked_records"] == [{"target_object": "people", "target_record_id": "r1"}]


@pytest.mark.unit
def test_task_create_requires_content() -> None:
    with pytest.raises(UsageError, match="tasks create requires --content"):
        build_task_create_payload(deadline="null")


@pytest.mark.unit
def test_task_update_payload() -> None:
    assert build_task_update_payload(deadline="null", is_completed="false") == {
        "deadline_at": None,
        "is_completed": False,
    }
    with pytest.raises(UsageError, match="at least one update field"):
        build_task_update_payload()
    with pytest.raises(UsageError, match="does not support content updates"):
        build_task_update_payload('{"content": "new"}')


@pytest.mark.unit
def test_comment_on_record() -> None:
    payload = build_comment_payload(author="m-1", content="Nice", record_object="people", record_id="r1")

    assert payload == {
        "author": {"type": "workspace-member", "id": "m-1"},
        "content": "Nice",
        "format": "plaintext",
        "record": {"object": "people", "record_id": "r1"},
    }


@pytest.mark.unit
def test_comment_flag_target_replaces_data_target() -> None:
    payload = build_comment_payload(
        '{"author": {"type": "workspace-member", "id": "m-1"}, "content": "Hi", "record": {"object": "x"}}',
        thread_id="t-1",
    )

    assert payload["thread_id"] == "t-1"
    assert "record" not in payload


@pytest.mark.unit
@pytest.mark.parametrize(
    ("kwargs", "message"),
    [
        ({"author": "m", "content": "c", "record_object": "people"}, "must be provided together"),
        ({"author": "m", "content": "c", "entry_id": "e1"}, "must be provided together"),
        ({"author": "m", "content": "c", "thread_id": "t", "entry_list": "l", "entry_id": "e"}, "only one target mode"),
        ({"content": "c", "thread_id": "t"}, "comments create requires: author"),
        ({"author": "m", "content": "c"}, "comments create requires one of"),
    ],
)
def test_comment_validation(kwargs: dict[str, str], message: str) -> None:
    with pytest.raises(UsageError, match=message):
        build_comment_payload(**kwargs)


@pytest.mark.unit
def test_webhook_payload() -> None:
    payload = build_webhook_payload(
        target_url="https://hooks.example.test", subscriptions='[{"event_type": "record.created", "filter": null}]'
    )

    assert payload == {
        "target_url": "https://hooks.example.test",
        "subscriptions": [{"event_type": "record.created", "filter": None}],
    }
    with pytest.raises(UsageError, match="webhooks create requires"):
        build_webhook_payload(target_url="https://hooks.example.test")
    with pytest.raises(UsageError, match="webhooks update requires"):
        build_webhook_payload(creating=False)
    assert build_webhook_payload(target_url="https://x.test", creating=False) == {"target_url": "https://x.test"}


@pytest.mark.unit
def test_validate_target() -> None:
    assert validate_target(" lists ") == "lists"
    with pytest.raises(UsageError, match="target must be one of: objects, lists"):
        validate_target("records")

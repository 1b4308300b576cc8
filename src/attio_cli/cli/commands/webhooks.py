"""``attio webhooks``: webhook subscriptions."""

from __future__ import annotations

from typing import Any

import typer

from attio_cli.cli.context import cli_command
from attio_cli.cli.errors import UsageError
from attio_cli.cli.helpers import parse_json_array

from ._common import WEBHOOK_COLUMNS, current_state, offset_pagination, optional_payload

__all__ = ["app", "build_webhook_payload"]

app = typer.Typer(name="webhooks", help="List and manage webhooks.", no_args_is_help=True)

_DATA_HELP = "Optional webhook payload JSON; supports '-' or @file.json"
_TARGET_HELP = "Webhook destination URL (https://...)"
_SUBSCRIPTIONS_HELP = "Subscriptions JSON array"


def build_webhook_payload(
    data: str = "", *, target_url: str = "", subscriptions: str = "", creating: bool = True
) -> dict[str, Any]:
    payload = optional_payload(data)
    if target_url:
        payload["target_url"] = target_url
    items = parse_json_array(subscriptions, "--subscriptions")
    if items is not None:
        payload["subscriptions"] = items

    if creating and not ("target_url" in payload and "subscriptions" in payload):
        raise UsageError(
            "webhooks create requires --target-url and --subscriptions (or equivalent --data payload)"
        )
    if not payload:
        raise UsageError("webhooks update requires at least one update field")
    return payload


@app.command("list")
@cli_command
def list_webhooks(
    limit: int = typer.Option(20, "--limit", help="Page size"),
    offset: int = typer.Option(0, "--offset", help="Offset"),
) -> None:
    state = current_state()
    items = state.client().webhooks.list(limit=limit, offset=offset)
    state.emit_items(items, WEBHOOK_COLUMNS, pagination=offset_pagination(limit, offset, len(items)))


@app.command("create")
@cli_command
def create_webhook(
    data: str = typer.Option("", "--data", help=_DATA_HELP),
    target_url: str = typer.Option("", "--target-url", help=_TARGET_HELP),
    subscriptions: str = typer.Option("", "--subscriptions", help=_SUBSCRIPTIONS_HELP),
) -> None:
    state = current_state()
    payload = build_webhook_payload(data, target_url=target_url, subscriptions=subscriptions)
    if state.maybe_dry_run("webhooks create", payload):
        return
    state.emit_item(state.client().webhooks.create(payload), WEBHOOK_COLUMNS)


@app.command("get")
@cli_command
def get_webhook(webhook_id: str = typer.Argument(..., metavar="WEBHOOK_ID", help="Webhook UUID")) -> None:
    state = current_state()
    state.emit_item(state.client().webhooks.get(webhook_id), WEBHOOK_COLUMNS)


@app.command("update")
@cli_command
def update_webhook(
    webhook_id: str = typer.Argument(..., metavar="WEBHOOK_ID", help="Webhook UUID"),
    data: str = typer.Option("", "--data", help=_DATA_HELP),
    target_url: str = typer.Option("", "--target-url", help=_TARGET_HELP),
    subscriptions: str = typer.Option("", "--subscriptions", help=_SUBSCRIPTIONS_HELP),
) -> None:
    state = current_state()
    payload = build_webhook_payload(data, target_url=target_url, subscriptions=subscriptions, creating=False)
    if state.maybe_dry_run("webhooks update", {"webhook_id": webhook_id, "data": payload}):
        return
    state.emit_item(state.client().webhooks.update(webhook_id, payload), WEBHOOK_COLUMNS)


@app.command("delete")
@cli_command
def delete_webhook(webhook_id: str = typer.Argument(..., metavar="WEBHOOK_ID", help="Webhook UUID")) -> None:
    state = current_state()
    if state.maybe_dry_run("webhooks delete", {"webhook_id": webhook_id}):
        return
    state.client().webhooks.delete(webhook_id)
    state.emit_deleted("webhook", webhook_id, {"webhook_id": webhook_id})

"""``attio attributes``: attribute schema of objects and lists."""

from __future__ import annotations

from typing import Any

import typer

from attio_cli.cli.context import cli_command
from attio_cli.cli.errors import UsageError
from attio_cli.cli.helpers import read_json_object
from attio_cli.clients.entities.attributes import ATTRIBUTE_TARGETS

from ._common import ATTRIBUTE_COLUMNS, OPTION_COLUMNS, current_state, offset_pagination

__all__ = ["app", "validate_target"]

app = typer.Typer(name="attributes", help="Manage object and list attributes.", no_args_is_help=True)
options_app = typer.Typer(name="options", help="Manage select options.", no_args_is_help=True)
statuses_app = typer.Typer(name="statuses", help="Manage statuses.", no_args_is_help=True)
app.add_typer(options_app)
app.add_typer(statuses_app)


def validate_target(target: str) -> str:
    normalized = target.strip()
    if normalized not in ATTRIBUTE_TARGETS:
        raise UsageError("target must be one of: objects, lists")
    return normalized


def _target_argument() -> Any:
    return typer.Argument(..., metavar="TARGET", help="Target resource (objects|lists)")


def _identifier_argument() -> Any:
    return typer.Argument(..., metavar="IDENTIFIER", help="Object/list slug or UUID")


def _attribute_argument() -> Any:
    return typer.Argument(..., metavar="ATTRIBUTE", help="Attribute slug or UUID")


def _data_option(label: str) -> Any:
    return typer.Option(..., "--data", help=f"{label} payload JSON; supports '-' or @file.json")


@app.command("list")
@cli_command
def list_attributes(
    target: str = _target_argument(),
    identifier: str = _identifier_argument(),
    show_archived: bool = typer.Option(False, "--show-archived", help="Include archived attributes"),
    limit: int = typer.Option(0, "--limit", help="Page size"),
    offset: int = typer.Option(0, "--offset", help="Offset"),
) -> None:
    target = validate_target(target)
    state = current_state()
    items = state.client().attributes.list(
        target, identifier, show_archived=show_archived, limit=limit, offset=offset
    )
    state.emit_items(items, ATTRIBUTE_COLUMNS, pagination=offset_pagination(limit, offset, len(items)))


@app.command("create")
@cli_command
def create_attribute(
    target: str = _target_argument(),
    identifier: str = _identifier_argument(),
    data: str = _data_option("Attribute"),
) -> None:
    target = validate_target(target)
    state = current_state()
    payload = read_json_object(data)
    if state.maybe_dry_run("attributes create", {"target": target, "identifier": identifier, "data": payload}):
        return
    state.emit_item(state.client().attributes.create(target, identifier, payload), ATTRIBUTE_COLUMNS)


@app.command("get")
@cli_command
def get_attribute(
    target: str = _target_argument(),
    identifier: str = _identifier_argument(),
    attribute: str = _attribute_argument(),
) -> None:
    target = validate_target(target)
    state = current_state()
    state.emit_item(state.client().attributes.get(target, identifier, attribute), ATTRIBUTE_COLUMNS)


@app.command("update")
@cli_command
def update_attribute(
    target: str = _target_argument(),
    identifier: str = _identifier_argument(),
    attribute: str = _attribute_argument(),
    data: str = _data_option("Attribute"),
) -> None:
    target = validate_target(target)
    state = current_state()
    payload = read_json_object(data)
    action = {"target": target, "identifier": identifier, "attribute": attribute, "data": payload}
    if state.maybe_dry_run("attributes update", action):
        return
    state.emit_item(
        state.client().attributes.update(target, identifier, attribute, payload), ATTRIBUTE_COLUMNS
    )


@options_app.command("list")
@cli_command
def list_options(
    target: str = _target_argument(),
    identifier: str = _identifier_argument(),
    attribute: str = _attribute_argument(),
    show_archived: bool = typer.Option(False, "--show-archived", help="Include archived options"),
) -> None:
    target = validate_target(target)
    state = current_state()
    items = state.client().attributes.list_options(target, identifier, attribute, show_archived=show_archived)
    state.emit_items(items, OPTION_COLUMNS)


@options_app.command("create")
@cli_command
def create_option(
    target: str = _target_argument(),
    identifier: str = _identifier_argument(),
    attribute: str = _attribute_argument(),
    data: str = _data_option("Option"),
) -> None:
    target = validate_target(target)
    state = current_state()
    payload = read_json_object(data)
    action = {"target": target, "identifier": identifier, "attribute": attribute, "data": payload}
    if state.maybe_dry_run("attributes options create", action):
        return
    state.emit_item(
        state.client().attributes.create_option(target, identifier, attribute, payload), OPTION_COLUMNS
    )


@options_app.command("update")
@cli_command
def update_option(
    target: str = _target_argument(),
    identifier: str = _identifier_argument(),
    attribute: str = _attribute_argument(),
    option: str = typer.Argument(..., metavar="OPTION", help="Option slug or UUID"),
    data: str = _data_option("Option"),
) -> None:
    target = validate_target(target)
    state = current_state()
    payload = read_json_object(data)
    action = {"target": target, "identifier": identifier, "attribute": attribute, "option": option, "data": payload}
    if state.maybe_dry_run("attributes options update", action):
        return
    state.emit_item(
        state.client().attributes.update_option(target, identifier, attribute, option, payload), OPTION_COLUMNS
    )


@statuses_app.command("list")
@cli_command
def list_statuses(
    target: str = _target_argument(),
    identifier: str = _identifier_argument(),
    attribute: str = _attribute_argument(),
    show_archived: bool = typer.Option(False, "--show-archived", help="Include archived statuses"),
) -> None:
    target = validate_target(target)
    state = current_state()
    items = state.client().attributes.list_statuses(target, identifier, attribute, show_archived=show_archived)
    state.emit_items(items, OPTION_COLUMNS)


@statuses_app.command("create")
@cli_command
def create_status(
    target: str = _target_argument(),
    identifier: str = _identifier_argument(),
    attribute: str = _attribute_argument(),
    data: str = _data_option("Status"),
) -> None:
    target = validate_target(target)
    state = current_state()
    payload = read_json_object(data)
    action = {"target": target, "identifier": identifier, "attribute": attribute, "data": payload}
    if state.maybe_dry_run("attributes statuses create", action):
        return
    state.emit_item(
        state.client().attributes.create_status(target, identifier, attribute, payload), OPTION_COLUMNS
    )


@statuses_app.command("update")
@cli_command
def update_status(
    target: str = _target_argument(),
    identifier: str = _identifier_argument(),
    attribute: str = _attribute_argument(),
    status: str = typer.Argument(..., metavar="STATUS", help="Status slug or UUID"),
    data: str = _data_option("Status"),
) -> None:
    target = validate_target(target)
    state = current_state()
    payload = read_json_object(data)
    action = {"target": target, "identifier": identifier, "attribute": attribute, "status": status, "data": payload}
    if state.maybe_dry_run("attributes statuses update", action):
        return
    state.emit_item(
        state.client().attributes.update_status(target, identifier, attribute, status, payload), OPTION_COLUMNS
    )

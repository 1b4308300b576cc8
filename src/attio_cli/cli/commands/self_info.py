"""``attio self``: identify the workspace and token in use."""

from __future__ import annotations

from typing import Any, Final

from attio_cli.cli.context import cli_command

from ._common import current_state

__all__ = ["show_self"]

_SELF_FIELDS: Final[tuple[str, ...]] = (
    "workspace_name",
    "workspace_slug",
    "workspace_id",
    "scope",
    "client_id",
    "iat",
    "exp",
)


@cli_command
def show_self() -> None:
    """Show the token introspection of the current API key."""

    state = current_state()
    payload = state.client().get_self()
    if state.printer.is_json:
        state.printer.json(payload)
        return

    pairs: list[tuple[str, Any]] = [("active", bool(payload.get("active")))]
    pairs.extend((name, payload[name]) for name in _SELF_FIELDS if payload.get(name) not in (None, ""))
    state.printer.fields(pairs)

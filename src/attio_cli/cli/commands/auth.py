"""``attio auth``: store, remove and inspect API keys in the config file."""

from __future__ import annotations

import sys

import typer

from attio_cli.cli.context import cli_command
from attio_cli.cli.errors import UsageError
from attio_cli.config.loader import (
    auth_status,
    mask_key,
    resolve_profile,
    save_config,
)
from attio_cli.config.models import Profile

from ._common import current_state

__all__ = ["app"]

app = typer.Typer(name="auth", help="Manage the stored API key.", no_args_is_help=True)


def _read_key_from_stdin() -> str:
    if sys.stdin is None or sys.stdin.isatty():
        return ""
    return sys.stdin.read().strip()


@app.command("login")
@cli_command
def login(
    api_key: str = typer.Option(
        "",
        "--api-key",
        help="Attio API key to store. If omitted, reads from stdin when piped.",
    ),
) -> None:
    """Store an API key for the selected profile."""

    state = current_state()
    config = state.config()
    profile = resolve_profile(state.profile, config)
    key = api_key.strip() or _read_key_from_stdin()
    if not key:
        raise UsageError("missing API key: pass --api-key or pipe key via stdin")
    if state.maybe_dry_run("auth login", {"profile": profile, "api_key": mask_key(key)}):
        return

    entry = config.profiles.get(profile) or Profile()
    profiles = {**config.profiles, profile: entry.model_copy(update={"api_key": key})}
    path = save_config(config.model_copy(update={"profiles": profiles}), settings=state.settings)

    if state.printer.is_json:
        state.printer.json({"saved": True, "profile": profile, "source": "config", "path": str(path)})
        return
    state.printer.line(f'Stored API key for profile "{profile}" in {path}')


@app.command("logout")
@cli_command
def logout() -> None:
    """Remove the stored API key of the selected profile."""

    state = current_state()
    config = state.config()
    profile = resolve_profile(state.profile, config)
    if state.maybe_dry_run("auth logout", {"profile": profile}):
        return

    entry = config.profiles.get(profile)
    removed = entry is not None and entry.api_key is not None
    if entry is not None and removed:
        profiles = {**config.profiles, profile: entry.model_copy(update={"api_key": None})}
        save_config(config.model_copy(update={"profiles": profiles}), settings=state.settings)

    if state.printer.is_json:
        state.printer.json({"removed": removed, "profile": profile})
        return
    if removed:
        state.printer.line(f'Removed API key for profile "{profile}"')
    else:
        state.printer.line(f'No API key stored for profile "{profile}"')


@app.command("status")
@cli_command
def status() -> None:
    """Show where the API key would be resolved from."""

    state = current_state()
    result = auth_status(state.profile, settings=state.settings, config=state.config())
    if state.printer.is_json:
        state.printer.json(result)
        return

    pairs: list[tuple[str, object]] = [
        ("profile", result.profile),
        ("base_url", result.base_url),
        ("config_path", result.config_path),
        ("has_env", result.has_env),
        ("has_config", result.has_config),
        ("resolved", result.resolved),
    ]
    if result.resolved:
        pairs.append(("resolved_source", result.resolved_source.value if result.resolved_source else ""))
        pairs.append(("api_key", result.masked_key))
    state.printer.fields(pairs)

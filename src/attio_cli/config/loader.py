"""Loading, saving and resolving the user configuration file."""

from __future__ import annotations

import os
from collections.abc import Mapping, MutableMapping
from enum import Enum
from pathlib import Path
from typing import Any, NamedTuple

import typer
import yaml
from pydantic import BaseModel, ValidationError

from attio_cli.core.exceptions import AttioCLIError
from attio_cli.core.log_events import LogEvents
from attio_cli.core.logger import UnifiedLogger

from .environment import EnvironmentSettings, load_environment_settings
from .models import DEFAULT_BASE_URL, DEFAULT_PROFILE_NAME, ConfigFile, Profile

__all__ = [
    "APP_NAME",
    "CONFIG_FILE_NAME",
    "AuthRequiredError",
    "AuthSource",
    "AuthStatus",
    "ConfigError",
    "ResolvedAPIKey",
    "auth_status",
    "config_path",
    "load_config",
    "mask_key",
    "resolve_api_key",
    "resolve_base_url",
    "resolve_profile",
    "save_config",
]

APP_NAME = "attio-cli"
CONFIG_FILE_NAME = "config.yaml"


class ConfigError(AttioCLIError):
    """The configuration file exists but cannot be read or parsed."""


class AuthRequiredError(AttioCLIError):
    """No API key could be resolved for the selected profile."""


class AuthSource(str, Enum):
    ENV = "env"
    CONFIG = "config"


class ResolvedAPIKey(NamedTuple):
    key: str
    source: AuthSource


class AuthStatus(BaseModel):
    """Summary printed by ``attio auth status``."""

    profile: str
    base_url: str
    config_path: str
    has_env: bool = False
    has_config: bool = False
    resolved: bool = False
    resolved_source: AuthSource | None = None
    masked_key: str | None = None


def config_path(settings: EnvironmentSettings | None = None) -> Path:
    """Return the configuration file location.

    ``ATTIO_CONFIG_PATH`` wins; otherwise the file lives in the per-user
    application directory reported by :func:`typer.get_app_dir`.
    """

    env = settings or load_environment_settings()
    if env.config_path is not None:
        return env.config_path
    return Path(typer.get_app_dir(APP_NAME)) / CONFIG_FILE_NAME


def _ensure_mapping(value: Any, path: Path) -> dict[str, Any]:
    """Validate that a YAML payload is a mapping with string keys."""
    if value is None:
        return {}
    if not isinstance(value, MutableMapping):
        msg = f"Configuration file must produce a mapping: {path}"
        raise ConfigError(msg)
    return {str(key): item for key, item in value.items()}


def load_config(
    path: Path | None = None,
    *,
    settings: EnvironmentSettings | None = None,
) -> ConfigFile:
    """Load the configuration file; a missing file yields the defaults.

    The file is YAML, so JSON documents written by other tools load as well.
    """

    target = path or config_path(settings)
    try:
        with target.open("r", encoding="utf-8") as handle:
            raw_text = handle.read()
    except FileNotFoundError:
        return ConfigFile()
    except OSError as exc:
        raise ConfigError(f"read config: {exc}") from exc

    try:
        payload = _ensure_mapping(yaml.safe_load(raw_text), target)
        config = ConfigFile.model_validate(payload)
    except yaml.YAMLError as exc:
        raise ConfigError(f"parse config {target}: {exc}") from exc
    except ValidationError as exc:
        raise ConfigError(f"invalid config {target}: {exc}") from exc

    UnifiedLogger.get(__name__).debug(
        LogEvents.CONFIG_FILE_LOADED,
        path=str(target),
        profiles=sorted(config.profiles),
    )
    return config


def save_config(
    config: ConfigFile,
    path: Path | None = None,
    *,
    settings: EnvironmentSettings | None = None,
) -> Path:
    """Write ``config`` as YAML with owner-only permissions."""

    target = path or config_path(settings)
    payload = config.model_dump(mode="json", exclude_none=True)
    try:
        target.parent.mkdir(parents=True, exist_ok=True, mode=0o700)
        fd = os.open(target, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            yaml.safe_dump(payload, handle, sort_keys=True, allow_unicode=True)
        os.chmod(target, 0o600)
    except OSError as exc:
        raise ConfigError(f"write config: {exc}") from exc

    UnifiedLogger.get(__name__).debug(LogEvents.CONFIG_FILE_SAVED, path=str(target))
    return target


def resolve_profile(profile: str | None, config: ConfigFile) -> str:
    """Return the explicit profile name or the file's default profile."""

    if profile is not None and profile.strip():
        return profile.strip()
    return config.default_profile or DEFAULT_PROFILE_NAME


def _profile_entry(profiles: Mapping[str, Profile], name: str) -> Profile | None:
    return profiles.get(name)


def resolve_api_key(
    profile: str | None,
    *,
    settings: EnvironmentSettings,
    config: ConfigFile,
) -> ResolvedAPIKey:
    """Resolve the API key from the environment, then the profile.

    Raises
    ------
    AuthRequiredError
        Neither ``ATTIO_API_KEY`` nor the profile holds a key.
    """

    name = resolve_profile(profile, config)
    env_key = settings.plain_api_key()
    if env_key:
        return ResolvedAPIKey(env_key, AuthSource.ENV)

    entry = _profile_entry(config.profiles, name)
    if entry is not None and entry.api_key:
        return ResolvedAPIKey(entry.api_key, AuthSource.CONFIG)

    raise AuthRequiredError(
        f'No API key found for profile "{name}". '
        "Set ATTIO_API_KEY or run: attio auth login --api-key <key>"
    )


def resolve_base_url(
    profile: str | None,
    *,
    settings: EnvironmentSettings,
    config: ConfigFile,
) -> str:
    """Resolve the API root: environment, then profile, then the default."""

    if settings.base_url:
        return settings.base_url.rstrip("/")
    entry = _profile_entry(config.profiles, resolve_profile(profile, config))
    if entry is not None and entry.base_url:
        return entry.base_url.rstrip("/")
    return DEFAULT_BASE_URL


def mask_key(value: str | None) -> str:
    """Hide all but the last four characters of keys longer than eight."""

    stripped = (value or "").strip()
    if not stripped:
        return ""
    if len(stripped) <= 8:
        return "*" * len(stripped)
    return "*" * (len(stripped) - 4) + stripped[-4:]


def auth_status(
    profile: str | None,
    *,
    settings: EnvironmentSettings,
    config: ConfigFile,
) -> AuthStatus:
    name = resolve_profile(profile, config)
    entry = _profile_entry(config.profiles, name)
    status = AuthStatus(
        profile=name,
        base_url=resolve_base_url(name, settings=settings, config=config),
        config_path=str(config_path(settings)),
        has_env=bool(settings.plain_api_key()),
        has_config=entry is not None and bool(entry.api_key),
    )
    try:
        resolved = resolve_api_key(name, settings=settings, config=config)
    except AuthRequiredError:
        return status
    status.resolved = True
    status.resolved_source = resolved.source
    status.masked_key = mask_key(resolved.key)
    return status

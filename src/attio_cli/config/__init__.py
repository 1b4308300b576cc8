"""Configuration models, environment settings and the profile file."""

from .environment import EnvironmentSettings, load_environment_settings
from .loader import (
    AuthRequiredError,
    AuthSource,
    AuthStatus,
    ConfigError,
    ResolvedAPIKey,
    auth_status,
    config_path,
    load_config,
    mask_key,
    resolve_api_key,
    resolve_base_url,
    resolve_profile,
    save_config,
)
from .models import (
    DEFAULT_BASE_URL,
    DEFAULT_PROFILE_NAME,
    DEFAULT_USER_AGENT,
    ConfigFile,
    HTTPClientConfig,
    Profile,
)

__all__ = [
    "DEFAULT_BASE_URL",
    "DEFAULT_PROFILE_NAME",
    "DEFAULT_USER_AGENT",
    "AuthRequiredError",
    "AuthSource",
    "AuthStatus",
    "ConfigError",
    "ConfigFile",
    "EnvironmentSettings",
    "HTTPClientConfig",
    "Profile",
    "ResolvedAPIKey",
    "auth_status",
    "config_path",
    "load_config",
    "load_environment_settings",
    "mask_key",
    "resolve_api_key",
    "resolve_base_url",
    "resolve_profile",
    "save_config",
]

"""Environment-driven configuration for attio-cli.

Every ``ATTIO_*`` variable the CLI honours is read through
:class:`EnvironmentSettings`, so the rest of the code never touches
``os.environ`` directly.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

__all__ = ["EnvironmentSettings", "load_environment_settings"]

_TRUE_VALUES = frozenset({"1", "t", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "f", "false", "no", "off"})


class EnvironmentSettings(BaseSettings):
    """Typed view of attio-cli environment variables."""

    model_config = SettingsConfigDict(
        extra="ignore",
        populate_by_name=True,
    )

    api_key: SecretStr | None = Field(default=None, alias="ATTIO_API_KEY")
    base_url: str | None = Field(default=None, alias="ATTIO_BASE_URL")
    config_path: Path | None = Field(default=None, alias="ATTIO_CONFIG_PATH")
    timeout: str | None = Field(default=None, alias="ATTIO_TIMEOUT")
    enable_commands: str | None = Field(default=None, alias="ATTIO_ENABLE_COMMANDS")
    auto_json: bool = Field(default=False, alias="ATTIO_AUTO_JSON")

    @field_validator("api_key", mode="before")
    @classmethod
    def _blank_secret(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        if isinstance(value, str):
            return value.strip()
        return value

    @field_validator("base_url", "timeout", "enable_commands")
    @classmethod
    def _blank_to_none(cls, value: str | None) -> str | None:
        if value is None:
            return None
        normalized = value.strip()
        return normalized or None

    @field_validator("config_path", mode="before")
    @classmethod
    def _expand_config_path(cls, value: Any) -> Any:
        """Expand ``~`` in the configured path; blank values mean unset."""
        if value is None:
            return None
        if isinstance(value, str):
            if not value.strip():
                return None
            value = value.strip()
        return Path(value).expanduser()

    @field_validator("auto_json", mode="before")
    @classmethod
    def _coerce_bool(cls, value: Any) -> bool:
        """Coerce environment values into booleans; unknown spellings are false."""
        if isinstance(value, bool):
            return value
        if value is None:
            return False
        if isinstance(value, str):
            normalized = value.strip().lower()
            if normalized in _TRUE_VALUES:
                return True
            if normalized in _FALSE_VALUES:
                return False
            return False
        return bool(value)

    def plain_api_key(self) -> str | None:
        if self.api_key is None:
            return None
        return self.api_key.get_secret_value() or None


def load_environment_settings() -> EnvironmentSettings:
    """Load and validate attio-cli environment settings."""

    return EnvironmentSettings()

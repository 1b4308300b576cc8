"""Configuration models for the Attio client and the on-disk profile file."""

from __future__ import annotations

from typing import Annotated, Final

from pydantic import BaseModel, ConfigDict, Field, PositiveFloat, field_validator

from attio_cli import __version__

__all__ = [
    "DEFAULT_BASE_URL",
    "DEFAULT_PROFILE_NAME",
    "DEFAULT_USER_AGENT",
    "ConfigFile",
    "HTTPClientConfig",
    "Profile",
]

DEFAULT_BASE_URL: Final[str] = "https://api.attio.com"
DEFAULT_PROFILE_NAME: Final[str] = "default"
DEFAULT_USER_AGENT: Final[str] = f"attio-cli/{__version__}"


class HTTPClientConfig(BaseModel):
    """Configuration for the Attio HTTP client."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    base_url: str = Field(
        default=DEFAULT_BASE_URL,
        description="API root; trailing slashes are trimmed.",
    )
    timeout_sec: PositiveFloat = Field(
        default=30.0,
        description="Wall-clock budget for one logical request, retries included.",
    )
    max_retries: Annotated[int, Field(ge=0)] = Field(
        default=3,
        description="Retries on top of the first attempt for 429/5xx and transport errors.",
    )
    user_agent: str = Field(default=DEFAULT_USER_AGENT)

    @field_validator("base_url")
    @classmethod
    def _normalize_base_url(cls, value: str) -> str:
        normalized = value.strip().rstrip("/")
        return normalized or DEFAULT_BASE_URL

    @field_validator("user_agent")
    @classmethod
    def _strip_user_agent(cls, value: str) -> str:
        return value.strip()


class Profile(BaseModel):
    """Credentials and endpoint of one named profile."""

    model_config = ConfigDict(extra="ignore")

    api_key: str | None = None
    base_url: str | None = None

    @field_validator("api_key", "base_url")
    @classmethod
    def _blank_to_none(cls, value: str | None) -> str | None:
        if value is None:
            return None
        stripped = value.strip()
        return stripped or None


class ConfigFile(BaseModel):
    """Contents of the user configuration file."""

    model_config = ConfigDict(extra="ignore")

    default_profile: str = DEFAULT_PROFILE_NAME
    profiles: dict[str, Profile] = Field(default_factory=dict)

    @field_validator("default_profile", mode="before")
    @classmethod
    def _default_profile(cls, value: str | None) -> str:
        if value is None:
            return DEFAULT_PROFILE_NAME
        return str(value).strip() or DEFAULT_PROFILE_NAME

    @field_validator("profiles", mode="before")
    @classmethod
    def _profiles(cls, value: object) -> object:
        return {} if value is None else value

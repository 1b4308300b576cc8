"""HTTP clients for the Attio API."""

from .api_client import AttioClient
from .exceptions import (
    AttioAPIError,
    ResponseDecodeError,
    TransportError,
    is_auth_error,
    is_not_found,
    is_rate_limited,
    parse_api_error,
)

__all__ = [
    "AttioAPIError",
    "AttioClient",
    "ResponseDecodeError",
    "TransportError",
    "is_auth_error",
    "is_not_found",
    "is_rate_limited",
    "parse_api_error",
]

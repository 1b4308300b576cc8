"""Public client exceptions exposed by attio-cli.

Upper layers (the CLI in particular) import network and API failures from
here only, so they never depend on ``requests`` directly.
"""

from __future__ import annotations

import json
from http import HTTPStatus
from typing import Any

from requests import Response

from attio_cli.core.exceptions import AttioCLIError

__all__ = [
    "AttioAPIError",
    "ResponseDecodeError",
    "TransportError",
    "is_auth_error",
    "is_not_found",
    "is_rate_limited",
    "parse_api_error",
]


class AttioAPIError(AttioCLIError):
    """Structured error decoded from a non-2xx Attio response."""

    def __init__(
        self,
        status_code: int,
        message: str,
        *,
        type: str = "",
        code: str = "",
        retry_after: str = "",
    ) -> None:
        self.status_code = status_code
        self.message = message
        self.type = type
        self.code = code
        self.retry_after = retry_after
        super().__init__(str(self))

    def __str__(self) -> str:
        label = self.code or self.type
        if label:
            return f"attio api error ({self.status_code} {label}): {self.message}"
        return f"attio api error ({self.status_code}): {self.message}"

    def __repr__(self) -> str:
        return (
            f"AttioAPIError(status_code={self.status_code!r}, type={self.type!r}, "
            f"code={self.code!r}, message={self.message!r})"
        )


class TransportError(AttioCLIError):
    """The request never produced a response (connection, timeout, clone)."""


class ResponseDecodeError(AttioCLIError):
    """A successful response carried a body that is not valid JSON."""


def _int_from(value: Any) -> int | None:
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def _str_from(value: Any) -> str:
    if not isinstance(value, str):
        return ""
    return value.strip()


def _status_text(status_code: int) -> str:
    try:
        return HTTPStatus(status_code).phrase
    except ValueError:
        return ""


def parse_api_error(response: Response) -> AttioAPIError:
    """Build an :class:`AttioAPIError` from an error response.

    The body may override the HTTP status through ``status_code`` or
    ``statusCode``.  When it carries no ``message`` the trimmed raw body is
    used, and an empty body falls back to the status reason phrase.
    """

    text = response.text or ""
    try:
        raw = json.loads(text) if text.strip() else {}
    except ValueError:
        raw = {}
    if not isinstance(raw, dict):
        raw = {}

    status_code = response.status_code
    for key in ("status_code", "statusCode"):
        override = _int_from(raw.get(key))
        if override is not None:
            status_code = override
            break

    message = _str_from(raw.get("message"))
    if not message:
        message = text.strip() or _status_text(response.status_code)

    return AttioAPIError(
        status_code,
        message,
        type=_str_from(raw.get("type")),
        code=_str_from(raw.get("code")),
        retry_after=(response.headers.get("Retry-After") or "").strip(),
    )


def _unwrap(error: BaseException | None) -> AttioAPIError | None:
    seen: set[int] = set()
    current = error
    while current is not None and id(current) not in seen:
        if isinstance(current, AttioAPIError):
            return current
        seen.add(id(current))
        current = getattr(current, "cause", None) or current.__cause__
    return None


def is_not_found(error: BaseException | None) -> bool:
    api_error = _unwrap(error)
    return api_error is not None and (api_error.code == "not_found" or api_error.status_code == 404)


def is_auth_error(error: BaseException | None) -> bool:
    api_error = _unwrap(error)
    if api_error is None:
        return False
    return api_error.type == "auth_error" or api_error.status_code in (401, 403)


def is_rate_limited(error: BaseException | None) -> bool:
    api_error = _unwrap(error)
    return api_error is not None and api_error.status_code == 429

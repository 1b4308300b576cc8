"""Input parsing helpers shared by CLI commands."""

from __future__ import annotations

import json
import re
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import Any, Final

from .errors import UsageError

__all__ = [
    "enforce_command_allowlist",
    "normalize_command_path",
    "parse_duration",
    "parse_json_array",
    "parse_optional_bool",
    "parse_timeout",
    "read_json_object",
    "read_json_value",
    "read_raw_input",
    "split_comma_list",
]

_DURATION_UNITS: Final[dict[str, float]] = {
    "ns": 1e-9,
    "us": 1e-6,
    "µs": 1e-6,
    "μs": 1e-6,
    "ms": 1e-3,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}
_DURATION_PART: Final[re.Pattern[str]] = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|μs|ms|s|m|h)")
_TRUE_VALUES: Final[frozenset[str]] = frozenset({"1", "t", "true"})
_FALSE_VALUES: Final[frozenset[str]] = frozenset({"0", "f", "false"})


def split_comma_list(value: str | None) -> list[str]:
    """Split ``a, b,,c`` into ``["a", "b", "c"]``."""

    if value is None or not value.strip():
        return []
    return [part.strip() for part in value.split(",") if part.strip()]


def parse_duration(raw: str) -> float:
    """Parse a duration such as ``30s``, ``1m30s`` or ``500ms`` into seconds."""

    text = raw.strip()
    sign = 1.0
    if text.startswith(("+", "-")):
        sign = -1.0 if text[0] == "-" else 1.0
        text = text[1:]
    if text == "0":
        return 0.0
    if not text:
        raise ValueError(f"invalid duration {raw!r}")

    total = 0.0
    position = 0
    for match in _DURATION_PART.finditer(text):
        if match.start() != position:
            raise ValueError(f"invalid duration {raw!r}")
        total += float(match.group(1)) * _DURATION_UNITS[match.group(2)]
        position = match.end()
    if position != len(text) or position == 0:
        raise ValueError(f"invalid duration {raw!r}")
    return sign * total


def parse_timeout(raw: str | None) -> float:
    """Validate ``--timeout`` and return it in seconds."""

    if raw is None or not raw.strip():
        raise UsageError("--timeout cannot be empty")
    try:
        seconds = parse_duration(raw)
    except ValueError as exc:
        raise UsageError(f"invalid --timeout value {raw.strip()!r}: {exc}") from exc
    if seconds <= 0:
        raise UsageError("--timeout must be greater than 0")
    return seconds


def parse_optional_bool(value: str | None, flag_name: str) -> bool | None:
    """Parse a tri-state flag where an empty value means "not set"."""

    if value is None or not value.strip():
        return None
    normalized = value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise UsageError(f"{flag_name} must be true or false")


def read_raw_input(value: str | None, *, flag_name: str = "--data") -> str:
    """Resolve inline text, ``-`` (stdin) or ``@path`` into raw text."""

    text = (value or "").strip()
    if not text:
        raise UsageError(f"missing {flag_name} value")
    if text == "-":
        return sys.stdin.read()
    if text.startswith("@"):
        location = text[1:].strip()
        if not location:
            raise UsageError("missing file path after @")
        try:
            return Path(location).expanduser().read_text(encoding="utf-8")
        except OSError as exc:
            raise UsageError(f"read {location}: {exc.strerror or exc}") from exc
    return text


def read_json_value(value: str | None, *, flag_name: str = "--data") -> Any:
    raw = read_raw_input(value, flag_name=flag_name)
    try:
        return json.loads(raw)
    except ValueError as exc:
        raise UsageError(f"invalid JSON: {exc}") from exc


def read_json_object(value: str | None, *, flag_name: str = "--data") -> dict[str, Any]:
    parsed = read_json_value(value, flag_name=flag_name)
    if not isinstance(parsed, dict):
        raise UsageError("expected JSON object")
    return parsed


def parse_json_array(value: str | None, flag_name: str) -> list[Any] | None:
    if value is None or not value.strip():
        return None
    parsed = read_json_value(value, flag_name=flag_name)
    if not isinstance(parsed, list):
        raise UsageError(f"{flag_name} must be a JSON array")
    return parsed


def normalize_command_path(path: str) -> str:
    """Lower-case a command path and drop ``<placeholder>`` words."""

    parts = path.strip().lower().split()
    return " ".join(part for part in parts if not (part.startswith("<") and part.endswith(">")))


def enforce_command_allowlist(command_path: str, allowlist: str | Sequence[str] | None) -> None:
    """Reject ``command_path`` unless it matches an allowlisted prefix.

    Entries may name a top-level command (``records``) or a full path
    (``records query``).  An empty allowlist permits everything.
    """

    entries = split_comma_list(allowlist) if isinstance(allowlist, str) or allowlist is None else list(allowlist)
    if not entries:
        return
    normalized = normalize_command_path(command_path)
    if not normalized:
        return
    for entry in entries:
        allowed = normalize_command_path(entry)
        if allowed and (normalized == allowed or normalized.startswith(allowed + " ")):
            return
    raise UsageError(f'command "{normalized}" is not enabled by --enable-commands="{",".join(entries)}"')

"""Structured logging for the command-line client.

Log lines go to ``stderr`` as ``key=value`` pairs; ``stdout`` carries only
command results.  Credentials never reach the log: the API key and the
``Authorization`` header are masked whatever the field is called, and bearer
tokens are scrubbed from free-text values such as error messages.
"""
from __future__ import annotations

import logging
import re
import sys
from collections.abc import MutableMapping
from dataclasses import dataclass
from typing import Any, Final, cast

import structlog
from structlog.contextvars import clear_contextvars
from structlog.exceptions import DropEvent
from structlog.stdlib import BoundLogger

__all__ = [
    "DEFAULT_LOG_LEVEL",
    "REDACTED",
    "LogConfig",
    "UnifiedLogger",
    "configure_logging",
    "get_logger",
]

DEFAULT_LOG_LEVEL = logging.WARNING

REDACTED: Final[str] = "***REDACTED***"

_ROOT_LOGGER: Final[str] = "attio_cli"
_SECRET_FIELDS: Final[frozenset[str]] = frozenset({"api_key", "apikey", "authorization", "token"})
_BEARER: Final[re.Pattern[str]] = re.compile(r"(?i)\bbearer\s+\S+")
_KEY_ORDER: Final[tuple[str, ...]] = ("timestamp", "level", "command", "component", "message")


@dataclass(frozen=True, slots=True)
class LogConfig:
    """Logging options derived from the global CLI flags."""

    level: int | str = DEFAULT_LOG_LEVEL


def _coerce_log_level(level: int | str) -> int:
    if isinstance(level, int):
        return level
    mapped = logging.getLevelNamesMapping().get(level.upper())
    if isinstance(mapped, int):
        return mapped
    raise ValueError(f"Unsupported log level: {level}")


def _redact_credentials(
    _: Any,
    __: str,
    event_dict: MutableMapping[str, Any],
) -> MutableMapping[str, Any]:
    for key, value in event_dict.items():
        if key.lower().replace("-", "_") in _SECRET_FIELDS:
            event_dict[key] = REDACTED
        elif isinstance(value, str) and key != "event":
            event_dict[key] = _BEARER.sub(f"Bearer {REDACTED}", value)
    return event_dict


def _filter_by_level(
    logger: logging.Logger | None,
    method_name: str,
    event_dict: MutableMapping[str, Any],
) -> MutableMapping[str, Any]:
    if method_name == "exception":
        level = logging.ERROR
    else:
        level = logging.getLevelNamesMapping().get(method_name.upper(), logging.INFO)
    if (logger or logging.getLogger(_ROOT_LOGGER)).isEnabledFor(level):
        return event_dict
    raise DropEvent


def configure_logging(config: LogConfig | None = None) -> None:
    """Route structlog through stdlib logging on ``stderr``."""

    cfg = config or LogConfig()
    shared: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True, key="timestamp"),
        _redact_credentials,
        structlog.processors.EventRenamer("message"),
        structlog.processors.format_exc_info,
    ]

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=[*shared, _filter_by_level],
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                structlog.processors.KeyValueRenderer(
                    key_order=_KEY_ORDER,
                    drop_missing=True,
                    repr_native_str=False,
                ),
            ],
        )
    )
    logging.basicConfig(handlers=[handler], level=_coerce_log_level(cfg.level), force=True)

    structlog.configure(
        processors=[
            *shared,
            _filter_by_level,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )


def get_logger(name: str = _ROOT_LOGGER) -> BoundLogger:
    return cast(BoundLogger, structlog.get_logger(name))


class UnifiedLogger:
    """Entry point used by the CLI and the HTTP layer."""

    @staticmethod
    def configure(config: LogConfig | None = None) -> None:
        configure_logging(config)

    @staticmethod
    def get(name: str | None = None) -> BoundLogger:
        return get_logger(name or _ROOT_LOGGER)

    @staticmethod
    def reset() -> None:
        """Drop bound command context and restore structlog defaults."""

        clear_contextvars()
        structlog.reset_defaults()

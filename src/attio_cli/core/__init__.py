"""Shared runtime primitives: structured logging and the base exception."""

from .exceptions import AttioCLIError
from .log_events import LogEvents
from .logger import (
    DEFAULT_LOG_LEVEL,
    LogConfig,
    UnifiedLogger,
    configure_logging,
    get_logger,
)

__all__ = [
    "AttioCLIError",
    "DEFAULT_LOG_LEVEL",
    "LogConfig",
    "LogEvents",
    "UnifiedLogger",
    "configure_logging",
    "get_logger",
]

"""Registry of structured logging event identifiers."""

from __future__ import annotations

from enum import Enum, auto

__all__ = ["LogEvents"]


class LogEvents(str, Enum):
    """Strongly typed registry of UnifiedLogger events.

    Member names map to dotted identifiers: the first word is the namespace,
    the last word the outcome and everything in between the action, so
    ``HTTP_REQUEST_RETRY`` becomes ``http.request.retry``.
    """

    @staticmethod
    def _generate_next_value_(name: str, start: int, count: int, _last_values: list[str]) -> str:
        """Produce a dotted event identifier based on enum member naming."""
        parts = name.lower().split("_")
        namespace = parts[0] if parts else "event"
        suffix = parts[-1] if len(parts) > 1 else "event"
        action_parts = parts[1:-1] if len(parts) > 2 else ["event"]
        return ".".join((namespace, ".".join(action_parts), suffix))

    def __str__(self) -> str:
        return str(self.value)

    CLI_RUN_START = auto()
    CLI_RUN_ERROR = auto()
    CLI_RUN_CANCELLED = auto()
    CLI_COMMAND_BLOCKED = auto()
    CONFIG_FILE_LOADED = auto()
    CONFIG_FILE_SAVED = auto()
    HTTP_REQUEST_COMPLETED = auto()
    HTTP_REQUEST_EXCEPTION = auto()
    HTTP_REQUEST_FAILED = auto()
    HTTP_REQUEST_RETRY = auto()
    HTTP_REQUEST_DEADLINE_EXCEEDED = auto()
    HTTP_REQUEST_CLONE_FAILED = auto()
    HTTP_BODY_DRAIN_FAILED = auto()
    HTTP_PAGINATOR_PAGE_FETCHED = auto()
    HTTP_PAGINATOR_FETCH_FAILED = auto()
    HTTP_PAGINATOR_CANCELLED = auto()
    HTTP_PAGINATOR_LIMIT_REACHED = auto()

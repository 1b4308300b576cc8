"""Shared HTTP primitives for the Attio client."""

from __future__ import annotations

from attio_cli.clients.http.pagination import (
    DEFAULT_MAX_PAGES,
    CancellationToken,
    PageFetchError,
    PaginationCancelled,
    PaginationInterrupted,
    fetch_all_cursor,
    fetch_all_offset,
)
from attio_cli.clients.http.retry import (
    RequestCloneError,
    RetryTransport,
    backoff,
    parse_retry_after,
    retry_delay,
    should_retry,
)

__all__ = [
    "DEFAULT_MAX_PAGES",
    "CancellationToken",
    "PageFetchError",
    "PaginationCancelled",
    "PaginationInterrupted",
    "RequestCloneError",
    "RetryTransport",
    "backoff",
    "fetch_all_cursor",
    "fetch_all_offset",
    "parse_retry_after",
    "retry_delay",
    "should_retry",
]

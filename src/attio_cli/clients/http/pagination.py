"""Generic drivers that collect every page of an offset or cursor endpoint.

Both drivers are decoupled from HTTP: they only call a user supplied
single-page fetch function, so resource clients bind their query parameters
into a closure and hand it over.  A driver never retries; the first failing
page stops the loop and the items accumulated so far travel with the raised
:class:`PaginationInterrupted`.
"""

from __future__ import annotations

import threading
from collections.abc import Callable, Sequence
from typing import Any, Final, TypeVar

from structlog.stdlib import BoundLogger

from attio_cli.core.exceptions import AttioCLIError
from attio_cli.core.log_events import LogEvents
from attio_cli.core.logger import UnifiedLogger

__all__ = [
    "DEFAULT_MAX_PAGES",
    "CancellationToken",
    "CursorFetcher",
    "OffsetFetcher",
    "PageFetchError",
    "PaginationCancelled",
    "PaginationInterrupted",
    "fetch_all_cursor",
    "fetch_all_offset",
]

T = TypeVar("T")

DEFAULT_MAX_PAGES: Final[int] = 100

OffsetFetcher = Callable[[int], Sequence[T]]
CursorFetcher = Callable[[str], tuple[Sequence[T], str | None]]


class CancellationToken:
    """Thread-safe flag used to stop a pagination loop between pages."""

    __slots__ = ("_event",)

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()


class PaginationInterrupted(AttioCLIError):
    """Base class for a pagination loop that stopped before exhaustion."""

    def __init__(self, message: str, *, items: list[Any], pages_fetched: int) -> None:
        super().__init__(message)
        self.items = items
        self.pages_fetched = pages_fetched


class PageFetchError(PaginationInterrupted):
    """A page fetch raised; ``cause`` is the original exception."""

    def __init__(self, cause: Exception, *, items: list[Any], pages_fetched: int) -> None:
        super().__init__(str(cause), items=items, pages_fetched=pages_fetched)
        self.cause = cause


class PaginationCancelled(PaginationInterrupted):
    """The cancellation token fired before the next page was requested."""

    def __init__(self, *, items: list[Any], pages_fetched: int) -> None:
        super().__init__(
            f"pagination cancelled after {pages_fetched} page(s)",
            items=items,
            pages_fetched=pages_fetched,
        )


def _normalize_max_pages(max_pages: int) -> int:
    return max_pages if max_pages > 0 else DEFAULT_MAX_PAGES


def _ensure_not_cancelled(
    token: CancellationToken | None,
    collected: list[T],
    page_index: int,
    log: BoundLogger,
) -> None:
    if token is not None and token.cancelled:
        log.info(LogEvents.HTTP_PAGINATOR_CANCELLED, page_index=page_index, items_total=len(collected))
        raise PaginationCancelled(items=list(collected), pages_fetched=page_index)


def fetch_all_offset(
    fetch_page: OffsetFetcher[T],
    *,
    page_size: int,
    max_pages: int = DEFAULT_MAX_PAGES,
    token: CancellationToken | None = None,
    logger: BoundLogger | None = None,
) -> list[T]:
    """Collect items from an offset paginated endpoint.

    ``fetch_page`` receives the offset relative to the first page, starting at
    ``0`` and advancing by the number of items actually returned.  The loop
    ends on a page shorter than ``page_size`` or after ``max_pages`` fetches.

    Raises
    ------
    PaginationCancelled
        ``token`` was cancelled before a fetch.
    PageFetchError
        ``fetch_page`` raised.
    """

    log = logger or UnifiedLogger.get(__name__).bind(component="http.paginator", style="offset")
    page_size = max(page_size, 1)
    max_pages = _normalize_max_pages(max_pages)
    collected: list[T] = []
    offset = 0

    for page_index in range(max_pages):
        _ensure_not_cancelled(token, collected, page_index, log)
        try:
            items = fetch_page(offset)
        except Exception as exc:
            log.debug(LogEvents.HTTP_PAGINATOR_FETCH_FAILED, page_index=page_index, offset=offset, error=str(exc))
            raise PageFetchError(exc, items=list(collected), pages_fetched=page_index) from exc

        collected.extend(items)
        log.debug(
            LogEvents.HTTP_PAGINATOR_PAGE_FETCHED,
            page_index=page_index,
            offset=offset,
            items_count=len(items),
            items_total=len(collected),
        )
        if len(items) < page_size:
            return collected
        offset += len(items)

    log.debug(LogEvents.HTTP_PAGINATOR_LIMIT_REACHED, max_pages=max_pages, items_total=len(collected))
    return collected


def fetch_all_cursor(
    fetch_page: CursorFetcher[T],
    *,
    max_pages: int = DEFAULT_MAX_PAGES,
    token: CancellationToken | None = None,
    logger: BoundLogger | None = None,
) -> list[T]:
    """Collect items from a cursor paginated endpoint.

    The first call receives an empty cursor.  Each call returns the page items
    and the next cursor; an empty or ``None`` cursor ends the loop, as does
    reaching ``max_pages`` fetches.

    Raises
    ------
    PaginationCancelled
        ``token`` was cancelled before a fetch.
    PageFetchError
        ``fetch_page`` raised.
    """

    log = logger or UnifiedLogger.get(__name__).bind(component="http.paginator", style="cursor")
    max_pages = _normalize_max_pages(max_pages)
    collected: list[T] = []
    cursor = ""

    for page_index in range(max_pages):
        _ensure_not_cancelled(token, collected, page_index, log)
        try:
            items, next_cursor = fetch_page(cursor)
        except Exception as exc:
            log.debug(LogEvents.HTTP_PAGINATOR_FETCH_FAILED, page_index=page_index, cursor=cursor, error=str(exc))
            raise PageFetchError(exc, items=list(collected), pages_fetched=page_index) from exc

        collected.extend(items)
        log.debug(
            LogEvents.HTTP_PAGINATOR_PAGE_FETCHED,
            page_index=page_index,
            items_count=len(items),
            items_total=len(collected),
            has_next=bool(next_cursor),
        )
        if not next_cursor:
            return collected
        cursor = next_cursor

    log.debug(LogEvents.HTTP_PAGINATOR_LIMIT_REACHED, max_pages=max_pages, items_total=len(collected))
    return collected

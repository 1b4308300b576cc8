"""Retrying transport adapter for ``requests`` sessions.

:class:`RetryTransport` wraps another adapter and owns the retry policy of a
single logical request: every physical attempt sends a fresh clone of the
prepared request, 429 and 5xx responses are retried after a server supplied
``Retry-After`` hint or a capped exponential back-off, and transport errors
are retried until the attempt budget runs out.
"""

from __future__ import annotations

import re
import time
from collections.abc import Callable
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Any, Final

from requests import PreparedRequest, Response
from requests.adapters import BaseAdapter, HTTPAdapter
from requests.exceptions import RequestException, Timeout, UnrewindableBodyError
from requests.utils import rewind_body
from structlog.stdlib import BoundLogger

from attio_cli.core.log_events import LogEvents
from attio_cli.core.logger import UnifiedLogger

__all__ = [
    "BACKOFF_BASE_SECONDS",
    "BACKOFF_MAX_SECONDS",
    "DEFAULT_MAX_RETRIES",
    "MAX_RETRY_AFTER_SECONDS",
    "RequestCloneError",
    "RetryTransport",
    "backoff",
    "clone_request",
    "drain_and_close",
    "parse_retry_after",
    "retry_delay",
    "should_retry",
]

BACKOFF_BASE_SECONDS: Final[float] = 0.25
BACKOFF_MAX_SECONDS: Final[float] = 5.0
DEFAULT_MAX_RETRIES: Final[int] = 3
MAX_RETRY_AFTER_SECONDS: Final[float] = 24 * 60 * 60.0

_DRAIN_CHUNK_SIZE: Final[int] = 64 * 1024
_RETRY_AFTER_SECONDS: Final[re.Pattern[str]] = re.compile(r"^[+-]?[0-9]+$")

TimeoutValue = float | tuple[float | None, float | None] | None


class RequestCloneError(RequestException):
    """Raised when a request cannot be re-materialised for another attempt.

    A clone failure means the body was supplied in a form that cannot be
    replayed (a generator, an unseekable stream).  It is never retried.
    """


def should_retry(status_code: int) -> bool:
    """Return ``True`` for rate limited (429) and server error (5xx) statuses."""

    return status_code == 429 or 500 <= status_code <= 599


def backoff(attempt: int) -> float:
    """Return the fallback wait in seconds for a zero-based ``attempt``.

    The sequence starts at 250ms, doubles per attempt and saturates at 5s.
    Negative attempts are treated as the first one.
    """

    delay = BACKOFF_BASE_SECONDS
    for _ in range(max(attempt, 0)):
        delay *= 2
        if delay >= BACKOFF_MAX_SECONDS:
            return BACKOFF_MAX_SECONDS
    return delay


def parse_retry_after(value: str | None, *, now: datetime | None = None) -> float | None:
    """Parse a ``Retry-After`` header into a positive number of seconds.

    Both the delta-seconds and the HTTP-date forms are accepted.  ``None`` is
    returned when the value is missing, malformed, non-positive or a date that
    is not strictly in the future.  Hints are capped at
    :data:`MAX_RETRY_AFTER_SECONDS`.
    """

    if value is None:
        return None
    candidate = value.strip()
    if not candidate:
        return None

    if _RETRY_AFTER_SECONDS.match(candidate):
        try:
            seconds = int(candidate)
        except ValueError:
            # More digits than int() accepts.
            return None
        return float(min(seconds, MAX_RETRY_AFTER_SECONDS)) if seconds > 0 else None

    try:
        parsed = parsedate_to_datetime(candidate)
    except (TypeError, ValueError, IndexError, OverflowError):
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    current = now or datetime.now(timezone.utc)
    delta = (parsed - current).total_seconds()
    return min(delta, MAX_RETRY_AFTER_SECONDS) if delta > 0 else None


def retry_delay(retry_after: str | None, attempt: int) -> float:
    """Return the wait before the next attempt, preferring the server hint."""

    hinted = parse_retry_after(retry_after)
    if hinted is not None:
        return hinted
    return backoff(attempt)


def clone_request(request: PreparedRequest) -> PreparedRequest:
    """Return a copy of ``request`` whose body can be sent again.

    ``bytes``/``str`` bodies are immutable and shared as-is.  File-like bodies
    are rewound to the position ``requests`` recorded when the request was
    prepared.  Anything else cannot be replayed and raises
    :class:`RequestCloneError`.
    """

    clone = request.copy()
    body = request.body
    if body is None or isinstance(body, (bytes, str)):
        return clone

    if isinstance(getattr(request, "_body_position", None), int):
        try:
            rewind_body(clone)
        except UnrewindableBodyError as exc:
            raise RequestCloneError(f"clone request: {exc}", request=request) from exc
        return clone

    raise RequestCloneError(
        f"clone request: body of type {type(body).__name__} cannot be replayed",
        request=request,
    )


def drain_and_close(response: Response | None, *, logger: BoundLogger | None = None) -> None:
    """Consume the remaining body of ``response`` and release its connection."""

    if response is None:
        return
    try:
        for _ in response.iter_content(chunk_size=_DRAIN_CHUNK_SIZE):
            pass
    except (RequestException, OSError) as exc:
        log = logger or UnifiedLogger.get(__name__)
        log.debug(LogEvents.HTTP_BODY_DRAIN_FAILED, url=response.url, error=str(exc))
    finally:
        response.close()


class RetryTransport(BaseAdapter):
    """Adapter that retries 429/5xx responses and transport failures.

    Parameters
    ----------
    base:
        Adapter performing the physical round-trip.  Defaults to a new
        :class:`requests.adapters.HTTPAdapter`.
    max_retries:
        Retries on top of the first attempt.  Negative values mean a single
        attempt.
    total_timeout:
        Wall-clock budget in seconds shared by all attempts of one logical
        request, including the waits between them.
    sleep:
        Function used to wait between attempts.
    clock:
        Monotonic clock used to enforce ``total_timeout``.
    """

    def __init__(
        self,
        base: BaseAdapter | None = None,
        *,
        max_retries: int = DEFAULT_MAX_RETRIES,
        total_timeout: float | None = None,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
        logger: BoundLogger | None = None,
    ) -> None:
        super().__init__()
        self.base = base or HTTPAdapter()
        self.max_retries = max(int(max_retries), 0)
        self.total_timeout = total_timeout
        self._sleep = sleep
        self._clock = clock
        self._log = logger or UnifiedLogger.get(__name__).bind(component="http.retry_transport")

    def send(
        self,
        request: PreparedRequest,
        stream: bool = False,
        timeout: TimeoutValue = None,
        verify: bool | str = True,
        cert: Any = None,
        proxies: Any = None,
    ) -> Response:
        deadline = None if self.total_timeout is None else self._clock() + self.total_timeout
        attempt = 0

        while True:
            is_last = attempt >= self.max_retries
            try:
                attempt_request = clone_request(request)
            except RequestCloneError as exc:
                self._log.error(
                    LogEvents.HTTP_REQUEST_CLONE_FAILED,
                    method=request.method,
                    url=request.url,
                    attempt=attempt + 1,
                    error=str(exc),
                )
                raise

            attempt_timeout = self._attempt_timeout(request, timeout, deadline)
            try:
                response = self.base.send(
                    attempt_request,
                    stream=stream,
                    timeout=attempt_timeout,
                    verify=verify,
                    cert=cert,
                    proxies=proxies,
                )
            except RequestException as exc:
                if is_last:
                    raise
                wait = backoff(attempt)
                self._log.debug(
                    LogEvents.HTTP_REQUEST_EXCEPTION,
                    method=request.method,
                    url=request.url,
                    attempt=attempt + 1,
                    wait_seconds=wait,
                    error=str(exc),
                )
                self._wait(request, wait, deadline)
                attempt += 1
                continue

            if is_last or not should_retry(response.status_code):
                return response

            wait = retry_delay(response.headers.get("Retry-After"), attempt)
            self._log.debug(
                LogEvents.HTTP_REQUEST_RETRY,
                method=request.method,
                url=request.url,
                attempt=attempt + 1,
                status_code=response.status_code,
                wait_seconds=wait,
            )
            drain_and_close(response, logger=self._log)
            self._wait(request, wait, deadline)
            attempt += 1

    def close(self) -> None:
        self.base.close()

    def _deadline_exceeded(self, request: PreparedRequest) -> Timeout:
        self._log.warning(
            LogEvents.HTTP_REQUEST_DEADLINE_EXCEEDED,
            method=request.method,
            url=request.url,
            total_timeout=self.total_timeout,
        )
        return Timeout(
            f"request exceeded total timeout of {self.total_timeout}s",
            request=request,
        )

    def _wait(self, request: PreparedRequest, wait: float, deadline: float | None) -> None:
        # A wait that would outlive the deadline fails now instead of after sleeping.
        if deadline is not None and wait >= deadline - self._clock():
            raise self._deadline_exceeded(request)
        self._sleep(wait)

    def _attempt_timeout(
        self,
        request: PreparedRequest,
        timeout: TimeoutValue,
        deadline: float | None,
    ) -> TimeoutValue:
        if deadline is None:
            return timeout

        remaining = deadline - self._clock()
        if remaining <= 0:
            raise self._deadline_exceeded(request)

        if timeout is None:
            return remaining
        if isinstance(timeout, tuple):
            connect, read = timeout
            return (
                remaining if connect is None else min(connect, remaining),
                remaining if read is None else min(read, remaining),
            )
        return min(timeout, remaining)

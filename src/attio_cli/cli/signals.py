"""Ctrl-C handling for multi-page fetches."""

from __future__ import annotations

import signal
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from types import FrameType

from attio_cli.clients.http.pagination import CancellationToken
from attio_cli.core.log_events import LogEvents
from attio_cli.core.logger import UnifiedLogger

__all__ = ["cancel_on_interrupt"]


@contextmanager
def cancel_on_interrupt(token: CancellationToken) -> Iterator[CancellationToken]:
    """Turn the first SIGINT into ``token.cancel()`` for the duration of the block.

    The in-flight page is allowed to finish and the pagination driver stops
    before the next one.  A second SIGINT restores the previous handler and
    raises :class:`KeyboardInterrupt` immediately.  Outside the main thread
    signal handlers cannot be installed, so the block runs unchanged.
    """

    if threading.current_thread() is not threading.main_thread():
        yield token
        return

    log = UnifiedLogger.get(__name__)
    previous = signal.getsignal(signal.SIGINT)

    def _handler(signum: int, frame: FrameType | None) -> None:
        if token.cancelled:
            signal.signal(signal.SIGINT, previous)
            raise KeyboardInterrupt
        log.info(LogEvents.CLI_RUN_CANCELLED, signal=signal.Signals(signum).name)
        token.cancel()

    signal.signal(signal.SIGINT, _handler)
    try:
        yield token
    finally:
        signal.signal(signal.SIGINT, previous)

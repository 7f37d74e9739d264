"""Block until work is done or the process is asked to stop."""

from __future__ import annotations

import logging
import signal
import threading
from collections.abc import Callable

log = logging.getLogger(__name__)

_POLL_SECONDS = 0.05


def _termination_signals() -> list[signal.Signals]:
    names = ("SIGINT", "SIGTERM", "SIGQUIT")
    return [getattr(signal, name) for name in names if hasattr(signal, name)]


def wait_for_termination(done: threading.Event, cancel: Callable[[], None]) -> bool:
    """Wait until ``done`` is set or a termination signal arrives.

    On a signal ``cancel`` is called. Returns True if a signal ended the
    wait. Must be called from the main thread; the previous signal handlers
    are restored afterwards.
    """
    log.debug("Waiting to finish...")
    signalled = threading.Event()

    def _handler(signum, frame):
        signalled.set()

    previous = {sig: signal.signal(sig, _handler) for sig in _termination_signals()}
    try:
        while True:
            if signalled.is_set():
                log.debug("Got a termination signal, canceling execution...")
                cancel()
                return True
            if done.wait(_POLL_SECONDS):
                log.debug("Context done.")
                return False
    finally:
        for sig, handler in previous.items():
            signal.signal(sig, handler)
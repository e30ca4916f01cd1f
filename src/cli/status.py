"""
Rotating status messages shown while a request is in flight.

The ticker runs on its own timer, independent of the request, and stops
when its context exits.
"""

import itertools
import sys
import threading
from typing import Optional, Sequence, TextIO

DEFAULT_MESSAGES = (
    "Finding the business on Google Maps...",
    "Reading the latest reviews...",
    "Looking for common themes...",
    "Writing the summary...",
    "Translating reviews...",
    "Almost there...",
)


class StatusTicker:
    """
    Prints the next status message every `interval` seconds.

    Usage:
        with StatusTicker():
            data = fetcher.fetch(url)
    """

    def __init__(
        self,
        messages: Sequence[str] = DEFAULT_MESSAGES,
        interval: float = 2.5,
        stream: Optional[TextIO] = None
    ):
        if not messages:
            raise ValueError("StatusTicker needs at least one message")
        self.messages = tuple(messages)
        self.interval = interval
        self.stream = stream or sys.stderr
        self.shown = []
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    def _show(self, message: str):
        self.shown.append(message)
        self.stream.write(f"⏳ {message}\n")
        self.stream.flush()

    def _run(self):
        cycle = itertools.cycle(self.messages)
        self._show(next(cycle))
        while not self._stop.wait(self.interval):
            self._show(next(cycle))

    def start(self):
        if self._thread is not None:
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._run, name="status-ticker", daemon=True)
        self._thread.start()

    def stop(self):
        self._stop.set()
        if self._thread is not None:
            self._thread.join()
            self._thread = None

    def __enter__(self) -> "StatusTicker":
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.stop()
        return False

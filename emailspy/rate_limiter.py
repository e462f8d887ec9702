from __future__ import annotations

import threading
from typing import Optional


class CrawlDelay:
    """Fixed pause between two page fetches that an abort can cut short.

    wait() blocks the crawl thread only; a zero delay returns immediately."""

    def __init__(self, seconds: float) -> None:
        if seconds < 0:
            raise ValueError(f"delay must be >= 0, got {seconds}")
        self._seconds = seconds

    @property
    def seconds(self) -> float:
        return self._seconds

    def wait(self, cancelled: Optional[threading.Event] = None) -> bool:
        """Sleep for the configured delay.

        Returns False if ``cancelled`` was set before or during the wait.
        """
        if cancelled is None:
            cancelled = threading.Event()
        if self._seconds <= 0:
            return not cancelled.is_set()
        return not cancelled.wait(self._seconds)

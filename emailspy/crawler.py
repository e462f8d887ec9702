"""
Crawl controller.

Walks the search provider's result pages for one email domain, one page at a
time, and keeps a ranked list of the addresses it finds.
"""
from __future__ import annotations

import logging
import threading
from typing import Callable, Iterable, List, Optional, Tuple

from .aggregator import ContactAggregator
from .base import BaseSearchClient
from .config import (
    DEFAULT_CRAWL_DELAY,
    DEFAULT_EXCLUDED_EMAILS,
    DEFAULT_MAXIMUM_EMAILS,
    CrawlConfig,
)
from .errors import NetworkError, PageDecodeError, RecordParseError
from .factory import create_client
from .models import Contact, CrawlState, CrawlStatus, ParsedRecord, RawRecord
from .page import interpret_page
from .parser import parse_record
from .rate_limiter import CrawlDelay

logger = logging.getLogger(__name__)


def _noop() -> None:
    return None


class EmailSpy:
    """Sequential crawler for addresses on one domain.

    The crawl starts on construction and runs on a daemon thread. ``callback``
    is called with no arguments after every page and once more when the crawl
    ends; read ``contacts`` from inside it. ``abort()`` stops the crawl at the
    next checkpoint and silences the callback for good.
    """

    def __init__(
        self,
        domain: str,
        callback: Optional[Callable[[], None]] = None,
        crawl_delay: float = DEFAULT_CRAWL_DELAY,
        maximum_emails: int = DEFAULT_MAXIMUM_EMAILS,
        client: Optional[BaseSearchClient] = None,
        excluded_emails: Iterable[str] = DEFAULT_EXCLUDED_EMAILS,
        autostart: bool = True,
    ) -> None:
        self.config = CrawlConfig(
            domain=domain,
            callback=callback,
            crawl_delay=crawl_delay,
            maximum_emails=maximum_emails,
            excluded_emails=frozenset(excluded_emails),
        )
        self.domain = domain
        self.maximum_emails = maximum_emails

        self._owns_client = client is None
        self._client = client or create_client()
        self._delay = CrawlDelay(crawl_delay)
        self._aggregator = ContactAggregator(self.config.excluded_emails)
        self._state = CrawlState()

        self._callback = callback or _noop
        self._callback_lock = threading.RLock()
        self._cancelled = threading.Event()
        self._thread: Optional[threading.Thread] = None

        if autostart:
            self.start()

    @classmethod
    def from_config(
        cls,
        config: CrawlConfig,
        client: Optional[BaseSearchClient] = None,
        autostart: bool = True,
    ) -> "EmailSpy":
        return cls(
            domain=config.domain,
            callback=config.callback,
            crawl_delay=config.crawl_delay,
            maximum_emails=config.maximum_emails,
            client=client,
            excluded_emails=config.excluded_emails,
            autostart=autostart,
        )

    # Public control

    def start(self) -> None:
        """Run the crawl on a background thread."""
        if self._thread is not None or self._state.status is not CrawlStatus.IDLE:
            raise RuntimeError("crawl already started")
        self._thread = threading.Thread(
            target=self.run, name=f"emailspy-{self.domain}", daemon=True
        )
        self._thread.start()

    def join(self, timeout: Optional[float] = None) -> bool:
        """Wait for the crawl thread; returns True once the crawl has ended."""
        if self._thread is not None:
            self._thread.join(timeout)
        return self._state.status.terminal

    def abort(self) -> None:
        """Cancel the crawl. Safe to call repeatedly and after it finished."""
        with self._callback_lock:
            self._callback = _noop
        self._cancelled.set()

    # Read-only views

    @property
    def status(self) -> CrawlStatus:
        return self._state.status

    @property
    def running(self) -> bool:
        return self._state.running

    @property
    def contacts(self) -> Tuple[Contact, ...]:
        return self._state.contacts

    @property
    def pages_visited(self) -> int:
        return self._state.pages_visited

    @property
    def error(self) -> Optional[str]:
        return self._state.error

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    # Crawl loop

    def run(self) -> None:
        """Run the whole crawl on the calling thread.

        Crawl errors end the crawl in FAILED and are logged, never raised.
        """
        if self._state.status is not CrawlStatus.IDLE:
            raise RuntimeError("crawl already started")
        self._state.status = CrawlStatus.RUNNING
        logger.info(f"Starting crawl for @{self.domain}")

        try:
            self._finish(self._crawl())
        except Exception as exc:  # noqa: BLE001
            logger.exception(f"Crawl for @{self.domain} crashed")
            self._state.error = f"{type(exc).__name__}: {exc}"
            self._finish(CrawlStatus.FAILED)
        finally:
            if self._owns_client:
                self._client.close()

    def _crawl(self) -> CrawlStatus:
        try:
            url: Optional[str] = self._client.fetch_first_page_pointer(self.domain)
        except NetworkError as exc:
            return self._fail(exc)

        while True:
            if self._cancelled.is_set():
                return CrawlStatus.ABORTED
            if not url:
                return CrawlStatus.COMPLETED

            try:
                content = self._client.fetch_page(url)
                page = interpret_page(content, origin=self._client.origin)
            except NetworkError as exc:
                return self._fail(exc)
            except PageDecodeError as exc:
                logger.info(f"No more results at {url}: {exc}")
                return CrawlStatus.COMPLETED

            self._aggregate(self._parse_records(page.records))
            self._notify()

            if len(self._aggregator) > self.maximum_emails:
                logger.info(
                    f"Found {len(self._aggregator)} addresses, over the limit of {self.maximum_emails}"
                )
                return CrawlStatus.COMPLETED

            self._delay.wait(self._cancelled)
            if self._cancelled.is_set():
                return CrawlStatus.ABORTED
            url = page.next_url

    def _parse_records(self, records: List[RawRecord]) -> List[ParsedRecord]:
        parsed: List[ParsedRecord] = []
        for record in records:
            try:
                parsed.append(parse_record(record, self.domain))
            except RecordParseError as exc:
                logger.debug(f"Skipping record: {type(exc).__name__}: {exc}")
        return parsed

    def _aggregate(self, records: List[ParsedRecord]) -> None:
        added = self._aggregator.add_page(records)
        self._state.contacts = self._aggregator.contacts
        self._state.pages_visited += 1
        logger.info(
            f"Page {self._state.pages_visited}: {len(records)} records, "
            f"{added} new sources, {len(self._aggregator)} addresses"
        )

    def _fail(self, exc: NetworkError) -> CrawlStatus:
        logger.error(f"Crawl for @{self.domain} failed: {exc} ({exc.url})")
        self._state.error = str(exc)
        return CrawlStatus.FAILED

    def _finish(self, status: CrawlStatus) -> None:
        self._state.status = status
        logger.info(
            f"Crawl for @{self.domain} {status.value} after {self._state.pages_visited} pages, "
            f"{len(self._state.contacts)} addresses"
        )
        self._notify()

    def _notify(self) -> None:
        with self._callback_lock:
            try:
                self._callback()
            except Exception:  # noqa: BLE001
                logger.exception("Progress callback raised")

from __future__ import annotations

import logging
import re
import time
from abc import ABC, abstractmethod
from typing import Optional, Tuple
from urllib.parse import urljoin

from .backoff import BackoffStrategy
from .config import DEFAULT_MAX_RETRIES, DEFAULT_TIMEOUT, SEARCH_ORIGIN
from .errors import NetworkError

logger = logging.getLogger(__name__)

# The search landing page references its first result page in a quoted string
_BOOTSTRAP_RE = re.compile(r"'(/d.js[^']*)")

_RETRY_STATUS = frozenset({429, 500, 502, 503, 504})


class BaseSearchClient(ABC):
    """Abstract collaborator that fetches search pages for the crawler.

    Subclasses provide the HTTP transport via _get(); this class owns the
    retry loop and turns every failure into NetworkError:
    - any 2xx status is success;
    - 429 and 5xx responses and transport exceptions are retried with backoff;
    - other statuses fail at once.
    """

    def __init__(
        self,
        backoff: Optional[BackoffStrategy] = None,
        max_retries: int = DEFAULT_MAX_RETRIES,
        timeout: float = DEFAULT_TIMEOUT,
        origin: str = SEARCH_ORIGIN,
    ) -> None:
        self._backoff = backoff or BackoffStrategy()
        self._max_retries = max(1, max_retries)
        self._timeout = timeout
        self.origin = origin

    def fetch_first_page_pointer(self, domain: str) -> str:
        """Resolve the absolute URL of the first result page for ``@domain``."""
        url = f"{self.origin}/?q=%22%40{domain}%22&ia=web"
        content = self.fetch_page(url)
        match = _BOOTSTRAP_RE.search(content)
        if not match:
            raise NetworkError("search page has no result page reference", url=url)
        return urljoin(self.origin, match.group(1))

    def fetch_page(self, url: str) -> str:
        attempt = 0
        while True:
            attempt += 1
            status_code = None
            try:
                status_code, text = self._get(url)
            except Exception as exc:  # noqa: BLE001
                if attempt >= self._max_retries:
                    raise NetworkError(f"{type(exc).__name__}: {exc}", url=url) from exc
                logger.warning(f"Request to {url} failed ({type(exc).__name__}), retry {attempt}")
            else:
                if 200 <= status_code < 300:
                    return text
                if status_code not in _RETRY_STATUS or attempt >= self._max_retries:
                    raise NetworkError(f"HTTP_{status_code}", url=url, status_code=status_code)
                logger.warning(f"Request to {url} returned {status_code}, retry {attempt}")

            time.sleep(self._backoff.get_sleep(attempt, status_code))

    @abstractmethod
    def _get(self, url: str) -> Tuple[int, str]:
        """Perform one GET; return (status_code, body text)."""

    def close(self) -> None:
        pass

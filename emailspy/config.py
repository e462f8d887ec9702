"""
Configuration settings for the email crawl.

Module constants are the defaults; CrawlConfig bundles one crawl's settings.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, FrozenSet, Optional

# Search provider origin; relative pagination references resolve against it
SEARCH_ORIGIN = "https://duckduckgo.com"

# Relative path prefix of the next-page reference in a pagination footer
PAGINATION_PREFIX = "/d.js?"

# Delay in seconds between two page fetches (0 = no delay)
DEFAULT_CRAWL_DELAY = 0.1

# Stop after a page leaves more than this many distinct addresses
DEFAULT_MAXIMUM_EMAILS = 100

# Addresses that are never reported (the crawl owner's own address)
DEFAULT_EXCLUDED_EMAILS: FrozenSet[str] = frozenset({"rylan@intoli.com"})

# HTTP settings
DEFAULT_TIMEOUT = 20
DEFAULT_MAX_RETRIES = 3
DEFAULT_IMPERSONATE = "chrome120"
DEFAULT_BACKEND = "curl"


@dataclass(frozen=True)
class CrawlConfig:
    domain: str
    callback: Optional[Callable[[], None]] = None
    crawl_delay: float = DEFAULT_CRAWL_DELAY
    maximum_emails: int = DEFAULT_MAXIMUM_EMAILS
    excluded_emails: FrozenSet[str] = DEFAULT_EXCLUDED_EMAILS

    def __post_init__(self) -> None:
        if not self.domain or not self.domain.strip():
            raise ValueError("domain is required")
        if self.crawl_delay < 0:
            raise ValueError(f"crawl_delay must be >= 0, got {self.crawl_delay}")
        if self.maximum_emails < 1:
            raise ValueError(f"maximum_emails must be >= 1, got {self.maximum_emails}")

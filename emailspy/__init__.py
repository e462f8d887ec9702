"""Email domain crawler package.

Crawls search result pages for addresses on one domain and ranks them by
how many distinct pages cite them.

Key modules:
    crawler       -- EmailSpy crawl controller
    parser        -- record parser (URL + address extraction)
    page          -- page interpreter (embedded JSON block + pagination)
    aggregator    -- ContactAggregator for dedup and ranking
    base          -- BaseSearchClient with the retry loop
    clients       -- requests and curl_cffi search clients
    factory       -- create_client for a backend name
    backoff       -- BackoffStrategy for retry delays
    rate_limiter  -- CrawlDelay between page fetches
    models        -- Contact, Source, ParsedRecord, CrawlState dataclasses
    errors        -- exception hierarchy
    config        -- defaults and CrawlConfig
"""
from .crawler import EmailSpy
from .models import Contact, CrawlStatus, Source

__all__ = ["EmailSpy", "Contact", "CrawlStatus", "Source"]

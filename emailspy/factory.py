from __future__ import annotations

from typing import Optional

from .backoff import BackoffStrategy
from .base import BaseSearchClient
from .clients import ImpersonatingSearchClient, RequestsSearchClient
from .config import DEFAULT_BACKEND, DEFAULT_MAX_RETRIES, DEFAULT_TIMEOUT, SEARCH_ORIGIN

BACKENDS = ("curl", "requests")


def create_client(
    backend: str = DEFAULT_BACKEND,
    backoff: Optional[BackoffStrategy] = None,
    max_retries: int = DEFAULT_MAX_RETRIES,
    timeout: float = DEFAULT_TIMEOUT,
    origin: str = SEARCH_ORIGIN,
) -> BaseSearchClient:
    """Build the search client for a transport backend name.

    "curl" impersonates a browser and gets past the provider's bot checks more
    often; "requests" has no native dependency.
    """
    common = dict(
        backoff=backoff or BackoffStrategy(),
        max_retries=max_retries,
        timeout=timeout,
        origin=origin,
    )
    if backend == "curl":
        return ImpersonatingSearchClient(**common)
    if backend == "requests":
        return RequestsSearchClient(**common)
    raise ValueError(f"Unknown backend: {backend}")

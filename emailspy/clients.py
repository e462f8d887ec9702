from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import requests
from curl_cffi import requests as curl_requests

from .base import BaseSearchClient
from .config import DEFAULT_IMPERSONATE

_DEFAULT_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
    ),
    "Accept-Language": "en-US,en;q=0.9",
}


class RequestsSearchClient(BaseSearchClient):
    """Plain requests transport with a browser-like User-Agent."""

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        headers: Optional[Dict[str, str]] = None,
        *args,
        **kwargs,
    ) -> None:
        super().__init__(*args, **kwargs)
        self._session = session or requests.Session()
        self._headers = headers or dict(_DEFAULT_HEADERS)

    def _get(self, url: str) -> Tuple[int, str]:
        resp = self._session.get(url, headers=self._headers, timeout=self._timeout)
        return resp.status_code, resp.text

    def close(self) -> None:
        self._session.close()


class ImpersonatingSearchClient(BaseSearchClient):
    """curl_cffi transport that impersonates a real browser's TLS fingerprint."""

    def __init__(
        self,
        impersonate: str = DEFAULT_IMPERSONATE,
        session: Optional[Any] = None,
        *args,
        **kwargs,
    ) -> None:
        super().__init__(*args, **kwargs)
        self._impersonate = impersonate
        self._session = session or curl_requests.Session()

    def _get(self, url: str) -> Tuple[int, str]:
        resp = self._session.get(url, impersonate=self._impersonate, timeout=self._timeout)
        return resp.status_code, resp.text

    def close(self) -> None:
        self._session.close()

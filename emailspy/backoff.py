from __future__ import annotations

import random
from typing import Optional

# Rate limited responses wait this many times longer than transport errors
_THROTTLED_FACTOR = 4.0


class BackoffStrategy:
    """Exponential backoff with jitter between retries of one request.

    Sleep is base * 2^(attempt-1), scaled up when the server answered 429,
    capped at max_seconds, plus up to 10% jitter."""

    def __init__(self, base_seconds: float = 0.5, max_seconds: float = 10.0) -> None:
        self._base = base_seconds
        self._max = max_seconds

    def get_sleep(self, attempt: int, status_code: Optional[int] = None) -> float:
        """Seconds to wait before retry number ``attempt`` (1-based)."""
        exp = self._base * (2 ** max(attempt - 1, 0))
        if status_code == 429:
            exp *= _THROTTLED_FACTOR
        exp = min(self._max, exp)
        return exp + random.uniform(0, exp * 0.1)

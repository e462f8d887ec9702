from __future__ import annotations

import json
import re
from typing import Any, Mapping, Optional
from urllib.parse import urljoin

from .config import PAGINATION_PREFIX, SEARCH_ORIGIN
from .errors import PageDecodeError
from .models import PageResult

# Results are embedded as one or more inline JSON arrays of objects
_EMBEDDED_BLOCK_RE = re.compile(r"(\[{.*?}\])")


def extract_page_json(content: str) -> list:
    """Decode the last embedded array-of-objects block of a page body."""
    blocks = _EMBEDDED_BLOCK_RE.findall(content or "")
    if not blocks:
        raise PageDecodeError("no embedded result block")
    try:
        data = json.loads(blocks[-1])
    except json.JSONDecodeError as exc:
        raise PageDecodeError(f"embedded block is not valid JSON: {exc}") from exc
    if not isinstance(data, list) or not data:
        raise PageDecodeError("embedded block is not a non-empty array")
    return data


def next_page_reference(footer: Any, prefix: str = PAGINATION_PREFIX) -> Optional[str]:
    if not isinstance(footer, Mapping):
        return None
    refs = [v for v in footer.values() if isinstance(v, str) and v.startswith(prefix)]
    return refs[-1] if refs else None


def interpret_page(
    content: str,
    origin: str = SEARCH_ORIGIN,
    prefix: str = PAGINATION_PREFIX,
) -> PageResult:
    """Split a result page into raw records and the absolute next-page URL.

    The final element of the decoded block is the pagination footer and is
    never returned as a record.
    """
    data = extract_page_json(content)
    footer = data.pop()
    relative = next_page_reference(footer, prefix)

    return PageResult(
        records=[r for r in data if isinstance(r, Mapping)],
        next_url=urljoin(origin, relative) if relative else None,
    )

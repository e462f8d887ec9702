"""
Record parser.

Pulls a citation URL and an address on the target domain out of one search
result record, an unordered bag of fields whose names carry no meaning.
"""
from __future__ import annotations

import re
from typing import List, Optional

from .errors import NoEmailFound, NoSnippetFound
from .models import ParsedRecord, RawRecord

# Unquoted dot-separated local part, or a quoted one
_LOCAL_PART = r'(([^<>()\[\]\\.,;:\s@"]+(\.[^<>()\[\]\\.,;:\s@"]+)*)|(".+"))'


def _string_values(record: RawRecord) -> List[str]:
    return [v for v in record.values() if isinstance(v, str)]


def find_url(record: RawRecord) -> Optional[str]:
    """Return the first URL (in sorted order) that appears in two fields."""
    candidates = sorted(
        v for v in _string_values(record) if v.startswith("http://") or v.startswith("https://")
    )
    for current, following in zip(candidates, candidates[1:]):
        if current == following:
            return current
    return None


def find_snippet(record: RawRecord, domain: str) -> str:
    """Return the last field mentioning ``@domain``, bold markers normalised.

    Raises NoSnippetFound when no field mentions the domain.
    """
    domain_re = re.compile(re.escape(domain), re.IGNORECASE)
    needle = f"@{domain}"

    matching = []
    for value in _string_values(record):
        value = value.replace("@<b>", "<b>@", 1)
        value = domain_re.sub(lambda _m: domain, value)
        if needle in value:
            matching.append(value)

    if not matching:
        raise NoSnippetFound(f"no field mentions {needle}")
    return matching[-1].replace(f"<b>@{domain}</b>", needle, 1)


def email_pattern(domain: str) -> re.Pattern:
    return re.compile(_LOCAL_PART + "@" + re.escape(domain))


def parse_record(record: RawRecord, domain: str) -> ParsedRecord:
    """Extract url, snippet and email from one raw result record.

    The returned snippet has the full address wrapped in ``<b>`` tags. The
    url is None when no URL is repeated across the record's fields.
    """
    url = find_url(record)
    snippet = find_snippet(record, domain)

    match = email_pattern(domain).search(snippet)
    if not match:
        raise NoEmailFound(f"no address on {domain} in snippet")
    email = match.group(0)

    return ParsedRecord(
        url=url,
        snippet=snippet.replace(email, f"<b>{email}</b>", 1),
        email=email,
    )

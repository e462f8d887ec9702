from __future__ import annotations

import logging
from dataclasses import replace
from typing import Dict, FrozenSet, Iterable, List, Tuple

from .config import DEFAULT_EXCLUDED_EMAILS
from .models import Contact, ParsedRecord, Source

logger = logging.getLogger(__name__)


class ContactAggregator:
    """Merges parsed records from successive pages into ranked contacts.

    Contacts are keyed by address. After each page, sources are ordered by
    URL and contacts by source count (most cited first, ties keep their
    insertion order).
    """

    def __init__(self, excluded_emails: Iterable[str] = DEFAULT_EXCLUDED_EMAILS) -> None:
        self._excluded: FrozenSet[str] = frozenset(excluded_emails)
        self._contacts: List[Contact] = []
        self._positions: Dict[str, int] = {}

    def add_page(self, records: Iterable[ParsedRecord]) -> int:
        """Fold one page of records in; returns the number of new sources."""
        added = 0
        for record in records:
            if record.email in self._excluded:
                logger.debug(f"Skipping excluded address {record.email}")
                continue
            if self._add_record(record):
                added += 1

        self._contacts = [
            replace(c, sources=tuple(sorted(c.sources, key=lambda s: s.url)))
            for c in self._contacts
        ]
        self._contacts.sort(key=lambda c: len(c.sources), reverse=True)
        self._positions = {c.email: i for i, c in enumerate(self._contacts)}
        return added

    def _add_record(self, record: ParsedRecord) -> bool:
        pos = self._positions.get(record.email)
        if pos is None:
            pos = len(self._contacts)
            self._contacts.append(Contact(email=record.email))
            self._positions[record.email] = pos

        # no repeated url means nothing to cite, the address is still kept
        if record.url is None:
            return False

        contact = self._contacts[pos]
        if any(s.url == record.url for s in contact.sources):
            return False
        source = Source(url=record.url, snippet=record.snippet)
        self._contacts[pos] = replace(contact, sources=contact.sources + (source,))
        return True

    @property
    def contacts(self) -> Tuple[Contact, ...]:
        return tuple(self._contacts)

    def emails(self) -> List[str]:
        return [c.email for c in self._contacts]

    def __len__(self) -> int:
        return len(self._contacts)

    def __contains__(self, email: object) -> bool:
        return email in self._positions

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional, Tuple

RawRecord = Mapping[str, Any]


@dataclass(frozen=True)
class Source:
    url: str
    snippet: str


@dataclass(frozen=True)
class Contact:
    email: str
    sources: Tuple[Source, ...] = ()

    @property
    def urls(self) -> Tuple[str, ...]:
        return tuple(s.url for s in self.sources)


@dataclass(frozen=True)
class ParsedRecord:
    url: Optional[str]
    snippet: str
    email: str


@dataclass(frozen=True)
class PageResult:
    records: List[RawRecord] = field(default_factory=list)
    next_url: Optional[str] = None


class CrawlStatus(enum.Enum):
    IDLE = "idle"
    RUNNING = "running"
    COMPLETED = "completed"
    ABORTED = "aborted"
    FAILED = "failed"

    @property
    def terminal(self) -> bool:
        return self in (CrawlStatus.COMPLETED, CrawlStatus.ABORTED, CrawlStatus.FAILED)


@dataclass
class CrawlState:
    """Mutable progress of one crawl, owned by the controller that created it."""

    status: CrawlStatus = CrawlStatus.IDLE
    contacts: Tuple[Contact, ...] = ()
    pages_visited: int = 0
    error: Optional[str] = None

    @property
    def running(self) -> bool:
        return self.status is CrawlStatus.RUNNING

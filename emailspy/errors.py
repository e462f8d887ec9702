from __future__ import annotations


class EmailSpyError(Exception):
    """Base class for every error raised by the crawl pipeline."""


class NetworkError(EmailSpyError):
    """A page or the search bootstrap could not be fetched."""

    def __init__(self, message: str, url: str = "", status_code: int | None = None) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class PageDecodeError(EmailSpyError):
    """The page body has no decodable embedded result block."""


class RecordParseError(EmailSpyError):
    """A single result record yielded no usable contact."""


class NoSnippetFound(RecordParseError):
    pass


class NoEmailFound(RecordParseError):
    pass

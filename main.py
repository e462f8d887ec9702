from __future__ import annotations

import argparse
import json
import logging
import sys

from emailspy.config import (
    DEFAULT_BACKEND,
    DEFAULT_CRAWL_DELAY,
    DEFAULT_MAX_RETRIES,
    DEFAULT_MAXIMUM_EMAILS,
    DEFAULT_TIMEOUT,
)
from emailspy.crawler import EmailSpy
from emailspy.factory import BACKENDS, create_client
from emailspy.models import CrawlStatus

logger = logging.getLogger("emailspy.main")


def _contacts_as_json(spy: EmailSpy) -> str:
    return json.dumps(
        [
            {
                "email": c.email,
                "sources": [{"url": s.url, "snippet": s.snippet} for s in c.sources],
            }
            for c in spy.contacts
        ],
        ensure_ascii=False,
        indent=2,
    )


def run_crawl(
    domain: str,
    crawl_delay: float,
    maximum_emails: int,
    backend: str,
    timeout: float,
    retries: int,
) -> int:
    client = create_client(backend, max_retries=retries, timeout=timeout)

    def report() -> None:
        top = spy.contacts[0].email if spy.contacts else "-"
        logger.info(f"[{spy.status.value}] pages={spy.pages_visited} emails={len(spy.contacts)} top={top}")

    spy = EmailSpy(
        domain,
        callback=report,
        crawl_delay=crawl_delay,
        maximum_emails=maximum_emails,
        client=client,
        autostart=False,
    )
    spy.start()
    try:
        while not spy.join(timeout=0.5):
            pass
    except KeyboardInterrupt:
        logger.warning("Interrupted, aborting crawl")
        spy.abort()
        spy.join()
    finally:
        client.close()

    print(_contacts_as_json(spy))
    return 1 if spy.status is CrawlStatus.FAILED else 0


def main() -> None:
    parser = argparse.ArgumentParser(description="Find published addresses on an email domain")
    parser.add_argument("domain", help="Email domain to search for, e.g. example.com")
    parser.add_argument("--delay", type=float, default=DEFAULT_CRAWL_DELAY, help="Seconds between page fetches")
    parser.add_argument("--max-emails", type=int, default=DEFAULT_MAXIMUM_EMAILS, help="Stop once more addresses than this are found")
    parser.add_argument("--backend", choices=BACKENDS, default=DEFAULT_BACKEND, help="HTTP transport")
    parser.add_argument("--timeout", type=float, default=DEFAULT_TIMEOUT, help="Per-request timeout in seconds")
    parser.add_argument("--retries", type=int, default=DEFAULT_MAX_RETRIES, help="Attempts per request")
    parser.add_argument("--verbose", action="store_true", help="Log skipped records and retries")

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    try:
        code = run_crawl(
            domain=args.domain,
            crawl_delay=args.delay,
            maximum_emails=args.max_emails,
            backend=args.backend,
            timeout=args.timeout,
            retries=args.retries,
        )
    except ValueError as exc:
        parser.error(str(exc))
    sys.exit(code)


if __name__ == "__main__":
    main()

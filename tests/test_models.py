"""Tests for data model classes."""

import unittest

from emailspy.models import Contact, CrawlState, CrawlStatus, ParsedRecord, Source


class TestContact(unittest.TestCase):
    """Verify Contact creation and immutability."""

    def test_create_contact_with_defaults(self):
        contact = Contact(email="john@example.com")
        self.assertEqual(contact.sources, ())
        self.assertEqual(contact.urls, ())

    def test_contact_is_immutable(self):
        contact = Contact(email="john@example.com")
        with self.assertRaises(AttributeError):
            contact.email = "jane@example.com"

    def test_urls_follow_sources(self):
        contact = Contact(
            email="john@example.com",
            sources=(Source("http://a.com", "s1"), Source("http://b.com", "s2")),
        )
        self.assertEqual(contact.urls, ("http://a.com", "http://b.com"))


class TestParsedRecord(unittest.TestCase):
    def test_url_may_be_absent(self):
        record = ParsedRecord(url=None, snippet="<b>john@example.com</b>", email="john@example.com")
        self.assertIsNone(record.url)


class TestCrawlState(unittest.TestCase):
    """Verify CrawlState defaults and status helpers."""

    def test_new_state_is_idle(self):
        state = CrawlState()
        self.assertEqual(state.status, CrawlStatus.IDLE)
        self.assertFalse(state.running)
        self.assertEqual(state.pages_visited, 0)

    def test_running_follows_status(self):
        state = CrawlState(status=CrawlStatus.RUNNING)
        self.assertTrue(state.running)

    def test_terminal_statuses(self):
        terminal = {s for s in CrawlStatus if s.terminal}
        self.assertEqual(terminal, {CrawlStatus.COMPLETED, CrawlStatus.ABORTED, CrawlStatus.FAILED})


if __name__ == "__main__":
    unittest.main()

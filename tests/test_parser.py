"""Tests for the record parser."""

import unittest

from emailspy.errors import NoEmailFound, NoSnippetFound
from emailspy.parser import find_snippet, find_url, parse_record


class TestFindUrl(unittest.TestCase):
    """The citation URL is the one repeated across fields."""

    def test_duplicate_url_is_returned(self):
        record = {"a": "http://x.com", "b": "http://x.com", "c": "text"}
        self.assertEqual(find_url(record), "http://x.com")

    def test_no_duplicate_means_no_url(self):
        record = {"a": "http://x.com", "b": "https://y.com"}
        self.assertIsNone(find_url(record))

    def test_first_duplicate_in_sorted_order_wins(self):
        record = {
            "a": "https://b.com",
            "b": "https://a.com",
            "c": "https://b.com",
            "d": "https://a.com",
        }
        self.assertEqual(find_url(record), "https://a.com")

    def test_non_http_and_non_string_values_are_ignored(self):
        record = {"a": "ftp://x.com", "b": "ftp://x.com", "c": 5, "d": None}
        self.assertIsNone(find_url(record))


class TestFindSnippet(unittest.TestCase):
    """Snippet selection and markup normalisation."""

    def test_last_matching_field_is_used(self):
        record = {"a": "first jane@example.com", "b": "second john@example.com"}
        self.assertEqual(find_snippet(record, "example.com"), "second john@example.com")

    def test_domain_case_is_folded(self):
        record = {"a": "JOHN@EXAMPLE.COM"}
        self.assertEqual(find_snippet(record, "example.com"), "JOHN@example.com")

    def test_domain_dot_is_literal(self):
        record = {"a": "john@exampleXcom"}
        with self.assertRaises(NoSnippetFound):
            find_snippet(record, "example.com")

    def test_bold_domain_is_unwrapped(self):
        record = {"a": "mail john@<b>example.com</b> today"}
        self.assertEqual(find_snippet(record, "example.com"), "mail john@example.com today")

    def test_no_mention_raises(self):
        with self.assertRaises(NoSnippetFound):
            find_snippet({"a": "nothing here", "b": 3}, "example.com")


class TestParseRecord(unittest.TestCase):
    """End-to-end extraction from one raw record."""

    def test_parses_url_email_and_highlights_snippet(self):
        record = {"a": "http://x.com", "b": "http://x.com", "c": "hi <b>@</b>john@example.com"}
        parsed = parse_record(record, "example.com")
        self.assertEqual(parsed.url, "http://x.com")
        self.assertEqual(parsed.email, "john@example.com")
        self.assertIn("<b>john@example.com</b>", parsed.snippet)

    def test_bold_domain_snippet_is_rewrapped_around_full_address(self):
        record = {"a": "mail john@<b>example.com</b> today"}
        parsed = parse_record(record, "example.com")
        self.assertEqual(parsed.snippet, "mail <b>john@example.com</b> today")

    def test_dotted_local_part(self):
        parsed = parse_record({"a": "reach jane.q.doe@example.com now"}, "example.com")
        self.assertEqual(parsed.email, "jane.q.doe@example.com")

    def test_quoted_local_part(self):
        parsed = parse_record({"a": 'mail "john doe"@example.com'}, "example.com")
        self.assertEqual(parsed.email, '"john doe"@example.com')

    def test_missing_url_still_yields_email(self):
        parsed = parse_record({"a": "http://x.com", "b": "john@example.com"}, "example.com")
        self.assertIsNone(parsed.url)
        self.assertEqual(parsed.email, "john@example.com")

    def test_bare_domain_without_local_part_raises(self):
        with self.assertRaises(NoEmailFound):
            parse_record({"a": "write to @example.com"}, "example.com")

    def test_domain_metacharacters_are_escaped(self):
        parsed = parse_record({"a": "ops+1@a+b.io"}, "a+b.io")
        self.assertEqual(parsed.email, "ops+1@a+b.io")


if __name__ == "__main__":
    unittest.main()

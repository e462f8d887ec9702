"""Tests for the concrete transports, with stub sessions."""

import unittest

from emailspy.clients import ImpersonatingSearchClient, RequestsSearchClient


class StubResponse:
    def __init__(self, status_code, text):
        self.status_code = status_code
        self.text = text


class StubSession:
    def __init__(self, response):
        self.response = response
        self.kwargs = None
        self.closed = False

    def get(self, url, **kwargs):
        self.kwargs = dict(kwargs, url=url)
        return self.response

    def close(self):
        self.closed = True


class TestRequestsSearchClient(unittest.TestCase):
    def test_get_sends_headers_and_timeout(self):
        session = StubSession(StubResponse(200, "page"))
        client = RequestsSearchClient(session=session, timeout=7)
        self.assertEqual(client.fetch_page("https://s.test/p"), "page")
        self.assertEqual(session.kwargs["timeout"], 7)
        self.assertIn("User-Agent", session.kwargs["headers"])

    def test_close_closes_session(self):
        session = StubSession(StubResponse(200, ""))
        RequestsSearchClient(session=session).close()
        self.assertTrue(session.closed)


class TestImpersonatingSearchClient(unittest.TestCase):
    def test_get_impersonates_browser(self):
        session = StubSession(StubResponse(200, "page"))
        client = ImpersonatingSearchClient(impersonate="chrome110", session=session)
        self.assertEqual(client.fetch_page("https://s.test/p"), "page")
        self.assertEqual(session.kwargs["impersonate"], "chrome110")
        self.assertEqual(session.kwargs["url"], "https://s.test/p")


if __name__ == "__main__":
    unittest.main()

from datetime import timedelta

import pytest
import requests

from kamus.common.errors import UpstreamError
from kamus.source.fetch import BROWSER_HEADERS, DocumentFetcher, entry_url


class FakeResponse:
    def __init__(self, status_code=200, text="", reason="OK"):
        self.status_code = status_code
        self.text = text
        self.reason = reason
        self.elapsed = timedelta(milliseconds=120)


class FakeSession:
    def __init__(self, response=None, error=None):
        self.headers = {}
        self.response = response
        self.error = error
        self.requests = []

    def get(self, url, timeout=None):
        self.requests.append((url, timeout))
        if self.error is not None:
            raise self.error
        return self.response


def test_entry_url_quotes_spaces():
    assert entry_url("anak emas") == "https://kbbi.kemdikbud.go.id/entri/anak%20emas"
    assert entry_url("rumah", "http://localhost:8080/") == "http://localhost:8080/entri/rumah"


def test_fetch_sends_browser_headers_and_returns_html():
    session = FakeSession(FakeResponse(text="<html></html>"))
    fetcher = DocumentFetcher(timeout=5.0, session=session)

    assert fetcher.fetch("rumah") == "<html></html>"
    assert session.requests == [("https://kbbi.kemdikbud.go.id/entri/rumah", 5.0)]
    for name in ("User-Agent", "Accept", "Accept-Encoding", "Accept-Language"):
        assert session.headers[name] == BROWSER_HEADERS[name]


def test_throttled_response_is_an_upstream_error():
    fetcher = DocumentFetcher(session=FakeSession(FakeResponse(429, reason="Too Many Requests")))

    with pytest.raises(UpstreamError) as excinfo:
        fetcher.fetch("rumah")

    assert excinfo.value.status == 429
    assert excinfo.value.word == "rumah"


def test_transport_failure_is_an_upstream_error():
    fetcher = DocumentFetcher(session=FakeSession(error=requests.ConnectionError("refused")))

    with pytest.raises(UpstreamError) as excinfo:
        fetcher.fetch("rumah")

    assert excinfo.value.status is None
    assert isinstance(excinfo.value.__cause__, requests.ConnectionError)

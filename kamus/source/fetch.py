"""KBBI entry page fetching."""

from typing import Optional

import requests

from kamus.common.config import DEFAULT_BASE_URL
from kamus.common.errors import UpstreamError

# The upstream blocks clients that don't look like a browser
BROWSER_HEADERS = {
    "User-Agent": "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/96.0.4664.110 Safari/537.36",
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,image/apng,*/*;q=0.8",
    "Accept-Encoding": "gzip, deflate, br",
    "Accept-Language": "en-GB,en;q=0.9",
}


def entry_url(word: str, base_url: str = DEFAULT_BASE_URL) -> str:
    """Get the KBBI entry URL for a word."""
    return f"{base_url.rstrip('/')}/entri/{requests.utils.requote_uri(word)}"


class DocumentFetcher:
    """Fetches raw entry pages. One request per call, never retried here."""

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 20.0,
        session: Optional[requests.Session] = None,
        verbose: bool = False,
    ) -> None:
        self.base_url = base_url
        self.timeout = timeout
        self.verbose = verbose
        # Session for connection reuse
        self.session = session or requests.Session()
        self.session.headers.update(BROWSER_HEADERS)

    def fetch(self, word: str) -> str:
        """Return the entry page HTML for a word.

        Raises UpstreamError on any non-200 status (429 when throttled) and on
        transport failures.
        """
        url = entry_url(word, self.base_url)
        try:
            resp = self.session.get(url, timeout=self.timeout)
        except requests.RequestException as e:
            raise UpstreamError(word, None, str(e)) from e

        if resp.status_code != 200:
            if self.verbose:
                print(f"[kamus] [fetch] {word}: status {resp.status_code}")
            raise UpstreamError(word, resp.status_code, resp.reason or "")

        if self.verbose:
            print(f"[kamus] [fetch] {word} ({resp.elapsed.total_seconds():.1f}s)")
        return resp.text

    def close(self) -> None:
        self.session.close()

    __call__ = fetch

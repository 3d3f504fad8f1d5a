from __future__ import annotations

import threading

import pytest

from kamus.common.errors import UpstreamError
from kamus.lookup.service import LookupService
from kamus.lookup.store import CacheStore
from kamus.lookup.words import WordList
from kamus.source.resolve import Resolver


def page(*blocks: str) -> str:
    body = "\n".join(blocks)
    return f"<html><body><div class=\"container body-content\">{body}</div></body></html>"


NOT_FOUND_PAGE = page("<h4>Pencarian Anda</h4><p>Entri tidak ditemukan.</p>")

RUMAH_PAGE = page(
    '<h2 style="margin-bottom:3px">ru.mah<sup>1</sup></h2>',
    '<ol><li><font color="red"><i><span title="n: nomina">n</span></i></font>'
    " bangunan untuk tempat tinggal</li></ol>",
)

ZAMAN_PAGE = page(
    '<h2 style="margin-bottom:3px">za.man'
    " <small>bentuk tidak baku: <b>jaman</b></small></h2>",
    '<ul class="adjusted-par">'
    '<li><font color="red"><i><span title="n: nomina">n</span></i></font>'
    ' <font color="grey"><i>ark</i></font>'
    " jangka waktu yang panjang atau pendek yang menandai sesuatu; masa:"
    ' <font color="grey"><i>zaman dahulu</i></font></li>'
    '<li><font color="red"><i><span title="n: nomina">n</span>'
    ' <span title="ki: kiasan">ki</span> <span title="Jw: -">Jw</span></i></font>'
    " kala; waktu:</li>"
    "</ul>",
)

JAMAN_PAGE = page(
    '<h2 style="margin-bottom:3px">ja.man</h2>',
    '<ul class="adjusted-par"><li>→ <a href="/entri/zaman">zaman</a></li></ul>',
)

JUANG_PAGE = page(
    '<h2 style="margin-bottom:3px">juang</h2>',
    '<font color="darkgreen" title="prakategorial: kata tidak dipakai dalam bentuk dasar">'
    "<i>prakategorial</i></font>",
    '<font color="grey">berjuang, memperjuangkan,  pejuang</font>',
)

DEFAULT_PAGES = {
    "rumah": RUMAH_PAGE,
    "zaman": ZAMAN_PAGE,
    "jaman": JAMAN_PAGE,
    "juang": JUANG_PAGE,
}


class FakeFetcher:
    """Serves canned pages and records every requested word."""

    def __init__(self, pages=None, statuses=None):
        self.pages = dict(DEFAULT_PAGES if pages is None else pages)
        self.statuses = dict(statuses or {})
        self.calls: list[str] = []
        self._lock = threading.Lock()

    def __call__(self, word: str) -> str:
        with self._lock:
            self.calls.append(word)
        status = self.statuses.get(word)
        if status is not None:
            raise UpstreamError(word, status)
        return self.pages.get(word, NOT_FOUND_PAGE)


@pytest.fixture()
def fetcher():
    return FakeFetcher()


@pytest.fixture()
def dictionary_dir(tmp_path):
    return tmp_path / "dictionary"


@pytest.fixture()
def make_service(dictionary_dir, fetcher):
    def factory(words=("rumah", "jaman", "zaman", "juang"), fetch=None, **kwargs):
        store = CacheStore(dictionary_dir)
        resolver = Resolver(fetch or fetcher)
        return LookupService(store, WordList(words), resolver, **kwargs)

    return factory

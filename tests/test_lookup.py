import json
import threading
import time

import pytest
from conftest import RUMAH_PAGE, FakeFetcher

from kamus.common.errors import UpstreamError
from kamus.lookup.service import LookupService, build_service
from kamus.lookup.store import CacheStore
from kamus.lookup.words import WordList
from kamus.schema.artifact import definitions_to_data
from kamus.source.resolve import Resolver


def test_rumah_end_to_end(make_service, fetcher, dictionary_dir):
    service = make_service()

    result = service.lookup("rumah")

    assert definitions_to_data(result) == [
        {
            "syllabification": "ru.mah",
            "rootWord": None,
            "pronunciationSpelling": "rumah",
            "isCanonical": True,
            "alternateForm": None,
            "senses": [
                {
                    "partOfSpeech": "n",
                    "partOfSpeechLabel": "nomina",
                    "gloss": "bangunan untuk tempat tinggal",
                    "example": None,
                    "attributions": [],
                }
            ],
        }
    ]
    artifact = dictionary_dir / "rumah.json"
    assert artifact.exists()
    assert json.loads(artifact.read_text(encoding="utf-8")) == definitions_to_data(result)
    assert fetcher.calls == ["rumah"]


def test_jaman_resolves_through_zaman(make_service):
    service = make_service()

    (jaman,) = service.lookup("jaman")
    (zaman,) = service.lookup("zaman")

    assert jaman.is_canonical is False
    assert jaman.syllabification == "ja.man"
    assert jaman.alternate_form == "zaman"
    assert jaman.senses == zaman.senses


def test_unknown_word_never_fetches(make_service, fetcher, dictionary_dir):
    service = make_service()

    assert service.lookup("qwrtz") is None
    assert fetcher.calls == []
    assert not dictionary_dir.exists()


def test_cache_hit_skips_gate_and_network(make_service, fetcher, dictionary_dir):
    dictionary_dir.mkdir()
    stored = [{"syllabification": None, "rootWord": None, "pronunciationSpelling": "kata",
               "isCanonical": True, "alternateForm": None,
               "senses": [{"partOfSpeech": None, "partOfSpeechLabel": None, "gloss": "unsur bahasa",
                           "example": None, "attributions": []}]}]
    (dictionary_dir / "kata_lama.json").write_text(json.dumps(stored), encoding="utf-8")
    service = make_service(words=())

    result = service.lookup("kata lama")

    assert definitions_to_data(result) == stored
    assert fetcher.calls == []


def test_second_lookup_is_served_from_cache(make_service, fetcher):
    service = make_service()

    first = service.lookup("zaman")
    second = service.lookup("zaman")

    assert first == second
    assert fetcher.calls == ["zaman"]


def test_no_entry_is_not_cached(make_service, fetcher, dictionary_dir):
    service = make_service(words=("xyzzy",))

    assert service.lookup("xyzzy") is None
    assert service.lookup("xyzzy") is None
    assert fetcher.calls == ["xyzzy", "xyzzy"]
    assert not dictionary_dir.exists()


def test_upstream_failure_propagates_without_artifact(make_service, dictionary_dir):
    service = make_service(fetch=FakeFetcher(statuses={"rumah": 503}))

    with pytest.raises(UpstreamError):
        service.lookup("rumah")

    assert not (dictionary_dir / "rumah.json").exists()


def test_cache_write_failure_still_returns_definitions(tmp_path, fetcher, capsys):
    blocker = tmp_path / "dictionary"
    blocker.write_text("not a directory", encoding="utf-8")
    service = LookupService(CacheStore(blocker), WordList(["rumah"]), Resolver(fetcher))

    result = service.lookup("rumah")

    assert result and result[0].senses[0].gloss == "bangunan untuk tempat tinggal"
    assert "[kamus] [error]" in capsys.readouterr().err


def test_concurrent_misses_share_one_resolution(make_service):
    release = threading.Event()
    entered = threading.Event()

    class SlowFetcher(FakeFetcher):
        def __call__(self, word):
            entered.set()
            release.wait(5)
            return super().__call__(word)

    slow = SlowFetcher()
    service = make_service(fetch=slow)
    results = []

    def worker():
        results.append(service.lookup("rumah"))

    threads = [threading.Thread(target=worker) for _ in range(2)]
    threads[0].start()
    assert entered.wait(5)
    threads[1].start()
    time.sleep(0.2)
    release.set()
    for t in threads:
        t.join(5)

    assert slow.calls == ["rumah"]
    assert len(results) == 2 and results[0] == results[1]


def test_background_persist_finishes_on_close(make_service, dictionary_dir):
    with make_service(background_persist=True) as service:
        assert service.lookup("rumah")

    assert (dictionary_dir / "rumah.json").exists()


def test_deleted_artifact_is_fetched_and_cached_again(make_service, fetcher, dictionary_dir):
    service = make_service()
    service.lookup("rumah")
    (dictionary_dir / "rumah.json").unlink()

    assert service.lookup("rumah")
    assert service.lookup("rumah")

    assert fetcher.calls == ["rumah", "rumah"]
    assert (dictionary_dir / "rumah.json").exists()


def test_background_persist_reports_unexpected_failures(tmp_path, fetcher, capsys):
    class BrokenStore(CacheStore):
        def put(self, word, definitions):
            raise RuntimeError("disk unplugged")

    with LookupService(
        BrokenStore(tmp_path / "dictionary"),
        WordList(["rumah"]),
        Resolver(fetcher),
        background_persist=True,
    ) as service:
        assert service.lookup("rumah")

    assert "disk unplugged" in capsys.readouterr().err


def test_build_service_wires_config_paths(tmp_path, monkeypatch):
    from kamus.common.config import ServiceConfig
    from kamus.source.fetch import DocumentFetcher

    (tmp_path / "data").mkdir()
    (tmp_path / "data" / "words.json").write_text('["rumah"]', encoding="utf-8")
    monkeypatch.setattr(DocumentFetcher, "fetch", lambda self, word: RUMAH_PAGE)

    service = build_service(ServiceConfig(), tmp_path)
    result = service.lookup("rumah")

    assert result[0].pronunciation_spelling == "rumah"
    assert (tmp_path / "data" / "dictionary" / "rumah.json").exists()

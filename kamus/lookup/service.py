"""Cache-aside lookup service.

lookup(word):
1. Artifact on disk -> decode and return it (no vocabulary check, no fetch)
2. Word not in the bootstrap vocabulary -> None, no fetch
3. Resolve from upstream; nothing found -> None (not cached, retried next time)
4. Write the artifact, return the definitions

UpstreamError propagates untouched. A failed artifact write is logged and
the resolved definitions are still returned.
"""

import threading
from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path
from typing import Dict, List, Optional

from kamus.common.config import ServiceConfig, get_dictionary_dir, get_words_file
from kamus.common.errors import CacheWriteError
from kamus.common.logging import clear_thread_log_context, log_error, set_thread_log_context
from kamus.common.utils import canonical_word
from kamus.lookup.store import CacheStore
from kamus.lookup.words import WordList
from kamus.schema.artifact import decode_definitions
from kamus.schema.base import Definition
from kamus.source.fetch import DocumentFetcher
from kamus.source.resolve import Resolver


class LookupService:
    def __init__(
        self,
        store: CacheStore,
        words: WordList,
        resolver: Resolver,
        single_flight: bool = True,
        background_persist: bool = False,
        verbose: bool = False,
    ) -> None:
        self.store = store
        self.words = words
        self.resolver = resolver
        self.single_flight = single_flight
        self.verbose = verbose

        self._inflight: Dict[str, Future] = {}
        self._inflight_lock = threading.Lock()
        # Persistence outlives the caller that triggered it
        self._persist_executor: Optional[ThreadPoolExecutor] = None
        if background_persist:
            self._persist_executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="kamus-persist")

    def __enter__(self) -> "LookupService":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def close(self) -> None:
        """Wait for background writes to finish."""
        if self._persist_executor is not None:
            self._persist_executor.shutdown(wait=True)
            self._persist_executor = None

    def lookup(self, word: str) -> Optional[List[Definition]]:
        set_thread_log_context(word)
        try:
            cached = self.store.get(word)
            if cached is not None:
                if self.verbose:
                    print(f"[kamus] [cache-hit] {word}")
                return decode_definitions(cached)

            if not self.words.is_valid(word):
                if self.verbose:
                    print(f"[kamus] [skip] {word}: not a known word")
                return None

            if self.verbose:
                print(f"[kamus] [cache-miss] {word}")
            if self.single_flight:
                return self._shared_resolve(word)
            return self._resolve_and_store(word)
        finally:
            clear_thread_log_context()

    def _shared_resolve(self, word: str) -> Optional[List[Definition]]:
        """Concurrent misses for one word wait on the first caller's result."""
        key = canonical_word(word)
        with self._inflight_lock:
            future = self._inflight.get(key)
            owner = future is None
            if owner:
                future = Future()
                self._inflight[key] = future

        if not owner:
            if self.verbose:
                print(f"[kamus] [wait] {word}: already being resolved")
            return future.result()

        try:
            result = self._resolve_and_store(word)
        except BaseException as e:
            future.set_exception(e)
            raise
        else:
            future.set_result(result)
            return result
        finally:
            with self._inflight_lock:
                self._inflight.pop(key, None)

    def _resolve_and_store(self, word: str) -> Optional[List[Definition]]:
        definitions = self.resolver.resolve(word)
        if not definitions:
            if self.verbose:
                print(f"[kamus] [not-found] {word}: no entry")
            return None

        if self._persist_executor is not None:
            future = self._persist_executor.submit(self._persist, word, definitions)
            future.add_done_callback(_report_persist_failure)
        else:
            self._persist(word, definitions)
        return definitions

    def _persist(self, word: str, definitions: List[Definition]) -> None:
        try:
            self.store.put(word, definitions)
        except CacheWriteError as e:
            log_error(str(e))


def _report_persist_failure(future: Future) -> None:
    error = future.exception()
    if error is not None:
        log_error(f"Background write failed: {error!r}")


def build_service(
    config: ServiceConfig,
    config_folder: Path,
    verbose: bool = False,
    debug: bool = False,
) -> LookupService:
    """Load the vocabulary, index the dictionary directory and wire the pipeline."""
    words = WordList.from_file(get_words_file(config_folder, config))
    store = CacheStore(get_dictionary_dir(config_folder, config), verbose=verbose)
    fetcher = DocumentFetcher(base_url=config.base_url, timeout=config.timeout, verbose=verbose)
    resolver = Resolver(
        fetcher.fetch,
        max_depth=config.max_redirect_depth,
        workers=config.workers,
        verbose=verbose,
        debug=debug,
    )
    if verbose:
        print(f"[kamus] [info] {len(words)} known word(s), {len(store)} cached")
    return LookupService(
        store,
        words,
        resolver,
        single_flight=config.single_flight,
        background_persist=config.background_persist,
        verbose=verbose,
    )

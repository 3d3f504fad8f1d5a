"""On-disk artifact store with an in-memory word index."""

import threading
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from kamus.common.cache import get_cache_path, read_cache_bytes, scan_cache_dir, write_cache
from kamus.common.errors import CacheWriteError
from kamus.common.utils import canonical_word
from kamus.schema.artifact import decode_definitions, definitions_to_data
from kamus.schema.base import Definition


class CacheStore:
    """Word -> artifact index over a dictionary directory.

    The index is built once from the files present at construction. Artifacts
    are write-once: ``put`` for an indexed word leaves the existing file alone.
    """

    def __init__(self, directory: Path, verbose: bool = False) -> None:
        self.directory = Path(directory)
        self.verbose = verbose
        self._lock = threading.Lock()
        self._index: Dict[str, Path] = scan_cache_dir(self.directory)
        if verbose:
            print(f"[kamus] [file] Indexed {len(self._index)} artifact(s) in {self.directory}")

    def __len__(self) -> int:
        return len(self._index)

    def __contains__(self, word: str) -> bool:
        return self.has(word)

    def has(self, word: str) -> bool:
        return canonical_word(word) in self._index

    def path_for(self, word: str) -> Optional[Path]:
        return self._index.get(canonical_word(word))

    def get(self, word: str) -> Optional[bytes]:
        """Raw artifact bytes, or None on a miss.

        An indexed artifact that has been deleted from disk is dropped from
        the index so the word can be cached again.
        """
        path = self.path_for(word)
        if path is None:
            return None
        raw = read_cache_bytes(path)
        if raw is None:
            self._forget(canonical_word(word), path)
        return raw

    def _forget(self, key: str, path: Path) -> None:
        with self._lock:
            if self._index.get(key) == path:
                del self._index[key]
        if self.verbose:
            print(f"[kamus] [file] Missing: {path.name}, dropped from index")

    def load(self, word: str) -> Optional[List[Definition]]:
        raw = self.get(word)
        if raw is None:
            return None
        return decode_definitions(raw)

    def put(self, word: str, definitions: Sequence[Definition]) -> Path:
        """Persist definitions for a word and register the artifact.

        Raises CacheWriteError if the file can't be written.
        """
        key = canonical_word(word)
        existing = self._index.get(key)
        if existing is not None:
            if existing.exists():
                if self.verbose:
                    print(f"[kamus] [file] Kept existing: {existing.name}")
                return existing
            self._forget(key, existing)

        try:
            path = write_cache(self.directory, key, definitions_to_data(definitions), verbose=self.verbose)
        except OSError as e:
            raise CacheWriteError(word, get_cache_path(self.directory, key), str(e)) from e

        with self._lock:
            self._index[key] = path
        return path

"""Bootstrap vocabulary used to reject garbage input before any fetch."""

import json
from pathlib import Path
from typing import Iterable


class WordList:
    """Set of words the upstream dictionary is known to have."""

    def __init__(self, words: Iterable[str]) -> None:
        self._words = frozenset(w.strip() for w in words if w.strip())

    @classmethod
    def from_file(cls, path: Path) -> "WordList":
        """Load a JSON array of strings.

        Raises FileNotFoundError if the file is missing and ValueError if it
        isn't an array of strings.
        """
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, list) or not all(isinstance(w, str) for w in data):
            raise ValueError(f"{path} must hold a JSON array of strings")
        return cls(data)

    def __len__(self) -> int:
        return len(self._words)

    def __contains__(self, word: str) -> bool:
        return self.is_valid(word)

    def is_valid(self, word: str) -> bool:
        return word.strip() in self._words

"""Exceptions raised by the lookup pipeline."""

from pathlib import Path
from typing import Optional


class KamusError(Exception):
    """Base class for lookup pipeline errors."""


class UpstreamError(KamusError):
    """The upstream dictionary answered with a non-success status or not at all.

    ``status`` is None when the request failed at the transport level
    (timeout, connection refused, ...). A 429 here usually means throttling.
    """

    def __init__(self, word: str, status: Optional[int] = None, reason: str = "") -> None:
        self.word = word
        self.status = status
        self.reason = reason
        detail = f"status {status}" if status is not None else "transport error"
        if reason:
            detail = f"{detail}: {reason}"
        super().__init__(f"Upstream fetch failed for '{word}' ({detail})")


class CacheWriteError(KamusError):
    """Persisting an artifact to the dictionary directory failed."""

    def __init__(self, word: str, path: Path, reason: str = "") -> None:
        self.word = word
        self.path = path
        super().__init__(f"Failed to write artifact for '{word}' to {path}: {reason}")


__all__ = [
    "KamusError",
    "UpstreamError",
    "CacheWriteError",
]

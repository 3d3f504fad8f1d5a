"""Local side of the lookup: artifact store, vocabulary gate and the service."""

from kamus.lookup.store import CacheStore
from kamus.lookup.words import WordList
from kamus.lookup.service import LookupService, build_service

__all__ = [
    "CacheStore",
    "WordList",
    "LookupService",
    "build_service",
]

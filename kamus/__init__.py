"""KBBI dictionary lookup library.

Subpackages:
- kamus.common: Shared utilities (config, logging, cache files, errors)
- kamus.schema: Typed definition records and artifact (de)serialization
- kamus.source: Upstream page fetching, sense extraction and redirect resolution
- kamus.lookup: Cache store, word validity gate and the lookup service
"""

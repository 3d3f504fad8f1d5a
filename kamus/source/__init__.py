"""Upstream side of the lookup: fetching entry pages and turning them into definitions."""

from kamus.source.fetch import (
    BROWSER_HEADERS,
    DocumentFetcher,
    entry_url,
)
from kamus.source.nodes import (
    DocumentNode,
    SoupNode,
    parse_document,
)
from kamus.source.extract import (
    extract_block,
    find_heading_blocks,
    parse_annotation,
)
from kamus.source.resolve import (
    DEFAULT_MAX_DEPTH,
    Resolver,
    canonical_senses,
)

__all__ = [
    # fetch
    "BROWSER_HEADERS",
    "DocumentFetcher",
    "entry_url",
    # nodes
    "DocumentNode",
    "SoupNode",
    "parse_document",
    # extract
    "extract_block",
    "find_heading_blocks",
    "parse_annotation",
    # resolve
    "DEFAULT_MAX_DEPTH",
    "Resolver",
    "canonical_senses",
]

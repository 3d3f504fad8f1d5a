"""Resolve a word to its definitions, following non-canonical redirects."""

import copy
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, FrozenSet, List, Sequence

from kamus.common.logging import DEFAULT_PARALLEL_WORKERS, log_debug
from kamus.common.utils import canonical_word
from kamus.schema.base import AnySense, CrossReference, Definition
from kamus.source.extract import extract_block, find_heading_blocks
from kamus.source.nodes import DocumentNode, parse_document

DEFAULT_MAX_DEPTH = 3

Fetch = Callable[[str], str]
Parse = Callable[[str], DocumentNode]


def canonical_senses(definitions: Sequence[Definition]) -> List[AnySense]:
    """Senses of the first canonical definition (first one if none is canonical)."""
    if not definitions:
        return []
    chosen = next((d for d in definitions if d.is_canonical), definitions[0])
    return copy.deepcopy(chosen.senses)


class Resolver:
    """Fetches, extracts and flattens every heading block of an entry page.

    Cross-references are resolved recursively. A target already being
    resolved higher up the chain, or one past ``max_depth``, is not
    followed and contributes no senses.
    """

    def __init__(
        self,
        fetch: Fetch,
        parse: Parse = parse_document,
        max_depth: int = DEFAULT_MAX_DEPTH,
        workers: int = DEFAULT_PARALLEL_WORKERS,
        verbose: bool = False,
        debug: bool = False,
    ) -> None:
        self.fetch = fetch
        self.parse = parse
        self.max_depth = max_depth
        self.workers = workers
        self.verbose = verbose
        self.debug = debug

    def resolve(self, word: str) -> List[Definition]:
        """All definitions on the word's page, in document order. Empty if none."""
        return self._resolve(word, frozenset(), 0)

    def _resolve(self, word: str, in_progress: FrozenSet[str], depth: int) -> List[Definition]:
        in_progress = in_progress | {canonical_word(word)}
        document = self.parse(self.fetch(word))
        blocks = [extract_block(heading) for heading in find_heading_blocks(document)]
        log_debug(self.debug, f"{word}: {len(blocks)} heading block(s) at depth {depth}")

        references = [b for b in blocks if isinstance(b, CrossReference)]
        if not references:
            return list(blocks)  # type: ignore[arg-type]

        if self.workers > 1 and len(references) > 1:
            with ThreadPoolExecutor(max_workers=min(self.workers, len(references))) as executor:
                resolved = list(
                    executor.map(lambda ref: self._follow(word, ref, in_progress, depth), references)
                )
        else:
            resolved = [self._follow(word, ref, in_progress, depth) for ref in references]

        by_reference = iter(resolved)
        return [
            next(by_reference) if isinstance(block, CrossReference) else block
            for block in blocks
        ]

    def _follow(
        self,
        word: str,
        reference: CrossReference,
        in_progress: FrozenSet[str],
        depth: int,
    ) -> Definition:
        target = reference.target
        senses: List[AnySense] = []
        if canonical_word(target) in in_progress:
            if self.verbose:
                print(f"[kamus] [redirect] {word} → {target}: cycle, not followed")
        elif depth + 1 > self.max_depth:
            if self.verbose:
                print(f"[kamus] [redirect] {word} → {target}: deeper than {self.max_depth}, not followed")
        else:
            if self.verbose:
                print(f"[kamus] [redirect] {word} → {target}")
            senses = canonical_senses(self._resolve(target, in_progress, depth + 1))

        return _non_canonical(reference, senses)


def _non_canonical(reference: CrossReference, senses: List[AnySense]) -> Definition:
    return Definition(
        syllabification=reference.syllabification,
        root_word=reference.root_word,
        pronunciation_spelling=reference.pronunciation_spelling,
        is_canonical=False,
        alternate_form=reference.display or reference.target,
        senses=senses,
    )


__all__ = [
    "DEFAULT_MAX_DEPTH",
    "Resolver",
    "canonical_senses",
]

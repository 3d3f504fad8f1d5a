"""Sense extraction from KBBI entry heading blocks.

A page holds one heading block per homograph:

    <h2 style="margin-bottom:3px">ja.man <small>(<b>tidak baku</b>)</small></h2>
    <ul class="adjusted-par"><li>→ <a href="/entri/zaman">za.man</a></li></ul>

The heading text (``ja.man``) is the syllabification. A ``span.syllable``
inside the heading, when present, is the pronunciation spelling.

Every annotation is optional. A missing node degrades to None / empty
results and a malformed ``tag: label`` annotation degrades to (None, None);
nothing in here raises on odd markup.
"""

import re
from dataclasses import dataclass
from typing import List, Optional, Tuple, Union
from urllib.parse import unquote

from kamus.common.utils import clean_text
from kamus.schema.base import (
    AnySense,
    Attribution,
    CrossReference,
    Definition,
    ReferenceSense,
    Sense,
)
from kamus.source.nodes import DocumentNode


HEADING_SELECTOR = 'h2[style="margin-bottom:3px"]'
SYLLABLE_SELECTOR = "span.syllable"
NON_CANONICAL_SELECTOR = "small b"
NON_CANONICAL_CONTAINER = "small"
SENSE_LIST_SELECTOR = "ul.adjusted-par, ol"
ANNOTATION_SELECTOR = 'font[color="red"]'
EXAMPLE_SELECTOR = 'font[color="grey"]:nth-child(3)'
PRECATEGORIAL_SELECTOR = 'font[color="darkgreen"]'
REFERENCE_TARGETS_SELECTOR = 'font[color="grey"]'

ROOT_MARKER = "»"
REDIRECT_GLYPH = "→"
SYLLABLE_SEPARATOR = "."
EMPTY_LABEL = "-"


@dataclass(frozen=True)
class Heading:
    label: str
    root_word: Optional[str]
    pronunciation: Optional[str]
    non_canonical: Optional[str]

    @property
    def syllabification(self) -> Optional[str]:
        return self.label or None

    @property
    def pronunciation_spelling(self) -> Optional[str]:
        """The pronunciation annotation, else the label without syllable breaks."""
        if self.pronunciation:
            return self.pronunciation
        return self.label.replace(SYLLABLE_SEPARATOR, "") or None


def _squash(text: str) -> str:
    return " ".join(text.split())


def _select_text(node: DocumentNode, selector: str) -> str:
    return "".join(found.text() for found in node.select(selector))


def parse_annotation(value: Optional[str]) -> Tuple[Optional[str], Optional[str]]:
    """Split a ``tag: label`` title attribute into lowercase parts.

    A value without a colon has no tag. For a part of speech that leaves
    both fields None; an attribution span with no tag is dropped by
    ``extract_sense``, since every attribution needs a source tag.

    >>> parse_annotation("n: nomina")
    ('n', 'nomina')
    >>> parse_annotation("nomina")
    (None, None)
    """
    if not value or ":" not in value:
        return None, None
    tag, label = value.split(":", 1)
    tag = tag.strip().lower()
    label = label.strip().lower()
    return tag or None, label or None


def find_heading_blocks(document: DocumentNode) -> List[DocumentNode]:
    return document.select(HEADING_SELECTOR)


def extract_heading(heading: DocumentNode) -> Heading:
    pronunciation = clean_text(_select_text(heading, SYLLABLE_SELECTOR)) or None
    non_canonical = clean_text(_select_text(heading, NON_CANONICAL_SELECTOR)) or None

    stripped = heading.without(SYLLABLE_SELECTOR).without(NON_CANONICAL_CONTAINER)
    label = _squash(clean_text(stripped.text()))
    root_word = None
    if ROOT_MARKER in label:
        root, label = (part.strip() for part in label.split(ROOT_MARKER, 1))
        root_word = root or None

    return Heading(
        label=label,
        root_word=root_word,
        pronunciation=pronunciation,
        non_canonical=non_canonical,
    )


def find_sense_list(heading: DocumentNode) -> Optional[DocumentNode]:
    """The sense list belonging to this heading (never the next heading's)."""
    return heading.next_sibling(SENSE_LIST_SELECTOR, stop=HEADING_SELECTOR)


def _link_target(item: DocumentNode) -> Tuple[str, str]:
    """(target word, display text) of a redirect item."""
    link = item.select_one("a")
    display = clean_text(link.text()) if link is not None else ""
    target = ""
    if link is not None:
        href = (link.attr("href") or "").rstrip("/")
        if href:
            target = unquote(href.rsplit("/", 1)[-1]).strip()
        if not target:
            target = display.replace(SYLLABLE_SEPARATOR, "")
    if not target:
        # Bare "→ zaman" without an anchor
        target = clean_text(item.text().split(REDIRECT_GLYPH, 1)[-1])
    return target, display


def extract_cross_reference(heading: Heading, sense_list: DocumentNode) -> Optional[CrossReference]:
    first = sense_list.select_one("li")
    if first is None or REDIRECT_GLYPH not in first.text():
        return None
    target, display = _link_target(first)
    if not target:
        return None
    return CrossReference(
        target=target,
        display=display or None,
        syllabification=heading.syllabification,
        root_word=heading.root_word,
        pronunciation_spelling=heading.pronunciation_spelling,
    )


def extract_sense(item: DocumentNode) -> Sense:
    part_of_speech = None
    part_of_speech_label = None
    attributions: List[Attribution] = []

    annotation = item.select_one(ANNOTATION_SELECTOR)
    if annotation is not None:
        for i, span in enumerate(annotation.select("span")):
            tag, label = parse_annotation(span.attr("title"))
            if i == 0:
                part_of_speech, part_of_speech_label = tag, label
            elif tag is not None:
                attributions.append(
                    Attribution(source_tag=tag, source_label=None if label == EMPTY_LABEL else label)
                )

    example_node = item.select_one(EXAMPLE_SELECTOR)
    example = _squash(example_node.text()) if example_node is not None else ""

    gloss = _squash(item.without("font").text())
    gloss = re.sub(r":$", "", gloss).strip()

    return Sense(
        gloss=gloss,
        part_of_speech=part_of_speech,
        part_of_speech_label=part_of_speech_label,
        example=example or None,
        attributions=attributions,
    )


def extract_senses(sense_list: DocumentNode) -> List[AnySense]:
    return [extract_sense(item) for item in sense_list.select("li")]


def extract_precategorial(heading: DocumentNode) -> Optional[ReferenceSense]:
    """Reference sense for bound forms that have no sense list of their own."""
    marker = heading.next_sibling(PRECATEGORIAL_SELECTOR, stop=HEADING_SELECTOR)
    if marker is None:
        return None
    tag, label = parse_annotation(marker.attr("title"))
    targets_node = marker.next_sibling(REFERENCE_TARGETS_SELECTOR, stop=HEADING_SELECTOR)
    targets_text = targets_node.text() if targets_node is not None else ""
    targets = [t.strip() for t in targets_text.split(",") if t.strip()]
    return ReferenceSense(targets=targets, part_of_speech=tag, part_of_speech_label=label)


def extract_block(heading_node: DocumentNode) -> Union[Definition, CrossReference]:
    """Extract one heading block.

    Returns a CrossReference when the block only redirects to a canonical
    spelling; the resolver is responsible for following it.
    """
    heading = extract_heading(heading_node)
    sense_list = find_sense_list(heading_node)

    senses: List[AnySense] = []
    if sense_list is not None:
        reference = extract_cross_reference(heading, sense_list)
        if reference is not None:
            return reference
        senses = extract_senses(sense_list)
    else:
        precategorial = extract_precategorial(heading_node)
        if precategorial is not None:
            senses.append(precategorial)

    return Definition(
        syllabification=heading.syllabification,
        root_word=heading.root_word,
        pronunciation_spelling=heading.pronunciation_spelling,
        is_canonical=True,
        alternate_form=heading.non_canonical,
        senses=senses,
    )

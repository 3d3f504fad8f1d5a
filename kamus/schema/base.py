"""Typed definition records shared by the resolver, store and lookup service."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union


@dataclass(frozen=True)
class Attribution:
    """Register/source marker attached to a gloss, e.g. ``ki: kiasan``."""
    source_tag: str
    source_label: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {"sourceTag": self.source_tag, "sourceLabel": self.source_label}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Attribution":
        return cls(source_tag=data["sourceTag"], source_label=data.get("sourceLabel"))


@dataclass(frozen=True)
class Sense:
    """One meaning of a headword."""
    gloss: str
    part_of_speech: Optional[str] = None
    part_of_speech_label: Optional[str] = None
    example: Optional[str] = None
    attributions: List[Attribution] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "partOfSpeech": self.part_of_speech,
            "partOfSpeechLabel": self.part_of_speech_label,
            "gloss": self.gloss,
            "example": self.example,
            "attributions": [a.to_dict() for a in self.attributions],
        }


@dataclass(frozen=True)
class ReferenceSense:
    """A meaning given only as pointers to other headwords."""
    targets: List[str] = field(default_factory=list)
    part_of_speech: Optional[str] = None
    part_of_speech_label: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "partOfSpeech": self.part_of_speech,
            "partOfSpeechLabel": self.part_of_speech_label,
            "targets": list(self.targets),
        }


AnySense = Union[Sense, ReferenceSense]


def sense_from_dict(data: Dict[str, Any]) -> AnySense:
    """Decode either sense shape; reference senses are the ones with ``targets``."""
    if "targets" in data:
        return ReferenceSense(
            targets=list(data.get("targets") or []),
            part_of_speech=data.get("partOfSpeech"),
            part_of_speech_label=data.get("partOfSpeechLabel"),
        )
    return Sense(
        gloss=data.get("gloss", ""),
        part_of_speech=data.get("partOfSpeech"),
        part_of_speech_label=data.get("partOfSpeechLabel"),
        example=data.get("example"),
        attributions=[Attribution.from_dict(a) for a in data.get("attributions") or []],
    )


@dataclass(frozen=True)
class Definition:
    """One resolved entry block for a word form."""
    syllabification: Optional[str]
    root_word: Optional[str]
    pronunciation_spelling: Optional[str]
    is_canonical: bool
    alternate_form: Optional[str]
    senses: List[AnySense] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "syllabification": self.syllabification,
            "rootWord": self.root_word,
            "pronunciationSpelling": self.pronunciation_spelling,
            "isCanonical": self.is_canonical,
            "alternateForm": self.alternate_form,
            "senses": [s.to_dict() for s in self.senses],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Definition":
        return cls(
            syllabification=data.get("syllabification"),
            root_word=data.get("rootWord"),
            pronunciation_spelling=data.get("pronunciationSpelling"),
            is_canonical=bool(data.get("isCanonical", True)),
            alternate_form=data.get("alternateForm"),
            senses=[sense_from_dict(s) for s in data.get("senses") or []],
        )


@dataclass(frozen=True)
class CrossReference:
    """An entry block that only points at its canonical spelling.

    Not part of any artifact: the resolver replaces it with a non-canonical
    ``Definition`` carrying the target's senses.
    """
    target: str
    display: Optional[str]
    syllabification: Optional[str]
    root_word: Optional[str]
    pronunciation_spelling: Optional[str]


__all__ = [
    "Attribution",
    "Sense",
    "ReferenceSense",
    "AnySense",
    "sense_from_dict",
    "Definition",
    "CrossReference",
]

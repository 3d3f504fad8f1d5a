"""Definition record types and artifact encoding."""

from kamus.schema.base import (
    Attribution,
    Sense,
    ReferenceSense,
    AnySense,
    sense_from_dict,
    Definition,
    CrossReference,
)
from kamus.schema.artifact import (
    definitions_to_data,
    definitions_from_data,
    encode_definitions,
    decode_definitions,
)

__all__ = [
    # Records
    "Attribution",
    "Sense",
    "ReferenceSense",
    "AnySense",
    "sense_from_dict",
    "Definition",
    "CrossReference",
    # Artifact
    "definitions_to_data",
    "definitions_from_data",
    "encode_definitions",
    "decode_definitions",
]

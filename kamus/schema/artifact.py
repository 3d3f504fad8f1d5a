"""JSON artifact encoding for definition lists."""

import json
from typing import Any, Dict, List, Sequence, Union

from kamus.schema.base import Definition


def definitions_to_data(definitions: Sequence[Definition]) -> List[Dict[str, Any]]:
    return [d.to_dict() for d in definitions]


def definitions_from_data(data: Any) -> List[Definition]:
    """Decode a JSON array of definitions. Anything else decodes to an empty list."""
    if not isinstance(data, list):
        return []
    return [Definition.from_dict(item) for item in data if isinstance(item, dict)]


def encode_definitions(definitions: Sequence[Definition]) -> str:
    """Pretty-printed JSON, the same text the cache store writes."""
    return json.dumps(definitions_to_data(definitions), ensure_ascii=False, indent=2)


def decode_definitions(raw: Union[str, bytes]) -> List[Definition]:
    if isinstance(raw, bytes):
        raw = raw.decode("utf-8")
    return definitions_from_data(json.loads(raw))


__all__ = [
    "definitions_to_data",
    "definitions_from_data",
    "encode_definitions",
    "decode_definitions",
]

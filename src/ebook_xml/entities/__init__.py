"""Entity reference decoding."""

from .decoder import decode_entities, entity_table

__all__ = [
    "decode_entities",
    "entity_table",
]

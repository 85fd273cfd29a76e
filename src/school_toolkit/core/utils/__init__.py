"""
Utils Package

Payload (de)serialization.
"""

from .serialization import (
    parse_subject_details,
    serialize_subject_details,
    deserialize_subject_spec,
    deserialize_mark_entry,
    load_mark_entries,
)

__all__ = [
    "parse_subject_details",
    "serialize_subject_details",
    "deserialize_subject_spec",
    "deserialize_mark_entry",
    "load_mark_entries",
]

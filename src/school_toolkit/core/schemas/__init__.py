"""
Schemas Package

JSON schema definitions and validation utilities.
"""

from .validator import (
    validate_calendar_table,
    validate_subject_details,
    validate_mark_entry,
    ValidationError,
    CALENDAR_TABLE_SCHEMA_VERSION,
)

__all__ = [
    "validate_calendar_table",
    "validate_subject_details",
    "validate_mark_entry",
    "ValidationError",
    "CALENDAR_TABLE_SCHEMA_VERSION",
]

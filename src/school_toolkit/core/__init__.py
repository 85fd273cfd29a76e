"""
School Toolkit Core Package

Shared data models, schema validation and payload (de)serialization used
by the calendar and grading subpackages.

Nothing in here performs I/O beyond reading bundled schema files; the
backend that stores exams, marks and attendance is the caller's concern.
"""

from .models import (
    CalendarSystem,
    CalendarDate,
    DateRange,
    Conversion,
    ConversionError,
    SubjectSpec,
    MarkEntry,
    ExamResult,
)

__all__ = [
    "CalendarSystem",
    "CalendarDate",
    "DateRange",
    "Conversion",
    "ConversionError",
    "SubjectSpec",
    "MarkEntry",
    "ExamResult",
]

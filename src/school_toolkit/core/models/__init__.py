"""
Core Models Package

Immutable, validated value types shared by the calendar and grading
subpackages. Every model is a frozen dataclass: it validates itself on
construction and is safe to share between threads or requests.

| Type | Role |
|------|------|
| `CalendarDate` | Tagged (year, month, day) in BS or AD |
| `DateRange` | Inclusive, re-iterable AD day span |
| `Conversion` | Success/failure of a calendar conversion |
| `SubjectSpec` / `MarkEntry` | Aggregator inputs |
| `ProcessedSubjectResult` / `ExamResultSummary` | Aggregator outputs |
"""

from .dates import CalendarSystem, CalendarDate, DateRange
from .outcome import Conversion, ConversionError
from .results import (
    Grade,
    GpaInfo,
    SubjectStatus,
    ResultStatus,
    SubjectSpec,
    MarkEntry,
    ProcessedSubjectResult,
    ExamResultSummary,
    ExamResult,
)

__all__ = [
    "CalendarSystem",
    "CalendarDate",
    "DateRange",
    "Conversion",
    "ConversionError",
    "Grade",
    "GpaInfo",
    "SubjectStatus",
    "ResultStatus",
    "SubjectSpec",
    "MarkEntry",
    "ProcessedSubjectResult",
    "ExamResultSummary",
    "ExamResult",
]

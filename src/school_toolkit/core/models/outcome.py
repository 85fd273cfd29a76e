"""
Module: outcome

Purpose:
    Conversion result type. Calendar operations never raise for bad user
    input; instead they hand back a Conversion that either carries the
    converted date or says why there is none.

Key Classes:
    - ConversionError: LEXICAL (bad shape) or RANGE (no such day in the table)
    - Conversion: Success/failure value returned by the converter

Used By:
    - calendar.converter
    - calendar.ranges
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .dates import CalendarDate


class ConversionError(str, Enum):
    """Why a conversion produced no date."""
    LEXICAL = "lexical"  # Input does not look like a date at all
    RANGE = "range"      # Looks like a date, but that day is not in the table

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class Conversion:
    """
    Outcome of a parse or conversion.

    Exactly one of ``date`` and ``error`` is set.

    Example:
        >>> ok = Conversion.success(CalendarDate.bs(2081, 1, 3))
        >>> ok.ok, ok.text
        (True, '2081-01-03')
        >>> bad = Conversion.failure(ConversionError.LEXICAL, "not a date")
        >>> bad.ok, bad.text
        (False, None)
    """

    date: Optional[CalendarDate] = None
    error: Optional[ConversionError] = None
    message: str = ""

    def __post_init__(self) -> None:
        if (self.date is None) == (self.error is None):
            raise ValueError("Conversion needs exactly one of date or error")

    @classmethod
    def success(cls, value: CalendarDate) -> Conversion:
        return cls(date=value)

    @classmethod
    def failure(cls, error: ConversionError, message: str = "") -> Conversion:
        return cls(error=error, message=message)

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def text(self) -> Optional[str]:
        """Canonical "YYYY-MM-DD" string, or None on failure."""
        return self.date.isoformat() if self.date is not None else None

    def __bool__(self) -> bool:
        return self.ok

    def __repr__(self) -> str:
        if self.ok:
            return f"Conversion({self.date!r})"
        return f"Conversion({self.error.value}: {self.message})"

"""
Module: dates

Purpose:
    Calendar value types shared by the converter and the range helpers.
    A CalendarDate is a plain (year, month, day) triple tagged with the
    calendar it belongs to, so a BS date can never be mistaken for an AD
    date further down the line.

Key Classes:
    - CalendarSystem: BS / AD tag
    - CalendarDate: Tagged date triple, formatted as "YYYY-MM-DD"
    - DateRange: Inclusive, re-iterable span of AD days

Dependencies:
    - dataclasses (std)
    - datetime (std)

Used By:
    - core.models.outcome.Conversion
    - calendar.table
    - calendar.converter
    - calendar.ranges
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from enum import Enum
from typing import Iterator


class CalendarSystem(str, Enum):
    """Calendar a date belongs to."""
    BS = "BS"  # Bikram Sambat
    AD = "AD"  # Gregorian

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True, order=True)
class CalendarDate:
    """
    Tagged calendar date.

    Only the shape of the date is checked here. Whether the day actually
    exists (BS month lengths vary per year) is decided by the converter.

    Attributes:
        year: Four digit year
        month: Month number, 1-12
        day: Day of month, 1-32
        system: Calendar the triple belongs to

    Invariants:
        - 1 <= month <= 12
        - 1 <= day <= 32

    Example:
        >>> d = CalendarDate(2081, 1, 3, CalendarSystem.BS)
        >>> str(d)
        '2081-01-03'
    """

    year: int
    month: int
    day: int
    system: CalendarSystem

    def __post_init__(self) -> None:
        """Validate the date shape on construction."""
        if not 1 <= self.month <= 12:
            raise ValueError(f"Month must be 1-12: {self.month}")
        if not 1 <= self.day <= 32:
            raise ValueError(f"Day must be 1-32: {self.day}")
        if self.year < 1:
            raise ValueError(f"Year must be positive: {self.year}")

    # ─────────────────────────────────────────────────────────────────────────
    # Factory Methods
    # ─────────────────────────────────────────────────────────────────────────

    @classmethod
    def bs(cls, year: int, month: int, day: int) -> CalendarDate:
        return cls(year, month, day, CalendarSystem.BS)

    @classmethod
    def ad(cls, year: int, month: int, day: int) -> CalendarDate:
        return cls(year, month, day, CalendarSystem.AD)

    @classmethod
    def from_date(cls, value: date) -> CalendarDate:
        """Wrap a ``datetime.date`` as an AD CalendarDate."""
        return cls(value.year, value.month, value.day, CalendarSystem.AD)

    # ─────────────────────────────────────────────────────────────────────────
    # Conversions
    # ─────────────────────────────────────────────────────────────────────────

    def to_date(self) -> date:
        """
        Return the equivalent ``datetime.date``.

        Raises:
            ValueError: If this is a BS date, or the AD day does not exist
        """
        if self.system is not CalendarSystem.AD:
            raise ValueError(f"Only AD dates map onto datetime.date: {self!r}")
        return date(self.year, self.month, self.day)

    def isoformat(self) -> str:
        return f"{self.year:04d}-{self.month:02d}-{self.day:02d}"

    def __str__(self) -> str:
        return self.isoformat()

    def __repr__(self) -> str:
        return f"CalendarDate({self.isoformat()}, {self.system.value})"


@dataclass(frozen=True, slots=True)
class DateRange:
    """
    Inclusive range of AD days.

    Iterating a DateRange yields ``datetime.date`` values from start to
    end. Each call to ``iter()`` starts over, so the same range can be
    walked any number of times.

    Invariants:
        - Both endpoints are AD dates
        - start <= end
    """

    start: CalendarDate
    end: CalendarDate

    def __post_init__(self) -> None:
        if self.start.system is not CalendarSystem.AD or self.end.system is not CalendarSystem.AD:
            raise ValueError("DateRange endpoints must be AD dates")
        if self.end < self.start:
            raise ValueError(f"DateRange start {self.start} is after end {self.end}")

    @classmethod
    def from_dates(cls, start: date, end: date) -> DateRange:
        return cls(CalendarDate.from_date(start), CalendarDate.from_date(end))

    @property
    def days(self) -> int:
        """Number of days in the range, both endpoints included."""
        return (self.end.to_date() - self.start.to_date()).days + 1

    def __len__(self) -> int:
        return self.days

    def __iter__(self) -> Iterator[date]:
        current = self.start.to_date()
        last = self.end.to_date()
        step = timedelta(days=1)
        while current <= last:
            yield current
            current += step

    def __contains__(self, value: object) -> bool:
        if isinstance(value, CalendarDate):
            if value.system is not CalendarSystem.AD:
                return False
            return self.start <= value <= self.end
        if isinstance(value, datetime):
            value = value.date()
        if isinstance(value, date):
            return self.start.to_date() <= value <= self.end.to_date()
        return False

"""
Module: calendar.table

Purpose:
    Loads the Bikram Sambat month-length table and answers day-offset
    questions against it. BS months have no fixed length: each BS year
    lists its own twelve month lengths, so every conversion is a walk
    over this table from a fixed epoch pair.

Key Classes:
    - BsCalendarTable: Immutable, validated month-length table

Key Functions:
    - load_table(): Load (and cache) a table file
    - default_table(): Table selected by CalendarConfig.from_env()

Dependencies:
    - core.schemas.validator: table validation (jsonschema)
    - calendar.config: table location

Used By:
    - calendar.converter
    - calendar.ranges
    - scripts/verify_calendar_table.py

Data:
    ``data/bs_month_lengths.json`` covers BS 2000-01-01 .. 2090-12-30,
    i.e. AD 1943-04-14 .. 2034-04-13, with the epoch pair
    BS 2000-01-01 == AD 1943-04-14.
"""

from __future__ import annotations

import json
import logging
from bisect import bisect_right
from dataclasses import dataclass, field
from datetime import date, timedelta
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from school_toolkit.calendar.config import TABLE_PATH_ENV, CalendarConfig
from school_toolkit.core.models.dates import CalendarDate, CalendarSystem
from school_toolkit.core.schemas.validator import ValidationError, validate_calendar_table

logger = logging.getLogger(__name__)


class CalendarTableError(RuntimeError):
    """Raised when a month-length table cannot be read or is invalid."""


@dataclass(frozen=True)
class BsCalendarTable:
    """
    Month lengths for a contiguous run of BS years.

    Day offsets count from the epoch: offset 0 is the first day of
    ``first_year`` (BS) and also ``epoch_ad`` (AD).

    Attributes:
        version: Data version string from the table file
        first_year: First BS year in the table
        epoch_ad: AD date of BS ``first_year``-01-01
        month_lengths: One 12-tuple of month lengths per year, in order

    Invariants:
        - Every year has 12 months of 29-32 days
        - Years are contiguous from first_year
    """

    version: str
    first_year: int
    epoch_ad: date
    month_lengths: Tuple[Tuple[int, ...], ...]
    _year_starts: Tuple[int, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not self.month_lengths:
            raise ValueError("Calendar table has no years")
        starts = []
        running = 0
        for months in self.month_lengths:
            if len(months) != 12:
                raise ValueError(f"Expected 12 month lengths, got {len(months)}")
            starts.append(running)
            running += sum(months)
        starts.append(running)
        object.__setattr__(self, "_year_starts", tuple(starts))

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> BsCalendarTable:
        """Build a table from validated JSON data."""
        years = data["years"]
        if not years:
            raise ValueError("Calendar table has no years")
        ordered = sorted(int(k) for k in years)
        return cls(
            version=str(data["table_version"]),
            first_year=ordered[0],
            epoch_ad=date.fromisoformat(data["epoch"]["ad"]),
            month_lengths=tuple(tuple(years[str(y)]) for y in ordered),
        )

    # ─────────────────────────────────────────────────────────────────────────
    # Bounds
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def last_year(self) -> int:
        return self.first_year + len(self.month_lengths) - 1

    @property
    def total_days(self) -> int:
        return self._year_starts[-1]

    @property
    def first_ad(self) -> date:
        return self.epoch_ad

    @property
    def last_ad(self) -> date:
        return self.epoch_ad + timedelta(days=self.total_days - 1)

    @property
    def first_bs(self) -> CalendarDate:
        return CalendarDate.bs(self.first_year, 1, 1)

    @property
    def last_bs(self) -> CalendarDate:
        return CalendarDate.bs(self.last_year, 12, self.month_lengths[-1][11])

    def has_year(self, year: int) -> bool:
        return self.first_year <= year <= self.last_year

    def _months(self, year: int) -> Tuple[int, ...]:
        if not self.has_year(year):
            raise ValueError(
                f"BS year {year} outside supported range {self.first_year}-{self.last_year}"
            )
        return self.month_lengths[year - self.first_year]

    def days_in_month(self, year: int, month: int) -> int:
        """Length of a BS month. Raises ValueError outside the table."""
        if not 1 <= month <= 12:
            raise ValueError(f"Month must be 1-12: {month}")
        return self._months(year)[month - 1]

    def days_in_year(self, year: int) -> int:
        return sum(self._months(year))

    # ─────────────────────────────────────────────────────────────────────────
    # Offsets
    # ─────────────────────────────────────────────────────────────────────────

    def bs_to_offset(self, value: CalendarDate) -> int:
        """
        Days between the epoch and a BS date.

        Raises:
            ValueError: If the year is outside the table or the day does
                not exist in that month
        """
        if value.system is not CalendarSystem.BS:
            raise ValueError(f"Expected a BS date: {value!r}")
        months = self._months(value.year)
        if value.day > months[value.month - 1]:
            raise ValueError(
                f"BS {value.year}-{value.month:02d} has {months[value.month - 1]} days, "
                f"got day {value.day}"
            )
        year_start = self._year_starts[value.year - self.first_year]
        return year_start + sum(months[: value.month - 1]) + value.day - 1

    def offset_to_bs(self, offset: int) -> CalendarDate:
        """
        BS date ``offset`` days after the epoch.

        Raises:
            ValueError: If the offset falls outside the table
        """
        if not 0 <= offset < self.total_days:
            raise ValueError(f"Day offset {offset} outside table (0-{self.total_days - 1})")
        index = bisect_right(self._year_starts, offset) - 1
        remaining = offset - self._year_starts[index]
        for month, length in enumerate(self.month_lengths[index], start=1):
            if remaining < length:
                return CalendarDate.bs(self.first_year + index, month, remaining + 1)
            remaining -= length
        # Unreachable: the year's months sum to the gap between year starts
        raise ValueError(f"Day offset {offset} could not be placed")

    def ad_to_offset(self, value: date) -> int:
        """Days between the epoch and an AD date (may be out of table range)."""
        return (value - self.epoch_ad).days

    def offset_to_ad(self, offset: int) -> date:
        return self.epoch_ad + timedelta(days=offset)


def _read_table(path: Path) -> BsCalendarTable:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise CalendarTableError(f"Cannot read calendar table {path}: {exc}") from exc

    try:
        validate_calendar_table(data)
        table = BsCalendarTable.from_dict(data)
    except ValidationError as exc:
        detail = f" ({'; '.join(exc.errors)})" if exc.errors else ""
        raise CalendarTableError(f"Invalid calendar table {path}: {exc}{detail}") from exc
    except ValueError as exc:
        raise CalendarTableError(f"Invalid calendar table {path}: {exc}") from exc

    logger.debug(
        "Loaded BS calendar table %s (version %s, BS %d-%d)",
        path.name,
        table.version,
        table.first_year,
        table.last_year,
    )
    return table


@lru_cache(maxsize=None)
def _cached_table(path_key: str) -> BsCalendarTable:
    return _read_table(Path(path_key))


def load_table(path: Optional[Path | str] = None) -> BsCalendarTable:
    """
    Load a month-length table, caching one instance per file.

    Args:
        path: Table file; defaults to CalendarConfig.from_env().table_path

    Raises:
        CalendarTableError: If the file is unreadable or invalid, or the
            ``SCHOOL_TOOLKIT_BS_TABLE`` override is not a usable path
    """
    if path is None:
        try:
            path = CalendarConfig.from_env().table_path
        except ValueError as exc:
            raise CalendarTableError(f"Bad {TABLE_PATH_ENV}: {exc}") from exc
    return _cached_table(str(Path(path).resolve()))


def default_table() -> BsCalendarTable:
    """Table used by the converter when none is passed explicitly."""
    return load_table()

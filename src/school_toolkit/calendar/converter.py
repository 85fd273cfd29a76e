"""
Module: calendar.converter

Purpose:
    Bikram Sambat <-> Gregorian date conversion.

    Conversion goes through a day offset from the table's epoch pair:
    an AD date becomes "days since AD epoch", which is then walked
    forward through the BS month lengths, and the reverse. Inputs are
    accepted as "YYYY-M-D", "YYYY/M/D", "YYYY-MM-DD" or "YYYY/MM/DD";
    output is always "YYYY-MM-DD".

Key Functions:
    - normalize(): Lexical clean-up to "YYYY-MM-DD" (no calendar check)
    - parse_date(): Lexical parse into a CalendarDate
    - convert_ad_to_bs() / convert_bs_to_ad(): Typed conversions
    - ad_to_bs() / bs_to_ad(): String in, string or None out
    - bs_to_ad_date(): BS string to ``datetime.date``

Error Handling:
    Nothing here raises for bad input. Typed functions return a failed
    Conversion tagged LEXICAL (input does not look like a date, or month
    outside 1-12, or day outside 1-32) or RANGE (outside the table, BS
    day past the month's real length, or a Gregorian day that does not
    exist). String functions return None for either.

    A calendar table that cannot be loaded (``SCHOOL_TOOLKIT_BS_TABLE``
    pointing at a missing or invalid file) is a configuration error, not
    bad input: typed functions raise CalendarTableError, and string
    functions log it and return None.

Used By:
    - calendar.ranges
"""

from __future__ import annotations

import logging
import re
from datetime import date, datetime
from typing import Optional, Union

from school_toolkit.calendar.table import BsCalendarTable, CalendarTableError, default_table
from school_toolkit.core.models.dates import CalendarDate, CalendarSystem
from school_toolkit.core.models.outcome import Conversion, ConversionError

logger = logging.getLogger(__name__)

__all__ = [
    "normalize",
    "parse_date",
    "convert_ad_to_bs",
    "convert_bs_to_ad",
    "ad_to_bs",
    "bs_to_ad",
    "bs_to_ad_date",
]

_DATE_RE = re.compile(r"^(\d{4})[-/](\d{1,2})[-/](\d{1,2})$")

DateInput = Union[str, CalendarDate, date, None]


def normalize(date_str: Optional[str]) -> Optional[str]:
    """
    Normalize a date string to "YYYY-MM-DD".

    Only the shape is checked: "2081/1/3" and "2081-01-03" both become
    "2081-01-03", while "2081-13-40" is returned as-is because it has the
    right shape.

    Returns:
        The normalized string, or None if the input does not match
        ``YYYY[-/]M[M][-/]D[D]``.

    Example:
        >>> normalize(" 2024/4/5 ")
        '2024-04-05'
        >>> normalize("04/05/2024") is None
        True
    """
    if not date_str or not isinstance(date_str, str):
        return None
    match = _DATE_RE.match(date_str.strip())
    if not match:
        return None
    year, month, day = match.groups()
    return f"{year}-{month.zfill(2)}-{day.zfill(2)}"


def parse_date(date_str: Optional[str], system: CalendarSystem) -> Conversion:
    """
    Parse a date string into a CalendarDate of the given calendar.

    Checks the lexical shape plus month 1-12 and day 1-32. Does not
    check that the day exists in that calendar.
    """
    normalized = normalize(date_str)
    if normalized is None:
        return _fail(ConversionError.LEXICAL, f"Unrecognised date format: {date_str!r}", date_str)
    year, month, day = (int(part) for part in normalized.split("-"))
    try:
        return Conversion.success(CalendarDate(year, month, day, system))
    except ValueError as exc:
        return _fail(ConversionError.LEXICAL, str(exc), date_str)


def _fail(error: ConversionError, message: str, value: object) -> Conversion:
    logger.debug(
        "Date conversion failed (%s): %s",
        error.value,
        message,
        extra={"date_input": value, "conversion_error": error.value},
    )
    return Conversion.failure(error, message)


def _coerce(value: DateInput, system: CalendarSystem) -> Conversion:
    """Accept a string, CalendarDate or (for AD) datetime.date."""
    if isinstance(value, CalendarDate):
        if value.system is not system:
            return _fail(ConversionError.LEXICAL, f"Expected a {system.value} date, got {value!r}", value)
        return Conversion.success(value)
    if isinstance(value, (date, datetime)):
        if system is not CalendarSystem.AD:
            return _fail(ConversionError.LEXICAL, "datetime.date values are always AD", value)
        return Conversion.success(CalendarDate.from_date(value))
    return parse_date(value, system)


# ─────────────────────────────────────────────────────────────────────────────
# Typed Conversions
# ─────────────────────────────────────────────────────────────────────────────

def convert_ad_to_bs(value: DateInput, *, table: Optional[BsCalendarTable] = None) -> Conversion:
    """
    Convert an AD date to BS.

    Args:
        value: "YYYY-MM-DD"-style string, AD CalendarDate or datetime.date
        table: Month-length table; defaults to the configured table

    Returns:
        Conversion holding the BS date, or LEXICAL/RANGE failure

    Raises:
        CalendarTableError: If no table is passed and the configured one
            cannot be loaded

    Example:
        >>> convert_ad_to_bs("2024-04-15").text
        '2081-01-03'
    """
    parsed = _coerce(value, CalendarSystem.AD)
    if not parsed.ok:
        return parsed
    table = table or default_table()

    try:
        ad = parsed.date.to_date()
    except ValueError as exc:
        return _fail(ConversionError.RANGE, f"No such AD day {parsed.date}: {exc}", value)

    offset = table.ad_to_offset(ad)
    if not 0 <= offset < table.total_days:
        return _fail(
            ConversionError.RANGE,
            f"AD {parsed.date} outside supported range {table.first_ad}..{table.last_ad}",
            value,
        )
    return Conversion.success(table.offset_to_bs(offset))


def convert_bs_to_ad(value: DateInput, *, table: Optional[BsCalendarTable] = None) -> Conversion:
    """
    Convert a BS date to AD.

    Fails with RANGE when the year is outside the table or the day is
    past the end of that BS month (month lengths differ year to year).
    Raises CalendarTableError like convert_ad_to_bs().

    Example:
        >>> convert_bs_to_ad("2081/1/3").text
        '2024-04-15'
    """
    parsed = _coerce(value, CalendarSystem.BS)
    if not parsed.ok:
        return parsed
    table = table or default_table()

    try:
        offset = table.bs_to_offset(parsed.date)
    except ValueError as exc:
        return _fail(ConversionError.RANGE, str(exc), value)
    return Conversion.success(CalendarDate.from_date(table.offset_to_ad(offset)))


# ─────────────────────────────────────────────────────────────────────────────
# String Boundary
# ─────────────────────────────────────────────────────────────────────────────

def _convert_or_none(convert, value: DateInput) -> Optional[Conversion]:
    try:
        return convert(value)
    except CalendarTableError as exc:
        logger.error("Calendar table unavailable, cannot convert %r: %s", value, exc)
        return None


def ad_to_bs(ad_date: DateInput) -> Optional[str]:
    """AD date to BS "YYYY-MM-DD", or None if it cannot be converted."""
    result = _convert_or_none(convert_ad_to_bs, ad_date)
    return result.text if result is not None else None


def bs_to_ad(bs_date: DateInput) -> Optional[str]:
    """BS date to AD "YYYY-MM-DD", or None if it cannot be converted."""
    result = _convert_or_none(convert_bs_to_ad, bs_date)
    return result.text if result is not None else None


def bs_to_ad_date(bs_date: DateInput) -> Optional[date]:
    """BS date to ``datetime.date``, or None if it cannot be converted."""
    result = _convert_or_none(convert_bs_to_ad, bs_date)
    return result.date.to_date() if result is not None and result.ok else None

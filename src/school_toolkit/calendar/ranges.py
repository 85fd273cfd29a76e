"""
Module: calendar.ranges

Purpose:
    Day-sequence helpers used by attendance, leave and library screens:
    expanding an AD date range into its days, mapping those days onto
    BS, laying out a BS month, and "today"/"tomorrow"/"overdue" helpers.

    None of these read the system clock. Callers pass the current time
    in, which keeps every function deterministic.

    The BS helpers return an empty list, and log an error, when the
    configured calendar table cannot be loaded.

Key Functions:
    - dates_in_range_ad(): Inclusive list of "YYYY-MM-DD" AD strings
    - iter_dates_ad(): Same range as datetime.date values
    - date_range_ad(): DateRange or None
    - bs_dates_in_range_ad(): AD range mapped to BS strings
    - bs_month_calendar(): Days of a BS month with their AD equivalents
    - today_string() / tomorrow_string(): From an injected ``now``
    - days_overdue(): Whole days a due date has passed
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from typing import Iterator, List, Optional, Union

from school_toolkit.calendar.converter import convert_ad_to_bs, parse_date
from school_toolkit.calendar.table import BsCalendarTable, CalendarTableError, default_table
from school_toolkit.core.models.dates import CalendarDate, CalendarSystem, DateRange

logger = logging.getLogger(__name__)

Endpoint = Union[str, date, datetime, CalendarDate, None]


def _to_utc_date(value: Endpoint) -> Optional[date]:
    """
    Reduce an endpoint to a calendar day.

    Aware datetimes are shifted to UTC first; naive datetimes are taken
    to already be UTC. Strings go through the lexical parser and must
    name a real Gregorian day.
    """
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, CalendarDate):
        if value.system is not CalendarSystem.AD:
            return None
        try:
            return value.to_date()
        except ValueError:
            return None
    parsed = parse_date(value, CalendarSystem.AD)
    if not parsed.ok:
        return None
    try:
        return parsed.date.to_date()
    except ValueError:
        return None


def date_range_ad(start: Endpoint, end: Endpoint) -> Optional[DateRange]:
    """DateRange for two AD endpoints, or None if either is invalid or start > end."""
    first = _to_utc_date(start)
    last = _to_utc_date(end)
    if first is None or last is None:
        logger.debug("Invalid start or end date for range: %r .. %r", start, end)
        return None
    if first > last:
        return None
    return DateRange.from_dates(first, last)


def iter_dates_ad(start: Endpoint, end: Endpoint) -> Iterator[date]:
    """Yield each AD day from start to end inclusive (nothing if invalid)."""
    span = date_range_ad(start, end)
    if span is not None:
        yield from span


def dates_in_range_ad(start: Endpoint, end: Endpoint) -> List[str]:
    """
    All AD days from start to end, inclusive, as "YYYY-MM-DD".

    Returns an empty list if either endpoint is invalid or start is
    after end.

    Example:
        >>> dates_in_range_ad("2024/2/28", "2024-03-01")
        ['2024-02-28', '2024-02-29', '2024-03-01']
    """
    return [day.isoformat() for day in iter_dates_ad(start, end)]


def bs_dates_in_range_ad(
    start: Endpoint,
    end: Endpoint,
    *,
    table: Optional[BsCalendarTable] = None,
) -> List[str]:
    """
    BS equivalents of every AD day in a range.

    Days the table does not cover are left out.
    """
    if table is None:
        try:
            table = default_table()
        except CalendarTableError as exc:
            logger.error("Calendar table unavailable, no BS days for %s..%s: %s", start, end, exc)
            return []
    result: List[str] = []
    for day in iter_dates_ad(start, end):
        converted = convert_ad_to_bs(day, table=table)
        if converted.ok:
            result.append(converted.text)
    return result


# ─────────────────────────────────────────────────────────────────────────────
# BS Month View
# ─────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True, slots=True)
class BsMonthDay:
    """
    One cell of a BS month view.

    Attributes:
        bs: The BS date
        ad: Its AD equivalent
        weekday: 0 = Sunday ... 6 = Saturday (Nepali calendar column order)
    """

    bs: CalendarDate
    ad: CalendarDate
    weekday: int


def bs_month_calendar(
    year: int,
    month: int,
    *,
    table: Optional[BsCalendarTable] = None,
) -> List[BsMonthDay]:
    """
    Every day of a BS month with its AD date and weekday.

    Returns an empty list if the month is not in the table.
    """
    if table is None:
        try:
            table = default_table()
        except CalendarTableError as exc:
            logger.error("Calendar table unavailable, no month view for BS %s-%s: %s", year, month, exc)
            return []
    try:
        length = table.days_in_month(year, month)
        start = table.bs_to_offset(CalendarDate.bs(year, month, 1))
    except ValueError as exc:
        logger.debug("No month view for BS %s-%s: %s", year, month, exc)
        return []

    days = []
    for index in range(length):
        ad = table.offset_to_ad(start + index)
        days.append(
            BsMonthDay(
                bs=CalendarDate.bs(year, month, index + 1),
                ad=CalendarDate.from_date(ad),
                weekday=(ad.weekday() + 1) % 7,
            )
        )
    return days


# ─────────────────────────────────────────────────────────────────────────────
# Clock Helpers
# ─────────────────────────────────────────────────────────────────────────────

def _utc_day(now: datetime) -> date:
    if now.tzinfo is not None:
        now = now.astimezone(timezone.utc)
    return now.date()


def today_string(now: datetime) -> str:
    """UTC calendar day of ``now`` as "YYYY-MM-DD"."""
    return _utc_day(now).isoformat()


def tomorrow_string(now: datetime) -> str:
    """The UTC day after ``now`` as "YYYY-MM-DD" (used as notification expiry)."""
    return (_utc_day(now) + timedelta(days=1)).isoformat()


def days_overdue(due: Endpoint, today: Endpoint) -> int:
    """
    Whole days ``due`` lies before ``today``; 0 if not yet due or invalid.

    Example:
        >>> days_overdue("2024-04-10", "2024-04-15")
        5
    """
    due_day = _to_utc_date(due)
    current = _to_utc_date(today)
    if due_day is None or current is None or due_day >= current:
        return 0
    return (current - due_day).days

"""
Calendar Package

Bikram Sambat (BS) <-> Gregorian (AD) conversion, date normalization,
day-range expansion and BS month names, driven by the bundled
month-length table in ``data/bs_month_lengths.json``.

All functions are pure: they read only their arguments and the
(immutable, cached) table.
"""

from .config import CalendarConfig, TABLE_PATH_ENV
from .table import BsCalendarTable, CalendarTableError, load_table, default_table
from .converter import (
    normalize,
    parse_date,
    convert_ad_to_bs,
    convert_bs_to_ad,
    ad_to_bs,
    bs_to_ad,
    bs_to_ad_date,
)
from .ranges import (
    BsMonthDay,
    dates_in_range_ad,
    iter_dates_ad,
    date_range_ad,
    bs_dates_in_range_ad,
    bs_month_calendar,
    today_string,
    tomorrow_string,
    days_overdue,
)
from .months import month_name, BS_MONTH_NAMES, BS_MONTH_NAMES_DEVANAGARI

__all__ = [
    # config / table
    "CalendarConfig",
    "TABLE_PATH_ENV",
    "BsCalendarTable",
    "CalendarTableError",
    "load_table",
    "default_table",
    # converter
    "normalize",
    "parse_date",
    "convert_ad_to_bs",
    "convert_bs_to_ad",
    "ad_to_bs",
    "bs_to_ad",
    "bs_to_ad_date",
    # ranges
    "BsMonthDay",
    "dates_in_range_ad",
    "iter_dates_ad",
    "date_range_ad",
    "bs_dates_in_range_ad",
    "bs_month_calendar",
    "today_string",
    "tomorrow_string",
    "days_overdue",
    # months
    "month_name",
    "BS_MONTH_NAMES",
    "BS_MONTH_NAMES_DEVANAGARI",
]

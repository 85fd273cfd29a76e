#!/usr/bin/env python3
"""
Verify a BS month-length table before shipping it.

Loads the table (the bundled one, or a file given on the command line),
runs the full schema validation, then checks it against published
Baisakh 1 dates and known days inside the year, then walks every day
of the table in both directions.

Usage:
    python scripts/verify_calendar_table.py
    python scripts/verify_calendar_table.py path/to/table.json --verbose
"""

import argparse
import logging
import sys
from datetime import date, timedelta
from pathlib import Path
from typing import List, Optional

# Add src to path
project_root = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(project_root / "src"))

from school_toolkit.calendar.table import BsCalendarTable, CalendarTableError, load_table  # noqa: E402
from school_toolkit.core.models.dates import CalendarDate  # noqa: E402

logger = logging.getLogger("verify_calendar_table")

# Baisakh 1 as printed on the published Nepali calendars
NEW_YEAR_ANCHORS = {
    2000: date(1943, 4, 14),
    2050: date(1993, 4, 13),
    2060: date(2003, 4, 14),
    2065: date(2008, 4, 13),
    2070: date(2013, 4, 14),
    2075: date(2018, 4, 14),
    2076: date(2019, 4, 14),
    2077: date(2020, 4, 13),
    2078: date(2021, 4, 14),
    2079: date(2022, 4, 14),
    2080: date(2023, 4, 14),
    2081: date(2024, 4, 13),
    2082: date(2025, 4, 14),
}

# Days inside the year as printed on the published calendars, so a wrong
# month length shows up even when the year total is right
MID_YEAR_ANCHORS = {
    (2062, 2, 1): date(2005, 5, 15),
    (2081, 3, 15): date(2024, 6, 29),  # Asar 15, paddy day
    (2081, 12, 31): date(2025, 4, 13),
    (2082, 2, 15): date(2025, 5, 29),  # Jestha 15, republic day
}


def check_anchors(table: BsCalendarTable) -> List[str]:
    """Compare Baisakh 1 and the mid-year anchors of every year the table covers."""
    problems = []
    for year, expected in sorted(NEW_YEAR_ANCHORS.items()):
        if not table.has_year(year):
            continue
        actual = table.offset_to_ad(table.bs_to_offset(CalendarDate.bs(year, 1, 1)))
        if actual != expected:
            problems.append(f"BS {year}-01-01 maps to {actual}, expected {expected}")
        else:
            logger.debug("BS %d-01-01 == %s", year, actual)
    for (year, month, day), ad in sorted(MID_YEAR_ANCHORS.items()):
        offset = table.ad_to_offset(ad)
        if not table.has_year(year) or not 0 <= offset < table.total_days:
            continue
        expected = CalendarDate.bs(year, month, day)
        actual = table.offset_to_bs(offset)
        if actual != expected:
            problems.append(f"AD {ad} maps to BS {actual}, expected {expected}")
        else:
            logger.debug("AD %s == BS %s", ad, actual)
    return problems


def check_walk(table: BsCalendarTable) -> List[str]:
    """Every offset must map to a BS date that maps back to it."""
    problems = []
    for offset in range(table.total_days):
        bs = table.offset_to_bs(offset)
        if table.bs_to_offset(bs) != offset:
            problems.append(f"Offset {offset} -> {bs} does not round trip")
            if len(problems) >= 10:
                break
    expected_last = table.first_ad + timedelta(days=table.total_days - 1)
    if table.last_ad != expected_last:
        problems.append(f"Last AD day {table.last_ad} != {expected_last}")
    return problems


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Verify a BS month-length table")
    parser.add_argument("table", nargs="?", type=Path, help="Table JSON (default: bundled table)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Log every anchor checked")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(message)s",
    )

    try:
        table = load_table(args.table)
    except CalendarTableError as e:
        logger.error("Table failed to load: %s", e)
        return 1

    logger.info(
        "Table %s: BS %s .. %s (AD %s .. %s, %d days)",
        table.version,
        table.first_bs,
        table.last_bs,
        table.first_ad,
        table.last_ad,
        table.total_days,
    )

    problems = check_anchors(table) + check_walk(table)
    for problem in problems:
        logger.error(problem)
    if problems:
        logger.error("%d problem(s) found", len(problems))
        return 1

    logger.info("OK")
    return 0


if __name__ == "__main__":
    sys.exit(main())

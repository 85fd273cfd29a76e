"""BS month names."""

from __future__ import annotations

from typing import Tuple

UNKNOWN_MONTH = "Unknown"

BS_MONTH_NAMES: Tuple[str, ...] = (
    "Baisakh",
    "Jestha",
    "Asar",
    "Shrawan",
    "Bhadra",
    "Asoj",
    "Kartik",
    "Mangsir",
    "Poush",
    "Magh",
    "Falgun",
    "Chaitra",
)

# As printed on the school calendar and attendance pages
BS_MONTH_NAMES_DEVANAGARI: Tuple[str, ...] = (
    "बैशाख",
    "जेठ",
    "असार",
    "श्रावण",
    "भाद्र",
    "आश्विन",
    "कार्तिक",
    "मंसिर",
    "पौष",
    "माघ",
    "फाल्गुन",
    "चैत्र",
)


def month_name(month: object, *, devanagari: bool = False) -> str:
    """
    Name of a BS month (1 = Baisakh ... 12 = Chaitra).

    Returns "Unknown" for anything that is not an integer 1-12.

    Example:
        >>> month_name(1)
        'Baisakh'
        >>> month_name(13)
        'Unknown'
    """
    if isinstance(month, bool) or not isinstance(month, int) or not 1 <= month <= 12:
        return UNKNOWN_MONTH
    names = BS_MONTH_NAMES_DEVANAGARI if devanagari else BS_MONTH_NAMES
    return names[month - 1]

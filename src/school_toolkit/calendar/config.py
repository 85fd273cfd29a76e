"""
Module: calendar.config

Purpose:
    Configuration for the calendar converter. The only knob is which
    month-length table to load; by default the one bundled with the
    package.

Key Classes:
    - CalendarConfig: Immutable table location

Used By:
    - calendar.table: load_default_table
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional

# Environment variable pointing at a replacement table file
TABLE_PATH_ENV = "SCHOOL_TOOLKIT_BS_TABLE"


def bundled_table_path() -> Path:
    """Path of the month-length table shipped with the package."""
    return Path(__file__).resolve().parent / "data" / "bs_month_lengths.json"


@dataclass(frozen=True)
class CalendarConfig:
    """
    Calendar converter configuration (immutable).

    Attributes:
        table_path: JSON month-length table to load

    Example:
        >>> CalendarConfig().table_path.name
        'bs_month_lengths.json'
    """

    table_path: Path = field(default_factory=bundled_table_path)

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if not str(self.table_path):
            raise ValueError("table_path cannot be empty")
        if self.table_path.suffix.lower() != ".json":
            raise ValueError(f"table_path must be a .json file: {self.table_path}")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> CalendarConfig:
        """Build configuration from ``SCHOOL_TOOLKIT_BS_TABLE`` if set."""
        env = os.environ if environ is None else environ
        override = env.get(TABLE_PATH_ENV, "").strip()
        if override:
            return cls(table_path=Path(override).expanduser())
        return cls()

"""
Schema Validation Utilities

Validates the JSON data the toolkit reads: the bundled Bikram Sambat
month-length table, exam subject-detail payloads and mark-entry
documents.

Every validator runs cheap structural checks first so the common
mistakes get a readable message, then (with ``strict=True``) the full
JSON Schema from this directory via ``jsonschema``.
"""

from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Any

import jsonschema


# Table format version (bump when bs_calendar.schema.json changes shape)
CALENDAR_TABLE_SCHEMA_VERSION = 1

_SCHEMAS: dict[str, dict] = {}
_YEAR_KEY_RE = re.compile(r"^\d{4}$")


def _load_schema(name: str) -> dict:
    """Load a schema from the schemas directory."""
    if name not in _SCHEMAS:
        schema_path = Path(__file__).parent / f"{name}.schema.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")
        with open(schema_path, "r", encoding="utf-8") as f:
            _SCHEMAS[name] = json.load(f)
    return _SCHEMAS[name]


class ValidationError(Exception):
    """Raised when data fails schema validation."""

    def __init__(self, message: str, path: str = "", errors: list[str] | None = None):
        super().__init__(message)
        self.path = path
        self.errors = errors or []


def _run_jsonschema(data: Any, schema_name: str) -> None:
    schema = _load_schema(schema_name)
    try:
        jsonschema.validate(data, schema)
    except jsonschema.ValidationError as e:
        raise ValidationError(
            f"Schema validation failed: {e.message}",
            path=".".join(str(p) for p in e.absolute_path),
            errors=[e.message],
        ) from e


# ─────────────────────────────────────────────────────────────────────────────
# Calendar Table
# ─────────────────────────────────────────────────────────────────────────────

def validate_calendar_table(data: dict[str, Any], *, strict: bool = True) -> None:
    """
    Validate a BS month-length table payload.

    Beyond the schema, checks that the years are contiguous and that
    every year has a plausible solar length (365 or 366 days).

    Args:
        data: Parsed table JSON
        strict: Also validate against bs_calendar.schema.json

    Raises:
        ValidationError: If data is invalid
    """
    if not isinstance(data, dict):
        raise ValidationError("Calendar table must be a JSON object")

    required = ["table_schema_version", "table_version", "epoch", "years"]
    missing = [f for f in required if f not in data]
    if missing:
        raise ValidationError(
            f"Missing required fields: {missing}",
            errors=[f"Missing field: {f}" for f in missing],
        )

    version = data.get("table_schema_version")
    if version != CALENDAR_TABLE_SCHEMA_VERSION:
        raise ValidationError(
            f"Unsupported calendar table schema version: {version} "
            f"(expected {CALENDAR_TABLE_SCHEMA_VERSION})",
            path="table_schema_version",
        )

    if strict:
        _run_jsonschema(data, "bs_calendar")

    years = data["years"]
    if not isinstance(years, dict) or not years:
        raise ValidationError("years must be a non-empty object", path="years")

    bad_keys = [k for k in years if not _YEAR_KEY_RE.match(str(k))]
    if bad_keys:
        raise ValidationError(f"Invalid year keys: {bad_keys}", path="years")

    numbers = sorted(int(k) for k in years)
    gaps = [y for y in range(numbers[0], numbers[-1] + 1) if str(y) not in years]
    if gaps:
        raise ValidationError(
            f"Calendar table years are not contiguous, missing: {gaps}",
            path="years",
        )

    errors = []
    for key, months in years.items():
        if not isinstance(months, list) or len(months) != 12:
            errors.append(f"{key}: expected 12 month lengths")
            continue
        if any(not isinstance(m, int) or not 29 <= m <= 32 for m in months):
            errors.append(f"{key}: month lengths must be integers in 29-32")
            continue
        total = sum(months)
        if total not in (365, 366):
            errors.append(f"{key}: year length {total} is not 365 or 366")
    if errors:
        raise ValidationError(
            f"Invalid month lengths in {len(errors)} year(s)",
            path="years",
            errors=errors,
        )

    epoch_bs = str(data["epoch"].get("bs", ""))
    if epoch_bs[:4] != str(numbers[0]):
        raise ValidationError(
            f"Epoch BS date {epoch_bs!r} must be the first day of the first table year {numbers[0]}",
            path="epoch.bs",
        )


# ─────────────────────────────────────────────────────────────────────────────
# Exam Payloads
# ─────────────────────────────────────────────────────────────────────────────

def validate_subject_details(data: Any, *, strict: bool = True) -> None:
    """
    Validate an exam's subject-details list (decoded ``subjectDetails_json``).

    Raises:
        ValidationError: If data is invalid
    """
    if not isinstance(data, list):
        raise ValidationError("Subject details must be a JSON array")
    for i, item in enumerate(data):
        if not isinstance(item, dict):
            raise ValidationError("Subject detail must be an object", path=f"[{i}]")
        missing = [f for f in ("name", "theoryFM", "theoryPM") if f not in item]
        if missing:
            raise ValidationError(
                f"Subject detail missing required fields: {missing}",
                path=f"[{i}]",
                errors=[f"Missing field: {f}" for f in missing],
            )
    if strict:
        _run_jsonschema(data, "subject_details")


def validate_mark_entry(data: Any, *, strict: bool = True) -> None:
    """
    Validate one mark-entry document.

    Raises:
        ValidationError: If data is invalid
    """
    if not isinstance(data, dict):
        raise ValidationError("Mark entry must be a JSON object")
    if not data.get("subjectName"):
        raise ValidationError("Mark entry missing subjectName", path="subjectName")
    if strict:
        _run_jsonschema(data, "mark_entry")

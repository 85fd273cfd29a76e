"""
Serialization Utilities

Turns backend documents into the toolkit's value types.

Exams store their subject list as a JSON string (``subjectDetails_json``)
whose numbers are sometimes saved as strings by the exam form, and mark
documents arrive as plain dicts with camelCase keys. The functions here
validate those payloads, coerce the numeric strings, and build
``SubjectSpec`` / ``MarkEntry`` instances.

Parsing is forgiving at the list level: a malformed payload yields an
empty list, and a single bad item is skipped, so one broken record does
not hide a whole exam. Every skip is logged.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Iterable, List, Optional

from ..models.results import MarkEntry, SubjectSpec
from ..schemas.validator import ValidationError, validate_mark_entry, validate_subject_details

logger = logging.getLogger(__name__)


def _to_number(value: Any) -> Optional[float]:
    """Coerce a stored number or numeric string; None stays None."""
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValueError(f"Expected a number, got {value!r}")
    if isinstance(value, (int, float)):
        return value
    text = str(value).strip()
    if not text:
        return None
    return float(text)


# ─────────────────────────────────────────────────────────────────────────────
# Subject Details
# ─────────────────────────────────────────────────────────────────────────────

def deserialize_subject_spec(data: dict[str, Any]) -> SubjectSpec:
    """
    Build a SubjectSpec from one subject-detail object.

    Practical marks are ignored unless ``hasPractical`` is true.

    Raises:
        ValueError: If the marks cannot be coerced or break SubjectSpec invariants
    """
    has_practical = bool(data.get("hasPractical"))
    theory_fm = _to_number(data.get("theoryFM"))
    theory_pm = _to_number(data.get("theoryPM"))
    if theory_fm is None or theory_pm is None:
        raise ValueError(f"Theory marks missing for subject {data.get('name')!r}")

    return SubjectSpec(
        name=str(data.get("name", "")).strip(),
        theory_fm=theory_fm,
        theory_pm=theory_pm,
        has_practical=has_practical,
        practical_fm=_to_number(data.get("practicalFM")) if has_practical else None,
        practical_pm=_to_number(data.get("practicalPM")) if has_practical else None,
        date=str(data.get("date") or ""),
    )


def parse_subject_details(payload: str | bytes | None) -> List[SubjectSpec]:
    """
    Parse an exam's ``subjectDetails_json`` string.

    Args:
        payload: JSON text holding a list of subject-detail objects

    Returns:
        SubjectSpecs in payload order. Empty if the payload is missing,
        not valid JSON, or fails schema validation. Items that violate
        SubjectSpec invariants are skipped.

    Example:
        >>> specs = parse_subject_details(
        ...     '[{"name": "Math", "theoryFM": "100", "theoryPM": "40"}]'
        ... )
        >>> specs[0].theory_fm
        100.0
    """
    if not payload:
        return []
    try:
        items = json.loads(payload)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        logger.warning("Subject details are not valid JSON: %s", exc)
        return []

    try:
        validate_subject_details(items)
    except ValidationError as exc:
        logger.warning(
            "Subject details failed validation at %r: %s",
            exc.path,
            exc,
            extra={"errors": exc.errors},
        )
        return []

    specs: List[SubjectSpec] = []
    for index, item in enumerate(items):
        try:
            specs.append(deserialize_subject_spec(item))
        except ValueError as exc:
            logger.warning("Skipping subject detail #%d (%r): %s", index, item.get("name"), exc)
    return specs


def serialize_subject_details(specs: Iterable[SubjectSpec]) -> str:
    """Encode SubjectSpecs back into the ``subjectDetails_json`` format."""
    return json.dumps([spec.to_dict() for spec in specs], ensure_ascii=False)


# ─────────────────────────────────────────────────────────────────────────────
# Mark Entries
# ─────────────────────────────────────────────────────────────────────────────

def deserialize_mark_entry(data: dict[str, Any], *, validate: bool = True) -> MarkEntry:
    """
    Build a MarkEntry from a mark document.

    Args:
        data: Document with ``subjectName``, ``theoryMarksObtained``,
            ``practicalMarksObtained``, ``isAbsent`` and optionally
            ``examId`` / ``studentId``
        validate: Whether to validate against the schema first

    Raises:
        ValidationError: If validate=True and data is invalid
    """
    if validate:
        validate_mark_entry(data)

    return MarkEntry(
        subject_name=data["subjectName"],
        theory_marks_obtained=data.get("theoryMarksObtained"),
        practical_marks_obtained=data.get("practicalMarksObtained"),
        is_absent=bool(data.get("isAbsent")),
        exam_id=data.get("examId"),
        student_id=data.get("studentId"),
    )


def load_mark_entries(documents: Iterable[dict[str, Any]]) -> List[MarkEntry]:
    """Deserialize mark documents, skipping (and logging) invalid ones."""
    entries: List[MarkEntry] = []
    for index, document in enumerate(documents):
        try:
            entries.append(deserialize_mark_entry(document))
        except ValidationError as exc:
            logger.warning("Skipping mark entry #%d: %s", index, exc)
    return entries

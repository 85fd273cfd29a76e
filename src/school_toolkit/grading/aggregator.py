"""
Module: grading.aggregator

Purpose:
    Computes one student's outcome for one exam sitting from the exam's
    subject definitions and the student's mark entries, in either of two
    scoring modes:

    - Marks mode: a subject passes when every component reaches its pass
      marks; the exam reports total marks and percentage.
    - GPA mode: each component is graded on the GPA scale, a subject's
      point is the mean of its component points, and the exam's GPA is
      the mean over the subjects that passed.

    Incomplete data is the normal case here, not an error. A subject
    with no mark entry is "not entered yet" (not absent), and an exam
    whose marks are all unentered is Awaited rather than Failed. Marks
    arrive from forms and imports, so numeric strings are accepted and
    anything that is not a finite number counts as not entered.

Key Functions:
    - process_exam_results_for_student(): Per-subject results plus summary

Used By:
    - Result screens and report-card exports (via ExamResult.to_dict())
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Sequence

from school_toolkit.core.models.results import (
    ExamResult,
    ExamResultSummary,
    Grade,
    MarkEntry,
    ProcessedSubjectResult,
    ResultStatus,
    SubjectSpec,
    SubjectStatus,
)
from school_toolkit.grading.config import DEFAULT_GRADING_CONFIG, GradingConfig
from school_toolkit.grading.scale import ABSENT, calculate_grade_and_point, round_half_up

logger = logging.getLogger(__name__)

UNKNOWN_EXAM_ID = "unknown_exam"


@dataclass
class _Tally:
    """Running totals across subjects."""

    overall_passed: bool = True
    gpa_points_sum: float = 0.0
    gpa_subjects_counted: int = 0
    marks_obtained: float = 0.0
    full_marks: float = 0.0


def _find_entry(entries: Sequence[MarkEntry], subject_name: str) -> Optional[MarkEntry]:
    for entry in entries:
        if entry.subject_name == subject_name:
            return entry
    return None


def _coerce_mark(value: Any, subject_name: str, component: str) -> Optional[float]:
    """Numeric mark as a float, or None when it cannot be used."""
    if value is None:
        return None
    if not isinstance(value, bool):
        try:
            mark = float(value)
        except (TypeError, ValueError):
            mark = None
        if mark is not None and math.isfinite(mark):
            return mark
    logger.warning(
        "Ignoring unusable %s mark for %s: %r",
        component,
        subject_name,
        value,
        extra={"subject": subject_name, "component": component},
    )
    return None


def _percentage(obtained: Optional[float], full: Optional[float]) -> Optional[float]:
    if obtained is None or not full or full <= 0:
        return None
    return obtained / full * 100


# ─────────────────────────────────────────────────────────────────────────────
# Per-Subject Processing
# ─────────────────────────────────────────────────────────────────────────────

def _process_subject(
    spec: SubjectSpec,
    entry: Optional[MarkEntry],
    is_gpa_mode: bool,
    config: GradingConfig,
    tally: _Tally,
) -> ProcessedSubjectResult:
    is_absent = bool(entry and entry.is_absent)
    present = entry is not None and not is_absent
    theory_marks = (
        _coerce_mark(entry.theory_marks_obtained, spec.name, "theory") if present else None
    )
    practical_marks = (
        _coerce_mark(entry.practical_marks_obtained, spec.name, "practical")
        if present and spec.has_practical
        else None
    )
    practical_fm = spec.practical_fm if spec.has_practical else None
    practical_pm = spec.practical_pm if spec.has_practical else None

    base = dict(
        subject_name=spec.name,
        theory_fm=spec.theory_fm,
        theory_pm=spec.theory_pm,
        practical_fm=practical_fm,
        practical_pm=practical_pm,
        has_practical=spec.has_practical,
        theory_marks_obtained=theory_marks,
        practical_marks_obtained=practical_marks,
        is_absent=is_absent,
        subject_full_marks=spec.full_marks,
        is_gpa=is_gpa_mode,
    )

    if is_absent:
        tally.overall_passed = False
        if is_gpa_mode:
            return ProcessedSubjectResult(
                **base,
                theory_gpa=ABSENT,
                practical_gpa=ABSENT if spec.has_practical else None,
                subject_average_gpa_point=0.0,
                subject_overall_letter_grade=Grade.ABS,
                subject_gpa_status=SubjectStatus.ABSENT,
            )
        return ProcessedSubjectResult(
            **base,
            subject_total_marks_obtained=None,
            subject_marks_status=SubjectStatus.ABSENT,
        )

    if is_gpa_mode:
        return _grade_subject(spec, theory_marks, practical_marks, base, config, tally)
    return _mark_subject(spec, theory_marks, practical_marks, base, tally)


def _grade_subject(
    spec: SubjectSpec,
    theory_marks: Optional[float],
    practical_marks: Optional[float],
    base: Dict[str, Any],
    config: GradingConfig,
    tally: _Tally,
) -> ProcessedSubjectResult:
    """GPA mode for a present student."""
    theory_percent = _percentage(theory_marks, spec.theory_fm)
    theory_gpa = calculate_grade_and_point(theory_percent, config.scale)
    points = [theory_gpa.point]
    failed_component = theory_gpa.grade is Grade.NG

    practical_percent = None
    practical_gpa = None
    if spec.has_practical:
        practical_percent = _percentage(practical_marks, spec.practical_fm)
        practical_gpa = calculate_grade_and_point(practical_percent, config.scale)
        points.append(practical_gpa.point)
        failed_component = failed_component or practical_gpa.grade is Grade.NG

    average_point = sum(points) / len(points)
    overall = calculate_grade_and_point(average_point / config.max_grade_point * 100, config.scale)

    if failed_component or overall.grade is Grade.NG:
        status = SubjectStatus.NG
        tally.overall_passed = False
    else:
        status = SubjectStatus.PASSED
        tally.gpa_points_sum += average_point
        tally.gpa_subjects_counted += 1

    return ProcessedSubjectResult(
        **base,
        theory_percentage=theory_percent,
        practical_percentage=practical_percent,
        theory_gpa=theory_gpa,
        practical_gpa=practical_gpa,
        subject_average_gpa_point=average_point,
        subject_overall_letter_grade=overall.grade,
        subject_gpa_status=status,
    )


def _mark_subject(
    spec: SubjectSpec,
    theory_marks: Optional[float],
    practical_marks: Optional[float],
    base: Dict[str, Any],
    tally: _Tally,
) -> ProcessedSubjectResult:
    """Marks mode for a present student. Missing marks fail the component."""
    passed = theory_marks is not None and theory_marks >= spec.theory_pm
    if spec.has_practical and spec.practical_pm is not None:
        if practical_marks is None or practical_marks < spec.practical_pm:
            passed = False

    total = (theory_marks or 0) + (practical_marks or 0)
    if not passed:
        tally.overall_passed = False
    tally.marks_obtained += total
    tally.full_marks += spec.full_marks

    return ProcessedSubjectResult(
        **base,
        subject_total_marks_obtained=total,
        subject_marks_status=SubjectStatus.PASSED if passed else SubjectStatus.FAILED,
    )


# ─────────────────────────────────────────────────────────────────────────────
# Exam Rollup
# ─────────────────────────────────────────────────────────────────────────────

def _resolve_exam_id(
    exam_id: Optional[str],
    entries: Sequence[MarkEntry],
    specs: Sequence[SubjectSpec],
) -> str:
    if exam_id:
        return exam_id
    if entries and entries[0].exam_id:
        return entries[0].exam_id
    if specs:
        return specs[0].name
    return UNKNOWN_EXAM_ID


def process_exam_results_for_student(
    subject_specs: Iterable[SubjectSpec],
    mark_entries: Iterable[MarkEntry],
    is_gpa_mode: bool,
    *,
    exam_id: Optional[str] = None,
    config: GradingConfig = DEFAULT_GRADING_CONFIG,
) -> ExamResult:
    """
    Compute per-subject results and the exam summary for one student.

    Args:
        subject_specs: The exam's subjects, in display order
        mark_entries: The student's entries for this exam (matched by
            subject name, first match wins)
        is_gpa_mode: GPA mode if True, marks mode otherwise
        exam_id: Summary id; defaults to the first entry's exam id, then
            the first subject's name
        config: Grade scale and thresholds

    Returns:
        ExamResult with one ProcessedSubjectResult per subject and the
        summary. Inputs are never modified.

    Summary status:
        - No subjects: Awaited
        - Every subject absent: Failed
        - GPA mode: Passed only if no subject was absent or NG, at least
          one subject counted, and the final GPA reaches min_exam_gpa
        - Marks mode: Passed only if every subject passed
        - Any mode: Awaited if no subject has marks entered and none is
          absent

    Example:
        >>> result = process_exam_results_for_student(
        ...     [SubjectSpec("Math", 100, 40)],
        ...     [MarkEntry("Math", theory_marks_obtained=55)],
        ...     is_gpa_mode=False,
        ... )
        >>> result.summary.overall_result_status.value, result.summary.total_percentage
        ('Passed', 55.0)
    """
    specs = list(subject_specs)
    entries = list(mark_entries)
    tally = _Tally()

    processed: List[ProcessedSubjectResult] = [
        _process_subject(spec, _find_entry(entries, spec.name), is_gpa_mode, config, tally)
        for spec in specs
    ]

    if not processed:
        status = ResultStatus.AWAITED
    elif all(s.is_absent for s in processed):
        status = ResultStatus.FAILED
    else:
        status = None

    final_gpa = None
    grand_total = None
    full_marks = None
    percentage = None

    if is_gpa_mode:
        final_gpa = (
            round_half_up(tally.gpa_points_sum / tally.gpa_subjects_counted, config.decimals)
            if tally.gpa_subjects_counted else 0.0
        )
        if status is None:
            passed = (
                tally.overall_passed
                and tally.gpa_subjects_counted > 0
                and final_gpa >= config.min_exam_gpa
            )
            status = ResultStatus.PASSED if passed else ResultStatus.FAILED
    else:
        grand_total = tally.marks_obtained
        full_marks = tally.full_marks
        percentage = (
            round_half_up(tally.marks_obtained / tally.full_marks * 100, config.decimals)
            if tally.full_marks > 0 else 0.0
        )
        if status is None:
            status = ResultStatus.PASSED if tally.overall_passed else ResultStatus.FAILED

    if processed and all(s.marks_unentered for s in processed):
        status = ResultStatus.AWAITED

    summary = ExamResultSummary(
        exam_id=_resolve_exam_id(exam_id, entries, specs),
        is_gpa=is_gpa_mode,
        overall_result_status=status,
        overall_exam_passed=tally.overall_passed,
        final_gpa=final_gpa,
        grand_total_marks=grand_total,
        total_full_marks=full_marks,
        total_percentage=percentage,
    )
    logger.debug(
        "Processed %d subject(s) for exam %s: %s",
        len(processed),
        summary.exam_id,
        status.value,
        extra={"is_gpa": is_gpa_mode},
    )
    return ExamResult(processed_subjects=tuple(processed), summary=summary)

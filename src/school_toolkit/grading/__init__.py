"""
Grading Package

Exam result processing: the GPA grade scale, grading configuration and
the per-student result aggregator.
"""

from .scale import (
    GradeBand,
    DEFAULT_GPA_SCALE,
    calculate_grade_and_point,
    round_half_up,
    validate_scale,
)
from .config import GradingConfig, DEFAULT_GRADING_CONFIG
from .aggregator import process_exam_results_for_student, UNKNOWN_EXAM_ID

__all__ = [
    "GradeBand",
    "DEFAULT_GPA_SCALE",
    "calculate_grade_and_point",
    "round_half_up",
    "validate_scale",
    "GradingConfig",
    "DEFAULT_GRADING_CONFIG",
    "process_exam_results_for_student",
    "UNKNOWN_EXAM_ID",
]

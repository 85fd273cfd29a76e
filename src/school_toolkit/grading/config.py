"""
Module: grading.config

Purpose:
    Tunable numbers for result aggregation, gathered in one immutable
    object instead of scattered through the aggregator.

Key Classes:
    - GradingConfig: Scale, GPA ceiling, exam pass GPA and rounding
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from school_toolkit.grading.scale import DEFAULT_GPA_SCALE, GradeBand, validate_scale


@dataclass(frozen=True)
class GradingConfig:
    """
    Configuration for result aggregation (immutable).

    Attributes:
        scale: Percentage -> grade bands, descending
        max_grade_point: Point that maps to 100% when a subject's average
            point is turned back into a percentage
        min_exam_gpa: Lowest final GPA that still passes the exam
        decimals: Rounding for final GPA and total percentage
    """

    scale: Tuple[GradeBand, ...] = DEFAULT_GPA_SCALE
    max_grade_point: float = 4.0
    min_exam_gpa: float = 1.6
    decimals: int = 2

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        validate_scale(self.scale)
        if self.max_grade_point <= 0:
            raise ValueError(f"max_grade_point must be positive: {self.max_grade_point}")
        if not 0 <= self.min_exam_gpa <= self.max_grade_point:
            raise ValueError(
                f"min_exam_gpa must be within 0-{self.max_grade_point}: {self.min_exam_gpa}"
            )
        if self.decimals < 0:
            raise ValueError(f"decimals must be non-negative: {self.decimals}")


DEFAULT_GRADING_CONFIG = GradingConfig()

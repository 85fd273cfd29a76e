"""
Module: grading.scale

Purpose:
    Percentage -> (letter grade, grade point) lookup for GPA-mode exams.

    The scale is data: an ordered tuple of GradeBand thresholds, checked
    top to bottom, first match wins. Every band uses a strict ">"
    except the D floor, which is ">= 35". A valid percentage that clears
    no band is NG; a missing, non-numeric, NaN or negative one is N/A.

    | percent  | grade | point |
    |----------|-------|-------|
    | > 90     | A+    | 4.0   |
    | > 80     | A     | 3.6   |
    | > 70     | B+    | 3.2   |
    | > 60     | B     | 2.8   |
    | > 50     | C+    | 2.4   |
    | > 40     | C     | 2.0   |
    | >= 35    | D     | 1.6   |
    | else     | NG    | 0.0   |

Key Functions:
    - calculate_grade_and_point(): Look a percentage up on a scale
    - round_half_up(): Round for display, ties away from zero
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Sequence, Tuple

from school_toolkit.core.models.results import GpaInfo, Grade


@dataclass(frozen=True, slots=True)
class GradeBand:
    """
    One row of a grade scale.

    Attributes:
        grade: Letter awarded
        point: Grade point awarded
        threshold: Percentage the score must exceed (or reach, if inclusive)
        inclusive: Use ">=" instead of ">"
    """

    grade: Grade
    point: float
    threshold: float
    inclusive: bool = False

    def __post_init__(self) -> None:
        if self.point < 0:
            raise ValueError(f"Grade point cannot be negative: {self.point}")

    def matches(self, percent: float) -> bool:
        if self.inclusive:
            return percent >= self.threshold
        return percent > self.threshold


DEFAULT_GPA_SCALE: Tuple[GradeBand, ...] = (
    GradeBand(Grade.A_PLUS, 4.0, 90),
    GradeBand(Grade.A, 3.6, 80),
    GradeBand(Grade.B_PLUS, 3.2, 70),
    GradeBand(Grade.B, 2.8, 60),
    GradeBand(Grade.C_PLUS, 2.4, 50),
    GradeBand(Grade.C, 2.0, 40),
    GradeBand(Grade.D, 1.6, 35, inclusive=True),
)

NOT_GRADED = GpaInfo(Grade.NG, 0.0)
NOT_AVAILABLE = GpaInfo(Grade.NA, 0.0)
ABSENT = GpaInfo(Grade.ABS, 0.0)


def validate_scale(scale: Sequence[GradeBand]) -> None:
    """
    Check that thresholds strictly descend.

    Raises:
        ValueError: If the scale is empty or out of order
    """
    if not scale:
        raise ValueError("Grade scale cannot be empty")
    for upper, lower in zip(scale, scale[1:]):
        if lower.threshold >= upper.threshold:
            raise ValueError(
                f"Grade scale thresholds must descend: {upper.grade}={upper.threshold} "
                f"then {lower.grade}={lower.threshold}"
            )


def round_half_up(value: float, decimals: int = 2) -> float:
    """
    Round the exact binary value of ``value`` with ties going up.

    Matches how report cards print totals: 0.125 becomes 0.13, where
    round() would give 0.12. 2.675 is stored just below the tie and
    stays 2.67.

    Example:
        >>> round_half_up(0.125, 2)
        0.13
    """
    quantum = Decimal(1).scaleb(-decimals)
    return float(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))


def calculate_grade_and_point(
    percent: Any,
    scale: Sequence[GradeBand] = DEFAULT_GPA_SCALE,
) -> GpaInfo:
    """
    Grade a percentage.

    Args:
        percent: Percentage score; None, non-numeric, NaN or negative
            values give N/A
        scale: Bands in descending threshold order

    Returns:
        GpaInfo for the first matching band, NG if none matches

    Example:
        >>> calculate_grade_and_point(90)
        GpaInfo(grade=<Grade.A: 'A'>, point=3.6)
        >>> calculate_grade_and_point(35).grade.value
        'D'
    """
    if percent is None or isinstance(percent, bool):
        return NOT_AVAILABLE
    try:
        value = float(percent)
    except (TypeError, ValueError):
        return NOT_AVAILABLE
    if math.isnan(value) or value < 0:
        return NOT_AVAILABLE

    for band in scale:
        if band.matches(value):
            return GpaInfo(band.grade, band.point)
    return NOT_GRADED

"""
Module: results

Purpose:
    Value types for exam result processing: the exam's subject
    definitions, a student's mark entries, and the computed per-subject
    and whole-exam outcomes.

Key Classes:
    - SubjectSpec: Full/pass marks for one subject of an exam
    - MarkEntry: One student's marks for one subject
    - Grade / GpaInfo: Letter grade and grade point
    - SubjectStatus / ResultStatus: Subject and exam outcomes
    - ProcessedSubjectResult: Computed outcome for one subject
    - ExamResultSummary: Whole-exam rollup
    - ExamResult: Processed subjects plus summary

Dependencies:
    - dataclasses (std)
    - enum (std)

Used By:
    - grading.scale
    - grading.aggregator
    - core.utils.serialization

Notes:
    ``to_dict()`` emits the camelCase keys the result screens and stores
    consume (``subjectName``, ``theoryFM``, ``overallResultStatus``, ...).
    Keys belonging to the other scoring mode are left out.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Tuple


class Grade(str, Enum):
    """Letter grades produced by the GPA scale."""
    A_PLUS = "A+"
    A = "A"
    B_PLUS = "B+"
    B = "B"
    C_PLUS = "C+"
    C = "C"
    D = "D"
    NG = "NG"     # Not graded (below the pass floor)
    NA = "N/A"    # No usable percentage
    ABS = "ABS"   # Absent

    def __str__(self) -> str:
        return self.value


class SubjectStatus(str, Enum):
    PASSED = "Passed"
    FAILED = "Failed"
    ABSENT = "Absent"
    NG = "NG"

    def __str__(self) -> str:
        return self.value


class ResultStatus(str, Enum):
    """Overall exam outcome. PROMOTED is accepted from stored data but never computed."""
    PASSED = "Passed"
    FAILED = "Failed"
    PROMOTED = "Promoted"
    AWAITED = "Awaited"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class SubjectSpec:
    """
    Subject definition within an exam.

    Attributes:
        name: Subject name, used to match mark entries
        theory_fm: Theory full marks
        theory_pm: Theory pass marks
        has_practical: Whether the subject has a practical component
        practical_fm: Practical full marks (None without a practical)
        practical_pm: Practical pass marks (None without a practical)
        date: Exam date as entered on the exam form (free text)

    Invariants:
        - theory_fm, theory_pm >= 0 and theory_pm <= theory_fm
        - has_practical implies practical_fm and practical_pm are set and >= 0
    """

    name: str
    theory_fm: float
    theory_pm: float
    has_practical: bool = False
    practical_fm: Optional[float] = None
    practical_pm: Optional[float] = None
    date: str = ""

    def __post_init__(self) -> None:
        """Validate marks on construction."""
        if not self.name:
            raise ValueError("Subject name cannot be empty")
        if self.theory_fm < 0 or self.theory_pm < 0:
            raise ValueError(
                f"Theory marks cannot be negative for {self.name!r}: "
                f"FM={self.theory_fm}, PM={self.theory_pm}"
            )
        if self.theory_pm > self.theory_fm:
            raise ValueError(
                f"Theory pass marks exceed full marks for {self.name!r}: "
                f"PM={self.theory_pm} > FM={self.theory_fm}"
            )
        if self.has_practical:
            if self.practical_fm is None or self.practical_pm is None:
                raise ValueError(f"Practical marks required for {self.name!r}")
            if self.practical_fm < 0 or self.practical_pm < 0:
                raise ValueError(
                    f"Practical marks cannot be negative for {self.name!r}: "
                    f"FM={self.practical_fm}, PM={self.practical_pm}"
                )

    @property
    def full_marks(self) -> float:
        """Theory plus practical full marks."""
        practical = self.practical_fm if self.has_practical and self.practical_fm else 0
        return self.theory_fm + practical

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "date": self.date,
            "theoryFM": self.theory_fm,
            "theoryPM": self.theory_pm,
            "hasPractical": self.has_practical,
            "practicalFM": self.practical_fm,
            "practicalPM": self.practical_pm,
        }


@dataclass(frozen=True, slots=True)
class MarkEntry:
    """
    Marks recorded for one student in one subject of one exam.

    ``None`` marks mean "not entered yet", which is different from zero.
    Marks are stored as given; the aggregator reads numeric strings as
    numbers and treats non-numeric or non-finite marks as not entered.
    """

    subject_name: str
    theory_marks_obtained: Optional[float] = None
    practical_marks_obtained: Optional[float] = None
    is_absent: bool = False
    exam_id: Optional[str] = None
    student_id: Optional[str] = None


@dataclass(frozen=True, slots=True)
class GpaInfo:
    """Letter grade and the grade point it carries."""

    grade: Grade
    point: float

    def to_dict(self) -> dict[str, Any]:
        return {"grade": self.grade.value, "point": self.point}


@dataclass(frozen=True, slots=True)
class ProcessedSubjectResult:
    """
    Computed outcome for one subject of one student's exam.

    GPA-mode fields (``theory_gpa`` ... ``subject_gpa_status``) are None in
    marks mode, and marks-mode fields (``subject_total_marks_obtained``,
    ``subject_marks_status``) are None in GPA mode. An absent student's
    marks are reported as None whatever the entry held.
    """

    subject_name: str
    theory_fm: float
    theory_pm: float
    practical_fm: Optional[float]
    practical_pm: Optional[float]
    has_practical: bool
    theory_marks_obtained: Optional[float]
    practical_marks_obtained: Optional[float]
    is_absent: bool
    subject_full_marks: float
    is_gpa: bool = False

    # GPA mode
    theory_percentage: Optional[float] = None
    practical_percentage: Optional[float] = None
    theory_gpa: Optional[GpaInfo] = None
    practical_gpa: Optional[GpaInfo] = None
    subject_average_gpa_point: Optional[float] = None
    subject_overall_letter_grade: Optional[Grade] = None
    subject_gpa_status: Optional[SubjectStatus] = None

    # Marks mode
    subject_total_marks_obtained: Optional[float] = None
    subject_marks_status: Optional[SubjectStatus] = None

    @property
    def status(self) -> Optional[SubjectStatus]:
        """Status for whichever scoring mode produced this result."""
        return self.subject_gpa_status if self.is_gpa else self.subject_marks_status

    @property
    def marks_unentered(self) -> bool:
        """Present, but no theory (and no practical, if any) marks recorded."""
        return (
            not self.is_absent
            and self.theory_marks_obtained is None
            and (not self.has_practical or self.practical_marks_obtained is None)
        )

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "subjectName": self.subject_name,
            "theoryFM": self.theory_fm,
            "theoryPM": self.theory_pm,
            "practicalFM": self.practical_fm,
            "practicalPM": self.practical_pm,
            "hasPractical": self.has_practical,
            "theoryMarksObtained": self.theory_marks_obtained,
            "practicalMarksObtained": self.practical_marks_obtained,
            "isAbsent": self.is_absent,
            "subjectFullMarks": self.subject_full_marks,
        }
        if self.is_gpa:
            if not self.is_absent:
                data["theoryPercentage"] = self.theory_percentage
                if self.has_practical:
                    data["practicalPercentage"] = self.practical_percentage
            if self.theory_gpa is not None:
                data["theoryGpa"] = self.theory_gpa.to_dict()
            if self.practical_gpa is not None:
                data["practicalGpa"] = self.practical_gpa.to_dict()
            data["subjectAverageGpaPoint"] = self.subject_average_gpa_point
            data["subjectOverallLetterGrade"] = (
                self.subject_overall_letter_grade.value
                if self.subject_overall_letter_grade is not None else None
            )
            data["subjectGpaStatus"] = (
                self.subject_gpa_status.value if self.subject_gpa_status is not None else None
            )
        else:
            data["subjectTotalMarksObtained"] = self.subject_total_marks_obtained
            data["subjectMarksStatus"] = (
                self.subject_marks_status.value if self.subject_marks_status is not None else None
            )
        return data


@dataclass(frozen=True, slots=True)
class ExamResultSummary:
    """
    Whole-exam rollup for one student.

    ``final_gpa`` is set in GPA mode; ``grand_total_marks``,
    ``total_full_marks`` and ``total_percentage`` in marks mode.
    """

    exam_id: str
    is_gpa: bool
    overall_result_status: ResultStatus
    overall_exam_passed: bool
    final_gpa: Optional[float] = None
    grand_total_marks: Optional[float] = None
    total_full_marks: Optional[float] = None
    total_percentage: Optional[float] = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "examId": self.exam_id,
            "isGpa": self.is_gpa,
            "overallResultStatus": self.overall_result_status.value,
        }
        if self.is_gpa:
            data["finalGpa"] = self.final_gpa
        else:
            data["grandTotalMarks"] = self.grand_total_marks
            data["totalFullMarks"] = self.total_full_marks
            data["totalPercentage"] = self.total_percentage
        return data


@dataclass(frozen=True, slots=True)
class ExamResult:
    """Return value of the aggregator."""

    processed_subjects: Tuple[ProcessedSubjectResult, ...]
    summary: ExamResultSummary

    def subject(self, name: str) -> Optional[ProcessedSubjectResult]:
        """Find a processed subject by name."""
        for result in self.processed_subjects:
            if result.subject_name == name:
                return result
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "processedSubjects": [s.to_dict() for s in self.processed_subjects],
            "summary": self.summary.to_dict(),
        }

"""
services/gpa_calculator.py

Grade engine: marks -> grade resolution, GPA / CGPA, earned credits,
academic standing and the required-GPA projection.

- Every function is pure over its inputs and returns fresh objects.
- Degenerate input (empty collections, zero credits, gaps in the scale)
  resolves to zero / None instead of raising.
"""

from __future__ import annotations

import logging
import math
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, List, Optional, Sequence, Tuple

from academic_records.config.settings import settings
from academic_records.schemas.grade_mappings import GradeMapping
from academic_records.schemas.grades import (
    UNGRADED_LETTER,
    AcademicStanding,
    CGPATrendPoint,
    RequiredGPA,
    SemesterGPA,
    SubjectGrade,
)
from academic_records.services.semester_utils import sort_semesters_chronologically

logger = logging.getLogger(__name__)

MIN_GRADE_POINT = 0.0
MAX_GRADE_POINT = settings.MAX_GRADE_POINT

# (min CGPA, label, severity), descending, first match wins
STANDING_THRESHOLDS: List[Tuple[float, str, str]] = [
    (3.70, "Excellent", "excellent"),
    (3.30, "Very Good", "good"),
    (2.70, "Good", "average"),
    (2.00, "Satisfactory", "warning"),
]
LOWEST_STANDING = AcademicStanding(label="Needs Improvement", severity="danger")


def _clamp(value: float, low: float = MIN_GRADE_POINT, high: float = MAX_GRADE_POINT) -> float:
    return max(low, min(high, value))


def round_half_up(value: float, places: int = 2) -> float:
    """Round with ties away from zero (3.625 -> 3.63), not to the even digit."""
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


# ==========================================================
# [Grade resolution]
# ==========================================================

def resolve_grade(marks: Optional[float], scale: Sequence[GradeMapping]) -> Optional[GradeMapping]:
    """
    Find the scale rule containing ``marks``.

    Rules are tried by ``min_marks`` descending, so when ranges overlap the
    rule with the highest lower bound wins. Returns None for missing marks
    or marks that fall into a gap of the scale.
    """
    if marks is None:
        return None

    for mapping in sorted(scale, key=lambda m: m.min_marks, reverse=True):
        if mapping.min_marks <= marks <= mapping.max_marks:
            return mapping

    logger.debug("No grade mapping contains marks=%s (scale size %d)", marks, len(scale))
    return None


def build_subject_grade(
    subject_code: str,
    subject_name: str,
    credits: int,
    marks: Optional[float],
    scale: Sequence[GradeMapping],
) -> SubjectGrade:
    mapping = resolve_grade(marks, scale)
    if mapping is None:
        return SubjectGrade(
            subject_code=subject_code,
            subject_name=subject_name,
            credits=credits,
            marks=marks,
        )
    return SubjectGrade(
        subject_code=subject_code,
        subject_name=subject_name,
        credits=credits,
        marks=marks,
        letter_grade=mapping.letter_grade,
        grade_point=mapping.grade_point,
    )


# ==========================================================
# [GPA / CGPA]
# ==========================================================

def calculate_gpa(subjects: Iterable[SubjectGrade]) -> float:
    """
    GPA = Σ(credits × grade_point) ÷ Σ(credits), rounded half up to 2 decimals.

    Failing subjects stay in the denominator. Empty input or zero total
    credits gives 0.
    """
    total_points = 0.0
    total_credits = 0
    for subject in subjects:
        total_points += subject.credits * subject.grade_point
        total_credits += subject.credits

    if total_credits == 0:
        return 0.0
    return round_half_up(total_points / total_credits)


def flatten_subjects(semesters: Iterable[SemesterGPA]) -> List[SubjectGrade]:
    return [subject for semester in semesters for subject in semester.subjects]


def calculate_cgpa(semesters: Iterable[SemesterGPA]) -> float:
    """CGPA over every individual subject of ``semesters``, clamped to [0, 4]."""
    return _clamp(calculate_gpa(flatten_subjects(semesters)))


def calculate_cgpa_up_to(semesters: Sequence[SemesterGPA], index: int) -> float:
    """CGPA of ``semesters[0..index]``; the list must already be chronological."""
    if index < 0:
        return 0.0
    return calculate_cgpa(semesters[: index + 1])


def cgpa_trend(semesters: Sequence[SemesterGPA]) -> List[CGPATrendPoint]:
    ordered = sort_semesters_chronologically(semesters, name_key="semester_name")
    return [
        CGPATrendPoint(
            semester_name=semester.semester_name,
            gpa=semester.gpa,
            cgpa=calculate_cgpa_up_to(ordered, idx),
        )
        for idx, semester in enumerate(ordered)
    ]


# ==========================================================
# [Credits]
# ==========================================================

def calculate_total_credits(subjects: Iterable[SubjectGrade]) -> int:
    return sum(subject.credits for subject in subjects)


def calculate_earned_credits(subjects: Iterable[SubjectGrade]) -> int:
    """Credits of subjects passed with grade point >= 1.0 (D or above)."""
    return sum(
        subject.credits
        for subject in subjects
        if subject.grade_point >= settings.PASSING_GRADE_POINT
    )


# ==========================================================
# [Standing / risk]
# ==========================================================

def classify(cgpa: float) -> AcademicStanding:
    for threshold, label, severity in STANDING_THRESHOLDS:
        if cgpa >= threshold:
            return AcademicStanding(label=label, severity=severity)
    return LOWEST_STANDING


def is_at_risk(cgpa: float) -> bool:
    return cgpa < settings.RISK_CGPA_THRESHOLD


# ==========================================================
# [Required GPA projection]
# ==========================================================

def required_gpa_unclamped(
    current_cgpa: float,
    current_credits: float,
    target_cgpa: float,
    future_credits: float,
) -> float:
    """
    Solve (current_cgpa × current_credits + x × future_credits)
          / (current_credits + future_credits) = target_cgpa  for x.

    With no future credits the answer is 0 if the target is already met,
    otherwise inf.
    """
    if future_credits <= 0:
        return 0.0 if current_cgpa >= target_cgpa else math.inf
    return (target_cgpa * (current_credits + future_credits) - current_cgpa * current_credits) / future_credits


def required_gpa(
    current_cgpa: float,
    current_credits: float,
    target_cgpa: float,
    future_credits: float,
) -> float:
    """
    Grade point average needed over ``future_credits`` to reach ``target_cgpa``,
    clamped to [0, 4]. A result of 4.0 may mean "unreachable"; use
    ``required_gpa_unclamped`` or ``project_required_gpa`` to tell.
    """
    return _clamp(required_gpa_unclamped(current_cgpa, current_credits, target_cgpa, future_credits))


def project_required_gpa(
    current_cgpa: float,
    current_credits: float,
    target_cgpa: float,
    future_credits: float,
) -> RequiredGPA:
    raw = required_gpa_unclamped(current_cgpa, current_credits, target_cgpa, future_credits)
    return RequiredGPA(
        required_gpa=_clamp(raw),
        unclamped_gpa=raw,
        reachable=raw <= MAX_GRADE_POINT,
    )

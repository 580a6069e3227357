from __future__ import annotations

from collections import Counter
from typing import Mapping, Optional, Sequence

from academic_records.config.settings import settings
from academic_records.schemas.analytics import (
    GradeDistributionEntry,
    MarksRangeEntry,
    SubjectAnalytics,
)
from academic_records.schemas.grade_mappings import GradeMapping
from academic_records.services.gpa_calculator import resolve_grade

# chart order of letter grades; anything else sorts after F
LETTER_ORDER = ["A+", "A", "A-", "B+", "B", "B-", "C+", "C", "C-", "D+", "D", "F"]
FALLBACK_LETTER = "F"

# (label, low inclusive, high exclusive)
MARKS_RANGES = [
    ("0-39", None, 40),
    ("40-49", 40, 50),
    ("50-59", 50, 60),
    ("60-69", 60, 70),
    ("70-79", 70, 80),
    ("80-89", 80, 90),
    ("90-100", 90, None),
]


def _letter_rank(letter: str) -> int:
    try:
        return LETTER_ORDER.index(letter)
    except ValueError:
        return len(LETTER_ORDER)


def grade_distribution(marks_list: Sequence[float], scale: Sequence[GradeMapping]) -> list[GradeDistributionEntry]:
    if not marks_list:
        return []

    counts: Counter = Counter()
    for marks in marks_list:
        mapping = resolve_grade(marks, scale)
        counts[mapping.letter_grade if mapping else FALLBACK_LETTER] += 1

    entries = [
        GradeDistributionEntry(grade=letter, count=count, percentage=round(count / len(marks_list) * 100, 1))
        for letter, count in counts.items()
    ]
    return sorted(entries, key=lambda e: _letter_rank(e.grade))


def marks_range_distribution(marks_list: Sequence[float]) -> list[MarksRangeEntry]:
    result = []
    for label, low, high in MARKS_RANGES:
        count = sum(
            1 for m in marks_list
            if (low is None or m >= low) and (high is None or m < high)
        )
        result.append(MarksRangeEntry(range=label, count=count))
    return result


def analyze_subject(
    enrollment_ids: Sequence[str],
    grades_by_enrollment: Mapping[str, Optional[float]],
    scale: Sequence[GradeMapping],
    pass_mark: Optional[float] = None,
) -> Optional[SubjectAnalytics]:
    """
    Class-level statistics for one subject offering.

    ``grades_by_enrollment`` maps enrollment ID -> marks; enrollments without
    an entry (or with None) count as ungraded. Returns None when nobody is
    graded yet.
    """
    if pass_mark is None:
        pass_mark = settings.PASS_MARK

    graded = [
        grades_by_enrollment[eid]
        for eid in enrollment_ids
        if grades_by_enrollment.get(eid) is not None
    ]
    if not graded:
        return None

    passed = sum(1 for m in graded if m >= pass_mark)
    grade_points = []
    for marks in graded:
        mapping = resolve_grade(marks, scale)
        grade_points.append(mapping.grade_point if mapping else 0.0)

    return SubjectAnalytics(
        total_students=len(enrollment_ids),
        graded_students=len(graded),
        passed=passed,
        failed=len(graded) - passed,
        pass_rate=passed / len(graded) * 100,
        average=sum(graded) / len(graded),
        avg_grade_point=sum(grade_points) / len(grade_points),
        highest=max(graded),
        lowest=min(graded),
        distribution=grade_distribution(graded, scale),
        range_distribution=marks_range_distribution(graded),
    )

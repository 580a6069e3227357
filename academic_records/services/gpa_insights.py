"""
services/gpa_insights.py

- Student-facing insights built on top of the grade engine
  (trend, strong/struggling subjects, target projection, credit progress).
- GPA simulator: "what if" GPA from hypothetical grade points.
"""

from __future__ import annotations

from typing import List, Mapping, Optional, Sequence

from academic_records.config.settings import settings
from academic_records.schemas.analytics import CreditProgress, GPAInsights, Insight
from academic_records.schemas.grades import SemesterGPA, SubjectGrade
from academic_records.services.gpa_calculator import (
    cgpa_trend,
    classify,
    flatten_subjects,
    is_at_risk,
    project_required_gpa,
    round_half_up,
)
from academic_records.services.semester_utils import sort_semesters_chronologically

STRUGGLING_GRADE_POINT = 2.0
STRONG_GRADE_POINT = 3.5
TREND_CHANGE_THRESHOLD = 0.2
MAX_FOCUS_SUBJECTS = 3
MIN_STRONG_SUBJECTS = 3

# ✅ simulator grade ladder (label, grade point)
GRADE_OPTIONS = [
    ("A+", 4.00),
    ("A", 3.75),
    ("A-", 3.50),
    ("B+", 3.25),
    ("B", 3.00),
    ("B-", 2.75),
    ("C+", 2.50),
    ("C", 2.25),
    ("D", 2.00),
    ("F", 0.00),
]


def grade_label_for_point(grade_point: float) -> str:
    for label, point in GRADE_OPTIONS:
        if point == grade_point:
            return label
    return "F"


def simulate_gpa(
    subjects_by_enrollment: Mapping[str, SubjectGrade],
    simulated_points: Mapping[str, float],
) -> float:
    """
    Credit-weighted GPA where each enrollment uses its simulated grade point,
    falling back to the actual one. Not rounded, the simulator shows live values.
    """
    total_points = 0.0
    total_credits = 0
    for enrollment_id, subject in subjects_by_enrollment.items():
        grade_point = simulated_points.get(enrollment_id, subject.grade_point)
        total_points += subject.credits * grade_point
        total_credits += subject.credits
    return total_points / total_credits if total_credits > 0 else 0.0


def _build_messages(
    at_risk: bool,
    gpa_change: float,
    struggling: List[SubjectGrade],
    strong: List[SubjectGrade],
) -> List[Insight]:
    insights: List[Insight] = []

    if at_risk:
        insights.append(Insight(
            type="warning",
            message=(
                f"Your CGPA is below {settings.RISK_CGPA_THRESHOLD:.1f}. Consider meeting with an "
                "academic advisor to discuss improvement strategies."
            ),
        ))

    if gpa_change > TREND_CHANGE_THRESHOLD:
        insights.append(Insight(
            type="success",
            message=f"Great improvement! Your GPA increased by {gpa_change:.2f} points this semester.",
        ))
    elif gpa_change < -TREND_CHANGE_THRESHOLD:
        insights.append(Insight(
            type="warning",
            message=f"Your GPA decreased by {abs(gpa_change):.2f} points. Review your study strategies.",
        ))

    if struggling:
        codes = ", ".join(s.subject_code for s in struggling[:MAX_FOCUS_SUBJECTS])
        insights.append(Insight(type="info", message=f"Focus on improving: {codes}"))

    if len(strong) >= MIN_STRONG_SUBJECTS:
        insights.append(Insight(
            type="success",
            message=f"Strong performance in {len(strong)} subjects with grade points above {STRONG_GRADE_POINT}!",
        ))

    return insights


def build_insights(
    semesters: Sequence[SemesterGPA],
    cgpa: float,
    total_credits: int,
    earned_credits: int,
    target_cgpa: Optional[float] = None,
    future_credits: Optional[int] = None,
    graduation_credits: Optional[int] = None,
) -> GPAInsights:
    target_cgpa = settings.TARGET_CGPA if target_cgpa is None else target_cgpa
    future_credits = settings.NEXT_TERM_CREDITS if future_credits is None else future_credits
    graduation_credits = settings.GRADUATION_CREDITS if graduation_credits is None else graduation_credits

    ordered = sort_semesters_chronologically(semesters, name_key="semester_name")
    at_risk = is_at_risk(cgpa)

    latest_gpa = ordered[-1].gpa if ordered else 0.0
    previous_gpa = ordered[-2].gpa if len(ordered) > 1 else latest_gpa
    gpa_change = round_half_up(latest_gpa - previous_gpa)

    subjects = flatten_subjects(ordered)
    # ungraded (0 point) subjects are not "struggling", they have no result yet
    struggling = [s for s in subjects if 0 < s.grade_point < STRUGGLING_GRADE_POINT]
    strong = [s for s in subjects if s.grade_point >= STRONG_GRADE_POINT]

    remaining = max(0, graduation_credits - earned_credits)
    percent = earned_credits / graduation_credits * 100 if graduation_credits > 0 else 0.0

    return GPAInsights(
        standing=classify(cgpa),
        at_risk=at_risk,
        trend=cgpa_trend(ordered),
        latest_gpa=latest_gpa,
        previous_gpa=previous_gpa,
        gpa_change=gpa_change,
        improving=gpa_change >= 0,
        struggling_subjects=struggling,
        strong_subjects=strong,
        target_cgpa=target_cgpa,
        required=project_required_gpa(cgpa, total_credits, target_cgpa, future_credits),
        credit_progress=CreditProgress(
            earned_credits=earned_credits,
            graduation_credits=graduation_credits,
            remaining_credits=remaining,
            percent=min(100.0, round(percent, 1)),
        ),
        insights=_build_messages(at_risk, gpa_change, struggling, strong),
    )

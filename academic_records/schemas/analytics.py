from __future__ import annotations

from typing import List, Literal

from pydantic import BaseModel, Field

from academic_records.schemas.grades import (
    AcademicStanding,
    CGPATrendPoint,
    RequiredGPA,
    SubjectGrade,
)


# ==========================================================
# [Subject analytics] (teacher dashboard)
# ==========================================================
class GradeDistributionEntry(BaseModel):
    grade: str                              # letter grade
    count: int                              # students with that grade
    percentage: float                       # share of graded students (0~100, 1 decimal)


class MarksRangeEntry(BaseModel):
    range: str                              # e.g. "40-49"
    count: int


class SubjectAnalytics(BaseModel):
    total_students: int                     # enrolled students
    graded_students: int                    # students with marks entered
    passed: int
    failed: int
    pass_rate: float                        # percent of graded students
    average: float                          # mean marks
    avg_grade_point: float
    highest: float
    lowest: float
    distribution: List[GradeDistributionEntry] = Field(default_factory=list)
    range_distribution: List[MarksRangeEntry] = Field(default_factory=list)


# ==========================================================
# [GPA insights] (student dashboard)
# ==========================================================
class Insight(BaseModel):
    type: Literal["success", "warning", "info"]
    message: str


class CreditProgress(BaseModel):
    earned_credits: int
    graduation_credits: int
    remaining_credits: int
    percent: float


class GPAInsights(BaseModel):
    standing: AcademicStanding
    at_risk: bool
    trend: List[CGPATrendPoint] = Field(default_factory=list)
    latest_gpa: float = 0.0
    previous_gpa: float = 0.0
    gpa_change: float = 0.0
    improving: bool = True
    struggling_subjects: List[SubjectGrade] = Field(default_factory=list)
    strong_subjects: List[SubjectGrade] = Field(default_factory=list)
    target_cgpa: float
    required: RequiredGPA
    credit_progress: CreditProgress
    insights: List[Insight] = Field(default_factory=list)

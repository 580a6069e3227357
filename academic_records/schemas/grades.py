"""
schemas/grades.py

- Transient view-models produced by the grade engine.
- Nothing here is persisted; every record is rebuilt from store rows on demand.
"""

from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

UNGRADED_LETTER = "-"


# =========================================================
# 1) Subject / semester / transcript
# =========================================================

class SubjectGrade(BaseModel):
    """A subject result after its marks were resolved against the grade scale."""
    subject_code: str
    subject_name: str
    credits: int = Field(..., ge=0, description="Credit hours (attempted credits)")
    marks: Optional[float] = Field(default=None, ge=0, le=100, description="Marks out of 100, None when not entered")
    letter_grade: str = UNGRADED_LETTER
    grade_point: float = Field(default=0.0, ge=0, description="Not capped at 4.0; CGPA clamps instead")

    model_config = ConfigDict(frozen=True)


class SemesterGPA(BaseModel):
    semester_id: str
    semester_name: str
    session_name: str = ""
    subjects: List[SubjectGrade] = Field(default_factory=list)
    pending_subjects: List[SubjectGrade] = Field(default_factory=list)   # enrolled, no marks yet; outside GPA
    gpa: float = 0.0
    total_credits: int = 0
    earned_credits: int = 0

    model_config = ConfigDict(frozen=True)


class Transcript(BaseModel):
    student_id: str
    student_name: str = ""
    semesters: List[SemesterGPA] = Field(default_factory=list)
    cgpa: float = 0.0
    total_credits: int = 0
    earned_credits: int = 0

    model_config = ConfigDict(frozen=True)


# =========================================================
# 2) Derived results
# =========================================================

Severity = Literal["excellent", "good", "average", "warning", "danger"]


class AcademicStanding(BaseModel):
    label: str
    severity: Severity

    model_config = ConfigDict(frozen=True)


class RequiredGPA(BaseModel):
    """
    Required-GPA projection
    - required_gpa: clamped to [0, 4]
    - unclamped_gpa: algebraic solution, may exceed 4.0 (or be inf)
    - reachable: False when the target cannot be met within the given credits
    """
    required_gpa: float
    unclamped_gpa: float
    reachable: bool

    model_config = ConfigDict(frozen=True)


class CGPATrendPoint(BaseModel):
    semester_name: str
    gpa: float
    cgpa: float

    model_config = ConfigDict(frozen=True)

"""
services/transcript_service.py

- Adapter between the records store and the grade engine.
- Store rows arrive as nested dicts shaped like the portal's joined select:
    {
      "id": <enrollment id>, "semester_id": ...,
      "subjects":  {"code", "name", "credits"},
      "semesters": {"id", "name", "academic_sessions": {"name"}},
      "grades":    {"marks", "grade_mappings": {"letter_grade", "grade_point"}}  # or [..] or None
    }
  One-to-one relations may come as an object, a one-element list or None;
  everything is normalized here so the engine only sees SubjectGrade records.
- TranscriptRepository reads the same shape out of the SQLAlchemy models.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence

from sqlalchemy.orm import Session, joinedload

from academic_records.errors import StudentNotFoundError
from academic_records.models.academic_sessions import AcademicSession
from academic_records.models.enrollments import Enrollment as EnrollmentModel
from academic_records.models.grade_mappings import GradeMapping as GradeMappingModel
from academic_records.models.grades import Grade as GradeModel
from academic_records.models.profiles import Profile as ProfileModel
from academic_records.models.semesters import Semester as SemesterModel
from academic_records.models.subjects import Subject as SubjectModel  # noqa: F401  (mapper for Enrollment.subject)
from academic_records.schemas.grade_mappings import GradeMapping
from academic_records.schemas.grades import UNGRADED_LETTER, SemesterGPA, SubjectGrade, Transcript
from academic_records.services.gpa_calculator import (
    build_subject_grade,
    calculate_cgpa,
    calculate_earned_credits,
    calculate_gpa,
    calculate_total_credits,
    flatten_subjects,
)
from academic_records.services.semester_utils import sort_semesters_chronologically

logger = logging.getLogger(__name__)

Row = Mapping[str, Any]


# ==========================================================
# [Row normalization]
# ==========================================================

def normalize_relation(value: Any) -> Optional[Any]:
    """One-to-one relation as object, list (first element wins) or None -> object or None."""
    if isinstance(value, (list, tuple)):
        return value[0] if value else None
    return value


def subject_grade_from_row(row: Row, scale: Sequence[GradeMapping]) -> SubjectGrade:
    """
    Build a SubjectGrade from one enrollment row.

    A grade mapping stored with the grade wins; otherwise the marks are
    resolved against ``scale``. No grade / no marks -> ungraded.
    """
    subject = normalize_relation(row.get("subjects")) or {}
    grade = normalize_relation(row.get("grades"))

    code = subject.get("code", "")
    name = subject.get("name", "")
    credits = int(subject.get("credits") or 0)

    if not grade:
        return SubjectGrade(subject_code=code, subject_name=name, credits=credits)

    marks = grade.get("marks")
    mapping = normalize_relation(grade.get("grade_mappings"))
    if mapping:
        return SubjectGrade(
            subject_code=code,
            subject_name=name,
            credits=credits,
            marks=marks,
            letter_grade=mapping.get("letter_grade") or UNGRADED_LETTER,
            grade_point=float(mapping.get("grade_point") or 0),
        )
    return build_subject_grade(code, name, credits, marks, scale)


def is_pending(subject: SubjectGrade) -> bool:
    """Enrolled but no marks entered yet (a gap in the scale still counts as graded)."""
    return subject.marks is None and subject.letter_grade == UNGRADED_LETTER


def build_semester_gpa(
    semester_id: str,
    semester_name: str,
    session_name: str,
    subjects: Sequence[SubjectGrade],
) -> SemesterGPA:
    pending = [s for s in subjects if is_pending(s)]
    subjects = [s for s in subjects if not is_pending(s)]
    return SemesterGPA(
        semester_id=semester_id,
        semester_name=semester_name,
        session_name=session_name,
        subjects=subjects,
        pending_subjects=pending,
        gpa=calculate_gpa(subjects),
        total_credits=calculate_total_credits(subjects),
        earned_credits=calculate_earned_credits(subjects),
    )


def build_semesters(rows: Sequence[Row], scale: Sequence[GradeMapping]) -> List[SemesterGPA]:
    """Group enrollment rows by semester, in chronological semester order."""
    semesters: Dict[str, Dict[str, Any]] = {}
    for row in rows:
        semester = normalize_relation(row.get("semesters")) or {}
        semester_id = str(row.get("semester_id") or semester.get("id") or "")
        entry = semesters.get(semester_id)
        if entry is None:
            session = normalize_relation(semester.get("academic_sessions")) or {}
            entry = {
                "id": semester_id,
                "name": semester.get("name", ""),
                "session_name": session.get("name", ""),
                "subjects": [],
            }
            semesters[semester_id] = entry
        entry["subjects"].append(subject_grade_from_row(row, scale))

    return [
        build_semester_gpa(s["id"], s["name"], s["session_name"], s["subjects"])
        for s in sort_semesters_chronologically(list(semesters.values()))
    ]


def build_transcript(
    student_id: str,
    student_name: str,
    rows: Sequence[Row],
    scale: Sequence[GradeMapping],
) -> Transcript:
    semesters = build_semesters(rows, scale)
    subjects = flatten_subjects(semesters)
    return Transcript(
        student_id=student_id,
        student_name=student_name,
        semesters=semesters,
        cgpa=calculate_cgpa(semesters),
        total_credits=calculate_total_credits(subjects),
        earned_credits=calculate_earned_credits(subjects),
    )


# ==========================================================
# [SQLAlchemy repository]
# ==========================================================

def _enrollment_to_row(enrollment: EnrollmentModel) -> Dict[str, Any]:
    subject = enrollment.subject
    semester = enrollment.semester
    session: Optional[AcademicSession] = semester.academic_session if semester else None
    grade = enrollment.grade

    grade_row = None
    if grade is not None:
        mapping = grade.grade_mapping
        grade_row = {
            "id": grade.id,
            "marks": grade.marks,
            "grade_mappings": (
                {"letter_grade": mapping.letter_grade, "grade_point": mapping.grade_point}
                if mapping is not None else None
            ),
        }

    return {
        "id": enrollment.id,
        "student_id": enrollment.student_id,
        "semester_id": enrollment.semester_id,
        "subjects": {"id": subject.id, "code": subject.code, "name": subject.name, "credits": subject.credits},
        "semesters": {
            "id": semester.id,
            "name": semester.name,
            "academic_sessions": {"id": session.id, "name": session.name} if session else None,
        },
        "grades": grade_row,
    }


class TranscriptRepository:
    """Read-only access to enrollment/grade rows for the grade engine."""

    def __init__(self, db: Session):
        self.db = db

    def _enrollment_query(self):
        return self.db.query(EnrollmentModel).options(
            joinedload(EnrollmentModel.subject),
            joinedload(EnrollmentModel.semester).joinedload(SemesterModel.academic_session),
            joinedload(EnrollmentModel.grade).joinedload(GradeModel.grade_mapping),
        )

    def grade_scale(self) -> List[GradeMapping]:
        records = (
            self.db.query(GradeMappingModel)
            .order_by(GradeMappingModel.min_marks.desc())
            .all()
        )
        return [GradeMapping.model_validate(r) for r in records]

    def student_rows(self, student_id: str) -> List[Dict[str, Any]]:
        enrollments = (
            self._enrollment_query()
            .filter(EnrollmentModel.student_id == student_id)
            .order_by(EnrollmentModel.id)
            .all()
        )
        return [_enrollment_to_row(e) for e in enrollments]

    def subject_rows(self, subject_id: str, semester_id: str) -> List[Dict[str, Any]]:
        enrollments = (
            self._enrollment_query()
            .filter(EnrollmentModel.subject_id == subject_id, EnrollmentModel.semester_id == semester_id)
            .order_by(EnrollmentModel.id)
            .all()
        )
        return [_enrollment_to_row(e) for e in enrollments]

    def subject_marks(self, subject_id: str, semester_id: str) -> Dict[str, Optional[float]]:
        """enrollment ID -> marks (None when not graded) for one subject offering."""
        return {
            row["id"]: (row["grades"] or {}).get("marks")
            for row in self.subject_rows(subject_id, semester_id)
        }

    def transcript(self, student_id: str) -> Transcript:
        student = self.db.query(ProfileModel).filter(ProfileModel.id == student_id).first()
        if student is None:
            logger.warning("Transcript requested for unknown student_id=%s", student_id)
            raise StudentNotFoundError(student_id)

        rows = self.student_rows(student_id)
        logger.info("Building transcript: student_id=%s enrollments=%d", student_id, len(rows))
        return build_transcript(student.id, student.full_name, rows, self.grade_scale())

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from academic_records.database.db import Base
from academic_records.schemas.grade_mappings import GradeMapping
from academic_records.schemas.grades import SemesterGPA, SubjectGrade
# importing the service registers every table mapping on Base
from academic_records.services import transcript_service  # noqa: F401


@pytest.fixture
def simple_scale():
    return [
        GradeMapping(letter_grade="A", grade_point=4.0, min_marks=90, max_marks=100),
        GradeMapping(letter_grade="B", grade_point=3.0, min_marks=80, max_marks=89),
        GradeMapping(letter_grade="F", grade_point=0.0, min_marks=0, max_marks=79),
    ]


@pytest.fixture
def five_band_scale():
    return [
        GradeMapping(id="gm-a", letter_grade="A", grade_point=4.0, min_marks=90, max_marks=100),
        GradeMapping(id="gm-b", letter_grade="B", grade_point=3.0, min_marks=80, max_marks=89.99),
        GradeMapping(id="gm-c", letter_grade="C", grade_point=2.0, min_marks=70, max_marks=79.99),
        GradeMapping(id="gm-d", letter_grade="D", grade_point=1.0, min_marks=60, max_marks=69.99),
        GradeMapping(id="gm-f", letter_grade="F", grade_point=0.0, min_marks=0, max_marks=59.99),
    ]


def make_subject(code, credits, grade_point, marks=None, letter="-"):
    return SubjectGrade(
        subject_code=code,
        subject_name=f"{code} name",
        credits=credits,
        marks=marks,
        letter_grade=letter,
        grade_point=grade_point,
    )


def make_semester(semester_id, name, subjects, gpa=0.0):
    return SemesterGPA(
        semester_id=semester_id,
        semester_name=name,
        subjects=subjects,
        gpa=gpa,
        total_credits=sum(s.credits for s in subjects),
    )


@pytest.fixture
def db_session():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()

from sqlalchemy import Column, Float, String
from academic_records.database.db import Base

class GradeMapping(Base):
    __tablename__ = "grade_mappings"  # marks -> letter grade scale

    id = Column(String(36), primary_key=True, index=True)       # mapping ID (PK)
    letter_grade = Column(String(5), nullable=False)            # letter grade (e.g. A+, B-, F)
    grade_point = Column(Float, nullable=False)                 # grade point on the 4.0 scale
    min_marks = Column(Float, nullable=False)                   # inclusive lower bound
    max_marks = Column(Float, nullable=False)                   # inclusive upper bound

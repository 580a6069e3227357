from sqlalchemy import Column, Float, ForeignKey, String
from sqlalchemy.orm import relationship
from academic_records.database.db import Base

class Grade(Base):
    __tablename__ = "grades"  # marks recorded for an enrollment

    id = Column(String(36), primary_key=True, index=True)                              # grade ID (PK)
    enrollment_id = Column(String(36), ForeignKey("enrollments.id"), nullable=False)   # graded enrollment
    marks = Column(Float)                                                              # marks out of 100
    grade_mapping_id = Column(String(36), ForeignKey("grade_mappings.id"))             # resolved grade (nullable)

    enrollment = relationship("Enrollment", back_populates="grade")
    grade_mapping = relationship("GradeMapping")

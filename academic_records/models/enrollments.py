from sqlalchemy import Column, ForeignKey, String
from sqlalchemy.orm import relationship
from academic_records.database.db import Base

class Enrollment(Base):
    __tablename__ = "enrollments"  # student x subject x semester

    id = Column(String(36), primary_key=True, index=True)                        # enrollment ID (PK)
    student_id = Column(String(36), ForeignKey("profiles.id"), nullable=False)   # enrolled student
    subject_id = Column(String(36), ForeignKey("subjects.id"), nullable=False)   # enrolled subject
    semester_id = Column(String(36), ForeignKey("semesters.id"), nullable=False) # semester of enrollment

    # ==========================================================
    # [Relations]
    # ==========================================================
    student = relationship("Profile")
    subject = relationship("Subject")
    semester = relationship("Semester")

    # ✅ one enrollment has at most one grade (1:1)
    grade = relationship("Grade", back_populates="enrollment", uselist=False)

from sqlalchemy import Boolean, Column, Date, ForeignKey, String
from sqlalchemy.orm import relationship
from academic_records.database.db import Base

class Semester(Base):
    __tablename__ = "semesters"  # semester table (e.g. Summer 2021, Winter 2021)

    id = Column(String(36), primary_key=True, index=True)       # semester ID (PK)
    name = Column(String(100), nullable=False)                  # semester name, carries year and term
    start_date = Column(Date)
    end_date = Column(Date)
    is_locked = Column(Boolean, default=False)                  # grades can no longer be edited

    # ==========================================================
    # [Relations]
    # ==========================================================

    # ✅ owning academic session (N:1)
    academic_session_id = Column(String(36), ForeignKey("academic_sessions.id"))
    academic_session = relationship("AcademicSession", back_populates="semesters")

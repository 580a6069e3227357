from sqlalchemy import Boolean, Column, Date, String
from sqlalchemy.orm import relationship
from academic_records.database.db import Base

class AcademicSession(Base):
    __tablename__ = "academic_sessions"  # academic year table (e.g. 2021-2022)

    id = Column(String(36), primary_key=True, index=True)       # session ID (PK)
    name = Column(String(100), nullable=False)                  # session name (e.g. "2021-2022")
    start_date = Column(Date)                                   # first day of the session
    end_date = Column(Date)                                     # last day of the session
    is_active = Column(Boolean, default=False)                  # currently running session

    semesters = relationship("Semester", back_populates="academic_session")

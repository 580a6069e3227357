from sqlalchemy import Column, Integer, String
from academic_records.database.db import Base

class Subject(Base):
    __tablename__ = "subjects"  # subject catalogue table

    id = Column(String(36), primary_key=True, index=True)       # subject ID (PK)
    code = Column(String(20), nullable=False)                   # subject code (e.g. CSE101)
    name = Column(String(200), nullable=False)                  # subject name
    credits = Column(Integer, nullable=False, default=3)        # credit hours

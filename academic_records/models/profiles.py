from sqlalchemy import Column, String
from academic_records.database.db import Base

class Profile(Base):
    __tablename__ = "profiles"  # user profile table (students, teachers, admins)

    id = Column(String(36), primary_key=True, index=True)       # profile ID (auth user id)
    email = Column(String(255), nullable=False)                 # login email
    full_name = Column(String(200), nullable=False)             # display name
    student_id = Column(String(50))                             # university student number (students only)

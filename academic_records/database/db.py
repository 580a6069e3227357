from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine               # SQLAlchemy engine factory
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from academic_records.config.settings import settings

# ✅ engine bound to the configured records store (connects lazily)
engine = create_engine(settings.DATABASE_URL)

# ✅ session factory for callers that do not bring their own session
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# ✅ declarative base for the table mappings
Base = declarative_base()


@contextmanager
def session_scope() -> Iterator[Session]:
    """Open a session on the configured store and always close it."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

"""Database models for student results."""
from datetime import datetime
from typing import Optional, Dict, Any
from sqlalchemy import create_engine, Column, Integer, String, Float, DateTime, Index
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool
import config

Base = declarative_base()


class StudentResult(Base):
    """Student result model; *_normalized columns hold the basic-profile form."""
    __tablename__ = "student_results"

    id = Column(Integer, primary_key=True, index=True)
    student_name = Column(String, nullable=False)
    student_name_normalized = Column(String, nullable=False, index=True)
    student_id = Column(String, index=True)
    subject = Column(String)
    subject_normalized = Column(String, index=True)
    grade = Column(Float)
    semester = Column(String)
    year = Column(String)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    __table_args__ = (
        Index('idx_student_name_subject_normalized', 'student_name_normalized', 'subject_normalized'),
    )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "student_name": self.student_name,
            "student_id": self.student_id,
            "subject": self.subject,
            "grade": self.grade,
            "semester": self.semester,
            "year": self.year,
        }


def make_engine(url: Optional[str] = None):
    """Create an engine; in-memory SQLite shares one connection across threads."""
    url = url or config.DATABASE_URL
    if url in ("sqlite://", "sqlite:///:memory:"):
        return create_engine(url, connect_args={"check_same_thread": False}, poolclass=StaticPool)
    return create_engine(
        url,
        connect_args={"check_same_thread": False} if url.startswith("sqlite") else {}
    )


# Database setup
engine = make_engine()
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db(bind=None):
    """Initialize database tables."""
    # Import all models to ensure they're registered
    from models import search_query
    Base.metadata.create_all(bind=bind or engine)

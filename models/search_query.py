"""Search query log model."""
from datetime import datetime
from sqlalchemy import Column, Integer, String, DateTime
from models.student import Base


class SearchQuery(Base):
    """Search term submitted by a user."""
    __tablename__ = "search_queries"

    id = Column(Integer, primary_key=True, index=True)
    term = Column(String, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, index=True)

    def to_dict(self):
        """Convert to dictionary."""
        return {
            "id": self.id,
            "term": self.term,
            "created_at": self.created_at.isoformat()
        }

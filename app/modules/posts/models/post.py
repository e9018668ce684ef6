from sqlalchemy import Column, String, DateTime, Text, Integer, JSON, ForeignKey
from sqlalchemy.sql import func

from app.db.session import Base

class Post(Base):
    __tablename__ = "posts"

    id = Column(String, primary_key=True, index=True)
    text = Column(Text, nullable=False)
    author_id = Column(String, ForeignKey("users.id"), nullable=False, index=True)
    # Captured at creation, not kept in sync with later renames
    author_name = Column(String, nullable=False)
    created_at = Column(DateTime(timezone=True), default=func.now(), index=True)

    # Embedded collections, most recent first. They are always replaced as a
    # whole, never mutated in place.
    likes = Column(JSON, nullable=False, default=list)
    comments = Column(JSON, nullable=False, default=list)

    # Document revision; saves are conditional on it
    version = Column(Integer, nullable=False, default=1)

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from movielist.db import Base

class ListEntry(Base):
    __tablename__ = "list_entries"
    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    movie_id = Column(Integer, nullable=False)  # external catalog id
    title = Column(String(500), nullable=False)
    poster_path = Column(String(500), nullable=True)
    list_type = Column(String(20), nullable=False)  # 'favorite' | 'watchlist'
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    __table_args__ = (
        UniqueConstraint("user_id", "movie_id", name="uq_list_entries_user_movie"),
    )

    user = relationship("User", back_populates="list_entries")

    def __repr__(self):
        return f"<ListEntry(user_id={self.user_id}, movie_id={self.movie_id}, list_type={self.list_type})>"

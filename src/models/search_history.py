"""SearchHistory model."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, func

from src.database import Base


class SearchHistory(Base):
    """The most recent recipe search of a user (one row per user at most)."""

    __tablename__ = "search_history"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    search_query = Column(String(255), nullable=False, default="")
    cuisine_filter = Column(String(100), nullable=True)
    diet_filter = Column(String(100), nullable=True)
    intolerance_filter = Column(String(255), nullable=True)
    results_limit = Column(Integer, nullable=False, default=5)
    searched_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

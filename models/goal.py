from sqlalchemy import Column, Date, DateTime, ForeignKey, Integer, String, Text, func

from models.base import Base


class Goal(Base):
    """
    A goal owned by one identity. progress is an integer percentage (0-100).
    """

    __tablename__ = "goals"

    id = Column(Integer, primary_key=True, autoincrement=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    goal_name = Column(String(255), nullable=False)
    status = Column(String(50), nullable=False, index=True)
    start_date = Column(Date, nullable=True)
    end_date = Column(Date, nullable=True)
    progress = Column(Integer, nullable=False, default=0, server_default="0")
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=True, server_default=func.now(), onupdate=func.now())


class GoalUpdate(Base):
    """
    Progress update posted against a goal. content may contain user-authored markup.
    """

    __tablename__ = "goal_updates"

    id = Column(Integer, primary_key=True, autoincrement=True)
    goal_id = Column(Integer, ForeignKey("goals.id", ondelete="CASCADE"), nullable=False, index=True)
    status_after = Column(String(50), nullable=True)
    progress_after = Column(Integer, nullable=True)
    content = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), index=True)

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, UniqueConstraint, func

from models.base import Base


class UserPlan(Base):
    """
    Subscription plan per identity, as written by the billing system.
    current_plan is free text ("Free", "Standard", ...); it may be NULL.
    """

    __tablename__ = "user_plans"
    __table_args__ = (UniqueConstraint("user_id", name="uq_user_plans_user_id"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    current_plan = Column(String(100), nullable=True)
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

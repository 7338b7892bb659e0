from sqlalchemy import Column, DateTime, Integer, String, func

from models.base import Base


class User(Base):
    """
    Identity record owned by the host platform.
    - Integer primary key shared with every other store (plan, membership, goals, personality)
    - Read-only from this service's point of view
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True, index=True)
    email = Column(String(255), nullable=True, index=True)
    first_name = Column(String(255), nullable=False, default="", server_default="")
    last_name = Column(String(255), nullable=False, default="", server_default="")
    display_name = Column(String(255), nullable=False, default="", server_default="")
    # Free-text job title shown under the member's role
    user_title = Column(String(255), nullable=True)
    avatar_url = Column(String(1024), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

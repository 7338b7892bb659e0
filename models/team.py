from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, UniqueConstraint, func

from models.base import Base
from constants.roles import INDIVIDUAL


class Team(Base):
    """
    Team within an organization. Only the id and display name are consumed here.
    """

    __tablename__ = "teams"

    id = Column(Integer, primary_key=True, autoincrement=True, index=True)
    name = Column(String(255), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())


class TeamMembership(Base):
    """
    (identity, team, role) triple. role_type is free text; see constants.roles.
    """

    __tablename__ = "team_memberships"
    __table_args__ = (UniqueConstraint("team_id", "user_id", name="uq_team_memberships_team_id_user_id"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    team_id = Column(Integer, ForeignKey("teams.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    role_type = Column(String(100), nullable=False, default=INDIVIDUAL, server_default=INDIVIDUAL)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())


from sqlalchemy import Column, ForeignKey, Integer, String

from models.base import Base


class PersonalitySummary(Base):
    """
    One row per personality dimension per identity.
    Each row names the dimension and its high/low poles with their intensities.
    """

    __tablename__ = "personality_summaries"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    trait = Column(String(100), nullable=False, default="", server_default="")
    high_trait_type = Column(String(100), nullable=True)
    high_trait_type_value = Column(Integer, nullable=True)
    low_trait_type = Column(String(100), nullable=True)
    low_trait_type_value = Column(Integer, nullable=True)
    user_primary_trait = Column(String(255), nullable=True)

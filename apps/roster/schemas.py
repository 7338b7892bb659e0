from __future__ import annotations

from datetime import date, datetime
from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel, Field as PydanticField

from constants.roles import TEAM_LEAD


class MemberRole(str, Enum):
    LEAD = "lead"
    INDIVIDUAL = "individual"

    @classmethod
    def from_label(cls, label: Optional[str], lead_label: str = TEAM_LEAD) -> "MemberRole":
        """
        Map a stored role label onto the closed role set.
        Unknown or empty labels fail closed to INDIVIDUAL.
        """
        if label is not None and label.strip() == lead_label:
            return cls.LEAD
        return cls.INDIVIDUAL


class RosterOutcome(str, Enum):
    UNAUTHENTICATED = "unauthenticated"
    NOT_ENTITLED = "not_entitled"
    NO_MEMBERSHIP = "no_membership"
    TEAM_UNAVAILABLE = "team_unavailable"
    EMPTY_ROSTER = "empty_roster"
    RENDERED = "rendered"


class GoalUpdatesStatus(str, Enum):
    OK = "ok"
    INVALID_INPUT = "invalid_input"
    SECURITY_FAILURE = "security_failure"


# -------------------------------
# Store records
# -------------------------------

class PlanRecord(BaseModel):
    identity_id: int
    current_plan: Optional[str] = None


class Identity(BaseModel):
    id: int
    first_name: str = ""
    last_name: str = ""
    display_name: str = ""
    email: Optional[str] = None
    title: Optional[str] = None
    avatar_url: Optional[str] = None

    class Config:
        from_attributes = True


class Team(BaseModel):
    id: int
    name: str

    class Config:
        from_attributes = True


class MembershipRecord(BaseModel):
    identity_id: int
    team_id: int
    role_label: str = ""
    role: MemberRole = MemberRole.INDIVIDUAL


class Goal(BaseModel):
    id: int
    name: str
    status: str
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    progress: int = 0
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class GoalUpdate(BaseModel):
    id: int
    goal_id: int
    created_at: Optional[datetime] = None
    status_after: Optional[str] = None
    progress_after: Optional[int] = None
    content: Optional[str] = None

    class Config:
        from_attributes = True


class TraitRecord(BaseModel):
    trait: str = ""
    high_trait_type: Optional[str] = None
    high_trait_value: Optional[int] = None
    low_trait_type: Optional[str] = None
    low_trait_value: Optional[int] = None
    primary_trait: Optional[str] = None


# -------------------------------
# Render model
# -------------------------------

class TraitPole(BaseModel):
    label: str
    value: Optional[int] = None
    faded: bool = False


class TraitRow(BaseModel):
    trait: str
    high: Optional[TraitPole] = None
    low: Optional[TraitPole] = None


class EnrichedMember(BaseModel):
    """
    A roster entry joined with identity, goals and personality for one render.
    """
    identity: Identity
    membership: MembershipRecord
    is_lead: bool = False
    goals: List[Goal] = PydanticField(default_factory=list)
    traits: List[TraitRecord] = PydanticField(default_factory=list)
    trait_rows: List[TraitRow] = PydanticField(default_factory=list)
    show_personality: bool = False
    avatar_url: str = ""

    @property
    def identity_id(self) -> int:
        return self.identity.id

    @property
    def last_name(self) -> str:
        return self.identity.last_name or ""

    @property
    def full_name(self) -> str:
        name = f"{self.identity.first_name or ''} {self.identity.last_name or ''}".strip()
        return name or self.identity.display_name

    @property
    def role_display(self) -> str:
        return (self.membership.role_label or "").replace("_", " ")

    @property
    def primary_traits(self) -> List[str]:
        return [t.primary_trait for t in self.traits if t.primary_trait]


class RosterView(BaseModel):
    outcome: RosterOutcome
    html: str
    team: Optional[Team] = None
    members: List[EnrichedMember] = PydanticField(default_factory=list)


class GoalUpdatesResult(BaseModel):
    status: GoalUpdatesStatus
    message: str
    html: Optional[str] = None
    updates: List[GoalUpdate] = PydanticField(default_factory=list)

    @property
    def success(self) -> bool:
        return self.status == GoalUpdatesStatus.OK


# -------------------------------
# HTTP payloads
# -------------------------------

class GoalUpdatesRequest(BaseModel):
    # Any scalar is accepted; the service turns bad ids into an invalid-input result
    goal_id: Any = None
    nonce: Optional[str] = None


class GoalUpdatesData(BaseModel):
    html: str


class GoalUpdatesResponse(BaseModel):
    success: bool
    message: str
    data: Optional[GoalUpdatesData] = None


class EntitlementDiagnostics(BaseModel):
    identity_id: int
    record_found: bool
    current_plan: Optional[str] = None
    normalized_plan: Optional[str] = None
    is_free_plan: bool
    entitled: bool

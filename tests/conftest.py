"""Shared fixtures: in-memory stores behind the roster read interfaces"""

import uuid
from collections import defaultdict
from datetime import date, datetime, timedelta, timezone
from typing import Dict, List, Optional

import pytest
from jose import jwt

from apps.roster.goal_updates import GoalUpdatesService
from apps.roster.interface import GoalStore, IdentityStore, MembershipStore, PersonalityStore, PlanStore
from apps.roster.schemas import (
    Goal,
    GoalUpdate,
    Identity,
    MemberRole,
    MembershipRecord,
    PlanRecord,
    Team,
    TraitRecord,
)
from apps.roster.service import RosterService
from constants.roles import INDIVIDUAL, TEAM_LEAD
from settings.config import get_settings


class InMemoryPlanStore(PlanStore):
    def __init__(self):
        self.plans: Dict[int, Optional[str]] = {}
        self.calls = 0

    async def get_plan(self, identity_id: int) -> Optional[PlanRecord]:
        self.calls += 1
        if identity_id not in self.plans:
            return None
        return PlanRecord(identity_id=identity_id, current_plan=self.plans[identity_id])


class InMemoryMembershipStore(MembershipStore):
    def __init__(self):
        self.teams: Dict[int, Team] = {}
        self.memberships: List[MembershipRecord] = []
        self.lead_calls = 0

    async def get_teams_for_identity(self, identity_id: int) -> List[Team]:
        return [self.teams[m.team_id] for m in self.memberships if m.identity_id == identity_id and m.team_id in self.teams]

    async def get_roster_for_team(self, team_id: int) -> List[MembershipRecord]:
        return [m for m in self.memberships if m.team_id == team_id]

    async def is_team_lead(self, identity_id: int, team_id: int) -> bool:
        self.lead_calls += 1
        for m in self.memberships:
            if m.identity_id == identity_id and m.team_id == team_id:
                return m.role == MemberRole.LEAD
        return False


class InMemoryIdentityStore(IdentityStore):
    def __init__(self):
        self.identities: Dict[int, Identity] = {}

    async def get_identity(self, identity_id: int) -> Optional[Identity]:
        return self.identities.get(identity_id)


class InMemoryGoalStore(GoalStore):
    def __init__(self):
        self.goals: Dict[int, List[Goal]] = defaultdict(list)
        self.updates: Dict[int, List[GoalUpdate]] = defaultdict(list)
        self.update_calls = 0

    async def get_active_goals(self, identity_id: int) -> List[Goal]:
        # Every goal, closed ones included; status filtering happens in the enricher
        return list(self.goals.get(identity_id, []))

    async def get_goal_updates(self, goal_id: int) -> List[GoalUpdate]:
        self.update_calls += 1
        return list(self.updates.get(goal_id, []))


class InMemoryPersonalityStore(PersonalityStore):
    def __init__(self):
        self.traits: Dict[int, List[TraitRecord]] = defaultdict(list)

    async def get_personality_traits(self, identity_id: int) -> List[TraitRecord]:
        return list(self.traits.get(identity_id, []))


class RosterWorld:
    """
    A tiny organization to render rosters against.
    """

    def __init__(self):
        self.plans = InMemoryPlanStore()
        self.memberships = InMemoryMembershipStore()
        self.identities = InMemoryIdentityStore()
        self.goals = InMemoryGoalStore()
        self.personality = InMemoryPersonalityStore()
        self._next_id = 1

    def add_team(self, team_id: int, name: str) -> Team:
        team = Team(id=team_id, name=name)
        self.memberships.teams[team_id] = team
        return team

    def add_identity(
        self,
        first_name: str = "",
        last_name: str = "",
        plan: Optional[str] = "Standard",
        title: Optional[str] = None,
        display_name: Optional[str] = None,
        identity_id: Optional[int] = None,
    ) -> int:
        if identity_id is None:
            identity_id = self._next_id
        self._next_id = max(self._next_id, identity_id) + 1
        self.identities.identities[identity_id] = Identity(
            id=identity_id,
            first_name=first_name,
            last_name=last_name,
            display_name=display_name if display_name is not None else f"{first_name}{last_name}".lower(),
            email=f"user{identity_id}@example.com",
            title=title,
        )
        if plan is not None:
            self.plans.plans[identity_id] = plan
        return identity_id

    def assign(self, identity_id: int, team_id: int, role_label: str = INDIVIDUAL) -> None:
        self.memberships.memberships.append(
            MembershipRecord(
                identity_id=identity_id,
                team_id=team_id,
                role_label=role_label,
                role=MemberRole.from_label(role_label, TEAM_LEAD),
            )
        )

    def add_goal(self, identity_id: int, goal_id: int, name: str, status: str = "In Progress", end: Optional[date] = None, progress: int = 0) -> Goal:
        goal = Goal(
            id=goal_id,
            name=name,
            status=status,
            start_date=date(2025, 1, 1),
            end_date=end,
            progress=progress,
            updated_at=datetime(2025, 3, 5, 15, 7),
        )
        self.goals.goals[identity_id].append(goal)
        return goal

    def add_update(self, goal_id: int, update_id: int, created_at: datetime, content: Optional[str] = None, status_after: Optional[str] = "In Progress", progress_after: Optional[int] = 50) -> None:
        self.goals.updates[goal_id].append(
            GoalUpdate(
                id=update_id,
                goal_id=goal_id,
                created_at=created_at,
                status_after=status_after,
                progress_after=progress_after,
                content=content,
            )
        )

    def add_trait(self, identity_id: int, trait: str, high: Optional[str] = None, high_value: Optional[int] = None, low: Optional[str] = None, low_value: Optional[int] = None, primary: Optional[str] = None) -> None:
        self.personality.traits[identity_id].append(
            TraitRecord(
                trait=trait,
                high_trait_type=high,
                high_trait_value=high_value,
                low_trait_type=low,
                low_trait_value=low_value,
                primary_trait=primary,
            )
        )

    def roster_service(self) -> RosterService:
        return RosterService(
            plans=self.plans,
            memberships=self.memberships,
            identities=self.identities,
            goals=self.goals,
            personality=self.personality,
        )

    def goal_updates_service(self) -> GoalUpdatesService:
        return GoalUpdatesService(self.goals)


@pytest.fixture
def world() -> RosterWorld:
    return RosterWorld()


def issue_access_token(subject: str, token_type: str = "access", expires_delta: timedelta = timedelta(minutes=5)) -> str:
    """
    Mint a bearer token the way the host platform does: same secret, issuer and audience.
    """
    settings = get_settings()
    now = datetime.now(timezone.utc)
    payload = {
        "sub": subject,
        "jti": str(uuid.uuid4()),
        "type": token_type,
        "iat": int(now.timestamp()),
        "nbf": int(now.timestamp()),
        "exp": int((now + expires_delta).timestamp()),
        "iss": settings.JWT_ISSUER,
        "aud": settings.JWT_AUDIENCE,
    }
    return jwt.encode(payload, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


@pytest.fixture
def access_token():
    return issue_access_token

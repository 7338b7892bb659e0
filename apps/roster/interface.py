"""Read interfaces for the stores the roster aggregates

The roster never owns data. Every piece it shows comes from a store owned by
another part of the platform (billing, organizations, identities, goals,
personality assessments). Each store is reached only through the narrow read
methods below, so the pipeline can run against the SQL implementations in
`apps.roster.stores` or against in-memory fakes.

Contract shared by every method:
- Never raise for "not found"; return None or an empty list instead
- Never mutate anything
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from apps.roster.schemas import Goal, GoalUpdate, Identity, MembershipRecord, PlanRecord, Team, TraitRecord


class PlanStore(ABC):
    """Subscription plan per identity."""

    @abstractmethod
    async def get_plan(self, identity_id: int) -> Optional[PlanRecord]:
        """Return the identity's plan record, or None when billing has no row for it."""


class MembershipStore(ABC):
    """Organization team membership."""

    @abstractmethod
    async def get_teams_for_identity(self, identity_id: int) -> List[Team]:
        """Teams the identity belongs to, in the store's natural order.

        Empty when the identity has no membership or the organization data
        is unavailable.
        """

    @abstractmethod
    async def get_roster_for_team(self, team_id: int) -> List[MembershipRecord]:
        """Membership records of a team. Empty for unknown or empty teams."""

    @abstractmethod
    async def is_team_lead(self, identity_id: int, team_id: int) -> bool:
        """True if the identity holds the lead role in the given team."""


class IdentityStore(ABC):
    @abstractmethod
    async def get_identity(self, identity_id: int) -> Optional[Identity]:
        """Profile fields for an identity, or None if it cannot be resolved."""


class GoalStore(ABC):
    @abstractmethod
    async def get_active_goals(self, identity_id: int) -> List[Goal]:
        """Goals owned by the identity that are not in a closed state."""

    @abstractmethod
    async def get_goal_updates(self, goal_id: int) -> List[GoalUpdate]:
        """Update history of one goal."""


class PersonalityStore(ABC):
    @abstractmethod
    async def get_personality_traits(self, identity_id: int) -> List[TraitRecord]:
        """One record per personality dimension for the identity."""

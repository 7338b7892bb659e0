from typing import List, Optional

from sqlalchemy import and_, select
from sqlalchemy.ext.asyncio import AsyncSession

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
from constants.statuses import INACTIVE_GOAL_STATUSES
from models.goal import Goal as GoalRow, GoalUpdate as GoalUpdateRow
from models.personality import PersonalitySummary
from models.plan import UserPlan
from models.team import Team as TeamRow, TeamMembership
from models.user import User
from settings.config import get_settings


class SQLPlanStore(PlanStore):
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_plan(self, identity_id: int) -> Optional[PlanRecord]:
        res = await self.db.execute(select(UserPlan).where(UserPlan.user_id == identity_id))
        row = res.scalar_one_or_none()
        if not row:
            return None
        return PlanRecord(identity_id=row.user_id, current_plan=row.current_plan)


class SQLMembershipStore(MembershipStore):
    def __init__(self, db: AsyncSession, lead_label: Optional[str] = None):
        self.db = db
        self.lead_label = lead_label or get_settings().TEAM_LEAD_ROLE

    async def get_teams_for_identity(self, identity_id: int) -> List[Team]:
        # Oldest membership first so "the first team" is stable between requests
        stmt = (
            select(TeamRow)
            .join(TeamMembership, TeamMembership.team_id == TeamRow.id)
            .where(TeamMembership.user_id == identity_id)
            .order_by(TeamMembership.created_at.asc(), TeamMembership.id.asc())
        )
        res = await self.db.execute(stmt)
        return [Team(id=t.id, name=t.name) for t in res.scalars().unique().all()]

    async def get_roster_for_team(self, team_id: int) -> List[MembershipRecord]:
        stmt = select(TeamMembership).where(TeamMembership.team_id == team_id).order_by(TeamMembership.id.asc())
        res = await self.db.execute(stmt)
        return [
            MembershipRecord(
                identity_id=m.user_id,
                team_id=m.team_id,
                role_label=m.role_type or "",
                role=MemberRole.from_label(m.role_type, self.lead_label),
            )
            for m in res.scalars().unique().all()
        ]

    async def is_team_lead(self, identity_id: int, team_id: int) -> bool:
        stmt = select(TeamMembership.role_type).where(
            and_(TeamMembership.user_id == identity_id, TeamMembership.team_id == team_id)
        )
        res = await self.db.execute(stmt)
        role_type = res.scalar_one_or_none()
        return MemberRole.from_label(role_type, self.lead_label) == MemberRole.LEAD


class SQLIdentityStore(IdentityStore):
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_identity(self, identity_id: int) -> Optional[Identity]:
        user: Optional[User] = await self.db.get(User, identity_id)
        if not user:
            return None
        return Identity(
            id=user.id,
            first_name=user.first_name or "",
            last_name=user.last_name or "",
            display_name=user.display_name or "",
            email=user.email,
            title=user.user_title,
            avatar_url=user.avatar_url,
        )


class SQLGoalStore(GoalStore):
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_active_goals(self, identity_id: int) -> List[Goal]:
        stmt = (
            select(GoalRow)
            .where(and_(GoalRow.user_id == identity_id, GoalRow.status.not_in(list(INACTIVE_GOAL_STATUSES))))
            .order_by(GoalRow.end_date.asc(), GoalRow.id.asc())
        )
        res = await self.db.execute(stmt)
        return [
            Goal(
                id=g.id,
                name=g.goal_name,
                status=g.status,
                start_date=g.start_date,
                end_date=g.end_date,
                progress=g.progress or 0,
                updated_at=g.updated_at,
            )
            for g in res.scalars().all()
        ]

    async def get_goal_updates(self, goal_id: int) -> List[GoalUpdate]:
        stmt = (
            select(GoalUpdateRow)
            .where(GoalUpdateRow.goal_id == goal_id)
            .order_by(GoalUpdateRow.created_at.desc(), GoalUpdateRow.id.desc())
        )
        res = await self.db.execute(stmt)
        return [GoalUpdate.model_validate(u) for u in res.scalars().all()]


class SQLPersonalityStore(PersonalityStore):
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_personality_traits(self, identity_id: int) -> List[TraitRecord]:
        stmt = (
            select(PersonalitySummary)
            .where(PersonalitySummary.user_id == identity_id)
            .order_by(PersonalitySummary.trait.asc(), PersonalitySummary.id.asc())
        )
        res = await self.db.execute(stmt)
        return [
            TraitRecord(
                trait=p.trait or "",
                high_trait_type=p.high_trait_type,
                high_trait_value=p.high_trait_type_value,
                low_trait_type=p.low_trait_type,
                low_trait_value=p.low_trait_type_value,
                primary_trait=p.user_primary_trait,
            )
            for p in res.scalars().all()
        ]

import logging
from datetime import date
from typing import Iterable, List, Optional

from apps.roster.interface import GoalStore, IdentityStore, PersonalityStore
from apps.roster.membership import MembershipResolver
from apps.roster.schemas import EnrichedMember, Goal, Identity, MembershipRecord, TraitPole, TraitRecord, TraitRow
from constants.statuses import INACTIVE_GOAL_STATUSES
from settings.config import get_settings

logger = logging.getLogger(__name__)


def is_active_goal(goal: Goal) -> bool:
    # Exact, case-sensitive match against the stored status
    return goal.status not in INACTIVE_GOAL_STATUSES


def should_display_personality(traits: Iterable[TraitRecord]) -> bool:
    """
    True when at least one record names a dimension and at least one of its poles.
    """
    for record in traits:
        if record.trait and (record.high_trait_type or record.low_trait_type):
            return True
    return False


def is_faded(value: Optional[int], threshold: int) -> bool:
    # Missing or zero intensities are not shown at all, so they are never faded
    return bool(value) and int(value) < threshold


def build_trait_rows(traits: Iterable[TraitRecord], threshold: int) -> List[TraitRow]:
    rows: List[TraitRow] = []
    for record in traits:
        high = None
        if record.high_trait_type:
            high = TraitPole(
                label=record.high_trait_type,
                value=record.high_trait_value or None,
                faded=is_faded(record.high_trait_value, threshold),
            )
        low = None
        if record.low_trait_type:
            low = TraitPole(
                label=record.low_trait_type,
                value=record.low_trait_value or None,
                faded=is_faded(record.low_trait_value, threshold),
            )
        rows.append(TraitRow(trait=record.trait, high=high, low=low))
    return rows


def sort_goals_by_deadline(goals: Iterable[Goal]) -> List[Goal]:
    # Soonest end date first; goals without an end date go last
    return sorted(goals, key=lambda g: (g.end_date is None, g.end_date or date.min))


def avatar_url_for(identity: Identity, size: int, default_url: str) -> str:
    if identity.avatar_url:
        return identity.avatar_url
    return f"{default_url}?w={size}&h={size}&fit=crop"


class MemberEnricher:
    """
    Joins one membership record with identity, goals and personality data.
    """

    def __init__(
        self,
        identities: IdentityStore,
        goals: GoalStore,
        personality: PersonalityStore,
        resolver: MembershipResolver,
    ):
        self.identities = identities
        self.goals = goals
        self.personality = personality
        self.resolver = resolver
        settings = get_settings()
        self.fade_threshold = settings.TRAIT_FADE_THRESHOLD
        self.avatar_size = settings.AVATAR_SIZE
        self.default_avatar_url = settings.DEFAULT_AVATAR_URL

    async def enrich(self, record: MembershipRecord) -> Optional[EnrichedMember]:
        identity = await self.identities.get_identity(record.identity_id)
        if identity is None:
            logger.info("Skipping roster row for unresolvable identity %s in team %s", record.identity_id, record.team_id)
            return None

        goals = [g for g in await self.goals.get_active_goals(identity.id) if is_active_goal(g)]
        traits = sorted(await self.personality.get_personality_traits(identity.id), key=lambda t: t.trait)

        return EnrichedMember(
            identity=identity,
            membership=record,
            is_lead=await self.resolver.is_team_lead(identity.id, record.team_id),
            goals=sort_goals_by_deadline(goals),
            traits=traits,
            trait_rows=build_trait_rows(traits, self.fade_threshold),
            show_personality=should_display_personality(traits),
            avatar_url=avatar_url_for(identity, self.avatar_size, self.default_avatar_url),
        )

    async def enrich_all(self, records: Iterable[MembershipRecord]) -> List[EnrichedMember]:
        """
        Enrich a roster in order, dropping rows whose identity is gone.
        Runs sequentially: all rows share one database session.
        """
        members: List[EnrichedMember] = []
        for record in records:
            member = await self.enrich(record)
            if member is not None:
                members.append(member)
        return members

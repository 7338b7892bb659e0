import logging
from typing import Dict, List, Optional, Tuple

from apps.roster.interface import MembershipStore
from apps.roster.schemas import MembershipRecord, Team

logger = logging.getLogger(__name__)


class MembershipResolver:
    """
    Maps an identity to its primary team and a team to its roster.

    One resolver serves one render: lead lookups are memoized per
    (identity, team) so card styling and ordering always agree.
    """

    def __init__(self, memberships: MembershipStore):
        self.memberships = memberships
        self._lead_cache: Dict[Tuple[int, int], bool] = {}
        self._teams_cache: Dict[int, List[Team]] = {}

    async def teams_of(self, identity_id: Optional[int]) -> List[Team]:
        if not identity_id:
            return []
        if identity_id not in self._teams_cache:
            self._teams_cache[identity_id] = list(await self.memberships.get_teams_for_identity(identity_id))
        return self._teams_cache[identity_id]

    async def primary_team(self, identity_id: Optional[int]) -> Optional[Team]:
        # First team wins; the store decides the order, there is no ranking here
        teams = await self.teams_of(identity_id)
        if not teams or not teams[0].id:
            return None
        if len(teams) > 1:
            logger.debug("Identity %s belongs to %d teams; using team %s", identity_id, len(teams), teams[0].id)
        return teams[0]

    async def roster_of(self, team: Optional[Team]) -> List[MembershipRecord]:
        if team is None or not team.id:
            return []
        return list(await self.memberships.get_roster_for_team(team.id))

    async def is_team_lead(self, identity_id: int, team_id: int) -> bool:
        key = (identity_id, team_id)
        if key not in self._lead_cache:
            self._lead_cache[key] = await self.memberships.is_team_lead(identity_id, team_id)
        return self._lead_cache[key]

    async def lead_map(self, identity_ids: List[int], team_id: int) -> Dict[int, bool]:
        """
        Lead status for a batch of identities in one team, through the memo.
        """
        return {identity_id: await self.is_team_lead(identity_id, team_id) for identity_id in identity_ids}

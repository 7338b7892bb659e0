import logging
from typing import Optional

from apps.roster.enricher import MemberEnricher
from apps.roster.entitlement import EntitlementGate
from apps.roster.interface import GoalStore, IdentityStore, MembershipStore, PersonalityStore, PlanStore
from apps.roster.membership import MembershipResolver
from apps.roster.ordering import order_roster
from apps.roster.render import render_outcome, render_roster
from apps.roster.schemas import RosterOutcome, RosterView, Team
from common.jwt import create_nonce_token

logger = logging.getLogger(__name__)


class RosterService:
    """
    Runs the roster pipeline for one request:
    entitlement gate -> primary team -> roster -> enrichment -> ordering -> render.

    Every early exit is a normal outcome with its own message, never an exception.
    """

    def __init__(
        self,
        plans: PlanStore,
        memberships: MembershipStore,
        identities: IdentityStore,
        goals: GoalStore,
        personality: PersonalityStore,
    ):
        self.gate = EntitlementGate(plans)
        self.memberships = memberships
        self.identities = identities
        self.goals = goals
        self.personality = personality

    async def render(self, acting_identity_id: Optional[int] = None, explicit_identity_id: Optional[int] = None) -> RosterView:
        # An explicit identity is honoured only for an authenticated caller
        if not acting_identity_id:
            return self._outcome(RosterOutcome.UNAUTHENTICATED)
        identity_id = explicit_identity_id or acting_identity_id

        if not await self.gate.is_entitled(identity_id):
            return self._outcome(RosterOutcome.NOT_ENTITLED)

        # Fresh resolver per render so lead lookups are memoized for this call only
        resolver = MembershipResolver(self.memberships)
        if not await resolver.teams_of(identity_id):
            logger.info("Identity %s has no team membership", identity_id)
            return self._outcome(RosterOutcome.NO_MEMBERSHIP)

        team = await resolver.primary_team(identity_id)
        if team is None:
            logger.warning("Identity %s has memberships but no primary team could be resolved", identity_id)
            return self._outcome(RosterOutcome.TEAM_UNAVAILABLE)

        records = await resolver.roster_of(team)
        enricher = MemberEnricher(self.identities, self.goals, self.personality, resolver)
        members = await enricher.enrich_all(records)
        if not members:
            return self._outcome(RosterOutcome.EMPTY_ROSTER, team)

        leads = await resolver.lead_map([m.identity_id for m in members], team.id)
        ordered = order_roster(members, team, lambda identity, _team_id: leads[identity])

        html = render_roster(team, ordered, nonce=create_nonce_token(acting_identity_id))
        logger.info("Rendered roster for team %s (%d members) for identity %s", team.id, len(ordered), identity_id)
        return RosterView(outcome=RosterOutcome.RENDERED, html=html, team=team, members=ordered)

    def _outcome(self, outcome: RosterOutcome, team: Optional[Team] = None) -> RosterView:
        logger.debug("Roster outcome: %s", outcome.value)
        return RosterView(outcome=outcome, html=render_outcome(outcome, team), team=team)

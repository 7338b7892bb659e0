import logging
from typing import Any, Optional

from apps.roster.interface import GoalStore
from apps.roster.render import render_goal_updates, render_no_updates
from apps.roster.schemas import GoalUpdatesResult, GoalUpdatesStatus
from common.jwt import verify_nonce_token
from constants import messages

logger = logging.getLogger(__name__)


def parse_goal_id(raw: Any) -> Optional[int]:
    """
    Accept a positive integer, or a string of digits. Everything else is None.
    """
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw if raw > 0 else None
    if isinstance(raw, str):
        value = raw.strip()
        if value.isdigit() and value.isascii():
            number = int(value)
            return number if number > 0 else None
    return None


class GoalUpdatesService:
    """
    On-demand goal update history for the roster's goal table.

    Each call is independent: authenticate, validate, look up, sanitize, respond.
    """

    def __init__(self, goals: GoalStore):
        self.goals = goals

    async def fetch(self, goal_id: Any, nonce: Optional[str]) -> GoalUpdatesResult:
        if not verify_nonce_token(nonce):
            logger.warning("Rejected goal updates request: bad or missing authenticity token")
            return GoalUpdatesResult(status=GoalUpdatesStatus.SECURITY_FAILURE, message=messages.SECURITY_CHECK_FAILED)

        parsed = parse_goal_id(goal_id)
        if parsed is None:
            return GoalUpdatesResult(status=GoalUpdatesStatus.INVALID_INPUT, message=messages.INVALID_GOAL_ID)

        updates = await self.goals.get_goal_updates(parsed)
        if not updates:
            return GoalUpdatesResult(status=GoalUpdatesStatus.OK, message=messages.NO_UPDATES, html=render_no_updates())

        # Newest first regardless of store order; undated updates sink to the bottom
        updates = sorted(updates, key=lambda u: (u.created_at is not None, u.created_at.timestamp() if u.created_at else 0), reverse=True)
        return GoalUpdatesResult(
            status=GoalUpdatesStatus.OK,
            message=messages.UPDATES_LOADED,
            html=render_goal_updates(updates),
            updates=updates,
        )

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import HTMLResponse, JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from apps.roster.entitlement import EntitlementGate
from apps.roster.exception import http_forbidden, http_not_found, http_unauthorized
from apps.roster.goal_updates import GoalUpdatesService
from apps.roster.schemas import EntitlementDiagnostics, GoalUpdatesRequest, GoalUpdatesResponse, GoalUpdatesStatus
from apps.roster.service import RosterService
from apps.roster.stores import (
    SQLGoalStore,
    SQLIdentityStore,
    SQLMembershipStore,
    SQLPersonalityStore,
    SQLPlanStore,
)
from common.responses import error_response, success_response
from models.base import get_db
from security.auth_backend import get_acting_identity_id
from settings.config import get_settings


router = APIRouter(prefix="/api/teams", tags=["Team Roster"])

OUTCOME_HEADER = "X-Roster-Outcome"


def get_roster_service(db: AsyncSession = Depends(get_db)) -> RosterService:
    """Wire the roster pipeline to the SQL stores for this request's session."""
    return RosterService(
        plans=SQLPlanStore(db),
        memberships=SQLMembershipStore(db),
        identities=SQLIdentityStore(db),
        goals=SQLGoalStore(db),
        personality=SQLPersonalityStore(db),
    )


def get_goal_updates_service(db: AsyncSession = Depends(get_db)) -> GoalUpdatesService:
    return GoalUpdatesService(SQLGoalStore(db))


def get_entitlement_gate(db: AsyncSession = Depends(get_db)) -> EntitlementGate:
    return EntitlementGate(SQLPlanStore(db))


@router.get("/roster", response_class=HTMLResponse)
async def team_roster(
    user_id: Optional[int] = Query(default=None, ge=1, description="Render the roster for this identity instead of the caller (requires a bearer token)"),
    acting_identity_id: Optional[int] = Depends(get_acting_identity_id),
    service: RosterService = Depends(get_roster_service),
):
    """
    Render the caller's team roster as an HTML fragment.
    Access-denial outcomes are normal 200 responses; the outcome is echoed in X-Roster-Outcome.
    Without a bearer token the outcome is always unauthenticated, user_id or not.
    """
    view = await service.render(acting_identity_id=acting_identity_id, explicit_identity_id=user_id)
    return HTMLResponse(content=view.html, headers={OUTCOME_HEADER: view.outcome.value})


@router.post("/goal-updates", response_model=GoalUpdatesResponse)
async def goal_updates(payload: GoalUpdatesRequest, service: GoalUpdatesService = Depends(get_goal_updates_service)):
    """
    Update history for one goal, newest first, as an HTML fragment.
    Requires the authenticity token embedded in the rendered roster.
    """
    result = await service.fetch(payload.goal_id, payload.nonce)
    if result.status == GoalUpdatesStatus.SECURITY_FAILURE:
        return JSONResponse(status_code=status.HTTP_403_FORBIDDEN, content=error_response(result.message))
    if result.status == GoalUpdatesStatus.INVALID_INPUT:
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=error_response(result.message))
    return success_response({"html": result.html}, message=result.message)


@router.get("/debug/entitlement", response_model=EntitlementDiagnostics)
async def entitlement_debug(
    user_id: Optional[int] = Query(default=None, ge=1),
    acting_identity_id: Optional[int] = Depends(get_acting_identity_id),
    gate: EntitlementGate = Depends(get_entitlement_gate),
):
    """
    Explain the subscription decision for the caller. Disabled unless ENABLE_ROSTER_DEBUG is set.
    """
    if not get_settings().ENABLE_ROSTER_DEBUG:
        raise http_not_found()
    if acting_identity_id is None:
        raise http_unauthorized()
    if user_id is not None and user_id != acting_identity_id:
        raise http_forbidden("Diagnostics are only available for your own identity")
    return await gate.diagnose(acting_identity_id)

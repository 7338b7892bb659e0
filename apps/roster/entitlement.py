import logging
from typing import Optional

from apps.roster.interface import PlanStore
from apps.roster.schemas import EntitlementDiagnostics

logger = logging.getLogger(__name__)

FREE_PLAN = "free"


def normalize_plan_label(plan_label: Optional[str]) -> Optional[str]:
    if plan_label is None:
        return None
    return plan_label.strip().lower()


def resolve_entitlement(plan_label: Optional[str], has_record: bool = True) -> bool:
    """
    Fail-open plan policy.

    Missing billing data never blocks a user: no record, or a record without a
    label, is entitled. The only blocking label is "free" (trimmed, case-folded).
    An empty label is not "free" and is therefore entitled.
    """
    if not has_record or plan_label is None:
        return True
    return normalize_plan_label(plan_label) != FREE_PLAN


class EntitlementGate:
    """
    Decides whether an identity may use team features at all.
    Performs at most one plan lookup per call.
    """

    def __init__(self, plans: PlanStore):
        self.plans = plans

    async def is_entitled(self, identity_id: Optional[int]) -> bool:
        if not identity_id:
            return False
        record = await self.plans.get_plan(identity_id)
        entitled = resolve_entitlement(record.current_plan if record else None, has_record=record is not None)
        if not entitled:
            logger.info("Identity %s is on the free plan; team features blocked", identity_id)
        return entitled

    async def diagnose(self, identity_id: int) -> EntitlementDiagnostics:
        """
        Explain the plan decision for one identity (support tooling).
        """
        record = await self.plans.get_plan(identity_id)
        current_plan = record.current_plan if record else None
        normalized = normalize_plan_label(current_plan)
        return EntitlementDiagnostics(
            identity_id=identity_id,
            record_found=record is not None,
            current_plan=current_plan,
            normalized_plan=normalized,
            is_free_plan=normalized == FREE_PLAN,
            entitled=resolve_entitlement(current_plan, has_record=record is not None),
        )

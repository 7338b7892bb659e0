import pytest

from apps.roster.entitlement import EntitlementGate, normalize_plan_label, resolve_entitlement


@pytest.mark.parametrize("label", ["free", "Free", "FREE", "  free  ", "\tFree\n"])
def test_free_plan_labels_are_blocked(label):
    assert resolve_entitlement(label) is False


@pytest.mark.parametrize("label", ["Standard", "Premium", "freemium", "free trial", "", "   "])
def test_other_plan_labels_are_entitled(label):
    assert resolve_entitlement(label) is True


def test_missing_record_fails_open():
    assert resolve_entitlement(None, has_record=False) is True
    assert resolve_entitlement(None) is True


def test_normalize_plan_label():
    assert normalize_plan_label("  Free ") == "free"
    assert normalize_plan_label(None) is None


@pytest.mark.asyncio
async def test_gate_blocks_missing_identity(world):
    gate = EntitlementGate(world.plans)
    assert await gate.is_entitled(None) is False
    assert await gate.is_entitled(0) is False
    assert world.plans.calls == 0


@pytest.mark.asyncio
async def test_gate_allows_identity_without_plan_record(world):
    uid = world.add_identity("No", "Plan", plan=None)
    gate = EntitlementGate(world.plans)
    assert await gate.is_entitled(uid) is True
    assert world.plans.calls == 1


@pytest.mark.asyncio
async def test_gate_uses_plan_record(world):
    free_uid = world.add_identity("Fay", "Free", plan="Free")
    paid_uid = world.add_identity("Stan", "Dard", plan="Standard")
    gate = EntitlementGate(world.plans)
    assert await gate.is_entitled(free_uid) is False
    assert await gate.is_entitled(paid_uid) is True


@pytest.mark.asyncio
async def test_diagnose_reports_decision(world):
    uid = world.add_identity("Fay", "Free", plan=" Free ")
    diag = await EntitlementGate(world.plans).diagnose(uid)
    assert diag.record_found is True
    assert diag.current_plan == " Free "
    assert diag.normalized_plan == "free"
    assert diag.is_free_plan is True
    assert diag.entitled is False

    missing = await EntitlementGate(world.plans).diagnose(999)
    assert missing.record_found is False
    assert missing.entitled is True

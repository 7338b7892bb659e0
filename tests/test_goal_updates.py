"""Tests for the on-demand goal update fetch"""

from datetime import datetime

import pytest

from apps.roster.goal_updates import parse_goal_id
from apps.roster.schemas import GoalUpdatesStatus
from common.jwt import create_nonce_token


@pytest.mark.parametrize("raw, expected", [(42, 42), ("42", 42), (" 7 ", 7), ("0042", 42)])
def test_parse_goal_id_accepts_positive_integers(raw, expected):
    assert parse_goal_id(raw) == expected


@pytest.mark.parametrize("raw", [None, -1, 0, "0", "-1", "abc", "4.2", 4.2, "", True, "١٢", [42]])
def test_parse_goal_id_rejects_everything_else(raw):
    assert parse_goal_id(raw) is None


class TestGoalUpdatesService:
    """Test cases for GoalUpdatesService.fetch"""

    @pytest.fixture
    def nonce(self):
        """A valid authenticity token, as embedded in a rendered roster"""
        return create_nonce_token(1)

    @pytest.fixture
    def service(self, world):
        return world.goal_updates_service()

    async def test_updates_are_returned_newest_first(self, world, service, nonce):
        """Scenario E: two updates on goal 42 come back newest first"""
        world.add_update(42, 1, datetime(2025, 3, 5, 9, 0), content="<p>First check-in</p>", progress_after=20)
        world.add_update(42, 2, datetime(2025, 3, 6, 15, 7), content="<p>Second check-in</p>", progress_after=40)

        result = await service.fetch(42, nonce)

        assert result.status == GoalUpdatesStatus.OK
        assert result.success is True
        assert [u.id for u in result.updates] == [2, 1]
        assert result.html.index("Second check-in") < result.html.index("First check-in")
        assert "Mar 6, 2025 3:07 PM" in result.html
        assert "Mar 5, 2025 9:00 AM" in result.html
        assert "40%" in result.html

    async def test_goal_id_given_as_string_is_accepted(self, world, service, nonce):
        world.add_update(42, 1, datetime(2025, 3, 5), content="ok")
        result = await service.fetch("42", nonce)
        assert result.success is True
        assert len(result.updates) == 1

    async def test_invalid_goal_id_is_rejected_before_lookup(self, world, service, nonce):
        result = await service.fetch(-1, nonce)
        assert result.status == GoalUpdatesStatus.INVALID_INPUT
        assert result.message == "Invalid goal ID"
        assert result.html is None
        assert world.goals.update_calls == 0

    @pytest.mark.parametrize("bad_nonce", [None, "", "not-a-token"])
    async def test_bad_nonce_is_a_security_failure(self, world, service, bad_nonce):
        world.add_update(42, 1, datetime(2025, 3, 5), content="secret")
        result = await service.fetch(42, bad_nonce)
        assert result.status == GoalUpdatesStatus.SECURITY_FAILURE
        assert result.message == "Security check failed"
        assert world.goals.update_calls == 0

    async def test_nonce_is_checked_before_goal_id(self, service):
        result = await service.fetch(-1, None)
        assert result.status == GoalUpdatesStatus.SECURITY_FAILURE

    async def test_expired_nonce_is_rejected(self, service):
        expired = create_nonce_token(1, expires_minutes=-5)
        result = await service.fetch(42, expired)
        assert result.status == GoalUpdatesStatus.SECURITY_FAILURE

    async def test_goal_without_updates_gets_placeholder(self, service, nonce):
        result = await service.fetch(99, nonce)
        assert result.status == GoalUpdatesStatus.OK
        assert result.message == "No updates found for this goal."
        assert 'class="roster-no-updates"' in result.html
        assert result.updates == []

    async def test_update_content_is_sanitized(self, world, service, nonce):
        world.add_update(
            42,
            1,
            datetime(2025, 3, 5),
            content='<p onclick="steal()">Hi <strong>team</strong></p><script>alert(1)</script><a href="javascript:x()">x</a>',
        )
        html = (await service.fetch(42, nonce)).html
        assert "<strong>team</strong>" in html
        assert "onclick" not in html
        assert "<script>" not in html
        assert "alert(1)" not in html
        assert "javascript:" not in html

    async def test_missing_fields_render_placeholders(self, world, service, nonce):
        world.add_update(42, 1, None, content=None, status_after=None, progress_after=None)
        result = await service.fetch(42, nonce)
        assert "No update content" in result.html
        assert result.html.count("N/A") == 3

    async def test_undated_updates_sort_last(self, world, service, nonce):
        world.add_update(42, 1, None, content="undated")
        world.add_update(42, 2, datetime(2025, 1, 1), content="dated")
        result = await service.fetch(42, nonce)
        assert [u.id for u in result.updates] == [2, 1]

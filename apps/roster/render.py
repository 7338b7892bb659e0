from datetime import date, datetime
from pathlib import Path
from typing import Iterable, List, Optional
from zoneinfo import ZoneInfo

from jinja2 import Environment, FileSystemLoader, select_autoescape

from apps.roster.sanitize import sanitize_update_content
from apps.roster.schemas import EnrichedMember, GoalUpdate, RosterOutcome, Team
from constants import messages
from settings.config import get_settings


_TEMPLATES_DIR = Path(__file__).parent / "templates"
_env = Environment(
    loader=FileSystemLoader(str(_TEMPLATES_DIR)),
    autoescape=select_autoescape(["html", "xml"]),
    trim_blocks=True,
    lstrip_blocks=True,
)

NOT_AVAILABLE = "N/A"


def format_date(value: Optional[date]) -> str:
    """Mon D, YYYY (e.g. "Mar 5, 2025")."""
    if not value:
        return NOT_AVAILABLE
    return f"{value:%b} {value.day}, {value.year}"


def format_datetime(value: Optional[datetime]) -> str:
    """
    Mon D, YYYY H:MM AM/PM (e.g. "Mar 5, 2025 3:07 PM") in DISPLAY_TIMEZONE.
    Naive values are taken as already being in that zone.
    """
    if not value:
        return NOT_AVAILABLE
    if value.tzinfo is not None:
        value = value.astimezone(ZoneInfo(get_settings().DISPLAY_TIMEZONE))
    hour = value.hour % 12 or 12
    return f"{value:%b} {value.day}, {value.year} {hour}:{value:%M} {value:%p}"


def format_progress(value: Optional[int]) -> str:
    if value is None:
        return NOT_AVAILABLE
    return f"{int(value)}%"


_env.filters["date"] = format_date
_env.filters["datetime"] = format_datetime
_env.filters["progress"] = format_progress


def display_mode(member_count: int) -> str:
    """
    Layout hint for the container: card for small teams, compact for large ones.
    """
    if member_count <= 3:
        return "card"
    if member_count <= 8:
        return "list"
    return "compact"


def render_outcome(outcome: RosterOutcome, team: Optional[Team] = None) -> str:
    """
    Render the single-message view for every outcome except RENDERED.
    """
    settings = get_settings()
    template = _env.get_template("outcome.html")
    if outcome == RosterOutcome.UNAUTHENTICATED:
        return template.render(css_class="roster-error", message=messages.LOGIN_REQUIRED)
    if outcome == RosterOutcome.NOT_ENTITLED:
        return template.render(
            css_class="roster-subscription-error",
            message=messages.SUBSCRIPTION_REQUIRED,
            link_url=settings.PROGRAMS_URL,
            link_text=messages.SUBSCRIPTION_LINK_TEXT,
        )
    if outcome == RosterOutcome.NO_MEMBERSHIP:
        return template.render(css_class="roster-membership-error", message=messages.NO_MEMBERSHIP)
    if outcome == RosterOutcome.EMPTY_ROSTER:
        return template.render(css_class="roster-empty", heading=team.name if team else "", message=messages.NO_MEMBERS)
    return template.render(css_class="roster-error", message=messages.TEAM_UNAVAILABLE)


def render_roster(team: Team, members: List[EnrichedMember], nonce: str) -> str:
    """
    Render the full roster: team heading and one card per member, in the given order.
    """
    settings = get_settings()
    template = _env.get_template("roster.html")
    return template.render(
        team=team,
        members=members,
        mode=display_mode(len(members)),
        nonce=nonce,
        updates_url=settings.GOAL_UPDATES_PATH,
    )


def render_goal_updates(updates: Iterable[GoalUpdate]) -> str:
    """
    Render the goal-update table. Update content is sanitized before it is marked safe.
    """
    rows = []
    for update in updates:
        rows.append(
            {
                "created_at": update.created_at,
                "status": update.status_after or NOT_AVAILABLE,
                "progress": update.progress_after,
                "content": sanitize_update_content(update.content) or messages.NO_UPDATE_CONTENT,
            }
        )
    return _env.get_template("goal_updates.html").render(rows=rows)


def render_no_updates() -> str:
    return _env.get_template("no_updates.html").render(message=messages.NO_UPDATES)

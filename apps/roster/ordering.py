from typing import Callable, Dict, Iterable, List, Optional

from apps.roster.schemas import EnrichedMember, Team

LeadLookup = Callable[[int, int], bool]


def roster_sort_key(member: EnrichedMember, is_lead: bool):
    # Leads first, then family name by code point (no locale collation)
    return (0 if is_lead else 1, member.last_name)


def order_roster(
    members: Iterable[EnrichedMember],
    team: Optional[Team] = None,
    lead_lookup: Optional[LeadLookup] = None,
) -> List[EnrichedMember]:
    """
    Order a roster: team leads first, then by family name ascending.

    Lead status comes from `lead_lookup(identity_id, team_id)` when given,
    otherwise from the value recorded on the member during enrichment.
    `sorted` is stable, so members with equal keys keep their roster order.
    """
    members = list(members)
    if len(members) < 2:
        return members

    lead_status: Dict[int, bool] = {}
    for index, member in enumerate(members):
        if lead_lookup is not None and team is not None:
            lead_status[index] = bool(lead_lookup(member.identity_id, team.id))
        else:
            lead_status[index] = member.is_lead

    ordered = sorted(range(len(members)), key=lambda i: roster_sort_key(members[i], lead_status[i]))
    return [members[i] for i in ordered]

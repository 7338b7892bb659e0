"""
Membership role labels as stored by the organization store.
Anything other than TEAM_LEAD is treated as an individual contributor.
"""

TEAM_LEAD = "Team_Lead"
INDIVIDUAL = "Individual"

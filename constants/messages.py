"""
User-facing copy for the roster outcomes and the goal-update fetch.
"""

LOGIN_REQUIRED = "Please log in to view team information."
SUBSCRIPTION_REQUIRED = "Oops. Team features are not available in your current subscription plan."
SUBSCRIPTION_LINK_TEXT = "Find out more, here."
NO_MEMBERSHIP = "Oops! You're not part of a team. Check with your organization admin."
TEAM_UNAVAILABLE = "Unable to load team information. Please try again later."
NO_MEMBERS = "No team members found."

NO_UPDATES = "No updates found for this goal."
NO_UPDATE_CONTENT = "No update content"
INVALID_GOAL_ID = "Invalid goal ID"
SECURITY_CHECK_FAILED = "Security check failed"
UPDATES_LOADED = "Goal updates loaded"

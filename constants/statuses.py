"""
Goal status constants.
Stored in title case by the goals store; matched case-sensitively.
"""

COMPLETE = "Complete"
CANCELED = "Canceled"
CANCELLED = "Cancelled"
ARCHIVED = "Archived"

# Goals in any of these states are not shown on the roster
INACTIVE_GOAL_STATUSES = frozenset({COMPLETE, CANCELED, CANCELLED, ARCHIVED})

"""
Companions Domain Configuration Constants
"""

# Message used when an insert returns no row
CREATE_FAILED_MESSAGE: str = 'Failed to create a companion'

# SocketIO event telling the front-end to re-fetch a view
REVALIDATE_EVENT: str = 'revalidate_path'

# Plan that lifts the companion quota entirely
PRO_PLAN: str = 'pro'

# Entitlement -> maximum number of companions a caller may own.
# Checked in order; the first entitlement the caller holds wins.
FEATURE_COMPANION_LIMITS = (
    ('3_companion_limit', 3),
    ('10_companion_limit', 10),
)

# Limit applied when no entitlement matches
DEFAULT_COMPANION_LIMIT: int = 0

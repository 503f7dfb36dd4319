"""
Companion quota gate

A caller may create a new companion while the number they already own is
below the limit granted by their plan or feature flags.
"""

import logging
from typing import Optional

from shared.auth.identity import AuthContext
from shared.database.client import create_supabase_client
from shared.database.config import CompanionColumns, TableNames

from domains.companions.config import (
    DEFAULT_COMPANION_LIMIT,
    FEATURE_COMPANION_LIMITS,
    PRO_PLAN,
)
from domains.companions.services.query import execute_query, rows_of


logger = logging.getLogger(__name__)


def companion_limit_for(auth: AuthContext) -> Optional[int]:
    """
    Maximum number of companions the caller may own

    Returns:
        None for unlimited (pro plan), otherwise the limit of the first
        matching feature flag, or DEFAULT_COMPANION_LIMIT if none match
    """
    if auth.has(plan=PRO_PLAN):
        return None

    for feature, limit in FEATURE_COMPANION_LIMITS:
        if auth.has(feature=feature):
            return limit

    return DEFAULT_COMPANION_LIMIT


def count_user_companions(auth: AuthContext, user_id: str) -> int:
    """
    Number of companions authored by user_id

    Uses the store's exact count; falls back to the number of returned rows
    only when the response carries no count.
    """
    supabase = create_supabase_client(auth)
    response = execute_query(
        supabase.table(TableNames.COMPANIONS)
        .select(CompanionColumns.ID, count='exact')
        .eq(CompanionColumns.AUTHOR, user_id),
        f'counting companions of user {user_id}',
    )

    count = getattr(response, 'count', None)
    if count is None:
        return len(rows_of(response))
    return count


def new_companion_permissions(auth: AuthContext) -> bool:
    """Whether the caller may create another companion.

    Raises:
        PermissionError: If the caller is not authenticated
        DatabaseError: If the count query fails
    """
    if auth is None or not auth.is_authenticated:
        raise PermissionError("Authentication required for companion permissions")

    limit = companion_limit_for(auth)
    if limit is None:
        return True

    count = count_user_companions(auth, auth.user_id)
    allowed = count < limit

    logger.debug(f"User {auth.user_id} owns {count}/{limit} companions, allowed={allowed}")
    return allowed

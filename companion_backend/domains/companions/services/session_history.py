"""Session history: which companions a user has talked to, newest first"""

import logging
from typing import Any, Dict, List, Optional

from shared.auth.identity import AuthContext
from shared.database.client import create_supabase_client
from shared.database.config import DatabaseConfig, SessionHistoryColumns, TableNames
from shared.database.exceptions import ValidationError

from domains.companions.schema import normalize_companion
from domains.companions.services.query import clamp_limit, execute_query, rows_of


logger = logging.getLogger(__name__)


def add_to_session_history(auth: AuthContext, companion_id: str) -> Any:
    """Record that the caller started a session with a companion.

    Returns:
        The raw insert result (list of inserted rows, possibly empty)

    Raises:
        PermissionError: If the caller is not authenticated
        DatabaseError: If the insert fails
    """
    if auth is None or not auth.is_authenticated:
        raise PermissionError("Authentication required for session history")

    if not companion_id:
        raise ValidationError("companion_id is required")

    supabase = create_supabase_client(auth)
    response = execute_query(
        supabase.table(TableNames.SESSION_HISTORY).insert({
            SessionHistoryColumns.COMPANION_ID: companion_id,
            SessionHistoryColumns.USER_ID: auth.user_id,
        }),
        'adding session history',
    )

    return getattr(response, 'data', None)


def _companions_from_history(rows: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    companions = []
    for row in rows:
        companion = row.get(TableNames.COMPANIONS)
        if not companion:
            # referenced companion is gone or hidden by RLS
            continue
        companions.append(normalize_companion(companion))
    return companions


def _list_sessions(auth: Optional[AuthContext], limit: int, user_id: Optional[str] = None):
    limit = clamp_limit(limit)

    supabase = create_supabase_client(auth)
    query = supabase.table(TableNames.SESSION_HISTORY)\
        .select(SessionHistoryColumns.EMBEDDED_COMPANION)

    if user_id is not None:
        query = query.eq(SessionHistoryColumns.USER_ID, user_id)

    query = query.order(SessionHistoryColumns.CREATED_AT, desc=True).limit(limit)

    response = execute_query(query, 'listing session history')
    return _companions_from_history(rows_of(response))


def get_recent_sessions(
    auth: Optional[AuthContext] = None,
    limit: int = DatabaseConfig.DEFAULT_PAGE_SIZE,
) -> List[Dict[str, Any]]:
    """Companions from the most recent sessions of all users."""
    return _list_sessions(auth, limit)


def get_user_sessions(
    auth: Optional[AuthContext],
    user_id: str,
    limit: int = DatabaseConfig.DEFAULT_PAGE_SIZE,
) -> List[Dict[str, Any]]:
    """Companions from the most recent sessions of one user.

    Raises:
        ValidationError: If user_id is empty or limit is invalid
        DatabaseError: If the query fails
    """
    if not user_id:
        raise ValidationError("user_id is required")
    return _list_sessions(auth, limit, user_id=user_id)

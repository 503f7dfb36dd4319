"""
Companion operations.

Each operation builds its own Supabase client from the caller identity,
translates between the application and persisted field names, and lets the
store do the filtering, ordering and pagination.
"""

import logging
from typing import Any, Dict, List, Optional, Union

import pydantic

from shared.auth.identity import AuthContext
from shared.database.client import create_supabase_client
from shared.database.config import CompanionColumns, DatabaseConfig, TableNames
from shared.database.exceptions import DatabaseError, ValidationError

from domains.companions.config import CREATE_FAILED_MESSAGE
from domains.companions.schema import (
    CreateCompanion,
    denormalize_companion,
    normalize_companion,
)
from domains.companions.services.query import (
    clamp_limit,
    contains_pattern,
    execute_query,
    ilike_any,
    page_range,
    rows_of,
)
from domains.companions.services.revalidation import revalidate_path


logger = logging.getLogger(__name__)


def _require_identity(auth: Optional[AuthContext], action: str) -> str:
    if auth is None or not auth.is_authenticated:
        raise PermissionError(f"Authentication required for {action}")
    return auth.user_id


def create_companion(auth: AuthContext, payload: Union[Dict[str, Any], CreateCompanion]) -> Dict[str, Any]:
    """Create a companion owned by the caller.

    The author is always the caller and bookmarked always starts False,
    whatever the payload contains.

    Args:
        auth: Caller identity
        payload: name, subject, topic, voice, style and duration

    Returns:
        dict: The inserted companion, normalized

    Raises:
        PermissionError: If the caller is not authenticated
        ValidationError: If the payload is invalid
        DatabaseError: If the insert fails or returns no row
    """
    author = _require_identity(auth, 'creating a companion')

    if not isinstance(payload, CreateCompanion):
        try:
            payload = CreateCompanion.model_validate(payload)
        except pydantic.ValidationError as e:
            raise ValidationError(f"Invalid companion payload: {e}")

    row = denormalize_companion({
        **payload.model_dump(),
        'author': author,
        'bookmarked': False,
    })

    supabase = create_supabase_client(auth)
    response = execute_query(
        supabase.table(TableNames.COMPANIONS).insert(row),
        'creating companion',
        default_message=CREATE_FAILED_MESSAGE,
    )

    data = rows_of(response)
    if not data:
        logger.error(f"Insert into {TableNames.COMPANIONS} returned no row")
        raise DatabaseError(CREATE_FAILED_MESSAGE)

    companion = normalize_companion(data[0])
    logger.info(f"Created companion {companion['id']} for user {author}")
    return companion


def get_all_companions(
    auth: Optional[AuthContext] = None,
    limit: int = DatabaseConfig.DEFAULT_PAGE_SIZE,
    page: int = DatabaseConfig.DEFAULT_PAGE,
    subject: Optional[str] = None,
    topic: Optional[str] = None,
) -> List[Dict[str, Any]]:
    """List companions one page at a time, optionally filtered.

    subject matches the Subject column; topic matches either Topic or Name.
    Both filters are case-insensitive partial matches and combine with AND.

    Args:
        auth: Caller identity (optional, public listing)
        limit: Page size, capped at DatabaseConfig.MAX_PAGE_SIZE
        page: 1-indexed page number
        subject: Subject filter
        topic: Topic/name filter

    Returns:
        list: Normalized companions, empty when nothing matches

    Raises:
        ValidationError: If limit or page is not a positive integer
        DatabaseError: If the query fails
    """
    limit = clamp_limit(limit)
    start, end = page_range(limit, page)

    supabase = create_supabase_client(auth)
    query = supabase.table(TableNames.COMPANIONS).select('*')

    if subject:
        query = query.ilike(CompanionColumns.SUBJECT, contains_pattern(subject))

    if topic:
        query = query.or_(ilike_any((CompanionColumns.TOPIC, CompanionColumns.NAME), topic))

    query = query.range(start, end)

    response = execute_query(query, 'listing companions')
    return [normalize_companion(row) for row in rows_of(response)]


def get_companion(auth: Optional[AuthContext], companion_id: str) -> Optional[Dict[str, Any]]:
    """Get a single companion by id.

    Returns:
        dict: The normalized companion, or None when no row matches

    Raises:
        ValidationError: If companion_id is empty
        DatabaseError: If the query fails
    """
    if not companion_id:
        raise ValidationError("companion_id is required")

    supabase = create_supabase_client(auth)
    response = execute_query(
        supabase.table(TableNames.COMPANIONS)
        .select('*')
        .eq(CompanionColumns.ID, companion_id),
        f'fetching companion {companion_id}',
    )

    data = rows_of(response)
    if not data:
        return None
    return normalize_companion(data[0])


def get_user_companions(auth: Optional[AuthContext], user_id: str) -> List[Dict[str, Any]]:
    """List every companion authored by user_id.

    The result is bounded by DatabaseConfig.MAX_OWNER_ROWS.
    """
    if not user_id:
        raise ValidationError("user_id is required")

    supabase = create_supabase_client(auth)
    response = execute_query(
        supabase.table(TableNames.COMPANIONS)
        .select('*')
        .eq(CompanionColumns.AUTHOR, user_id)
        .limit(DatabaseConfig.MAX_OWNER_ROWS),
        f'listing companions of user {user_id}',
    )

    return [normalize_companion(row) for row in rows_of(response)]


def _set_bookmark(auth: Optional[AuthContext], companion_id: str, path: str, bookmarked: bool) -> None:
    if auth is None or not auth.is_authenticated:
        logger.debug(f"Ignoring bookmark change on {companion_id} from anonymous caller")
        return None

    if not companion_id:
        raise ValidationError("companion_id is required")

    supabase = create_supabase_client(auth)
    execute_query(
        supabase.table(TableNames.COMPANIONS)
        .update({CompanionColumns.BOOKMARK: bookmarked})
        .eq(CompanionColumns.ID, companion_id),
        f'updating bookmark of companion {companion_id}',
    )

    revalidate_path(path)
    return None


def add_bookmark(auth: Optional[AuthContext], companion_id: str, path: str) -> None:
    """Mark a companion as bookmarked and ask the view at path to re-render.

    Anonymous callers are ignored: nothing is written and nothing is raised.

    Raises:
        DatabaseError: If the update fails
    """
    return _set_bookmark(auth, companion_id, path, True)


def remove_bookmark(auth: Optional[AuthContext], companion_id: str, path: str) -> None:
    """Clear the bookmark flag of a companion; same contract as add_bookmark."""
    return _set_bookmark(auth, companion_id, path, False)


def get_bookmarked_companions(auth: Optional[AuthContext], user_id: str) -> List[Dict[str, Any]]:
    """List bookmarked companions.

    Bookmark is a store-wide flag rather than a per-user one, so every
    bookmarked companion is returned, bounded by DatabaseConfig.MAX_OWNER_ROWS.
    user_id is accepted for API compatibility and does not filter the result.
    """
    supabase = create_supabase_client(auth)
    response = execute_query(
        supabase.table(TableNames.COMPANIONS)
        .select('*')
        .eq(CompanionColumns.BOOKMARK, True)
        .limit(DatabaseConfig.MAX_OWNER_ROWS),
        'listing bookmarked companions',
    )

    return [normalize_companion(row) for row in rows_of(response)]

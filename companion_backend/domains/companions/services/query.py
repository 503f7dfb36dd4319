"""
Query helpers shared by the companion services

Wraps PostgREST execution so every store failure surfaces as DatabaseError
carrying the store's message.
"""
import logging
import re
from typing import Any, Optional

from shared.database.config import DatabaseConfig
from shared.database.exceptions import DatabaseError, ValidationError

logger = logging.getLogger(__name__)

# Values containing these must be double-quoted inside a PostgREST or=(...) filter
_FILTER_RESERVED = re.compile(r'[,.:()"\\\s]')


def _error_message(error: Any) -> str:
    message = getattr(error, 'message', None)
    if message:
        return str(message)
    if isinstance(error, dict) and error.get('message'):
        return str(error['message'])
    return str(error)


def execute_query(query: Any, action: str, default_message: Optional[str] = None) -> Any:
    """
    Execute a built query and return the response

    Args:
        query: supabase-py request builder
        action: Short description used in log lines, e.g. 'listing companions'
        default_message: Message used when the store gives none

    Returns:
        The APIResponse (with .data and .count)

    Raises:
        DatabaseError: If the request raises or the response reports an error
    """
    try:
        response = query.execute()
    except Exception as e:
        message = _error_message(e) or default_message or f"Error {action}"
        logger.error(f"Error {action}: {message}")
        raise DatabaseError(message)

    error = getattr(response, 'error', None)
    if error:
        message = _error_message(error) or default_message or f"Error {action}"
        logger.error(f"Error {action}: {message}")
        raise DatabaseError(message)

    return response


def rows_of(response: Any) -> list:
    return list(getattr(response, 'data', None) or [])


def contains_pattern(value: str) -> str:
    """Case-insensitive partial match pattern for ilike, value kept verbatim"""
    return f"%{value}%"


def or_filter_value(value: str) -> str:
    """
    Render a value for use inside an or=(...) filter

    Values with reserved characters are double-quoted, with '"' and '\\'
    backslash-escaped, so they match literally instead of splitting the filter.
    """
    if not _FILTER_RESERVED.search(value):
        return value
    escaped = value.replace('\\', '\\\\').replace('"', '\\"')
    return f'"{escaped}"'


def ilike_any(columns, value: str) -> str:
    """or=(...) expression matching value partially against any of columns"""
    pattern = or_filter_value(contains_pattern(value))
    return ','.join(f"{column}.ilike.{pattern}" for column in columns)


def clamp_limit(limit: int) -> int:
    """
    Validate a row limit and cap it at DatabaseConfig.MAX_PAGE_SIZE

    Raises:
        ValidationError: If limit is not a positive integer
    """
    maximum = DatabaseConfig.MAX_PAGE_SIZE

    if isinstance(limit, bool) or not isinstance(limit, int) or limit < 1:
        raise ValidationError(f"limit must be a positive integer, got {limit!r}")

    if limit > maximum:
        logger.warning(f"Requested limit {limit} exceeds maximum {maximum}, clamping")
        return maximum

    return limit


def page_range(limit: int, page: int):
    """Inclusive row range for a 1-indexed page"""
    if isinstance(page, bool) or not isinstance(page, int) or page < 1:
        raise ValidationError(f"page must be a positive integer, got {page!r}")

    start = (page - 1) * limit
    return start, page * limit - 1

"""
Database configuration constants.

This module centralizes all configuration constants for database operations,
including page size limits, table names and the companion column mapping.
"""

import os


def _int_from_env(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or value == '':
        return default
    return int(value)


class DatabaseConfig:
    """Technical configuration constants for database operations."""

    # Pagination defaults
    DEFAULT_PAGE_SIZE = 10
    DEFAULT_PAGE = 1

    # Upper bounds on rows requested in a single query
    MAX_PAGE_SIZE = _int_from_env('COMPANION_MAX_PAGE_SIZE', 100)
    MAX_OWNER_ROWS = _int_from_env('COMPANION_MAX_OWNER_ROWS', 1000)

    # Identity provider token template used for the store integration
    JWT_TEMPLATE = os.getenv('SUPABASE_JWT_TEMPLATE', 'supabase')


class TableNames:
    """Database table names - centralized to avoid magic strings."""

    COMPANIONS = "companions"
    SESSION_HISTORY = "session_history"


class CompanionColumns:
    """Persisted column names of the companions table."""

    ID = "id"
    NAME = "Name"
    SUBJECT = "Subject"
    TOPIC = "Topic"
    VOICE = "Voice"
    STYLE = "Style"
    DURATION = "Duration"
    AUTHOR = "Author"
    BOOKMARK = "Bookmark"


class SessionHistoryColumns:
    """Persisted column names of the session_history table."""

    COMPANION_ID = "companion_id"
    USER_ID = "user_id"
    CREATED_AT = "created_at"

    # Embedded companion row, aliased to the companions table name
    EMBEDDED_COMPANION = f"{TableNames.COMPANIONS}:{COMPANION_ID} (*)"

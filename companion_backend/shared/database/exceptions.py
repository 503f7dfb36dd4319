"""
Database exception classes.

This module defines all custom exceptions for database operations,
providing a clear hierarchy for error handling.
"""


class DatabaseError(Exception):
    """Base exception for database operations.

    All database-related exceptions inherit from this class,
    allowing for broad exception catching when needed.
    """
    pass


class ValidationError(DatabaseError):
    """Raised when input validation fails.

    This exception is raised when:
    - A create payload is missing required fields
    - Pagination parameters are out of range
    - A required identifier is empty
    """
    pass


class ConfigurationError(DatabaseError):
    """Raised when configuration is invalid.

    This exception is raised when:
    - Required environment variables are missing
    - The Supabase client cannot be constructed
    """
    pass

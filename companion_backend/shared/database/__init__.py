"""Database client and configuration.

This package provides:
- Supabase client factory (client.py)
- Configuration constants (config.py)
- Custom exceptions (exceptions.py)
"""

from .client import (
    create_supabase_client,
    get_supabase_auth_client,
)

from .config import (
    DatabaseConfig,
    TableNames,
    CompanionColumns,
    SessionHistoryColumns,
)

from .exceptions import (
    DatabaseError,
    ValidationError,
    ConfigurationError,
)

__all__ = [
    # Client
    'create_supabase_client',
    'get_supabase_auth_client',

    # Configuration
    'DatabaseConfig',
    'TableNames',
    'CompanionColumns',
    'SessionHistoryColumns',

    # Exceptions
    'DatabaseError',
    'ValidationError',
    'ConfigurationError',
]

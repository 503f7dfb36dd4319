"""Companion domain services"""
from domains.companions.services.companions import (
    create_companion,
    get_all_companions,
    get_companion,
    get_user_companions,
    add_bookmark,
    remove_bookmark,
    get_bookmarked_companions,
)
from domains.companions.services.session_history import (
    add_to_session_history,
    get_recent_sessions,
    get_user_sessions,
)
from domains.companions.services.permissions import (
    companion_limit_for,
    count_user_companions,
    new_companion_permissions,
)
from domains.companions.services.revalidation import revalidate_path

__all__ = [
    'create_companion',
    'get_all_companions',
    'get_companion',
    'get_user_companions',
    'add_bookmark',
    'remove_bookmark',
    'get_bookmarked_companions',
    'add_to_session_history',
    'get_recent_sessions',
    'get_user_sessions',
    'companion_limit_for',
    'count_user_companions',
    'new_companion_permissions',
    'revalidate_path',
]

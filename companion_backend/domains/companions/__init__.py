# Companions Domain
# Companion records and session history stored in Supabase
#
# Components:
# - api/: Blueprint routes for companions and session history
# - services/: Store access
#   - companions.py: create, search, get, owner listing, bookmarks
#   - session_history.py: session history append and listings
#   - permissions.py: companion quota gate
#   - revalidation.py: front-end view revalidation over SocketIO
#   - query.py: query execution and pagination helpers
# - schema.py: PascalCase <-> camelCase field mapping and request models
# - config.py: Companion domain constants

from domains.companions.api import companions_bp, sessions_bp

__all__ = ['companions_bp', 'sessions_bp']

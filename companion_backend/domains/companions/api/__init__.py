"""
Companions API Blueprints

- companion_routes: companion CRUD, search, permissions and bookmarks
- session_routes: session history append and listings
"""

from .companion_routes import bp as companions_bp
from .session_routes import bp as sessions_bp

__all__ = ['companions_bp', 'sessions_bp']

"""Authentication middleware for bearer token validation"""
import logging
from functools import wraps
from typing import Optional, Tuple

from flask import request, jsonify, g

from shared.auth.identity import AuthContext
from shared.database.client import get_supabase_auth_client

logger = logging.getLogger(__name__)


def _extract_bearer_token() -> Tuple[Optional[str], Optional[str]]:
    """
    Read the bearer token from the Authorization header

    Returns:
        (token, error): exactly one of them is set, or both None when no header
    """
    auth_header = request.headers.get('Authorization')

    if not auth_header:
        return None, None

    try:
        token_type, token = auth_header.split(' ', 1)
    except ValueError:
        return None, 'Malformed authorization header'

    if token_type.lower() != 'bearer':
        return None, 'Invalid token type. Expected Bearer token'

    return token, None


def _resolve_identity(token: str) -> Optional[AuthContext]:
    supabase = get_supabase_auth_client()
    response = supabase.auth.get_user(token)

    if not response or not response.user:
        return None

    return AuthContext.from_user(response.user, token=token)


def require_auth(f):
    """
    Decorator to require valid authentication

    Validates the JWT from the Authorization header and stores the caller
    identity on the Flask g object

    Usage:
        @require_auth
        def protected_route():
            auth = g.auth
            return jsonify({'user_id': auth.user_id})
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        token, error = _extract_bearer_token()

        if error:
            logger.warning(error)
            return jsonify({'success': False, 'error': error}), 401

        if not token:
            logger.warning("Missing Authorization header")
            return jsonify({'success': False, 'error': 'Missing authorization header'}), 401

        try:
            auth = _resolve_identity(token)
        except Exception as e:
            logger.error(f"Authentication error: {str(e)}")
            return jsonify({'success': False, 'error': 'Authentication failed'}), 401

        if auth is None:
            logger.warning("Invalid or expired token")
            return jsonify({'success': False, 'error': 'Invalid or expired token'}), 401

        g.auth = auth
        g.user_id = auth.user_id

        return f(*args, **kwargs)

    return decorated_function


def optional_auth(f):
    """
    Decorator to optionally validate authentication

    If the token is present and valid, g.auth holds the caller identity.
    Otherwise g.auth is an anonymous context and the request continues.
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        g.auth = AuthContext.anonymous()

        token, _ = _extract_bearer_token()

        if token:
            try:
                auth = _resolve_identity(token)
                if auth is not None:
                    g.auth = auth
                    g.user_id = auth.user_id
                    logger.debug(f"Optional auth: Authenticated user {auth.user_id}")
            except Exception as e:
                logger.debug(f"Optional auth failed (continuing anyway): {str(e)}")

        return f(*args, **kwargs)

    return decorated_function


def current_auth() -> AuthContext:
    """Caller identity for the current request, anonymous if none was resolved"""
    return getattr(g, 'auth', None) or AuthContext.anonymous()

"""Supabase client factory for companion operations"""
import os
import logging
from typing import Optional, TYPE_CHECKING

from supabase import create_client, Client

from .config import DatabaseConfig
from .exceptions import ConfigurationError

if TYPE_CHECKING:
    from shared.auth.identity import AuthContext

logger = logging.getLogger(__name__)


def _get_supabase_settings():
    supabase_url = os.getenv('SUPABASE_URL')
    supabase_key = os.getenv('SUPABASE_KEY')

    if not supabase_url or not supabase_key:
        raise ConfigurationError("SUPABASE_URL and SUPABASE_KEY must be set in environment variables")

    return supabase_url, supabase_key


def _resolve_access_token(auth: Optional['AuthContext']) -> Optional[str]:
    """
    Ask the identity provider for a store-scoped token

    Any failure falls back to anonymous access instead of failing the request.
    """
    if auth is None:
        return None

    try:
        return auth.get_token(template=DatabaseConfig.JWT_TEMPLATE) or None
    except Exception as e:
        logger.warning(f"Could not obtain access token, continuing anonymously: {str(e)}")
        return None


def create_supabase_client(auth: Optional['AuthContext'] = None) -> Client:
    """
    Create a request-scoped Supabase client with the public (anon) key

    When the caller's identity yields a token it is attached as the bearer
    credential so RLS policies apply to that user. A new client is built on
    every call; nothing is cached between requests.

    Args:
        auth: Caller identity, or None for public access

    Returns:
        Client: Supabase client instance

    Raises:
        ConfigurationError: If the Supabase URL or key is not configured
    """
    supabase_url, supabase_key = _get_supabase_settings()

    logger.debug(f"Initializing Supabase client for URL: {supabase_url}")

    try:
        client = create_client(supabase_url, supabase_key)
    except Exception as e:
        raise ConfigurationError(f"Error creating Supabase client: {str(e)}")

    access_token = _resolve_access_token(auth)
    if access_token:
        client.postgrest.auth(access_token)

    return client


def get_supabase_auth_client() -> Client:
    """
    Get a plain Supabase client for validating bearer tokens

    Returns:
        Client: Supabase client instance without a user credential
    """
    return create_supabase_client()

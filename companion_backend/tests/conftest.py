"""
Pytest configuration and fixtures for backend tests.

This module provides common fixtures used across all test modules.
"""

import pytest
import os
import sys
from unittest.mock import Mock, MagicMock

# Add backend root to path for imports
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from shared.auth.identity import AuthContext  # noqa: E402


QUERY_BUILDER_METHODS = ('select', 'insert', 'update', 'eq', 'ilike', 'or_', 'order', 'range', 'limit')


def build_query(data=None, count=None):
    """
    Chainable stand-in for a supabase-py request builder.

    Every filter/modifier returns the same mock so calls can be asserted
    on it directly; execute() returns a response with data and count.
    """
    query = MagicMock(name='query')
    for method in QUERY_BUILDER_METHODS:
        getattr(query, method).return_value = query
    query.execute.return_value = Mock(data=data, count=count, error=None)
    return query


@pytest.fixture
def query_factory():
    """
    Factory fixture for chainable query mocks.

    Returns:
        Callable (data=None, count=None) -> query mock
    """
    return build_query


@pytest.fixture
def supabase_query():
    """Query mock returning no rows."""
    return build_query(data=[])


@pytest.fixture
def supabase_client(supabase_query):
    """
    Mock Supabase client whose table() returns supabase_query.

    Returns:
        Mocked Client
    """
    client = MagicMock(name='supabase')
    client.table.return_value = supabase_query
    return client


@pytest.fixture
def auth_context():
    """Authenticated caller without entitlements."""
    return AuthContext(user_id='user_123', token='test-token-123')


@pytest.fixture
def anonymous_context():
    """Anonymous caller."""
    return AuthContext.anonymous()


@pytest.fixture
def pro_context():
    """Caller on the pro plan."""
    return AuthContext(user_id='user_pro', plans=frozenset({'pro'}), token='pro-token')


@pytest.fixture
def companion_row():
    """
    Companion row as stored in Supabase.

    Returns:
        dict with PascalCase columns
    """
    return {
        'id': 'comp_1',
        'Name': 'Neura the Brainy Explorer',
        'Subject': 'science',
        'Topic': 'Neural Network of the Brain',
        'Voice': 'female',
        'Style': 'formal',
        'Duration': 45,
        'Author': 'user_123',
        'Bookmark': False,
    }


@pytest.fixture
def companion_payload():
    """Create payload in application shape."""
    return {
        'name': 'Countsy the Number Wizard',
        'subject': 'maths',
        'topic': 'Derivatives & Integrals',
        'voice': 'male',
        'style': 'casual',
        'duration': 30,
    }


@pytest.fixture(autouse=True)
def supabase_env(monkeypatch):
    """
    Provide Supabase settings so client construction never reads a real .env.
    """
    monkeypatch.setenv('SUPABASE_URL', 'https://test-project.supabase.co')
    monkeypatch.setenv('SUPABASE_KEY', 'test-anon-key')
    yield

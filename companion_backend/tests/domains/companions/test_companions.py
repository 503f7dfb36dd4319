"""Tests for domains.companions.services.companions module.

Covers create, search/pagination, lookups and bookmarks against a mocked
Supabase client.
"""

import pytest
from unittest.mock import MagicMock, patch

from shared.auth.identity import AuthContext
from shared.database.exceptions import DatabaseError, ValidationError
from domains.companions.services.companions import (
    add_bookmark,
    create_companion,
    get_all_companions,
    get_bookmarked_companions,
    get_companion,
    get_user_companions,
    remove_bookmark,
)


SERVICE = 'domains.companions.services.companions'


@pytest.fixture
def patched_client(supabase_client):
    with patch(f'{SERVICE}.create_supabase_client', return_value=supabase_client) as factory:
        yield factory


@pytest.fixture
def mock_revalidate():
    with patch(f'{SERVICE}.revalidate_path') as revalidate:
        yield revalidate


class TestCreateCompanion:
    """Tests for create_companion function."""

    def test_inserts_pascal_case_row(self, patched_client, supabase_client, supabase_query,
                                     auth_context, companion_payload, companion_row):
        supabase_query.execute.return_value.data = [companion_row]

        create_companion(auth_context, companion_payload)

        supabase_client.table.assert_called_once_with('companions')
        supabase_query.insert.assert_called_once_with({
            'Name': 'Countsy the Number Wizard',
            'Subject': 'maths',
            'Topic': 'Derivatives & Integrals',
            'Voice': 'male',
            'Style': 'casual',
            'Duration': 30,
            'Author': 'user_123',
            'Bookmark': False,
        })
        patched_client.assert_called_once_with(auth_context)

    def test_author_and_bookmark_come_from_caller(self, patched_client, supabase_query,
                                                  auth_context, companion_payload, companion_row):
        companion_payload.update({'author': 'intruder', 'bookmarked': True})
        supabase_query.execute.return_value.data = [companion_row]

        create_companion(auth_context, companion_payload)

        inserted = supabase_query.insert.call_args[0][0]
        assert inserted['Author'] == 'user_123'
        assert inserted['Bookmark'] is False

    def test_returns_normalized_row(self, patched_client, supabase_query, auth_context,
                                    companion_payload, companion_row):
        supabase_query.execute.return_value.data = [companion_row]

        companion = create_companion(auth_context, companion_payload)

        assert companion['id'] == 'comp_1'
        assert companion['author'] == 'user_123'
        assert companion['bookmarked'] is False
        assert 'Name' not in companion

    def test_no_row_returned_raises(self, patched_client, supabase_query, auth_context, companion_payload):
        supabase_query.execute.return_value.data = []

        with pytest.raises(DatabaseError) as exc_info:
            create_companion(auth_context, companion_payload)

        assert str(exc_info.value) == 'Failed to create a companion'

    def test_store_error_message_is_kept(self, patched_client, supabase_query, auth_context, companion_payload):
        supabase_query.execute.side_effect = Exception('new row violates row-level security policy')

        with pytest.raises(DatabaseError) as exc_info:
            create_companion(auth_context, companion_payload)

        assert 'row-level security' in str(exc_info.value)

    def test_invalid_payload_raises_validation_error(self, patched_client, supabase_query,
                                                     auth_context, companion_payload):
        del companion_payload['name']

        with pytest.raises(ValidationError):
            create_companion(auth_context, companion_payload)

        supabase_query.insert.assert_not_called()

    def test_anonymous_caller_is_rejected(self, patched_client, anonymous_context, companion_payload):
        with pytest.raises(PermissionError):
            create_companion(anonymous_context, companion_payload)

        patched_client.assert_not_called()


class TestGetAllCompanions:
    """Tests for get_all_companions function."""

    def test_second_page_range(self, patched_client, supabase_query):
        get_all_companions(limit=10, page=2)

        supabase_query.range.assert_called_once_with(10, 19)

    def test_defaults_to_first_page_of_ten(self, patched_client, supabase_query):
        get_all_companions()

        supabase_query.range.assert_called_once_with(0, 9)

    def test_subject_and_topic_filters(self, patched_client, supabase_query):
        get_all_companions(subject='math', topic='algebra')

        supabase_query.ilike.assert_called_once_with('Subject', '%math%')
        supabase_query.or_.assert_called_once_with('Topic.ilike.%algebra%,Name.ilike.%algebra%')

    def test_subject_only(self, patched_client, supabase_query):
        get_all_companions(subject='math')

        supabase_query.ilike.assert_called_once_with('Subject', '%math%')
        supabase_query.or_.assert_not_called()

    def test_topic_only(self, patched_client, supabase_query):
        get_all_companions(topic='algebra')

        supabase_query.ilike.assert_not_called()
        supabase_query.or_.assert_called_once_with('Topic.ilike.%algebra%,Name.ilike.%algebra%')

    def test_subject_with_punctuation_is_kept_verbatim(self, patched_client, supabase_query):
        get_all_companions(subject='C++ (advanced)')

        supabase_query.ilike.assert_called_once_with('Subject', '%C++ (advanced)%')

    def test_subject_with_comma_is_kept_verbatim(self, patched_client, supabase_query):
        get_all_companions(subject='maths, physics')

        supabase_query.ilike.assert_called_once_with('Subject', '%maths, physics%')

    def test_topic_of_parentheses_is_quoted(self, patched_client, supabase_query):
        get_all_companions(topic='()')

        supabase_query.or_.assert_called_once_with('Topic.ilike."%()%",Name.ilike."%()%"')

    def test_topic_with_comma_is_quoted(self, patched_client, supabase_query):
        get_all_companions(topic='a,b')

        supabase_query.or_.assert_called_once_with('Topic.ilike."%a,b%",Name.ilike."%a,b%"')

    def test_no_filters(self, patched_client, supabase_query):
        get_all_companions()

        supabase_query.ilike.assert_not_called()
        supabase_query.or_.assert_not_called()

    def test_empty_result_is_empty_list(self, patched_client, supabase_query):
        supabase_query.execute.return_value.data = None

        assert get_all_companions() == []

    def test_rows_are_normalized(self, patched_client, supabase_query, companion_row):
        supabase_query.execute.return_value.data = [companion_row]

        result = get_all_companions()

        assert [c['name'] for c in result] == ['Neura the Brainy Explorer']

    def test_large_limit_is_clamped(self, patched_client, supabase_query):
        with patch('domains.companions.services.query.DatabaseConfig') as mock_config:
            mock_config.MAX_PAGE_SIZE = 100
            get_all_companions(limit=10_000, page=1)

        supabase_query.range.assert_called_once_with(0, 99)

    def test_invalid_page_raises(self, patched_client):
        with pytest.raises(ValidationError):
            get_all_companions(page=0)

    def test_query_error_raises(self, patched_client, supabase_query):
        supabase_query.execute.side_effect = Exception('canceling statement due to statement timeout')

        with pytest.raises(DatabaseError) as exc_info:
            get_all_companions()

        assert 'statement timeout' in str(exc_info.value)


class TestGetCompanion:
    """Tests for get_companion function."""

    def test_returns_normalized_companion(self, patched_client, supabase_query, companion_row):
        supabase_query.execute.return_value.data = [companion_row]

        companion = get_companion(None, 'comp_1')

        supabase_query.eq.assert_called_once_with('id', 'comp_1')
        assert companion['id'] == 'comp_1'

    def test_not_found_is_none(self, patched_client, supabase_query):
        supabase_query.execute.return_value.data = []

        assert get_companion(None, 'missing') is None

    def test_query_error_raises(self, patched_client, supabase_query):
        """Lookup failures raise like every other operation."""
        supabase_query.execute.side_effect = Exception('invalid input syntax for type uuid')

        with pytest.raises(DatabaseError):
            get_companion(None, 'not-a-uuid')

    def test_empty_id_raises(self, patched_client):
        with pytest.raises(ValidationError):
            get_companion(None, '')


class TestGetUserCompanions:
    """Tests for get_user_companions function."""

    def test_filters_by_author(self, patched_client, supabase_query, companion_row):
        supabase_query.execute.return_value.data = [companion_row, dict(companion_row, id='comp_2')]

        result = get_user_companions(None, 'user_123')

        supabase_query.eq.assert_called_once_with('Author', 'user_123')
        assert [c['id'] for c in result] == ['comp_1', 'comp_2']

    def test_bounded_by_owner_row_cap(self, patched_client, supabase_query):
        with patch(f'{SERVICE}.DatabaseConfig') as mock_config:
            mock_config.MAX_OWNER_ROWS = 500
            get_user_companions(None, 'user_123')

        supabase_query.limit.assert_called_once_with(500)

    def test_query_error_raises(self, patched_client, supabase_query):
        supabase_query.execute.side_effect = Exception('boom')

        with pytest.raises(DatabaseError):
            get_user_companions(None, 'user_123')


class TestBookmarks:
    """Tests for add_bookmark / remove_bookmark / get_bookmarked_companions."""

    def test_add_bookmark_sets_flag(self, patched_client, supabase_query, auth_context, mock_revalidate):
        result = add_bookmark(auth_context, 'comp_1', '/companions/comp_1')

        assert result is None
        supabase_query.update.assert_called_once_with({'Bookmark': True})
        supabase_query.eq.assert_called_once_with('id', 'comp_1')
        mock_revalidate.assert_called_once_with('/companions/comp_1')

    def test_remove_bookmark_clears_flag(self, patched_client, supabase_query, auth_context, mock_revalidate):
        remove_bookmark(auth_context, 'comp_1', '/my-journey')

        supabase_query.update.assert_called_once_with({'Bookmark': False})
        mock_revalidate.assert_called_once_with('/my-journey')

    def test_add_bookmark_twice_keeps_flag_set(self, patched_client, supabase_query, auth_context, mock_revalidate):
        add_bookmark(auth_context, 'comp_1', '/companions')
        add_bookmark(auth_context, 'comp_1', '/companions')

        assert [c.args[0] for c in supabase_query.update.call_args_list] == [{'Bookmark': True}, {'Bookmark': True}]

    @pytest.mark.parametrize('toggle', [add_bookmark, remove_bookmark])
    def test_anonymous_toggle_is_noop(self, patched_client, anonymous_context, mock_revalidate, toggle):
        assert toggle(anonymous_context, 'comp_1', '/companions') is None

        patched_client.assert_not_called()
        mock_revalidate.assert_not_called()

    def test_missing_context_is_noop(self, patched_client, mock_revalidate):
        assert add_bookmark(None, 'comp_1', '/companions') is None

        patched_client.assert_not_called()

    def test_update_failure_raises_without_revalidation(self, patched_client, supabase_query,
                                                        auth_context, mock_revalidate):
        supabase_query.execute.side_effect = Exception('permission denied')

        with pytest.raises(DatabaseError):
            add_bookmark(auth_context, 'comp_1', '/companions')

        mock_revalidate.assert_not_called()

    def test_bookmarked_listing_filters_on_flag(self, patched_client, supabase_query, companion_row):
        supabase_query.execute.return_value.data = [dict(companion_row, Bookmark=True)]

        result = get_bookmarked_companions(None, 'user_123')

        supabase_query.eq.assert_called_once_with('Bookmark', True)
        assert result[0]['bookmarked'] is True

    def test_bookmarked_listing_ignores_owner(self, patched_client, supabase_query, companion_row):
        """Bookmarks are store-wide: the owner argument does not narrow the result."""
        supabase_query.execute.return_value.data = [dict(companion_row, Bookmark=True)]

        first = get_bookmarked_companions(None, 'user_123')
        second = get_bookmarked_companions(None, 'user_456')

        assert first == second
        for call in supabase_query.eq.call_args_list:
            assert call.args[0] != 'Author'

    def test_bookmarked_listing_bounded_by_owner_row_cap(self, patched_client, supabase_query):
        with patch(f'{SERVICE}.DatabaseConfig') as mock_config:
            mock_config.MAX_OWNER_ROWS = 500
            get_bookmarked_companions(None, 'user_123')

        supabase_query.limit.assert_called_once_with(500)

"""
Companion Routes
Create, search and bookmark companions
"""
import logging

import pydantic
from flask import Blueprint, request

from shared.auth.jwt import current_auth, optional_auth, require_auth

from domains.companions.api.common import (
    error_response,
    handle_service_error,
    invalid_query_response,
    success_response,
)
from domains.companions.schema import CompanionQuery
from domains.companions.services import (
    add_bookmark,
    companion_limit_for,
    create_companion,
    get_all_companions,
    get_bookmarked_companions,
    get_companion,
    get_user_companions,
    new_companion_permissions,
    remove_bookmark,
)

logger = logging.getLogger(__name__)

bp = Blueprint('companions', __name__)


@bp.route('', methods=['POST'])
@require_auth
def create_companion_route():
    """
    Create a companion owned by the caller.
    Answers 403 when the caller's quota is used up.
    """
    auth = current_auth()
    payload = request.get_json(silent=True) or {}

    try:
        if not new_companion_permissions(auth):
            return error_response('Companion limit reached for your plan', 403)

        companion = create_companion(auth, payload)
        return success_response(companion, 201)
    except Exception as e:
        return handle_service_error(e, 'creating companion')


@bp.route('', methods=['GET'])
@optional_auth
def list_companions_route():
    """List companions; supports limit, page, subject and topic query args"""
    try:
        query = CompanionQuery.model_validate(request.args.to_dict())
    except pydantic.ValidationError as e:
        return invalid_query_response(e)

    try:
        companions = get_all_companions(
            current_auth(),
            limit=query.limit,
            page=query.page,
            subject=query.subject,
            topic=query.topic,
        )
        return success_response(companions)
    except Exception as e:
        return handle_service_error(e, 'listing companions')


@bp.route('/permissions', methods=['GET'])
@require_auth
def permissions_route():
    auth = current_auth()
    try:
        allowed = new_companion_permissions(auth)
        return success_response({
            'allowed': allowed,
            'limit': companion_limit_for(auth),
        })
    except Exception as e:
        return handle_service_error(e, 'checking companion permissions')


@bp.route('/users/<user_id>', methods=['GET'])
@require_auth
def user_companions_route(user_id):
    try:
        return success_response(get_user_companions(current_auth(), user_id))
    except Exception as e:
        return handle_service_error(e, f'listing companions of {user_id}')


@bp.route('/users/<user_id>/bookmarks', methods=['GET'])
@require_auth
def bookmarked_companions_route(user_id):
    try:
        return success_response(get_bookmarked_companions(current_auth(), user_id))
    except Exception as e:
        return handle_service_error(e, 'listing bookmarked companions')


@bp.route('/<companion_id>', methods=['GET'])
@optional_auth
def get_companion_route(companion_id):
    try:
        companion = get_companion(current_auth(), companion_id)
    except Exception as e:
        return handle_service_error(e, f'fetching companion {companion_id}')

    if companion is None:
        return error_response(f'Companion {companion_id} not found', 404)
    return success_response(companion)


@bp.route('/<companion_id>/bookmark', methods=['POST', 'DELETE'])
@optional_auth
def bookmark_route(companion_id):
    """
    POST bookmarks, DELETE removes the bookmark.
    Body (optional): {"path": "/companions/<id>"} - view to re-render afterwards.
    Anonymous requests are accepted and ignored.
    """
    auth = current_auth()
    payload = request.get_json(silent=True) or {}
    path = payload.get('path') or request.args.get('path') or ''
    bookmarked = request.method == 'POST'

    try:
        if bookmarked:
            add_bookmark(auth, companion_id, path)
        else:
            remove_bookmark(auth, companion_id, path)
    except Exception as e:
        return handle_service_error(e, f'updating bookmark of {companion_id}')

    return success_response({
        'id': companion_id,
        'bookmarked': bookmarked,
        'updated': auth.is_authenticated,
    })

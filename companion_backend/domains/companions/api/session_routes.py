"""
Session History Routes
"""
import logging

import pydantic
from flask import Blueprint, request

from shared.auth.jwt import current_auth, optional_auth, require_auth

from domains.companions.api.common import (
    handle_service_error,
    invalid_query_response,
    success_response,
)
from domains.companions.schema import SessionQuery
from domains.companions.services import (
    add_to_session_history,
    get_recent_sessions,
    get_user_sessions,
)

logger = logging.getLogger(__name__)

bp = Blueprint('sessions', __name__)


@bp.route('', methods=['POST'])
@require_auth
def add_session_route():
    """Body: {"companionId": "<id>"}"""
    payload = request.get_json(silent=True) or {}

    try:
        result = add_to_session_history(current_auth(), payload.get('companionId'))
        return success_response(result, 201)
    except Exception as e:
        return handle_service_error(e, 'adding session history')


@bp.route('/recent', methods=['GET'])
@optional_auth
def recent_sessions_route():
    try:
        query = SessionQuery.model_validate(request.args.to_dict())
    except pydantic.ValidationError as e:
        return invalid_query_response(e)

    try:
        return success_response(get_recent_sessions(current_auth(), limit=query.limit))
    except Exception as e:
        return handle_service_error(e, 'listing recent sessions')


@bp.route('/users/<user_id>', methods=['GET'])
@require_auth
def user_sessions_route(user_id):
    try:
        query = SessionQuery.model_validate(request.args.to_dict())
    except pydantic.ValidationError as e:
        return invalid_query_response(e)

    try:
        return success_response(get_user_sessions(current_auth(), user_id, limit=query.limit))
    except Exception as e:
        return handle_service_error(e, f'listing sessions of {user_id}')
